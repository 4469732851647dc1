"""Logging setup.

Records carry the session being worked on and the pipeline step (``parse``, ``layout``, ``route``,
``edit`` ...) from context variables, so host code binds them once and core modules log plainly.
"""

from __future__ import annotations

import contextlib
import contextvars
import logging
from typing import Iterator

from rich.logging import RichHandler

NO_CONTEXT = "-"
# RichHandler already renders time and level.
LOG_FORMAT = "[session=%(session_id)s step=%(step)s] %(name)s: %(message)s"

_session_id_var: contextvars.ContextVar[str] = contextvars.ContextVar("notemap_session_id", default=NO_CONTEXT)
_step_var: contextvars.ContextVar[str] = contextvars.ContextVar("notemap_step", default=NO_CONTEXT)


class _ContextFilter(logging.Filter):
    """Copy the bound session id and step onto every record."""

    def filter(self, record: logging.LogRecord) -> bool:  # noqa: A003
        record.session_id = _session_id_var.get()  # type: ignore[attr-defined]
        record.step = _step_var.get()  # type: ignore[attr-defined]
        return True


@contextlib.contextmanager
def session_context(*, session_id: str, step: str | None = None) -> Iterator[None]:
    """Bind `session_id` (and optionally `step`) for log records emitted inside the block."""

    session_token = _session_id_var.set(session_id)
    step_token = _step_var.set(step or _step_var.get())
    try:
        yield
    finally:
        _step_var.reset(step_token)
        _session_id_var.reset(session_token)


@contextlib.contextmanager
def step_context(step: str) -> Iterator[None]:
    """Tag records emitted inside the block with `step`, then restore the previous step."""

    token = _step_var.set(step)
    try:
        yield
    finally:
        _step_var.reset(token)


def _rich_handler(root: logging.Logger) -> RichHandler:
    for handler in root.handlers:
        if isinstance(handler, RichHandler):
            return handler
    handler = RichHandler(rich_tracebacks=True, show_time=True, show_level=True)
    root.addHandler(handler)
    return handler


def configure_logging(level: str = "INFO") -> None:
    """Route notemap logging through one RichHandler on the root logger.

    Safe to call once per app or CLI invocation: the handler and its context filter are reused,
    only the level and format are refreshed.

    Args:
        level: Logging level name, case-insensitive.
    """

    root = logging.getLogger()
    root.setLevel(level.upper())

    handler = _rich_handler(root)
    if not any(isinstance(f, _ContextFilter) for f in handler.filters):
        handler.addFilter(_ContextFilter())
    handler.setFormatter(logging.Formatter(LOG_FORMAT))


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
