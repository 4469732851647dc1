"""`notemap-serve`: run the HTTP API under uvicorn.

Host, port and log level default to the `NOTEMAP_API_HOST`, `NOTEMAP_API_PORT` and
`NOTEMAP_LOG_LEVEL` settings; command-line options override them.
"""

from __future__ import annotations

from typing import Annotated

import typer
import uvicorn

from notemap.config import load_settings
from notemap.logging import configure_logging, get_logger

logger = get_logger(__name__)

APP_IMPORT_PATH = "notemap.api.main:app"


def main(
    host: Annotated[str | None, typer.Option(help="Bind host (default: NOTEMAP_API_HOST)")] = None,
    port: Annotated[int | None, typer.Option(help="Bind port (default: NOTEMAP_API_PORT)")] = None,
    reload: Annotated[bool, typer.Option(help="Restart on code changes")] = False,
) -> None:
    """Serve the notemap API."""

    settings = load_settings()
    configure_logging(settings.log_level)
    host = host or settings.api_host
    port = port or settings.api_port

    logger.info("Starting API server", extra={"host": host, "port": port, "backend": settings.session_backend})
    uvicorn.run(
        APP_IMPORT_PATH,
        host=host,
        port=port,
        reload=reload,
        log_level=settings.log_level.lower(),
    )


def run() -> None:
    typer.run(main)


if __name__ == "__main__":
    run()
