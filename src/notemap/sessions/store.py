"""Session store interface."""

from __future__ import annotations

from typing import Protocol

from notemap.config import Settings
from notemap.models.session import Session


class SessionStore(Protocol):
    """Persists session metadata and each session's raw text."""

    def create(self, name: str) -> Session:
        """Create a new, empty session."""

    def list(self) -> list[Session]:  # noqa: A003
        """List sessions in creation order."""

    def get(self, session_id: str) -> Session:
        """Get a session; raises SessionNotFoundError."""

    def rename(self, session_id: str, name: str) -> Session:
        """Rename a session."""

    def delete(self, session_id: str) -> None:
        """Delete a session and its content."""

    def load_content(self, session_id: str) -> str:
        """Return the session's raw text ("" when never saved)."""

    def save_content(self, session_id: str, text: str) -> Session:
        """Store raw text and refresh the session's preview and timestamp."""


def get_session_store(settings: Settings) -> SessionStore:
    """Build the configured session store."""

    if settings.session_backend == "redis":
        from notemap.sessions.redis_store import RedisSessionStore

        return RedisSessionStore(redis_url=settings.redis_url, key_prefix=settings.redis_key_prefix)

    from notemap.sessions.file_store import FileSessionStore

    return FileSessionStore(settings.sessions_dir)
