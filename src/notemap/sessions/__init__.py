"""Session persistence."""

from __future__ import annotations

from notemap.sessions.file_store import FileSessionStore
from notemap.sessions.store import SessionStore, get_session_store

__all__ = ["FileSessionStore", "SessionStore", "get_session_store"]
