"""File-based session store.

Layout under the root directory::

    sessions.json          index of Session records, creation order
    content/<id>.txt       raw tab-indented text of one session
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path

from pydantic import TypeAdapter

from notemap.exceptions import SessionNotFoundError
from notemap.logging import get_logger
from notemap.models.session import Session, preview_from_text
from notemap.utils.ids import new_session_id

logger = get_logger(__name__)

_SESSION_LIST = TypeAdapter(list[Session])


@dataclass(frozen=True)
class SessionStorePaths:
    """Filesystem layout for a session store."""

    root: Path

    @property
    def index_json(self) -> Path:
        return self.root / "sessions.json"

    @property
    def content_dir(self) -> Path:
        return self.root / "content"

    def content_path(self, session_id: str) -> Path:
        return self.content_dir / f"{session_id}.txt"


class FileSessionStore:
    """Session index in one JSON file, content in one text file per session."""

    def __init__(self, root_dir: Path) -> None:
        self._paths = SessionStorePaths(root=Path(root_dir))
        self._paths.root.mkdir(parents=True, exist_ok=True)
        self._paths.content_dir.mkdir(parents=True, exist_ok=True)

        self._sessions: dict[str, Session] = {}
        self._load_existing()

    def _load_existing(self) -> None:
        if not self._paths.index_json.exists():
            return

        raw = self._paths.index_json.read_text(encoding="utf-8")
        if not raw.strip():
            return
        for session in _SESSION_LIST.validate_json(raw):
            self._sessions[session.id] = session

        logger.info("Loaded %d sessions from %s", len(self._sessions), self._paths.index_json)

    def create(self, name: str) -> Session:
        session = Session(id=new_session_id(self._sessions), name=name)
        self._sessions[session.id] = session
        self._write_index()
        logger.info("Session created", extra={"session_id": session.id})
        return session

    def list(self) -> list[Session]:  # noqa: A003
        return list(self._sessions.values())

    def get(self, session_id: str) -> Session:
        session = self._sessions.get(session_id)
        if session is None:
            raise SessionNotFoundError(session_id)
        return session

    def rename(self, session_id: str, name: str) -> Session:
        current = self.get(session_id)
        session = Session.model_validate(
            {**current.model_dump(), "name": name, "updated_at": datetime.now(timezone.utc)}
        )
        self._sessions[session_id] = session
        self._write_index()
        return session

    def delete(self, session_id: str) -> None:
        self.get(session_id)
        del self._sessions[session_id]
        self._paths.content_path(session_id).unlink(missing_ok=True)
        self._write_index()
        logger.info("Session deleted", extra={"session_id": session_id})

    def load_content(self, session_id: str) -> str:
        self.get(session_id)
        path = self._paths.content_path(session_id)
        if not path.exists():
            return ""
        return path.read_text(encoding="utf-8")

    def save_content(self, session_id: str, text: str) -> Session:
        session = self.get(session_id).model_copy(
            update={"updated_at": datetime.now(timezone.utc), "preview": preview_from_text(text)}
        )
        self._paths.content_path(session_id).write_text(text, encoding="utf-8")
        self._sessions[session_id] = session
        self._write_index()
        return session

    def _write_index(self) -> None:
        payload = [s.model_dump(mode="json") for s in self._sessions.values()]
        tmp = self._paths.index_json.with_suffix(".json.tmp")
        tmp.write_text(json.dumps(payload, ensure_ascii=False, indent=2), encoding="utf-8")
        tmp.replace(self._paths.index_json)
