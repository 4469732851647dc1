"""Redis-based session store.

This is optional and complements the file store. It lets several API instances share sessions
without a common disk.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone

import redis

from notemap.exceptions import SessionNotFoundError
from notemap.models.session import Session, preview_from_text
from notemap.utils.ids import new_session_id


@dataclass
class RedisSessionStore:
    """Sessions in one Redis hash, content in one string key per session."""

    redis_url: str
    key_prefix: str

    def __post_init__(self) -> None:
        self._client = redis.Redis.from_url(self.redis_url, decode_responses=True)
        self._index_key = f"{self.key_prefix}:sessions"

    def _content_key(self, session_id: str) -> str:
        return f"{self.key_prefix}:session:{session_id}:content"

    def _put(self, session: Session) -> None:
        self._client.hset(self._index_key, session.id, session.model_dump_json())

    def create(self, name: str) -> Session:
        session = Session(id=new_session_id(self._client.hkeys(self._index_key)), name=name)
        self._put(session)
        return session

    def list(self) -> list[Session]:  # noqa: A003
        sessions = [Session.model_validate_json(raw) for raw in self._client.hvals(self._index_key)]
        sessions.sort(key=lambda s: (s.created_at, s.id))
        return sessions

    def get(self, session_id: str) -> Session:
        raw = self._client.hget(self._index_key, session_id)
        if raw is None:
            raise SessionNotFoundError(session_id)
        return Session.model_validate_json(raw)

    def rename(self, session_id: str, name: str) -> Session:
        current = self.get(session_id)
        session = Session.model_validate(
            {**current.model_dump(), "name": name, "updated_at": datetime.now(timezone.utc)}
        )
        self._put(session)
        return session

    def delete(self, session_id: str) -> None:
        self.get(session_id)
        pipe = self._client.pipeline()
        pipe.hdel(self._index_key, session_id)
        pipe.delete(self._content_key(session_id))
        pipe.execute()

    def load_content(self, session_id: str) -> str:
        self.get(session_id)
        return self._client.get(self._content_key(session_id)) or ""

    def save_content(self, session_id: str, text: str) -> Session:
        session = self.get(session_id).model_copy(
            update={"updated_at": datetime.now(timezone.utc), "preview": preview_from_text(text)}
        )
        pipe = self._client.pipeline()
        pipe.set(self._content_key(session_id), text)
        pipe.hset(self._index_key, session_id, session.model_dump_json())
        pipe.execute()
        return session
