"""Tests for session stores."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
from pydantic import ValidationError

from notemap.config import Settings
from notemap.exceptions import SessionNotFoundError
from notemap.models.session import DEFAULT_PREVIEW, Session
from notemap.sessions import FileSessionStore, get_session_store
from notemap.sessions.redis_store import RedisSessionStore
from notemap.utils.ids import new_session_id, next_item_number


def test_file_store_create_list_get(tmp_path: Path) -> None:
    """It should create sessions with unique ids and list them in order."""

    store = FileSessionStore(tmp_path)
    a = store.create("First")
    b = store.create("Second")

    assert a.id != b.id
    assert [s.name for s in store.list()] == ["First", "Second"]
    assert store.get(a.id).preview == DEFAULT_PREVIEW
    assert store.load_content(a.id) == ""


def test_file_store_persists_and_reloads(tmp_path: Path) -> None:
    """It should reload sessions and content from disk."""

    store1 = FileSessionStore(tmp_path)
    session = store1.create("Plan")
    store1.save_content(session.id, "\n  Goals\n\tShip it")

    store2 = FileSessionStore(tmp_path)
    assert store2.get(session.id).name == "Plan"
    assert store2.get(session.id).preview == "Goals"
    assert store2.load_content(session.id) == "\n  Goals\n\tShip it"


def test_file_store_rename_and_delete(tmp_path: Path) -> None:
    """It should rename sessions and remove their content on delete."""

    store = FileSessionStore(tmp_path)
    session = store.create("Old")
    store.save_content(session.id, "A")

    assert store.rename(session.id, " New ").name == "New"

    store.delete(session.id)
    assert store.list() == []
    assert not (tmp_path / "content" / f"{session.id}.txt").exists()
    with pytest.raises(SessionNotFoundError):
        store.get(session.id)


def test_file_store_unknown_session(tmp_path: Path) -> None:
    """It should raise SessionNotFoundError for unknown ids."""

    store = FileSessionStore(tmp_path)

    with pytest.raises(SessionNotFoundError):
        store.load_content("missing")
    with pytest.raises(SessionNotFoundError):
        store.save_content("missing", "text")
    with pytest.raises(SessionNotFoundError):
        store.delete("missing")


def test_blank_session_name_rejected(tmp_path: Path) -> None:
    """It should reject blank names."""

    store = FileSessionStore(tmp_path)

    with pytest.raises(ValidationError):
        store.create("   ")


def test_get_session_store_selects_backend(tmp_path: Path) -> None:
    """It should build the file store by default."""

    store = get_session_store(Settings(sessions_dir=tmp_path))

    assert isinstance(store, FileSessionStore)


@pytest.fixture
def redis_client() -> MagicMock:
    client = MagicMock()
    data: dict[str, str] = {}
    client.hkeys.side_effect = lambda key: list(data)
    client.hvals.side_effect = lambda key: list(data.values())
    client.hget.side_effect = lambda key, field: data.get(field)
    client.hset.side_effect = lambda key, field, value: data.__setitem__(field, value)
    client.get.return_value = None
    return client


def test_redis_store_roundtrip(redis_client: MagicMock) -> None:
    """It should store session JSON in a hash keyed by id."""

    with patch("notemap.sessions.redis_store.redis.Redis.from_url", return_value=redis_client):
        store = RedisSessionStore(redis_url="redis://localhost:6379/0", key_prefix="nm")

    session = store.create("Plan")

    redis_client.hset.assert_called_once()
    assert redis_client.hset.call_args.args[0] == "nm:sessions"
    assert store.get(session.id) == session
    assert [s.id for s in store.list()] == [session.id]
    assert store.load_content(session.id) == ""


def test_redis_store_save_content_uses_pipeline(redis_client: MagicMock) -> None:
    """It should write content and metadata in one pipeline."""

    with patch("notemap.sessions.redis_store.redis.Redis.from_url", return_value=redis_client):
        store = RedisSessionStore(redis_url="redis://localhost:6379/0", key_prefix="nm")
    session = store.create("Plan")

    updated = store.save_content(session.id, "Goals\n\tShip")

    pipe = redis_client.pipeline.return_value
    pipe.set.assert_called_once_with(f"nm:session:{session.id}:content", "Goals\n\tShip")
    pipe.execute.assert_called_once()
    assert updated.preview == "Goals"
    assert Session.model_validate_json(pipe.hset.call_args.args[2]).preview == "Goals"


def test_redis_store_missing_session(redis_client: MagicMock) -> None:
    """It should raise SessionNotFoundError when the hash has no entry."""

    with patch("notemap.sessions.redis_store.redis.Redis.from_url", return_value=redis_client):
        store = RedisSessionStore(redis_url="redis://localhost:6379/0", key_prefix="nm")

    with pytest.raises(SessionNotFoundError):
        store.get("missing")


def test_new_session_id_skips_taken_ids() -> None:
    """It should bump timestamp ids that are already in use."""

    with patch("notemap.utils.ids.time.time", return_value=1700000000.0):
        assert new_session_id() == "1700000000000"
        assert new_session_id({"1700000000000", "1700000000001"}) == "1700000000002"


def test_next_item_number() -> None:
    """It should seed item counters past every numeric item id."""

    assert next_item_number(["root", "item-3", "item-10", "custom"]) == 11
    assert next_item_number([]) == 0
