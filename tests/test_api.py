"""Tests for the HTTP API."""

from __future__ import annotations

from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from notemap.api.app import create_app
from notemap.config import Settings
from notemap.sessions import FileSessionStore


@pytest.fixture
def client(tmp_path: Path) -> TestClient:
    settings = Settings(sessions_dir=tmp_path)
    return TestClient(create_app(settings=settings, store=FileSessionStore(tmp_path)))


def _create(client: TestClient, name: str = "Roadmap") -> str:
    resp = client.post("/sessions", json={"name": name})
    assert resp.status_code == 201
    return resp.json()["id"]


def test_health(client: TestClient) -> None:
    assert client.get("/health").json() == {"status": "ok"}


def test_session_lifecycle(client: TestClient) -> None:
    """It should create, list, rename and delete sessions."""

    session_id = _create(client)

    assert [s["name"] for s in client.get("/sessions").json()] == ["Roadmap"]
    assert client.patch(f"/sessions/{session_id}", json={"name": "Plan"}).json()["name"] == "Plan"
    assert client.delete(f"/sessions/{session_id}").status_code == 204
    assert client.get(f"/sessions/{session_id}").status_code == 404


def test_blank_session_name_is_rejected(client: TestClient) -> None:
    assert client.post("/sessions", json={"name": "  "}).status_code == 422


def test_unknown_session_returns_404(client: TestClient) -> None:
    assert client.get("/sessions/nope/content").status_code == 404
    assert client.get("/sessions/nope/diagram").status_code == 404
    assert client.post("/sessions/nope/items/ops", json={"op": "append", "text": "x"}).status_code == 404


def test_content_and_diagram(client: TestClient) -> None:
    """It should build the diagram from the stored text and session name."""

    session_id = _create(client)
    resp = client.put(f"/sessions/{session_id}/content", json={"text": "Alpha\n\tBeta\n\tGamma\n\t\tDelta"})
    assert resp.json()["preview"] == "Alpha"
    assert client.get(f"/sessions/{session_id}/content").json()["text"].startswith("Alpha")

    diagram = client.get(f"/sessions/{session_id}/diagram").json()
    assert diagram["node_count"] == 5
    assert diagram["nodes"][0]["text"] == "Roadmap"
    assert len(diagram["edges"]) == 4

    vertical = client.get(
        f"/sessions/{session_id}/diagram",
        params={"orientation": "vertical", "style": "curved"},
    ).json()
    assert vertical["orientation"] == "vertical"
    assert vertical["style"] == "curved"
    assert vertical["nodes"][1]["y"] == 200


def test_diagram_svg(client: TestClient) -> None:
    session_id = _create(client)
    client.put(f"/sessions/{session_id}/content", json={"text": "A\n\tB"})

    resp = client.get(f"/sessions/{session_id}/diagram.svg")

    assert resp.status_code == 200
    assert resp.headers["content-type"].startswith("image/svg+xml")
    assert "data-node=\"root\"" in resp.text


def test_empty_session_diagram(client: TestClient) -> None:
    session_id = _create(client)

    diagram = client.get(f"/sessions/{session_id}/diagram").json()

    assert diagram["is_empty"] is True
    assert diagram["nodes"] == []


def test_editor_operations_persist_text(client: TestClient) -> None:
    """It should apply editor ops and store the resulting text."""

    session_id = _create(client)
    ops = f"/sessions/{session_id}/items/ops"

    state = client.post(ops, json={"op": "append", "text": "A"}).json()
    state = client.post(ops, json={"op": "append", "text": "B"}).json()
    b_id = state["items"][-1]["id"]
    state = client.post(ops, json={"op": "indent", "item_id": b_id}).json()

    assert state["text"] == "A\n\tB"
    assert state["items"][0]["id"] == "root"
    assert client.get(f"/sessions/{session_id}/content").json()["text"] == "A\n\tB"

    items = client.get(f"/sessions/{session_id}/items").json()["items"]
    assert [(i["text"], i["level"]) for i in items] == [("Roadmap", 0), ("A", 1), ("B", 2)]


def test_editor_multiline_text_is_stored_as_one_item(client: TestClient) -> None:
    """It should keep one stored item per edit even when the text holds line breaks."""

    session_id = _create(client)
    ops = f"/sessions/{session_id}/items/ops"

    state = client.post(ops, json={"op": "append", "text": "A"}).json()
    a_id = state["items"][-1]["id"]
    state = client.post(ops, json={"op": "rename", "item_id": a_id, "text": "X\nY"}).json()
    state = client.post(ops, json={"op": "add_child", "item_id": a_id, "text": "   "}).json()

    assert state["text"] == "X Y"
    items = client.get(f"/sessions/{session_id}/items").json()["items"]
    assert [(i["text"], i["level"]) for i in items] == [("Roadmap", 0), ("X Y", 1)]


def test_editor_invalid_operation(client: TestClient) -> None:
    session_id = _create(client)
    ops = f"/sessions/{session_id}/items/ops"

    assert client.post(ops, json={"op": "explode"}).status_code == 400
    assert client.post(ops, json={"op": "rename", "item_id": "item-0"}).status_code == 400


def test_stateless_diagram(client: TestClient) -> None:
    resp = client.post("/diagram", json={"text": "A\n\tB", "label": "Doc", "style": "orthogonal"})

    payload = resp.json()
    assert payload["label"] == "Doc"
    assert payload["node_count"] == 3
    assert payload["edges"][0]["path"].startswith("M 120 30 L")
