"""FastAPI app exposing sessions, the flat-list editor and diagram builds."""

from __future__ import annotations

from fastapi import FastAPI, HTTPException, Response

from notemap.api.schemas import (
    ContentResponse,
    ContentUpdateRequest,
    DiagramRequest,
    EditorState,
    EditRequest,
    SessionCreateRequest,
)
from notemap.config import Settings, load_settings
from notemap.editor.flat_list import FlatListEditor
from notemap.exceptions import InvalidEditOperationError, SessionNotFoundError
from notemap.layout.connectors import ConnectorParams
from notemap.logging import configure_logging, get_logger, session_context
from notemap.models.diagram import ConnectorStyle, Diagram, Orientation
from notemap.models.session import Session
from notemap.pipeline import build_diagram
from notemap.render.svg import render_svg
from notemap.sessions import SessionStore, get_session_store


def create_app(settings: Settings | None = None, store: SessionStore | None = None) -> FastAPI:
    """Create FastAPI app."""

    settings = settings or load_settings()
    configure_logging(settings.log_level)
    logger = get_logger(__name__)
    store = store or get_session_store(settings)

    app = FastAPI(title="notemap", version="0.1.0")

    def _get_session(session_id: str) -> Session:
        try:
            return store.get(session_id)
        except SessionNotFoundError as exc:
            raise HTTPException(status_code=404, detail="session not found") from exc

    def _session_diagram(
        session_id: str,
        orientation: Orientation | None,
        style: ConnectorStyle | None,
    ) -> Diagram:
        session = _get_session(session_id)
        with session_context(session_id=session_id, step="diagram"):
            return build_diagram(
                store.load_content(session_id),
                session.name,
                orientation=orientation,
                style=style,
                settings=settings,
            )

    def _editor(session: Session, text: str) -> FlatListEditor:
        return FlatListEditor(session.name, text, max_level=settings.max_level)

    @app.get("/health")
    def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.get("/sessions")
    def list_sessions() -> list[Session]:
        return store.list()

    @app.post("/sessions", status_code=201)
    def create_session(req: SessionCreateRequest) -> Session:
        session = store.create(req.name)
        logger.info("API session created", extra={"session_id": session.id})
        return session

    @app.get("/sessions/{session_id}")
    def get_session(session_id: str) -> Session:
        return _get_session(session_id)

    @app.patch("/sessions/{session_id}")
    def rename_session(session_id: str, req: SessionCreateRequest) -> Session:
        _get_session(session_id)
        return store.rename(session_id, req.name)

    @app.delete("/sessions/{session_id}", status_code=204)
    def delete_session(session_id: str) -> Response:
        _get_session(session_id)
        store.delete(session_id)
        logger.info("API session deleted", extra={"session_id": session_id})
        return Response(status_code=204)

    @app.get("/sessions/{session_id}/content")
    def get_content(session_id: str) -> ContentResponse:
        _get_session(session_id)
        return ContentResponse(session_id=session_id, text=store.load_content(session_id))

    @app.put("/sessions/{session_id}/content")
    def put_content(session_id: str, req: ContentUpdateRequest) -> Session:
        _get_session(session_id)
        return store.save_content(session_id, req.text)

    @app.get("/sessions/{session_id}/diagram")
    def session_diagram(
        session_id: str,
        orientation: Orientation | None = None,
        style: ConnectorStyle | None = None,
    ) -> Diagram:
        return _session_diagram(session_id, orientation, style)

    @app.get("/sessions/{session_id}/diagram.svg")
    def session_diagram_svg(
        session_id: str,
        orientation: Orientation | None = None,
        style: ConnectorStyle | None = None,
    ) -> Response:
        diagram = _session_diagram(session_id, orientation, style)
        svg = render_svg(
            diagram,
            params=ConnectorParams.from_settings(settings),
            label_max_chars=settings.label_max_chars,
        )
        return Response(content=svg, media_type="image/svg+xml")

    @app.get("/sessions/{session_id}/items")
    def get_items(session_id: str) -> EditorState:
        session = _get_session(session_id)
        editor = _editor(session, store.load_content(session_id))
        return EditorState(items=editor.items, text=editor.to_text())

    @app.post("/sessions/{session_id}/items/ops")
    def edit_items(session_id: str, req: EditRequest) -> EditorState:
        session = _get_session(session_id)
        editor = _editor(session, store.load_content(session_id))
        with session_context(session_id=session_id, step="edit"):
            try:
                text = editor.apply(req.op, item_id=req.item_id, text=req.text, delta=req.delta)
            except InvalidEditOperationError as exc:
                raise HTTPException(status_code=400, detail=str(exc)) from exc
            store.save_content(session_id, text)
            logger.info("API edit applied", extra={"op": req.op})
        return EditorState(items=editor.items, text=text)

    @app.post("/diagram")
    def diagram(req: DiagramRequest) -> Diagram:
        return build_diagram(
            req.text,
            req.label,
            orientation=req.orientation,
            style=req.style,
            settings=settings,
        )

    return app
