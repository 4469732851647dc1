"""Request/response bodies for the HTTP API."""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

from notemap.models.diagram import ConnectorStyle, Orientation
from notemap.models.outline import FlatItem


class SessionCreateRequest(BaseModel):
    """Create or rename a session."""

    name: str

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        """Validate that ``name`` is not blank."""

        if not v.strip():
            raise ValueError("name must not be blank")
        return v.strip()


class ContentUpdateRequest(BaseModel):
    text: str


class ContentResponse(BaseModel):
    session_id: str
    text: str


class DiagramRequest(BaseModel):
    """Stateless diagram build."""

    text: str
    label: str = Field(default="Untitled Diagram")
    orientation: Orientation | None = None
    style: ConnectorStyle | None = None


class EditRequest(BaseModel):
    """One flat-list editor operation, e.g. ``{"op": "indent", "item_id": "item-2"}``."""

    op: str
    item_id: str | None = None
    text: str | None = None
    delta: int | None = None


class EditorState(BaseModel):
    items: list[FlatItem]
    text: str
