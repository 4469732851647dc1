"""Diagram models produced by the layout engine and connector router."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, computed_field


class Orientation(str, Enum):
    """Axis along which depth progresses."""

    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"


class ConnectorStyle(str, Enum):
    """Connector drawing style.

    `normal` and `brackets` are accepted as aliases of `curved` and `orthogonal`.
    """

    CURVED = "curved"
    ORTHOGONAL = "orthogonal"

    @classmethod
    def _missing_(cls, value: object) -> "ConnectorStyle | None":
        if isinstance(value, str):
            return _STYLE_ALIASES.get(value.strip().lower())
        return None


_STYLE_ALIASES = {
    "normal": ConnectorStyle.CURVED,
    "curve": ConnectorStyle.CURVED,
    "brackets": ConnectorStyle.ORTHOGONAL,
    "bracket": ConnectorStyle.ORTHOGONAL,
}


class Point(BaseModel):
    model_config = ConfigDict(frozen=True)

    x: float
    y: float


class DiagramNode(BaseModel):
    """A positioned node.

    `x`/`y` are the top-left corner of the node box. `parent_id` is a lookup key into the node
    list, absent only for the synthetic root.
    """

    id: str
    text: str
    x: float
    y: float
    depth: int = Field(ge=0)
    child_ids: list[str] = Field(default_factory=list)
    parent_id: str | None = None


class EdgePath(BaseModel):
    """Drawable geometry for one parent -> child connector."""

    parent_id: str
    child_id: str
    style: ConnectorStyle
    depth: int = Field(ge=0, description="Depth of the parent node")
    start: Point
    end: Point
    points: list[Point] = Field(default_factory=list)
    path: str


class Diagram(BaseModel):
    """Full pipeline output for one document."""

    label: str
    orientation: Orientation
    style: ConnectorStyle
    nodes: list[DiagramNode] = Field(default_factory=list)
    edges: list[EdgePath] = Field(default_factory=list)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def node_count(self) -> int:
        return len(self.nodes)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def level_count(self) -> int:
        if not self.nodes:
            return 0
        return max(n.depth for n in self.nodes) + 1

    @computed_field  # type: ignore[prop-decorator]
    @property
    def is_empty(self) -> bool:
        return not self.nodes
