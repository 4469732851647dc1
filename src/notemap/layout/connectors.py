"""Connector routing between positioned nodes.

Anchors sit on the real node box edges: box width grows with the label length, so a long
label pushes the outgoing anchor further along the primary axis.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import BaseModel, Field

from notemap.logging import get_logger
from notemap.models.diagram import ConnectorStyle, DiagramNode, EdgePath, Orientation, Point

if TYPE_CHECKING:
    from notemap.config import Settings

logger = get_logger(__name__)


class ConnectorParams(BaseModel):
    """Node box metrics and curve shape."""

    min_width: float = Field(default=120.0, gt=0)
    char_width: float = Field(default=8.0, ge=0)
    padding: float = Field(default=40.0, ge=0)
    node_height: float = Field(default=60.0, gt=0)
    curve_offset: float = Field(default=50.0, ge=0)

    @classmethod
    def from_settings(cls, settings: "Settings") -> "ConnectorParams":
        return cls(
            min_width=settings.node_min_width,
            char_width=settings.node_char_width,
            padding=settings.node_padding,
            node_height=settings.node_height,
            curve_offset=settings.curve_offset,
        )

    def node_width(self, text: str) -> float:
        """Box width for a label."""

        return max(self.min_width, len(text) * self.char_width + self.padding)


def anchor_points(
    parent: DiagramNode,
    child: DiagramNode,
    orientation: Orientation,
    params: ConnectorParams,
) -> tuple[Point, Point]:
    """Return the outgoing anchor on `parent` and the incoming anchor on `child`."""

    h = params.node_height
    if orientation == Orientation.HORIZONTAL:
        start = Point(x=parent.x + params.node_width(parent.text), y=parent.y + h / 2)
        end = Point(x=child.x, y=child.y + h / 2)
    else:
        start = Point(x=parent.x + params.node_width(parent.text) / 2, y=parent.y + h)
        end = Point(x=child.x + params.node_width(child.text) / 2, y=child.y)
    return start, end


def curved_points(start: Point, end: Point, orientation: Orientation, offset: float) -> list[Point]:
    """Cubic Bezier ``[start, c1, c2, end]`` with controls pushed along the primary axis."""

    if orientation == Orientation.HORIZONTAL:
        c1 = Point(x=start.x + offset, y=start.y)
        c2 = Point(x=end.x - offset, y=end.y)
    else:
        c1 = Point(x=start.x, y=start.y + offset)
        c2 = Point(x=end.x, y=end.y - offset)
    return [start, c1, c2, end]


def orthogonal_points(start: Point, end: Point, orientation: Orientation) -> list[Point]:
    """Three axis-aligned segments meeting at the primary-axis midpoint."""

    if orientation == Orientation.HORIZONTAL:
        mid = start.x + (end.x - start.x) / 2
        return [start, Point(x=mid, y=start.y), Point(x=mid, y=end.y), end]
    mid = start.y + (end.y - start.y) / 2
    return [start, Point(x=start.x, y=mid), Point(x=end.x, y=mid), end]


def format_number(value: float) -> str:
    """Compact decimal form for path data: two decimals at most, no trailing zeros."""

    text = f"{value:.2f}".rstrip("0").rstrip(".")
    return "0" if text == "-0" else text


def path_data(style: ConnectorStyle, points: list[Point]) -> str:
    """SVG path data for the routed points."""

    coords = [f"{format_number(p.x)} {format_number(p.y)}" for p in points]
    if style == ConnectorStyle.CURVED:
        return f"M {coords[0]} C {coords[1]}, {coords[2]}, {coords[3]}"
    return f"M {coords[0]} " + " ".join(f"L {c}" for c in coords[1:])


def route_edge(
    parent: DiagramNode,
    child: DiagramNode,
    style: ConnectorStyle,
    orientation: Orientation,
    params: ConnectorParams,
) -> EdgePath:
    """Route a single parent -> child connector."""

    start, end = anchor_points(parent, child, orientation, params)
    if style == ConnectorStyle.CURVED:
        points = curved_points(start, end, orientation, params.curve_offset)
    else:
        points = orthogonal_points(start, end, orientation)

    return EdgePath(
        parent_id=parent.id,
        child_id=child.id,
        style=style,
        depth=parent.depth,
        start=start,
        end=end,
        points=points,
        path=path_data(style, points),
    )


def route_edges(
    nodes: list[DiagramNode],
    style: ConnectorStyle = ConnectorStyle.ORTHOGONAL,
    orientation: Orientation = Orientation.HORIZONTAL,
    params: ConnectorParams | None = None,
) -> list[EdgePath]:
    """Route every parent -> child relation once, in node-list then child order."""

    params = params or ConnectorParams()
    by_id = {n.id: n for n in nodes}
    edges: list[EdgePath] = []

    for node in nodes:
        for child_id in node.child_ids:
            child = by_id.get(child_id)
            if child is None:
                logger.warning("Skipping edge to unknown node", extra={"parent": node.id, "child": child_id})
                continue
            edges.append(route_edge(node, child, style, orientation, params))

    logger.debug("Routed connectors", extra={"edges": len(edges), "style": style.value})
    return edges
