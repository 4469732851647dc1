"""notemap: turn tab-indented notes into tree diagrams."""

from notemap.editor.flat_list import FlatListEditor
from notemap.exceptions import InvalidEditOperationError, NotemapError, SessionNotFoundError
from notemap.layout.connectors import ConnectorParams, route_edges
from notemap.layout.engine import LayoutParams, layout_forest
from notemap.models import (
    ConnectorStyle,
    Diagram,
    DiagramNode,
    EdgePath,
    FlatItem,
    Item,
    Orientation,
    Session,
)
from notemap.parsing.indent import parse_outline
from notemap.pipeline import build_diagram
from notemap.render.svg import render_svg

__all__ = [
    "ConnectorParams",
    "ConnectorStyle",
    "Diagram",
    "DiagramNode",
    "EdgePath",
    "FlatItem",
    "FlatListEditor",
    "InvalidEditOperationError",
    "Item",
    "LayoutParams",
    "NotemapError",
    "Orientation",
    "Session",
    "SessionNotFoundError",
    "build_diagram",
    "layout_forest",
    "parse_outline",
    "render_svg",
    "route_edges",
]
