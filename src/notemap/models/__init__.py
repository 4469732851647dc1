"""Pydantic models used across the project."""

from __future__ import annotations

from notemap.models.diagram import (
    ConnectorStyle,
    Diagram,
    DiagramNode,
    EdgePath,
    Orientation,
    Point,
)
from notemap.models.outline import ROOT_ID, FlatItem, Item
from notemap.models.session import Session

__all__ = [
    "ConnectorStyle",
    "Diagram",
    "DiagramNode",
    "EdgePath",
    "FlatItem",
    "Item",
    "Orientation",
    "Point",
    "ROOT_ID",
    "Session",
]
