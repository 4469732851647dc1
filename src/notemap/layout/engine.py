"""Tree layout.

Depth maps to the primary axis at a fixed spacing per level. Siblings are spread along the
cross axis: every item reserves ``max(1, descendants) * min_spacing`` of cross-axis room, the
sibling group is centred on its parent, and each item sits in the middle of its reserved slot.
The pass is top-down and never revisits a group once its children are placed.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import BaseModel, Field

from notemap.logging import get_logger
from notemap.models.diagram import DiagramNode, Orientation
from notemap.models.outline import ROOT_ID, Item
from notemap.utils.ids import format_node_id

if TYPE_CHECKING:
    from notemap.config import Settings

logger = get_logger(__name__)


class LayoutParams(BaseModel):
    """Spacing constants for the layout engine."""

    horizontal_level_spacing: float = Field(default=280.0, gt=0)
    vertical_level_spacing: float = Field(default=200.0, gt=0)
    min_spacing: float = Field(default=80.0, gt=0)

    @classmethod
    def from_settings(cls, settings: "Settings") -> "LayoutParams":
        return cls(
            horizontal_level_spacing=settings.horizontal_level_spacing,
            vertical_level_spacing=settings.vertical_level_spacing,
            min_spacing=settings.min_spacing,
        )

    def level_spacing(self, orientation: Orientation) -> float:
        """Primary-axis distance between consecutive depths."""

        if orientation == Orientation.HORIZONTAL:
            return self.horizontal_level_spacing
        return self.vertical_level_spacing


def descendant_counts(forest: list[Item]) -> dict[str, int]:
    """Map every item id to its number of descendants in one post-order pass."""

    counts: dict[str, int] = {}

    def _visit(item: Item) -> int:
        total = 0
        for child in item.children:
            total += 1 + _visit(child)
        counts[item.id] = total
        return total

    for item in forest:
        _visit(item)
    return counts


def reserved_extent(descendants: int, min_spacing: float) -> float:
    """Cross-axis room reserved for an item with `descendants` items below it."""

    return max(1, descendants) * min_spacing


def to_xy(primary: float, cross: float, orientation: Orientation) -> tuple[float, float]:
    """Convert axis-agnostic coordinates to ``(x, y)``."""

    if orientation == Orientation.HORIZONTAL:
        return primary, cross
    return cross, primary


def layout_forest(
    forest: list[Item],
    label: str,
    orientation: Orientation = Orientation.HORIZONTAL,
    params: LayoutParams | None = None,
) -> list[DiagramNode]:
    """Position every item of `forest` under a synthetic root node.

    Args:
        forest: Parsed outline.
        label: Text of the synthetic root (the session/document name).
        orientation: Whether depth grows along x (horizontal) or y (vertical).
        params: Spacing constants.

    Returns:
        Nodes in order: the root first, then the forest depth-first. An empty forest yields an
        empty list; no root is emitted.
    """

    if not forest:
        return []

    params = params or LayoutParams()
    level_spacing = params.level_spacing(orientation)
    counts = descendant_counts(forest)

    root = DiagramNode(id=ROOT_ID, text=label, x=0.0, y=0.0, depth=0)
    nodes: list[DiagramNode] = [root]

    def _place_group(items: list[Item], depth: int, parent: DiagramNode, parent_cross: float) -> None:
        extents = [reserved_extent(counts[item.id], params.min_spacing) for item in items]
        cursor = parent_cross - sum(extents) / 2
        primary = depth * level_spacing

        for index, (item, extent) in enumerate(zip(items, extents)):
            cross = cursor + extent / 2
            x, y = to_xy(primary, cross, orientation)
            node = DiagramNode(
                id=format_node_id(item.id, depth, index),
                text=item.text,
                x=x,
                y=y,
                depth=depth,
                parent_id=parent.id,
            )
            nodes.append(node)
            parent.child_ids.append(node.id)
            if item.children:
                _place_group(item.children, depth + 1, node, cross)
            cursor += extent

    _place_group(forest, 1, root, 0.0)

    logger.debug(
        "Laid out diagram",
        extra={"nodes": len(nodes), "orientation": orientation.value},
    )
    return nodes
