"""Text -> forest -> positioned nodes -> connectors."""

from __future__ import annotations

from notemap.config import Settings
from notemap.layout.connectors import ConnectorParams, route_edges
from notemap.layout.engine import LayoutParams, layout_forest
from notemap.logging import get_logger, step_context
from notemap.models.diagram import ConnectorStyle, Diagram, Orientation
from notemap.parsing.indent import parse_outline

logger = get_logger(__name__)


def build_diagram(
    text: str,
    label: str,
    *,
    orientation: Orientation | str | None = None,
    style: ConnectorStyle | str | None = None,
    settings: Settings | None = None,
) -> Diagram:
    """Run the whole pipeline on one document.

    Args:
        text: Tab-indented notes.
        label: Text of the synthetic root node.
        orientation: Depth axis; defaults to the configured orientation.
        style: Connector style; defaults to the configured style.
        settings: Spacing and box metrics. Loaded from defaults when omitted.

    Returns:
        The diagram. It is empty (no nodes, no edges) when `text` has no items.
    """

    settings = settings or Settings()
    orientation = Orientation(orientation or settings.orientation)
    style = ConnectorStyle(style or settings.connector_style)

    with step_context("parse"):
        forest = parse_outline(text)

    with step_context("layout"):
        nodes = layout_forest(forest, label, orientation, LayoutParams.from_settings(settings))

    with step_context("route"):
        edges = route_edges(nodes, style, orientation, ConnectorParams.from_settings(settings))

    diagram = Diagram(label=label, orientation=orientation, style=style, nodes=nodes, edges=edges)
    logger.debug(
        "Diagram built",
        extra={"nodes": diagram.node_count, "levels": diagram.level_count},
    )
    return diagram
