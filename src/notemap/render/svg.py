"""SVG export of a built diagram."""

from __future__ import annotations

from xml.etree.ElementTree import Element, SubElement, tostring

from notemap.layout.connectors import ConnectorParams, format_number
from notemap.logging import get_logger
from notemap.models.diagram import ConnectorStyle, Diagram

logger = get_logger(__name__)

SVG_NS = "http://www.w3.org/2000/svg"

LEVEL_COLORS = [
    "#3B82F6",  # blue
    "#6366F1",  # indigo
    "#8B5CF6",  # violet
    "#06B6D4",  # cyan
    "#10B981",  # emerald
    "#F59E0B",  # amber
]

MARGIN = 40.0
CORNER_RADIUS = "16"
EMPTY_MESSAGE = "No diagram to display"


def level_color(depth: int) -> str:
    return LEVEL_COLORS[depth % len(LEVEL_COLORS)]


def truncate_label(text: str, max_chars: int) -> str:
    """Shorten long labels to `max_chars` characters plus an ellipsis."""

    if len(text) > max_chars:
        return f"{text[:max_chars]}..."
    return text


def diagram_bounds(diagram: Diagram, params: ConnectorParams) -> tuple[float, float, float, float]:
    """Return ``(min_x, min_y, width, height)`` covering every node box plus a margin."""

    min_x = min(n.x for n in diagram.nodes)
    min_y = min(n.y for n in diagram.nodes)
    max_x = max(n.x + params.node_width(n.text) for n in diagram.nodes)
    max_y = max(n.y + params.node_height for n in diagram.nodes)
    return (
        min_x - MARGIN,
        min_y - MARGIN,
        (max_x - min_x) + 2 * MARGIN,
        (max_y - min_y) + 2 * MARGIN,
    )


def _placeholder() -> Element:
    svg = Element("svg", xmlns=SVG_NS, viewBox="0 0 400 120", width="400", height="120")
    text = SubElement(
        svg,
        "text",
        x="200",
        y="64",
        attrib={"text-anchor": "middle", "font-size": "16", "fill": "#374151"},
    )
    text.text = EMPTY_MESSAGE
    return svg


def _defs(svg: Element) -> None:
    defs = SubElement(svg, "defs")
    pattern = SubElement(
        defs,
        "pattern",
        id="grid",
        width="30",
        height="30",
        patternUnits="userSpaceOnUse",
    )
    SubElement(pattern, "circle", cx="15", cy="15", r="1", fill="#e5e7eb", opacity="0.3")

    for index, color in enumerate(LEVEL_COLORS):
        gradient = SubElement(
            defs,
            "linearGradient",
            id=f"gradient-{index}",
            x1="0%",
            y1="0%",
            x2="100%",
            y2="100%",
        )
        SubElement(gradient, "stop", offset="0%", attrib={"stop-color": color, "stop-opacity": "0.9"})
        SubElement(gradient, "stop", offset="100%", attrib={"stop-color": color, "stop-opacity": "0.7"})


def _edges(svg: Element, diagram: Diagram) -> None:
    layer = SubElement(svg, "g", attrib={"class": "edges"})
    for edge in diagram.edges:
        color = level_color(edge.depth)
        group = SubElement(layer, "g", attrib={"data-edge": f"{edge.parent_id}->{edge.child_id}"})
        if edge.style == ConnectorStyle.ORTHOGONAL:
            SubElement(
                group,
                "path",
                d=edge.path,
                stroke=color,
                fill="none",
                opacity="0.7",
                attrib={"stroke-width": "2", "stroke-linecap": "round", "stroke-linejoin": "round"},
            )
            for anchor in (edge.start, edge.end):
                SubElement(
                    group,
                    "circle",
                    cx=format_number(anchor.x),
                    cy=format_number(anchor.y),
                    r="2",
                    fill=color,
                )
        else:
            SubElement(
                group,
                "path",
                d=edge.path,
                stroke=color,
                fill="none",
                opacity="0.8",
                attrib={"stroke-width": "2.5", "stroke-linecap": "round"},
            )
            SubElement(
                group,
                "circle",
                cx=format_number(edge.end.x),
                cy=format_number(edge.end.y),
                r="3",
                fill=color,
                opacity="0.6",
            )


def _nodes(svg: Element, diagram: Diagram, params: ConnectorParams, label_max_chars: int) -> None:
    layer = SubElement(svg, "g", attrib={"class": "nodes"})
    h = params.node_height
    for node in diagram.nodes:
        w = params.node_width(node.text)
        color = level_color(node.depth)
        group = SubElement(layer, "g", attrib={"data-node": node.id})

        SubElement(
            group,
            "rect",
            x=format_number(node.x + 2),
            y=format_number(node.y + 2),
            width=format_number(w),
            height=format_number(h),
            rx=CORNER_RADIUS,
            fill="rgba(0,0,0,0.1)",
        )
        SubElement(
            group,
            "rect",
            x=format_number(node.x),
            y=format_number(node.y),
            width=format_number(w),
            height=format_number(h),
            rx=CORNER_RADIUS,
            fill=f"url(#gradient-{node.depth % len(LEVEL_COLORS)})",
            stroke=color,
            attrib={"stroke-width": "2"},
        )
        label = SubElement(
            group,
            "text",
            x=format_number(node.x + w / 2),
            y=format_number(node.y + h / 2 + 5),
            fill="white",
            attrib={"text-anchor": "middle", "font-size": "14", "font-weight": "600"},
        )
        label.text = truncate_label(node.text, label_max_chars)

        SubElement(
            group,
            "circle",
            cx=format_number(node.x + 15),
            cy=format_number(node.y + 15),
            r="6",
            fill="white",
            opacity="0.9",
        )
        badge = SubElement(
            group,
            "text",
            x=format_number(node.x + 15),
            y=format_number(node.y + 19),
            fill=color,
            attrib={"text-anchor": "middle", "font-size": "10", "font-weight": "bold"},
        )
        badge.text = str(node.depth + 1)


def render_svg(
    diagram: Diagram,
    *,
    params: ConnectorParams | None = None,
    label_max_chars: int = 15,
) -> str:
    """Render `diagram` as a standalone SVG document.

    Connectors are drawn beneath the nodes. An empty diagram renders a short placeholder.
    """

    if diagram.is_empty:
        return tostring(_placeholder(), encoding="unicode")

    params = params or ConnectorParams()
    min_x, min_y, width, height = diagram_bounds(diagram, params)
    svg = Element(
        "svg",
        xmlns=SVG_NS,
        viewBox=" ".join(format_number(v) for v in (min_x, min_y, width, height)),
        width=format_number(width),
        height=format_number(height),
    )
    _defs(svg)
    SubElement(
        svg,
        "rect",
        x=format_number(min_x),
        y=format_number(min_y),
        width=format_number(width),
        height=format_number(height),
        fill="url(#grid)",
    )
    _edges(svg, diagram)
    _nodes(svg, diagram, params, label_max_chars)

    logger.debug("Rendered SVG", extra={"nodes": diagram.node_count, "edges": len(diagram.edges)})
    return tostring(svg, encoding="unicode")
