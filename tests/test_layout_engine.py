"""Tests for the layout engine."""

from __future__ import annotations

from notemap.layout.engine import (
    LayoutParams,
    descendant_counts,
    layout_forest,
    reserved_extent,
)
from notemap.models.diagram import DiagramNode, Orientation
from notemap.parsing.indent import parse_outline

SCENARIO_A = "Alpha\n\tBeta\n\tGamma\n\t\tDelta"


def _by_text(nodes: list[DiagramNode]) -> dict[str, DiagramNode]:
    return {n.text: n for n in nodes}


def _primary_coord(node: DiagramNode, orientation: Orientation) -> float:
    return node.x if orientation == Orientation.HORIZONTAL else node.y


def _cross_coord(node: DiagramNode, orientation: Orientation) -> float:
    return node.y if orientation == Orientation.HORIZONTAL else node.x


def test_layout_scenario_a_structure() -> None:
    """It should emit the synthetic root plus one node per item with correct depths."""

    nodes = layout_forest(parse_outline(SCENARIO_A), "Root")
    by_text = _by_text(nodes)

    assert len(nodes) == 5
    assert nodes[0].id == "root"
    assert nodes[0].parent_id is None
    assert (nodes[0].x, nodes[0].y, nodes[0].depth) == (0.0, 0.0, 0)

    alpha, beta, gamma, delta = (by_text[t] for t in ("Alpha", "Beta", "Gamma", "Delta"))
    assert alpha.depth == 1 and alpha.parent_id == "root"
    assert beta.depth == 2 and beta.parent_id == alpha.id
    assert gamma.depth == 2 and gamma.parent_id == alpha.id
    assert delta.depth == 3 and delta.parent_id == gamma.id
    assert nodes[0].child_ids == [alpha.id]
    assert alpha.child_ids == [beta.id, gamma.id]
    assert gamma.child_ids == [delta.id]


def test_layout_scenario_a_coordinates_horizontal() -> None:
    """It should place depth on x and centre sibling groups on their parent."""

    by_text = _by_text(layout_forest(parse_outline(SCENARIO_A), "Root"))

    assert (by_text["Alpha"].x, by_text["Alpha"].y) == (280.0, 0.0)
    assert (by_text["Beta"].x, by_text["Beta"].y) == (560.0, -40.0)
    assert (by_text["Gamma"].x, by_text["Gamma"].y) == (560.0, 40.0)
    assert (by_text["Delta"].x, by_text["Delta"].y) == (840.0, 40.0)


def test_layout_node_ids_are_deterministic_and_unique() -> None:
    """It should build ids from item id, depth and sibling index."""

    nodes = layout_forest(parse_outline("Same\nSame\n\tSame"), "Doc")
    ids = [n.id for n in nodes]

    assert ids == ["root", "item-0-1-0", "item-1-1-1", "item-2-2-0"]
    assert len(set(ids)) == len(ids)


def test_layout_parent_ids_resolve() -> None:
    """It should only reference nodes present in the list."""

    nodes = layout_forest(parse_outline("A\n\tB\n\t\tC\n\tD\nE\n\tF"), "Doc")
    ids = {n.id for n in nodes}

    for node in nodes[1:]:
        assert node.parent_id in ids
    for node in nodes:
        assert set(node.child_ids) <= ids


def test_layout_empty_forest_emits_nothing() -> None:
    """It should not emit a root for an empty forest."""

    assert layout_forest([], "Root") == []


def test_layout_vertical_swaps_axes() -> None:
    """It should put depth on y in vertical orientation with the same structure."""

    forest = parse_outline(SCENARIO_A)
    horizontal = layout_forest(forest, "Root", Orientation.HORIZONTAL)
    vertical = layout_forest(forest, "Root", Orientation.VERTICAL)

    assert [n.id for n in horizontal] == [n.id for n in vertical]
    assert [n.child_ids for n in horizontal] == [n.child_ids for n in vertical]

    by_text = _by_text(vertical)
    assert (by_text["Alpha"].x, by_text["Alpha"].y) == (0.0, 200.0)
    assert (by_text["Beta"].x, by_text["Beta"].y) == (-40.0, 400.0)
    assert (by_text["Delta"].x, by_text["Delta"].y) == (40.0, 600.0)

    for h, v in zip(horizontal, vertical):
        assert _cross_coord(h, Orientation.HORIZONTAL) == _cross_coord(v, Orientation.VERTICAL)
        assert _primary_coord(v, Orientation.VERTICAL) == v.depth * 200.0


def test_layout_siblings_never_overlap() -> None:
    """It should give each sibling a disjoint cross-axis slot sized by its descendants."""

    text = "A\n\tA1\n\t\tx\n\t\ty\n\t\tz\n\tA2\n\tA3\n\t\tq\nB\nC\n\tC1\n\t\tC11\n\t\t\tC111"
    forest = parse_outline(text)
    params = LayoutParams()
    nodes = layout_forest(forest, "Doc", params=params)
    by_id = {n.id: n for n in nodes}
    counts = descendant_counts(forest)

    def _extent(node_id: str) -> float:
        item_id = node_id.rsplit("-", 2)[0]
        return reserved_extent(counts[item_id], params.min_spacing)

    for parent in nodes:
        slots = []
        for child_id in parent.child_ids:
            centre = _cross_coord(by_id[child_id], Orientation.HORIZONTAL)
            half = _extent(child_id) / 2
            slots.append((centre - half, centre + half))
        for (_, prev_end), (next_start, _) in zip(slots, slots[1:]):
            assert prev_end <= next_start
        if slots:
            # the group is centred on its parent
            parent_cross = _cross_coord(parent, Orientation.HORIZONTAL)
            assert slots[0][0] + slots[-1][1] == 2 * parent_cross


def test_layout_extent_scales_with_descendants() -> None:
    """It should reserve more room for bigger subtrees."""

    assert reserved_extent(0, 80.0) == 80.0
    assert reserved_extent(1, 80.0) == 80.0
    assert reserved_extent(4, 80.0) == 320.0


def test_layout_custom_params() -> None:
    """It should honour custom spacing constants."""

    params = LayoutParams(horizontal_level_spacing=100, vertical_level_spacing=50, min_spacing=10)
    nodes = layout_forest(parse_outline("A\nB"), "Doc", params=params)

    assert [(n.x, n.y) for n in nodes[1:]] == [(100.0, -5.0), (100.0, 5.0)]
    assert params.level_spacing(Orientation.VERTICAL) == 50


def test_layout_is_deterministic() -> None:
    """It should produce identical nodes for identical input."""

    forest = parse_outline("A\n\tB\n\tC\nD")
    assert layout_forest(forest, "X") == layout_forest(forest, "X")
