"""Tab-indented outline parsing.

Each non-blank line of the input is one item. The number of leading tab characters gives the
item's nesting; spaces are never treated as indentation. Items are attached with a stack of
open items: an item closes every open item at the same or a deeper indentation, then becomes the
last child of whatever is left on top (or a new top-level item if nothing is).
"""

from __future__ import annotations

from typing import Iterable, Iterator

from notemap.logging import get_logger
from notemap.models.outline import Item
from notemap.utils.ids import format_item_id

logger = get_logger(__name__)

TAB = "\t"


def split_indented_line(line: str) -> tuple[int, str]:
    """Return ``(tab_count, text)`` for one raw line.

    `text` has leading tabs and surrounding whitespace removed and may be empty.
    """

    stripped = line.lstrip(TAB)
    return len(line) - len(stripped), stripped.strip()


def iter_outline_lines(text: str) -> Iterator[tuple[int, int, str]]:
    """Yield ``(line_index, tab_count, text)`` for every line that carries an item.

    `line_index` counts every line of the input, blank ones included, so it is stable for a
    given text and usable as an id seed.
    """

    for index, line in enumerate(text.split("\n")):
        tabs, content = split_indented_line(line.rstrip("\r"))
        if not content:
            continue
        yield index, tabs, content


def parse_outline(text: str) -> list[Item]:
    """Parse tab-indented text into an ordered forest.

    Args:
        text: Raw text, one item per line.

    Returns:
        Top-level items in document order. Stored depths always equal the nesting depth in the
        returned tree, so an item indented more than one step past its parent is still its
        parent's direct child at ``parent.depth + 1``, and an item with nothing open above it is
        top-level at depth 0.
    """

    forest: list[Item] = []
    # (raw tab count, item); popping compares the as-typed indentation
    stack: list[tuple[int, Item]] = []

    for index, tabs, content in iter_outline_lines(text):
        while stack and stack[-1][0] >= tabs:
            stack.pop()

        if stack:
            parent = stack[-1][1]
            item = Item(id=format_item_id(index), text=content, depth=parent.depth + 1)
            parent.children.append(item)
        else:
            item = Item(id=format_item_id(index), text=content, depth=0)
            forest.append(item)

        stack.append((tabs, item))

    logger.debug("Parsed outline", extra={"top_level": len(forest)})
    return forest


def iter_items(forest: Iterable[Item]) -> Iterator[Item]:
    """Walk the forest depth-first in document order."""

    for item in forest:
        yield item
        yield from iter_items(item.children)


def forest_depth(forest: Iterable[Item]) -> int:
    """Return the number of levels in the forest (0 for an empty forest)."""

    return max((item.depth + 1 for item in iter_items(forest)), default=0)
