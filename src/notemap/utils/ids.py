"""ID utilities."""

from __future__ import annotations

import re
import time
from typing import Iterable

_ITEM_ID_RE = re.compile(r"^item-(\d+)$")


def format_item_id(n: int, prefix: str = "item-") -> str:
    """Format a line index or counter value as an item id (e.g. ``item-3``)."""

    return f"{prefix}{n}"


def format_node_id(item_id: str, depth: int, index: int) -> str:
    """Build a diagram node id from its source item, node depth and sibling index.

    Items that share text still get distinct node ids.
    """

    return f"{item_id}-{depth}-{index}"


def next_item_number(existing_ids: Iterable[str]) -> int:
    """Return a counter value larger than any numeric ``item-<n>`` id in `existing_ids`."""

    highest = -1
    for item_id in existing_ids:
        m = _ITEM_ID_RE.match(item_id)
        if m:
            highest = max(highest, int(m.group(1)))
    return highest + 1


def new_session_id(taken: Iterable[str] = ()) -> str:
    """Return a millisecond timestamp id, bumped past any id in `taken`."""

    taken_set = set(taken)
    n = int(time.time() * 1000)
    while str(n) in taken_set:
        n += 1
    return str(n)
