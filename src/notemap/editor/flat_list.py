"""Flat-list editor model.

The editor keeps the document as one ordered list of rows, root first. Every mutation returns the
rows re-serialized as tab-indented text, which is the form that gets persisted. The tree used for
layout is re-parsed from that text.
"""

from __future__ import annotations

import re
from typing import Any, Callable

from notemap.exceptions import InvalidEditOperationError
from notemap.logging import get_logger
from notemap.models.outline import ROOT_ID, FlatItem, Item
from notemap.parsing.indent import TAB, iter_outline_lines, parse_outline
from notemap.utils.ids import format_item_id, next_item_number

logger = get_logger(__name__)

DEFAULT_MAX_LEVEL = 5
DEFAULT_CHILD_TEXT = "New child item"

_LINE_BREAKS = re.compile(r"[\r\n]+")


def single_line(text: str) -> str:
    """Collapse line breaks to single spaces and trim, so the text stays one row when serialized."""

    return _LINE_BREAKS.sub(" ", text).strip()


def flat_items_from_text(text: str, max_level: int | None = None) -> list[FlatItem]:
    """Build content rows (no root) from tab-indented text.

    ``level = tabs + 1``, capped at `max_level` when one is given.
    """

    return [
        FlatItem(
            id=format_item_id(index),
            text=content,
            level=tabs + 1 if max_level is None else min(tabs + 1, max_level),
        )
        for index, tabs, content in iter_outline_lines(text)
    ]


def flat_items_to_text(items: list[FlatItem]) -> str:
    """Serialize rows to tab-indented text, skipping the root row."""

    lines = [TAB * item.depth + item.text.strip() for item in items if not item.is_root]
    return "\n".join(lines)


class FlatListEditor:
    """Editable flat view of an outline document.

    The root row carries the session label at level 0. It only exists while the document has
    content, is always first, and ignores rename, level, move and delete requests.
    """

    def __init__(
        self,
        label: str,
        text: str = "",
        *,
        max_level: int = DEFAULT_MAX_LEVEL,
        on_change: Callable[[str], None] | None = None,
    ) -> None:
        self.label = label
        self.max_level = max(1, max_level)
        self._on_change = on_change
        self._items: list[FlatItem] = []
        self._next_id = 0
        self.load(text)

    def load(self, text: str) -> None:
        """Replace the rows with the parse of `text`."""

        content = flat_items_from_text(text, self.max_level)
        self._items = [self._root_row(), *content] if content else []
        self._next_id = next_item_number(item.id for item in self._items)

    @property
    def items(self) -> list[FlatItem]:
        return list(self._items)

    def to_text(self) -> str:
        return flat_items_to_text(self._items)

    def to_forest(self) -> list[Item]:
        return parse_outline(self.to_text())

    def index_of(self, item_id: str) -> int:
        """Position of `item_id` in the list, or -1."""

        for index, item in enumerate(self._items):
            if item.id == item_id:
                return index
        return -1

    def get(self, item_id: str) -> FlatItem | None:
        index = self.index_of(item_id)
        return self._items[index] if index >= 0 else None

    # Mutations. Each returns the serialized text after the change.

    def rename(self, item_id: str, text: str) -> str:
        """Replace an item's text; line breaks become spaces and blank text is ignored."""

        text = single_line(text)
        index = self.index_of(item_id)
        if not text or index <= 0 or self._items[index].is_root:
            return self.to_text()
        self._items[index] = self._items[index].model_copy(update={"text": text})
        return self._changed("rename", item_id)

    def change_level(self, item_id: str, delta: int) -> str:
        """Shift an item's level by `delta`, clamped to ``[1, max_level]``."""

        index = self.index_of(item_id)
        if index <= 0 or self._items[index].is_root:
            return self.to_text()
        item = self._items[index]
        level = max(1, min(self.max_level, item.level + delta))
        self._items[index] = item.model_copy(update={"level": level})
        return self._changed("change_level", item_id)

    def indent(self, item_id: str) -> str:
        return self.change_level(item_id, 1)

    def outdent(self, item_id: str) -> str:
        return self.change_level(item_id, -1)

    def append(self, text: str) -> str:
        """Add a level-1 item at the end of the list; blank text is ignored."""

        text = single_line(text)
        if not text:
            return self.to_text()
        self._ensure_root()
        item = FlatItem(id=self._new_id(), text=text, level=1)
        self._items.append(item)
        return self._changed("append", item.id)

    def add_child(self, parent_id: str, text: str = DEFAULT_CHILD_TEXT) -> str:
        """Insert a new item one level below `parent_id`, directly after it; blank text is ignored."""

        text = single_line(text)
        index = self.index_of(parent_id)
        if not text or index < 0:
            return self.to_text()
        parent = self._items[index]
        level = max(1, min(self.max_level, parent.level + 1))
        item = FlatItem(id=self._new_id(), text=text, level=level)
        self._items.insert(index + 1, item)
        return self._changed("add_child", item.id)

    def delete(self, item_id: str) -> str:
        """Remove exactly one row. Rows nested under it stay in place."""

        index = self.index_of(item_id)
        if index <= 0 or self._items[index].is_root:
            return self.to_text()
        del self._items[index]
        if len(self._items) == 1:
            self._items = []
        return self._changed("delete", item_id)

    def move_up(self, item_id: str) -> str:
        index = self.index_of(item_id)
        if index <= 1:
            return self.to_text()
        self._swap(index, index - 1)
        return self._changed("move_up", item_id)

    def move_down(self, item_id: str) -> str:
        index = self.index_of(item_id)
        if index <= 0 or index >= len(self._items) - 1:
            return self.to_text()
        self._swap(index, index + 1)
        return self._changed("move_down", item_id)

    def apply(self, op: str, **kwargs: Any) -> str:
        """Dispatch an operation by name (used by the HTTP API).

        Raises:
            InvalidEditOperationError: If `op` is unknown or a required argument is missing.
        """

        entry = _OPERATIONS.get(op)
        if entry is None:
            raise InvalidEditOperationError(
                f"unknown editor operation: {op!r} (expected one of: {', '.join(EDITOR_OPERATIONS)})"
            )
        handler, required, optional = entry
        missing = [name for name in required if kwargs.get(name) is None]
        if missing:
            raise InvalidEditOperationError(f"{op} requires: {', '.join(missing)}")
        args = {k: v for k, v in kwargs.items() if v is not None and (k in required or k in optional)}
        return handler(self, **args)

    def _root_row(self) -> FlatItem:
        return FlatItem(id=ROOT_ID, text=self.label, level=0)

    def _ensure_root(self) -> None:
        if not self._items:
            self._items.append(self._root_row())

    def _new_id(self) -> str:
        item_id = format_item_id(self._next_id)
        self._next_id += 1
        return item_id

    def _swap(self, a: int, b: int) -> None:
        self._items[a], self._items[b] = self._items[b], self._items[a]

    def _changed(self, op: str, item_id: str) -> str:
        text = self.to_text()
        logger.debug("Editor %s", op, extra={"item_id": item_id, "rows": len(self._items)})
        if self._on_change is not None:
            self._on_change(text)
        return text


_OPERATIONS: dict[str, tuple[Callable[..., str], tuple[str, ...], tuple[str, ...]]] = {
    "rename": (lambda ed, item_id, text: ed.rename(item_id, text), ("item_id", "text"), ()),
    "change_level": (lambda ed, item_id, delta: ed.change_level(item_id, delta), ("item_id", "delta"), ()),
    "indent": (lambda ed, item_id: ed.indent(item_id), ("item_id",), ()),
    "outdent": (lambda ed, item_id: ed.outdent(item_id), ("item_id",), ()),
    "append": (lambda ed, text: ed.append(text), ("text",), ()),
    "add_child": (
        lambda ed, item_id, text=DEFAULT_CHILD_TEXT: ed.add_child(item_id, text),
        ("item_id",),
        ("text",),
    ),
    "delete": (lambda ed, item_id: ed.delete(item_id), ("item_id",), ()),
    "move_up": (lambda ed, item_id: ed.move_up(item_id), ("item_id",), ()),
    "move_down": (lambda ed, item_id: ed.move_down(item_id), ("item_id",), ()),
}

EDITOR_OPERATIONS = tuple(_OPERATIONS)
