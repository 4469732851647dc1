"""Outline models: the parsed forest and the flat editor rows."""

from __future__ import annotations

from pydantic import BaseModel, Field

ROOT_ID = "root"


class Item(BaseModel):
    """A node of the parsed outline forest.

    `depth` is 0 for top-level items and increases by one per nesting level. Children are owned
    by their parent and kept in document order.
    """

    id: str
    text: str = Field(min_length=1)
    depth: int = Field(default=0, ge=0)
    children: list["Item"] = Field(default_factory=list)


class FlatItem(BaseModel):
    """A row of the flat editor list.

    Level 0 is reserved for the root pseudo-item; level 1 rows are direct children of the root.
    """

    id: str
    text: str
    level: int = Field(ge=0)

    @property
    def is_root(self) -> bool:
        return self.id == ROOT_ID

    @property
    def depth(self) -> int:
        return max(0, self.level - 1)
