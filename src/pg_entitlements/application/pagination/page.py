"""Application pagination – Page."""
from __future__ import annotations

import dataclasses
from typing import Any, Callable, Generic, TypeVar

T = TypeVar("T")


@dataclasses.dataclass(frozen=True)
class Page(Generic[T]):
    """One page of results plus the cursor for the next one."""

    items: list[T]
    next_cursor: str = ""

    @property
    def has_more(self) -> bool:
        return self.next_cursor != ""

    def map(self, fn: Callable[[T], Any]) -> "Page[Any]":
        """Return a new :class:`Page` with each item transformed by *fn*."""
        return Page(items=[fn(item) for item in self.items], next_cursor=self.next_cursor)

    @classmethod
    def empty(cls) -> "Page[T]":
        return cls(items=[])


__all__ = ["Page"]
