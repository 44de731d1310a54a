"""Application pagination – offset cursor and the "fetch one extra" convention.

A cursor is a bare decimal offset. ``""`` means "first page" when passed in
and "no more pages" when handed back.
"""
from __future__ import annotations

import dataclasses
from typing import Sequence, TypeVar

from pg_entitlements.kernel.errors import InvalidCursorError

T = TypeVar("T")

DEFAULT_PAGE_SIZE = 100


@dataclasses.dataclass(frozen=True, slots=True)
class Pager:
    """Caller-supplied page token and size."""
    token: str = ""
    size: int = 0

    def parse(self) -> tuple[int, int]:
        """Return ``(offset, limit)``; a non-positive size falls back to the default."""
        limit = self.size if self.size > 0 else DEFAULT_PAGE_SIZE
        if self.token == "":
            return 0, limit
        if not (self.token.isascii() and self.token.isdigit()):
            raise InvalidCursorError(self.token)
        return int(self.token), limit

    def fetch_limit(self) -> int:
        """Rows to request from the data source: one more than the page holds."""
        return self.parse()[1] + 1


def paginate(rows: Sequence[T], offset: int, limit: int) -> tuple[list[T], str]:
    """Trim a ``limit + 1`` fetch to one page and compute the next cursor."""
    if len(rows) > limit:
        return list(rows[:limit]), str(offset + limit)
    return list(rows), ""


__all__ = ["DEFAULT_PAGE_SIZE", "Pager", "paginate"]
