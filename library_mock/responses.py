"""Response helpers.

Catalog payloads are flat objects with a leading ``success`` flag; the
organization routes return bare resources. Both are plain dicts so handlers
can merge extra keys before serialization.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Mapping, Sequence, TypeVar


JsonObject = dict[str, Any]
T = TypeVar("T")


def ok(payload: Mapping[str, Any] | None = None) -> JsonObject:
    """Build a successful catalog response."""

    out: JsonObject = {"success": True}
    if payload:
        out.update(dict(payload))
    return out


def parse_int(value: str | None, default: int) -> int:
    """Parse a leading integer the lenient way browsers do.

    "3", " 3", "3abc" -> 3; missing, non-numeric or non-positive -> default.
    """

    text = (value or "").strip()
    end = 0
    if text[:1] in {"+", "-"}:
        end = 1
    while end < len(text) and text[end].isdigit():
        end += 1
    try:
        parsed = int(text[:end])
    except ValueError:
        return default
    return parsed if parsed > 0 else default


@dataclass(frozen=True, slots=True)
class Page:
    page: int
    limit: int
    items: list[Any]
    total: int

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total / self.limit)

    @property
    def has_more(self) -> bool:
        return self.page < self.total_pages

    def meta(self) -> JsonObject:
        return {
            "page": self.page,
            "limit": self.limit,
            "totalPages": self.total_pages,
            "hasMore": self.has_more,
        }


def paginate(items: Sequence[T], *, page: int, limit: int) -> Page:
    """Slice ``items`` into the 1-based ``page`` of size ``limit``."""

    offset = (page - 1) * limit
    return Page(page=page, limit=limit, items=list(items[offset : offset + limit]), total=len(items))


def cursor_page(
    rows: Sequence[T],
    *,
    cursor: str | None,
    size: int,
    key: str,
) -> tuple[list[T], str | None]:
    """Cursor pagination keyed by ``getattr(row, key)``.

    The page starts right after the row matching ``cursor`` (from the top when
    the cursor is absent or unknown). The returned cursor is the key of the
    last row on this page, and None once the page reaches the end.
    """

    start = 0
    if cursor:
        for index, row in enumerate(rows):
            if getattr(row, key) == cursor:
                start = index + 1
                break

    chunk = list(rows[start : start + size])
    next_cursor = None
    if start + size < len(rows):
        next_cursor = getattr(rows[start + size - 1], key)
    return chunk, next_cursor
