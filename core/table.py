from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List, Literal, Optional, Sequence, TypeVar

from core.records import SigamiRequest, field_value

SortDirection = Literal["asc", "desc"]

T = TypeVar("T")


@dataclass(frozen=True)
class SortConfig:
    key: Optional[str] = None
    direction: Optional[SortDirection] = None


def sort_by(records: Sequence[SigamiRequest], key: Optional[str], direction: Optional[str]) -> List[SigamiRequest]:
    """Stable case-insensitive string sort. No key or direction keeps input order."""
    items = list(records)
    if key is None or direction not in ("asc", "desc"):
        return items
    return sorted(items, key=lambda r: field_value(r, key).lower(), reverse=direction == "desc")


def next_sort(config: SortConfig, key: str) -> SortConfig:
    """Header click: ascending first, descending when the same key is clicked again."""
    if config.key == key and config.direction == "asc":
        return SortConfig(key=key, direction="desc")
    return SortConfig(key=key, direction="asc")


def paginate(records: Sequence[T], page_size: int, page_number: int) -> List[T]:
    """1-based page slice. Pages outside the data come back empty.

    Callers own clamping: whenever the underlying collection changes length
    they should go back to page 1.
    """
    if page_size <= 0 or page_number < 1:
        return []
    start = (page_number - 1) * page_size
    return list(records[start : start + page_size])


def page_count(total: int, page_size: int) -> int:
    if page_size <= 0:
        return 0
    return math.ceil(total / page_size)


def page_window(current: int, total_pages: int, width: int = 5) -> List[int]:
    """Page numbers for the pager buttons, centered on ``current`` when possible."""
    if total_pages <= width:
        return list(range(1, total_pages + 1))
    start = min(max(1, current - width // 2), total_pages - width + 1)
    return list(range(start, start + width))
