from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, List, Sequence

from datatable.config import PAGE_WINDOW


@dataclass(frozen=True)
class Page:
    items: List[Any] = field(default_factory=list)
    page: int = 1
    page_size: int = 10
    total_items: int = 0
    total_pages: int = 1
    can_go_next: bool = False
    can_go_previous: bool = False
    start_index: int = 0
    end_index: int = 0
    page_numbers: List[int] = field(default_factory=lambda: [1])

    def meta(self) -> dict:
        return {
            "page": self.page,
            "page_size": self.page_size,
            "total_items": self.total_items,
            "total_pages": self.total_pages,
            "can_go_next": self.can_go_next,
            "can_go_previous": self.can_go_previous,
            "start_index": self.start_index,
            "end_index": self.end_index,
            "page_numbers": list(self.page_numbers),
        }


def count_pages(total_items: int, page_size: int) -> int:
    return max(1, math.ceil(max(0, total_items) / max(1, page_size)))


def clamp_page(page: int, total_pages: int) -> int:
    return min(max(1, page), max(1, total_pages))


def page_window(page: int, total_pages: int, size: int = PAGE_WINDOW) -> List[int]:
    """Page buttons to show: at most `size` numbers kept around the current page."""
    total_pages = max(1, total_pages)
    if total_pages <= size:
        return list(range(1, total_pages + 1))
    half = size // 2
    first = min(max(1, page - half), total_pages - size + 1)
    return list(range(first, first + size))


def paginate(records: Sequence[Any], page: int, page_size: int) -> Page:
    """Slice one page out of `records`; an out-of-range page yields an empty slice."""
    page_size = max(1, int(page_size))
    page = int(page)
    total_items = len(records)
    total_pages = count_pages(total_items, page_size)

    items: List[Any] = []
    if page >= 1:
        start = (page - 1) * page_size
        items = list(records[start:start + page_size])

    start_index = end_index = 0
    if items:
        start_index = (page - 1) * page_size + 1
        end_index = start_index + len(items) - 1

    return Page(
        items=items,
        page=page,
        page_size=page_size,
        total_items=total_items,
        total_pages=total_pages,
        can_go_next=page < total_pages,
        can_go_previous=page > 1,
        start_index=start_index,
        end_index=end_index,
        page_numbers=page_window(clamp_page(page, total_pages), total_pages),
    )


def single_page(records: Sequence[Any]) -> Page:
    """Page holding every record, used when pagination is switched off."""
    items = list(records)
    return Page(
        items=items,
        page=1,
        page_size=max(1, len(items)),
        total_items=len(items),
        total_pages=1,
        start_index=1 if items else 0,
        end_index=len(items),
    )
