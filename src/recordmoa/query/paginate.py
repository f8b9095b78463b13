# SPDX-License-Identifier: MIT

import math
from typing import Any, Optional

from recordmoa.configuration import DEFAULT_PAGE_SIZE
from recordmoa.model.list_query import ListQuery, Page
from recordmoa.model.record import Record

# Changing any of these starts the list over at the first page.
PAGE_RESETTING_KEYS = ("category", "search", "sort", "date_range")


def total_pages(count: int, page_size: int = DEFAULT_PAGE_SIZE) -> int:
    if page_size < 1:
        raise ValueError(f"Page size must be positive, got {page_size}")
    return max(0, math.ceil(count / page_size))


def paginate(
    records: list[Record], page: int, page_size: int = DEFAULT_PAGE_SIZE
) -> Page:
    pages = total_pages(len(records), page_size)
    start = max(0, (page - 1) * page_size)
    end = max(start, page * page_size)
    return {
        "page_records": list(records[start:end]),
        "total_pages": pages,
    }


def visible_pages(page: int, total: int) -> list[int]:
    """Page numbers shown in the pager: first, last and the current page ±1."""
    candidates = {1, total, page - 1, page, page + 1}
    return sorted(number for number in candidates if 1 <= number <= total)


def page_markers(page: int, total: int) -> list[Optional[int]]:
    """
    Visible page numbers with None marking each gap.

    For page 5 of 10 this is [1, None, 4, 5, 6, None, 10].
    """
    markers: list[Optional[int]] = []
    previous: Optional[int] = None
    for number in visible_pages(page, total):
        if previous is not None and number - previous > 1:
            markers.append(None)
        markers.append(number)
        previous = number
    return markers


def update_list_query(query: ListQuery, **changes: Any) -> ListQuery:
    """
    Apply changes to a list query.

    A change of category, search, sort or date range invalidates the current
    page position, so the page goes back to 1.
    """
    updated = ListQuery(**{**query, **changes})  # type: ignore[typeddict-item]
    context_changed = any(
        key in changes and changes[key] != query[key]  # type: ignore[literal-required]
        for key in PAGE_RESETTING_KEYS
    )
    if context_changed:
        updated["page"] = 1
    return updated


def default_list_query() -> ListQuery:
    return {
        "category": "all",
        "date_range": "all",
        "search": "",
        "sort": "newest",
        "page": 1,
    }
