# SPDX-License-Identifier: MIT

from typing import Literal, Optional, TypedDict

from recordmoa.model.record import Record

type ListState = Literal["ok", "empty", "no_matches"]


class ListQuery(TypedDict):
    category: str  # "all" or a category
    date_range: str
    search: str
    sort: str
    page: int


class Page(TypedDict):
    page_records: list[Record]
    total_pages: int


class RecordListView(TypedDict):
    """
    A single rendering pass over a record collection.

    total_count is the number of records in the selected category,
    date_filtered_count the number left after the date range and
    result_count the number left after search; page_records is the visible
    slice of the sorted result. state is "empty" when nothing was fetched at
    all and "no_matches" when records exist but none survive the filters.
    """

    query: ListQuery
    state: ListState
    total_count: int
    date_filtered_count: int
    result_count: int
    page: int
    total_pages: int
    visible_pages: list[int]
    page_markers: list[Optional[int]]
    page_records: list[Record]
