# SPDX-License-Identifier: MIT

from typing import Optional

import pendulum

from recordmoa.configuration import DEFAULT_PAGE_SIZE
from recordmoa.model.list_query import ListQuery, ListState, RecordListView
from recordmoa.model.record import Record
from recordmoa.query.filter import CategoryPredicate, DateRangePredicate, SearchPredicate
from recordmoa.query.paginate import page_markers, paginate, visible_pages
from recordmoa.query.sort import sort_records


def build_list_view(
    records: list[Record],
    query: ListQuery,
    page_size: int = DEFAULT_PAGE_SIZE,
    now: Optional[pendulum.DateTime] = None,
) -> RecordListView:
    """
    Filter, sort and page a fetched record collection for display.

    The category narrows the collection first, then the date range, then
    the search query; the result count is reported against the
    date-filtered set.
    """
    category_records = CategoryPredicate(query["category"]).filter(records)
    date_filtered = DateRangePredicate(query["date_range"], now).filter(
        category_records
    )
    searched = SearchPredicate(query["search"]).filter(date_filtered)
    sorted_records = sort_records(searched, query["sort"])

    page = paginate(sorted_records, query["page"], page_size)

    state: ListState = "ok"
    if len(records) == 0:
        state = "empty"
    elif len(sorted_records) == 0:
        state = "no_matches"

    return {
        "query": query,
        "state": state,
        "total_count": len(category_records),
        "date_filtered_count": len(date_filtered),
        "result_count": len(sorted_records),
        "page": query["page"],
        "total_pages": page["total_pages"],
        "visible_pages": visible_pages(query["page"], page["total_pages"]),
        "page_markers": page_markers(query["page"], page["total_pages"]),
        "page_records": page["page_records"],
    }
