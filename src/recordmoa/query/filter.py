# SPDX-License-Identifier: MIT

from abc import ABC, abstractmethod
from typing import Optional

import pendulum

from recordmoa.model.category import ALL_CATEGORIES, Category
from recordmoa.model.record import Record
from recordmoa.time import now_local

DATE_RANGES = ("all", "1m", "3m", "6m", "1y")

DATE_RANGE_OFFSETS: dict[str, dict[str, int]] = {
    "1m": {"months": 1},
    "3m": {"months": 3},
    "6m": {"months": 6},
    "1y": {"years": 1},
}

SEARCH_FIELDS: dict[str, tuple[str, ...]] = {
    Category.MOVIE: ("director", "cast"),
    Category.BOOK: ("author", "publisher"),
    Category.PLACE: ("location",),
}


def generate_filter(
    category: str = ALL_CATEGORIES,
    date_range: str = "all",
    search_query: str = "",
    now: Optional[pendulum.DateTime] = None,
) -> "And":
    filter_obj = And()
    filter_obj.add_predicate(CategoryPredicate(category))
    filter_obj.add_predicate(DateRangePredicate(date_range, now))
    filter_obj.add_predicate(SearchPredicate(search_query))
    return filter_obj


def filter_records(
    records: list[Record],
    category: str = ALL_CATEGORIES,
    date_range: str = "all",
    search_query: str = "",
    now: Optional[pendulum.DateTime] = None,
) -> list[Record]:
    return generate_filter(category, date_range, search_query, now).filter(records)


def date_range_cutoff(
    date_range: str, now: Optional[pendulum.DateTime] = None
) -> Optional[pendulum.DateTime]:
    """
    Calendar cutoff for a date range selector, or None for "all".

    Month and year offsets are calendar arithmetic: one month before
    March 31 is February 28 (or 29).
    """
    if date_range == "all":
        return None
    if date_range not in DATE_RANGE_OFFSETS:
        raise ValueError(f"Unknown date range: {date_range}")
    reference = now if now is not None else now_local()
    return reference.subtract(**DATE_RANGE_OFFSETS[date_range])


class Predicate(ABC):
    @abstractmethod
    def filter(self, items: list[Record]) -> list[Record]: ...


class And(Predicate):
    def __init__(self) -> None:
        self.predicates: list[Predicate] = []

    def add_predicate(self, predicate: Predicate) -> None:
        self.predicates.append(predicate)

    def filter(self, items: list[Record]) -> list[Record]:
        result = list(items)
        for predicate in self.predicates:
            result = predicate.filter(result)
        return result


class CategoryPredicate(Predicate):
    def __init__(self, category: str) -> None:
        self.category = category

    def filter(self, items: list[Record]) -> list[Record]:
        if self.category == ALL_CATEGORIES:
            return list(items)
        return [item for item in items if item.get("category") == self.category]


class DateRangePredicate(Predicate):
    def __init__(
        self, date_range: str, now: Optional[pendulum.DateTime] = None
    ) -> None:
        self.cutoff = date_range_cutoff(date_range, now)

    def filter(self, items: list[Record]) -> list[Record]:
        if self.cutoff is None:
            return list(items)
        cutoff = self.cutoff
        filtered_items = []

        for item in items:
            created_at = item.get("created_at")
            # Records without a creation time can't be placed in any range
            if created_at is not None and created_at >= cutoff:
                filtered_items.append(item)

        return filtered_items


class SearchPredicate(Predicate):
    def __init__(self, search_query: str) -> None:
        self.query = search_query.strip().lower()

    def filter(self, items: list[Record]) -> list[Record]:
        if self.query == "":
            return list(items)
        return [item for item in items if self.__include(item)]

    def __include(self, item: Record) -> bool:
        return any(
            self.query in text.lower() for text in searchable_texts(item)
        )


def searchable_texts(record: Record) -> list[str]:
    """Text fields a search query is matched against, for the record's category."""
    texts: list[str] = []

    title = record.get("title")
    if title:
        texts.append(title)

    for field in SEARCH_FIELDS.get(record.get("category", ""), ()):
        value = record.get(field)
        if value is None:
            continue
        if isinstance(value, list):
            texts.append(", ".join(str(part) for part in value))
        else:
            texts.append(str(value))

    review = record.get("review")
    if review:
        texts.append(review)

    return texts
