# SPDX-License-Identifier: MIT

from recordmoa.model.category import ALL_CATEGORIES, CATEGORIES
from recordmoa.query.filter import DATE_RANGES
from recordmoa.query.sort import SORT_OPTIONS


def complete_category(incomplete: str) -> list[str]:
    return [category for category in CATEGORIES if category.startswith(incomplete)]


def complete_category_selector(incomplete: str) -> list[str]:
    return [
        category
        for category in (ALL_CATEGORIES, *CATEGORIES)
        if category.startswith(incomplete)
    ]


def complete_date_range(incomplete: str) -> list[str]:
    return [date_range for date_range in DATE_RANGES if date_range.startswith(incomplete)]


def complete_sort(incomplete: str) -> list[str]:
    return [option for option in SORT_OPTIONS if option.startswith(incomplete)]
