# SPDX-License-Identifier: MIT

from typing import Optional

import typer

from recordmoa.model.category import ALL_CATEGORIES, CATEGORIES
from recordmoa.query.filter import DATE_RANGES
from recordmoa.query.sort import SORT_OPTIONS
from recordmoa.service.record import MAX_RATING, MIN_RATING


def validate_rating(rating: Optional[int]) -> Optional[int]:
    if rating is None:
        return None
    if not (MIN_RATING <= rating <= MAX_RATING):
        raise typer.BadParameter(
            f"Rating must be between {MIN_RATING} and {MAX_RATING} (inclusive)"
        )
    return rating


def validate_category(category: str) -> str:
    if category not in CATEGORIES:
        raise typer.BadParameter(f"valid inputs: {', '.join(CATEGORIES)}")
    return category


def validate_category_selector(category: str) -> str:
    if category != ALL_CATEGORIES and category not in CATEGORIES:
        raise typer.BadParameter(
            f"valid inputs: {ALL_CATEGORIES}, {', '.join(CATEGORIES)}"
        )
    return category


def validate_date_range(date_range: str) -> str:
    if date_range not in DATE_RANGES:
        raise typer.BadParameter(f"valid inputs: {', '.join(DATE_RANGES)}")
    return date_range


def validate_sort(sort: Optional[str]) -> Optional[str]:
    if sort is None:
        return None
    if sort not in SORT_OPTIONS:
        raise typer.BadParameter(f"valid inputs: {', '.join(SORT_OPTIONS)}")
    return sort


def validate_positive(value: Optional[int]) -> Optional[int]:
    if value is None:
        return None
    if value < 1:
        raise typer.BadParameter("Must be 1 or greater")
    return value
