# SPDX-License-Identifier: MIT


class Category:
    MOVIE = "movie"
    BOOK = "book"
    PLACE = "place"


# Iteration order matters: it breaks ties for the most used category.
CATEGORIES: tuple[str, ...] = (Category.MOVIE, Category.BOOK, Category.PLACE)

ALL_CATEGORIES = "all"

NO_CATEGORY = "none"

CATEGORY_LABELS: dict[str, str] = {
    ALL_CATEGORIES: "전체",
    Category.MOVIE: "영상",
    Category.BOOK: "도서",
    Category.PLACE: "장소",
    NO_CATEGORY: "-",
}

CATEGORY_FIELDS: dict[str, tuple[str, ...]] = {
    Category.MOVIE: ("director", "cast", "date_watched"),
    Category.BOOK: ("author", "publisher", "date_started", "date_finished"),
    Category.PLACE: ("place_name", "location", "date_visited"),
}


def category_label(value: str) -> str:
    return CATEGORY_LABELS.get(value, value)
