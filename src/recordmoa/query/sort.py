# SPDX-License-Identifier: MIT

import unicodedata
from typing import Any, Callable

from recordmoa.model.record import Record
from recordmoa.time import to_epoch_millis

DEFAULT_SORT_OPTION = "newest"


def _is_hangul(char: str) -> bool:
    code = ord(char)
    return (
        0xAC00 <= code <= 0xD7A3  # syllables
        or 0x1100 <= code <= 0x11FF  # jamo
        or 0x3130 <= code <= 0x318F  # compatibility jamo
    )


def _is_han(char: str) -> bool:
    return unicodedata.name(char, "").startswith("CJK UNIFIED IDEOGRAPH")


def collation_key(text: str) -> tuple[tuple[int, int], ...]:
    """
    Sort key approximating Korean locale collation.

    Non-letters come first, then Hangul, then Han, then every other script;
    within a group characters compare by code point after NFKC
    normalisation and case folding, which puts Hangul syllables in
    dictionary order.
    """
    key: list[tuple[int, int]] = []
    for char in unicodedata.normalize("NFKC", text).casefold():
        if _is_hangul(char):
            group = 1
        elif _is_han(char):
            group = 2
        elif char.isalpha():
            group = 3
        else:
            group = 0
        key.append((group, ord(char)))
    return tuple(key)


def _created_key(record: Record) -> int:
    return to_epoch_millis(record.get("created_at"))


def _rating_key(record: Record) -> int:
    return int(record.get("rating") or 0)


def _title_key(record: Record) -> tuple[tuple[int, int], ...]:
    return collation_key(record.get("title") or "")


# option: (key, descending)
SORT_OPTIONS: dict[str, tuple[Callable[[Record], Any], bool]] = {
    "newest": (_created_key, True),
    "oldest": (_created_key, False),
    "rating-high": (_rating_key, True),
    "rating-low": (_rating_key, False),
    "title-asc": (_title_key, False),
    "title-desc": (_title_key, True),
}


def sort_records(records: list[Record], option: str = DEFAULT_SORT_OPTION) -> list[Record]:
    """
    Return a new list ordered by the given sort option.

    Records with equal keys keep their input order, for descending options
    too.
    """
    if option not in SORT_OPTIONS:
        raise ValueError(
            f"Unknown sort option '{option}'. Valid options: {', '.join(SORT_OPTIONS)}"
        )
    key, descending = SORT_OPTIONS[option]
    return sorted(records, key=key, reverse=descending)
