# SPDX-License-Identifier: MIT

from typing import Optional

from recordmoa.model.category import category_label


def format_rating(rating: int) -> str:
    """Five stars, filled up to the rating."""
    filled = max(0, min(5, rating))
    return "★" * filled + "☆" * (5 - filled)


def format_cast(cast: Optional[list[str]]) -> str:
    """Format a list of names as a comma-separated string without brackets or quotes."""
    if cast is None or len(cast) == 0:
        return ""
    return ", ".join(cast)


def format_category(category: str) -> str:
    return category_label(category)


def preview(text: Optional[str], length: int = 40) -> str:
    if not text:
        return ""
    single_line = " ".join(text.split())
    if len(single_line) <= length:
        return single_line
    return single_line[:length] + "..."


def format_markers(markers: list[Optional[int]], page: int) -> str:
    """Render pager markers, highlighting the current page."""
    parts = []
    for marker in markers:
        if marker is None:
            parts.append("…")
        elif marker == page:
            parts.append(f"[bold reverse] {marker} [/bold reverse]")
        else:
            parts.append(str(marker))
    return " ".join(parts)
