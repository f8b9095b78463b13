# SPDX-License-Identifier: MIT

from decimal import ROUND_HALF_UP, Decimal


def round_half_up(value: float, digits: int = 0) -> float:
    """
    Round with halves going up, the way ratings and percentages are shown.

    round() rounds halves to even, so 2.25 would become 2.2 instead of 2.3.
    """
    quantum = Decimal(1).scaleb(-digits)
    return float(Decimal(repr(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def safe_mean(total: float, count: int, digits: int = 1) -> float:
    """Mean rounded to digits places, or 0 when there is nothing to average."""
    if count == 0:
        return 0.0
    return round_half_up(total / count, digits)


def safe_percentage(count: int, total: int) -> int:
    if total == 0:
        return 0
    return int(round_half_up(count / total * 100))
