# SPDX-License-Identifier: MIT

import logging
from typing import Optional

import pendulum

from recordmoa.model.category import CATEGORIES, NO_CATEGORY
from recordmoa.model.record import Record
from recordmoa.model.stats import CategoryStat, MonthlyBucket, StatsSnapshot
from recordmoa.number import safe_mean, safe_percentage
from recordmoa.time import calendar_days_between, month_key, now_local, to_epoch_millis

logger = logging.getLogger(__name__)

MONTHLY_WINDOW = 6


def get_month_slots(
    now: pendulum.DateTime, months: int = MONTHLY_WINDOW
) -> list[pendulum.DateTime]:
    """
    Start of each month in the window ending with the current month, oldest first.
    """
    current = now.in_tz("local").start_of("month")
    return [current.subtract(months=offset) for offset in range(months - 1, -1, -1)]


def get_monthly_series(
    records: list[Record],
    now: Optional[pendulum.DateTime] = None,
    months: int = MONTHLY_WINDOW,
) -> list[MonthlyBucket]:
    """
    Review count and average rating per calendar month.

    Every month in the window gets a bucket even when it is empty. Records
    without a creation time, or created outside the window, are left out;
    the window never grows to fit them.

    Returns:
        List of buckets, oldest first:
        {
            "key": "2026-05",
            "label": "5월",
            "reviews": int,
            "avg_rating": float,
        }
    """
    reference = now if now is not None else now_local()
    slots = get_month_slots(reference, months)

    counts: dict[str, int] = {}
    total_ratings: dict[str, int] = {}
    for slot in slots:
        counts[month_key(slot)] = 0
        total_ratings[month_key(slot)] = 0

    for record in records:
        created_at = record.get("created_at")
        if created_at is None:
            continue
        key = month_key(created_at)
        if key not in counts:
            continue
        counts[key] += 1
        total_ratings[key] += int(record.get("rating") or 0)

    monthly: list[MonthlyBucket] = []
    for slot in slots:
        key = month_key(slot)
        monthly.append(
            {
                "key": key,
                "label": f"{slot.month}월",
                "reviews": counts[key],
                "avg_rating": safe_mean(total_ratings[key], counts[key]),
            }
        )
    return monthly


def get_category_distribution(records: list[Record]) -> list[CategoryStat]:
    total = len(records)
    distribution: list[CategoryStat] = []
    for category in CATEGORIES:
        ratings = [
            int(record.get("rating") or 0)
            for record in records
            if record.get("category") == category
        ]
        distribution.append(
            {
                "category": category,
                "count": len(ratings),
                "percentage": safe_percentage(len(ratings), total),
                "avg_rating": safe_mean(sum(ratings), len(ratings)),
            }
        )
    return distribution


def get_top_category(distribution: list[CategoryStat]) -> str:
    """Category with the most records; the first one wins a tie."""
    top: Optional[CategoryStat] = None
    for category_stat in distribution:
        if top is None or category_stat["count"] > top["count"]:
            top = category_stat
    if top is None or top["count"] == 0:
        return NO_CATEGORY
    return top["category"]


def get_last_review(records: list[Record]) -> Optional[Record]:
    last: Optional[Record] = None
    for record in records:
        created_at = record.get("created_at")
        if created_at is None:
            continue
        if last is None or created_at > last["created_at"]:  # type: ignore[operator]
            last = record
    return last


def recency_label(days: Optional[int]) -> str:
    if days is None:
        return "-"
    if days <= 0:
        return "오늘"
    if days == 1:
        return "어제"
    return f"{days}일 전"


def get_rating_extremes(
    records: list[Record],
) -> tuple[Optional[Record], Optional[Record]]:
    """
    Highest and lowest rated records.

    Among records sharing the extreme rating the most recently created one
    wins; a remaining tie goes to the record that comes first.
    """
    highest: Optional[tuple[tuple[int, int, int], Record]] = None
    lowest: Optional[tuple[tuple[int, int, int], Record]] = None

    for index, record in enumerate(records):
        rating = int(record.get("rating") or 0)
        created = to_epoch_millis(record.get("created_at"))
        highest_key = (rating, created, -index)
        lowest_key = (-rating, created, -index)
        if highest is None or highest_key > highest[0]:
            highest = (highest_key, record)
        if lowest is None or lowest_key > lowest[0]:
            lowest = (lowest_key, record)

    return (
        highest[1] if highest is not None else None,
        lowest[1] if lowest is not None else None,
    )


def aggregate(
    records: list[Record], now: Optional[pendulum.DateTime] = None
) -> StatsSnapshot:
    """
    Compute every statistic shown for a user's records from scratch.

    Nothing here raises on missing optional fields or on an empty
    collection; averages and percentages over nothing are 0.
    """
    reference = now if now is not None else now_local()

    total_count = len(records)
    rating_sum = sum(int(record.get("rating") or 0) for record in records)

    distribution = get_category_distribution(records)

    last_review = get_last_review(records)
    days_since_last_review: Optional[int] = None
    if last_review is not None and last_review["created_at"] is not None:
        days_since_last_review = max(
            0, calendar_days_between(last_review["created_at"], reference)
        )

    highest_rated, lowest_rated = get_rating_extremes(records)

    monthly = get_monthly_series(records, reference)
    monthly_total = sum(bucket["reviews"] for bucket in monthly)

    logger.debug(
        "Aggregated %d records into %d monthly buckets", total_count, len(monthly)
    )

    return {
        "total_count": total_count,
        "avg_rating": safe_mean(rating_sum, total_count),
        "category_distribution": distribution,
        "top_category": get_top_category(distribution),
        "last_review": last_review,
        "days_since_last_review": days_since_last_review,
        "last_review_label": recency_label(days_since_last_review),
        "highest_rated": highest_rated,
        "lowest_rated": lowest_rated,
        "monthly": monthly,
        "monthly_total": monthly_total,
        "monthly_average": safe_mean(monthly_total, len(monthly)),
    }
