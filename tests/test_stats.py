# SPDX-License-Identifier: MIT

import pendulum
import pytest

from recordmoa.model.category import NO_CATEGORY
from recordmoa.service.stats import (
    aggregate,
    get_monthly_series,
    get_rating_extremes,
    recency_label,
)


def test_zero_records(now):
    snapshot = aggregate([], now)

    assert snapshot["total_count"] == 0
    assert snapshot["avg_rating"] == 0
    assert snapshot["top_category"] == NO_CATEGORY
    assert snapshot["last_review"] is None
    assert snapshot["last_review_label"] == "-"
    assert snapshot["highest_rated"] is None
    assert snapshot["lowest_rated"] is None
    assert [stat["percentage"] for stat in snapshot["category_distribution"]] == [0, 0, 0]
    assert len(snapshot["monthly"]) == 6
    assert all(bucket["reviews"] == 0 for bucket in snapshot["monthly"])
    assert snapshot["monthly_total"] == 0
    assert snapshot["monthly_average"] == 0


def test_category_distribution(make_record, now):
    records = (
        [make_record(category="movie", created_at=now) for _ in range(6)]
        + [make_record(category="book", created_at=now) for _ in range(3)]
        + [make_record(category="place", created_at=now)]
    )
    snapshot = aggregate(records, now)

    percentages = {
        stat["category"]: stat["percentage"]
        for stat in snapshot["category_distribution"]
    }
    assert percentages == {"movie": 60, "book": 30, "place": 10}
    assert snapshot["top_category"] == "movie"
    assert snapshot["total_count"] == 10


def test_average_rating(make_record, now):
    records = [make_record(rating=rating, created_at=now) for rating in (5, 5, 4, 3, 1)]
    assert aggregate(records, now)["avg_rating"] == 3.6


def test_category_average_rating(make_record, now):
    records = [
        make_record(category="book", rating=4, created_at=now),
        make_record(category="book", rating=5, created_at=now),
        make_record(category="movie", rating=2, created_at=now),
    ]
    averages = {
        stat["category"]: stat["avg_rating"]
        for stat in aggregate(records, now)["category_distribution"]
    }
    assert averages == {"movie": 2.0, "book": 4.5, "place": 0.0}


@pytest.mark.parametrize(
    "ratings",
    [[1], [5], [1, 5], [2, 3, 3, 4], [5, 5, 5, 1, 1, 2, 4]],
)
def test_bounds(make_record, now, ratings):
    categories = ["movie", "book", "place"]
    records = [
        make_record(category=categories[index % 3], rating=rating, created_at=now)
        for index, rating in enumerate(ratings)
    ]
    snapshot = aggregate(records, now)

    assert 1 <= snapshot["avg_rating"] <= 5
    for stat in snapshot["category_distribution"]:
        assert 0 <= stat["percentage"] <= 100


def test_top_category_tie_goes_to_first_category(make_record, now):
    records = [
        make_record(category="place", created_at=now),
        make_record(category="book", created_at=now),
    ]
    assert aggregate(records, now)["top_category"] == "book"


def test_monthly_series_covers_six_months_ending_now(make_record, now):
    records = [
        make_record(created_at=pendulum.datetime(2026, 6, 1, tz="local"), rating=4),
        make_record(created_at=pendulum.datetime(2026, 6, 14, tz="local"), rating=5),
        make_record(created_at=pendulum.datetime(2026, 3, 31, 23, tz="local"), rating=2),
        make_record(created_at=pendulum.datetime(2025, 12, 31, tz="local")),
        make_record(created_at=None),
    ]
    monthly = get_monthly_series(records, now)

    assert [bucket["key"] for bucket in monthly] == [
        "2026-01",
        "2026-02",
        "2026-03",
        "2026-04",
        "2026-05",
        "2026-06",
    ]
    assert [bucket["label"] for bucket in monthly] == [
        "1월",
        "2월",
        "3월",
        "4월",
        "5월",
        "6월",
    ]
    assert [bucket["reviews"] for bucket in monthly] == [0, 0, 1, 0, 0, 2]
    assert monthly[-1]["avg_rating"] == 4.5
    assert monthly[0]["avg_rating"] == 0


def test_monthly_series_crosses_year_boundary():
    february = pendulum.datetime(2026, 2, 10, tz="local")
    keys = [bucket["key"] for bucket in get_monthly_series([], february)]
    assert keys == ["2025-09", "2025-10", "2025-11", "2025-12", "2026-01", "2026-02"]


def test_monthly_totals(make_record, now):
    records = [make_record(created_at=now) for _ in range(3)]
    snapshot = aggregate(records, now)
    assert snapshot["monthly_total"] == 3
    assert snapshot["monthly_average"] == 0.5


@pytest.mark.parametrize(
    "days,label",
    [(None, "-"), (0, "오늘"), (1, "어제"), (5, "5일 전")],
)
def test_recency_label(days, label):
    assert recency_label(days) == label


def test_last_review(make_record, now):
    records = [
        make_record("이전", created_at=now.subtract(days=5)),
        make_record("최근", created_at=now.subtract(days=1)),
    ]
    snapshot = aggregate(records, now)
    assert snapshot["last_review"]["title"] == "최근"
    assert snapshot["days_since_last_review"] == 1
    assert snapshot["last_review_label"] == "어제"


def test_future_review_counts_as_today(make_record, now):
    snapshot = aggregate([make_record(created_at=now.add(days=2))], now)
    assert snapshot["days_since_last_review"] == 0
    assert snapshot["last_review_label"] == "오늘"


def test_rating_extremes_prefer_most_recent(make_record, now):
    old_best = make_record("old best", rating=5, created_at=now.subtract(days=10))
    new_best = make_record("new best", rating=5, created_at=now.subtract(days=1))
    old_worst = make_record("old worst", rating=1, created_at=now.subtract(days=9))
    new_worst = make_record("new worst", rating=1, created_at=now.subtract(days=2))
    middle = make_record("middle", rating=3, created_at=now)

    highest, lowest = get_rating_extremes([old_best, new_best, old_worst, new_worst, middle])
    assert highest["title"] == "new best"
    assert lowest["title"] == "new worst"


def test_rating_extremes_fall_back_to_input_order(make_record, now):
    first = make_record("first", rating=4, created_at=now)
    second = make_record("second", rating=4, created_at=now)

    highest, lowest = get_rating_extremes([first, second])
    assert highest["title"] == "first"
    assert lowest["title"] == "first"


def test_missing_optional_fields_do_not_raise(make_record, now):
    record = make_record(created_at=None, rating=None)
    snapshot = aggregate([record], now)
    assert snapshot["total_count"] == 1
    assert snapshot["last_review"] is None
