# SPDX-License-Identifier: MIT

import pytest

from recordmoa.service.insight import (
    format_growth_rate,
    generate_insights,
    get_growth_rate,
    get_peak_growth,
)


def buckets(*reviews):
    return [
        {
            "key": f"2026-{month:02d}",
            "label": f"{month}월",
            "reviews": count,
            "avg_rating": 0.0,
        }
        for month, count in enumerate(reviews, start=1)
    ]


def test_growth_and_decline_together():
    insights = generate_insights(buckets(8, 12, 15, 18, 22, 20))

    assert insights["first_mean"] == 11.67
    assert insights["second_mean"] == 20
    assert insights["has_growth"] is True
    assert insights["has_decline"] is True
    assert insights["is_consistent"] is True
    assert [insight["kind"] for insight in insights["messages"]] == [
        "growth",
        "decline",
        "consistency",
    ]


def test_growth_needs_more_than_ten_percent():
    # 11 is exactly 10% above 10, which isn't enough
    insights = generate_insights(buckets(10, 10, 10, 11, 11, 11))
    assert insights["has_growth"] is False


def test_decline_only_looks_at_the_last_two_months():
    insights = generate_insights(buckets(20, 20, 20, 5, 6, 5))
    assert insights["has_growth"] is False
    assert insights["has_decline"] is True
    assert insights["messages"][0]["title"] == "6월 소폭 감소"


def test_empty_month_breaks_consistency():
    insights = generate_insights(buckets(3, 0, 2, 2, 3, 3))
    assert insights["is_consistent"] is False
    assert insights["min_monthly_reviews"] == 0


def test_no_trend_gives_info_message():
    insights = generate_insights(buckets(0, 0, 0, 0, 0, 0))
    assert insights["has_growth"] is False
    assert insights["has_decline"] is False
    assert insights["is_consistent"] is False
    assert [insight["kind"] for insight in insights["messages"]] == ["info"]


@pytest.mark.parametrize("reviews", [(), (4,), (4, 5)])
def test_too_few_buckets(reviews):
    insights = generate_insights(buckets(*reviews))
    assert insights["has_growth"] is False
    assert insights["has_decline"] is False
    assert insights["is_consistent"] is False
    assert insights["first_mean"] is None
    assert insights["messages"][0]["title"] == "데이터 부족"


def test_growth_message_mentions_peak_month():
    insights = generate_insights(buckets(1, 1, 1, 2, 8, 9))
    assert insights["peak_growth"] == {"from_label": "4월", "to_label": "5월", "increase": 6}
    assert "4월-5월" in insights["messages"][0]["message"]


def test_growth_rate():
    assert get_growth_rate(buckets(1, 1, 1, 1, 10, 15)) == 50.0
    assert get_growth_rate(buckets(1, 1, 1, 1, 4, 3)) == -25.0
    assert get_growth_rate(buckets(1, 1, 1, 1, 0, 3)) is None
    assert get_growth_rate(buckets(3)) is None


def test_peak_growth_is_none_without_increase():
    assert get_peak_growth(buckets(5, 4, 3, 3, 2, 1)) is None


def test_format_growth_rate():
    assert format_growth_rate(None) == "데이터 없음"
    assert format_growth_rate(50.0) == "+50% 증가"
    assert format_growth_rate(-25.0) == "-25% 감소"
    assert format_growth_rate(0.0) == "변화 없음"
