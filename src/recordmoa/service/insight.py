# SPDX-License-Identifier: MIT

from typing import Optional

from recordmoa.model.stats import Insight, Insights, MonthlyBucket, PeakGrowth
from recordmoa.number import round_half_up

MIN_BUCKETS = 3
GROWTH_THRESHOLD = 1.1


def _mean(values: list[int]) -> float:
    if not values:
        return 0.0
    return sum(values) / len(values)


def get_growth_rate(monthly: list[MonthlyBucket]) -> Optional[float]:
    """
    Percentage change from the previous month to the latest one.

    None when there is no previous month or it had no reviews.
    """
    if len(monthly) < 2:
        return None
    previous = monthly[-2]["reviews"]
    last = monthly[-1]["reviews"]
    if previous == 0:
        return None
    return round_half_up((last - previous) / previous * 100, 1)


def get_peak_growth(monthly: list[MonthlyBucket]) -> Optional[PeakGrowth]:
    """Adjacent pair of months with the largest increase in reviews, if any rose."""
    peak: Optional[PeakGrowth] = None
    for previous, current in zip(monthly, monthly[1:]):
        increase = current["reviews"] - previous["reviews"]
        if increase > 0 and (peak is None or increase > peak["increase"]):
            peak = {
                "from_label": previous["label"],
                "to_label": current["label"],
                "increase": increase,
            }
    return peak


def format_growth_rate(growth_rate: Optional[float]) -> str:
    if growth_rate is None:
        return "데이터 없음"
    if growth_rate > 0:
        return f"+{growth_rate:g}% 증가"
    if growth_rate < 0:
        return f"{growth_rate:g}% 감소"
    return "변화 없음"


def generate_insights(monthly: list[MonthlyBucket]) -> Insights:
    """
    Derive trend statements from a monthly review series (oldest first).

    Growth compares the mean of the first three months with the mean of
    the last three and needs more than a 10% rise. Decline is any drop from
    the previous month to the latest one, independent of growth. The series
    is consistent when no month is empty.
    """
    if len(monthly) < MIN_BUCKETS:
        return {
            "has_growth": False,
            "has_decline": False,
            "is_consistent": False,
            "first_mean": None,
            "second_mean": None,
            "growth_rate": None,
            "min_monthly_reviews": None,
            "peak_growth": None,
            "messages": [
                {
                    "kind": "info",
                    "title": "데이터 부족",
                    "message": "인사이트를 보려면 최소 3개월 이상의 기록이 필요합니다.",
                }
            ],
        }

    reviews = [bucket["reviews"] for bucket in monthly]
    first_mean = _mean(reviews[:3])
    second_mean = _mean(reviews[-3:])

    has_growth = second_mean > first_mean * GROWTH_THRESHOLD
    has_decline = reviews[-1] < reviews[-2]
    is_consistent = all(count > 0 for count in reviews)

    peak_growth = get_peak_growth(monthly)
    min_monthly_reviews = min(reviews)

    messages: list[Insight] = []
    if has_growth:
        message = (
            f"최근 3개월 평균 {round_half_up(second_mean, 1):g}개로 "
            f"이전 3개월 평균 {round_half_up(first_mean, 1):g}개보다 "
            "리뷰 작성이 증가하고 있습니다."
        )
        if peak_growth is not None:
            message += (
                f" 특히 {peak_growth['from_label']}-{peak_growth['to_label']}에 "
                f"{peak_growth['increase']}개로 가장 크게 증가했습니다."
            )
        messages.append({"kind": "growth", "title": "꾸준한 성장세", "message": message})
    if has_decline:
        last = monthly[-1]
        messages.append(
            {
                "kind": "decline",
                "title": f"{last['label']} 소폭 감소",
                "message": (
                    f"{last['label']}에는 {reviews[-2]}개에서 {reviews[-1]}개로 "
                    "감소했습니다. 다음 달 패턴을 지켜볼 필요가 있습니다."
                ),
            }
        )
    if is_consistent:
        messages.append(
            {
                "kind": "consistency",
                "title": "일관성 있는 기록",
                "message": (
                    f"매월 최소 {min_monthly_reviews}개 이상의 리뷰를 꾸준히 작성하고 있어 "
                    "훌륭한 기록 습관을 유지하고 있습니다."
                ),
            }
        )
    if not messages:
        messages.append(
            {
                "kind": "info",
                "title": "변화 없음",
                "message": "최근 기록에서 뚜렷한 변화가 보이지 않습니다.",
            }
        )

    return {
        "has_growth": has_growth,
        "has_decline": has_decline,
        "is_consistent": is_consistent,
        "first_mean": round_half_up(first_mean, 2),
        "second_mean": round_half_up(second_mean, 2),
        "growth_rate": get_growth_rate(monthly),
        "min_monthly_reviews": min_monthly_reviews,
        "peak_growth": peak_growth,
        "messages": messages,
    }
