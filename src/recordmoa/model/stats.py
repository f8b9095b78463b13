# SPDX-License-Identifier: MIT

from typing import Literal, Optional, TypedDict

from recordmoa.model.record import Record

type InsightKind = Literal["growth", "decline", "consistency", "info"]


class CategoryStat(TypedDict):
    category: str
    count: int
    percentage: int
    avg_rating: float


class MonthlyBucket(TypedDict):
    key: str  # YYYY-MM
    label: str  # month number only
    reviews: int
    avg_rating: float


class StatsSnapshot(TypedDict):
    total_count: int
    avg_rating: float
    category_distribution: list[CategoryStat]
    top_category: str
    last_review: Optional[Record]
    days_since_last_review: Optional[int]
    last_review_label: str
    highest_rated: Optional[Record]
    lowest_rated: Optional[Record]
    monthly: list[MonthlyBucket]
    monthly_total: int
    monthly_average: float


class Insight(TypedDict):
    kind: InsightKind
    title: str
    message: str


class PeakGrowth(TypedDict):
    from_label: str
    to_label: str
    increase: int


class Insights(TypedDict):
    has_growth: bool
    has_decline: bool
    is_consistent: bool
    first_mean: Optional[float]
    second_mean: Optional[float]
    growth_rate: Optional[float]  # None when the previous month had no reviews
    min_monthly_reviews: Optional[int]
    peak_growth: Optional[PeakGrowth]
    messages: list[Insight]
