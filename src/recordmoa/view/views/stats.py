# SPDX-License-Identifier: MIT

from typing import Optional

from rich import box
from rich.console import Console, Group
from rich.panel import Panel
from rich.table import Table

from recordmoa.model.record import Record
from recordmoa.model.stats import Insights, MonthlyBucket, StatsSnapshot
from recordmoa.service.insight import format_growth_rate
from recordmoa.view.util import format_category, format_rating
from recordmoa.view.views.header import header

INSIGHT_COLORS = {
    "growth": "green",
    "decline": "yellow",
    "consistency": "blue",
    "info": "bright_black",
}

BAR_WIDTH = 30


def _record_line(record: Optional[Record]) -> str:
    if record is None:
        return "-"
    return (
        f"{record['title']} ({format_category(record['category'])}) "
        f"[yellow]{format_rating(record['rating'])}[/yellow]"
    )


def monthly_table(monthly: list[MonthlyBucket]) -> Table:
    table = Table(box=box.SIMPLE)
    table.add_column("month")
    table.add_column("reviews", justify="right")
    table.add_column("avg rating", justify="right")
    table.add_column("")

    peak = max((bucket["reviews"] for bucket in monthly), default=0)
    for bucket in monthly:
        width = 0
        if peak > 0:
            width = round(bucket["reviews"] / peak * BAR_WIDTH)
        table.add_row(
            bucket["label"],
            str(bucket["reviews"]),
            f"{bucket['avg_rating']:.1f}",
            f"[green]{'█' * width}[/green]",
        )
    return table


def stats_view(user_id: str, snapshot: StatsSnapshot) -> None:
    header(user_id, "stats")
    console = Console()

    summary_table = Table(box=box.SIMPLE, show_header=False)
    summary_table.add_column("property")
    summary_table.add_column("value")
    summary_table.add_row("전체 리뷰", str(snapshot["total_count"]))
    summary_table.add_row("평균 별점", f"{snapshot['avg_rating']:.1f}")
    summary_table.add_row("인기 카테고리", format_category(snapshot["top_category"]))
    summary_table.add_row("최근 리뷰", snapshot["last_review_label"])
    summary_table.add_row("최고 평점", _record_line(snapshot["highest_rated"]))
    summary_table.add_row("최저 평점", _record_line(snapshot["lowest_rated"]))
    console.print(Panel(summary_table, title="요약", title_align="left"))

    category_table = Table(box=box.SIMPLE)
    category_table.add_column("category")
    category_table.add_column("count", justify="right")
    category_table.add_column("share", justify="right")
    category_table.add_column("avg rating", justify="right")
    for category_stat in snapshot["category_distribution"]:
        category_table.add_row(
            format_category(category_stat["category"]),
            str(category_stat["count"]),
            f"{category_stat['percentage']}%",
            f"{category_stat['avg_rating']:.1f}",
        )
    console.print(Panel(category_table, title="카테고리별 비율", title_align="left"))

    console.print(
        Panel(
            monthly_table(snapshot["monthly"]),
            title="월별 리뷰 변화",
            title_align="left",
        )
    )


def stats_detail_view(
    user_id: str, snapshot: StatsSnapshot, insights: Insights
) -> None:
    header(user_id, "stats detail")
    console = Console()

    growth = format_growth_rate(insights["growth_rate"])
    growth_color = "green" if (insights["growth_rate"] or 0) >= 0 else "yellow"
    console.print(
        Panel(
            Group(
                monthly_table(snapshot["monthly"]),
                f"지난달 대비 [{growth_color}]{growth}[/{growth_color}]",
            ),
            title="월별 리뷰 변화 상세",
            title_align="left",
        )
    )

    panels = []
    for insight in insights["messages"]:
        color = INSIGHT_COLORS.get(insight["kind"], "white")
        panels.append(
            Panel(
                insight["message"],
                title=f"[{color}]{insight['title']}[/{color}]",
                title_align="left",
                border_style=color,
            )
        )

    averages_table = Table(box=box.SIMPLE, show_header=False)
    averages_table.add_column("property")
    averages_table.add_column("value")
    averages_table.add_row("월평균 리뷰", f"{snapshot['monthly_average']:.1f}")
    averages_table.add_row("총 리뷰 수", str(snapshot["monthly_total"]))
    panels.append(averages_table)

    console.print(Panel(Group(*panels), title="인사이트", title_align="left"))
