# SPDX-License-Identifier: MIT

from typing import cast

from rich import box
from rich.console import Console
from rich.padding import Padding
from rich.table import Table

from recordmoa.model.category import Category, category_label
from recordmoa.model.list_query import RecordListView
from recordmoa.model.record import Record, RecordId
from recordmoa.repository.id_map import ID_MAP_REPO
from recordmoa.time import (
    datetime_to_display_local_date_str_optional,
    datetime_to_display_local_datetime_str_optional,
)
from recordmoa.view.util import (
    format_cast,
    format_category,
    format_markers,
    format_rating,
    preview,
)
from recordmoa.view.views.header import header

EMPTY_MESSAGE = "아직 기록이 없습니다. 첫 기록을 남겨보세요."
NO_MATCHES_MESSAGE = "조건에 맞는 기록이 없습니다."


def records_view(
    user_id: str,
    list_view: RecordListView,
    columns: list[str] = ["id", "category", "title", "rating", "created_at", "review"],
    no_wrap: bool = False,
) -> None:
    query = list_view["query"]
    header(user_id, f"records: {category_label(query['category'])}")

    console = Console()

    if list_view["state"] == "empty":
        console.print(Padding(f"[yellow]{EMPTY_MESSAGE}[/yellow]", (1, 1)))
        return

    summary = f"{list_view['result_count']}개의 결과"
    if query["search"].strip() != "":
        summary += f" / {list_view['date_filtered_count']}개 중 '{query['search'].strip()}' 검색"
    console.print(Padding(f"[bright_black]{summary}[/bright_black]", (0, 1)))

    if list_view["state"] == "no_matches":
        console.print(Padding(f"[yellow]{NO_MATCHES_MESSAGE}[/yellow]", (1, 1)))
        return

    records_table = Table(box=box.SIMPLE)
    for column in columns:
        if no_wrap and column not in ("id", "rating"):
            records_table.add_column(column, no_wrap=True, overflow="ellipsis")
        else:
            records_table.add_column(column)

    for record in list_view["page_records"]:
        row = []
        for column in columns:
            column_value = ""
            if column == "id":
                column_value = str(
                    ID_MAP_REPO.associate_id(cast(RecordId, record["id"]))
                )
            elif column == "category":
                column_value = format_category(record["category"])
            elif column == "rating":
                column_value = f"[yellow]{format_rating(record['rating'])}[/yellow]"
            elif column in ("created_at", "updated_at"):
                column_value = (
                    datetime_to_display_local_date_str_optional(record[column])  # type: ignore[literal-required]
                    or ""
                )
            elif column == "review":
                column_value = preview(record["review"])
            elif column == "cast":
                column_value = format_cast(record["cast"])
            elif record.get(column) is not None:
                column_value = str(record[column])  # type: ignore[literal-required]
            row.append(column_value)
        records_table.add_row(*row)

    console.print(records_table)

    if list_view["total_pages"] > 1:
        console.print(
            Padding(
                format_markers(list_view["page_markers"], list_view["page"]),
                (0, 1),
            )
        )


def single_record_view(user_id: str, record: Record) -> None:
    header(user_id, "record")

    record_table = Table(box=box.SIMPLE)
    record_table.add_column("property")
    record_table.add_column("value")

    record_table.add_row(
        "id",
        str(ID_MAP_REPO.associate_id(cast(RecordId, record["id"]))),
    )
    record_table.add_row("record_id", record["id"] or "")
    record_table.add_row("category", format_category(record["category"]))
    record_table.add_row("title", record["title"])
    record_table.add_row("rating", f"[yellow]{format_rating(record['rating'])}[/yellow]")

    if record["category"] == Category.MOVIE:
        record_table.add_row("director", record["director"] or "")
        record_table.add_row("cast", format_cast(record["cast"]))
        record_table.add_row(
            "date_watched",
            datetime_to_display_local_date_str_optional(record["date_watched"]) or "",
        )
    elif record["category"] == Category.BOOK:
        record_table.add_row("author", record["author"] or "")
        record_table.add_row("publisher", record["publisher"] or "")
        record_table.add_row(
            "date_started",
            datetime_to_display_local_date_str_optional(record["date_started"]) or "",
        )
        record_table.add_row(
            "date_finished",
            datetime_to_display_local_date_str_optional(record["date_finished"]) or "",
        )
    elif record["category"] == Category.PLACE:
        record_table.add_row("location", record["location"] or "")
        record_table.add_row(
            "date_visited",
            datetime_to_display_local_date_str_optional(record["date_visited"]) or "",
        )

    record_table.add_row("review", record["review"])
    record_table.add_row("image", record["image_url"] or "")
    record_table.add_row(
        "created_at",
        datetime_to_display_local_datetime_str_optional(record["created_at"]) or "",
    )
    record_table.add_row(
        "updated_at",
        datetime_to_display_local_datetime_str_optional(record["updated_at"]) or "",
    )

    console = Console()
    console.print(record_table)
