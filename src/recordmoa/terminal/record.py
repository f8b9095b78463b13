# SPDX-License-Identifier: MIT

from pathlib import Path
from typing import Annotated, Optional

import pendulum
import typer

from recordmoa.error import store_error_message
from recordmoa.model.category import ALL_CATEGORIES
from recordmoa.query.paginate import default_list_query, update_list_query
from recordmoa.repository.configuration import CONFIGURATION_REPO
from recordmoa.repository.id_map import ID_MAP_REPO
from recordmoa.repository.image import ImageStoreError
from recordmoa.repository.record import RECORD_REPO, RecordStoreError
from recordmoa.service import record as record_service
from recordmoa.service.image import upload_record_image
from recordmoa.service.record import RecordValidationError, parse_cast
from recordmoa.service.record_list import build_list_view
from recordmoa.terminal.common import (
    error_console,
    fail,
    load_records_or_fail,
    resolve_record_id,
    resolve_user_id,
)
from recordmoa.terminal.completion import (
    complete_category,
    complete_category_selector,
    complete_date_range,
    complete_sort,
)
from recordmoa.terminal.custom_typer import AliasedTyperGroup
from recordmoa.terminal.parse import parse_date
from recordmoa.terminal.validate import (
    validate_category,
    validate_category_selector,
    validate_date_range,
    validate_positive,
    validate_rating,
    validate_sort,
)
from recordmoa.view.views import record as record_report

app = typer.Typer(cls=AliasedTyperGroup, no_args_is_help=True)

DATE_HELP = "valid inputs: YYYY-MM-DD, today, yesterday, or day offset like -1"

UserOption = Annotated[
    Optional[str],
    typer.Option("--user", "-u", help="user id; defaults to the configured user"),
]


@app.command("add, a", no_args_is_help=True)
def add(
    category: Annotated[
        str,
        typer.Argument(
            help="movie, book or place",
            callback=validate_category,
            autocompletion=complete_category,
        ),
    ],
    title: Annotated[str, typer.Argument()],
    rating: Annotated[
        int,
        typer.Option("--rating", "-r", help="1-5", callback=validate_rating),
    ],
    review: Annotated[str, typer.Option("--review", "-v")] = "",
    image: Annotated[
        Optional[Path],
        typer.Option("--image", "-i", help="image file to attach", exists=True, dir_okay=False),
    ] = None,
    director: Annotated[Optional[str], typer.Option("--director", "-d")] = None,
    cast: Annotated[
        Optional[str], typer.Option("--cast", help="comma separated names")
    ] = None,
    watched: Annotated[
        Optional[pendulum.DateTime],
        typer.Option("--watched", parser=parse_date, help=DATE_HELP),
    ] = None,
    author: Annotated[Optional[str], typer.Option("--author", "-au")] = None,
    publisher: Annotated[Optional[str], typer.Option("--publisher", "-pu")] = None,
    started: Annotated[
        Optional[pendulum.DateTime],
        typer.Option("--started", parser=parse_date, help=DATE_HELP),
    ] = None,
    finished: Annotated[
        Optional[pendulum.DateTime],
        typer.Option("--finished", parser=parse_date, help=DATE_HELP),
    ] = None,
    location: Annotated[Optional[str], typer.Option("--location", "-l")] = None,
    visited: Annotated[
        Optional[pendulum.DateTime],
        typer.Option("--visited", parser=parse_date, help=DATE_HELP),
    ] = None,
    user: UserOption = None,
) -> None:
    """
    Add a review record
    """
    user_id = resolve_user_id(user)

    try:
        new_record = record_service.create_record(
            category=category,
            title=title,
            rating=rating,
            review=review,
            director=director,
            cast=parse_cast(cast),
            date_watched=watched,
            author=author,
            publisher=publisher,
            date_started=started,
            date_finished=finished,
            location=location,
            date_visited=visited,
        )
        if image is not None:
            new_record["image_url"] = upload_record_image(image, user_id, category)
        id = record_service.add_record(user_id, new_record)
    except RecordValidationError as e:
        fail(str(e))
    except RecordStoreError as e:
        fail(store_error_message(e.code))
    except ImageStoreError as e:
        fail(f"이미지 업로드에 실패했습니다. {e}")

    record_report.single_record_view(user_id, RECORD_REPO.get_record(id))


@app.command("modify, m", no_args_is_help=True)
def modify(
    id: str,
    title: Annotated[Optional[str], typer.Option("--title", "-t")] = None,
    rating: Annotated[
        Optional[int],
        typer.Option("--rating", "-r", help="1-5", callback=validate_rating),
    ] = None,
    review: Annotated[Optional[str], typer.Option("--review", "-v")] = None,
    image: Annotated[
        Optional[Path],
        typer.Option("--image", "-i", help="replace the image", exists=True, dir_okay=False),
    ] = None,
    remove_image: Annotated[bool, typer.Option("--remove-image", "-ri")] = False,
    director: Annotated[Optional[str], typer.Option("--director", "-d")] = None,
    cast: Annotated[
        Optional[str], typer.Option("--cast", help="comma separated names")
    ] = None,
    watched: Annotated[
        Optional[pendulum.DateTime],
        typer.Option("--watched", parser=parse_date, help=DATE_HELP),
    ] = None,
    author: Annotated[Optional[str], typer.Option("--author", "-au")] = None,
    publisher: Annotated[Optional[str], typer.Option("--publisher", "-pu")] = None,
    started: Annotated[
        Optional[pendulum.DateTime],
        typer.Option("--started", parser=parse_date, help=DATE_HELP),
    ] = None,
    finished: Annotated[
        Optional[pendulum.DateTime],
        typer.Option("--finished", parser=parse_date, help=DATE_HELP),
    ] = None,
    location: Annotated[Optional[str], typer.Option("--location", "-l")] = None,
    visited: Annotated[
        Optional[pendulum.DateTime],
        typer.Option("--visited", parser=parse_date, help=DATE_HELP),
    ] = None,
    user: UserOption = None,
) -> None:
    """
    Modify a record; its category can't be changed
    """
    user_id = resolve_user_id(user)
    record_id = resolve_record_id(id)

    if image is not None and remove_image:
        fail("--image and --remove-image can't be combined")

    category_fields = {
        "director": director,
        "cast": parse_cast(cast),
        "date_watched": watched,
        "author": author,
        "publisher": publisher,
        "date_started": started,
        "date_finished": finished,
        "location": location,
        "date_visited": visited,
    }

    try:
        existing = record_service.get_owned_record(user_id, record_id)
        # Nothing is uploaded for an edit that would be rejected
        record_service.validate_modification(
            existing, title, rating, **category_fields
        )
        image_url: Optional[str] = None
        if image is not None:
            image_url = upload_record_image(image, user_id, existing["category"])
        record_service.modify_record(
            user_id,
            record_id,
            title=title,
            rating=rating,
            review=review,
            image_url=image_url,
            remove_image=remove_image,
            **category_fields,
        )
    except RecordValidationError as e:
        fail(str(e))
    except RecordStoreError as e:
        fail(store_error_message(e.code))
    except ImageStoreError as e:
        fail(f"이미지 업로드에 실패했습니다. {e}")

    record_report.single_record_view(user_id, RECORD_REPO.get_record(record_id))


@app.command("delete, d", no_args_is_help=True)
def delete(id: str, user: UserOption = None) -> None:
    """
    Delete a record and queue its image for cleanup
    """
    user_id = resolve_user_id(user)
    record_id = resolve_record_id(id)

    try:
        image_error = record_service.delete_record(user_id, record_id)
    except RecordStoreError as e:
        fail(store_error_message(e.code))

    if image_error is not None:
        error_console.print(f"[yellow]Image was not queued for deletion: {image_error}[/yellow]")
    typer.echo(f"Deleted record {record_id} for {user_id}")


@app.command("show, s", no_args_is_help=True)
def show(id: str, user: UserOption = None) -> None:
    """
    Show a single record
    """
    user_id = resolve_user_id(user)
    record_id = resolve_record_id(id)

    try:
        record = record_service.get_owned_record(user_id, record_id)
    except RecordStoreError as e:
        fail(store_error_message(e.code))

    record_report.single_record_view(user_id, record)


@app.command("list, l")
def list_records(
    category: Annotated[
        str,
        typer.Option(
            "--category",
            "-c",
            help="all, movie, book or place",
            callback=validate_category_selector,
            autocompletion=complete_category_selector,
        ),
    ] = ALL_CATEGORIES,
    date_range: Annotated[
        str,
        typer.Option(
            "--range",
            "-dr",
            help="all, 1m, 3m, 6m or 1y",
            callback=validate_date_range,
            autocompletion=complete_date_range,
        ),
    ] = "all",
    search: Annotated[
        str,
        typer.Option(
            "--search",
            "-s",
            help="matches title, review and category fields, ignoring case",
        ),
    ] = "",
    sort: Annotated[
        Optional[str],
        typer.Option(
            "--sort",
            "-o",
            help="newest, oldest, rating-high, rating-low, title-asc or title-desc",
            callback=validate_sort,
            autocompletion=complete_sort,
        ),
    ] = None,
    page: Annotated[
        int, typer.Option("--page", "-p", callback=validate_positive)
    ] = 1,
    page_size: Annotated[
        Optional[int],
        typer.Option("--page-size", "-ps", callback=validate_positive),
    ] = None,
    no_wrap: Annotated[
        bool,
        typer.Option("--no-wrap", help="Disable text wrapping in table columns"),
    ] = False,
    user: UserOption = None,
) -> None:
    """
    List records with filters, sorting and paging
    """
    config = CONFIGURATION_REPO.get_config()
    user_id = resolve_user_id(user)

    query = update_list_query(
        default_list_query(),
        category=category,
        date_range=date_range,
        search=search,
        sort=sort if sort is not None else config["default_sort"],
    )
    query = update_list_query(query, page=page)

    records = load_records_or_fail(
        user_id, None if category == ALL_CATEGORIES else category
    )
    list_view = build_list_view(
        records,
        query,
        page_size=page_size if page_size is not None else config["page_size"],
    )

    ID_MAP_REPO.clear_ids()
    record_report.records_view(user_id, list_view, no_wrap=no_wrap)
