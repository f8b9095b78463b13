# SPDX-License-Identifier: MIT

from typing import Annotated

import typer
from rich import box
from rich.console import Console
from rich.table import Table

from recordmoa.repository.image import IMAGE_REPO
from recordmoa.terminal.custom_typer import AliasedTyperGroup
from recordmoa.terminal.validate import validate_positive
from recordmoa.time import datetime_to_display_local_datetime_str_optional

app = typer.Typer(cls=AliasedTyperGroup, no_args_is_help=True)


@app.command("pending, p")
def pending() -> None:
    """
    List images queued for deletion
    """
    table = Table(box=box.SIMPLE)
    table.add_column("public_id")
    table.add_column("status")
    table.add_column("queued")
    table.add_column("error")

    for deletion in IMAGE_REPO.get_pending_deletions():
        color = {"pending": "yellow", "deleted": "green", "failed": "red"}.get(
            deletion["status"], "white"
        )
        table.add_row(
            deletion["public_id"],
            f"[{color}]{deletion['status']}[/{color}]",
            datetime_to_display_local_datetime_str_optional(deletion["created_at"])
            or "",
            deletion["error"] or "",
        )

    Console().print(table)


@app.command("cleanup, c")
def cleanup(
    prune_days: Annotated[
        int,
        typer.Option(
            "--prune-days",
            help="drop finished deletions older than this many days",
            callback=validate_positive,
        ),
    ] = 30,
) -> None:
    """
    Delete queued images and prune old finished entries
    """
    result = IMAGE_REPO.cleanup_pending()
    pruned = IMAGE_REPO.prune_deleted(prune_days)

    console = Console()
    console.print(f"[green]Deleted {result['deleted']} image(s)[/green]")
    if result["failed"] > 0:
        console.print(f"[red]Failed to delete {result['failed']} image(s)[/red]")
    if pruned > 0:
        console.print(f"Pruned {pruned} finished entr{'y' if pruned == 1 else 'ies'}")
