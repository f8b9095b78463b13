# SPDX-License-Identifier: MIT

from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.table import Table

from recordmoa import configuration
from recordmoa.log_config import LEVELS
from recordmoa.repository.configuration import CONFIGURATION_REPO
from recordmoa.terminal.completion import complete_sort
from recordmoa.terminal.custom_typer import AliasedTyperGroup
from recordmoa.terminal.validate import validate_positive, validate_sort

app = typer.Typer(cls=AliasedTyperGroup, no_args_is_help=True)


def _config_table(title: Optional[str] = None) -> Table:
    config = CONFIGURATION_REPO.get_config()

    table = Table(title=title)
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="magenta")

    table.add_row("user_id", config["user_id"])
    table.add_row("data_path", str(configuration.DATA_PATH))
    table.add_row("page_size", str(config["page_size"]))
    table.add_row("default_sort", config["default_sort"])
    table.add_row(
        "show_header",
        "✓ Enabled" if config["show_header"] else "✗ Disabled",
    )
    table.add_row(
        "log_level", config.get("log_level", configuration.DEFAULT_LOG_LEVEL)
    )
    return table


def validate_log_level(level: Optional[str]) -> Optional[str]:
    if level is None:
        return None
    if level.upper() not in LEVELS:
        raise typer.BadParameter(f"valid inputs: {', '.join(LEVELS)}")
    return level.upper()


@app.command("show, view, v")
def show() -> None:
    """Display current configuration settings."""
    Console().print(_config_table())


@app.command("set, s")
def set(
    user_id: Annotated[
        Optional[str],
        typer.Option("--user-id", help="user whose records commands act on"),
    ] = None,
    data_path: Annotated[
        Optional[str],
        typer.Option(
            "--data-path",
            help="Directory path for storing records and images",
        ),
    ] = None,
    remove_data_path: Annotated[
        bool,
        typer.Option(
            "--remove-data-path",
            help="Reset data path to the platform default",
        ),
    ] = False,
    page_size: Annotated[
        Optional[int],
        typer.Option(
            "--page-size",
            help="records per page in record lists",
            callback=validate_positive,
        ),
    ] = None,
    default_sort: Annotated[
        Optional[str],
        typer.Option(
            "--default-sort",
            help="sort used when record list gets no --sort",
            callback=validate_sort,
            autocompletion=complete_sort,
        ),
    ] = None,
    show_header: Annotated[
        Optional[bool],
        typer.Option(
            "--show-header/--no-show-header",
            help="Enable/disable headers in reports",
        ),
    ] = None,
    log_level: Annotated[
        Optional[str],
        typer.Option(
            "--log-level",
            help="DEBUG, INFO, WARNING or ERROR",
            callback=validate_log_level,
        ),
    ] = None,
) -> None:
    """
    Update configuration settings.
    """
    CONFIGURATION_REPO.update_config(
        user_id=user_id,
        data_path=data_path,
        remove_data_path=remove_data_path,
        page_size=page_size,
        default_sort=default_sort,
        show_header=show_header,
        log_level=log_level,
    )

    console = Console()
    console.print("[green]Configuration updated successfully![/green]\n")
    console.print(_config_table("Updated Configuration"))
