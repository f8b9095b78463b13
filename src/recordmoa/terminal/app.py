# SPDX-License-Identifier: MIT

from typing import Annotated

import typer

from recordmoa.terminal import configuration, image, record, stats
from recordmoa.terminal.custom_typer import OrderedAliasedTyperGroup
from recordmoa.view import state as view_state

app = typer.Typer(
    cls=OrderedAliasedTyperGroup,
    help="RecordMoa - movie, book and place reviews in the CLI",
    no_args_is_help=True,
)
app.add_typer(record.app, name="record, r")
app.add_typer(stats.app, name="stats, s")
app.add_typer(image.app, name="image, i")
app.add_typer(configuration.app, name="config, c")


@app.callback()
def main_callback(
    no_header: Annotated[
        bool,
        typer.Option(
            "--no-header",
            "-nh",
            help="Suppress header output in reports",
        ),
    ] = False,
) -> None:
    """
    RecordMoa - movie, book and place reviews in the CLI

    Global options that apply to all commands.
    """
    if no_header:
        view_state.set_show_header(False)


def run() -> None:
    app()
