# SPDX-License-Identifier: MIT

from typing import Annotated, Optional

import typer

from recordmoa.service.insight import generate_insights
from recordmoa.service.stats import aggregate
from recordmoa.terminal.common import load_records_or_fail, resolve_user_id
from recordmoa.terminal.custom_typer import AliasedTyperGroup
from recordmoa.view.views import stats as stats_report

app = typer.Typer(cls=AliasedTyperGroup)

UserOption = Annotated[
    Optional[str],
    typer.Option("--user", "-u", help="user id; defaults to the configured user"),
]


@app.callback(invoke_without_command=True)
def summary(ctx: typer.Context, user: UserOption = None) -> None:
    """
    Summary statistics over every record of a user
    """
    if ctx.invoked_subcommand is not None:
        return

    user_id = resolve_user_id(user)
    records = load_records_or_fail(user_id)
    stats_report.stats_view(user_id, aggregate(records))


@app.command("detail, d")
def detail(user: UserOption = None) -> None:
    """
    Monthly trend and insights
    """
    user_id = resolve_user_id(user)
    records = load_records_or_fail(user_id)
    snapshot = aggregate(records)
    stats_report.stats_detail_view(
        user_id, snapshot, generate_insights(snapshot["monthly"])
    )
