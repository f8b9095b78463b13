# SPDX-License-Identifier: MIT

from typing import NoReturn, Optional

import typer
from rich.console import Console

from recordmoa.error import store_error_message
from recordmoa.model.record import Record, RecordId
from recordmoa.repository.configuration import CONFIGURATION_REPO
from recordmoa.repository.id_map import ID_MAP_REPO
from recordmoa.service.record_loader import RecordLoader
from recordmoa.terminal.parse import parse_record_ref

error_console = Console(stderr=True)

RECORD_LOADER = RecordLoader()


def fail(message: str) -> NoReturn:
    error_console.print(f"[red]Error: {message}[/red]")
    raise typer.Exit(1)


def resolve_user_id(user_id: Optional[str]) -> str:
    """The user given on the command line, or the configured one."""
    if user_id is not None:
        return user_id
    return CONFIGURATION_REPO.get_config()["user_id"]


def resolve_record_id(record_param: str) -> RecordId:
    synthetic_id, record_id = parse_record_ref(record_param)
    if synthetic_id is not None:
        try:
            return ID_MAP_REPO.get_real_id(synthetic_id)
        except KeyError:
            fail(f"No record is shown as {synthetic_id}; list records first")
    return record_id  # type: ignore[return-value]


def load_records_or_fail(user_id: str, category: Optional[str] = None) -> list[Record]:
    """
    Fetch the user's records, ending the command when the store fails.

    A failed fetch shows no partial results.
    """
    result = RECORD_LOADER.load(user_id, category)
    accepted = RECORD_LOADER.accept(result)
    if accepted is None:
        fail(store_error_message("aborted"))
    if accepted["error"] is not None or accepted["data"] is None:
        fail(accepted["error"] or store_error_message("default"))
    return accepted["data"]
