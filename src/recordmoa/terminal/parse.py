# SPDX-License-Identifier: MIT

import re
from typing import Optional

import pendulum
import typer

from recordmoa.time import datetime_from_local_date_str


def parse_date(date_param: Optional[str | int]) -> Optional[pendulum.DateTime]:
    """
    Parse a calendar date given on the command line.

    Accepts YYYY-MM-DD, today, yesterday, or a day offset like -3.
    """
    if date_param is None:
        return None

    date = str(date_param).strip()

    if re.match(r"^\d{4}-\d{2}-\d{2}$", date):
        try:
            return datetime_from_local_date_str(date)
        except ValueError as e:
            raise typer.BadParameter(f"Invalid date '{date}': {e}")

    # Match numeric input for relative days (e.g., "1", "-1", "365")
    if re.match(r"^-?\d+$", date):
        days_offset = int(date)
        pendulum_date_time = pendulum.today("local").add(days=days_offset)
        return pendulum_date_time.in_tz("UTC")

    if date == "today" or date == "t":
        return pendulum.today("local").in_tz("UTC")
    if date == "yesterday" or date == "y":
        return pendulum.yesterday("local").in_tz("UTC")
    raise typer.BadParameter("Incorrect date format")


def parse_record_ref(record_param: str) -> tuple[Optional[int], Optional[str]]:
    """
    Split a record reference into a synthetic id or a full record id.

    Short numbers are the ids shown by the last listing; anything else is
    taken as a record id.
    """
    record_ref = record_param.strip()
    if record_ref == "":
        raise typer.BadParameter("Record id must not be empty")
    if re.match(r"^\d+$", record_ref):
        return int(record_ref), None
    return None, record_ref
