# SPDX-License-Identifier: MIT

import logging
from typing import Optional, cast

import pendulum

logger = logging.getLogger(__name__)


def now_utc() -> pendulum.DateTime:
    return pendulum.now("UTC")


def now_local() -> pendulum.DateTime:
    return pendulum.now("local")


def datetime_to_iso_str(datetime: pendulum.DateTime) -> str:
    return datetime.isoformat()


def datetime_to_iso_str_optional(
    datetime: Optional[pendulum.DateTime],
) -> Optional[str]:
    if datetime is None:
        return None
    return datetime_to_iso_str(datetime)



def datetime_from_str_optional(datetime: Optional[str]) -> Optional[pendulum.DateTime]:
    """
    Convert a stored timestamp into a UTC pendulum.DateTime.

    This is the single conversion point from the store's representation.
    Missing or unparseable values become None so that downstream code only
    has to handle "timestamp or nothing".
    """
    if datetime is None or datetime == "":
        return None
    try:
        parsed = pendulum.parse(str(datetime))
    except ValueError:
        logger.warning("Ignoring malformed timestamp %r", datetime)
        return None
    if not isinstance(parsed, pendulum.DateTime):
        if isinstance(parsed, pendulum.Date):
            return pendulum.datetime(parsed.year, parsed.month, parsed.day, tz="UTC")
        logger.warning("Ignoring non-datetime timestamp %r", datetime)
        return None
    return parsed.in_tz("UTC")


def datetime_from_local_date_str(date_str: str) -> pendulum.DateTime:
    """Parse a local date string in 'YYYY-MM-DD' format to a pendulum.DateTime at midnight local time."""
    return cast(pendulum.DateTime, pendulum.parse(date_str, tz="local")).in_tz("UTC")


def to_local_date(datetime: pendulum.DateTime) -> pendulum.Date:
    return datetime.in_tz("local").date()


def to_epoch_millis(datetime: Optional[pendulum.DateTime]) -> int:
    """Epoch milliseconds, with a missing timestamp counted as the epoch itself."""
    if datetime is None:
        return 0
    return int(datetime.timestamp() * 1000)


def calendar_days_between(
    earlier: pendulum.DateTime, later: pendulum.DateTime
) -> int:
    """Number of calendar days (local time) from earlier to later."""
    return (to_local_date(later) - to_local_date(earlier)).days


def month_key(datetime: pendulum.DateTime) -> str:
    return datetime.in_tz("local").format("YYYY-MM")


def datetime_to_display_local_date_str(datetime: pendulum.DateTime) -> str:
    return datetime.in_tz("local").format("YYYY.MM.DD")


def datetime_to_display_local_date_str_optional(
    datetime: Optional[pendulum.DateTime],
) -> Optional[str]:
    if datetime is None:
        return None
    return datetime_to_display_local_date_str(datetime)


def datetime_to_display_local_datetime_str(datetime: pendulum.DateTime) -> str:
    return datetime.in_tz("local").format("YYYY.MM.DD HH:mm")


def datetime_to_display_local_datetime_str_optional(
    datetime: Optional[pendulum.DateTime],
) -> Optional[str]:
    if datetime is None:
        return None
    return datetime_to_display_local_datetime_str(datetime)
