# SPDX-License-Identifier: MIT

import logging

from rich.console import Console
from rich.logging import RichHandler

from recordmoa.configuration import APP_NAME, DEFAULT_LOG_LEVEL

LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


def parse_level(raw: str) -> int:
    """Convert a level name string to a logging constant, defaulting to WARNING."""
    numeric = getattr(logging, raw.upper(), None)
    if isinstance(numeric, int):
        return numeric
    return logging.WARNING


def setup_logging(level: str = DEFAULT_LOG_LEVEL) -> None:
    """
    Send the application's log records to stderr through rich.

    Call once at start-up. Output on stdout stays reserved for tables.
    """
    logger = logging.getLogger(APP_NAME)
    logger.setLevel(parse_level(level))

    if not any(isinstance(handler, RichHandler) for handler in logger.handlers):
        handler = RichHandler(
            console=Console(stderr=True),
            show_path=False,
            rich_tracebacks=True,
        )
        handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
        logger.addHandler(handler)
    logger.propagate = False
