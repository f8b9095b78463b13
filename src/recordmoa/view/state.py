# SPDX-License-Identifier: MIT

"""Per-invocation rendering switches."""

from contextvars import ContextVar

# Header above record and stats views; on unless --no-header or config says otherwise
_show_header_var: ContextVar[bool] = ContextVar("show_header", default=True)


def set_show_header(value: bool) -> None:
    _show_header_var.set(value)


def get_show_header() -> bool:
    return _show_header_var.get()
