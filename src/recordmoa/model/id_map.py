# SPDX-License-Identifier: MIT

from typing import TypedDict


class IdMap(TypedDict):
    """
    Short numeric ids handed out for records shown in the terminal.

    synthetic_to_real[7] is the record id that was displayed as 7, and
    real_to_synthetic is the reverse lookup.
    """

    synthetic_to_real: dict[int, str]
    real_to_synthetic: dict[str, int]


def get_id_map_template() -> IdMap:
    return {"synthetic_to_real": {}, "real_to_synthetic": {}}
