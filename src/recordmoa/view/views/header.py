# SPDX-License-Identifier: MIT

from typing import Optional

from rich import print
from rich.padding import Padding

from recordmoa.view.state import get_show_header


def header(user_id: str, sub_header: Optional[str] = None) -> None:
    """Print the application header with the acting user.

    Args:
        user_id: The user whose records are shown
        sub_header: Optional sub-header text to display
    """
    # Check if headers should be shown
    if not get_show_header():
        return

    additional = ""
    if sub_header is not None:
        additional = f"[sandy_brown]{sub_header}[/sandy_brown]"
    user = f"[plum1]{user_id}[/plum1]"

    print(Padding("[dark_orange]recordmoa[/dark_orange]", (1, 0, 0, 1)))
    print(Padding(additional, (0, 1)))
    print(Padding(user, (0, 1)))
