# SPDX-License-Identifier: MIT

from recordmoa.cleanup import register_cleanup
from recordmoa.initialize import initialize
from recordmoa.terminal.app import run


def main() -> None:
    initialize()
    register_cleanup()
    run()


if __name__ == "__main__":
    main()
