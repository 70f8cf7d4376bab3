# SPDX-License-Identifier: MIT

from gantry.cleanup import register_cleanup
from gantry.initialize import initialize
from gantry.terminal.app import run


def main() -> None:
    initialize()
    register_cleanup()
    run()


if __name__ == "__main__":
    main()
