# SPDX-License-Identifier: MIT

import logging

from rich.console import Console
from rich.logging import RichHandler

from gantry.configuration import LogLevel

ROOT_LOGGER_NAME = "gantry"


def configure_logging(level: LogLevel = "WARNING", verbose: bool = False) -> None:
    """
    Attach a rich handler to the package logger.

    Diagnostics go to stderr so they never interleave with chart output.
    Calling this more than once only adjusts the level.

    Args:
        level: Level taken from the configuration file
        verbose: Force DEBUG regardless of the configured level
    """
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(logging.DEBUG if verbose else level)

    if not any(isinstance(handler, RichHandler) for handler in logger.handlers):
        handler = RichHandler(
            console=Console(stderr=True),
            show_path=False,
            markup=False,
        )
        handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
        logger.addHandler(handler)
    logger.propagate = False
