# SPDX-License-Identifier: MIT

from typing import Optional, get_args

import typer

from gantry.configuration import Density, LogLevel


def validate_progress(progress: Optional[int]) -> Optional[int]:
    if progress is None:
        return None
    if not (0 <= progress <= 100):
        raise typer.BadParameter("Progress must be between 0 and 100 (inclusive)")
    return progress


def validate_density(density: Optional[str]) -> Optional[str]:
    if density is None:
        return None
    if density not in get_args(Density):
        raise typer.BadParameter(
            f"Density must be one of: {', '.join(get_args(Density))}"
        )
    return density


def validate_log_level(level: Optional[str]) -> Optional[str]:
    if level is None:
        return None
    level = level.upper()
    if level not in get_args(LogLevel):
        raise typer.BadParameter(
            f"Log level must be one of: {', '.join(get_args(LogLevel))}"
        )
    return level
