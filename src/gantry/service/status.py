# SPDX-License-Identifier: MIT

from typing import TypedDict

from gantry.model.task import TaskStatus
from gantry.time import round_half_up

PROGRESS_STEP = 5


class StatusStyle(TypedDict):
    base: str
    fill: str
    text: str
    svg_fill: str
    svg_stroke: str
    svg_progress: str


STATUS_STYLES: dict[TaskStatus, StatusStyle] = {
    "TODO": {
        "base": "grey70 on grey23",
        "fill": "on grey50",
        "text": "grey85",
        "svg_fill": "#f1f5f9",
        "svg_stroke": "#cbd5e1",
        "svg_progress": "#64748b",
    },
    "IN_PROGRESS": {
        "base": "light_sky_blue1 on dodger_blue3",
        "fill": "on blue",
        "text": "bold white",
        "svg_fill": "#dbeafe",
        "svg_stroke": "#93c5fd",
        "svg_progress": "#2563eb",
    },
    "REVIEW": {
        "base": "plum1 on purple4",
        "fill": "on purple",
        "text": "bold plum1",
        "svg_fill": "#f3e8ff",
        "svg_stroke": "#d8b4fe",
        "svg_progress": "#9333ea",
    },
    "DONE": {
        "base": "pale_green1 on dark_green",
        "fill": "on green4",
        "text": "bold pale_green1",
        "svg_fill": "#d1fae5",
        "svg_stroke": "#6ee7b7",
        "svg_progress": "#059669",
    },
}


def clamp_progress(progress: int) -> int:
    return max(0, min(100, progress))


def snap_progress(raw_progress: float) -> int:
    """Snap a raw percentage to the nearest multiple of 5 within [0, 100]."""
    snapped = round_half_up(raw_progress / PROGRESS_STEP) * PROGRESS_STEP
    return clamp_progress(snapped)


def resolve_status(prev_status: TaskStatus, new_progress: int) -> TaskStatus:
    """
    Derive a task's status from a new progress value.

    A task sitting in REVIEW stays there for any partial progress value;
    only reaching 0 or 100 moves it out.

    Args:
        prev_status: The status the task had before the progress change
        new_progress: The new, already snapped, progress value

    Returns:
        The status the task should carry alongside new_progress
    """
    if new_progress >= 100:
        return "DONE"
    if new_progress <= 0:
        return "TODO"
    if prev_status == "REVIEW":
        return "REVIEW"
    return "IN_PROGRESS"


def style_for(status: TaskStatus) -> StatusStyle:
    return STATUS_STYLES[status]
