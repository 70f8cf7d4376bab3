# SPDX-License-Identifier: MIT

from typing import TypedDict

import pendulum

from gantry.model.entity_id import EntityId
from gantry.model.task import TaskStatus


class ChartWindow(TypedDict):
    start: pendulum.Date
    end: pendulum.Date
    total_days: int


class DayColumn(TypedDict):
    date: pendulum.Date
    x: float
    day_label: str
    weekday_label: str
    is_weekend: bool


class MonthGroup(TypedDict):
    label: str
    days: int
    x: float
    width: float


class BarGeometry(TypedDict):
    left: float
    width: float


class BarRow(TypedDict):
    """
    One task's placement for a single layout pass.

    `row_index` is assigned once per pass and is the only vertical
    coordinate consumers may use; `left`/`width` already include any
    live-preview adjustment, while `stored_*` keep the committed geometry.
    """

    task_id: EntityId
    name: str
    row_index: int
    top: float
    center_y: float
    height: float
    left: float
    width: float
    stored_left: float
    stored_width: float
    progress: int
    status: TaskStatus
    dependencies: list[EntityId]
    in_preview: bool
    show_label: bool


class TimelineLayout(TypedDict):
    window: ChartWindow
    pixels_per_day: int
    row_height: int
    columns: list[DayColumn]
    month_groups: list[MonthGroup]
    rows: list[BarRow]
    width: float
    height: float
