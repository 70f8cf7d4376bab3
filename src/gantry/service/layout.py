# SPDX-License-Identifier: MIT

import logging
from typing import Optional

import pendulum

from gantry.configuration import Density
from gantry.model.drag_state import DragPreview
from gantry.model.geometry import (
    BarGeometry,
    BarRow,
    ChartWindow,
    DayColumn,
    MonthGroup,
    TimelineLayout,
)
from gantry.model.task import Task
from gantry.service.coordinate import DateCoordinateMapper, pixels_per_day_for
from gantry.time import add_days, days_between, month_label

logger = logging.getLogger(__name__)

LEADING_PADDING_DAYS = 3
TRAILING_PADDING_DAYS = 14
LABEL_MIN_WIDTH_PX = 40


def chart_window(
    project_start: pendulum.Date, project_end: pendulum.Date
) -> ChartWindow:
    """
    Compute the padded date range rendered for a project.

    The window opens a few days before the project's nominal start and runs
    two weeks past its end so tasks that slip outside the nominal bounds stay
    visible.

    Args:
        project_start: Nominal project start date
        project_end: Nominal project end date

    Returns:
        The window's first date, its nominal end date, and the number of day
        columns to render
    """
    start = add_days(project_start, -LEADING_PADDING_DAYS)
    end = add_days(project_end, TRAILING_PADDING_DAYS)
    project_duration = max(days_between(project_start, project_end), 1)
    total_days = max(days_between(start, end), project_duration + TRAILING_PADDING_DAYS)
    return {"start": start, "end": end, "total_days": total_days}


def timeline_dates(start: pendulum.Date, total_days: int) -> list[pendulum.Date]:
    return [add_days(start, offset) for offset in range(total_days)]


def month_groups(
    dates: list[pendulum.Date], pixels_per_day: int = 1
) -> list[MonthGroup]:
    """
    Group consecutive dates into month bands in a single pass.

    A new band starts exactly when the "MMM YYYY" label changes; a band's
    width is its day count times pixels_per_day.
    """
    groups: list[MonthGroup] = []
    current_label: Optional[str] = None
    current_days = 0
    current_x = 0.0

    for date in dates:
        label = month_label(date)
        if label != current_label:
            if current_label is not None:
                groups.append(
                    {
                        "label": current_label,
                        "days": current_days,
                        "x": current_x,
                        "width": current_days * pixels_per_day,
                    }
                )
                current_x += current_days * pixels_per_day
            current_label = label
            current_days = 1
        else:
            current_days += 1

    if current_label is not None:
        groups.append(
            {
                "label": current_label,
                "days": current_days,
                "x": current_x,
                "width": current_days * pixels_per_day,
            }
        )

    return groups


def day_columns(
    dates: list[pendulum.Date], mapper: DateCoordinateMapper
) -> list[DayColumn]:
    columns: list[DayColumn] = []
    for date in dates:
        columns.append(
            {
                "date": date,
                "x": mapper.date_to_x(date),
                "day_label": str(date.day),
                "weekday_label": date.format("dd")[0],
                "is_weekend": date.day_of_week
                in (pendulum.SATURDAY, pendulum.SUNDAY),
            }
        )
    return columns


def visual_duration_days(task: Task) -> int:
    return max(days_between(task["start_date"], task["end_date"]), 1)


def bar_geometry(task: Task, mapper: DateCoordinateMapper) -> BarGeometry:
    return {
        "left": mapper.date_to_x(task["start_date"]),
        "width": mapper.days_to_width(visual_duration_days(task)),
    }


def apply_preview(
    geometry: BarGeometry, preview: DragPreview, pixels_per_day: int
) -> BarGeometry:
    """
    Return the display geometry of a bar under an uncommitted drag.

    Resizes never shrink the bar below one day; a left resize keeps the
    right edge pinned.
    """
    left = geometry["left"]
    width = geometry["width"]
    offset = preview["offset_px"]

    if preview["mode"] == "moving":
        return {"left": left + offset, "width": width}
    if preview["mode"] == "resizing_left":
        new_width = max(pixels_per_day, width - offset)
        return {"left": left + (width - new_width), "width": new_width}
    if preview["mode"] == "resizing_right":
        return {"left": left, "width": max(pixels_per_day, width + offset)}
    return {"left": left, "width": width}


def build_layout(
    tasks: list[Task],
    project_start: pendulum.Date,
    project_end: pendulum.Date,
    density: Density = "comfortable",
    preview: Optional[DragPreview] = None,
    row_height: int = 48,
    bar_inset: int = 8,
    bar_height: int = 32,
) -> TimelineLayout:
    """
    Lay out the full chart for one render pass.

    Row indices come from the order of `tasks` and are assigned here once;
    bar painting, hit testing and dependency arrows all read them from the
    returned rows.

    Args:
        tasks: Tasks in store order
        project_start: Nominal project start date
        project_end: Nominal project end date
        density: Named pixels-per-day preset
        preview: Live drag offset for the task currently being dragged
        row_height: Height of one task row in pixels
        bar_inset: Gap between the top of a row and the top of its bar
        bar_height: Height of a bar in pixels

    Returns:
        Columns, month bands and one positioned row per task
    """
    window = chart_window(project_start, project_end)
    pixels_per_day = pixels_per_day_for(density)
    mapper = DateCoordinateMapper(window["start"], pixels_per_day)
    dates = timeline_dates(window["start"], window["total_days"])

    rows: list[BarRow] = []
    for row_index, task in enumerate(tasks):
        if task["id"] is None:
            raise ValueError(f"Task '{task['name']}' has no id and cannot be laid out")

        stored = bar_geometry(task, mapper)
        geometry = stored
        in_preview = preview is not None and preview["task_id"] == task["id"]
        if in_preview and preview is not None:
            geometry = apply_preview(stored, preview, pixels_per_day)

        top = row_index * row_height + bar_inset
        rows.append(
            {
                "task_id": task["id"],
                "name": task["name"],
                "row_index": row_index,
                "top": top,
                "center_y": row_index * row_height + row_height / 2,
                "height": bar_height,
                "left": geometry["left"],
                "width": geometry["width"],
                "stored_left": stored["left"],
                "stored_width": stored["width"],
                "progress": task["progress"],
                "status": task["status"],
                "dependencies": list(task["dependencies"]),
                "in_preview": in_preview,
                "show_label": geometry["width"] > LABEL_MIN_WIDTH_PX
                and density == "comfortable",
            }
        )

    logger.debug(
        "laid out %d rows over %d days starting %s",
        len(rows),
        window["total_days"],
        window["start"],
    )

    return {
        "window": window,
        "pixels_per_day": pixels_per_day,
        "row_height": row_height,
        "columns": day_columns(dates, mapper),
        "month_groups": month_groups(dates, pixels_per_day),
        "rows": rows,
        "width": len(dates) * pixels_per_day,
        "height": len(rows) * row_height,
    }


def row_for_task(layout: TimelineLayout, task_id: str) -> Optional[BarRow]:
    for row in layout["rows"]:
        if row["task_id"] == task_id:
            return row
    return None
