# SPDX-License-Identifier: MIT

import logging

from gantry.model.dependency import DependencyArrow, Point
from gantry.model.geometry import BarRow, TimelineLayout

logger = logging.getLogger(__name__)

CONTROL_OFFSET_PX = 20


def arrow_path(start: Point, end: Point) -> str:
    return (
        f"M {start['x']:g} {start['y']:g} "
        f"C {start['x'] + CONTROL_OFFSET_PX:g} {start['y']:g}, "
        f"{end['x'] - CONTROL_OFFSET_PX:g} {end['y']:g}, "
        f"{end['x']:g} {end['y']:g}"
    )


def dependency_arrow(prerequisite: BarRow, dependent: BarRow) -> DependencyArrow:
    start: Point = {
        "x": prerequisite["left"] + prerequisite["width"],
        "y": prerequisite["center_y"],
    }
    end: Point = {"x": dependent["left"], "y": dependent["center_y"]}
    return {
        "prerequisite_id": prerequisite["task_id"],
        "dependent_id": dependent["task_id"],
        "start": start,
        "control_start": {"x": start["x"] + CONTROL_OFFSET_PX, "y": start["y"]},
        "control_end": {"x": end["x"] - CONTROL_OFFSET_PX, "y": end["y"]},
        "end": end,
        "path": arrow_path(start, end),
    }


def dependency_arrows(layout: TimelineLayout) -> list[DependencyArrow]:
    """
    Compute one arrow per dependency edge between rows of a layout.

    Endpoints are read from the layout rows, so an arrow attached to a bar
    that is being dragged follows the bar's preview geometry. Dependencies
    on tasks that are not part of the layout are skipped. Each edge is drawn
    on its own, so cyclic dependencies produce arrows without any traversal.

    Args:
        layout: The layout produced for the current render pass

    Returns:
        Arrows in dependent-row order, then dependency order
    """
    rows_by_id = {row["task_id"]: row for row in layout["rows"]}

    arrows: list[DependencyArrow] = []
    for row in layout["rows"]:
        for dependency_id in row["dependencies"]:
            prerequisite = rows_by_id.get(dependency_id)
            if prerequisite is None:
                logger.debug(
                    "skipping dependency %s of %s: not in layout",
                    dependency_id,
                    row["task_id"],
                )
                continue
            arrows.append(dependency_arrow(prerequisite, row))
    return arrows
