# SPDX-License-Identifier: MIT

from typing import TypedDict

from gantry.model.entity_id import EntityId


class Point(TypedDict):
    x: float
    y: float


class DependencyArrow(TypedDict):
    prerequisite_id: EntityId
    dependent_id: EntityId
    start: Point
    control_start: Point
    control_end: Point
    end: Point
    path: str
