# SPDX-License-Identifier: MIT

from typing import Literal, TypedDict, Union

from gantry.model.entity_id import EntityId

DragMode = Literal[
    "idle",
    "moving",
    "resizing_left",
    "resizing_right",
    "editing_progress",
]

HitRegion = Literal["progress_handle", "left_edge", "right_edge", "body"]


class IdleState(TypedDict):
    mode: Literal["idle"]


class MovingState(TypedDict):
    mode: Literal["moving"]
    task_id: EntityId
    anchor_x: float
    offset_px: float


class ResizingLeftState(TypedDict):
    mode: Literal["resizing_left"]
    task_id: EntityId
    anchor_x: float
    bar_left_px: float
    bar_width_px: float
    offset_px: float


class ResizingRightState(TypedDict):
    mode: Literal["resizing_right"]
    task_id: EntityId
    anchor_x: float
    bar_left_px: float
    bar_width_px: float
    offset_px: float


class EditingProgressState(TypedDict):
    mode: Literal["editing_progress"]
    task_id: EntityId
    bar_left_px: float
    bar_width_px: float


DragState = Union[
    IdleState,
    MovingState,
    ResizingLeftState,
    ResizingRightState,
    EditingProgressState,
]


class DragSession(TypedDict):
    """What a view needs to know about the active session (cursor, highlight)."""

    task_id: EntityId
    mode: DragMode


class DragPreview(TypedDict):
    task_id: EntityId
    mode: DragMode
    offset_px: float


class HitTarget(TypedDict):
    task_id: EntityId
    region: HitRegion
    bar_left_px: float
    bar_width_px: float


PointerEventKind = Literal["down", "move", "up"]


class PointerEvent(TypedDict):
    kind: PointerEventKind
    x: float
    y: float


def idle_state() -> IdleState:
    return {"mode": "idle"}
