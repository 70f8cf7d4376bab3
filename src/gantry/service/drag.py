# SPDX-License-Identifier: MIT

import logging
import math
from typing import Callable, Optional, cast

from gantry.model.drag_state import (
    DragPreview,
    DragSession,
    DragState,
    EditingProgressState,
    HitRegion,
    HitTarget,
    MovingState,
    PointerEvent,
    ResizingLeftState,
    ResizingRightState,
    idle_state,
)
from gantry.model.entity_id import EntityId
from gantry.model.geometry import BarRow, TimelineLayout
from gantry.model.task import Task
from gantry.model.update import Commit, TaskUpdate
from gantry.service.coordinate import DateCoordinateMapper
from gantry.service.pointer import PointerScope, PointerSubscription
from gantry.service.status import resolve_status, snap_progress
from gantry.time import add_days, round_half_up

logger = logging.getLogger(__name__)

TaskLookup = Callable[[EntityId], Optional[Task]]
LayoutProvider = Callable[[], TimelineLayout]
CommitHandler = Callable[[Commit], None]


def hit_test(
    layout: TimelineLayout,
    x: float,
    y: float,
    edge_band_width: float = 8,
    progress_handle_width: float = 16,
) -> Optional[HitTarget]:
    """
    Find which part of which bar lies under a pointer position.

    Regions are checked from highest to lowest priority: the progress handle
    (centred at the task's progress along the bar), the resize bands at
    either end, then the bar body.

    Args:
        layout: Layout the pointer position refers to
        x: Horizontal position in chart pixels
        y: Vertical position in chart pixels
        edge_band_width: Width of each resize band
        progress_handle_width: Width of the progress handle

    Returns:
        The hit bar and region, or None when the pointer is not on a bar
    """
    if y < 0 or layout["row_height"] <= 0:
        return None
    row_index = math.floor(y / layout["row_height"])
    if row_index >= len(layout["rows"]):
        return None

    row = layout["rows"][row_index]
    if not (row["top"] <= y <= row["top"] + row["height"]):
        return None

    left = row["left"]
    width = row["width"]
    right = left + width

    handle_x = left + width * row["progress"] / 100
    if abs(x - handle_x) <= progress_handle_width / 2:
        return target_for_row(row, "progress_handle")
    if left <= x < left + edge_band_width:
        return target_for_row(row, "left_edge")
    if right - edge_band_width < x <= right:
        return target_for_row(row, "right_edge")
    if left <= x <= right:
        return target_for_row(row, "body")
    return None


def target_for_row(row: BarRow, region: HitRegion) -> HitTarget:
    return cast(
        HitTarget,
        {
            "task_id": row["task_id"],
            "region": region,
            "bar_left_px": row["left"],
            "bar_width_px": row["width"],
        },
    )


class DragStateMachine:
    """
    Pointer-driven editing of task bars.

    All pointer input goes through `handle`. A pointer-down on a bar starts a
    session and subscribes `handle` to the window-wide pointer scope; the
    next pointer-up ends it and releases that subscription. Only one session
    can be active at a time.

    Moves and resizes only change a display offset until pointer-up, when
    the offset is converted to whole days and committed. Progress edits are
    committed on every pointer move.
    """

    def __init__(
        self,
        scope: PointerScope,
        layout_provider: LayoutProvider,
        task_lookup: TaskLookup,
        on_commit: CommitHandler,
        edge_band_width: float = 8,
        progress_handle_width: float = 16,
    ) -> None:
        self._scope = scope
        self._layout_provider = layout_provider
        self._task_lookup = task_lookup
        self._on_commit = on_commit
        self.edge_band_width = edge_band_width
        self.progress_handle_width = progress_handle_width

        self._state: DragState = idle_state()
        self._subscription: Optional[PointerSubscription] = None
        self._mapper: Optional[DateCoordinateMapper] = None

    @property
    def state(self) -> DragState:
        return self._state

    @property
    def is_active(self) -> bool:
        return self._state["mode"] != "idle"

    def session(self) -> Optional[DragSession]:
        if self._state["mode"] == "idle":
            return None
        return {"task_id": self._state["task_id"], "mode": self._state["mode"]}

    def preview(self) -> Optional[DragPreview]:
        """Display-only offset for the bar being moved or resized, if any."""
        state = self._state
        if state["mode"] in ("moving", "resizing_left", "resizing_right"):
            return {
                "task_id": state["task_id"],
                "mode": state["mode"],
                "offset_px": state["offset_px"],
            }
        return None

    def handle(self, event: PointerEvent) -> Optional[Commit]:
        if event["kind"] == "down":
            self._pointer_down(event)
            return None
        if event["kind"] == "move":
            return self._pointer_move(event)
        return self._pointer_up(event)

    def pointer_down(self, x: float, y: float) -> None:
        self.handle({"kind": "down", "x": x, "y": y})

    def pointer_move(self, x: float, y: float = 0) -> Optional[Commit]:
        return self.handle({"kind": "move", "x": x, "y": y})

    def pointer_up(self, x: float, y: float = 0) -> Optional[Commit]:
        return self.handle({"kind": "up", "x": x, "y": y})

    def close(self) -> None:
        """Abandon any active session without committing and drop listeners."""
        if self.is_active:
            logger.debug("drag session abandoned on teardown: %s", self.session())
        self._end_session()

    def _pointer_down(self, event: PointerEvent) -> None:
        if self.is_active:
            logger.debug(
                "pointer down ignored, session already active: %s", self.session()
            )
            return

        layout = self._layout_provider()
        target = hit_test(
            layout,
            event["x"],
            event["y"],
            self.edge_band_width,
            self.progress_handle_width,
        )
        if target is None:
            return
        self._begin(layout, target, event["x"])

    def begin(self, target: HitTarget, x: float) -> bool:
        """
        Start a session on a known bar region without hit testing.

        Used to drive an edit from outside the chart (a command line or a
        keyboard shortcut) through the same commit path as a pointer drag.
        Returns False when a session is already active.
        """
        if self.is_active:
            logger.debug(
                "begin ignored, session already active: %s", self.session()
            )
            return False
        self._begin(self._layout_provider(), target, x)
        return True

    def _begin(self, layout: TimelineLayout, target: HitTarget, x: float) -> None:
        task_id = target["task_id"]
        if target["region"] == "progress_handle":
            self._state = EditingProgressState(
                mode="editing_progress",
                task_id=task_id,
                bar_left_px=target["bar_left_px"],
                bar_width_px=target["bar_width_px"],
            )
        elif target["region"] == "left_edge":
            self._state = ResizingLeftState(
                mode="resizing_left",
                task_id=task_id,
                anchor_x=x,
                bar_left_px=target["bar_left_px"],
                bar_width_px=target["bar_width_px"],
                offset_px=0,
            )
        elif target["region"] == "right_edge":
            self._state = ResizingRightState(
                mode="resizing_right",
                task_id=task_id,
                anchor_x=x,
                bar_left_px=target["bar_left_px"],
                bar_width_px=target["bar_width_px"],
                offset_px=0,
            )
        else:
            self._state = MovingState(
                mode="moving", task_id=task_id, anchor_x=x, offset_px=0
            )

        self._mapper = DateCoordinateMapper(
            layout["window"]["start"], layout["pixels_per_day"]
        )
        self._subscription = self._scope.subscribe(self.handle)
        logger.debug("drag session started: %s", self.session())

    def _pointer_move(self, event: PointerEvent) -> Optional[Commit]:
        state = self._state
        if state["mode"] == "idle":
            return None
        if state["mode"] == "editing_progress":
            return self._commit_progress(state, event["x"])
        state["offset_px"] = event["x"] - state["anchor_x"]
        return None

    def _pointer_up(self, event: PointerEvent) -> Optional[Commit]:
        state = self._state
        try:
            if state["mode"] in ("moving", "resizing_left", "resizing_right"):
                return self._commit_dates(state, event["x"])
            return None
        finally:
            # The session ends even if the commit handler raises
            self._end_session()

    def _commit_dates(
        self,
        state: MovingState | ResizingLeftState | ResizingRightState,
        x: float,
    ) -> Optional[Commit]:
        task = self._task_lookup(state["task_id"])
        if task is None or self._mapper is None:
            logger.debug("task %s vanished during drag", state["task_id"])
            return None

        delta_days = self._mapper.x_to_days(x - state["anchor_x"])
        if delta_days == 0:
            return None

        update: TaskUpdate
        if state["mode"] == "moving":
            update = {
                "start_date": add_days(task["start_date"], delta_days),
                "end_date": add_days(task["end_date"], delta_days),
            }
        elif state["mode"] == "resizing_left":
            new_start = add_days(task["start_date"], delta_days)
            if new_start > task["end_date"]:
                logger.debug(
                    "resize of %s discarded: start %s after end %s",
                    state["task_id"],
                    new_start,
                    task["end_date"],
                )
                return None
            update = {"start_date": new_start}
        else:
            new_end = add_days(task["end_date"], delta_days)
            if task["start_date"] > new_end:
                logger.debug(
                    "resize of %s discarded: end %s before start %s",
                    state["task_id"],
                    new_end,
                    task["start_date"],
                )
                return None
            update = {"end_date": new_end}

        return self._emit({"task_id": state["task_id"], "update": update})

    def _commit_progress(
        self, state: EditingProgressState, x: float
    ) -> Optional[Commit]:
        task = self._task_lookup(state["task_id"])
        if task is None:
            return None

        relative = (x - state["bar_left_px"]) / state["bar_width_px"]
        progress = snap_progress(round_half_up(relative * 100))
        status = resolve_status(task["status"], progress)
        if progress == task["progress"] and status == task["status"]:
            return None

        return self._emit(
            {
                "task_id": state["task_id"],
                "update": {"progress": progress, "status": status},
            }
        )

    def _emit(self, commit: Commit) -> Commit:
        logger.debug("commit %s: %s", commit["task_id"], commit["update"])
        self._on_commit(commit)
        return commit

    def _end_session(self) -> None:
        if self._subscription is not None:
            self._subscription.release()
            self._subscription = None
        if self.is_active:
            logger.debug("drag session ended: %s", self.session())
        self._state = idle_state()
        self._mapper = None
