# SPDX-License-Identifier: MIT

import asyncio
import inspect
import logging
from copy import deepcopy
from typing import Any, Awaitable, Optional

from gantry.configuration import DEFAULT_CONFIGURATION, Configuration, Density
from gantry.model.dependency import DependencyArrow
from gantry.model.drag_state import DragSession, HitRegion, PointerEvent
from gantry.model.entity_id import EntityId
from gantry.model.geometry import TimelineLayout
from gantry.model.project import Project
from gantry.model.task import Task
from gantry.model.update import Commit, TaskUpdate
from gantry.service.dependency import dependency_arrows
from gantry.service.drag import DragStateMachine, target_for_row
from gantry.service.layout import build_layout, row_for_task
from gantry.service.pointer import PointerScope
from gantry.service.status import resolve_status, snap_progress
from gantry.service.store import TaskStore

logger = logging.getLogger(__name__)


class GanttBoard:
    """
    The timeline of one project as an interactive surface.

    Holds the ordered task snapshot taken from the store, the drag state
    machine and the window-wide pointer scope. Every commit, whatever its
    origin, is applied to the local snapshot first and then handed to the
    store's `mutate`. The board never waits for or undoes that call: a
    store failure is logged, and an awaitable result is scheduled on the
    running event loop.

    Use as a context manager (or call `close`) so an unfinished drag
    releases its pointer listeners when the board goes away.
    """

    def __init__(
        self,
        project: Project,
        store: TaskStore,
        config: Configuration = DEFAULT_CONFIGURATION,
        density: Optional[Density] = None,
    ) -> None:
        if project["id"] is None:
            raise ValueError("project must be saved before it can be charted")
        self.project = project
        self.store = store
        self.config = config
        self.density: Density = density or config["density"]
        self.scope = PointerScope()
        self.commit_log: list[Commit] = []
        self._pending: set[asyncio.Task[None]] = set()
        self._tasks: list[Task] = store.get_project_tasks(project["id"])
        self.drag = DragStateMachine(
            scope=self.scope,
            layout_provider=self.layout,
            task_lookup=self.find_task,
            on_commit=self._apply_commit,
            edge_band_width=config["edge_band_width"],
            progress_handle_width=config["progress_handle_width"],
        )

    def __enter__(self) -> "GanttBoard":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    @property
    def tasks(self) -> list[Task]:
        return deepcopy(self._tasks)

    def find_task(self, task_id: EntityId) -> Optional[Task]:
        for task in self._tasks:
            if task["id"] == task_id:
                return task
        return None

    def get_task(self, task_id: EntityId) -> Task:
        task = self.find_task(task_id)
        if task is None:
            raise ValueError(f"No task with id {task_id} on this board")
        return deepcopy(task)

    def reload(self) -> None:
        """Take a fresh snapshot from the store; ignored while a drag is active."""
        if self.drag.is_active:
            logger.debug("reload deferred, drag session active")
            return
        assert self.project["id"] is not None
        self._tasks = self.store.get_project_tasks(self.project["id"])

    def set_density(self, density: Density) -> None:
        if density == self.density:
            return
        self.drag.close()
        self.density = density

    def layout(self) -> TimelineLayout:
        return build_layout(
            self._tasks,
            self.project["start_date"],
            self.project["end_date"],
            density=self.density,
            preview=self.drag.preview(),
            row_height=self.config["row_height"],
            bar_inset=self.config["bar_inset"],
            bar_height=self.config["bar_height"],
        )

    def arrows(self, layout: Optional[TimelineLayout] = None) -> list[DependencyArrow]:
        return dependency_arrows(layout if layout is not None else self.layout())

    def session(self) -> Optional[DragSession]:
        return self.drag.session()

    def handle(self, event: PointerEvent) -> None:
        """
        Route one pointer event the way a browser window would.

        Pointer-down lands on the chart itself; moves and releases are
        delivered to whatever is listening at window level.
        """
        if event["kind"] == "down":
            self.drag.handle(event)
        else:
            self.scope.dispatch(event)

    def pointer_down(self, x: float, y: float) -> None:
        self.handle({"kind": "down", "x": x, "y": y})

    def pointer_move(self, x: float, y: float = 0) -> None:
        self.handle({"kind": "move", "x": x, "y": y})

    def pointer_up(self, x: float, y: float = 0) -> None:
        self.handle({"kind": "up", "x": x, "y": y})

    def shift_bar(
        self, task_id: EntityId, region: HitRegion, days: int
    ) -> Optional[Commit]:
        """
        Drag one part of a bar sideways by a whole number of days.

        The gesture is played through the drag state machine (grab, move,
        release) so the same rules apply as for a pointer drag: a resize
        that would invert the dates is discarded and returns None.

        Raises:
            ValueError: If the task is not on this board or a drag is active
        """
        if region == "progress_handle":
            raise ValueError("use set_progress to change progress")
        layout = self.layout()
        row = row_for_task(layout, task_id)
        if row is None:
            raise ValueError(f"No task with id {task_id} on this board")

        if region == "left_edge":
            x = row["left"]
        elif region == "right_edge":
            x = row["left"] + row["width"]
        else:
            x = row["left"] + row["width"] / 2
        if not self.drag.begin(target_for_row(row, region), x):
            raise ValueError("another edit is in progress")

        target_x = x + days * layout["pixels_per_day"]
        self.pointer_move(target_x, row["center_y"])
        before = len(self.commit_log)
        self.pointer_up(target_x, row["center_y"])
        if len(self.commit_log) == before:
            return None
        return self.commit_log[-1]

    def set_progress(self, task_id: EntityId, value: float) -> Optional[Commit]:
        """
        Apply a progress value from a slider or numeric input.

        The value goes through the same snapping and status resolution as a
        progress drag.
        """
        task = self.find_task(task_id)
        if task is None:
            raise ValueError(f"No task with id {task_id} on this board")

        progress = snap_progress(value)
        status = resolve_status(task["status"], progress)
        if progress == task["progress"] and status == task["status"]:
            return None

        commit: Commit = {
            "task_id": task_id,
            "update": {"progress": progress, "status": status},
        }
        self._apply_commit(commit)
        return commit

    def close(self) -> None:
        self.drag.close()

    def _apply_commit(self, commit: Commit) -> None:
        task = self.find_task(commit["task_id"])
        if task is None:
            raise ValueError(f"No task with id {commit['task_id']} on this board")

        _merge_update(task, commit["update"])
        self.commit_log.append(commit)
        try:
            result = self.store.mutate(commit["task_id"], commit["update"])
        except Exception:
            logger.warning(
                "store rejected commit for %s", commit["task_id"], exc_info=True
            )
            return
        if inspect.isawaitable(result):
            self._schedule_mutation(result, commit)

    @property
    def pending_mutations(self) -> tuple["asyncio.Task[None]", ...]:
        return tuple(self._pending)

    def _schedule_mutation(self, mutation: Awaitable[Any], commit: Commit) -> None:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            # No loop to hand the mutation to, so finish it here
            asyncio.run(_await_mutation(mutation, commit))
            return
        pending = loop.create_task(_await_mutation(mutation, commit))
        self._pending.add(pending)
        pending.add_done_callback(self._pending.discard)


async def _await_mutation(mutation: Awaitable[Any], commit: Commit) -> None:
    try:
        await mutation
    except Exception:
        logger.warning(
            "store rejected commit for %s", commit["task_id"], exc_info=True
        )


def _merge_update(task: Task, update: TaskUpdate) -> None:
    if "start_date" in update:
        task["start_date"] = update["start_date"]
    if "end_date" in update:
        task["end_date"] = update["end_date"]
    if "progress" in update:
        task["progress"] = update["progress"]
    if "status" in update:
        task["status"] = update["status"]

