# SPDX-License-Identifier: MIT

from typing import Awaitable, Optional, Protocol

from gantry.model.entity_id import EntityId
from gantry.model.task import Task
from gantry.model.update import TaskUpdate


class TaskStore(Protocol):
    """
    What the board needs from whatever persists tasks.

    `get_project_tasks` returns tasks in row order. `mutate` is called once
    per commit and may be a coroutine function; the board schedules an
    awaitable result without waiting for it. Failures are logged by the board
    and never reach whoever delivered the pointer event.
    """

    def get_project_tasks(self, project_id: EntityId) -> list[Task]: ...

    def mutate(
        self, task_id: EntityId, update: TaskUpdate
    ) -> Optional[Awaitable[None]]: ...
