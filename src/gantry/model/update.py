# SPDX-License-Identifier: MIT

from typing import TypedDict

import pendulum

from gantry.model.entity_id import EntityId
from gantry.model.task import TaskStatus


class TaskUpdate(TypedDict, total=False):
    """Partial set of task fields proposed by the engine for a single commit."""

    start_date: pendulum.Date
    end_date: pendulum.Date
    progress: int
    status: TaskStatus


class Commit(TypedDict):
    task_id: EntityId
    update: TaskUpdate
