# SPDX-License-Identifier: MIT

from typing import Literal, Optional, TypedDict, get_args

import pendulum

from gantry.model.entity_id import EntityId

TaskStatus = Literal["TODO", "IN_PROGRESS", "REVIEW", "DONE"]

TASK_STATUSES: tuple[TaskStatus, ...] = get_args(TaskStatus)


class Task(TypedDict):
    id: Optional[EntityId]
    entity_type: str
    project_id: Optional[EntityId]
    name: str
    start_date: pendulum.Date
    end_date: pendulum.Date
    status: TaskStatus
    progress: int
    dependencies: list[EntityId]
    assignee: Optional[str]
    created: pendulum.DateTime
    updated: pendulum.DateTime
