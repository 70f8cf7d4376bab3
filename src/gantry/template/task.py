# SPDX-License-Identifier: MIT

from gantry.model.entity_type import EntityType
from gantry.model.task import Task
from gantry.time import now_utc, today_local


def get_task_template() -> Task:
    now = now_utc()
    today = today_local()
    return {
        "id": None,
        "entity_type": EntityType.TASK,
        "project_id": None,
        "name": "",
        "start_date": today,
        "end_date": today,
        "status": "TODO",
        "progress": 0,
        "dependencies": [],
        "assignee": None,
        "created": now,
        "updated": now,
    }
