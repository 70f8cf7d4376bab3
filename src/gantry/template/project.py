# SPDX-License-Identifier: MIT

from gantry.model.entity_type import EntityType
from gantry.model.project import Project
from gantry.time import add_days, now_utc, today_local


def get_project_template() -> Project:
    now = now_utc()
    today = today_local()
    return {
        "id": None,
        "entity_type": EntityType.PROJECT,
        "code": None,
        "name": "",
        "description": None,
        "start_date": today,
        "end_date": add_days(today, 30),
        "created": now,
        "updated": now,
    }
