# SPDX-License-Identifier: MIT

from typing import Optional, TypedDict

import pendulum

from gantry.model.entity_id import EntityId


class Project(TypedDict):
    id: Optional[EntityId]
    entity_type: str
    code: Optional[str]
    name: str
    description: Optional[str]
    start_date: pendulum.Date
    end_date: pendulum.Date
    created: pendulum.DateTime
    updated: pendulum.DateTime
