# SPDX-License-Identifier: MIT

from typing import Literal, TypeAlias, TypedDict

from gantry.model.entity_id import EntityId

EntityType = Literal[
    "tasks",
    "projects",
]


IdMapDict: TypeAlias = dict[EntityType, "IdMapMapping"]


class IdMap(TypedDict):
    """
    All dictionaries are mapped in the following way:

    Synthetic id : real entity id.

    Tasks and projects are stored under UUIDs, which are unpleasant to type,
    so every listing hands out short integers that resolve back to them.

    Example:

    Task with an id of "3f0c...".
    Synthetic id for that task is 7.

    real_task_id = id_map["tasks"]["synthetic_to_real"][7]  # returns "3f0c..."
    """

    tasks: "IdMapMapping"
    projects: "IdMapMapping"


class IdMapMapping(TypedDict):
    synthetic_to_real: dict[int, EntityId]
    real_to_synthetic: dict[EntityId, int]
