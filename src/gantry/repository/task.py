# SPDX-License-Identifier: MIT

import logging
from copy import deepcopy
from typing import Any, Optional, cast

from yaml import dump, load

try:
    from yaml import CDumper as Dumper
    from yaml import CLoader as Loader  # noqa: F401
except ImportError:
    from yaml import Dumper, Loader  # type: ignore[assignment]

from gantry import configuration, time
from gantry.model.entity_id import EntityId, generate_entity_id
from gantry.model.task import Task
from gantry.model.update import TaskUpdate

logger = logging.getLogger(__name__)


class TaskRepository:
    def __init__(self) -> None:
        self._tasks: Optional[list[Task]] = None
        self.is_dirty = False
        self._dirty_ids: set[str] = set()

    @property
    def tasks(self) -> list[Task]:
        if self._tasks is None:
            self.__load_data()
        if self._tasks is None:
            raise ValueError()
        return self._tasks

    def __load_data(self) -> None:
        self._tasks = []
        if not configuration.DATA_TASKS_DIR.is_dir():
            return
        for file_path in configuration.DATA_TASKS_DIR.iterdir():
            if file_path.suffix != ".yaml":
                continue
            raw_task = load(file_path.read_text(), Loader=Loader)
            if raw_task is not None:
                self._tasks.append(self.__convert_task_for_deserialization(raw_task))
        # Row order is creation order
        self._tasks.sort(key=lambda task: (task["created"], task["id"] or ""))

    def __save_data(self) -> None:
        configuration.DATA_TASKS_DIR.mkdir(parents=True, exist_ok=True)
        for task in self.tasks:
            if task["id"] in self._dirty_ids:
                serializable_task = self.__convert_task_for_serialization(
                    deepcopy(task)
                )
                file_path = configuration.DATA_TASKS_DIR / f"{task['id']}.yaml"
                file_path.write_text(dump(serializable_task, Dumper=Dumper))
        self._dirty_ids.clear()

    def flush(self) -> bool:
        if self._tasks is not None and self.is_dirty:
            self.__save_data()
            self.is_dirty = False
            return True
        return False

    def __convert_task_for_serialization(self, task: Task) -> dict[str, Any]:
        serializable_task = cast(dict[str, Any], task)
        serializable_task["start_date"] = time.date_to_str(
            serializable_task["start_date"]
        )
        serializable_task["end_date"] = time.date_to_str(serializable_task["end_date"])
        serializable_task["created"] = time.datetime_to_iso_str(
            serializable_task["created"]
        )
        serializable_task["updated"] = time.datetime_to_iso_str(
            serializable_task["updated"]
        )
        return serializable_task

    def __convert_task_for_deserialization(self, task: dict[str, Any]) -> Task:
        deserializable_task = task
        deserializable_task["start_date"] = time.date_from_str(
            str(deserializable_task["start_date"])
        )
        deserializable_task["end_date"] = time.date_from_str(
            str(deserializable_task["end_date"])
        )
        deserializable_task["created"] = time.datetime_from_str(
            deserializable_task["created"]
        )
        deserializable_task["updated"] = time.datetime_from_str(
            deserializable_task["updated"]
        )
        if deserializable_task.get("dependencies") is None:
            deserializable_task["dependencies"] = []
        return cast(Task, deserializable_task)

    def __find(self, id: EntityId) -> Task:
        matches = [task for task in self.tasks if task["id"] == id]
        if len(matches) == 0:
            raise ValueError(f"No task with id {id}")
        return matches[0]

    def save_new_task(self, task: Task) -> EntityId:
        self.is_dirty = True

        task["id"] = generate_entity_id()
        # Deduplicate dependencies
        task["dependencies"] = list(dict.fromkeys(task["dependencies"]))

        self.tasks.append(task)
        self._dirty_ids.add(task["id"])
        logger.debug("created task %s (%s)", task["id"], task["name"])

        return task["id"]

    def modify_task(
        self,
        id: EntityId,
        name: Optional[str] = None,
        assignee: Optional[str] = None,
        dependencies: Optional[list[EntityId]] = None,
        remove_assignee: bool = False,
    ) -> None:
        task = self.__find(id)
        self.is_dirty = True
        self._dirty_ids.add(id)

        # Set updated timestamp to current moment
        task["updated"] = time.now_utc()
        if name is not None:
            task["name"] = name
        if assignee is not None:
            task["assignee"] = assignee
        if dependencies is not None:
            task["dependencies"] = list(dict.fromkeys(dependencies))

        if remove_assignee:
            task["assignee"] = None

    def mutate(self, task_id: EntityId, update: TaskUpdate) -> None:
        """Apply an engine commit (dates, progress, status) to a stored task."""
        task = self.__find(task_id)
        self.is_dirty = True
        self._dirty_ids.add(task_id)

        task["updated"] = time.now_utc()
        if "start_date" in update:
            task["start_date"] = update["start_date"]
        if "end_date" in update:
            task["end_date"] = update["end_date"]
        if "progress" in update:
            task["progress"] = update["progress"]
        if "status" in update:
            task["status"] = update["status"]
        logger.debug("task %s updated: %s", task_id, update)

    def get_all_tasks(self) -> list[Task]:
        return deepcopy(self.tasks)

    def get_project_tasks(self, project_id: EntityId) -> list[Task]:
        return deepcopy(
            [task for task in self.tasks if task["project_id"] == project_id]
        )

    def get_task(self, id: EntityId) -> Task:
        return deepcopy(self.__find(id))


TASK_REPO = TaskRepository()
