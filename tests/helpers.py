from copy import deepcopy
from typing import Optional

from gantry.model.project import Project
from gantry.model.task import Task, TaskStatus
from gantry.model.update import TaskUpdate
from gantry.time import date_from_str, datetime_from_str

PROJECT_ID = "project-1"
CREATED = datetime_from_str("2024-02-01T09:00:00+00:00")


def d(value: str):
    return date_from_str(value)


def make_project(
    start: str = "2024-03-01", end: str = "2024-03-31", id: str = PROJECT_ID
) -> Project:
    return {
        "id": id,
        "entity_type": "project",
        "code": "LNCH",
        "name": "Launch",
        "description": None,
        "start_date": d(start),
        "end_date": d(end),
        "created": CREATED,
        "updated": CREATED,
    }


def make_task(
    id: str,
    start: str,
    end: str,
    progress: int = 0,
    status: TaskStatus = "TODO",
    dependencies: Optional[list[str]] = None,
    name: Optional[str] = None,
    project_id: str = PROJECT_ID,
) -> Task:
    return {
        "id": id,
        "entity_type": "task",
        "project_id": project_id,
        "name": name or id.title(),
        "start_date": d(start),
        "end_date": d(end),
        "status": status,
        "progress": progress,
        "dependencies": dependencies or [],
        "assignee": None,
        "created": CREATED,
        "updated": CREATED,
    }


class FakeStore:
    """In-memory task store that records every mutate call."""

    def __init__(self, tasks: list[Task], fail_with: Optional[Exception] = None):
        self.tasks = deepcopy(tasks)
        self.mutations: list[tuple[str, TaskUpdate]] = []
        self.fail_with = fail_with

    def get_project_tasks(self, project_id: str) -> list[Task]:
        return deepcopy([t for t in self.tasks if t["project_id"] == project_id])

    def mutate(self, task_id: str, update: TaskUpdate) -> None:
        self.mutations.append((task_id, dict(update)))  # type: ignore[arg-type]
        if self.fail_with is not None:
            raise self.fail_with
        for task in self.tasks:
            if task["id"] == task_id:
                task.update(update)  # type: ignore[typeddict-item]

    def get(self, task_id: str) -> Task:
        return next(t for t in self.tasks if t["id"] == task_id)
