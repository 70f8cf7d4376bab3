# SPDX-License-Identifier: MIT

from gantry.model.entity_id import EntityId
from gantry.model.project import Project
from gantry.model.task import Task
from gantry.template.task import get_task_template


def new_task_draft(project: Project) -> Task:
    """A blank task for `project`, spanning the project's nominal dates."""
    task = get_task_template()
    task["project_id"] = project["id"]
    task["start_date"] = project["start_date"]
    task["end_date"] = project["end_date"]
    return task


def toggle_dependency(draft: Task, task_id: EntityId) -> None:
    if task_id in draft["dependencies"]:
        draft["dependencies"] = [
            dependency for dependency in draft["dependencies"] if dependency != task_id
        ]
    else:
        draft["dependencies"] = draft["dependencies"] + [task_id]


def dependency_candidates(tasks: list[Task], search: str = "") -> list[Task]:
    """Tasks whose name contains `search`, ignoring case, in their original order."""
    needle = search.lower()
    return [task for task in tasks if needle in task["name"].lower()]


def validate_draft(draft: Task) -> None:
    """
    Check a draft before it is handed to the store.

    Raises:
        ValueError: If the name is empty or the dates are inverted
    """
    if not draft["name"].strip():
        raise ValueError("Task name cannot be empty")
    if draft["end_date"] < draft["start_date"]:
        raise ValueError(
            f"Task end date {draft['end_date']} is before "
            f"start date {draft['start_date']}"
        )
