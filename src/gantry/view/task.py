# SPDX-License-Identifier: MIT

from typing import cast

from rich import box
from rich.console import Console
from rich.table import Table

from gantry.model.task import Task
from gantry.repository.id_map import ID_MAP_REPO
from gantry.service.status import style_for
from gantry.time import date_to_display_str
from gantry.view.header import header


def tasks_view(project_name: str, tasks: list[Task]) -> None:
    """Table of a project's tasks in row order."""
    header(project_name, "tasks")

    names = {task["id"]: task["name"] for task in tasks}

    tasks_table = Table(box=box.SIMPLE)
    tasks_table.add_column("id")
    tasks_table.add_column("name")
    tasks_table.add_column("start")
    tasks_table.add_column("end")
    tasks_table.add_column("status")
    tasks_table.add_column("progress", justify="right")
    tasks_table.add_column("depends on")
    tasks_table.add_column("assignee")

    for task in tasks:
        style = style_for(task["status"])
        dependencies = ", ".join(
            names.get(dependency, "?") for dependency in task["dependencies"]
        )
        tasks_table.add_row(
            str(ID_MAP_REPO.associate_id("tasks", cast(str, task["id"]))),
            task["name"],
            date_to_display_str(task["start_date"]),
            date_to_display_str(task["end_date"]),
            f"[{style['text']}]{task['status']}[/{style['text']}]",
            f"{task['progress']}%",
            dependencies,
            task["assignee"] or "",
        )

    console = Console()
    console.print(tasks_table)


def single_task_view(project_name: str, task: Task) -> None:
    header(project_name, "task")

    task_table = Table(box=box.SIMPLE)
    task_table.add_column("property")
    task_table.add_column("value")

    task_table.add_row(
        "id", str(ID_MAP_REPO.associate_id("tasks", cast(str, task["id"])))
    )
    task_table.add_row("name", task["name"])
    task_table.add_row("start", date_to_display_str(task["start_date"]))
    task_table.add_row("end", date_to_display_str(task["end_date"]))
    task_table.add_row("status", task["status"])
    task_table.add_row("progress", f"{task['progress']}%")
    task_table.add_row(
        "depends on",
        ", ".join(
            str(ID_MAP_REPO.associate_id("tasks", dependency))
            for dependency in task["dependencies"]
        ),
    )
    task_table.add_row("assignee", task["assignee"] or "")

    console = Console()
    console.print(task_table)
