# SPDX-License-Identifier: MIT

from typing import cast

import typer
from rich.console import Console

from gantry.model.project import Project
from gantry.model.task import Task
from gantry.repository.id_map import ID_MAP_REPO
from gantry.repository.project import PROJECT_REPO
from gantry.repository.task import TASK_REPO

error_console = Console(stderr=True)


def resolve_project(project_id: int) -> Project:
    """Look up a project by the short id shown in listings, or exit."""
    try:
        real_id = ID_MAP_REPO.get_real_id("projects", project_id)
        return PROJECT_REPO.get_project(real_id)
    except ValueError:
        error_console.print(f"[red]Error: project {project_id} not found[/red]")
        raise typer.Exit(1)


def resolve_task(task_id: int) -> Task:
    """Look up a task by the short id shown in listings, or exit."""
    try:
        real_id = ID_MAP_REPO.get_real_id("tasks", task_id)
        return TASK_REPO.get_task(real_id)
    except ValueError:
        error_console.print(f"[red]Error: task {task_id} not found[/red]")
        raise typer.Exit(1)


def resolve_task_with_project(task_id: int) -> tuple[Task, Project]:
    task = resolve_task(task_id)
    try:
        project = PROJECT_REPO.get_project(cast(str, task["project_id"]))
    except ValueError:
        error_console.print(
            f"[red]Error: project of task {task_id} no longer exists[/red]"
        )
        raise typer.Exit(1)
    return task, project
