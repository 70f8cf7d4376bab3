# SPDX-License-Identifier: MIT

from typing import cast

from rich import box
from rich.console import Console
from rich.table import Table

from gantry.model.project import Project
from gantry.repository.id_map import ID_MAP_REPO
from gantry.time import date_to_display_str, days_between
from gantry.view.header import header


def projects_view(projects: list[Project], task_counts: dict[str, int]) -> None:
    header("all projects", "projects")

    projects_table = Table(box=box.SIMPLE)
    projects_table.add_column("id")
    projects_table.add_column("code")
    projects_table.add_column("name")
    projects_table.add_column("start")
    projects_table.add_column("end")
    projects_table.add_column("tasks", justify="right")

    for project in projects:
        project_id = cast(str, project["id"])
        projects_table.add_row(
            str(ID_MAP_REPO.associate_id("projects", project_id)),
            project["code"] or "",
            project["name"],
            date_to_display_str(project["start_date"]),
            date_to_display_str(project["end_date"]),
            str(task_counts.get(project_id, 0)),
        )

    console = Console()
    console.print(projects_table)


def single_project_view(project: Project, task_count: int) -> None:
    header(project["name"], "project")

    project_table = Table(box=box.SIMPLE)
    project_table.add_column("property")
    project_table.add_column("value")

    project_table.add_row(
        "id",
        str(ID_MAP_REPO.associate_id("projects", cast(str, project["id"]))),
    )
    project_table.add_row("code", project["code"] or "")
    project_table.add_row("name", project["name"])
    project_table.add_row("description", project["description"] or "")
    project_table.add_row("start", date_to_display_str(project["start_date"]))
    project_table.add_row("end", date_to_display_str(project["end_date"]))
    project_table.add_row(
        "duration",
        f"{days_between(project['start_date'], project['end_date']) + 1} days",
    )
    project_table.add_row("tasks", str(task_count))

    console = Console()
    console.print(project_table)
