# SPDX-License-Identifier: MIT

from collections import Counter
from typing import Annotated, Optional

import pendulum
import typer
from rich.console import Console

from gantry.repository.project import PROJECT_REPO
from gantry.repository.task import TASK_REPO
from gantry.template.project import get_project_template
from gantry.terminal.custom_typer import AliasedTyperGroup
from gantry.terminal.parse import DATE_HELP, parse_date
from gantry.terminal.resolve import resolve_project
from gantry.view.project import projects_view, single_project_view

app = typer.Typer(cls=AliasedTyperGroup, no_args_is_help=True)


@app.command("add, a", no_args_is_help=True)
def add(
    name: str,
    code: Annotated[Optional[str], typer.Option("--code", "-c")] = None,
    description: Annotated[Optional[str], typer.Option("--description", "-d")] = None,
    start: Annotated[
        Optional[pendulum.Date],
        typer.Option("--start", "-s", parser=parse_date, help=DATE_HELP),
    ] = None,
    end: Annotated[
        Optional[pendulum.Date],
        typer.Option("--end", "-e", parser=parse_date, help=DATE_HELP),
    ] = None,
) -> None:
    """Create a project. Its dates set the nominal range of the chart."""
    project = get_project_template()
    project["name"] = name
    project["code"] = code
    project["description"] = description
    if start is not None:
        project["start_date"] = start
    if end is not None:
        project["end_date"] = end

    try:
        id = PROJECT_REPO.save_new_project(project)
    except ValueError as e:
        Console(stderr=True).print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    single_project_view(PROJECT_REPO.get_project(id), 0)


@app.command("list, ls")
def list_projects() -> None:
    """List all projects."""
    task_counts = Counter(task["project_id"] for task in TASK_REPO.get_all_tasks())
    projects_view(
        PROJECT_REPO.get_all_projects(),
        {str(project_id): count for project_id, count in task_counts.items()},
    )


@app.command("show, s", no_args_is_help=True)
def show(id: int) -> None:
    """Show one project."""
    project = resolve_project(id)
    assert project["id"] is not None
    single_project_view(project, len(TASK_REPO.get_project_tasks(project["id"])))
