# SPDX-License-Identifier: MIT

from typing import Annotated, Optional, cast

import pendulum
import typer
from rich.console import Console

from gantry.model.drag_state import HitRegion
from gantry.model.entity_id import EntityId
from gantry.model.task import Task
from gantry.repository.configuration import CONFIGURATION_REPO
from gantry.repository.task import TASK_REPO
from gantry.service.board import GanttBoard
from gantry.service.draft import (
    dependency_candidates,
    new_task_draft,
    toggle_dependency,
    validate_draft,
)
from gantry.terminal.custom_typer import AliasedTyperGroup
from gantry.terminal.parse import DATE_HELP, parse_date, parse_id_list
from gantry.terminal.resolve import (
    resolve_project,
    resolve_task,
    resolve_task_with_project,
)
from gantry.terminal.validate import validate_progress
from gantry.view.task import single_task_view, tasks_view

app = typer.Typer(cls=AliasedTyperGroup, no_args_is_help=True)

error_console = Console(stderr=True)


@app.command("add, a", no_args_is_help=True)
def add(
    project_id: int,
    name: str,
    start: Annotated[
        Optional[pendulum.Date],
        typer.Option("--start", "-s", parser=parse_date, help=DATE_HELP),
    ] = None,
    end: Annotated[
        Optional[pendulum.Date],
        typer.Option("--end", "-e", parser=parse_date, help=DATE_HELP),
    ] = None,
    depends: Annotated[
        Optional[str],
        typer.Option(
            "--depends",
            "-d",
            help="task ids this task depends on, e.g. 1,3-5",
        ),
    ] = None,
    depends_match: Annotated[
        Optional[list[str]],
        typer.Option(
            "--depends-match",
            "-dm",
            help="add the single task whose name contains this text (repeatable)",
        ),
    ] = None,
    assignee: Annotated[Optional[str], typer.Option("--assignee", "-a")] = None,
) -> None:
    """
    Add a task to a project.

    The task starts out spanning the project's dates; --start and --end
    override them.
    """
    project = resolve_project(project_id)
    assert project["id"] is not None
    project_tasks = TASK_REPO.get_project_tasks(project["id"])

    draft = new_task_draft(project)
    draft["name"] = name
    draft["assignee"] = assignee
    if start is not None:
        draft["start_date"] = start
    if end is not None:
        draft["end_date"] = end

    if depends is not None:
        for dependency_id in parse_id_list(depends):
            dependency = resolve_task(dependency_id)
            if dependency["project_id"] != project["id"]:
                raise typer.BadParameter(
                    f"task {dependency_id} belongs to another project"
                )
            toggle_dependency(draft, cast(EntityId, dependency["id"]))

    if depends_match is not None:
        for search in depends_match:
            dependency = _single_candidate(project_tasks, search)
            if dependency["id"] not in draft["dependencies"]:
                toggle_dependency(draft, cast(EntityId, dependency["id"]))

    try:
        validate_draft(draft)
    except ValueError as e:
        error_console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    id = TASK_REPO.save_new_task(draft)
    single_task_view(project["name"], TASK_REPO.get_task(id))


def _single_candidate(tasks: list[Task], search: str) -> Task:
    candidates = dependency_candidates(tasks, search)
    if len(candidates) == 0:
        raise typer.BadParameter(f"no task name contains '{search}'")
    if len(candidates) > 1:
        names = ", ".join(task["name"] for task in candidates)
        raise typer.BadParameter(f"'{search}' matches several tasks: {names}")
    return candidates[0]


@app.command("list, ls", no_args_is_help=True)
def list_tasks(
    project_id: int,
    search: Annotated[
        Optional[str],
        typer.Option("--search", "-s", help="only tasks whose name contains this"),
    ] = None,
) -> None:
    """List a project's tasks in chart row order."""
    project = resolve_project(project_id)
    assert project["id"] is not None
    tasks = TASK_REPO.get_project_tasks(project["id"])
    if search is not None:
        tasks = dependency_candidates(tasks, search)
    tasks_view(project["name"], tasks)


@app.command("move, mv", no_args_is_help=True)
def move(
    id: int,
    days: Annotated[
        int, typer.Option("--days", "-d", help="days to shift by, may be negative")
    ],
) -> None:
    """Shift a task's start and end by the same number of days."""
    _shift(id, "body", days)


@app.command("resize, r", no_args_is_help=True)
def resize(
    id: int,
    days: Annotated[
        int, typer.Option("--days", "-d", help="days to move the edge by")
    ],
    left: Annotated[
        bool,
        typer.Option(
            "--left/--right",
            help="move the start date (--left) or the end date (--right)",
        ),
    ] = False,
) -> None:
    """Move one edge of a task; a resize that inverts the dates is refused."""
    _shift(id, "left_edge" if left else "right_edge", days)


def _shift(id: int, region: HitRegion, days: int) -> None:
    task, project = resolve_task_with_project(id)
    task_id = cast(EntityId, task["id"])

    with GanttBoard(project, TASK_REPO, CONFIGURATION_REPO.get_config()) as board:
        commit = board.shift_bar(task_id, region, days)

    if commit is None and days != 0:
        error_console.print(
            "[yellow]Change discarded: the task would end before it starts[/yellow]"
        )
        raise typer.Exit(1)

    single_task_view(project["name"], TASK_REPO.get_task(task_id))


@app.command("progress, p", no_args_is_help=True)
def progress(
    id: int,
    value: Annotated[int, typer.Argument(callback=validate_progress)],
) -> None:
    """Set progress (snapped to steps of 5); status follows it."""
    task, project = resolve_task_with_project(id)
    task_id = cast(EntityId, task["id"])

    with GanttBoard(project, TASK_REPO, CONFIGURATION_REPO.get_config()) as board:
        board.set_progress(task_id, value)

    single_task_view(project["name"], TASK_REPO.get_task(task_id))


@app.command("depend, dep", no_args_is_help=True)
def depend(id: int, prerequisite_id: int) -> None:
    """Toggle whether a task depends on another task of the same project."""
    task, project = resolve_task_with_project(id)
    prerequisite = resolve_task(prerequisite_id)

    if prerequisite["id"] == task["id"]:
        raise typer.BadParameter("a task cannot depend on itself")
    if prerequisite["project_id"] != task["project_id"]:
        raise typer.BadParameter(f"task {prerequisite_id} belongs to another project")

    toggle_dependency(task, cast(EntityId, prerequisite["id"]))
    task_id = cast(EntityId, task["id"])
    TASK_REPO.modify_task(task_id, dependencies=task["dependencies"])

    single_task_view(project["name"], TASK_REPO.get_task(task_id))
