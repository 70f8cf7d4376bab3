# SPDX-License-Identifier: MIT

from pathlib import Path
from typing import Annotated, Any, Optional, cast, get_args

import typer
from rich.console import Console
from yaml import YAMLError, load

try:
    from yaml import CLoader as Loader
except ImportError:
    from yaml import Loader  # type: ignore[assignment]

from gantry.configuration import Density
from gantry.model.drag_state import PointerEvent, PointerEventKind
from gantry.repository.configuration import CONFIGURATION_REPO
from gantry.repository.task import TASK_REPO
from gantry.service.board import GanttBoard
from gantry.terminal.custom_typer import AliasedTyperGroup
from gantry.terminal.resolve import resolve_project
from gantry.terminal.validate import validate_density
from gantry.view.gantt import gantt_view
from gantry.view.svg import render_svg

app = typer.Typer(cls=AliasedTyperGroup, no_args_is_help=True)

POINTER_EVENT_KINDS = get_args(PointerEventKind)


def _open_board(project_id: int, density: Optional[str]) -> GanttBoard:
    project = resolve_project(project_id)
    return GanttBoard(
        project,
        TASK_REPO,
        CONFIGURATION_REPO.get_config(),
        density=cast(Optional[Density], density),
    )


DensityOption = Annotated[
    Optional[str],
    typer.Option(
        "--density",
        "-d",
        callback=validate_density,
        help="comfortable (50 px/day) or compact (20 px/day)",
    ),
]


@app.command("show, s", no_args_is_help=True)
def show(project_id: int, density: DensityOption = None) -> None:
    """Draw a project's timeline in the terminal."""
    config = CONFIGURATION_REPO.get_config()
    with _open_board(project_id, density) as board:
        layout = board.layout()
        gantt_view(
            board.project,
            layout,
            board.arrows(layout),
            board.session(),
            pixels_per_cell=config["terminal_pixels_per_cell"],
        )


@app.command("svg", no_args_is_help=True)
def svg(
    project_id: int,
    out: Annotated[Path, typer.Option("--out", "-o", help="file to write")],
    density: DensityOption = None,
) -> None:
    """Write a project's timeline as an SVG document."""
    with _open_board(project_id, density) as board:
        layout = board.layout()
        markup = render_svg(layout, board.arrows(layout), board.session())

    out.write_text(markup)
    Console().print(f"[green]Wrote {out}[/green]")


@app.command("replay", no_args_is_help=True)
def replay(
    project_id: int,
    events_path: Annotated[
        Path,
        typer.Argument(
            exists=True,
            dir_okay=False,
            help="YAML list of pointer events, each with kind (down/move/up), x, y",
        ),
    ],
    density: DensityOption = None,
    show_chart: Annotated[
        bool,
        typer.Option("--show/--no-show", help="draw the chart after the replay"),
    ] = True,
) -> None:
    """
    Feed recorded pointer events through a project's chart.

    Coordinates are chart pixels at the chosen density, as reported by
    `gantt svg`. Every commit produced along the way is saved. A drag left
    unfinished at the end of the file is abandoned.
    """
    events = load_pointer_events(events_path)
    config = CONFIGURATION_REPO.get_config()

    with _open_board(project_id, density) as board:
        for event in events:
            board.handle(event)
        commits = list(board.commit_log)
        abandoned = board.session()
        if abandoned is not None:
            Console(stderr=True).print(
                f"[yellow]Unfinished {abandoned['mode']} drag abandoned[/yellow]"
            )
        board.close()
        layout = board.layout()

        Console().print(f"{len(events)} events, {len(commits)} commits")
        if show_chart:
            gantt_view(
                board.project,
                layout,
                board.arrows(layout),
                pixels_per_cell=config["terminal_pixels_per_cell"],
            )


def load_pointer_events(path: Path) -> list[PointerEvent]:
    """
    Read a pointer event script.

    Raises:
        typer.BadParameter: If the file is not a list of valid events
    """
    try:
        raw: Any = load(path.read_text(), Loader=Loader)
    except YAMLError as e:
        raise typer.BadParameter(f"{path} is not valid YAML: {e}")

    if raw is None:
        return []
    if not isinstance(raw, list):
        raise typer.BadParameter(f"{path} must contain a list of events")

    events: list[PointerEvent] = []
    for index, item in enumerate(raw):
        if not isinstance(item, dict) or item.get("kind") not in POINTER_EVENT_KINDS:
            raise typer.BadParameter(
                f"event {index} needs a kind of {', '.join(POINTER_EVENT_KINDS)}"
            )
        try:
            x = float(item["x"])
            y = float(item.get("y", 0))
        except (KeyError, TypeError, ValueError):
            raise typer.BadParameter(f"event {index} needs numeric x and y")
        events.append({"kind": item["kind"], "x": x, "y": y})
    return events
