# SPDX-License-Identifier: MIT

from typing import Optional

from rich.console import Console, Group
from rich.markup import escape
from rich.padding import Padding
from rich.text import Text

from gantry.model.dependency import DependencyArrow
from gantry.model.drag_state import DragSession
from gantry.model.geometry import BarRow, TimelineLayout
from gantry.model.project import Project
from gantry.service.status import style_for
from gantry.time import date_to_str, round_half_up
from gantry.view.header import header

WEEKEND_STYLE = "on grey11"
SESSION_STYLE = "bold black on bright_cyan"


def gantt_view(
    project: Project,
    layout: TimelineLayout,
    arrows: list[DependencyArrow],
    session: Optional[DragSession] = None,
    pixels_per_cell: int = 10,
    left_column_width: int = 24,
    console: Optional[Console] = None,
) -> None:
    """
    Print a project's timeline to the terminal.

    The chart is drawn from the same layout the pointer engine uses: every
    pixel coordinate is divided by pixels_per_cell to get a character column,
    so what is shown matches what a drag would hit.

    Args:
        project: The project being charted
        layout: Layout for the current render pass
        arrows: Dependency arrows computed from the same layout
        session: Active drag session, highlighted when present
        pixels_per_cell: Chart pixels represented by one character
        left_column_width: Width of the task-name column
        console: Console to print to (defaults to a new one)
    """
    header(project["name"], "gantt")

    if console is None:
        console = Console()

    window = layout["window"]
    console.print(
        f"\n[bold]{date_to_str(window['start'])} to {date_to_str(window['end'])}[/bold]"
        f" ({layout['pixels_per_day']} px/day)\n"
    )

    if len(layout["rows"]) == 0:
        console.print("[dim]No tasks to display[/dim]\n")
        return

    chart_elements: list[Text] = build_chart_rows(
        layout, session, pixels_per_cell, left_column_width
    )
    console.print(Padding(Group(*chart_elements), (0, 0, 1, 0)))

    dependency_lines = build_dependency_lines(layout, arrows)
    if dependency_lines:
        console.print("[bold]Dependencies[/bold]")
        for line in dependency_lines:
            console.print(line)
        console.print()


def to_cells(pixels: float, pixels_per_cell: int) -> int:
    return round_half_up(pixels / pixels_per_cell)


def build_chart_rows(
    layout: TimelineLayout,
    session: Optional[DragSession] = None,
    pixels_per_cell: int = 10,
    left_column_width: int = 24,
) -> list[Text]:
    """Build the month, day and task rows of the terminal chart."""
    rows: list[Text] = []
    day_spans = _day_cell_spans(layout, pixels_per_cell)

    # Month bands
    month_row = Text(" " * left_column_width)
    for group in layout["month_groups"]:
        width = to_cells(group["x"] + group["width"], pixels_per_cell) - to_cells(
            group["x"], pixels_per_cell
        )
        month_row.append(group["label"][:width].ljust(width), style="bold cyan")
    rows.append(month_row)

    # Day numbers, plus weekday initials when there is room
    day_row = Text(" " * left_column_width)
    weekday_row = Text(" " * left_column_width)
    show_weekdays = layout["pixels_per_day"] >= 50
    for column, (start, end) in zip(layout["columns"], day_spans):
        width = end - start
        style = "bold white on orange4" if column["is_weekend"] else "bold cyan"
        day_row.append(column["day_label"][-width:].rjust(width), style=style)
        weekday_row.append(column["weekday_label"].rjust(width), style="dim")
    rows.append(day_row)
    if show_weekdays:
        rows.append(weekday_row)

    chart_width = sum(end - start for start, end in day_spans)
    rows.append(Text("─" * (left_column_width + chart_width), style="dim"))

    for row in layout["rows"]:
        rows.append(
            _build_task_row(
                row, layout, day_spans, session, pixels_per_cell, left_column_width
            )
        )

    return rows


def _day_cell_spans(
    layout: TimelineLayout, pixels_per_cell: int
) -> list[tuple[int, int]]:
    spans: list[tuple[int, int]] = []
    pixels_per_day = layout["pixels_per_day"]
    for index in range(len(layout["columns"])):
        start = to_cells(index * pixels_per_day, pixels_per_cell)
        end = to_cells((index + 1) * pixels_per_day, pixels_per_cell)
        spans.append((start, max(end, start + 1)))
    return spans


def _build_task_row(
    row: BarRow,
    layout: TimelineLayout,
    day_spans: list[tuple[int, int]],
    session: Optional[DragSession],
    pixels_per_cell: int,
    left_column_width: int,
) -> Text:
    style = style_for(row["status"])
    is_session_row = session is not None and session["task_id"] == row["task_id"]

    name = row["name"]
    if len(name) > left_column_width - 2:
        name = name[: left_column_width - 3] + "…"
    text = Text(
        f" {name}".ljust(left_column_width),
        style=SESSION_STYLE if is_session_row else style["text"],
    )

    total_cells = day_spans[-1][1] if day_spans else 0
    weekend_cells: set[int] = set()
    for column, (start, end) in zip(layout["columns"], day_spans):
        if column["is_weekend"]:
            weekend_cells.update(range(start, end))

    bar_start = to_cells(row["left"], pixels_per_cell)
    bar_end = max(to_cells(row["left"] + row["width"], pixels_per_cell), bar_start + 1)
    filled_cells = round_half_up((bar_end - bar_start) * row["progress"] / 100)
    filled_end = bar_start + filled_cells

    label = f"{row['progress']}%" if row["show_label"] else ""
    label_start = bar_start + 1

    for cell in range(min(bar_start, total_cells) if bar_start > 0 else 0):
        text.append(" ", style=WEEKEND_STYLE if cell in weekend_cells else "")

    for cell in range(max(bar_start, 0), bar_end):
        char = " "
        if label and label_start <= cell < label_start + len(label):
            char = label[cell - label_start]
        cell_style = style["fill"] if cell < filled_end else style["base"]
        if char != " ":
            cell_style = f"{style['text']} {cell_style}"
        text.append(char, style=cell_style)

    for cell in range(bar_end, total_cells):
        text.append(" ", style=WEEKEND_STYLE if cell in weekend_cells else "")

    return text


def build_dependency_lines(
    layout: TimelineLayout, arrows: list[DependencyArrow]
) -> list[str]:
    names = {row["task_id"]: row["name"] for row in layout["rows"]}
    lines: list[str] = []
    for arrow in arrows:
        prerequisite = escape(names[arrow["prerequisite_id"]])
        dependent = escape(names[arrow["dependent_id"]])
        lines.append(
            f"  {prerequisite} [dim]─▶[/dim] {dependent}"
            f" [dim](x {arrow['start']['x']:g} → {arrow['end']['x']:g})[/dim]"
        )
    return lines
