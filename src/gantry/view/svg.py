# SPDX-License-Identifier: MIT

import html
from typing import Optional

from gantry.model.dependency import DependencyArrow
from gantry.model.drag_state import DragSession
from gantry.model.geometry import BarRow, TimelineLayout
from gantry.service.status import style_for

MONTH_BAND_HEIGHT = 32
DAY_BAND_HEIGHT = 40
HEADER_HEIGHT = MONTH_BAND_HEIGHT + DAY_BAND_HEIGHT
ARROW_COLOR = "#94a3b8"
GRID_COLOR = "#f1f5f9"
WEEKEND_FILL = "#f9fafb"
HANDLE_WIDTH = 6
HANDLE_HEIGHT = 16

ARROWHEAD_MARKER = (
    '<marker id="arrowhead" markerWidth="6" markerHeight="4" refX="5" refY="2" '
    'orient="auto"><path d="M0,0 L6,2 L0,4" fill="#94a3b8" /></marker>'
)


def render_svg(
    layout: TimelineLayout,
    arrows: list[DependencyArrow],
    session: Optional[DragSession] = None,
) -> str:
    """
    Render a layout as a standalone SVG document.

    Bars, grid and arrows are placed at their layout coordinates, shifted
    down by the header bands; nothing is recomputed from task dates here.
    """
    width = layout["width"]
    height = HEADER_HEIGHT + layout["height"]

    parts: list[str] = [
        f'<svg xmlns="http://www.w3.org/2000/svg" width="{width:g}" '
        f'height="{height:g}" viewBox="0 0 {width:g} {height:g}" '
        'font-family="sans-serif">',
        f"<defs>{ARROWHEAD_MARKER}</defs>",
    ]
    parts.extend(_header_markup(layout))
    parts.extend(_grid_markup(layout))

    parts.append(f'<g transform="translate(0,{HEADER_HEIGHT})">')
    for arrow in arrows:
        parts.append(
            f'<path d="{arrow["path"]}" fill="none" stroke="{ARROW_COLOR}" '
            'stroke-width="1.5" marker-end="url(#arrowhead)" '
            f'data-from="{html.escape(arrow["prerequisite_id"])}" '
            f'data-to="{html.escape(arrow["dependent_id"])}" />'
        )
    for row in layout["rows"]:
        parts.extend(_bar_markup(row, session))
    parts.append("</g>")

    parts.append("</svg>")
    return "\n".join(parts)


def _header_markup(layout: TimelineLayout) -> list[str]:
    parts: list[str] = []
    for group in layout["month_groups"]:
        parts.append(
            f'<rect x="{group["x"]:g}" y="0" width="{group["width"]:g}" '
            f'height="{MONTH_BAND_HEIGHT}" fill="#f9fafb" stroke="#e5e7eb" />'
        )
        parts.append(
            f'<text x="{group["x"] + 8:g}" y="{MONTH_BAND_HEIGHT / 2 + 4:g}" '
            f'font-size="12" font-weight="bold" fill="#4b5563">'
            f"{html.escape(group['label'])}</text>"
        )

    pixels_per_day = layout["pixels_per_day"]
    for column in layout["columns"]:
        center = column["x"] + pixels_per_day / 2
        parts.append(
            f'<text x="{center:g}" y="{MONTH_BAND_HEIGHT + 18}" font-size="10" '
            f'text-anchor="middle" font-weight="bold" fill="#374151">'
            f"{column['day_label']}</text>"
        )
        if pixels_per_day >= 50:
            parts.append(
                f'<text x="{center:g}" y="{MONTH_BAND_HEIGHT + 32}" font-size="10" '
                f'text-anchor="middle" fill="#9ca3af">{column["weekday_label"]}</text>'
            )
    return parts


def _grid_markup(layout: TimelineLayout) -> list[str]:
    parts: list[str] = []
    pixels_per_day = layout["pixels_per_day"]
    for column in layout["columns"]:
        if column["is_weekend"]:
            parts.append(
                f'<rect x="{column["x"]:g}" y="{MONTH_BAND_HEIGHT}" '
                f'width="{pixels_per_day}" '
                f'height="{DAY_BAND_HEIGHT + layout["height"]:g}" '
                f'fill="{WEEKEND_FILL}" />'
            )
        line_x = column["x"] + pixels_per_day
        parts.append(
            f'<line x1="{line_x:g}" y1="{MONTH_BAND_HEIGHT}" x2="{line_x:g}" '
            f'y2="{HEADER_HEIGHT + layout["height"]:g}" stroke="{GRID_COLOR}" />'
        )
    return parts


def _bar_markup(row: BarRow, session: Optional[DragSession]) -> list[str]:
    style = style_for(row["status"])
    is_session_row = session is not None and session["task_id"] == row["task_id"]
    stroke_width = 2 if is_session_row else 1
    progress_width = row["width"] * row["progress"] / 100
    handle_x = row["left"] + progress_width - HANDLE_WIDTH / 2
    handle_y = row["top"] + (row["height"] - HANDLE_HEIGHT) / 2

    parts = [
        f'<g data-task-id="{html.escape(row["task_id"])}" '
        f'data-row="{row["row_index"]}">',
        f"<title>{html.escape(row['name'])}: {row['progress']}% complete</title>",
        f'<rect x="{row["left"]:g}" y="{row["top"]:g}" width="{row["width"]:g}" '
        f'height="{row["height"]:g}" rx="6" fill="{style["svg_fill"]}" '
        f'stroke="{style["svg_stroke"]}" stroke-width="{stroke_width}" />',
        f'<rect x="{row["left"]:g}" y="{row["top"]:g}" width="{progress_width:g}" '
        f'height="{row["height"]:g}" rx="6" fill="{style["svg_progress"]}" '
        'opacity="0.9" />',
        f'<rect x="{handle_x:g}" y="{handle_y:g}" width="{HANDLE_WIDTH}" '
        f'height="{HANDLE_HEIGHT}" rx="3" fill="#ffffff" stroke="#9ca3af" />',
    ]
    if row["show_label"]:
        parts.append(
            f'<text x="{row["left"] + 8:g}" y="{row["center_y"] + 4:g}" '
            f'font-size="12" font-weight="500" fill="{style["svg_progress"]}">'
            f"{row['progress']}%</text>"
        )
    parts.append("</g>")
    return parts
