# SPDX-License-Identifier: MIT

from typing import Annotated, Optional, cast

import typer
from rich.console import Console
from rich.table import Table

from gantry import configuration
from gantry.repository.configuration import CONFIGURATION_REPO
from gantry.terminal.custom_typer import AliasedTyperGroup
from gantry.terminal.validate import validate_density, validate_log_level

app = typer.Typer(cls=AliasedTyperGroup, no_args_is_help=True)


def _config_table(
    config: configuration.Configuration, title: Optional[str] = None
) -> Table:
    table = Table(title=title)
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="magenta")

    table.add_row("density", config["density"])
    table.add_row("row_height", str(config["row_height"]))
    table.add_row("bar_inset", str(config["bar_inset"]))
    table.add_row("bar_height", str(config["bar_height"]))
    table.add_row("edge_band_width", str(config["edge_band_width"]))
    table.add_row("progress_handle_width", str(config["progress_handle_width"]))
    table.add_row("terminal_pixels_per_cell", str(config["terminal_pixels_per_cell"]))
    table.add_row(
        "show_header",
        "✓ Enabled" if config["show_header"] else "✗ Disabled",
    )
    table.add_row("log_level", config["log_level"])
    table.add_row("data_path", str(configuration.DATA_PATH))
    return table


@app.command("show, s")
def show() -> None:
    """Display current configuration settings."""
    config = CONFIGURATION_REPO.get_config()

    console = Console()
    console.print(_config_table(config))

    yaml_library_type = "untested"
    try:
        from yaml import CLoader as Loader  # noqa: F401

        yaml_library_type = "C"
    except ImportError:
        yaml_library_type = "Python"

    console.print()
    console.print(f"YAML Library Type: {yaml_library_type}")


@app.command("set")
def set(
    density: Annotated[
        Optional[str],
        typer.Option(
            "--density",
            callback=validate_density,
            help="Default chart density: comfortable or compact",
        ),
    ] = None,
    row_height: Annotated[
        Optional[int], typer.Option("--row-height", min=1, help="Row height in px")
    ] = None,
    bar_inset: Annotated[
        Optional[int],
        typer.Option("--bar-inset", min=0, help="Gap above a bar within its row"),
    ] = None,
    bar_height: Annotated[
        Optional[int], typer.Option("--bar-height", min=1, help="Bar height in px")
    ] = None,
    edge_band_width: Annotated[
        Optional[int],
        typer.Option("--edge-band-width", min=1, help="Width of each resize band"),
    ] = None,
    progress_handle_width: Annotated[
        Optional[int],
        typer.Option(
            "--progress-handle-width", min=1, help="Width of the progress handle"
        ),
    ] = None,
    terminal_pixels_per_cell: Annotated[
        Optional[int],
        typer.Option(
            "--terminal-pixels-per-cell",
            min=1,
            help="Chart pixels drawn per terminal character",
        ),
    ] = None,
    show_header: Annotated[
        Optional[bool],
        typer.Option(
            "--show-header/--no-show-header",
            help="Enable/disable the header above reports",
        ),
    ] = None,
    log_level: Annotated[
        Optional[str],
        typer.Option(
            "--log-level",
            callback=validate_log_level,
            help="DEBUG, INFO, WARNING or ERROR",
        ),
    ] = None,
    data_path: Annotated[
        Optional[str],
        typer.Option(
            "--data-path",
            help="Directory path for storing data files",
        ),
    ] = None,
    remove_data_path: Annotated[
        bool,
        typer.Option(
            "--remove-data-path",
            help="Reset data path to the platform default",
        ),
    ] = False,
) -> None:
    """
    Update configuration settings.
    """
    try:
        CONFIGURATION_REPO.update_config(
            density=cast(Optional[configuration.Density], density),
            row_height=row_height,
            bar_inset=bar_inset,
            bar_height=bar_height,
            edge_band_width=edge_band_width,
            progress_handle_width=progress_handle_width,
            terminal_pixels_per_cell=terminal_pixels_per_cell,
            show_header=show_header,
            log_level=cast(Optional[configuration.LogLevel], log_level),
            data_path=data_path,
            remove_data_path=remove_data_path,
        )
    except ValueError as e:
        Console(stderr=True).print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    config = CONFIGURATION_REPO.get_config()

    console = Console()
    console.print("[green]Configuration updated successfully![/green]\n")
    console.print(_config_table(config, title="Updated Configuration"))
