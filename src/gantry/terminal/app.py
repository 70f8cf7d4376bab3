# SPDX-License-Identifier: MIT

from typing import Annotated

import typer

from gantry.log import configure_logging
from gantry.repository.configuration import CONFIGURATION_REPO
from gantry.terminal import configuration, gantt, project, task
from gantry.terminal.custom_typer import OrderedTyperGroup
from gantry.view import state as view_state

app = typer.Typer(
    cls=OrderedTyperGroup,
    help="Gantry - project timelines in the CLI",
    no_args_is_help=True,
)
app.add_typer(project.app, name="project, p", help="Create and list projects")
app.add_typer(task.app, name="task, t", help="Add and edit tasks")
app.add_typer(gantt.app, name="gantt, g", help="Draw and drive the timeline")
app.add_typer(configuration.app, name="config, c", help="Show or change settings")


@app.callback()
def main_callback(
    no_header: Annotated[
        bool,
        typer.Option(
            "--no-header",
            "-nh",
            help="Suppress header output in reports",
        ),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Log engine activity to stderr"),
    ] = False,
) -> None:
    """
    Gantry - project timelines in the CLI

    Global options that apply to all commands.
    """
    if no_header:
        view_state.set_show_header(False)
    if verbose:
        configure_logging(CONFIGURATION_REPO.get_config()["log_level"], verbose=True)


def run() -> None:
    app()
