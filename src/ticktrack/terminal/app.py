# SPDX-License-Identifier: MIT

import logging
from typing import Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler

from ticktrack import configuration as app_configuration
from ticktrack import state as app_state
from ticktrack.terminal import configuration, entry, project, report, timer
from ticktrack.terminal.app_context import AppContext
from ticktrack.terminal.custom_typer import OrderedAliasedTyperGroup
from ticktrack.terminal.output import handle_errors

app = typer.Typer(
    cls=OrderedAliasedTyperGroup,
    help="ticktrack - time tracking in the CLI",
    no_args_is_help=True,
)
app.command(name="start")(timer.start)
app.command(name="stop")(timer.stop)
app.command(name="status, st")(timer.status)
app.command(name="resume")(timer.resume)
app.command(name="switch, sw", no_args_is_help=True)(timer.switch)
app.command(name="cancel")(timer.cancel)
app.command(name="log", no_args_is_help=True)(entry.log)
app.command(name="edit", no_args_is_help=True)(entry.edit)
app.command(name="delete, rm", no_args_is_help=True)(entry.delete)
app.command(name="list, ls")(entry.list_)
app.command(name="report")(report.report)
app.command(name="export")(report.export)
app.add_typer(project.app, name="project, p")
app.add_typer(configuration.app, name="config, c")


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=verbose)],
    )


@app.callback()
def main_callback(
    ctx: typer.Context,
    json_output: Annotated[
        bool,
        typer.Option("--json", help="Print a JSON envelope instead of tables"),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Log debug output to stderr"),
    ] = False,
) -> None:
    """
    ticktrack - time tracking in the CLI

    Global options that apply to all commands.
    """
    app_state.set_json_output(json_output)
    configure_logging(verbose)

    with handle_errors():
        ctx.obj = AppContext(app_configuration.get_data_path())


def run() -> None:
    app()
