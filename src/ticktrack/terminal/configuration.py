# SPDX-License-Identifier: MIT

import typer

from ticktrack.service import configuration as configuration_service
from ticktrack.terminal.app_context import get_app_context
from ticktrack.terminal.custom_typer import AliasedTyperGroup
from ticktrack.terminal.output import handle_errors, print_result
from ticktrack.view.configuration import config_view

app = typer.Typer(
    cls=AliasedTyperGroup, no_args_is_help=True, help="Show or change settings"
)


@app.command("show, s")
def show(ctx: typer.Context) -> None:
    """Display current configuration settings."""
    app_context = get_app_context(ctx)
    with handle_errors():
        config = configuration_service.show_config(app_context.config)

    print_result(config, None, lambda: config_view(config, app_context.data_path))


@app.command("get, g", no_args_is_help=True)
def get_value(ctx: typer.Context, key: str) -> None:
    app_context = get_app_context(ctx)
    with handle_errors():
        key, value = configuration_service.get_config_value(app_context.config, key)

    print_result({"key": key, "value": value}, None, lambda: typer.echo(str(value)))


@app.command("set", no_args_is_help=True)
def set_value(ctx: typer.Context, key: str, value: str) -> None:
    """
    Set one setting. "true"/"false" are read as booleans and "null" clears
    a nullable setting.
    """
    app_context = get_app_context(ctx)
    with handle_errors():
        key, new_value, new_config = configuration_service.set_config_value(
            app_context.config,
            key,
            configuration_service.coerce_config_value(value),
        )
        app_context.config_repo.save_config(new_config)

    print_result({"key": key, "value": new_value}, f"{key} = {new_value}")
