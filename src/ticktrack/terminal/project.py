# SPDX-License-Identifier: MIT

from typing import Annotated, Optional

import typer

from ticktrack.model.unset import UNSET
from ticktrack.service import project as project_service
from ticktrack.terminal.app_context import get_app_context
from ticktrack.terminal.custom_typer import AliasedTyperGroup
from ticktrack.terminal.output import handle_errors, print_result
from ticktrack.view.project import projects_view, single_project_view

app = typer.Typer(cls=AliasedTyperGroup, no_args_is_help=True, help="Manage projects")


@app.command("create, c", no_args_is_help=True)
def create(
    ctx: typer.Context,
    name: str,
    client: Annotated[Optional[str], typer.Option("--client")] = None,
    rate: Annotated[
        Optional[float], typer.Option("--rate", help="hourly rate")
    ] = None,
    currency: Annotated[Optional[str], typer.Option("--currency")] = None,
    color: Annotated[Optional[str], typer.Option("--color", "-col")] = None,
) -> None:
    app_context = get_app_context(ctx)
    with handle_errors():
        config = app_context.config
        project = project_service.create_project(
            app_context.repo,
            name,
            client=client,
            rate=rate,
            currency=currency if currency is not None else config["default_currency"],
            color=color,
        )

    print_result(
        project,
        f"Created project {project['name']}",
        lambda: single_project_view(project),
    )


@app.command("edit, e", no_args_is_help=True)
def edit(
    ctx: typer.Context,
    id_or_name: str,
    name: Annotated[Optional[str], typer.Option("--name")] = None,
    client: Annotated[
        Optional[str], typer.Option("--client", help='"" to clear')
    ] = None,
    rate: Annotated[Optional[float], typer.Option("--rate")] = None,
    clear_rate: Annotated[bool, typer.Option("--clear-rate")] = False,
    currency: Annotated[Optional[str], typer.Option("--currency")] = None,
    color: Annotated[
        Optional[str], typer.Option("--color", "-col", help='"" to clear')
    ] = None,
) -> None:
    app_context = get_app_context(ctx)
    with handle_errors():
        project_rate = UNSET if rate is None else rate
        if clear_rate:
            project_rate = None
        project = project_service.edit_project(
            app_context.repo,
            id_or_name,
            name=name if name is not None else UNSET,
            client=(client or None) if client is not None else UNSET,
            rate=project_rate,
            currency=currency if currency is not None else UNSET,
            color=(color or None) if color is not None else UNSET,
        )

    print_result(
        project,
        f"Updated project {project['name']}",
        lambda: single_project_view(project),
    )


@app.command("archive, a", no_args_is_help=True)
def archive(ctx: typer.Context, id_or_name: str) -> None:
    app_context = get_app_context(ctx)
    with handle_errors():
        project = project_service.archive_project(app_context.repo, id_or_name)

    print_result(project, f"Archived project {project['name']}")


@app.command("delete, d", no_args_is_help=True)
def delete(
    ctx: typer.Context,
    id_or_name: str,
    force: Annotated[
        bool,
        typer.Option("--force", help="delete even if entries reference it"),
    ] = False,
) -> None:
    app_context = get_app_context(ctx)
    with handle_errors():
        project = project_service.delete_project(app_context.repo, id_or_name, force)

    print_result(project, f"Deleted project {project['name']}")


@app.command("list, ls")
def list_(
    ctx: typer.Context,
    archived: Annotated[
        bool, typer.Option("--archived", help="include archived projects")
    ] = False,
) -> None:
    app_context = get_app_context(ctx)
    with handle_errors():
        projects = project_service.list_projects(app_context.repo, archived)

    print_result(projects, None, lambda: projects_view(projects))
