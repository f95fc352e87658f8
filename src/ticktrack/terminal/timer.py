# SPDX-License-Identifier: MIT

from typing import Annotated, Optional

import typer

from ticktrack.service import timer
from ticktrack.service.duration import format_duration
from ticktrack.terminal.app_context import get_app_context
from ticktrack.terminal.output import handle_errors, print_result
from ticktrack.terminal.parse import parse_date_optional, parse_tags_optional
from ticktrack.view.entry import single_entry_view, status_view

ProjectOption = Annotated[
    Optional[str], typer.Option("--project", "-p", help="project id or name")
]
TagOption = Annotated[
    Optional[list[str]],
    typer.Option("--tag", "-t", help="accepts multiple tag options or a comma list"),
]
AtOption = Annotated[
    Optional[str],
    typer.Option("--at", help='valid inputs: "now", "10 minutes ago", "today 9am", ISO 8601'),
]


def start(
    ctx: typer.Context,
    description: Annotated[Optional[str], typer.Argument()] = None,
    project: ProjectOption = None,
    tags: TagOption = None,
    billable: Annotated[
        Optional[bool], typer.Option("--billable/--no-billable")
    ] = None,
    at: AtOption = None,
) -> None:
    """Start a timer."""
    app_context = get_app_context(ctx)
    with handle_errors():
        config = app_context.config
        entry = timer.start_timer(
            app_context.repo,
            description=description,
            project=project if project is not None else config["default_project"],
            tags=parse_tags_optional(tags),
            billable=billable if billable is not None else config["default_billable"],
            at=parse_date_optional(at),
        )
        project_name = app_context.project_name(entry["project_id"])

    print_result(
        entry,
        f"Started: {entry['description'] or '(no description)'}",
        lambda: single_entry_view(entry, project_name),
    )


def stop(
    ctx: typer.Context,
    description: Annotated[
        Optional[str], typer.Option("--description", "-d")
    ] = None,
    tags: TagOption = None,
    at: AtOption = None,
) -> None:
    """Stop the running timer."""
    app_context = get_app_context(ctx)
    with handle_errors():
        entry = timer.stop_timer(
            app_context.repo,
            at=parse_date_optional(at),
            description=description,
            tags=parse_tags_optional(tags),
        )
        project_name = app_context.project_name(entry["project_id"])

    print_result(
        entry,
        f"Stopped after {format_duration(entry['duration_seconds'] or 0)}",
        lambda: single_entry_view(entry, project_name),
    )


def status(ctx: typer.Context) -> None:
    """Show the running timer, if any."""
    app_context = get_app_context(ctx)
    with handle_errors():
        result = timer.get_status(app_context.repo)
        project_name = (
            app_context.project_name(result["entry"]["project_id"])
            if result["running"]
            else None
        )

    print_result(result, None, lambda: status_view(result, project_name))


def resume(
    ctx: typer.Context,
    id: Annotated[
        Optional[str],
        typer.Argument(help="entry to resume, defaults to the last stopped entry"),
    ] = None,
) -> None:
    """Start a new timer copying a previous entry."""
    app_context = get_app_context(ctx)
    with handle_errors():
        entry = timer.resume_timer(app_context.repo, id)
        project_name = app_context.project_name(entry["project_id"])

    print_result(
        entry,
        f"Resumed: {entry['description'] or '(no description)'}",
        lambda: single_entry_view(entry, project_name),
    )


def switch(
    ctx: typer.Context,
    description: str,
    project: ProjectOption = None,
    tags: TagOption = None,
) -> None:
    """Stop the running timer and start a new one."""
    app_context = get_app_context(ctx)
    with handle_errors():
        result = timer.switch_timer(
            app_context.repo,
            description,
            project=project,
            tags=parse_tags_optional(tags),
        )
        project_name = app_context.project_name(result["started"]["project_id"])

    stopped = result["stopped"]
    print_result(
        result,
        f"Stopped {stopped['description'] or '(no description)'} after "
        f"{format_duration(stopped['duration_seconds'] or 0)}",
        lambda: single_entry_view(result["started"], project_name),
    )


def cancel(ctx: typer.Context) -> None:
    """Discard the running timer without recording it."""
    app_context = get_app_context(ctx)
    with handle_errors():
        entry = timer.cancel_timer(app_context.repo)

    print_result(
        entry, f"Cancelled: {entry['description'] or '(no description)'}"
    )
