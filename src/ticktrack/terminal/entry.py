# SPDX-License-Identifier: MIT

from typing import Annotated, Optional

import typer

from ticktrack.errors import ValidationError
from ticktrack.model.filter import EntryFilters
from ticktrack.model.unset import UNSET
from ticktrack.service import entry as entry_service
from ticktrack.service.date import parse_date
from ticktrack.service.duration import format_duration
from ticktrack.service.project import resolve_project_id
from ticktrack.terminal.app_context import get_app_context
from ticktrack.terminal.output import handle_errors, print_result
from ticktrack.terminal.parse import (
    parse_date_optional,
    parse_duration_optional,
    parse_range_options,
    parse_tags_optional,
)
from ticktrack.terminal.timer import ProjectOption, TagOption
from ticktrack.view.entry import entries_view, single_entry_view

DATE_HELP = 'valid inputs: "today 9am", "yesterday 5pm", "2 hours ago", "Feb 26", ISO 8601'


def log(
    ctx: typer.Context,
    from_date: Annotated[str, typer.Option("--from", "-f", help=DATE_HELP)],
    description: Annotated[Optional[str], typer.Argument()] = None,
    to_date: Annotated[Optional[str], typer.Option("--to", help=DATE_HELP)] = None,
    duration: Annotated[
        Optional[str],
        typer.Option("--duration", "-d", help='e.g. "1h30m", "90m", "1:30"'),
    ] = None,
    project: ProjectOption = None,
    tags: TagOption = None,
    billable: Annotated[
        Optional[bool], typer.Option("--billable/--no-billable")
    ] = None,
) -> None:
    """Record a finished entry after the fact."""
    app_context = get_app_context(ctx)
    with handle_errors():
        config = app_context.config
        entry = entry_service.log_entry(
            app_context.repo,
            from_time=parse_date(from_date),
            to_time=parse_date_optional(to_date),
            duration=parse_duration_optional(duration),
            description=description,
            project=project if project is not None else config["default_project"],
            tags=parse_tags_optional(tags),
            billable=billable if billable is not None else config["default_billable"],
        )
        project_name = app_context.project_name(entry["project_id"])

    print_result(
        entry,
        f"Logged {format_duration(entry['duration_seconds'] or 0)}",
        lambda: single_entry_view(entry, project_name),
    )


def edit(
    ctx: typer.Context,
    id: str,
    description: Annotated[
        Optional[str], typer.Option("--description", "-d")
    ] = None,
    project: Annotated[
        Optional[str],
        typer.Option("--project", "-p", help='project id or name, "" to clear'),
    ] = None,
    start: Annotated[Optional[str], typer.Option("--start", "-s", help=DATE_HELP)] = None,
    end: Annotated[Optional[str], typer.Option("--end", "-e", help=DATE_HELP)] = None,
    tags: Annotated[
        Optional[list[str]],
        typer.Option("--tag", "-t", help="replaces the tag list"),
    ] = None,
    billable: Annotated[
        Optional[bool], typer.Option("--billable/--no-billable")
    ] = None,
) -> None:
    """Change fields of an existing entry."""
    app_context = get_app_context(ctx)
    with handle_errors():
        if all(
            option is None
            for option in (description, project, start, end, tags, billable)
        ):
            raise ValidationError(
                "Nothing to change. Pass at least one field option.",
                {"entry_id": id},
                suggestions=[f"ticktrack edit {id} --description \"...\""],
            )

        parsed_tags = parse_tags_optional(tags)
        parsed_start = parse_date_optional(start)
        parsed_end = parse_date_optional(end)
        entry = entry_service.edit_entry(
            app_context.repo,
            id,
            description=description if description is not None else UNSET,
            project=project if project is not None else UNSET,
            start_time=parsed_start if parsed_start is not None else UNSET,
            end_time=parsed_end if parsed_end is not None else UNSET,
            tags=parsed_tags if parsed_tags is not None else UNSET,
            billable=billable if billable is not None else UNSET,
        )
        project_name = app_context.project_name(entry["project_id"])

    print_result(
        entry, f"Updated {entry['id']}", lambda: single_entry_view(entry, project_name)
    )


def delete(ctx: typer.Context, id: str) -> None:
    """Delete a finished entry."""
    app_context = get_app_context(ctx)
    with handle_errors():
        entry = entry_service.delete_entry(app_context.repo, id)

    print_result(entry, f"Deleted {entry['id']}")


def list_(
    ctx: typer.Context,
    project: ProjectOption = None,
    tags: Annotated[
        Optional[list[str]],
        typer.Option("--tag", "-t", help="entries must carry every given tag"),
    ] = None,
    today: Annotated[bool, typer.Option("--today")] = False,
    yesterday: Annotated[bool, typer.Option("--yesterday")] = False,
    week: Annotated[bool, typer.Option("--week")] = False,
    month: Annotated[bool, typer.Option("--month")] = False,
    from_date: Annotated[Optional[str], typer.Option("--from", help=DATE_HELP)] = None,
    to_date: Annotated[Optional[str], typer.Option("--to", help=DATE_HELP)] = None,
    billable: Annotated[
        Optional[bool], typer.Option("--billable/--no-billable")
    ] = None,
    running: Annotated[
        Optional[bool], typer.Option("--running/--stopped")
    ] = None,
    limit: Annotated[int, typer.Option("--limit", "-n", min=1)] = 50,
    offset: Annotated[int, typer.Option("--offset", min=0)] = 0,
) -> None:
    """List entries, newest first."""
    app_context = get_app_context(ctx)
    with handle_errors():
        config = app_context.config
        filters: EntryFilters = {"limit": limit, "offset": offset}
        date_range = parse_range_options(
            config["week_start"], today, yesterday, week, month, from_date, to_date
        )
        if "from" in date_range:
            filters["from"] = date_range["from"]
        if "to" in date_range:
            filters["to"] = date_range["to"]
        project_id = resolve_project_id(app_context.repo, project)
        if project_id is not None:
            filters["project_id"] = project_id
        parsed_tags = parse_tags_optional(tags)
        if parsed_tags:
            filters["tags"] = parsed_tags
        if billable is not None:
            filters["billable"] = billable
        if running is not None:
            filters["running"] = running

        result = entry_service.list_entries(app_context.repo, filters)
        project_names = app_context.project_names()

    print_result(
        result,
        None,
        lambda: entries_view(result["entries"], project_names, result["total"]),
    )
