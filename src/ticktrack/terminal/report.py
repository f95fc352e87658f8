# SPDX-License-Identifier: MIT

from pathlib import Path
from typing import Annotated, Optional

import typer

from ticktrack.model.filter import ExportFilters, ReportFilters
from ticktrack.model.report import ExportFormat, GroupBy
from ticktrack.repository.yaml_repository import storage_errors
from ticktrack.service import report as report_service
from ticktrack.service.project import resolve_project_id
from ticktrack.terminal.app_context import get_app_context
from ticktrack.terminal.entry import DATE_HELP
from ticktrack.terminal.output import handle_errors, print_result
from ticktrack.terminal.parse import parse_range_options, parse_tags_optional
from ticktrack.terminal.timer import ProjectOption
from ticktrack.view.report import report_view


def report(
    ctx: typer.Context,
    group_by: Annotated[
        GroupBy, typer.Option("--group-by", "-g", case_sensitive=False)
    ] = GroupBy.PROJECT,
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
) -> None:
    """Summarize tracked time by project, tag, day or week."""
    app_context = get_app_context(ctx)
    with handle_errors():
        config = app_context.config
        filters: ReportFilters = {"group_by": group_by}
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

        result = report_service.build_report(app_context.repo, filters)

    print_result(result, None, lambda: report_view(result, group_by.value))


def export(
    ctx: typer.Context,
    format: Annotated[
        ExportFormat, typer.Option("--format", case_sensitive=False)
    ] = ExportFormat.CSV,
    output: Annotated[
        Optional[Path],
        typer.Option("--output", "-o", help="file path, defaults to stdout"),
    ] = None,
    project: ProjectOption = None,
    week: Annotated[bool, typer.Option("--week")] = False,
    month: Annotated[bool, typer.Option("--month")] = False,
    from_date: Annotated[Optional[str], typer.Option("--from", help=DATE_HELP)] = None,
    to_date: Annotated[Optional[str], typer.Option("--to", help=DATE_HELP)] = None,
) -> None:
    """Export entries as CSV or JSON."""
    app_context = get_app_context(ctx)
    with handle_errors():
        config = app_context.config
        filters: ExportFilters = {"format": format}
        date_range = parse_range_options(
            config["week_start"],
            week=week,
            month=month,
            from_date=from_date,
            to_date=to_date,
        )
        if "from" in date_range:
            filters["from"] = date_range["from"]
        if "to" in date_range:
            filters["to"] = date_range["to"]
        project_id = resolve_project_id(app_context.repo, project)
        if project_id is not None:
            filters["project_id"] = project_id

        result = report_service.export_entries(app_context.repo, filters)

    if output is not None:
        with handle_errors(), storage_errors("writing the export file"):
            output.write_text(result["data"], encoding="utf-8")
        print_result(
            {
                "path": str(output),
                "format": result["format"],
                "entry_count": result["entry_count"],
            },
            f"Exported {result['entry_count']} entries to {output}",
        )
        return

    print_result(result, None, lambda: typer.echo(result["data"], nl=False))
