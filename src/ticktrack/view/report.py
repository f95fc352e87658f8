# SPDX-License-Identifier: MIT

from rich import box
from rich.console import Console
from rich.table import Table

from ticktrack.model.report import ReportResult
from ticktrack.service.date import format_date
from ticktrack.service.duration import format_duration
from ticktrack.view.util import format_money


def report_view(report: ReportResult, group_by: str) -> None:
    console = Console()

    period = report["period"]
    if period["from"] is not None and period["to"] is not None:
        console.print(
            f"[bold]{format_date(period['from'])}[/bold] to "
            f"[bold]{format_date(period['to'])}[/bold]"
        )

    report_table = Table(box=box.SIMPLE, show_footer=True)
    report_table.add_column(group_by, footer="total")
    report_table.add_column("entries", justify="right")
    report_table.add_column(
        "total", justify="right", footer=format_duration(report["total_seconds"])
    )
    report_table.add_column(
        "billable", justify="right", footer=format_duration(report["billable_seconds"])
    )
    report_table.add_column("amount", justify="right")

    for group in report["groups"]:
        report_table.add_row(
            group["key"],
            str(group["entry_count"]),
            format_duration(group["total_seconds"]),
            format_duration(group["billable_seconds"]),
            format_money(group["billable_amount"], group["currency"]),
        )

    console.print(report_table)
