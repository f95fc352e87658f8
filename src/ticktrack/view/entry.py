# SPDX-License-Identifier: MIT

from collections.abc import Mapping
from typing import Optional

from rich import box
from rich.console import Console
from rich.table import Table

from ticktrack.model.entity_id import EntityId
from ticktrack.model.entry import Entry
from ticktrack.model.timer import StatusResult
from ticktrack.service.date import format_date
from ticktrack.service.duration import format_duration
from ticktrack.view.util import format_duration_optional, format_tags


def _project_name(entry: Entry, project_names: Mapping[EntityId, str]) -> str:
    if entry["project_id"] is None:
        return ""
    return project_names.get(entry["project_id"], entry["project_id"])


def entries_view(
    entries: list[Entry],
    project_names: Mapping[EntityId, str],
    total: Optional[int] = None,
) -> None:
    entries_table = Table(box=box.SIMPLE)
    entries_table.add_column("id", no_wrap=True)
    entries_table.add_column("start")
    entries_table.add_column("end")
    entries_table.add_column("duration", justify="right")
    entries_table.add_column("project")
    entries_table.add_column("description")
    entries_table.add_column("tags")
    entries_table.add_column("billable")

    for entry in entries:
        entries_table.add_row(
            entry["id"],
            format_date(entry["start_time"]),
            format_date(entry["end_time"]) if entry["end_time"] is not None else "",
            format_duration_optional(entry["duration_seconds"]),
            _project_name(entry, project_names),
            entry["description"],
            format_tags(entry["tags"]),
            "yes" if entry["billable"] else "no",
        )

    console = Console()
    console.print(entries_table)
    if total is not None and total > len(entries):
        console.print(f"showing {len(entries)} of {total} entries")


def single_entry_view(entry: Entry, project_name: Optional[str]) -> None:
    entry_table = Table(box=box.SIMPLE)
    entry_table.add_column("property")
    entry_table.add_column("value")

    entry_table.add_row("id", entry["id"])
    entry_table.add_row("description", entry["description"])
    entry_table.add_row("project", project_name or "")
    entry_table.add_row("start", format_date(entry["start_time"]))
    entry_table.add_row(
        "end", format_date(entry["end_time"]) if entry["end_time"] is not None else ""
    )
    entry_table.add_row("duration", format_duration_optional(entry["duration_seconds"]))
    entry_table.add_row("tags", format_tags(entry["tags"]))
    entry_table.add_row("billable", "yes" if entry["billable"] else "no")

    console = Console()
    console.print(entry_table)


def status_view(status: StatusResult, project_name: Optional[str]) -> None:
    console = Console()
    if not status["running"]:
        console.print("No timer running.")
        return

    entry = status["entry"]
    description = entry["description"] or "(no description)"
    line = f"[bold green]Running[/bold green] {description}"
    if project_name is not None:
        line += f" [cyan]{project_name}[/cyan]"
    console.print(line)
    console.print(
        f"started {format_date(entry['start_time'])}, "
        f"elapsed {format_duration(status['elapsed_seconds'])}"
    )
