# SPDX-License-Identifier: MIT

import csv
import io
import json
import logging
from collections.abc import Iterable, Mapping
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Optional, assert_never

from ticktrack.model.entity_id import EntityId
from ticktrack.model.entry import Entry
from ticktrack.model.filter import DateRange, ExportFilters, ReportFilters
from ticktrack.model.project import Project
from ticktrack.model.report import (
    NO_PROJECT_KEY,
    UNKNOWN_PROJECT_KEY,
    UNTAGGED_KEY,
    ExportFormat,
    ExportResult,
    GroupBy,
    ReportGroup,
    ReportPeriod,
    ReportResult,
)
from ticktrack.repository.repository import Repository
from ticktrack.time import (
    datetime_to_iso_str,
    datetime_to_iso_str_optional,
    datetime_to_utc_date_str,
)

logger = logging.getLogger(__name__)

EXPORT_CSV_HEADER = [
    "id",
    "description",
    "project",
    "start_time",
    "end_time",
    "duration_seconds",
    "tags",
    "billable",
]

_CENTS = Decimal("0.01")


def _duration_of(entry: Entry) -> int:
    # A running entry has no duration yet and contributes nothing
    duration = entry["duration_seconds"]
    return duration if duration is not None else 0


def _sum_seconds(entries: Iterable[Entry]) -> tuple[int, int]:
    total_seconds = 0
    billable_seconds = 0
    for entry in entries:
        duration = _duration_of(entry)
        total_seconds += duration
        if entry["billable"]:
            billable_seconds += duration
    return total_seconds, billable_seconds


def _group_keys(
    entry: Entry, group_by: GroupBy, project_lookup: Mapping[EntityId, Project]
) -> list[str]:
    match group_by:
        case GroupBy.PROJECT:
            if entry["project_id"] is None:
                return [NO_PROJECT_KEY]
            project = project_lookup.get(entry["project_id"])
            return [project["name"] if project is not None else UNKNOWN_PROJECT_KEY]
        case GroupBy.TAG:
            if len(entry["tags"]) == 0:
                return [UNTAGGED_KEY]
            return list(entry["tags"])
        case GroupBy.DAY:
            return [datetime_to_utc_date_str(entry["start_time"])]
        case GroupBy.WEEK:
            start = entry["start_time"].in_tz("UTC").start_of("day")
            week_start = start.subtract(days=start.day_of_week)
            return [f"Week of {datetime_to_utc_date_str(week_start)}"]
        case _:
            assert_never(group_by)


def billable_amount(billable_seconds: int, rate: float) -> float:
    """Hours times rate, rounded half-up to cents."""
    amount = Decimal(billable_seconds) / Decimal(3600) * Decimal(str(rate))
    return float(amount.quantize(_CENTS, rounding=ROUND_HALF_UP))


def _build_group(
    key: str,
    members: list[Entry],
    group_by: GroupBy,
    project_lookup: Mapping[EntityId, Project],
) -> ReportGroup:
    total_seconds, billable_seconds = _sum_seconds(members)

    amount: Optional[float] = None
    currency: Optional[str] = None
    if group_by == GroupBy.PROJECT:
        # Every member of a project group shares the same project reference
        project_id = members[0]["project_id"]
        project = project_lookup.get(project_id) if project_id is not None else None
        if project is not None and project["rate"] is not None:
            amount = billable_amount(billable_seconds, project["rate"])
            currency = project["currency"]

    return {
        "key": key,
        "total_seconds": total_seconds,
        "billable_seconds": billable_seconds,
        "billable_amount": amount,
        "currency": currency,
        "entry_count": len(members),
        "entries": members,
    }


def _report_period(entries: list[Entry], date_range: Optional[DateRange]) -> ReportPeriod:
    date_range = date_range if date_range is not None else {}

    period_from = date_range.get("from")
    if period_from is None and len(entries) > 0:
        period_from = entries[0]["start_time"]

    period_to = date_range.get("to")
    if period_to is None and len(entries) > 0:
        last = entries[-1]
        period_to = last["end_time"] if last["end_time"] is not None else last["start_time"]

    return {"from": period_from, "to": period_to}


def generate_report(
    entries: list[Entry],
    group_by: GroupBy,
    project_lookup: Mapping[EntityId, Project],
    date_range: Optional[DateRange] = None,
) -> ReportResult:
    """
    Aggregate already-filtered entries into groups.

    entries are expected in start_time ascending order; groups come out in
    the order their key is first seen. Tag grouping puts an entry in one
    group per tag, so group totals may add up to more than the report
    total. The report totals are always taken over the ungrouped entries.

    billable_amount and currency are only filled for project grouping, and
    only for projects with a rate.
    """
    grouped: dict[str, list[Entry]] = {}
    for entry in entries:
        for key in _group_keys(entry, group_by, project_lookup):
            grouped.setdefault(key, []).append(entry)

    groups = [
        _build_group(key, members, group_by, project_lookup)
        for key, members in grouped.items()
    ]
    total_seconds, billable_seconds = _sum_seconds(entries)

    return {
        "period": _report_period(entries, date_range),
        "total_seconds": total_seconds,
        "billable_seconds": billable_seconds,
        "groups": groups,
    }


def _load_project_lookup(
    repo: Repository, entries: Iterable[Entry]
) -> dict[EntityId, Project]:
    project_lookup: dict[EntityId, Project] = {}
    seen: set[EntityId] = set()
    for entry in entries:
        project_id = entry["project_id"]
        if project_id is None or project_id in seen:
            continue
        seen.add(project_id)
        project = repo.get_project(project_id)
        if project is not None:
            project_lookup[project_id] = project
    return project_lookup


def build_report(repo: Repository, filters: Optional[ReportFilters] = None) -> ReportResult:
    filters = filters if filters is not None else {}
    group_by = GroupBy(filters.get("group_by", GroupBy.PROJECT))

    with repo.transaction():
        entries = repo.get_entries_for_report(filters)
        project_lookup = _load_project_lookup(repo, entries)

    date_range: DateRange = {}
    if "from" in filters:
        date_range["from"] = filters["from"]
    if "to" in filters:
        date_range["to"] = filters["to"]

    logger.debug("report over %d entries grouped by %s", len(entries), group_by)
    return generate_report(entries, group_by, project_lookup, date_range)


def _project_name(entry: Entry, project_lookup: Mapping[EntityId, Project]) -> Optional[str]:
    if entry["project_id"] is None:
        return None
    project = project_lookup.get(entry["project_id"])
    return project["name"] if project is not None else None


def _export_json(entries: list[Entry], project_lookup: Mapping[EntityId, Project]) -> str:
    rows: list[dict[str, Any]] = [
        {
            "id": entry["id"],
            "description": entry["description"],
            "project": _project_name(entry, project_lookup),
            "start_time": datetime_to_iso_str(entry["start_time"]),
            "end_time": datetime_to_iso_str_optional(entry["end_time"]),
            "duration_seconds": entry["duration_seconds"],
            "tags": entry["tags"],
            "billable": entry["billable"],
        }
        for entry in entries
    ]
    return json.dumps(rows, indent=2)


def _export_csv(entries: list[Entry], project_lookup: Mapping[EntityId, Project]) -> str:
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(EXPORT_CSV_HEADER)
    for entry in entries:
        project_name = _project_name(entry, project_lookup)
        writer.writerow(
            [
                entry["id"],
                entry["description"],
                project_name if project_name is not None else "",
                datetime_to_iso_str(entry["start_time"]),
                datetime_to_iso_str_optional(entry["end_time"]) or "",
                entry["duration_seconds"] if entry["duration_seconds"] is not None else "",
                "; ".join(entry["tags"]),
                "true" if entry["billable"] else "false",
            ]
        )
    return buffer.getvalue()


def export_entries(repo: Repository, filters: Optional[ExportFilters] = None) -> ExportResult:
    """
    Dump the matching entries as CSV (the default) or as a JSON array, with
    project ids resolved to names.
    """
    filters = filters if filters is not None else {}
    export_format = ExportFormat(filters.get("format", ExportFormat.CSV))

    report_filters: ReportFilters = {}
    if "project_id" in filters:
        report_filters["project_id"] = filters["project_id"]
    if "from" in filters:
        report_filters["from"] = filters["from"]
    if "to" in filters:
        report_filters["to"] = filters["to"]

    with repo.transaction():
        entries = repo.get_entries_for_report(report_filters)
        project_lookup = _load_project_lookup(repo, entries)

    match export_format:
        case ExportFormat.CSV:
            data = _export_csv(entries, project_lookup)
        case ExportFormat.JSON:
            data = _export_json(entries, project_lookup)
        case _:
            assert_never(export_format)

    return {"data": data, "format": export_format, "entry_count": len(entries)}
