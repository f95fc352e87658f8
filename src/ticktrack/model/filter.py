# SPDX-License-Identifier: MIT

from typing import TypedDict

import pendulum

from ticktrack.model.entity_id import EntityId
from ticktrack.model.report import ExportFormat, GroupBy

DEFAULT_LIST_LIMIT = 50

# Functional syntax because "from" is a keyword. Either bound may be absent,
# meaning the range is unbounded on that side.
DateRange = TypedDict(
    "DateRange",
    {"from": pendulum.DateTime, "to": pendulum.DateTime},
    total=False,
)

RangeFlags = TypedDict(
    "RangeFlags",
    {
        "today": bool,
        "yesterday": bool,
        "week": bool,
        "month": bool,
        "from": pendulum.DateTime,
        "to": pendulum.DateTime,
    },
    total=False,
)

EntryFilters = TypedDict(
    "EntryFilters",
    {
        "project_id": EntityId,
        "tags": list[str],
        "from": pendulum.DateTime,
        "to": pendulum.DateTime,
        "billable": bool,
        "running": bool,
        "limit": int,
        "offset": int,
    },
    total=False,
)

ReportFilters = TypedDict(
    "ReportFilters",
    {
        "project_id": EntityId,
        "tags": list[str],
        "from": pendulum.DateTime,
        "to": pendulum.DateTime,
        "billable": bool,
        "group_by": GroupBy,
    },
    total=False,
)

ExportFilters = TypedDict(
    "ExportFilters",
    {
        "project_id": EntityId,
        "from": pendulum.DateTime,
        "to": pendulum.DateTime,
        "format": ExportFormat,
    },
    total=False,
)
