# SPDX-License-Identifier: MIT

from enum import StrEnum
from typing import Optional, TypedDict

import pendulum

from ticktrack.model.entry import Entry

NO_PROJECT_KEY = "No Project"
UNKNOWN_PROJECT_KEY = "Unknown Project"
UNTAGGED_KEY = "untagged"


class GroupBy(StrEnum):
    PROJECT = "project"
    TAG = "tag"
    DAY = "day"
    WEEK = "week"


class ExportFormat(StrEnum):
    CSV = "csv"
    JSON = "json"


class ReportGroup(TypedDict):
    key: str
    total_seconds: int
    billable_seconds: int
    billable_amount: Optional[float]
    currency: Optional[str]
    entry_count: int
    entries: list[Entry]


ReportPeriod = TypedDict(
    "ReportPeriod",
    {"from": Optional[pendulum.DateTime], "to": Optional[pendulum.DateTime]},
)


class ReportResult(TypedDict):
    period: ReportPeriod
    total_seconds: int
    billable_seconds: int
    groups: list[ReportGroup]


class ExportResult(TypedDict):
    data: str
    format: ExportFormat
    entry_count: int
