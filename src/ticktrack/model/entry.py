# SPDX-License-Identifier: MIT

from typing import Optional, TypedDict

import pendulum

from ticktrack.model.entity_id import EntityId


class Entry(TypedDict):
    id: Optional[EntityId]
    entity_type: str  # "entry"
    project_id: Optional[EntityId]
    description: str
    start_time: pendulum.DateTime
    end_time: Optional[pendulum.DateTime]  # None while the timer is running
    tags: list[str]
    billable: bool
    # Derived from start_time/end_time on every read, never persisted
    duration_seconds: Optional[int]
    created_at: pendulum.DateTime
    updated_at: pendulum.DateTime


class EntryUpdates(TypedDict, total=False):
    """Field-level changes for an entry; a missing key leaves the field unchanged."""

    description: str
    project_id: Optional[EntityId]
    start_time: pendulum.DateTime
    end_time: Optional[pendulum.DateTime]
    tags: list[str]
    billable: bool


def is_running(entry: Entry) -> bool:
    return entry["end_time"] is None
