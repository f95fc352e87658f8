# SPDX-License-Identifier: MIT

from ticktrack.model.entity_type import EntityType
from ticktrack.model.entry import Entry
from ticktrack.time import now_utc


def get_entry_template() -> Entry:
    now = now_utc()
    return {
        "id": None,
        "entity_type": EntityType.ENTRY,
        "project_id": None,
        "description": "",
        "start_time": now,
        "end_time": None,
        "tags": [],
        "billable": True,
        "duration_seconds": None,
        "created_at": now,
        "updated_at": now,
    }
