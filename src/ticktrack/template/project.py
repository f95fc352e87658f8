# SPDX-License-Identifier: MIT

from ticktrack.configuration import DEFAULT_CONFIGURATION
from ticktrack.model.entity_type import EntityType
from ticktrack.model.project import Project
from ticktrack.time import now_utc


def get_project_template() -> Project:
    now = now_utc()
    return {
        "id": None,
        "entity_type": EntityType.PROJECT,
        "name": "",
        "client": None,
        "color": None,
        "rate": None,
        "currency": DEFAULT_CONFIGURATION["default_currency"],
        "archived": False,
        "created_at": now,
        "updated_at": now,
    }
