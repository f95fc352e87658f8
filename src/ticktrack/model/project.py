# SPDX-License-Identifier: MIT

from typing import Optional, TypedDict

import pendulum

from ticktrack.model.entity_id import EntityId


class Project(TypedDict):
    id: Optional[EntityId]
    entity_type: str  # "project"
    name: str
    client: Optional[str]
    color: Optional[str]
    rate: Optional[float]  # currency amount per hour
    currency: str
    archived: bool
    created_at: pendulum.DateTime
    updated_at: pendulum.DateTime


class ProjectUpdates(TypedDict, total=False):
    name: str
    client: Optional[str]
    color: Optional[str]
    rate: Optional[float]
    currency: str
    archived: bool
