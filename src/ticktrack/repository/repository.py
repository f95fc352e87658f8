# SPDX-License-Identifier: MIT

from abc import ABC, abstractmethod
from contextlib import AbstractContextManager
from typing import Optional

from ticktrack.model.entity_id import EntityId
from ticktrack.model.entry import Entry, EntryUpdates
from ticktrack.model.filter import EntryFilters, ReportFilters
from ticktrack.model.project import Project, ProjectUpdates


class Repository(ABC):
    """
    Storage contract consumed by the service layer.

    Every mutation returns the resulting object so callers never need an
    extra read. transaction() must be re-entrant: the timer and entry
    services open one around each check-then-act sequence and may call other
    services that open their own.
    """

    @abstractmethod
    def transaction(self) -> AbstractContextManager[None]: ...

    # Entries

    @abstractmethod
    def create_entry(self, entry: Entry) -> Entry: ...

    @abstractmethod
    def get_entry(self, id: EntityId) -> Optional[Entry]: ...

    @abstractmethod
    def update_entry(self, id: EntityId, updates: EntryUpdates) -> Entry: ...

    @abstractmethod
    def delete_entry(self, id: EntityId) -> Entry: ...

    @abstractmethod
    def list_entries(self, filters: EntryFilters) -> tuple[list[Entry], int]: ...

    @abstractmethod
    def get_running_entry(self) -> Optional[Entry]: ...

    # Projects

    @abstractmethod
    def create_project(self, project: Project) -> Project: ...

    @abstractmethod
    def get_project(self, id_or_name: str) -> Optional[Project]: ...

    @abstractmethod
    def update_project(self, id: EntityId, updates: ProjectUpdates) -> Project: ...

    @abstractmethod
    def delete_project(self, id: EntityId, force: bool = False) -> Project: ...

    @abstractmethod
    def list_projects(self, include_archived: bool = False) -> list[Project]: ...

    # Reports

    @abstractmethod
    def get_entries_for_report(self, filters: ReportFilters) -> list[Entry]: ...
