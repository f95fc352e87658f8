# SPDX-License-Identifier: MIT

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Optional, Union

import yaml
from fasteners import InterProcessLock

from ticktrack import configuration
from ticktrack.errors import (
    EntryNotFoundError,
    ProjectHasEntriesError,
    ProjectNotFoundError,
    StorageError,
    TimerAlreadyRunningError,
)
from ticktrack.model.entity_id import EntityId, is_project_id
from ticktrack.model.entry import Entry, EntryUpdates
from ticktrack.model.filter import DEFAULT_LIST_LIMIT, EntryFilters, ReportFilters
from ticktrack.model.project import Project, ProjectUpdates
from ticktrack.repository.entry import EntryRepository
from ticktrack.repository.project import ProjectRepository
from ticktrack.repository.repository import Repository

logger = logging.getLogger(__name__)


@contextmanager
def storage_errors(action: str) -> Iterator[None]:
    try:
        yield
    except (OSError, yaml.YAMLError) as e:
        logger.error("storage failure while %s: %s", action, e)
        raise StorageError(f"failed while {action}", e) from e


def entry_matches(entry: Entry, filters: Union[EntryFilters, ReportFilters]) -> bool:
    if "project_id" in filters and entry["project_id"] != filters["project_id"]:
        return False
    if "from" in filters and entry["start_time"] < filters["from"]:
        return False
    if "to" in filters and entry["start_time"] > filters["to"]:
        return False
    if "billable" in filters and entry["billable"] != filters["billable"]:
        return False
    if "tags" in filters:
        for tag in filters["tags"]:
            if tag not in entry["tags"]:
                return False
    if "running" in filters:
        running_filter = filters["running"]  # type: ignore[typeddict-item]
        if running_filter != (entry["end_time"] is None):
            return False
    return True


class YamlRepository(Repository):
    """
    Repository over a directory of per-entity YAML files.

    All access happens inside a transaction guarded by an interprocess lock,
    so two invocations racing on the single running timer are serialized.
    The outermost transaction reloads state from disk on entry, flushes on
    success and discards in-memory changes on failure.
    """

    def __init__(self, data_path: Path) -> None:
        self.data_path = data_path
        self._entry_repo = EntryRepository(data_path / configuration.ENTRIES_DIR_NAME)
        self._project_repo = ProjectRepository(
            data_path / configuration.PROJECTS_DIR_NAME
        )
        self._depth = 0

        with storage_errors("initializing the data directory"):
            self._entry_repo.entries_dir.mkdir(parents=True, exist_ok=True)
            self._project_repo.projects_dir.mkdir(parents=True, exist_ok=True)

        self._lock = InterProcessLock(
            str(data_path / configuration.LOCK_FILE_NAME), logger=logger
        )

    @contextmanager
    def transaction(self) -> Iterator[None]:
        if self._depth > 0:
            self._depth += 1
            try:
                yield
            finally:
                self._depth -= 1
            return

        with storage_errors("acquiring the store lock"):
            self._lock.acquire()
        self._depth = 1
        try:
            self.__discard()
            yield
            with storage_errors("writing the store"):
                self._entry_repo.flush()
                self._project_repo.flush()
        except BaseException:
            self.__discard()
            raise
        finally:
            self._depth = 0
            self._lock.release()

    def __discard(self) -> None:
        self._entry_repo.reset()
        self._project_repo.reset()

    @property
    def __entries(self) -> list[Entry]:
        with storage_errors("reading entries"):
            return self._entry_repo.get_all_entries()

    @property
    def __projects(self) -> list[Project]:
        with storage_errors("reading projects"):
            return self._project_repo.get_all_projects()

    # Entries

    def create_entry(self, entry: Entry) -> Entry:
        with self.transaction():
            if entry["end_time"] is None:
                running = self.get_running_entry()
                if running is not None:
                    raise TimerAlreadyRunningError(
                        str(running["id"]), running["description"]
                    )
            id = self._entry_repo.save_new_entry(entry)
            logger.info("created entry %s", id)
            return self.__get_entry_or_raise(id)

    def get_entry(self, id: EntityId) -> Optional[Entry]:
        with self.transaction():
            with storage_errors("reading entries"):
                return self._entry_repo.get_entry(id)

    def update_entry(self, id: EntityId, updates: EntryUpdates) -> Entry:
        with self.transaction():
            self.__get_entry_or_raise(id)
            self._entry_repo.modify_entry(id, updates)
            logger.info("updated entry %s: %s", id, sorted(updates.keys()))
            return self.__get_entry_or_raise(id)

    def delete_entry(self, id: EntityId) -> Entry:
        with self.transaction():
            entry = self.__get_entry_or_raise(id)
            self._entry_repo.remove_entry(id)
            logger.info("deleted entry %s", id)
            return entry

    def list_entries(self, filters: EntryFilters) -> tuple[list[Entry], int]:
        limit = filters.get("limit", DEFAULT_LIST_LIMIT)
        offset = filters.get("offset", 0)
        with self.transaction():
            matching = [entry for entry in self.__entries if entry_matches(entry, filters)]
        matching.sort(key=lambda entry: entry["start_time"], reverse=True)
        return matching[offset : offset + limit], len(matching)

    def get_running_entry(self) -> Optional[Entry]:
        with self.transaction():
            running = [entry for entry in self.__entries if entry["end_time"] is None]
        if len(running) == 0:
            return None
        return running[0]

    def __get_entry_or_raise(self, id: EntityId) -> Entry:
        entry = self.get_entry(id)
        if entry is None:
            raise EntryNotFoundError(id)
        return entry

    # Projects

    def create_project(self, project: Project) -> Project:
        with self.transaction():
            id = self._project_repo.save_new_project(project)
            logger.info("created project %s (%s)", id, project["name"])
            return self.__get_project_or_raise(id)

    def get_project(self, id_or_name: str) -> Optional[Project]:
        with self.transaction():
            with storage_errors("reading projects"):
                if is_project_id(id_or_name):
                    return self._project_repo.get_project_by_id(id_or_name)
                return self._project_repo.get_project_by_name(id_or_name)

    def update_project(self, id: EntityId, updates: ProjectUpdates) -> Project:
        with self.transaction():
            self.__get_project_or_raise(id)
            self._project_repo.modify_project(id, updates)
            logger.info("updated project %s: %s", id, sorted(updates.keys()))
            return self.__get_project_or_raise(id)

    def delete_project(self, id: EntityId, force: bool = False) -> Project:
        with self.transaction():
            project = self.__get_project_or_raise(id)
            referencing = [
                entry for entry in self.__entries if entry["project_id"] == id
            ]
            if len(referencing) > 0 and not force:
                raise ProjectHasEntriesError(id, len(referencing))

            for entry in referencing:
                self._entry_repo.modify_entry(
                    entry["id"],  # type: ignore[arg-type]
                    {"project_id": None},
                )
            self._project_repo.remove_project(id)
            logger.info(
                "deleted project %s, unassigned %d entries", id, len(referencing)
            )
            return project

    def list_projects(self, include_archived: bool = False) -> list[Project]:
        with self.transaction():
            projects = self.__projects
        if include_archived:
            return projects
        return [project for project in projects if not project["archived"]]

    def __get_project_or_raise(self, id: EntityId) -> Project:
        with storage_errors("reading projects"):
            project = self._project_repo.get_project_by_id(id)
        if project is None:
            raise ProjectNotFoundError(id)
        return project

    # Reports

    def get_entries_for_report(self, filters: ReportFilters) -> list[Entry]:
        with self.transaction():
            matching = [entry for entry in self.__entries if entry_matches(entry, filters)]
        matching.sort(key=lambda entry: entry["start_time"])
        return matching
