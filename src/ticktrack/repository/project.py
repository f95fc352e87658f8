# SPDX-License-Identifier: MIT

import logging
from copy import deepcopy
from pathlib import Path
from typing import Any, Optional, cast

from yaml import dump, load

try:
    from yaml import CDumper as Dumper
    from yaml import CLoader as Loader  # noqa: F401
except ImportError:
    from yaml import Dumper, Loader  # type: ignore[assignment]

from ticktrack import time
from ticktrack.model.entity_id import EntityId, generate_project_id
from ticktrack.model.project import Project, ProjectUpdates

logger = logging.getLogger(__name__)


class ProjectRepository:
    def __init__(self, projects_dir: Path) -> None:
        self.projects_dir = projects_dir
        self._projects: Optional[list[Project]] = None
        self.is_dirty = False
        self._dirty_ids: set[str] = set()
        self._deleted_ids: set[str] = set()

    @property
    def projects(self) -> list[Project]:
        if self._projects is None:
            self.__load_data()
        if self._projects is None:
            raise ValueError()
        return self._projects

    def __load_data(self) -> None:
        self._projects = []
        for file_path in sorted(self.projects_dir.iterdir()):
            if file_path.suffix != ".yaml":
                continue
            raw_project = load(file_path.read_text(), Loader=Loader)
            if raw_project is not None:
                self._projects.append(
                    self.__convert_project_for_deserialization(raw_project)
                )
        logger.debug(
            "loaded %d projects from %s", len(self._projects), self.projects_dir
        )

    def __save_data(self) -> None:
        for project in self.projects:
            if project["id"] in self._dirty_ids:
                serializable_project = self.__convert_project_for_serialization(
                    deepcopy(project)
                )
                file_path = self.projects_dir / f"{project['id']}.yaml"
                file_path.write_text(dump(serializable_project, Dumper=Dumper))

        for entity_id in self._deleted_ids:
            file_path = self.projects_dir / f"{entity_id}.yaml"
            if file_path.exists():
                file_path.unlink()

        self._dirty_ids.clear()
        self._deleted_ids.clear()

    def flush(self) -> bool:
        if self._projects is not None and self.is_dirty:
            self.__save_data()
            self.is_dirty = False
            return True
        return False

    def reset(self) -> None:
        self._projects = None
        self.is_dirty = False
        self._dirty_ids.clear()
        self._deleted_ids.clear()

    def __convert_project_for_serialization(self, project: Project) -> dict[str, Any]:
        serializable_project = cast(dict[str, Any], project)
        serializable_project["created_at"] = time.datetime_to_iso_str(
            serializable_project["created_at"]
        )
        serializable_project["updated_at"] = time.datetime_to_iso_str(
            serializable_project["updated_at"]
        )
        return serializable_project

    def __convert_project_for_deserialization(self, project: dict[str, Any]) -> Project:
        deserializable_project = project
        deserializable_project["created_at"] = time.datetime_from_str(
            deserializable_project["created_at"]
        )
        deserializable_project["updated_at"] = time.datetime_from_str(
            deserializable_project["updated_at"]
        )
        return cast(Project, deserializable_project)

    def save_new_project(self, project: Project) -> EntityId:
        self.is_dirty = True

        if project["id"] is None:
            project["id"] = generate_project_id()

        self.projects.append(project)
        self._dirty_ids.add(project["id"])
        return project["id"]

    def modify_project(self, id: EntityId, updates: ProjectUpdates) -> None:
        self.is_dirty = True
        self._dirty_ids.add(id)

        project = [project for project in self.projects if project["id"] == id][0]
        project["updated_at"] = time.now_utc()
        if "name" in updates:
            project["name"] = updates["name"]
        if "client" in updates:
            project["client"] = updates["client"]
        if "color" in updates:
            project["color"] = updates["color"]
        if "rate" in updates:
            project["rate"] = updates["rate"]
        if "currency" in updates:
            project["currency"] = updates["currency"]
        if "archived" in updates:
            project["archived"] = updates["archived"]

    def remove_project(self, id: EntityId) -> None:
        self.is_dirty = True
        self._projects = [project for project in self.projects if project["id"] != id]
        self._dirty_ids.discard(id)
        self._deleted_ids.add(id)

    def get_all_projects(self) -> list[Project]:
        return sorted(deepcopy(self.projects), key=lambda project: project["name"])

    def get_project_by_id(self, id: EntityId) -> Optional[Project]:
        matches = [project for project in self.projects if project["id"] == id]
        if len(matches) == 0:
            return None
        return deepcopy(matches[0])

    def get_project_by_name(self, name: str) -> Optional[Project]:
        matches = [project for project in self.projects if project["name"] == name]
        if len(matches) == 0:
            return None
        return deepcopy(matches[0])
