# SPDX-License-Identifier: MIT

import logging
from typing import Optional

from ticktrack.errors import (
    ProjectAlreadyExistsError,
    ProjectNotFoundError,
    ValidationError,
)
from ticktrack.model.entity_id import EntityId
from ticktrack.model.project import Project, ProjectUpdates
from ticktrack.model.unset import UNSET, Maybe
from ticktrack.repository.repository import Repository
from ticktrack.template.project import get_project_template

logger = logging.getLogger(__name__)


def resolve_project_id(repo: Repository, project_ref: Optional[str]) -> Optional[EntityId]:
    """
    Resolve a project id or name to an id.

    Returns None when no reference was given; raises ProjectNotFoundError
    when one was given but matches nothing.
    """
    if project_ref is None or project_ref == "":
        return None
    project = repo.get_project(project_ref)
    if project is None:
        raise ProjectNotFoundError(project_ref)
    return project["id"]


def get_project_or_raise(repo: Repository, id_or_name: str) -> Project:
    project = repo.get_project(id_or_name)
    if project is None:
        raise ProjectNotFoundError(id_or_name)
    return project


def _validate_rate(rate: Optional[float]) -> None:
    if rate is not None and rate < 0:
        raise ValidationError("Rate cannot be negative.", {"rate": rate})


def create_project(
    repo: Repository,
    name: str,
    client: Optional[str] = None,
    rate: Optional[float] = None,
    currency: Optional[str] = None,
    color: Optional[str] = None,
) -> Project:
    name = name.strip()
    if not name:
        raise ValidationError("Project name cannot be empty.")
    _validate_rate(rate)

    with repo.transaction():
        if repo.get_project(name) is not None:
            raise ProjectAlreadyExistsError(name)

        project = get_project_template()
        project["name"] = name
        project["client"] = client
        project["rate"] = rate
        project["color"] = color
        if currency is not None:
            project["currency"] = currency.upper()
        return repo.create_project(project)


def edit_project(
    repo: Repository,
    id_or_name: str,
    name: Maybe[str] = UNSET,
    client: Maybe[Optional[str]] = UNSET,
    rate: Maybe[Optional[float]] = UNSET,
    currency: Maybe[str] = UNSET,
    color: Maybe[Optional[str]] = UNSET,
) -> Project:
    """
    Apply only the fields that were passed; None clears an optional field.
    """
    with repo.transaction():
        project = get_project_or_raise(repo, id_or_name)

        updates: ProjectUpdates = {}
        if name is not UNSET:
            name = name.strip()
            if not name:
                raise ValidationError("Project name cannot be empty.")
            if name != project["name"] and repo.get_project(name) is not None:
                raise ProjectAlreadyExistsError(name)
            updates["name"] = name
        if client is not UNSET:
            updates["client"] = client
        if rate is not UNSET:
            _validate_rate(rate)
            updates["rate"] = rate
        if currency is not UNSET:
            updates["currency"] = currency.upper()
        if color is not UNSET:
            updates["color"] = color

        return repo.update_project(project["id"], updates)  # type: ignore[arg-type]


def archive_project(repo: Repository, id_or_name: str) -> Project:
    with repo.transaction():
        project = get_project_or_raise(repo, id_or_name)
        return repo.update_project(project["id"], {"archived": True})  # type: ignore[arg-type]


def delete_project(repo: Repository, id_or_name: str, force: bool = False) -> Project:
    with repo.transaction():
        project = get_project_or_raise(repo, id_or_name)
        return repo.delete_project(project["id"], force=force)  # type: ignore[arg-type]


def list_projects(repo: Repository, include_archived: bool = False) -> list[Project]:
    return repo.list_projects(include_archived=include_archived)
