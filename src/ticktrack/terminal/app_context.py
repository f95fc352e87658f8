# SPDX-License-Identifier: MIT

from pathlib import Path
from typing import Optional, cast

import typer

from ticktrack import configuration
from ticktrack.model.entity_id import EntityId
from ticktrack.repository.configuration import ConfigurationRepository
from ticktrack.repository.yaml_repository import YamlRepository


class AppContext:
    """Handles built once per invocation and shared with every command."""

    def __init__(self, data_path: Path) -> None:
        self.data_path = data_path
        self.repo = YamlRepository(data_path)
        self.config_repo = ConfigurationRepository(
            configuration.get_config_path(data_path)
        )

    @property
    def config(self) -> configuration.Configuration:
        return self.config_repo.get_config()

    def project_names(self) -> dict[EntityId, str]:
        return {
            cast(EntityId, project["id"]): project["name"]
            for project in self.repo.list_projects(include_archived=True)
        }

    def project_name(self, project_id: Optional[EntityId]) -> Optional[str]:
        if project_id is None:
            return None
        project = self.repo.get_project(project_id)
        return project["name"] if project is not None else None


def get_app_context(ctx: typer.Context) -> AppContext:
    app_context = ctx.find_object(AppContext)
    if app_context is None:
        raise RuntimeError("application context was not initialized")
    return app_context
