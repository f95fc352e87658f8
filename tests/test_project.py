"""
Tests for project management and referential integrity with entries.
"""

# SPDX-License-Identifier: MIT

import pytest

from ticktrack.errors import (
    ProjectAlreadyExistsError,
    ProjectHasEntriesError,
    ProjectNotFoundError,
    ValidationError,
)
from ticktrack.service import project as project_service
from ticktrack.service.entry import log_entry


def test_create_project(repo):
    project = project_service.create_project(
        repo, "  Acme  ", client="Acme Corp", rate=120.0, currency="eur", color="red"
    )

    assert project["id"].startswith("prj_")
    assert project["name"] == "Acme"
    assert project["client"] == "Acme Corp"
    assert project["rate"] == 120.0
    assert project["currency"] == "EUR"
    assert project["color"] == "red"
    assert project["archived"] is False


def test_create_project_defaults(repo):
    project = project_service.create_project(repo, "Internal")

    assert project["rate"] is None
    assert project["client"] is None
    assert project["currency"] == "USD"


def test_create_duplicate_name_fails(repo):
    project_service.create_project(repo, "Acme")

    with pytest.raises(ProjectAlreadyExistsError) as excinfo:
        project_service.create_project(repo, "Acme")

    assert excinfo.value.code == "PROJECT_ALREADY_EXISTS"


@pytest.mark.parametrize(("name", "rate"), [("", None), ("   ", None), ("Acme", -1.0)])
def test_create_project_validation(repo, name, rate):
    with pytest.raises(ValidationError):
        project_service.create_project(repo, name, rate=rate)


def test_get_project_by_id_or_name(repo):
    project = project_service.create_project(repo, "Acme")

    assert repo.get_project(project["id"])["name"] == "Acme"
    assert repo.get_project("Acme")["id"] == project["id"]
    assert repo.get_project("acme") is None


def test_edit_project_fields(repo):
    """
    Only passed fields change, and None clears an optional one.

    Parameters
    ----------
    repo : YamlRepository
        Empty repository.
    """
    project_service.create_project(repo, "Acme", client="Acme Corp", rate=100.0)

    edited = project_service.edit_project(repo, "Acme", client=None, currency="gbp")

    assert edited["client"] is None
    assert edited["currency"] == "GBP"
    assert edited["rate"] == 100.0
    assert edited["name"] == "Acme"


def test_rename_project(repo):
    project = project_service.create_project(repo, "Acme")
    project_service.create_project(repo, "Globex")

    with pytest.raises(ProjectAlreadyExistsError):
        project_service.edit_project(repo, project["id"], name="Globex")

    renamed = project_service.edit_project(repo, project["id"], name="Initech")
    assert renamed["name"] == "Initech"
    assert repo.get_project("Acme") is None

    unchanged = project_service.edit_project(repo, "Initech", name="Initech")
    assert unchanged["id"] == project["id"]


def test_edit_unknown_project_fails(repo):
    with pytest.raises(ProjectNotFoundError):
        project_service.edit_project(repo, "Missing", client="x")


def test_archive_hides_project_from_default_list(repo):
    project_service.create_project(repo, "Old")
    project_service.create_project(repo, "Current")

    archived = project_service.archive_project(repo, "Old")

    assert archived["archived"] is True
    assert [p["name"] for p in project_service.list_projects(repo)] == ["Current"]
    assert [
        p["name"] for p in project_service.list_projects(repo, include_archived=True)
    ] == ["Current", "Old"]


def test_list_projects_sorted_by_name(repo):
    for name in ["Zeta", "Alpha", "Mid"]:
        project_service.create_project(repo, name)

    assert [p["name"] for p in project_service.list_projects(repo)] == [
        "Alpha",
        "Mid",
        "Zeta",
    ]


def test_delete_project_with_entries_requires_force(repo, reference):
    """
    Deleting a referenced project is refused unless forced, and forcing
    leaves the entries unassigned.

    Parameters
    ----------
    repo : YamlRepository
        Empty repository.
    reference : pendulum.DateTime
        Fixed reference instant.
    """
    project = project_service.create_project(repo, "Acme")
    entry = log_entry(repo, from_time=reference, duration=60, project="Acme")

    with pytest.raises(ProjectHasEntriesError) as excinfo:
        project_service.delete_project(repo, "Acme")

    assert excinfo.value.context == {"project_id": project["id"], "entry_count": 1}
    assert repo.get_project("Acme") is not None

    deleted = project_service.delete_project(repo, "Acme", force=True)

    assert deleted["id"] == project["id"]
    assert repo.get_project(project["id"]) is None
    assert repo.get_entry(entry["id"])["project_id"] is None


def test_delete_unused_project(repo):
    project = project_service.create_project(repo, "Empty")

    project_service.delete_project(repo, project["id"])

    assert project_service.list_projects(repo, include_archived=True) == []


def test_delete_unknown_project_fails(repo):
    with pytest.raises(ProjectNotFoundError):
        project_service.delete_project(repo, "prj_missing")
