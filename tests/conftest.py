"""
Shared pytest fixtures for ticktrack tests.
"""

# SPDX-License-Identifier: MIT

import pendulum
import pytest

from ticktrack.repository.yaml_repository import YamlRepository


@pytest.fixture
def repo(tmp_path) -> YamlRepository:
    """
    Provide an empty YAML-backed repository rooted in a temporary directory.

    Parameters
    ----------
    tmp_path : pathlib.Path
        Temporary path provided by pytest.
    """
    return YamlRepository(tmp_path / "data")


@pytest.fixture
def reference() -> pendulum.DateTime:
    """A fixed Wednesday afternoon every relative expression is resolved against."""
    return pendulum.datetime(2026, 2, 25, 14, 30, tz="UTC")


@pytest.fixture(autouse=True)
def isolate_data_dir(tmp_path, monkeypatch) -> None:
    """
    Ensure no test reads or writes the real user data directory.

    Parameters
    ----------
    tmp_path : pathlib.Path
        Temporary path provided by pytest.
    monkeypatch : pytest.MonkeyPatch
        Monkeypatch fixture for environment updates.
    """
    monkeypatch.setenv("TICKTRACK_DIR", str(tmp_path / "cli-data"))
