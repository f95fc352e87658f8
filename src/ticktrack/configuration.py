# SPDX-License-Identifier: MIT

import os
from pathlib import Path
from typing import Optional, TypedDict

import platformdirs

APP_NAME = "ticktrack"
DATA_DIR_ENV = "TICKTRACK_DIR"

CONFIG_FILE_NAME = "config.yaml"
ENTRIES_DIR_NAME = "entries"
PROJECTS_DIR_NAME = "projects"
LOCK_FILE_NAME = ".lock"


class Configuration(TypedDict):
    default_project: Optional[str]
    default_billable: bool
    default_currency: str
    week_start: str
    date_format: str


DEFAULT_CONFIGURATION: Configuration = {
    "default_project": None,
    "default_billable": True,
    "default_currency": "USD",
    "week_start": "monday",
    "date_format": "iso",
}


def get_default_configuration() -> Configuration:
    return {
        "default_project": DEFAULT_CONFIGURATION["default_project"],
        "default_billable": DEFAULT_CONFIGURATION["default_billable"],
        "default_currency": DEFAULT_CONFIGURATION["default_currency"],
        "week_start": DEFAULT_CONFIGURATION["week_start"],
        "date_format": DEFAULT_CONFIGURATION["date_format"],
    }


def get_data_path() -> Path:
    """
    Resolve the directory holding the config file and the entry store.

    TICKTRACK_DIR wins when set, otherwise the platform user data directory.
    """
    data_dir = os.environ.get(DATA_DIR_ENV)
    if data_dir:
        return Path(data_dir)
    return platformdirs.user_data_path(APP_NAME)


def get_config_path(data_path: Optional[Path] = None) -> Path:
    return (data_path if data_path is not None else get_data_path()) / CONFIG_FILE_NAME
