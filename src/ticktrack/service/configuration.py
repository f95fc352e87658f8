# SPDX-License-Identifier: MIT

from copy import deepcopy
from typing import Any, Optional, cast

from ticktrack.configuration import Configuration
from ticktrack.errors import ConfigKeyUnknownError, ConfigValueInvalidError
from ticktrack.model.weekday import Weekday

STRING_OR_NULL = "string | null"
BOOLEAN = "boolean"
STRING = "string"

VALID_KEYS: dict[str, str] = {
    "default_project": STRING_OR_NULL,
    "default_billable": BOOLEAN,
    "default_currency": STRING,
    "week_start": STRING,
    "date_format": STRING,
}


def _is_valid_type(value: Any, expected_type: str) -> bool:
    match expected_type:
        case "string | null":
            return value is None or isinstance(value, str)
        case "boolean":
            return isinstance(value, bool)
        case "string":
            return isinstance(value, str)
        case _:
            return False


def _get_key_type(key: str) -> str:
    expected_type = VALID_KEYS.get(key)
    if expected_type is None:
        raise ConfigKeyUnknownError(key)
    return expected_type


def show_config(config: Configuration) -> Configuration:
    return deepcopy(config)


def get_config_value(config: Configuration, key: str) -> tuple[str, Any]:
    _get_key_type(key)
    return key, config[key]  # type: ignore[literal-required]


def set_config_value(
    config: Configuration, key: str, value: Any
) -> tuple[str, Any, Configuration]:
    """
    Validate and apply one key, returning a new configuration.

    The configuration passed in is left untouched; persisting the returned
    copy is up to the caller.
    """
    expected_type = _get_key_type(key)
    if not _is_valid_type(value, expected_type):
        raise ConfigValueInvalidError(key, value, expected_type)

    if key == "week_start":
        if value.lower() not in [day.value for day in Weekday]:
            raise ConfigValueInvalidError(key, value, "weekday name")
        value = value.lower()

    new_config = cast(Configuration, deepcopy(config))
    new_config[key] = value  # type: ignore[literal-required]
    return key, value, new_config


def coerce_config_value(raw: str) -> Optional[str | bool]:
    """
    Interpret a value typed on the command line: true/false become booleans,
    null becomes None, anything else stays a string.
    """
    match raw.strip().lower():
        case "true":
            return True
        case "false":
            return False
        case "null" | "none":
            return None
        case _:
            return raw
