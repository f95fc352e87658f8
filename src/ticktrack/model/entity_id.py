# SPDX-License-Identifier: MIT

import secrets
import time

EntityId = str

ENTRY_ID_PREFIX = "ent"
PROJECT_ID_PREFIX = "prj"

_BASE36 = "0123456789abcdefghijklmnopqrstuvwxyz"
_RANDOM_SUFFIX_LENGTH = 6


def _to_base36(value: int) -> str:
    if value == 0:
        return "0"
    digits = []
    while value > 0:
        value, remainder = divmod(value, 36)
        digits.append(_BASE36[remainder])
    return "".join(reversed(digits))


def generate_entity_id(prefix: str) -> EntityId:
    timestamp = _to_base36(time.time_ns() // 1_000_000)
    suffix = "".join(secrets.choice(_BASE36) for _ in range(_RANDOM_SUFFIX_LENGTH))
    return f"{prefix}_{timestamp}{suffix}"


def generate_entry_id() -> EntityId:
    return generate_entity_id(ENTRY_ID_PREFIX)


def generate_project_id() -> EntityId:
    return generate_entity_id(PROJECT_ID_PREFIX)


def is_entry_id(value: str) -> bool:
    return value.startswith(f"{ENTRY_ID_PREFIX}_")


def is_project_id(value: str) -> bool:
    return value.startswith(f"{PROJECT_ID_PREFIX}_")
