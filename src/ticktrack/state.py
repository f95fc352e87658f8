# SPDX-License-Identifier: MIT

from contextvars import ContextVar

_json_output: ContextVar[bool] = ContextVar("json_output", default=False)


def set_json_output(value: bool) -> None:
    _json_output.set(value)


def get_json_output() -> bool:
    return _json_output.get()
