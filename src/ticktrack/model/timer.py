# SPDX-License-Identifier: MIT

from typing import NotRequired, TypedDict

from ticktrack.model.entry import Entry


class StatusResult(TypedDict):
    running: bool
    entry: NotRequired[Entry]
    elapsed_seconds: NotRequired[int]


class SwitchResult(TypedDict):
    stopped: Entry
    started: Entry


class ListEntriesResult(TypedDict):
    entries: list[Entry]
    total: int
    limit: int
    offset: int
