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
from ticktrack.model.entity_id import EntityId, generate_entry_id
from ticktrack.model.entry import Entry, EntryUpdates

logger = logging.getLogger(__name__)

_INSTANT_FIELDS = ("start_time", "end_time", "created_at", "updated_at")


def compute_duration_seconds(entry: Entry) -> Optional[int]:
    if entry["end_time"] is None:
        return None
    return time.seconds_between(entry["start_time"], entry["end_time"])


class EntryRepository:
    """One YAML document per entry, loaded lazily and written back on flush."""

    def __init__(self, entries_dir: Path) -> None:
        self.entries_dir = entries_dir
        self._entries: Optional[list[Entry]] = None
        self.is_dirty = False
        self._dirty_ids: set[str] = set()
        self._deleted_ids: set[str] = set()

    @property
    def entries(self) -> list[Entry]:
        if self._entries is None:
            self.__load_data()
        if self._entries is None:
            raise ValueError()
        return self._entries

    def __load_data(self) -> None:
        self._entries = []
        for file_path in sorted(self.entries_dir.iterdir()):
            if file_path.suffix != ".yaml":
                continue
            raw_entry = load(file_path.read_text(), Loader=Loader)
            if raw_entry is not None:
                self._entries.append(self.__convert_entry_for_deserialization(raw_entry))
        logger.debug("loaded %d entries from %s", len(self._entries), self.entries_dir)

    def __save_data(self) -> None:
        # Write dirty entities
        for entry in self.entries:
            if entry["id"] in self._dirty_ids:
                serializable_entry = self.__convert_entry_for_serialization(
                    deepcopy(entry)
                )
                file_path = self.entries_dir / f"{entry['id']}.yaml"
                file_path.write_text(dump(serializable_entry, Dumper=Dumper))

        # Remove hard-deleted entity files
        for entity_id in self._deleted_ids:
            file_path = self.entries_dir / f"{entity_id}.yaml"
            if file_path.exists():
                file_path.unlink()

        self._dirty_ids.clear()
        self._deleted_ids.clear()

    def flush(self) -> bool:
        if self._entries is not None and self.is_dirty:
            self.__save_data()
            self.is_dirty = False
            return True
        return False

    def reset(self) -> None:
        """Forget the in-memory state, including unflushed changes."""
        self._entries = None
        self.is_dirty = False
        self._dirty_ids.clear()
        self._deleted_ids.clear()

    def __convert_entry_for_serialization(self, entry: Entry) -> dict[str, Any]:
        document = cast(dict[str, Any], entry)
        del document["duration_seconds"]
        for field in _INSTANT_FIELDS:
            document[field] = time.datetime_to_iso_str_optional(document[field])
        return document

    def __convert_entry_for_deserialization(self, document: dict[str, Any]) -> Entry:
        for field in _INSTANT_FIELDS:
            document[field] = time.datetime_from_str_optional(document.get(field))
        document["tags"] = document.get("tags") or []
        entry = cast(Entry, document)
        entry["duration_seconds"] = compute_duration_seconds(entry)
        return entry

    def save_new_entry(self, entry: Entry) -> EntityId:
        self.is_dirty = True

        if entry["id"] is None:
            entry["id"] = generate_entry_id()

        # Deduplicate tags
        entry["tags"] = list(dict.fromkeys(entry["tags"]))
        entry["duration_seconds"] = compute_duration_seconds(entry)

        self.entries.append(entry)
        self._dirty_ids.add(entry["id"])
        return entry["id"]

    def modify_entry(self, id: EntityId, updates: EntryUpdates) -> None:
        self.is_dirty = True
        self._dirty_ids.add(id)

        entry = [entry for entry in self.entries if entry["id"] == id][0]
        entry["updated_at"] = time.now_utc()
        if "description" in updates:
            entry["description"] = updates["description"]
        if "project_id" in updates:
            entry["project_id"] = updates["project_id"]
        if "start_time" in updates:
            entry["start_time"] = updates["start_time"]
        if "end_time" in updates:
            entry["end_time"] = updates["end_time"]
        if "tags" in updates:
            entry["tags"] = list(dict.fromkeys(updates["tags"]))
        if "billable" in updates:
            entry["billable"] = updates["billable"]
        entry["duration_seconds"] = compute_duration_seconds(entry)

    def remove_entry(self, id: EntityId) -> None:
        self.is_dirty = True
        self._entries = [entry for entry in self.entries if entry["id"] != id]
        self._dirty_ids.discard(id)
        self._deleted_ids.add(id)

    def get_all_entries(self) -> list[Entry]:
        return deepcopy(self.entries)

    def get_entry(self, id: EntityId) -> Optional[Entry]:
        matches = [entry for entry in self.entries if entry["id"] == id]
        if len(matches) == 0:
            return None
        return deepcopy(matches[0])
