# SPDX-License-Identifier: MIT

import logging
from typing import Optional

import pendulum

from ticktrack.errors import EntryNotFoundError, ValidationError
from ticktrack.model.entity_id import EntityId
from ticktrack.model.entry import Entry, EntryUpdates, is_running
from ticktrack.model.filter import DEFAULT_LIST_LIMIT, EntryFilters
from ticktrack.model.timer import ListEntriesResult
from ticktrack.model.unset import UNSET, Maybe
from ticktrack.repository.repository import Repository
from ticktrack.service.project import resolve_project_id
from ticktrack.service.tag import normalize_tags
from ticktrack.template.entry import get_entry_template
from ticktrack.time import datetime_to_iso_str, truncate_to_millis

logger = logging.getLogger(__name__)


def validate_time_range(
    start: pendulum.DateTime,
    end: pendulum.DateTime,
    start_key: str,
    end_key: str,
    allow_empty: bool = False,
) -> None:
    # Zero-length ranges only pass when allow_empty is set
    if end < start or (end == start and not allow_empty):
        raise ValidationError(
            "End time must be after start time.",
            {start_key: datetime_to_iso_str(start), end_key: datetime_to_iso_str(end)},
        )


def log_entry(
    repo: Repository,
    from_time: pendulum.DateTime,
    to_time: Optional[pendulum.DateTime] = None,
    duration: Optional[int] = None,
    description: Optional[str] = None,
    project: Optional[str] = None,
    tags: Optional[list[str]] = None,
    billable: Optional[bool] = None,
) -> Entry:
    """
    Record a completed entry after the fact.

    Exactly one of to_time and duration (seconds) must be given.

    Raises:
        ValidationError: both or neither of to_time/duration, or an end
            that is not strictly after from_time
        ProjectNotFoundError: project was given but resolves to nothing
    """
    if to_time is not None and duration is not None:
        raise ValidationError(
            "--to and --duration are mutually exclusive. Use one or the other."
        )
    if to_time is None and duration is None:
        raise ValidationError("Either --to or --duration is required.")

    start = truncate_to_millis(from_time)
    if to_time is not None:
        end = truncate_to_millis(to_time)
    else:
        end = start.add(seconds=duration)  # type: ignore[arg-type]

    validate_time_range(start, end, "from", "to")

    with repo.transaction():
        project_id = resolve_project_id(repo, project)

        entry = get_entry_template()
        entry["project_id"] = project_id
        entry["description"] = description if description is not None else ""
        entry["start_time"] = start
        entry["end_time"] = end
        entry["tags"] = normalize_tags(tags) if tags is not None else []
        if billable is not None:
            entry["billable"] = billable

        return repo.create_entry(entry)


def edit_entry(
    repo: Repository,
    id: EntityId,
    description: Maybe[str] = UNSET,
    project: Maybe[Optional[str]] = UNSET,
    start_time: Maybe[pendulum.DateTime] = UNSET,
    end_time: Maybe[pendulum.DateTime] = UNSET,
    tags: Maybe[list[str]] = UNSET,
    billable: Maybe[bool] = UNSET,
) -> Entry:
    """
    Change only the fields that were passed.

    project=None or project="" clears the project reference. The resulting
    start/end pair, merged from new and existing values, must still satisfy
    end > start.
    """
    with repo.transaction():
        entry = repo.get_entry(id)
        if entry is None:
            raise EntryNotFoundError(id)

        updates: EntryUpdates = {}
        if description is not UNSET:
            updates["description"] = description
        if start_time is not UNSET:
            updates["start_time"] = truncate_to_millis(start_time)
        if end_time is not UNSET:
            if end_time is None:
                raise ValidationError(
                    "End time cannot be cleared. Use 'ticktrack resume' to start a new timer.",
                    {"entry_id": id},
                )
            updates["end_time"] = truncate_to_millis(end_time)
        if tags is not UNSET:
            updates["tags"] = normalize_tags(tags)
        if billable is not UNSET:
            updates["billable"] = billable
        if project is not UNSET:
            updates["project_id"] = resolve_project_id(repo, project)

        merged_start = updates.get("start_time", entry["start_time"])
        merged_end = updates.get("end_time", entry["end_time"])
        if merged_end is not None:
            validate_time_range(merged_start, merged_end, "start_time", "end_time")

        return repo.update_entry(id, updates)


def delete_entry(repo: Repository, id: EntityId) -> Entry:
    """
    Delete a completed entry.

    The running entry is refused here; cancel_timer is the operation that
    discards it.
    """
    with repo.transaction():
        entry = repo.get_entry(id)
        if entry is None:
            raise EntryNotFoundError(id)
        if is_running(entry):
            raise ValidationError(
                f'Entry "{id}" is the running timer. Use \'ticktrack cancel\' to discard it.',
                {"entry_id": id},
                suggestions=["ticktrack cancel"],
            )
        return repo.delete_entry(id)


def list_entries(repo: Repository, filters: Optional[EntryFilters] = None) -> ListEntriesResult:
    query: EntryFilters = dict(filters) if filters is not None else {}  # type: ignore[assignment]
    query["limit"] = query.get("limit", DEFAULT_LIST_LIMIT)
    query["offset"] = query.get("offset", 0)

    entries, total = repo.list_entries(query)
    return {
        "entries": entries,
        "total": total,
        "limit": query["limit"],
        "offset": query["offset"],
    }
