# SPDX-License-Identifier: MIT

import logging
import math
from typing import Optional

import pendulum

from ticktrack.errors import (
    EntryNotFoundError,
    NoEntriesFoundError,
    NoTimerRunningError,
    TimerAlreadyRunningError,
)
from ticktrack.model.entity_id import EntityId
from ticktrack.model.entry import Entry, EntryUpdates
from ticktrack.model.timer import StatusResult, SwitchResult
from ticktrack.repository.repository import Repository
from ticktrack.service.entry import validate_time_range
from ticktrack.service.project import resolve_project_id
from ticktrack.service.tag import normalize_tags
from ticktrack.template.entry import get_entry_template
from ticktrack.time import now_utc, truncate_to_millis

logger = logging.getLogger(__name__)


def _ensure_idle(repo: Repository) -> None:
    running = repo.get_running_entry()
    if running is not None:
        raise TimerAlreadyRunningError(str(running["id"]), running["description"])


def _get_running_or_raise(repo: Repository) -> Entry:
    running = repo.get_running_entry()
    if running is None:
        raise NoTimerRunningError()
    return running


def start_timer(
    repo: Repository,
    description: Optional[str] = None,
    project: Optional[str] = None,
    tags: Optional[list[str]] = None,
    billable: Optional[bool] = None,
    at: Optional[pendulum.DateTime] = None,
) -> Entry:
    """
    Start a new running entry.

    Raises:
        TimerAlreadyRunningError: another entry is still running
        ProjectNotFoundError: project was given but resolves to nothing
    """
    with repo.transaction():
        _ensure_idle(repo)
        project_id = resolve_project_id(repo, project)

        entry = get_entry_template()
        entry["project_id"] = project_id
        entry["description"] = description if description is not None else ""
        entry["start_time"] = truncate_to_millis(at) if at is not None else now_utc()
        entry["end_time"] = None
        entry["tags"] = normalize_tags(tags) if tags is not None else []
        if billable is not None:
            entry["billable"] = billable

        started = repo.create_entry(entry)
        logger.debug("timer started: %s", started["id"])
        return started


def stop_timer(
    repo: Repository,
    at: Optional[pendulum.DateTime] = None,
    description: Optional[str] = None,
    tags: Optional[list[str]] = None,
) -> Entry:
    """
    Stop the running entry at the given instant, or now.

    Raises:
        NoTimerRunningError: nothing is running
        ValidationError: at lies before the entry's start_time
    """
    with repo.transaction():
        running = _get_running_or_raise(repo)
        end_time = truncate_to_millis(at) if at is not None else now_utc()
        # An immediate stop may land on the start millisecond
        validate_time_range(
            running["start_time"], end_time, "start_time", "end_time", allow_empty=True
        )

        updates: EntryUpdates = {"end_time": end_time}
        if description is not None:
            updates["description"] = description
        if tags is not None:
            updates["tags"] = normalize_tags(tags)

        stopped = repo.update_entry(running["id"], updates)  # type: ignore[arg-type]
        logger.debug("timer stopped: %s", stopped["id"])
        return stopped


def get_status(
    repo: Repository, now: Optional[pendulum.DateTime] = None
) -> StatusResult:
    running = repo.get_running_entry()
    if running is None:
        return {"running": False}

    now = now if now is not None else now_utc()
    elapsed = math.floor((now - running["start_time"]).total_seconds())
    return {"running": True, "entry": running, "elapsed_seconds": elapsed}


def resume_timer(
    repo: Repository,
    id: Optional[EntityId] = None,
    now: Optional[pendulum.DateTime] = None,
) -> Entry:
    """
    Start a new entry copying project, description, tags and billable from
    an earlier one: the given entry, or the most recently stopped entry.
    The source entry is left untouched.
    """
    with repo.transaction():
        _ensure_idle(repo)

        source: Entry
        if id is not None:
            entry = repo.get_entry(id)
            if entry is None:
                raise EntryNotFoundError(id)
            source = entry
        else:
            entries, _ = repo.list_entries({"running": False, "limit": 1})
            if len(entries) == 0:
                raise NoEntriesFoundError("No previous entries to resume.")
            source = entries[0]

        entry = get_entry_template()
        entry["project_id"] = source["project_id"]
        entry["description"] = source["description"]
        entry["start_time"] = truncate_to_millis(now) if now is not None else now_utc()
        entry["end_time"] = None
        entry["tags"] = list(source["tags"])
        entry["billable"] = source["billable"]

        resumed = repo.create_entry(entry)
        logger.debug("timer resumed from %s as %s", source["id"], resumed["id"])
        return resumed


def switch_timer(
    repo: Repository,
    description: str,
    project: Optional[str] = None,
    tags: Optional[list[str]] = None,
    now: Optional[pendulum.DateTime] = None,
) -> SwitchResult:
    """
    Stop the running entry and start a new one in a single transaction.

    A failure in the start half (e.g. unknown project) rolls back the stop.
    """
    with repo.transaction():
        stopped = stop_timer(repo, at=now)
        started = start_timer(
            repo,
            description=description,
            project=project,
            tags=tags,
            at=stopped["end_time"],
        )
        return {"stopped": stopped, "started": started}


def cancel_timer(repo: Repository) -> Entry:
    """Discard the running entry without recording it."""
    with repo.transaction():
        running = _get_running_or_raise(repo)
        cancelled = repo.delete_entry(running["id"])  # type: ignore[arg-type]
        logger.debug("timer cancelled: %s", cancelled["id"])
        return cancelled
