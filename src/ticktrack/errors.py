# SPDX-License-Identifier: MIT

from typing import Any, Optional


class TicktrackError(Exception):
    """
    Base class for every expected, user-facing failure.

    Carries a machine-readable code, a human message, optional corrective
    suggestions and structured context so the terminal layer can render it
    either as text or as a JSON error envelope.
    """

    code: str = "TICKTRACK_ERROR"
    exit_code: int = 1

    def __init__(
        self,
        message: str,
        suggestions: Optional[list[str]] = None,
        context: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.suggestions = suggestions if suggestions is not None else []
        self.context = context if context is not None else {}

    def to_dict(self) -> dict[str, Any]:
        return {
            "ok": False,
            "error": {
                "code": self.code,
                "message": self.message,
                "suggestions": self.suggestions,
                "context": self.context,
            },
        }


class TimerAlreadyRunningError(TicktrackError):
    code = "TIMER_ALREADY_RUNNING"

    def __init__(self, entry_id: str, description: str) -> None:
        super().__init__(
            f'A timer is already running: "{description}" ({entry_id}). '
            "Stop it first with 'ticktrack stop' or use 'ticktrack switch' "
            "to stop and start in one command.",
            suggestions=["ticktrack stop", 'ticktrack switch "<new description>"'],
            context={"running_entry_id": entry_id, "running_description": description},
        )


class NoTimerRunningError(TicktrackError):
    code = "NO_TIMER_RUNNING"

    def __init__(self) -> None:
        super().__init__(
            "No timer is currently running. Start one with 'ticktrack start'.",
            suggestions=["ticktrack start"],
        )


class EntryNotFoundError(TicktrackError):
    code = "ENTRY_NOT_FOUND"

    def __init__(self, entry_id: str) -> None:
        super().__init__(
            f'Entry "{entry_id}" not found.',
            suggestions=["ticktrack list --today"],
            context={"entry_id": entry_id},
        )


class ProjectNotFoundError(TicktrackError):
    code = "PROJECT_NOT_FOUND"

    def __init__(self, project_ref: str) -> None:
        super().__init__(
            f'Project "{project_ref}" not found.',
            suggestions=["ticktrack project list"],
            context={"project_ref": project_ref},
        )


class ProjectAlreadyExistsError(TicktrackError):
    code = "PROJECT_ALREADY_EXISTS"

    def __init__(self, name: str) -> None:
        super().__init__(
            f'A project named "{name}" already exists.',
            suggestions=["ticktrack project list"],
            context={"project_name": name},
        )


class ProjectHasEntriesError(TicktrackError):
    code = "PROJECT_HAS_ENTRIES"

    def __init__(self, project_id: str, entry_count: int) -> None:
        super().__init__(
            f'Project "{project_id}" has {entry_count} entries. Use --force to '
            "delete anyway (entries will become unassigned).",
            suggestions=[f"ticktrack project delete {project_id} --force"],
            context={"project_id": project_id, "entry_count": entry_count},
        )


class ValidationError(TicktrackError):
    code = "VALIDATION_ERROR"

    def __init__(
        self,
        message: str,
        context: Optional[dict[str, Any]] = None,
        suggestions: Optional[list[str]] = None,
    ) -> None:
        super().__init__(message, suggestions=suggestions, context=context)


class InvalidDurationError(ValidationError):
    pass


class InvalidDateError(ValidationError):
    pass


class NoEntriesFoundError(TicktrackError):
    code = "NO_ENTRIES_FOUND"

    def __init__(
        self, message: str = "No entries found matching the given filters."
    ) -> None:
        super().__init__(message)


class ConfigKeyUnknownError(TicktrackError):
    code = "CONFIG_KEY_UNKNOWN"

    def __init__(self, key: str) -> None:
        super().__init__(
            f'Unknown configuration key: "{key}".',
            suggestions=["ticktrack config show"],
            context={"key": key},
        )


class ConfigValueInvalidError(TicktrackError):
    code = "CONFIG_VALUE_INVALID"

    def __init__(self, key: str, value: Any, expected_type: str) -> None:
        super().__init__(
            f'Invalid value for "{key}": expected {expected_type}, '
            f"got {type(value).__name__}.",
            context={"key": key, "value": value, "expected_type": expected_type},
        )


class StorageError(TicktrackError):
    code = "STORAGE_ERROR"
    exit_code = 2

    def __init__(self, message: str, cause: Optional[BaseException] = None) -> None:
        super().__init__(
            f"Storage error: {message}",
            context={"cause": str(cause)} if cause is not None else {},
        )
