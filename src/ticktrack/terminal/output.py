# SPDX-License-Identifier: MIT

import json
import logging
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from enum import Enum
from typing import Any, Optional

import pendulum
import typer
from rich.console import Console

from ticktrack.errors import TicktrackError
from ticktrack.state import get_json_output
from ticktrack.time import datetime_to_iso_str

logger = logging.getLogger(__name__)

error_console = Console(stderr=True)


def to_jsonable(value: Any) -> Any:
    """Convert pendulum instants and enums nested in TypedDicts to JSON-ready values."""
    if isinstance(value, pendulum.DateTime):
        return datetime_to_iso_str(value)
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, dict):
        return {key: to_jsonable(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_jsonable(item) for item in value]
    return value


def print_json(payload: dict[str, Any]) -> None:
    typer.echo(json.dumps(to_jsonable(payload), indent=2))


def print_result(
    data: Any,
    message: Optional[str] = None,
    render: Optional[Callable[[], None]] = None,
) -> None:
    """
    Print a successful result: the JSON envelope when --json was given,
    otherwise the human rendering followed by the message.
    """
    if get_json_output():
        print_json({"ok": True, "data": data, "message": message})
        return

    if render is not None:
        render()
    if message is not None:
        Console().print(message)


def print_error(error: TicktrackError) -> None:
    if get_json_output():
        print_json(error.to_dict())
        return

    error_console.print(f"[bold red]Error:[/bold red] {error.message}")
    for suggestion in error.suggestions:
        error_console.print(f"  try: {suggestion}")


@contextmanager
def handle_errors() -> Iterator[None]:
    """Render a TicktrackError and exit with its code."""
    try:
        yield
    except TicktrackError as e:
        logger.debug("command failed with %s: %s", e.code, e.message)
        print_error(e)
        raise typer.Exit(code=e.exit_code) from e
