# SPDX-License-Identifier: MIT

import re

from ticktrack.errors import InvalidDurationError

ACCEPTED_FORMATS_HINT = (
    'Accepted formats: "1h30m", "1.5h", "90m", "90 minutes", "30s", "1:30:00".'
)

_COLON_RE = re.compile(r"^(\d+):(\d{1,2})(?::(\d{1,2}))?$")

# Longer unit spellings come first so each token takes the longest match,
# and the lookahead keeps a bare "m" or "s" from swallowing part of a word.
_UNIT_TOKEN_PATTERN = (
    r"(\d+(?:\.\d+)?)\s*"
    r"(hours|hour|hrs|hr|h|minutes|minute|mins|min|m|seconds|second|secs|sec|s)"
    r"(?![a-z])"
)
_UNIT_TOKEN_RE = re.compile(_UNIT_TOKEN_PATTERN)
_UNIT_EXPRESSION_RE = re.compile(rf"(?:{_UNIT_TOKEN_PATTERN}\s*)+")

_UNIT_SECONDS = {"h": 3600, "m": 60, "s": 1}


def parse_duration(duration: str) -> int:
    """
    Parse a duration expression into whole seconds.

    Examples:
        "1h30m", "1h 30m"   -> 5400
        "1.5h"              -> 5400
        "90m", "90 minutes" -> 5400
        "1:30:00"           -> 5400 (H:MM:SS)
        "0:45"              -> 2700 (two colon parts are always H:MM)
        "30s"               -> 30

    Raises:
        InvalidDurationError: empty input, text that is not a unit token, or a
            negative total
    """
    trimmed = duration.strip().lower()
    if not trimmed:
        raise InvalidDurationError("Duration cannot be empty.", {"input": duration})

    colon_match = _COLON_RE.match(trimmed)
    if colon_match:
        hours = int(colon_match.group(1))
        minutes = int(colon_match.group(2))
        seconds = int(colon_match.group(3)) if colon_match.group(3) is not None else 0
        return hours * 3600 + minutes * 60 + seconds

    # Leftover text anywhere, a sign included, rejects the whole expression
    if _UNIT_EXPRESSION_RE.fullmatch(trimmed) is None:
        raise InvalidDurationError(
            f'Unable to parse duration: "{duration}". {ACCEPTED_FORMATS_HINT}',
            {"input": duration},
        )

    total_seconds = 0
    for token in _UNIT_TOKEN_RE.finditer(trimmed):
        value = float(token.group(1))
        unit = token.group(2)
        total_seconds += round(value * _UNIT_SECONDS[unit[0]])

    if total_seconds < 0:
        raise InvalidDurationError("Duration cannot be negative.", {"input": duration})
    return total_seconds


def format_duration(seconds: int) -> str:
    """Render seconds as "1h 30m", "45m", "2h 15m 30s" or "0s"."""
    if seconds < 0:
        return f"-{format_duration(-seconds)}"
    if seconds == 0:
        return "0s"

    hours, remainder = divmod(seconds, 3600)
    minutes, secs = divmod(remainder, 60)

    parts = []
    if hours > 0:
        parts.append(f"{hours}h")
    if minutes > 0:
        parts.append(f"{minutes}m")
    if secs > 0:
        parts.append(f"{secs}s")
    return " ".join(parts)
