# SPDX-License-Identifier: MIT

import re
from datetime import datetime
from typing import Optional

import pendulum
from dateutil import parser as dtparser

from ticktrack.errors import InvalidDateError
from ticktrack.model.weekday import Weekday
from ticktrack.time import (
    datetime_to_display_local_datetime_str,
    now_utc,
    truncate_to_millis,
)

ACCEPTED_FORMATS_HINT = (
    'Accepted formats: "now", "today 9am", "yesterday 5pm", "2 hours ago", '
    '"last monday 3pm", "2026-02-26", "Feb 26", "2026-02-26T14:30:00Z".'
)

_RELATIVE_RE = re.compile(
    r"^(\d+)\s+(second|minute|hour|day|week)s?\s+ago$", re.IGNORECASE
)
_TODAY_RE = re.compile(r"^today(?:\s+(.+))?$", re.IGNORECASE)
_YESTERDAY_RE = re.compile(r"^yesterday(?:\s+(.+))?$", re.IGNORECASE)
_LAST_WEEKDAY_RE = re.compile(
    r"^last\s+(monday|tuesday|wednesday|thursday|friday|saturday|sunday)(?:\s+(.+))?$",
    re.IGNORECASE,
)
_ISO_DATETIME_RE = re.compile(r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}")

_TIME_24_RE = re.compile(r"^(\d{1,2}):(\d{2})$")
_TIME_12_RE = re.compile(r"^(\d{1,2})(?::(\d{2}))?\s*(am|pm)$")

# Tried in order, first valid match wins. Formats without a year are
# completed with the reference year.
CALENDAR_DATE_FORMATS = (
    "YYYY-MM-DD",
    "MMM D, YYYY",
    "MMM D YYYY",
    "MMM D",
    "MMMM D, YYYY",
    "MMMM D YYYY",
    "MMMM D",
    "MM/DD/YYYY",
    "DD/MM/YYYY",
)


def parse_date(
    date: str, reference: Optional[pendulum.DateTime] = None
) -> pendulum.DateTime:
    """
    Parse a free-form date/time expression into a UTC instant.

    Relative expressions ("now", "2 hours ago", "today 9am", "yesterday",
    "last friday 3pm") are resolved against reference, which defaults to the
    current instant. Absolute expressions are ISO 8601 datetimes or one of
    CALENDAR_DATE_FORMATS. The result carries millisecond precision.

    Raises:
        InvalidDateError: nothing matched, or a time-of-day part was invalid
    """
    trimmed = date.strip()
    if not trimmed:
        raise InvalidDateError("Date cannot be empty.", {"input": date})

    reference = (reference if reference is not None else now_utc()).in_tz("UTC")

    if trimmed.lower() == "now":
        return truncate_to_millis(reference)

    relative_match = _RELATIVE_RE.match(trimmed)
    if relative_match:
        amount = int(relative_match.group(1))
        unit = relative_match.group(2).lower()
        return truncate_to_millis(reference.subtract(**{f"{unit}s": amount}))

    today_match = _TODAY_RE.match(trimmed)
    if today_match:
        base = reference.start_of("day")
        return _apply_time_of_day(base, today_match.group(1), date)

    yesterday_match = _YESTERDAY_RE.match(trimmed)
    if yesterday_match:
        base = reference.subtract(days=1).start_of("day")
        return _apply_time_of_day(base, yesterday_match.group(1), date)

    last_weekday_match = _LAST_WEEKDAY_RE.match(trimmed)
    if last_weekday_match:
        target = Weekday(last_weekday_match.group(1).lower()).day_of_week
        days_back = reference.day_of_week - target
        # "last <today's weekday>" means a week ago, never today
        if days_back <= 0:
            days_back += 7
        base = reference.subtract(days=days_back).start_of("day")
        return _apply_time_of_day(base, last_weekday_match.group(2), date)

    if _ISO_DATETIME_RE.match(trimmed):
        try:
            parsed = pendulum.parse(trimmed, tz="UTC")
        except ValueError:
            parsed = None
        if isinstance(parsed, pendulum.DateTime):
            return truncate_to_millis(parsed.in_tz("UTC"))

    calendar_date = _parse_calendar_date(trimmed, reference)
    if calendar_date is not None:
        return calendar_date

    fallback = _parse_fallback(trimmed, reference)
    if fallback is not None:
        return fallback

    raise InvalidDateError(
        f'Unable to parse date: "{date}". {ACCEPTED_FORMATS_HINT}', {"input": date}
    )


def _apply_time_of_day(
    base: pendulum.DateTime, time_of_day: Optional[str], original_input: str
) -> pendulum.DateTime:
    """Apply "14:30", "9am", "3:30pm" or "12am" to the start of a day."""
    if time_of_day is None:
        return base

    normalized = time_of_day.strip().lower()
    hour: Optional[int] = None
    minute = 0

    time_24_match = _TIME_24_RE.match(normalized)
    time_12_match = _TIME_12_RE.match(normalized)
    if time_24_match:
        hour = int(time_24_match.group(1))
        minute = int(time_24_match.group(2))
    elif time_12_match:
        hour = int(time_12_match.group(1))
        minute = int(time_12_match.group(2)) if time_12_match.group(2) else 0
        if not 1 <= hour <= 12:
            hour = None
        elif time_12_match.group(3) == "pm" and hour != 12:
            hour += 12
        elif time_12_match.group(3) == "am" and hour == 12:
            hour = 0

    if hour is None or not 0 <= hour <= 23 or not 0 <= minute <= 59:
        raise InvalidDateError(
            f'Unable to parse time "{time_of_day}" in "{original_input}". '
            'Use formats like "9am", "14:30", "3:30pm".',
            {"input": original_input},
        )
    return base.set(hour=hour, minute=minute)


def _parse_calendar_date(
    trimmed: str, reference: pendulum.DateTime
) -> Optional[pendulum.DateTime]:
    # Month names are matched against the locale's capitalized spellings
    candidate_text = trimmed.title()
    for date_format in CALENDAR_DATE_FORMATS:
        text = candidate_text
        fmt = date_format
        if "YYYY" not in fmt:
            text = f"{candidate_text} {reference.year}"
            fmt = f"{date_format} YYYY"
        try:
            parsed = pendulum.from_format(text, fmt, tz="UTC")
        except ValueError:
            continue
        return truncate_to_millis(parsed)
    return None


def _parse_fallback(
    trimmed: str, reference: pendulum.DateTime
) -> Optional[pendulum.DateTime]:
    # Fields the text leaves out (year, day, time) come from the reference day
    default = datetime(reference.year, reference.month, reference.day)
    try:
        parsed = dtparser.parse(trimmed, default=default)
    except (ValueError, OverflowError):
        return None
    return truncate_to_millis(pendulum.instance(parsed, tz="UTC").in_tz("UTC"))


def format_date(instant: pendulum.DateTime, format: Optional[str] = None) -> str:
    """Render an instant in local time for display."""
    if format is None:
        return datetime_to_display_local_datetime_str(instant)
    return datetime_to_display_local_datetime_str(instant, format)
