"""
Tests for turning range shortcut flags into concrete date ranges.
"""

# SPDX-License-Identifier: MIT

import pendulum
import pytest

from ticktrack.errors import ValidationError
from ticktrack.model.weekday import Weekday
from ticktrack.service.date_range import parse_weekday, resolve_range
from ticktrack.time import datetime_to_iso_str


def _as_iso(date_range):
    return {key: datetime_to_iso_str(value) for key, value in date_range.items()}


def test_today_covers_the_whole_utc_day(reference):
    date_range = resolve_range({"today": True}, reference=reference)

    assert _as_iso(date_range) == {
        "from": "2026-02-25T00:00:00.000Z",
        "to": "2026-02-25T23:59:59.999Z",
    }


def test_yesterday_covers_the_previous_utc_day(reference):
    date_range = resolve_range({"yesterday": True}, reference=reference)

    assert _as_iso(date_range) == {
        "from": "2026-02-24T00:00:00.000Z",
        "to": "2026-02-24T23:59:59.999Z",
    }


@pytest.mark.parametrize(
    ("week_start", "expected_from"),
    [
        (Weekday.MONDAY, "2026-02-23T00:00:00.000Z"),
        (Weekday.SUNDAY, "2026-02-22T00:00:00.000Z"),
        (Weekday.THURSDAY, "2026-02-19T00:00:00.000Z"),
        ("wednesday", "2026-02-25T00:00:00.000Z"),
        ("Tuesday", "2026-02-24T00:00:00.000Z"),
    ],
)
def test_week_starts_at_most_recent_week_start(reference, week_start, expected_from):
    """
    Ensure the week range runs from the latest week start day to the reference.

    Parameters
    ----------
    reference : pendulum.DateTime
        Fixed reference instant, a Wednesday.
    week_start : Weekday | str
        Configured first day of the week.
    expected_from : str
        Expected start of the range as an ISO string.
    """
    date_range = resolve_range({"week": True}, week_start=week_start, reference=reference)

    assert _as_iso(date_range) == {
        "from": expected_from,
        "to": "2026-02-25T14:30:00.000Z",
    }


def test_month_runs_from_first_of_month(reference):
    date_range = resolve_range({"month": True}, reference=reference)

    assert _as_iso(date_range) == {
        "from": "2026-02-01T00:00:00.000Z",
        "to": "2026-02-25T14:30:00.000Z",
    }


def test_flag_precedence_is_fixed(reference):
    """today beats week no matter which flags are combined."""
    assert resolve_range({"today": True, "week": True}, reference=reference) == resolve_range(
        {"today": True}, reference=reference
    )
    assert resolve_range(
        {"yesterday": True, "month": True}, reference=reference
    ) == resolve_range({"yesterday": True}, reference=reference)
    assert resolve_range({"week": True, "month": True}, reference=reference) == resolve_range(
        {"week": True}, reference=reference
    )


def test_explicit_bounds_win_over_flags(reference):
    explicit_from = pendulum.datetime(2026, 1, 1, tz="UTC")

    date_range = resolve_range(
        {"from": explicit_from, "today": True, "week": True}, reference=reference
    )

    assert date_range == {"from": explicit_from}


def test_explicit_to_alone_is_kept(reference):
    explicit_to = pendulum.datetime(2026, 1, 31, tz="UTC")

    assert resolve_range({"to": explicit_to, "month": True}, reference=reference) == {
        "to": explicit_to
    }


@pytest.mark.parametrize(
    "flags",
    [{}, {"today": False, "yesterday": False, "week": False, "month": False}],
)
def test_no_flags_is_unbounded(reference, flags):
    assert resolve_range(flags, reference=reference) == {}


def test_invalid_week_start_is_rejected(reference):
    with pytest.raises(ValidationError):
        resolve_range({"week": True}, week_start="someday", reference=reference)


def test_parse_weekday():
    assert parse_weekday(" Friday ") == Weekday.FRIDAY
    assert parse_weekday(Weekday.SUNDAY).day_of_week == 6
