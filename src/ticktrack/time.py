# SPDX-License-Identifier: MIT

from typing import Optional, cast

import pendulum


def now_utc() -> pendulum.DateTime:
    return truncate_to_millis(pendulum.now("UTC"))


def truncate_to_millis(datetime: pendulum.DateTime) -> pendulum.DateTime:
    """Drop sub-millisecond precision, the resolution every stored instant uses."""
    return datetime.set(microsecond=(datetime.microsecond // 1000) * 1000)


def datetime_to_iso_str(datetime: pendulum.DateTime) -> str:
    """Serialize as a UTC ISO 8601 string with millisecond precision, e.g. 2026-02-20T00:00:00.000Z"""
    return datetime.in_tz("UTC").format("YYYY-MM-DD[T]HH:mm:ss.SSS[Z]")


def datetime_to_iso_str_optional(
    datetime: Optional[pendulum.DateTime],
) -> Optional[str]:
    if datetime is None:
        return None
    return datetime_to_iso_str(datetime)


def datetime_from_str(datetime: str) -> pendulum.DateTime:
    pendulum_date_time = cast(pendulum.DateTime, pendulum.parse(datetime, tz="UTC"))
    return pendulum_date_time.in_tz("UTC")


def datetime_from_str_optional(datetime: Optional[str]) -> Optional[pendulum.DateTime]:
    if datetime is None:
        return None
    return datetime_from_str(datetime)


def datetime_to_display_local_datetime_str(
    datetime: pendulum.DateTime, format: str = "YYYY-MM-DD HH:mm"
) -> str:
    return datetime.in_tz("local").format(format)


def datetime_to_display_local_datetime_str_optional(
    datetime: Optional[pendulum.DateTime], format: str = "YYYY-MM-DD HH:mm"
) -> Optional[str]:
    if datetime is None:
        return None
    return datetime_to_display_local_datetime_str(datetime, format)


def datetime_to_utc_date_str(datetime: pendulum.DateTime) -> str:
    return datetime.in_tz("UTC").format("YYYY-MM-DD")


def seconds_between(start: pendulum.DateTime, end: pendulum.DateTime) -> int:
    """Whole seconds from start to end, truncated toward zero."""
    return int((end - start).total_seconds())
