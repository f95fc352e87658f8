# SPDX-License-Identifier: MIT

from typing import Optional, Union

import pendulum

from ticktrack.errors import ValidationError
from ticktrack.model.filter import DateRange, RangeFlags
from ticktrack.model.weekday import Weekday
from ticktrack.time import now_utc, truncate_to_millis


def parse_weekday(weekday: Union[Weekday, str]) -> Weekday:
    try:
        return Weekday(str(weekday).strip().lower())
    except ValueError as e:
        raise ValidationError(
            f'Invalid weekday: "{weekday}".',
            {"weekday": str(weekday), "accepted": [day.value for day in Weekday]},
        ) from e


def _end_of_day(datetime: pendulum.DateTime) -> pendulum.DateTime:
    # 23:59:59.999, inclusive
    return truncate_to_millis(datetime.end_of("day"))


def resolve_range(
    flags: RangeFlags,
    week_start: Union[Weekday, str] = Weekday.MONDAY,
    reference: Optional[pendulum.DateTime] = None,
) -> DateRange:
    """
    Turn shortcut flags into a concrete date range.

    An explicit "from" or "to" wins outright and every shortcut flag is
    ignored. Otherwise the first true flag in today > yesterday > week >
    month decides the range. No flags and no bounds give an unbounded range.
    """
    explicit_from = flags.get("from")
    explicit_to = flags.get("to")
    if explicit_from is not None or explicit_to is not None:
        explicit: DateRange = {}
        if explicit_from is not None:
            explicit["from"] = explicit_from
        if explicit_to is not None:
            explicit["to"] = explicit_to
        return explicit

    reference = (reference if reference is not None else now_utc()).in_tz("UTC")

    if flags.get("today"):
        return {"from": reference.start_of("day"), "to": _end_of_day(reference)}

    if flags.get("yesterday"):
        yesterday = reference.subtract(days=1)
        return {"from": yesterday.start_of("day"), "to": _end_of_day(yesterday)}

    if flags.get("week"):
        start_day = parse_weekday(week_start).day_of_week
        days_back = reference.day_of_week - start_day
        if days_back < 0:
            days_back += 7
        return {
            "from": reference.subtract(days=days_back).start_of("day"),
            "to": reference,
        }

    if flags.get("month"):
        return {"from": reference.start_of("month"), "to": reference}

    return {}
