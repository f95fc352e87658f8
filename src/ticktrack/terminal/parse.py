# SPDX-License-Identifier: MIT

from typing import Optional

import pendulum

from ticktrack.errors import ValidationError
from ticktrack.model.filter import DateRange, RangeFlags
from ticktrack.service.date import parse_date
from ticktrack.service.date_range import resolve_range
from ticktrack.service.duration import parse_duration
from ticktrack.service.tag import parse_tags


def parse_date_optional(date: Optional[str]) -> Optional[pendulum.DateTime]:
    if date is None:
        return None
    return parse_date(date)


def parse_duration_optional(duration: Optional[str]) -> Optional[int]:
    if duration is None:
        return None
    return parse_duration(duration)


def parse_tags_optional(tags: Optional[list[str]]) -> Optional[list[str]]:
    if tags is None:
        return None
    return parse_tags(tags)


def parse_range_options(
    week_start: str,
    today: bool = False,
    yesterday: bool = False,
    week: bool = False,
    month: bool = False,
    from_date: Optional[str] = None,
    to_date: Optional[str] = None,
) -> DateRange:
    flags: RangeFlags = {
        "today": today,
        "yesterday": yesterday,
        "week": week,
        "month": month,
    }
    parsed_from = parse_date_optional(from_date)
    parsed_to = parse_date_optional(to_date)
    if parsed_from is not None:
        flags["from"] = parsed_from
    if parsed_to is not None:
        flags["to"] = parsed_to
    if parsed_from is not None and parsed_to is not None and parsed_to < parsed_from:
        raise ValidationError(
            "--to must not be before --from.",
            {"from": from_date, "to": to_date},
        )
    return resolve_range(flags, week_start=week_start)
