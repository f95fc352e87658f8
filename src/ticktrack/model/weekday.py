# SPDX-License-Identifier: MIT

from enum import StrEnum


class Weekday(StrEnum):
    # Declaration order matches pendulum's day_of_week: Monday = 0 ... Sunday = 6
    MONDAY = "monday"
    TUESDAY = "tuesday"
    WEDNESDAY = "wednesday"
    THURSDAY = "thursday"
    FRIDAY = "friday"
    SATURDAY = "saturday"
    SUNDAY = "sunday"

    @property
    def day_of_week(self) -> int:
        return list(Weekday).index(self)
