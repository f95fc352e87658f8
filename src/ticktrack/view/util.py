# SPDX-License-Identifier: MIT

from typing import Optional

from ticktrack.service.duration import format_duration


def format_tags(tags: Optional[list[str]]) -> str:
    """Format a list of tags as a comma-separated string without brackets or quotes."""
    if tags is None or len(tags) == 0:
        return ""
    return ", ".join(tags)


def format_duration_optional(seconds: Optional[int]) -> str:
    if seconds is None:
        return "running"
    return format_duration(seconds)


def format_money(amount: Optional[float], currency: Optional[str]) -> str:
    if amount is None:
        return ""
    return f"{amount:.2f} {currency or ''}".rstrip()
