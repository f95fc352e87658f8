# SPDX-License-Identifier: MIT

import re
from typing import Union

_TAG_SEPARATOR_RE = re.compile(r"[,\s]+")


def normalize_tags(tags: list[str]) -> list[str]:
    """Trim, drop empties and deduplicate while keeping first-seen order."""
    trimmed = [tag.strip() for tag in tags]
    return list(dict.fromkeys(tag for tag in trimmed if len(tag) > 0))


def parse_tags(tags_input: Union[str, list[str]]) -> list[str]:
    """
    Parse tags typed on the command line.

    Accepts comma separated, whitespace separated or mixed input, either as
    a single string or as repeated option values.
    """
    raw = ",".join(tags_input) if isinstance(tags_input, list) else tags_input
    return normalize_tags(_TAG_SEPARATOR_RE.split(raw))
