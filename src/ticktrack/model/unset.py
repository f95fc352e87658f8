# SPDX-License-Identifier: MIT

from enum import Enum
from typing import Final, Literal, TypeVar, Union


class _Unset(Enum):
    """Marks a keyword argument that was not supplied, as opposed to one set to None."""

    UNSET = "UNSET"

    def __repr__(self) -> str:
        return "UNSET"


UNSET: Final = _Unset.UNSET

T = TypeVar("T")

Maybe = Union[T, Literal[_Unset.UNSET]]
