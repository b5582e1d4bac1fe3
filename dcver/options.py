"""Descriptions of long command-line options."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Callable, Optional, Union


class HasArg(IntEnum):
    """Whether a long option takes an argument."""

    NONE = 0
    REQUIRED = 1
    OPTIONAL = 2


@dataclass(frozen=True)
class LongOption:
    """A long option: its name, argument kind, flag callback and value.

    When ``flag`` is given, matching the option calls it with ``val``
    instead of reporting ``val`` to the caller.
    """

    name: str
    has_arg: HasArg = HasArg.NONE
    flag: Optional[Callable[[Union[int, str]], None]] = None
    val: Union[int, str] = 0

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("long option name must not be empty")
        object.__setattr__(self, "has_arg", HasArg(self.has_arg))
        if self.flag is not None and not callable(self.flag):
            raise TypeError("flag must be callable")