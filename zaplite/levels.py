"""Logging priorities and the protocol for deciding which ones are enabled."""

from __future__ import annotations

import json
from typing import ClassVar, Protocol, runtime_checkable

__all__ = [
    "Level",
    "LevelEnabler",
    "parse_level",
    "level_of",
    "MIN_LEVEL",
    "MAX_LEVEL",
]

_NAMES = {
    -1: "debug",
    0: "info",
    1: "warn",
    2: "error",
    3: "dpanic",
    4: "panic",
    5: "fatal",
}

_TEXT_TO_VALUE = {
    "debug": -1,
    "info": 0,
    "": 0,  # the empty string maps to the default level
    "warn": 1,
    "warning": 1,
    "error": 2,
    "dpanic": 3,
    "panic": 4,
    "fatal": 5,
}


class Level(int):
    """A logging priority. Higher levels are more important."""

    DEBUG: ClassVar[Level]
    INFO: ClassVar[Level]
    WARN: ClassVar[Level]
    ERROR: ClassVar[Level]
    DPANIC: ClassVar[Level]
    PANIC: ClassVar[Level]
    FATAL: ClassVar[Level]
    INVALID: ClassVar[Level]

    __slots__ = ()

    def __str__(self) -> str:
        name = _NAMES.get(int(self))
        return name if name is not None else f"Level({int(self)})"

    def __repr__(self) -> str:
        name = _NAMES.get(int(self))
        return f"Level.{name.upper()}" if name is not None else f"Level({int(self)})"

    def __format__(self, spec: str) -> str:
        return str(self) if not spec else int.__format__(int(self), spec)

    def capital_string(self) -> str:
        """Return an all-caps representation of the level."""
        name = _NAMES.get(int(self))
        return name.upper() if name is not None else f"LEVEL({int(self)})"

    def marshal_text(self) -> str:
        """Return the lower-case text form, as accepted by parse_level."""
        return str(self)

    def enabled(self, lvl: int) -> bool:
        """Report whether ``lvl`` is at or above this level."""
        return lvl >= self


Level.DEBUG = Level(-1)
Level.INFO = Level(0)
Level.WARN = Level(1)
Level.ERROR = Level(2)
Level.DPANIC = Level(3)
Level.PANIC = Level(4)
Level.FATAL = Level(5)
Level.INVALID = Level(6)

MIN_LEVEL = Level.DEBUG
MAX_LEVEL = Level.FATAL


@runtime_checkable
class LevelEnabler(Protocol):
    """Decides whether a given logging level is enabled."""

    def enabled(self, lvl: Level) -> bool: ...


def parse_level(text: str | bytes) -> Level:
    """Parse a lower-case or all-caps level name.

    Raises ValueError for unrecognized text.
    """
    if isinstance(text, (bytes, bytearray)):
        text = bytes(text).decode("utf-8", errors="replace")
    value = _TEXT_TO_VALUE.get(text)
    if value is None:
        value = _TEXT_TO_VALUE.get(text.lower())
    if value is None:
        raise ValueError(f"unrecognized level: {json.dumps(text, ensure_ascii=False)}")
    return Level(value)


def level_of(enab: LevelEnabler) -> Level:
    """Return the minimum enabled level of ``enab``, or Level.INVALID.

    An enabler with a callable ``level`` attribute decides for itself.
    """
    own_level = getattr(enab, "level", None)
    if callable(own_level):
        return Level(own_level())
    for value in range(MIN_LEVEL, MAX_LEVEL + 1):
        lvl = Level(value)
        if enab.enabled(lvl):
            return lvl
    return Level.INVALID