"""A core that duplicates log entries into several cores."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from .levels import MAX_LEVEL, Level, level_of

__all__ = ["MultiCore", "new_tee"]


def _raise_collected(errors: list[Exception]) -> None:
    if not errors:
        return
    if len(errors) == 1:
        raise errors[0]
    raise ExceptionGroup("multiple errors", errors)


class MultiCore:
    """Fans every operation out to each of its cores.

    With no cores it is never enabled and discards everything.
    """

    def __init__(self, cores: Iterable[Any]) -> None:
        self.cores = tuple(cores)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, MultiCore) and self.cores == other.cores

    def __hash__(self) -> int:
        return hash(self.cores)

    def with_fields(self, fields: list[Any]) -> MultiCore:
        return MultiCore(core.with_fields(fields) for core in self.cores)

    def level(self) -> Level:
        if not self.cores:
            # Nothing is ever enabled: report the invalid level.
            return Level(MAX_LEVEL + 1)
        return Level(min([MAX_LEVEL, *(level_of(core) for core in self.cores)]))

    def enabled(self, lvl: Level) -> bool:
        return any(core.enabled(lvl) for core in self.cores)

    def check(self, entry: Any, checked: Any) -> Any:
        for core in self.cores:
            checked = core.check(entry, checked)
        return checked

    def write(self, entry: Any, fields: list[Any]) -> None:
        errors: list[Exception] = []
        for core in self.cores:
            try:
                core.write(entry, fields)
            except Exception as exc:
                errors.append(exc)
        _raise_collected(errors)

    def sync(self) -> None:
        errors: list[Exception] = []
        for core in self.cores:
            try:
                core.sync()
            except Exception as exc:
                errors.append(exc)
        _raise_collected(errors)


def new_tee(*args: Any) -> Any:
    """Combine cores; one core is returned unchanged and none gives a no-op core."""
    if len(args) == 1:
        return args[0]
    return MultiCore(args)