"""A core wrapper that rate-limits repeated log entries."""

from __future__ import annotations

import enum
import threading
from collections.abc import Callable
from datetime import datetime, timedelta, timezone
from typing import Any

from .levels import MAX_LEVEL, MIN_LEVEL, Level, level_of

__all__ = [
    "SamplingDecision",
    "Sampler",
    "fnv32a",
    "sampler_hook",
    "new_sampler_with_options",
    "new_sampler",
]

_COUNTERS_PER_LEVEL = 4096
_UINT64 = (1 << 64) - 1
_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_NANOS_PER_SECOND = 1_000_000_000


def fnv32a(text: str | bytes) -> int:
    """Return the 32-bit FNV-1a hash of ``text`` (strings are hashed as UTF-8)."""
    data = text.encode("utf-8") if isinstance(text, str) else bytes(text)
    value = 2166136261
    for byte in data:
        value ^= byte
        value = (value * 16777619) & 0xFFFFFFFF
    return value


def _duration_nanos(delta: timedelta) -> int:
    return (delta.days * 86400 + delta.seconds) * _NANOS_PER_SECOND + delta.microseconds * 1000


def _unix_nanos(moment: datetime) -> int:
    if moment.tzinfo is None:
        moment = moment.astimezone()
    return _duration_nanos(moment - _EPOCH)


class SamplingDecision(enum.IntFlag):
    """Bit field describing what the sampler did with an entry."""

    LOG_DROPPED = 1
    LOG_SAMPLED = 2


class _Counter:
    __slots__ = ("_lock", "_reset_at", "_count")

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._reset_at = 0
        self._count = 0

    def inc_check_reset(self, now_ns: int, tick_ns: int) -> int:
        with self._lock:
            if self._reset_at > now_ns:
                self._count += 1
                return self._count
            self._count = 1
            self._reset_at = now_ns + tick_ns
            return 1


class _Counters:
    """Counters bucketed by level and message hash; shared by derived samplers."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._counters: dict[tuple[int, int], _Counter] = {}

    def get(self, lvl: int, key: str) -> _Counter:
        slot = (lvl - MIN_LEVEL, fnv32a(key) % _COUNTERS_PER_LEVEL)
        with self._lock:
            counter = self._counters.get(slot)
            if counter is None:
                counter = self._counters[slot] = _Counter()
            return counter


_SamplerOption = Callable[["Sampler"], None]


class Sampler:
    """Logs the first N entries per level and message each tick, then every Mth."""

    def __init__(
        self,
        core: Any,
        tick: timedelta,
        first: int,
        thereafter: int,
        *,
        hook: Callable[[Any, SamplingDecision], None] | None = None,
        counts: _Counters | None = None,
    ) -> None:
        self.core = core
        self.tick = tick
        self.first = first & _UINT64
        self.thereafter = thereafter & _UINT64
        self.hook = hook
        self._counts = counts if counts is not None else _Counters()

    def _report(self, entry: Any, decision: SamplingDecision) -> None:
        if self.hook is not None:
            self.hook(entry, decision)

    def level(self) -> Level:
        return level_of(self.core)

    def enabled(self, lvl: Level) -> bool:
        return self.core.enabled(lvl)

    def with_fields(self, fields: list[Any]) -> Sampler:
        return Sampler(
            self.core.with_fields(fields),
            self.tick,
            self.first,
            self.thereafter,
            hook=self.hook,
            counts=self._counts,
        )

    def check(self, entry: Any, checked: Any) -> Any:
        if not self.enabled(entry.level):
            return checked
        if MIN_LEVEL <= entry.level <= MAX_LEVEL:
            counter = self._counts.get(entry.level, entry.message)
            n = counter.inc_check_reset(_unix_nanos(entry.time), _duration_nanos(self.tick))
            if n > self.first and (
                self.thereafter == 0 or (n - self.first) % self.thereafter != 0
            ):
                self._report(entry, SamplingDecision.LOG_DROPPED)
                return checked
            self._report(entry, SamplingDecision.LOG_SAMPLED)
        return self.core.check(entry, checked)

    def write(self, entry: Any, fields: list[Any]) -> None:
        self.core.write(entry, fields)

    def sync(self) -> None:
        self.core.sync()


def sampler_hook(hook: Callable[[Any, SamplingDecision], None]) -> _SamplerOption:
    """Option that calls ``hook`` with every sampling decision."""

    def apply(sampler: Sampler) -> None:
        sampler.hook = hook

    return apply


def new_sampler_with_options(
    core: Any, tick: timedelta, first: int, thereafter: int, *args: _SamplerOption
) -> Sampler:
    """Wrap ``core`` in a sampler; ``thereafter`` of zero drops everything after the first N."""
    sampler = Sampler(core, tick, first, thereafter)
    for option in args:
        option(sampler)
    return sampler


def new_sampler(core: Any, tick: timedelta, first: int, thereafter: int) -> Sampler:
    """Wrap ``core`` in a sampler with no options."""
    return new_sampler_with_options(core, tick, first, thereafter)