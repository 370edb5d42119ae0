"""Writers that can also flush, plus helpers to guard and combine them."""

from __future__ import annotations

import json
import threading
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable

__all__ = [
    "WriteSyncer",
    "LockedWriteSyncer",
    "MultiWriteSyncer",
    "add_sync",
    "lock",
    "new_multi_write_syncer",
    "default_reflected_encoder",
]


@runtime_checkable
class WriteSyncer(Protocol):
    """A byte writer that can also flush any buffered data."""

    def write(self, data: bytes) -> int: ...

    def sync(self) -> None: ...


def _raise_collected(errors: list[Exception]) -> None:
    if not errors:
        return
    if len(errors) == 1:
        raise errors[0]
    raise ExceptionGroup("multiple errors", errors)


def _written(result: int | None, data: bytes) -> int:
    return len(data) if result is None else result


@dataclass(frozen=True)
class _WriterWrapper:
    """Gives a plain writer a sync that flushes it when it can be flushed."""

    writer: Any

    def write(self, data: bytes) -> int:
        return _written(self.writer.write(data), data)

    def sync(self) -> None:
        flush = getattr(self.writer, "flush", None)
        if callable(flush):
            flush()


def add_sync(writer: Any) -> WriteSyncer:
    """Return ``writer`` itself if it can sync, otherwise wrap it with a flushing sync."""
    if isinstance(writer, WriteSyncer):
        return writer
    return _WriterWrapper(writer)


class LockedWriteSyncer:
    """Serialises writes and syncs to a WriteSyncer with a lock."""

    def __init__(self, ws: WriteSyncer) -> None:
        self._ws = ws
        self._lock = threading.Lock()

    def write(self, data: bytes) -> int:
        with self._lock:
            return _written(self._ws.write(data), data)

    def sync(self) -> None:
        with self._lock:
            self._ws.sync()


def lock(ws: WriteSyncer) -> WriteSyncer:
    """Make ``ws`` safe for concurrent use; an already locked syncer is returned as is."""
    if isinstance(ws, LockedWriteSyncer):
        return ws
    return LockedWriteSyncer(ws)


class MultiWriteSyncer:
    """Duplicates writes and syncs to several WriteSyncers."""

    def __init__(self, syncers: Iterable[WriteSyncer]) -> None:
        self._syncers = tuple(syncers)

    def write(self, data: bytes) -> int:
        """Write to every syncer and return the smallest non-zero count.

        Every syncer is written even if an earlier one fails; failures are
        raised together afterwards.
        """
        errors: list[Exception] = []
        written = 0
        for ws in self._syncers:
            try:
                n = _written(ws.write(data), data)
            except Exception as exc:
                errors.append(exc)
                n = 0
            if written == 0 and n != 0:
                written = n
            elif n < written:
                written = n
        _raise_collected(errors)
        return written

    def sync(self) -> None:
        errors: list[Exception] = []
        for ws in self._syncers:
            try:
                ws.sync()
            except Exception as exc:
                errors.append(exc)
        _raise_collected(errors)


def new_multi_write_syncer(*args: WriteSyncer) -> WriteSyncer:
    """Combine syncers; a single syncer is returned unchanged."""
    if len(args) == 1:
        return args[0]
    return MultiWriteSyncer(args)


class _JSONReflectedEncoder:
    """Writes each value as one line of compact JSON without HTML escaping."""

    def __init__(self, writer: Any) -> None:
        self._writer = writer

    def encode(self, value: Any) -> None:
        text = json.dumps(
            value,
            ensure_ascii=False,
            separators=(",", ":"),
            sort_keys=True,
            allow_nan=False,
        )
        text = text.replace("\u2028", "\\u2028").replace("\u2029", "\\u2029")
        self._writer.write((text + "\n").encode("utf-8"))


def default_reflected_encoder(writer: Any) -> _JSONReflectedEncoder:
    """Return the JSON encoder used for values without a dedicated field type."""
    return _JSONReflectedEncoder(writer)