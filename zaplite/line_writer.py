"""A byte writer that logs each line it receives."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from .levels import Level

__all__ = ["LineWriter"]


@runtime_checkable
class _MessageLogger(Protocol):
    """What the writer needs from the logger it feeds."""

    def enabled(self, lvl: Level) -> bool: ...

    def log(self, lvl: Level, message: str) -> None: ...


class LineWriter:
    """Splits written bytes on newlines and logs each line as one entry.

    Partial lines are buffered until a newline arrives or the writer is
    synced or closed. The writer can be used as a context manager.
    """

    def __init__(self, log: _MessageLogger, level: Level = Level.INFO) -> None:
        self.log = log
        self.level = Level(level)
        self._buffer = bytearray()

    def __enter__(self) -> LineWriter:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def write(self, data: bytes | bytearray | str) -> int:
        """Log every complete line in ``data`` and return its length."""
        if isinstance(data, str):
            data = data.encode("utf-8")
        data = bytes(data)
        if not self.log.enabled(self.level):
            return len(data)
        remaining = data
        while remaining:
            remaining = self._write_line(remaining)
        return len(data)

    def _write_line(self, data: bytes) -> bytes:
        idx = data.find(b"\n")
        if idx < 0:
            self._buffer += data
            return b""
        line, remaining = data[:idx], data[idx + 1 :]
        if not self._buffer:
            self._emit(line)
            return remaining
        self._buffer += line
        # Empty lines in the middle of the stream are kept.
        self._flush(allow_empty=True)
        return remaining

    def sync(self) -> None:
        """Log any buffered partial line, skipping an empty one."""
        self._flush(allow_empty=False)

    def close(self) -> None:
        """Flush buffered data; always call this when done."""
        self.sync()

    def _flush(self, *, allow_empty: bool) -> None:
        if allow_empty or self._buffer:
            self._emit(bytes(self._buffer))
        self._buffer.clear()

    def _emit(self, line: bytes) -> None:
        if self.log.enabled(self.level):
            self.log.log(self.level, line.decode("utf-8", errors="replace"))