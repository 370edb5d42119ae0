"""An adapter exposing a logger through the grpclog-style logging API."""

from __future__ import annotations

import sys
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable

from .levels import Level

__all__ = ["GrpcLogger", "with_debug", "new_logger"]


@runtime_checkable
class _MessageLogger(Protocol):
    """What the adapter needs from the logger it wraps."""

    def enabled(self, lvl: Level) -> bool: ...

    def log(self, lvl: Level, message: str) -> None: ...


_GRPC_LVL_INFO = 0
_GRPC_LVL_WARN = 1
_GRPC_LVL_ERROR = 2
_GRPC_LVL_FATAL = 3

_GRPC_TO_LEVEL = {
    _GRPC_LVL_INFO: Level.INFO,
    _GRPC_LVL_WARN: Level.WARN,
    _GRPC_LVL_ERROR: Level.ERROR,
    _GRPC_LVL_FATAL: Level.FATAL,
}


def _to_text(value: Any) -> str:
    if value is None:
        return "<nil>"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).decode("utf-8", errors="replace")
    return str(value)


def _sprint(args: Sequence[Any]) -> str:
    """Join operands, adding a space only between two non-string operands."""
    parts: list[str] = []
    previous_is_str = True
    for position, arg in enumerate(args):
        is_str = isinstance(arg, str)
        if position > 0 and not is_str and not previous_is_str:
            parts.append(" ")
        parts.append(_to_text(arg))
        previous_is_str = is_str
    return "".join(parts)


def _sprintln(args: Sequence[Any]) -> str:
    """Join operands with single spaces, without a trailing newline."""
    return " ".join(_to_text(arg) for arg in args)


def _sprintf(fmt: str, args: Sequence[Any]) -> str:
    return fmt % tuple(args) if args else fmt


@dataclass
class _Printer:
    """Print, Printf and Println for one level."""

    emit: Callable[[str], None]
    is_enabled: Callable[[], bool]

    def print(self, args: Sequence[Any]) -> None:
        self.emit(_sprint(args))

    def printf(self, fmt: str, args: Sequence[Any]) -> None:
        self.emit(_sprintf(fmt, args))

    def println(self, args: Sequence[Any]) -> None:
        if self.is_enabled():
            self.emit(_sprintln(args))


_Option = Callable[["GrpcLogger"], None]


class GrpcLogger:
    """Adapts a logger to the grpclog v1 and v2 logger interfaces.

    The wrapped logger must offer ``enabled(level)`` and ``log(level, message)``.
    Fatal messages are logged and then the process exits with status 1.
    """

    def __init__(self, logger: _MessageLogger) -> None:
        self._logger = logger
        self._print = self._printer(Level.INFO)
        self._fatal = self._printer(Level.FATAL, exits=True)

    def _emit(self, level: Level, message: str, *, exits: bool = False) -> None:
        if self._logger.enabled(level):
            self._logger.log(level, message)
        if exits:
            sys.exit(1)

    def _printer(self, level: Level, *, exits: bool = False) -> _Printer:
        return _Printer(
            emit=lambda message: self._emit(level, message, exits=exits),
            is_enabled=lambda: self._logger.enabled(level),
        )

    def _println(self, level: Level, args: Sequence[Any]) -> None:
        if self._logger.enabled(level):
            self._emit(level, _sprintln(args))

    def print(self, *args: Any) -> None:
        self._print.print(args)

    def printf(self, fmt: str, *args: Any) -> None:
        self._print.printf(fmt, args)

    def println(self, *args: Any) -> None:
        self._print.println(args)

    def info(self, *args: Any) -> None:
        self._emit(Level.INFO, _sprint(args))

    def infoln(self, *args: Any) -> None:
        self._println(Level.INFO, args)

    def infof(self, fmt: str, *args: Any) -> None:
        self._emit(Level.INFO, _sprintf(fmt, args))

    def warning(self, *args: Any) -> None:
        self._emit(Level.WARN, _sprint(args))

    def warningln(self, *args: Any) -> None:
        self._println(Level.WARN, args)

    def warningf(self, fmt: str, *args: Any) -> None:
        self._emit(Level.WARN, _sprintf(fmt, args))

    def error(self, *args: Any) -> None:
        self._emit(Level.ERROR, _sprint(args))

    def errorln(self, *args: Any) -> None:
        self._println(Level.ERROR, args)

    def errorf(self, fmt: str, *args: Any) -> None:
        self._emit(Level.ERROR, _sprintf(fmt, args))

    def fatal(self, *args: Any) -> None:
        self._fatal.print(args)

    def fatalln(self, *args: Any) -> None:
        self._fatal.println(args)

    def fatalf(self, fmt: str, *args: Any) -> None:
        self._fatal.printf(fmt, args)

    def v(self, level: int) -> bool:
        """Report whether the given grpc verbosity level is enabled."""
        return self._logger.enabled(_GRPC_TO_LEVEL.get(level, Level.INFO))


def with_debug() -> _Option:
    """Option making print, printf and println log at DEBUG instead of INFO."""

    def apply(logger: GrpcLogger) -> None:
        logger._print = logger._printer(Level.DEBUG)

    return apply


def _with_warn() -> _Option:
    """Option sending fatal messages to WARN without exiting."""

    def apply(logger: GrpcLogger) -> None:
        logger._fatal = logger._printer(Level.WARN)

    return apply


def new_logger(logger: _MessageLogger, *args: _Option) -> GrpcLogger:
    """Build a GrpcLogger around ``logger`` and apply the options."""
    adapter = GrpcLogger(logger)
    for option in args:
        option(adapter)
    return adapter