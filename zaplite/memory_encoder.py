"""Marshaler adapters and an encoder that builds plain dicts and lists."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any, Protocol, runtime_checkable

__all__ = [
    "ObjectMarshaler",
    "ArrayMarshaler",
    "ObjectMarshalerFunc",
    "ArrayMarshalerFunc",
    "MapObjectEncoder",
]


@runtime_checkable
class ObjectMarshaler(Protocol):
    """A type that can add its own fields to an object encoder."""

    def marshal_log_object(self, enc: Any) -> None: ...


@runtime_checkable
class ArrayMarshaler(Protocol):
    """A type that can append its own elements to an array encoder."""

    def marshal_log_array(self, enc: Any) -> None: ...


@dataclass(frozen=True)
class ObjectMarshalerFunc:
    """Turns a function into an ObjectMarshaler."""

    func: Callable[[Any], None]

    def marshal_log_object(self, enc: Any) -> None:
        self.func(enc)


@dataclass(frozen=True)
class ArrayMarshalerFunc:
    """Turns a function into an ArrayMarshaler."""

    func: Callable[[Any], None]

    def marshal_log_array(self, enc: Any) -> None:
        self.func(enc)


def _check_uint(value: int) -> int:
    if value < 0:
        raise ValueError(f"unsigned value must not be negative: {value}")
    return value


class _ListArrayEncoder:
    """Array encoder backed by a plain list."""

    def __init__(self) -> None:
        self.elems: list[Any] = []

    def append_array(self, value: ArrayMarshaler) -> None:
        inner = _ListArrayEncoder()
        try:
            value.marshal_log_array(inner)
        finally:
            self.elems.append(inner.elems)

    def append_object(self, value: ObjectMarshaler) -> None:
        inner = MapObjectEncoder()
        try:
            value.marshal_log_object(inner)
        finally:
            self.elems.append(inner.fields)

    def append_reflected(self, value: Any) -> None:
        self.elems.append(value)

    def append_bool(self, value: bool) -> None:
        self.elems.append(value)

    def append_byte_string(self, value: bytes) -> None:
        self.elems.append(bytes(value).decode("utf-8", errors="replace"))

    def append_complex(self, value: complex) -> None:
        self.elems.append(value)

    def append_duration(self, value: timedelta) -> None:
        self.elems.append(value)

    def append_float(self, value: float) -> None:
        self.elems.append(value)

    def append_int(self, value: int) -> None:
        self.elems.append(value)

    def append_uint(self, value: int) -> None:
        self.elems.append(_check_uint(value))

    def append_string(self, value: str) -> None:
        self.elems.append(value)

    def append_time(self, value: datetime) -> None:
        self.elems.append(value)


class MapObjectEncoder:
    """Object encoder backed by a dict; meant for tests, not speed."""

    def __init__(self) -> None:
        self.fields: dict[str, Any] = {}
        self._cur = self.fields

    def add_array(self, key: str, value: ArrayMarshaler) -> None:
        arr = _ListArrayEncoder()
        try:
            value.marshal_log_array(arr)
        finally:
            self._cur[key] = arr.elems

    def add_object(self, key: str, value: ObjectMarshaler) -> None:
        inner = MapObjectEncoder()
        self._cur[key] = inner.fields
        value.marshal_log_object(inner)

    def add_binary(self, key: str, value: bytes) -> None:
        self._cur[key] = bytes(value)

    def add_byte_string(self, key: str, value: bytes) -> None:
        self._cur[key] = bytes(value).decode("utf-8", errors="replace")

    def add_bool(self, key: str, value: bool) -> None:
        self._cur[key] = value

    def add_duration(self, key: str, value: timedelta) -> None:
        self._cur[key] = value

    def add_complex(self, key: str, value: complex) -> None:
        self._cur[key] = value

    def add_float(self, key: str, value: float) -> None:
        self._cur[key] = value

    def add_int(self, key: str, value: int) -> None:
        self._cur[key] = value

    def add_uint(self, key: str, value: int) -> None:
        self._cur[key] = _check_uint(value)

    def add_string(self, key: str, value: str) -> None:
        self._cur[key] = value

    def add_time(self, key: str, value: datetime) -> None:
        self._cur[key] = value

    def add_reflected(self, key: str, value: Any) -> None:
        self._cur[key] = value

    def open_namespace(self, key: str) -> None:
        namespace: dict[str, Any] = {}
        self._cur[key] = namespace
        self._cur = namespace