import io

import pytest

from zaplite.write_syncer import (
    LockedWriteSyncer,
    MultiWriteSyncer,
    add_sync,
    default_reflected_encoder,
    lock,
    new_multi_write_syncer,
)


class _SyncSpy:
    def __init__(self):
        self.buffer = io.BytesIO()
        self.called = False
        self.error = None

    def write(self, data):
        return self.buffer.write(data)

    def sync(self):
        self.called = True
        if self.error is not None:
            raise self.error


class _FailWriter:
    def write(self, data):
        raise OSError("failed")


class _ShortWriter:
    def write(self, data):
        return len(data) - 1


def test_add_sync_write_syncer():
    concrete = _SyncSpy()
    ws = add_sync(concrete)
    assert ws is concrete
    assert ws.write(b"foo") == 3
    ws.sync()
    assert concrete.called
    concrete.error = RuntimeError("fail")
    with pytest.raises(RuntimeError, match="fail"):
        ws.sync()


def test_add_sync_writer():
    buf = io.BytesIO()
    ws = add_sync(buf)
    assert ws.write(b"foo") == 3
    assert ws.sync() is None
    assert buf.getvalue() == b"foo"


def test_multi_write_syncer_single_writer():
    w = _SyncSpy()
    ws = new_multi_write_syncer(w)
    assert ws is w
    ws.sync()
    assert w.called


def test_multi_write_syncer_writes_both():
    first, second = io.BytesIO(), io.BytesIO()
    ws = new_multi_write_syncer(add_sync(first), add_sync(second))
    msg = b"dumbledore"
    assert ws.write(msg) == len(msg)
    assert first.getvalue() == msg
    assert second.getvalue() == msg


def test_multi_write_syncer_fails_write():
    ws = new_multi_write_syncer(add_sync(_FailWriter()))
    with pytest.raises(OSError, match="failed"):
        ws.write(b"test")


def test_multi_write_syncer_short_write():
    ws = new_multi_write_syncer(add_sync(_ShortWriter()))
    assert ws.write(b"test") == 3


def test_multi_write_syncer_reports_smallest_count():
    ws = new_multi_write_syncer(add_sync(io.BytesIO()), add_sync(_ShortWriter()))
    assert ws.write(b"test") == 3


def test_writes_to_all_even_if_first_errors():
    second = io.BytesIO()
    ws = new_multi_write_syncer(add_sync(_FailWriter()), add_sync(second))
    with pytest.raises(OSError):
        ws.write(b"fail")
    assert second.getvalue() == b"fail"


def test_multiple_write_errors_are_grouped():
    ws = new_multi_write_syncer(add_sync(_FailWriter()), add_sync(_FailWriter()))
    with pytest.raises(ExceptionGroup) as info:
        ws.write(b"x")
    assert len(info.value.exceptions) == 2


def test_multi_sync_propagates_errors():
    discard, bad = _SyncSpy(), _SyncSpy()
    bad.error = RuntimeError("sink is full")
    ws = new_multi_write_syncer(discard, bad)
    with pytest.raises(RuntimeError, match="sink is full"):
        ws.sync()
    assert discard.called


def test_multi_sync_no_errors_on_discard():
    discard = _SyncSpy()
    ws = MultiWriteSyncer([discard])
    assert ws.sync() is None
    assert discard.called


def test_multi_sync_all_called():
    failed, second = _SyncSpy(), _SyncSpy()
    failed.error = RuntimeError("disposal broken")
    ws = new_multi_write_syncer(failed, second)
    with pytest.raises(RuntimeError):
        ws.sync()
    assert failed.called
    assert second.called


def test_empty_multi_write_syncer_writes_nothing():
    ws = new_multi_write_syncer()
    assert ws.write(b"abc") == 0


def test_lock_does_not_double_wrap():
    spy = _SyncSpy()
    locked = lock(spy)
    assert isinstance(locked, LockedWriteSyncer)
    assert lock(locked) is locked
    assert locked.write(b"foo") == 3
    locked.sync()
    assert spy.called
    assert spy.buffer.getvalue() == b"foo"


def test_reflected_encoder_writes_compact_json_line():
    buf = io.BytesIO()
    enc = default_reflected_encoder(buf)
    enc.encode({"b": [1, 2], "a": "<tag>&"})
    assert buf.getvalue() == b'{"a":"<tag>&","b":[1,2]}\n'


def test_reflected_encoder_rejects_nan():
    enc = default_reflected_encoder(io.BytesIO())
    with pytest.raises(ValueError):
        enc.encode(float("nan"))