import io

import pytest

from loccount.analyzers.loc.errors import LineTooLongError
from loccount.utils.buffer_pool import BufferPool
from loccount.utils.line_reader import LineReader


def read_all(data: bytes, buffer_size: int = 8, **kwargs):
    return list(LineReader(io.BytesIO(data), bytearray(buffer_size), **kwargs))


# =============================================================================
# Line reader
# =============================================================================

def test_splits_lines_across_buffer_boundaries():
    data = b"first line\nsecond much longer line\nthird\n"
    assert read_all(data, buffer_size=4) == ["first line", "second much longer line", "third"]


def test_final_line_without_newline():
    assert read_all(b"a\nb") == ["a", "b"]


def test_crlf_terminators():
    assert read_all(b"a\r\nb\r\n") == ["a", "b"]


def test_empty_stream():
    assert read_all(b"") == []


def test_blank_lines_preserved():
    assert read_all(b"\n\nx\n") == ["", "", "x"]


def test_invalid_utf8_is_replaced():
    lines = read_all(b"ok\n\xff\xfe bad\n")
    assert lines[0] == "ok"
    assert lines[1].endswith(" bad")


def test_line_too_long_raises_after_earlier_lines():
    reader = LineReader(io.BytesIO(b"short\n" + b"x" * 50 + b"\nafter\n"), bytearray(8), max_line_length=20)
    iterator = iter(reader)

    assert next(iterator) == "short"
    with pytest.raises(LineTooLongError) as excinfo:
        next(iterator)
    assert excinfo.value.line_number == 2
    assert excinfo.value.limit == 20


def test_line_at_limit_is_accepted():
    assert read_all(b"x" * 10 + b"\r\n", max_line_length=10) == ["x" * 10]


def test_non_readinto_stream():
    class Plain:
        def __init__(self, data):
            self._inner = io.BytesIO(data)

        def read(self, size):
            return self._inner.read(size)

    assert list(LineReader(Plain(b"a\nb\n"), bytearray(3))) == ["a", "b"]


# =============================================================================
# Buffer pool
# =============================================================================

def test_pool_reuses_released_buffers():
    pool = BufferPool(buffer_size=16)
    first = pool.acquire()
    pool.release(first)
    second = pool.acquire()

    assert second is first
    assert pool.stats()["allocated"] == 1


def test_pool_borrow_releases_on_error():
    pool = BufferPool(buffer_size=16)
    with pytest.raises(RuntimeError):
        with pool.borrow():
            raise RuntimeError("boom")

    stats = pool.stats()
    assert stats["in_use"] == 0
    assert stats["free"] == 1


def test_pool_retention_limit():
    pool = BufferPool(buffer_size=4, max_retained=1)
    a, b = pool.acquire(), pool.acquire()
    pool.release(a)
    pool.release(b)
    assert pool.stats()["free"] == 1


def test_pool_rejects_bad_size():
    with pytest.raises(ValueError):
        BufferPool(buffer_size=0)
