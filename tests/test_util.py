import pytest

from asyncpress.util import PartialBuffer


def test_written_and_unwritten_split():
    buf = PartialBuffer(b"abcdef")
    buf.advance(2)
    assert buf.written() == b"ab"
    assert buf.unwritten() == b"cdef"


def test_advance_past_end_raises():
    buf = PartialBuffer(b"abc")
    with pytest.raises(ValueError):
        buf.advance(4)


def test_copy_unwritten_from_limited_by_destination():
    src = PartialBuffer(b"hello world")
    dst = PartialBuffer(bytearray(5))
    n = dst.copy_unwritten_from(src)
    assert n == 5
    assert bytes(dst.written()) == b"hello"
    assert src.unwritten() == b" world"
    assert dst.unwritten() == bytearray()


def test_copy_unwritten_from_limited_by_source():
    src = PartialBuffer(b"ab")
    dst = PartialBuffer(bytearray(10))
    dst.copy_unwritten_from(src)
    assert bytes(dst.written()) == b"ab"
    assert src.unwritten() == b""


def test_take_resets():
    buf = PartialBuffer(b"xyz")
    buf.advance(1)
    taken = buf.take()
    assert taken.written() == b"x"
    assert buf.into_inner() == b""
    assert buf.written() == b""


def test_into_inner_returns_whole_buffer():
    buf = PartialBuffer(b"data")
    buf.advance(3)
    assert buf.into_inner() == b"data"