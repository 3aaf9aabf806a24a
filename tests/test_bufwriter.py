import asyncio
import io

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from asyncpress.bufwriter import DEFAULT_BUF_SIZE, BufWriter


class Recorder:
    def __init__(self, limit=None):
        self.limit = limit
        self.data = bytearray()
        self.writes = []
        self.flushes = 0
        self.closed = False

    async def write(self, data):
        if self.closed:
            raise RuntimeError("write after close")
        chunk = bytes(data[: self.limit]) if self.limit else bytes(data)
        self.writes.append(chunk)
        self.data += chunk
        return len(chunk)

    async def flush(self):
        self.flushes += 1

    async def shutdown(self):
        self.closed = True


class Stuck:
    async def write(self, data):
        return 0


@pytest.mark.asyncio
async def test_small_writes_are_buffered_until_flush():
    rec = Recorder()
    writer = BufWriter(rec, 16)
    data = b"hello"
    assert await writer.write(data) == len(data)
    assert rec.data == b""
    await writer.flush()
    assert rec.data == data
    assert rec.flushes == 1


@pytest.mark.asyncio
async def test_limited_inner_receives_everything_in_order():
    rec = Recorder(limit=3)
    writer = BufWriter(rec, 8)
    chunks = [b"abcde", b"fg", b"hijklmn", b"o"]
    for chunk in chunks:
        view = memoryview(chunk)
        while view:
            view = view[await writer.write(view):]
    await writer.flush()
    assert rec.data == b"".join(chunks)
    assert all(len(w) <= 3 for w in rec.writes)


@pytest.mark.asyncio
async def test_large_write_bypasses_buffer():
    rec = Recorder()
    writer = BufWriter(rec, 4)
    data = b"0123456789"
    assert await writer.write(data) == len(data)
    assert rec.writes == [data]
    assert writer.buffered == 0


@pytest.mark.asyncio
async def test_write_flushes_when_buffer_would_overflow():
    rec = Recorder()
    writer = BufWriter(rec, 4)
    await writer.write(b"abc")
    assert await writer.write(b"de") == len(b"de")
    assert rec.data == b"abc"
    await writer.flush()
    assert rec.data == b"abcde"


@pytest.mark.asyncio
async def test_default_capacity_is_lent_out_whole():
    writer = BufWriter(bytearray())
    view = await writer.partial_flush_buf()
    assert len(view) == DEFAULT_BUF_SIZE == 8192


@pytest.mark.asyncio
async def test_produce_commits_filled_bytes():
    inner = bytearray()
    writer = BufWriter(inner, 16)
    view = await writer.partial_flush_buf()
    view[:3] = b"xyz"
    writer.produce(3)
    assert len(await writer.partial_flush_buf()) == writer.capacity
    assert inner == b"xyz"


@pytest.mark.asyncio
async def test_produce_past_end_raises():
    writer = BufWriter(bytearray(), 4)
    await writer.partial_flush_buf()
    with pytest.raises(ValueError):
        writer.produce(5)


@pytest.mark.asyncio
async def test_zero_write_raises_and_keeps_data():
    writer = BufWriter(Stuck(), 4)
    await writer.write(b"a")
    with pytest.raises(OSError):
        await writer.flush()
    assert writer.buffered == len(b"a")


@pytest.mark.asyncio
async def test_shutdown_flushes_then_closes():
    rec = Recorder()
    writer = BufWriter(rec, 16)
    await writer.write(b"data")
    await writer.shutdown()
    assert rec.closed
    assert rec.data == b"data"


@pytest.mark.asyncio
async def test_synchronous_inner_writer():
    sink = io.BytesIO()
    writer = BufWriter(sink, 4)
    await writer.write(b"ab")
    await writer.write(b"cdef")
    await writer.flush()
    assert sink.getvalue() == b"abcdef"


@pytest.mark.asyncio
async def test_into_inner_returns_the_writer():
    inner = bytearray()
    writer = BufWriter(inner)
    assert writer.into_inner() is inner


def test_non_positive_capacity_rejected():
    with pytest.raises(ValueError):
        BufWriter(bytearray(), 0)


@settings(max_examples=50, deadline=None)
@given(
    chunks=st.lists(st.binary(max_size=40), max_size=10),
    capacity=st.integers(1, 32),
    limit=st.integers(1, 20),
)
def test_everything_arrives_in_order(chunks, capacity, limit):
    async def run():
        rec = Recorder(limit=limit)
        writer = BufWriter(rec, capacity)
        for chunk in chunks:
            view = memoryview(chunk)
            while view:
                view = view[await writer.write(view):]
        await writer.shutdown()
        return rec

    rec = asyncio.run(run())
    assert rec.data == b"".join(chunks)
    assert rec.closed