"""A buffered asynchronous writer that lends its buffer out to be filled in place."""

from __future__ import annotations

import inspect
from typing import Any

DEFAULT_BUF_SIZE = 8192


async def _resolve(value: Any) -> Any:
    if inspect.isawaitable(value):
        return await value
    return value


async def _write_inner(inner: Any, data: bytes) -> int:
    if isinstance(inner, bytearray):
        inner.extend(data)
        return len(data)
    written = await _resolve(inner.write(data))
    if written is None:
        return len(data)
    if written < 0 or written > len(data):
        raise OSError(f"writer reported an invalid byte count: {written}")
    return written


async def _flush_inner(inner: Any) -> None:
    if isinstance(inner, bytearray):
        return
    for name in ("flush", "drain"):
        method = getattr(inner, name, None)
        if method is not None:
            await _resolve(method())
            return


async def _shutdown_inner(inner: Any) -> None:
    if isinstance(inner, bytearray):
        return
    for name in ("shutdown", "aclose", "close"):
        method = getattr(inner, name, None)
        if method is not None:
            await _resolve(method())
            break
    wait_closed = getattr(inner, "wait_closed", None)
    if wait_closed is not None:
        await _resolve(wait_closed())


class BufWriter:
    """Buffers writes to an inner writer.

    The inner writer may be a ``bytearray`` or any object with a ``write``
    method, synchronous or asynchronous, returning the number of bytes taken
    (``None`` meaning all of them). ``flush``/``drain`` and
    ``shutdown``/``aclose``/``close`` are used when present.
    """

    def __init__(self, inner: Any, capacity: int = DEFAULT_BUF_SIZE) -> None:
        if capacity <= 0:
            raise ValueError("capacity must be positive")
        self._inner = inner
        self._buf = bytearray(capacity)
        self._written = 0
        self._buffered = 0

    def __repr__(self) -> str:
        return (
            f"BufWriter(writer={self._inner!r}, "
            f"buffer={self._buffered}/{len(self._buf)}, written={self._written})"
        )

    @property
    def capacity(self) -> int:
        return len(self._buf)

    @property
    def buffered(self) -> int:
        """Bytes held in the buffer and not yet written out."""
        return self._buffered

    async def _flush_buf(self) -> None:
        try:
            while self._written < self._buffered:
                chunk = bytes(self._buf[self._written : self._buffered])
                count = await _write_inner(self._inner, chunk)
                if count == 0:
                    raise OSError("failed to write the buffered data")
                self._written += count
        finally:
            remaining = self._buffered - self._written
            self._buf[:remaining] = self._buf[self._written : self._buffered]
            self._buffered = remaining
            self._written = 0

    async def write(self, data: bytes) -> int:
        """Buffer ``data``, or hand it straight on if it is at least a buffer long."""
        data = bytes(data)
        capacity = len(self._buf)
        if self._buffered + len(data) > capacity:
            await self._flush_buf()
        if len(data) >= capacity:
            return await _write_inner(self._inner, data)
        length = min(capacity - self._buffered, len(data))
        self._buf[self._buffered : self._buffered + length] = data[:length]
        self._buffered += length
        return length

    async def flush(self) -> None:
        """Write out all buffered data and flush the inner writer."""
        await self._flush_buf()
        await _flush_inner(self._inner)

    async def shutdown(self) -> None:
        """Write out all buffered data and shut the inner writer down."""
        await self._flush_buf()
        await _shutdown_inner(self._inner)

    async def partial_flush_buf(self) -> memoryview:
        """Write out buffered data and return the free part of the buffer to fill."""
        await self._flush_buf()
        return memoryview(self._buf)[self._buffered :]

    def produce(self, amount: int) -> None:
        """Record that ``amount`` bytes of the lent buffer were filled."""
        if amount < 0 or self._buffered + amount > len(self._buf):
            raise ValueError("cannot produce more than the free buffer space")
        self._buffered += amount

    def into_inner(self) -> Any:
        """The inner writer; data still buffered is not written to it."""
        return self._inner