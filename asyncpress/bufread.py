"""Encoders and decoders that pull data from an asynchronous buffered reader."""

from __future__ import annotations

import enum
import inspect
from collections.abc import Iterable
from typing import Any, AsyncIterator

from .codecs import Decode, Encode
from .util import PartialBuffer

DEFAULT_READ_SIZE = 8192


def _is_bytes_like(source: Any) -> bool:
    return isinstance(source, (bytes, bytearray, memoryview))


async def _chunks(source: Any) -> AsyncIterator[bytes]:
    if _is_bytes_like(source):
        yield bytes(source)
    elif hasattr(source, "__aiter__"):
        async for chunk in source:
            yield chunk
    elif hasattr(source, "read"):
        while True:
            chunk = source.read(DEFAULT_READ_SIZE)
            if inspect.isawaitable(chunk):
                chunk = await chunk
            if not chunk:
                break
            yield chunk
    else:
        for chunk in source:
            yield chunk


class StreamBufReader:
    """An asynchronous buffered reader over bytes, chunk iterables or readers.

    ``source`` may be a bytes-like object, an iterable or asynchronous iterable
    of byte chunks, or an object with a (possibly asynchronous) ``read(n)``.
    Empty chunks are skipped; an empty buffer from :meth:`fill_buf` means EOF.
    """

    def __init__(self, source: Any) -> None:
        if not (
            _is_bytes_like(source)
            or hasattr(source, "__aiter__")
            or hasattr(source, "read")
            or isinstance(source, Iterable)
        ):
            raise TypeError(f"cannot read bytes from {type(source).__name__}")
        self._chunks = _chunks(source)
        self._buffer = memoryview(b"")
        self._eof = False

    def __repr__(self) -> str:
        return f"StreamBufReader(buffered={len(self._buffer)}, eof={self._eof})"

    async def fill_buf(self) -> memoryview:
        """Return the buffered data, reading another chunk if none is left."""
        while not self._buffer and not self._eof:
            try:
                chunk = await anext(self._chunks)
            except StopAsyncIteration:
                self._eof = True
            else:
                self._buffer = memoryview(bytes(chunk))
        return self._buffer

    def consume(self, amount: int) -> None:
        """Mark ``amount`` bytes of the buffered data as used."""
        if amount < 0 or amount > len(self._buffer):
            raise ValueError("cannot consume more than is buffered")
        self._buffer = self._buffer[amount:]


def _as_buf_reader(reader: Any) -> Any:
    if hasattr(reader, "fill_buf") and hasattr(reader, "consume"):
        return reader
    return StreamBufReader(reader)


class _DecoderState(enum.Enum):
    DECODING = enum.auto()
    FLUSHING = enum.auto()
    DONE = enum.auto()
    NEXT = enum.auto()


class _EncoderState(enum.Enum):
    ENCODING = enum.auto()
    FLUSHING = enum.auto()
    DONE = enum.auto()


async def _read_to_end(read) -> bytes:
    parts = []
    while chunk := await read(DEFAULT_READ_SIZE):
        parts.append(chunk)
    return b"".join(parts)


class Decoder:
    """Reads compressed data from a buffered reader and yields it decompressed."""

    def __init__(self, reader: Any, decoder: Decode) -> None:
        self._reader = _as_buf_reader(reader)
        self._decoder = decoder
        self._state = _DecoderState.DECODING
        self._multiple_members = False

    def __repr__(self) -> str:
        return f"{type(self).__name__}(state={self._state.name.lower()})"

    def multiple_members(self, enabled: bool) -> None:
        """Decode further members/frames after the first one ends, until EOF."""
        self._multiple_members = bool(enabled)

    def into_inner(self) -> Any:
        """The buffered reader this decoder pulls from."""
        return self._reader

    async def read(self, n: int = -1) -> bytes:
        """Read up to ``n`` decompressed bytes; all of them if ``n`` is negative."""
        if n < 0:
            return await _read_to_end(self.read)
        if n == 0:
            return b""
        output = PartialBuffer(bytearray(n))
        await self._fill(output)
        return bytes(output.written())

    async def _fill(self, output: PartialBuffer) -> None:
        first = True
        while True:
            state = self._state
            if state is _DecoderState.DECODING:
                data = b"" if first else await self._reader.fill_buf()
                if not data and not first:
                    state = _DecoderState.FLUSHING
                else:
                    input = PartialBuffer(data)
                    try:
                        done = self._decoder.decode(input, output)
                    except Exception:
                        # An empty first pass only drains output; its error is not final.
                        if not first:
                            raise
                        done = False
                    first = False
                    self._reader.consume(len(input.written()))
                    state = _DecoderState.FLUSHING if done else _DecoderState.DECODING
            elif state is _DecoderState.FLUSHING:
                if self._decoder.finish(output):
                    if self._multiple_members:
                        self._decoder.reinit()
                        state = _DecoderState.NEXT
                    else:
                        state = _DecoderState.DONE
            elif state is _DecoderState.NEXT:
                data = await self._reader.fill_buf()
                state = _DecoderState.DECODING if data else _DecoderState.DONE
            self._state = state

            if state is _DecoderState.DONE or not output.unwritten():
                return


class Encoder:
    """Reads uncompressed data from a buffered reader and yields it compressed."""

    def __init__(self, reader: Any, encoder: Encode) -> None:
        self._reader = _as_buf_reader(reader)
        self._encoder = encoder
        self._state = _EncoderState.ENCODING

    def __repr__(self) -> str:
        return f"{type(self).__name__}(state={self._state.name.lower()})"

    def into_inner(self) -> Any:
        """The buffered reader this encoder pulls from."""
        return self._reader

    async def read(self, n: int = -1) -> bytes:
        """Read up to ``n`` compressed bytes; all of them if ``n`` is negative."""
        if n < 0:
            return await _read_to_end(self.read)
        if n == 0:
            return b""
        output = PartialBuffer(bytearray(n))
        await self._fill(output)
        return bytes(output.written())

    async def _fill(self, output: PartialBuffer) -> None:
        while True:
            state = self._state
            if state is _EncoderState.ENCODING:
                data = await self._reader.fill_buf()
                if not data:
                    state = _EncoderState.FLUSHING
                else:
                    input = PartialBuffer(data)
                    self._encoder.encode(input, output)
                    self._reader.consume(len(input.written()))
            elif state is _EncoderState.FLUSHING:
                if self._encoder.finish(output):
                    state = _EncoderState.DONE
            self._state = state

            if state is _EncoderState.DONE or not output.unwritten():
                return