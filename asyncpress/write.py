"""Encoders and decoders that push their output into an asynchronous writer."""

from __future__ import annotations

import enum
from typing import Any

from .bufwriter import BufWriter
from .codecs import Decode, Encode
from .util import PartialBuffer


class _State(enum.Enum):
    RUNNING = enum.auto()
    FINISHING = enum.auto()
    DONE = enum.auto()


class _Writer:
    def __init__(self, writer: Any) -> None:
        self._writer = BufWriter(writer)
        self._state = _State.RUNNING

    def __repr__(self) -> str:
        return f"{type(self).__name__}(state={self._state.name.lower()})"

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if exc_type is None:
            await self.shutdown()

    async def _write(self, input: PartialBuffer) -> None:
        raise NotImplementedError

    async def shutdown(self) -> None:
        raise NotImplementedError

    async def _write_some(self, data: bytes) -> int:
        if not data:
            return 0
        input = PartialBuffer(bytes(data))
        await self._write(input)
        return len(input.written())

    async def _write_everything(self, data: bytes) -> None:
        view = memoryview(bytes(data))
        while view:
            count = await self._write_some(view)
            if count == 0:
                raise OSError("failed to write whole buffer")
            view = view[count:]

    async def _output(self) -> PartialBuffer:
        return PartialBuffer(await self._writer.partial_flush_buf())


class Encoder(_Writer):
    """Takes in uncompressed data and writes it compressed to a writer."""

    def __init__(self, writer: Any, encoder: Encode) -> None:
        super().__init__(writer)
        self._encoder = encoder

    async def write(self, data: bytes) -> int:
        """Take in as much of ``data`` as possible; return how much was taken."""
        return await self._write_some(data)

    async def write_all(self, data: bytes) -> None:
        """Take in all of ``data``."""
        await self._write_everything(data)

    def into_inner(self) -> Any:
        """The wrapped writer; output still buffered is not written to it."""
        return self._writer.into_inner()

    async def _write(self, input: PartialBuffer) -> None:
        while True:
            output = await self._output()
            if self._state is not _State.RUNNING:
                raise RuntimeError("Write after shutdown")
            self._encoder.encode(input, output)
            self._writer.produce(len(output.written()))
            if not input.unwritten():
                return

    async def _flush(self) -> None:
        while True:
            output = await self._output()
            if self._state is not _State.RUNNING:
                raise RuntimeError("Flush after shutdown")
            done = self._encoder.flush(output)
            self._writer.produce(len(output.written()))
            if done:
                return

    async def _finish(self) -> None:
        while True:
            output = await self._output()
            if self._state is not _State.DONE:
                self._state = (
                    _State.DONE if self._encoder.finish(output) else _State.FINISHING
                )
            self._writer.produce(len(output.written()))
            if self._state is _State.DONE:
                return

    async def flush(self) -> None:
        """Push everything written so far through the encoder and the writer."""
        await self._flush()
        await self._writer.flush()

    async def shutdown(self) -> None:
        """End the compressed stream and shut the writer down."""
        await self._finish()
        await self._writer.shutdown()


class Decoder(_Writer):
    """Takes in compressed data and writes it decompressed to a writer."""

    def __init__(self, writer: Any, decoder: Decode) -> None:
        super().__init__(writer)
        self._decoder = decoder

    async def write(self, data: bytes) -> int:
        """Take in as much of ``data`` as possible; return how much was taken."""
        return await self._write_some(data)

    async def write_all(self, data: bytes) -> None:
        """Take in all of ``data``."""
        await self._write_everything(data)

    def into_inner(self) -> Any:
        """The wrapped writer; output still buffered is not written to it."""
        return self._writer.into_inner()

    async def _write(self, input: PartialBuffer) -> None:
        while True:
            output = await self._output()
            if self._state is _State.RUNNING:
                if self._decoder.decode(input, output):
                    self._state = _State.FINISHING
            elif self._state is _State.FINISHING:
                if self._decoder.finish(output):
                    self._state = _State.DONE
            else:
                raise RuntimeError("Write after end of stream")
            self._writer.produce(len(output.written()))
            if self._state is _State.DONE or not input.unwritten():
                return

    async def _flush(self) -> None:
        while True:
            output = await self._output()
            if self._state is _State.RUNNING:
                done = self._decoder.flush(output)
            elif self._state is _State.FINISHING:
                if self._decoder.finish(output):
                    self._state = _State.DONE
                done = False
            else:
                done = True
            self._writer.produce(len(output.written()))
            if done:
                return

    async def flush(self) -> None:
        """Write out everything decoded so far and flush the writer."""
        await self._flush()
        await self._writer.flush()

    async def shutdown(self) -> None:
        """Check the compressed stream is complete and shut the writer down."""
        if self._state is _State.RUNNING:
            self._state = _State.FINISHING
        await self._flush()
        if self._state is not _State.DONE:
            raise OSError("Attempt to shutdown before finishing input")
        await self._writer.shutdown()