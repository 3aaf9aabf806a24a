"""Compression levels and incremental encoders and decoders for each format."""

from __future__ import annotations

import abc
import bz2
import enum
import lzma
import zlib
from dataclasses import dataclass
from typing import Any, Callable, Iterable, Optional

import brotli
import zstandard

from .params import CParameter
from .util import PartialBuffer

ZSTD_MIN_LEVEL = -(1 << 17)
ZSTD_DEFAULT_LEVEL = 3

_RAW_WBITS = -zlib.MAX_WBITS
_GZIP_WBITS = 16 + zlib.MAX_WBITS


def _clamp(value: int, low: int, high: int) -> int:
    return max(low, min(value, high))


class _Kind(enum.Enum):
    FASTEST = "fastest"
    BEST = "best"
    DEFAULT = "default"
    PRECISE = "precise"


@dataclass(frozen=True)
class Level:
    """Level of compression data should be compressed with."""

    kind: _Kind
    quality: int = 0

    @classmethod
    def fastest(cls) -> Level:
        return cls(_Kind.FASTEST)

    @classmethod
    def best(cls) -> Level:
        return cls(_Kind.BEST)

    @classmethod
    def default(cls) -> Level:
        return cls(_Kind.DEFAULT)

    @classmethod
    def precise(cls, quality: int) -> Level:
        """An algorithm-specific quality, clamped to the algorithm's range."""
        return cls(_Kind.PRECISE, int(quality))

    def _pick(self, fastest: int, best: int, default: int, precise: int) -> int:
        return {
            _Kind.FASTEST: fastest,
            _Kind.BEST: best,
            _Kind.DEFAULT: default,
            _Kind.PRECISE: precise,
        }[self.kind]

    def into_brotli(self) -> int:
        return self._pick(0, 11, 11, _clamp(self.quality, 0, 11))

    def into_bzip2(self) -> int:
        return self._pick(1, 9, 6, _clamp(max(self.quality, 0), 1, 9))

    def into_flate2(self) -> int:
        return self._pick(1, 9, 6, _clamp(max(self.quality, 0), 1, 9))

    def into_zstd(self) -> int:
        best = zstandard.MAX_COMPRESSION_LEVEL
        return self._pick(
            ZSTD_MIN_LEVEL,
            best,
            ZSTD_DEFAULT_LEVEL,
            _clamp(self.quality, ZSTD_MIN_LEVEL, best),
        )

    def into_xz2(self) -> int:
        return self._pick(0, 9, 5, min(max(self.quality, 0), 9))


class _Pending:
    """Output produced by a codec but not yet handed to the caller."""

    def __init__(self) -> None:
        self._buf: PartialBuffer[bytes] = PartialBuffer(b"")

    def push(self, data: bytes) -> None:
        if data:
            self._buf = PartialBuffer(bytes(self._buf.unwritten()) + data)

    @property
    def empty(self) -> bool:
        return not self._buf.unwritten()

    def drain_then(
        self, output: PartialBuffer, step: Optional[Callable[[], bytes]] = None
    ) -> bool:
        """Hand pending bytes to ``output``; once all are out, run ``step`` and
        hand over what it produced. True when nothing remains pending."""
        output.copy_unwritten_from(self._buf)
        if self.empty and step is not None:
            self.push(step())
            output.copy_unwritten_from(self._buf)
        return self.empty


class Encode(abc.ABC):
    """An incremental compressor working between partial buffers."""

    def __init__(self, level: Level | None = None) -> None:
        self._pending = _Pending()
        self._needs_flush = False
        self._finished = False
        self._inner = self._create(level if level is not None else Level.default())

    @abc.abstractmethod
    def _create(self, level: Level) -> Any:
        """Build the underlying compressor object."""

    def _compress(self, data: bytes) -> bytes:
        return self._inner.compress(data)

    def _sync_flush(self) -> bytes:
        return b""

    def _finish(self) -> bytes:
        return self._inner.flush()

    def _take_sync_flush(self) -> bytes:
        self._needs_flush = False
        return self._sync_flush()

    def _take_finish(self) -> bytes:
        self._finished = True
        return self._finish()

    def encode(self, input: PartialBuffer, output: PartialBuffer) -> None:
        """Consume input and write compressed output while room remains."""
        if self._finished:
            raise ValueError("encode after finish")
        data = bytes(input.unwritten())

        def step() -> bytes:
            out = self._compress(data)
            input.advance(len(data))
            self._needs_flush = True
            return out

        self._pending.drain_then(output, step if data else None)

    def flush(self, output: PartialBuffer) -> bool:
        """Push buffered data through; True once everything is written out."""
        wanted = self._needs_flush and not self._finished
        return self._pending.drain_then(output, self._take_sync_flush if wanted else None)

    def finish(self, output: PartialBuffer) -> bool:
        """End the stream; True once the trailer is fully written out."""
        return self._pending.drain_then(
            output, None if self._finished else self._take_finish
        )


class Decode(abc.ABC):
    """An incremental decompressor working between partial buffers."""

    def __init__(self) -> None:
        self.reinit()

    @abc.abstractmethod
    def _create(self) -> Any:
        """Build the underlying decompressor object."""

    def _reset(self) -> None:
        self._inner = self._create()

    def _feed(self, data: bytes) -> tuple[bytes, int, bool]:
        """Decompress ``data``; return output, bytes consumed and end-of-stream."""
        out = self._inner.decompress(data)
        if self._inner.eof:
            return out, len(data) - len(self._inner.unused_data), True
        return out, len(data), False

    def reinit(self) -> None:
        """Prepare for another compressed member."""
        self._pending = _Pending()
        self._eof = False
        self._reset()

    def decode(self, input: PartialBuffer, output: PartialBuffer) -> bool:
        """Consume input and write decompressed output; True at end of stream."""
        data = bytes(input.unwritten())

        def step() -> bytes:
            out, consumed, self._eof = self._feed(data)
            input.advance(consumed)
            return out

        self._pending.drain_then(output, step if data and not self._eof else None)
        return self._eof

    def flush(self, output: PartialBuffer) -> bool:
        return self._pending.drain_then(output)

    def finish(self, output: PartialBuffer) -> bool:
        if not self._eof:
            raise EOFError("unexpected end of compressed stream")
        return self._pending.drain_then(output)


class _ZlibFamilyEncode(Encode):
    _wbits = zlib.MAX_WBITS

    def _create(self, level: Level) -> Any:
        return zlib.compressobj(level.into_flate2(), zlib.DEFLATED, self._wbits)

    def _sync_flush(self) -> bytes:
        return self._inner.flush(zlib.Z_SYNC_FLUSH)

    def _finish(self) -> bytes:
        return self._inner.flush(zlib.Z_FINISH)


class _ZlibFamilyDecode(Decode):
    _wbits = zlib.MAX_WBITS

    def _create(self) -> Any:
        return zlib.decompressobj(self._wbits)


class DeflateEncoder(_ZlibFamilyEncode):
    """Raw deflate compressor."""

    _wbits = _RAW_WBITS


class DeflateDecoder(_ZlibFamilyDecode):
    """Raw deflate decompressor."""

    _wbits = _RAW_WBITS


class ZlibEncoder(_ZlibFamilyEncode):
    """Zlib compressor."""


class ZlibDecoder(_ZlibFamilyDecode):
    """Zlib decompressor."""


class GzipEncoder(_ZlibFamilyEncode):
    """Gzip compressor."""

    _wbits = _GZIP_WBITS


class GzipDecoder(_ZlibFamilyDecode):
    """Gzip decompressor."""

    _wbits = _GZIP_WBITS


class BzEncoder(Encode):
    """Bzip2 compressor."""

    def _create(self, level: Level) -> Any:
        return bz2.BZ2Compressor(level.into_bzip2())


class BzDecoder(Decode):
    """Bzip2 decompressor."""

    def _create(self) -> Any:
        return bz2.BZ2Decompressor()


class XzEncoder(Encode):
    """Xz compressor."""

    _format = lzma.FORMAT_XZ

    def _create(self, level: Level) -> Any:
        return lzma.LZMACompressor(self._format, preset=level.into_xz2())


class LzmaEncoder(XzEncoder):
    """Legacy lzma compressor."""

    _format = lzma.FORMAT_ALONE


class LzmaDecoder(Decode):
    """Legacy lzma decompressor."""

    _format = lzma.FORMAT_ALONE

    def _create(self) -> Any:
        return lzma.LZMADecompressor(self._format)


class XzDecoder(LzmaDecoder):
    """Xz decompressor, accepting stream padding between members."""

    _format = lzma.FORMAT_XZ

    def _reset(self) -> None:
        super()._reset()
        self._padding = 0
        self._started = False

    def _check_padding(self) -> None:
        if self._padding % 4:
            raise lzma.LZMAError("invalid xz stream padding")

    def decode(self, input: PartialBuffer, output: PartialBuffer) -> bool:
        if not self._started:
            data = bytes(input.unwritten())
            zeros = len(data) - len(data.lstrip(b"\0"))
            self._padding += zeros
            input.advance(zeros)
            if zeros == len(data):
                return False
            self._check_padding()
            self._started = True
        return super().decode(input, output)

    def finish(self, output: PartialBuffer) -> bool:
        if not self._started and self._padding:
            self._check_padding()
            return True
        return super().finish(output)


class BrotliEncoder(Encode):
    """Brotli compressor."""

    def _create(self, level: Level) -> Any:
        return brotli.Compressor(quality=level.into_brotli())

    def _compress(self, data: bytes) -> bytes:
        return self._inner.process(data)

    def _sync_flush(self) -> bytes:
        return self._inner.flush()

    def _finish(self) -> bytes:
        return self._inner.finish()


class BrotliDecoder(Decode):
    """Brotli decompressor."""

    def _create(self) -> Any:
        return brotli.Decompressor()

    def _feed(self, data: bytes) -> tuple[bytes, int, bool]:
        out = self._inner.process(data)
        return out, len(data), self._inner.is_finished()


def _zstd_dict(dictionary: bytes | None) -> zstandard.ZstdCompressionDict | None:
    if dictionary is None:
        return None
    return zstandard.ZstdCompressionDict(bytes(dictionary))


class ZstdEncoder(Encode):
    """Zstandard compressor."""

    def __init__(
        self,
        level: Level | None = None,
        params: Iterable[CParameter] = (),
        dictionary: bytes | None = None,
    ) -> None:
        self._options = {p.option: p.value for p in params}
        self._dict = _zstd_dict(dictionary)
        super().__init__(level)

    def _create(self, level: Level) -> Any:
        lvl = level.into_zstd()
        kwargs: dict[str, Any] = {}
        if self._dict is not None:
            kwargs["dict_data"] = self._dict
        if self._options:
            kwargs["compression_params"] = zstandard.ZstdCompressionParameters(
                compression_level=lvl, **self._options
            )
        else:
            kwargs["level"] = lvl
        return zstandard.ZstdCompressor(**kwargs).compressobj()

    def _sync_flush(self) -> bytes:
        return self._inner.flush(zstandard.COMPRESSOBJ_FLUSH_BLOCK)

    def _finish(self) -> bytes:
        return self._inner.flush(zstandard.COMPRESSOBJ_FLUSH_FINISH)


class ZstdDecoder(Decode):
    """Zstandard decompressor."""

    def __init__(self, dictionary: bytes | None = None) -> None:
        self._dict = _zstd_dict(dictionary)
        super().__init__()

    def _create(self) -> Any:
        if self._dict is not None:
            return zstandard.ZstdDecompressor(dict_data=self._dict).decompressobj()
        return zstandard.ZstdDecompressor().decompressobj()