"""Format-specific encoders and decoders that read from a buffered reader."""

from __future__ import annotations

from typing import Any, Iterable

from . import codecs
from .bufread import Decoder, Encoder
from .codecs import Level
from .params import CParameter


class _Decoder(Decoder):
    _codec: type[codecs.Decode]

    def __init__(self, reader: Any) -> None:
        super().__init__(reader, self._codec())


class _Encoder(Encoder):
    _codec: type[codecs.Encode]

    def __init__(self, reader: Any, level: Level | None = None) -> None:
        super().__init__(reader, self._codec(level or Level.default()))


class BrotliDecoder(_Decoder):
    """A brotli decoder, or decompressor."""

    _codec = codecs.BrotliDecoder


class BrotliEncoder(_Encoder):
    """A brotli encoder, or compressor."""

    _codec = codecs.BrotliEncoder

    @classmethod
    def with_quality(cls, reader: Any, level: Level) -> BrotliEncoder:
        """An encoder compressing at the given level."""
        return cls(reader, level)


class BzDecoder(_Decoder):
    """A bzip2 decoder, or decompressor."""

    _codec = codecs.BzDecoder


class BzEncoder(_Encoder):
    """A bzip2 encoder, or compressor."""

    _codec = codecs.BzEncoder

    @classmethod
    def with_quality(cls, reader: Any, level: Level) -> BzEncoder:
        """An encoder compressing at the given level."""
        return cls(reader, level)


class DeflateDecoder(_Decoder):
    """A deflate decoder, or decompressor."""

    _codec = codecs.DeflateDecoder


class DeflateEncoder(_Encoder):
    """A deflate encoder, or compressor."""

    _codec = codecs.DeflateEncoder

    @classmethod
    def with_quality(cls, reader: Any, level: Level) -> DeflateEncoder:
        """An encoder compressing at the given level."""
        return cls(reader, level)


class GzipDecoder(_Decoder):
    """A gzip decoder, or decompressor."""

    _codec = codecs.GzipDecoder


class GzipEncoder(_Encoder):
    """A gzip encoder, or compressor."""

    _codec = codecs.GzipEncoder

    @classmethod
    def with_quality(cls, reader: Any, level: Level) -> GzipEncoder:
        """An encoder compressing at the given level."""
        return cls(reader, level)


class ZlibDecoder(_Decoder):
    """A zlib decoder, or decompressor."""

    _codec = codecs.ZlibDecoder


class ZlibEncoder(_Encoder):
    """A zlib encoder, or compressor."""

    _codec = codecs.ZlibEncoder

    @classmethod
    def with_quality(cls, reader: Any, level: Level) -> ZlibEncoder:
        """An encoder compressing at the given level."""
        return cls(reader, level)


class XzDecoder(_Decoder):
    """An xz decoder, or decompressor."""

    _codec = codecs.XzDecoder


class XzEncoder(_Encoder):
    """An xz encoder, or compressor."""

    _codec = codecs.XzEncoder

    @classmethod
    def with_quality(cls, reader: Any, level: Level) -> XzEncoder:
        """An encoder compressing at the given level."""
        return cls(reader, level)


class LzmaDecoder(_Decoder):
    """An lzma decoder, or decompressor."""

    _codec = codecs.LzmaDecoder


class LzmaEncoder(_Encoder):
    """An lzma encoder, or compressor."""

    _codec = codecs.LzmaEncoder

    @classmethod
    def with_quality(cls, reader: Any, level: Level) -> LzmaEncoder:
        """An encoder compressing at the given level."""
        return cls(reader, level)


class ZstdDecoder(Decoder):
    """A zstd decoder, or decompressor."""

    def __init__(self, reader: Any, dictionary: bytes | None = None) -> None:
        super().__init__(reader, codecs.ZstdDecoder(dictionary))

    @classmethod
    def with_dict(cls, reader: Any, dictionary: bytes) -> ZstdDecoder:
        """A decoder using the pre-trained dictionary the data was compressed with."""
        return cls(reader, dictionary)


class ZstdEncoder(Encoder):
    """A zstd encoder, or compressor."""

    def __init__(
        self,
        reader: Any,
        level: Level | None = None,
        params: Iterable[CParameter] = (),
        dictionary: bytes | None = None,
    ) -> None:
        super().__init__(
            reader,
            codecs.ZstdEncoder(level or Level.default(), params, dictionary),
        )

    @classmethod
    def with_quality(cls, reader: Any, level: Level) -> ZstdEncoder:
        """An encoder compressing at the given level."""
        return cls(reader, level)

    @classmethod
    def with_quality_and_params(
        cls, reader: Any, level: Level, params: Iterable[CParameter]
    ) -> ZstdEncoder:
        """An encoder compressing at the given level with extra zstd parameters."""
        return cls(reader, level, params)

    @classmethod
    def with_dict(cls, reader: Any, level: Level, dictionary: bytes) -> ZstdEncoder:
        """An encoder compressing at the given level with a pre-trained dictionary."""
        return cls(reader, level, dictionary=dictionary)