# asyncpress

Streaming compression and decompression for asynchronous I/O.

`asyncpress` compresses or decompresses bytes chunk by chunk as they are read
from an asynchronous source or written to an asynchronous destination. These
formats are supported:

| Format  | Encoder          | Decoder          |
|---------|------------------|------------------|
| brotli  | `BrotliEncoder`  | `BrotliDecoder`  |
| bzip2   | `BzEncoder`      | `BzDecoder`      |
| deflate | `DeflateEncoder` | `DeflateDecoder` |
| gzip    | `GzipEncoder`    | `GzipDecoder`    |
| zlib    | `ZlibEncoder`    | `ZlibDecoder`    |
| zstd    | `ZstdEncoder`    | `ZstdDecoder`    |
| xz      | `XzEncoder`      | `XzDecoder`      |
| lzma    | `LzmaEncoder`    | `LzmaDecoder`    |

Brotli and zstd come from the `brotli` and `zstandard` packages, installed as
dependencies; the other formats use the standard library.

## Modules

- `asyncpress.readers` – the read side, one encoder and one decoder class per
  format (the names in the table above).
- `asyncpress.bufread` – `StreamBufReader` and the generic read-side
  `Encoder` and `Decoder` that the classes in `readers` build on.
- `asyncpress.write` – the generic write-side `Encoder` and `Decoder`.
- `asyncpress.bufwriter` – `BufWriter`, the buffer between the write side and
  its destination.
- `asyncpress.codecs` – `Level` and the incremental codec objects, again one
  per format and named as in the table.
- `asyncpress.params` – `CParameter`, extra zstd compression parameters.
- `asyncpress.util` – `PartialBuffer`, a buffer with a fill cursor.

## Reading

Each class in `asyncpress.readers` wraps a source and is read from with the
coroutine `read(n)`; `read()` with no argument (or a negative `n`) reads to
the end. An encoder reads plain bytes and returns compressed ones; a decoder
does the opposite.

The source may be a bytes-like object, an iterable or asynchronous iterable
of byte chunks, an object with a synchronous or asynchronous `read(n)`, or any
object that already has `fill_buf()` and `consume(n)`. Anything else is
wrapped in a `StreamBufReader`, which skips empty chunks and reports end of
input as an empty buffer.

```python
import asyncio

from asyncpress.codecs import Level
from asyncpress.readers import GzipDecoder, GzipEncoder


async def main():
    compressed = await GzipEncoder.with_quality(b"hello world" * 100, Level.best()).read()
    plain = await GzipDecoder([compressed[:10], compressed[10:]]).read()
    assert plain == b"hello world" * 100


asyncio.run(main())
```

A decoder stops after the first compressed member or frame. Call
`decoder.multiple_members(True)` to decode further members until the end of
the input; the xz decoder also accepts the zero padding, in multiples of four
bytes, allowed between xz streams. Bytes after the end of a single member are
left unread in the source, which `into_inner()` returns.

## Writing

The write side is `asyncpress.write.Encoder` and `asyncpress.write.Decoder`,
each built from a destination and a codec object from `asyncpress.codecs`:

```python
from asyncpress import codecs
from asyncpress.write import Decoder, Encoder


async def roundtrip(data: bytes) -> bytes:
    compressed = bytearray()
    async with Encoder(compressed, codecs.ZstdEncoder(codecs.Level.default())) as encoder:
        await encoder.write_all(data)

    plain = bytearray()
    async with Decoder(plain, codecs.ZstdDecoder()) as decoder:
        await decoder.write_all(bytes(compressed))
    return bytes(plain)
```

Both offer `write(data)` (returns how many bytes were taken), `write_all`,
`flush`, `shutdown` and `into_inner`, and work as asynchronous context
managers that shut down on a clean exit. The destination may be a `bytearray`
or any object whose `write` (synchronous or asynchronous) returns the number
of bytes taken or `None`; its `flush`/`drain` and `shutdown`/`aclose`/`close`
(and `wait_closed`) are called when present. Output passes through a
`BufWriter` of 8192 bytes, so data still buffered is not in the destination
until `flush()` or `shutdown()`.

## Compression levels

```python
from asyncpress.codecs import Level

Level.fastest()    # fastest, usually the largest output
Level.best()       # smallest output, slowest
Level.default()    # the format's own default
Level.precise(5)   # a numeric quality, clamped to the format's range
```

A precise quality outside a format's range is clamped to the nearest valid
value rather than rejected. Encoders built without a level use
`Level.default()`.

## zstd extras

`readers.ZstdEncoder.with_quality_and_params` takes a list of `CParameter`
values, such as `CParameter.window_log(20)` or `CParameter.checksum_flag(True)`;
`codecs.ZstdEncoder` takes the same list as its `params` argument.

`readers.ZstdEncoder.with_dict` and `readers.ZstdDecoder.with_dict` take a
pre-trained dictionary, as do `codecs.ZstdEncoder` and `codecs.ZstdDecoder`
through `dictionary`. Decoding data compressed with a dictionary fails
without that same dictionary.

## Errors

- Corrupt input raises the underlying library's error from the `read` or
  `write` call that meets it.
- Input that ends before the compressed stream is complete raises `EOFError`
  on the read side. On the write side, `Decoder.shutdown()` raises `OSError`
  ("Attempt to shutdown before finishing input").
- Writing to a write-side `Encoder` after `shutdown()`, or to a write-side
  `Decoder` after its stream has ended, raises `RuntimeError`.
- A destination that accepts zero bytes raises `OSError`.

## What it does not do

There are no per-format classes on the write side: build
`asyncpress.write.Encoder` or `Decoder` with a codec from `asyncpress.codecs`
instead. The write-side `Decoder` decodes a single member or frame only. There
is no command-line tool.

## Running the tests

```
pip install -e ".[test]"
pytest
```