"""Streaming compression and decompression for asynchronous readers and writers."""

__version__ = "0.1.0"

__all__ = ["bufread", "bufwriter", "codecs", "params", "readers", "util", "write"]