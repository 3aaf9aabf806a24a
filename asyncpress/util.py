"""Byte buffers that track how much of them has been consumed or filled."""

from __future__ import annotations

from typing import Generic, TypeVar

B = TypeVar("B", bytes, bytearray, memoryview)


class PartialBuffer(Generic[B]):
    """A buffer with a cursor splitting it into a written and an unwritten part."""

    __slots__ = ("buffer", "index")

    def __init__(self, buffer: B) -> None:
        self.buffer = buffer
        self.index = 0

    def __repr__(self) -> str:
        return f"PartialBuffer(index={self.index}, size={len(self.buffer)})"

    def written(self) -> B:
        """The part before the cursor."""
        return self.buffer[: self.index]

    def unwritten(self) -> B:
        """The part after the cursor."""
        return self.buffer[self.index :]

    def advance(self, amount: int) -> None:
        """Move the cursor forward by ``amount`` bytes."""
        if amount < 0 or self.index + amount > len(self.buffer):
            raise ValueError("cannot advance past the end of the buffer")
        self.index += amount

    def copy_unwritten_from(self, other: PartialBuffer) -> int:
        """Copy as much of ``other``'s unwritten part as fits; advance both cursors."""
        length = min(len(self.buffer) - self.index, len(other.buffer) - other.index)
        self.buffer[self.index : self.index + length] = other.buffer[
            other.index : other.index + length
        ]
        self.index += length
        other.index += length
        return length

    def take(self) -> PartialBuffer[B]:
        """Return a buffer holding this state and reset this one to an empty buffer."""
        taken = PartialBuffer(self.buffer)
        taken.index = self.index
        self.buffer = type(self.buffer)()
        self.index = 0
        return taken

    def into_inner(self) -> B:
        """The whole underlying buffer."""
        return self.buffer