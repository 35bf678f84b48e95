"""Byte input cursor and shared error type."""

from __future__ import annotations

__all__ = ["BitcodeError", "Reader", "div_ceil"]


class BitcodeError(ValueError):
    """Raised when encoded data is malformed or truncated."""


def div_ceil(lhs: int, rhs: int) -> int:
    """Integer division rounding towards positive infinity."""
    return -(-lhs // rhs)


class Reader:
    """A cursor over immutable input bytes that is consumed from the front."""

    __slots__ = ("_data", "_pos")

    def __init__(self, data: bytes | bytearray | memoryview = b"") -> None:
        self._data = bytes(data)
        self._pos = 0

    def __len__(self) -> int:
        return len(self._data) - self._pos

    def __repr__(self) -> str:
        return f"Reader(remaining={len(self)})"

    def consume_byte(self) -> int:
        """Consume and return a single byte."""
        if self._pos >= len(self._data):
            raise BitcodeError("EOF")
        value = self._data[self._pos]
        self._pos += 1
        return value

    def consume_bytes(self, length: int) -> bytes:
        """Consume exactly ``length`` bytes."""
        if length < 0:
            raise ValueError("length must not be negative")
        end = self._pos + length
        if end > len(self._data):
            raise BitcodeError("EOF")
        chunk = self._data[self._pos:end]
        self._pos = end
        return chunk

    def consume_arrays(self, count: int, size: int) -> list[bytes]:
        """Consume ``count`` consecutive chunks of ``size`` bytes each."""
        if count < 0 or size < 0:
            raise ValueError("count and size must not be negative")
        block = self.consume_bytes(count * size)
        return [block[start:start + size] for start in range(0, count * size, size)] if size else [b""] * count

    def expect_eof(self) -> None:
        """Raise unless every byte has been consumed."""
        if self._pos != len(self._data):
            raise BitcodeError("Expected EOF")

    def remaining(self) -> bytes:
        """Return the bytes that have not been consumed yet."""
        return self._data[self._pos:]