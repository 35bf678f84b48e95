"""Encoding of collection lengths: one byte each, with large lengths stored apart."""

from __future__ import annotations

from bytepack.int import IntEncoder
from bytepack.int_packing import IntKind
from bytepack.pack import pack_bytes, unpack_bytes
from bytepack.pack_ints import unpack_ints
from bytepack.stream import BitcodeError, Reader

__all__ = ["HUGE_LEN", "LengthEncoder", "LengthDecoder"]

# Largest signed 64 bit value divided by the largest element size we allocate for.
HUGE_LEN = 0x7FFF_FFFF_FFFF_FFFF // 4096

_MARKER = 255
_U64_MAX = (1 << 64) - 1


class LengthEncoder:
    """Collects lengths; those below 255 take one byte, larger ones are packed separately."""

    def __init__(self) -> None:
        self._small = bytearray()
        self._large = IntEncoder(IntKind.USIZE)

    def encode(self, value: int) -> None:
        """Record one length."""
        if value < 0:
            raise ValueError(f"length must not be negative, got {value}")
        if value < _MARKER:
            self._small.append(value)
        else:
            self._large.encode(value)
            self._small.append(_MARKER)

    def collect(self) -> bytes:
        """Return the encoded lengths and forget them."""
        packed = pack_bytes(self._small)
        self._small.clear()
        return packed + self._large.collect()


class LengthDecoder:
    """Reads encoded lengths and hands them out one by one."""

    def __init__(self) -> None:
        self._small = b""
        self._small_pos = 0
        self._large: list[int] = []
        self._large_pos = 0
        self._sum = 0

    def populate(self, reader: Reader, length: int) -> None:
        """Read ``length`` lengths from ``reader``, checking their total is sane."""
        small = bytes(unpack_bytes(reader, length))
        total = sum(small)
        large: list[int] = []

        # If the sum is below 255 no byte can be the large length marker.
        if total >= _MARKER:
            large_length = small.count(_MARKER)
            large = unpack_ints(reader, large_length, IntKind.USIZE)
            total -= large_length * _MARKER
            for value in large:
                total += value
                if total > _U64_MAX:
                    raise BitcodeError("length overflow")
            if total >= HUGE_LEN:
                raise BitcodeError("huge length")

        self._small = small
        self._small_pos = 0
        self._large = large
        self._large_pos = 0
        self._sum = total

    def length(self) -> int:
        """Return the sum of all lengths read by :meth:`populate`."""
        return self._sum

    def decode(self) -> int:
        """Return the next length."""
        if self._small_pos >= len(self._small):
            raise IndexError("no more lengths to decode")
        value = self._small[self._small_pos]
        self._small_pos += 1
        if value < _MARKER:
            return value
        value = self._large[self._large_pos]
        self._large_pos += 1
        return value

    def copy(self) -> LengthDecoder:
        """Return an independent decoder positioned where this one is."""
        other = LengthDecoder()
        other._small = self._small
        other._small_pos = self._small_pos
        other._large = self._large
        other._large_pos = self._large_pos
        other._sum = self._sum
        return other

    def any_greater_than(self, n: int, length: int) -> bool:
        """Return whether any of the ``length`` decoded lengths exceeds ``n``."""
        if n < _MARKER:
            # A large length leaves a 255 marker, which is already above ``n``.
            return max(self._small[:length], default=0) > n
        decoder = self.copy()
        return any(decoder.decode() > n for _ in range(length))