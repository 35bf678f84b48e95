"""Packing of byte sized integers into fewer bytes."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from enum import IntEnum

from bytepack.arithmetic import pack_arithmetic, unpack_arithmetic
from bytepack.stream import BitcodeError, Reader, div_ceil

__all__ = [
    "Packing",
    "pack_bools",
    "unpack_bools",
    "pack_bytes",
    "unpack_bytes",
]


class Packing(IntEnum):
    """Possible states per byte, from most to fewest.

    Each packed value uses ``log2(factor)`` bits.
    """

    P256 = 0
    P16 = 1
    P6 = 2
    P4 = 3
    P3 = 4
    P2 = 5

    @property
    def factor(self) -> int:
        """Number of distinct values one element may take under this packing."""
        return _FACTORS[self]

    @classmethod
    def for_max(cls, maximum: int) -> Packing:
        """Return the tightest packing able to hold values up to ``maximum``."""
        if not 0 <= maximum <= 255:
            raise ValueError(f"maximum must be within 0..=255, got {maximum}")
        # A maximum of 0 still takes a bit per value so decoding can't allocate unboundedly.
        if maximum <= 1:
            return cls.P2
        if maximum == 2:
            return cls.P3
        if maximum == 3:
            return cls.P4
        if maximum <= 5:
            return cls.P6
        if maximum <= 15:
            return cls.P16
        return cls.P256

    def write(self, out: bytearray, offset_by_min: bool = False) -> None:
        """Append the header byte describing this packing to ``out``."""
        if self is Packing.P256 and offset_by_min:
            raise ValueError("unpacked bytes cannot be offset by a minimum")
        out.append(self * 2 - int(offset_by_min))

    @classmethod
    def read(cls, reader: Reader) -> tuple[Packing, bool]:
        """Read a header byte, returning the packing and whether a minimum follows."""
        value = reader.consume_byte()
        index = div_ceil(value, 2)
        if index > cls.P2:
            raise BitcodeError("invalid packing")
        return cls(index), bool(value & 1)


_FACTORS = {
    Packing.P256: 256,
    Packing.P16: 16,
    Packing.P6: 6,
    Packing.P4: 4,
    Packing.P3: 3,
    Packing.P2: 2,
}


def pack_bools(bools: Iterable[bool]) -> bytes:
    """Pack eight booleans per byte."""
    return pack_arithmetic(bytes(int(bool(b)) for b in bools), 2)


def unpack_bools(reader: Reader, length: int) -> list[bool]:
    """Reverse :func:`pack_bools`, reading ``length`` booleans."""
    return [bool(v) for v in unpack_arithmetic(reader, length, 2)]


def _checked(values: bytes | Sequence[int], signed: bool) -> list[int]:
    low, high = (-128, 127) if signed else (0, 255)
    ints = list(values)
    for v in ints:
        if not low <= v <= high:
            raise ValueError(f"value {v} is outside {low}..={high}")
    return ints


def _skip_packing(length: int) -> bool:
    # A packed run takes at least 2 bytes, so packing can only expand 2 or fewer bytes.
    return length <= 2


def pack_bytes(values: bytes | Sequence[int], signed: bool = False) -> bytes:
    """Pack byte sized integers, several per byte when their range allows it.

    Values are unsigned bytes, or ``-128..=127`` when ``signed`` is true. Input
    bytes never span two output bytes, which keeps the output friendly to
    bytewise compressors.
    """
    ints = _checked(values, signed)
    raw = bytes(v & 0xFF for v in ints)
    if _skip_packing(len(ints)):
        return raw

    low, high = min(ints), max(ints)
    # Signed bytes pack like unsigned ones when none is negative.
    basic = Packing.for_max(high) if low >= 0 else Packing.P256
    low_u, high_u = low & 0xFF, high & 0xFF

    out = bytearray()
    offset = Packing.for_max((high_u - low_u) & 0xFF)
    if offset > basic and len(raw) > 5:
        offset.write(out, True)
        out.append(low_u)
        raw = bytes((b - low_u) & 0xFF for b in raw)
        packing = offset
    else:
        basic.write(out, False)
        packing = basic

    if packing is Packing.P256:
        out += raw
    else:
        out += pack_arithmetic(raw, packing.factor)
    return bytes(out)


def _unpack_unsigned(reader: Reader, length: int) -> bytes:
    if _skip_packing(length):
        return reader.consume_bytes(length)

    packing, offset_by_min = Packing.read(reader)
    minimum = reader.consume_byte() if offset_by_min else None

    if packing is Packing.P256:
        return reader.consume_bytes(length)

    data = unpack_arithmetic(reader, length, packing.factor)
    if minimum is not None:
        data = bytes((b + minimum) & 0xFF for b in data)
    return data


def unpack_bytes(
    reader: Reader, length: int, signed: bool = False
) -> bytes | list[int]:
    """Reverse :func:`pack_bytes`, reading ``length`` values from ``reader``.

    Returns ``bytes`` for unsigned values and a list of ints when ``signed``.
    """
    raw = _unpack_unsigned(reader, length)
    if signed:
        return [b - 256 if b > 127 else b for b in raw]
    return raw