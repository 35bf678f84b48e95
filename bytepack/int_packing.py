"""Integer kinds and the header describing how a run of integers is packed."""

from __future__ import annotations

from collections.abc import Iterable
from enum import Enum, IntEnum

from bytepack.stream import BitcodeError, Reader, div_ceil

__all__ = ["IntKind", "IntPacking", "minmax"]


class IntKind(Enum):
    """Fixed width integer types, plus the pointer sized ones (taken as 64 bits)."""

    U8 = "u8"
    U16 = "u16"
    U32 = "u32"
    U64 = "u64"
    U128 = "u128"
    USIZE = "usize"
    I8 = "i8"
    I16 = "i16"
    I32 = "i32"
    I64 = "i64"
    I128 = "i128"
    ISIZE = "isize"

    @property
    def bits(self) -> int:
        """Width of the integer in bits."""
        return _BITS[self]

    @property
    def size(self) -> int:
        """Width of the integer in bytes."""
        return self.bits // 8

    @property
    def signed(self) -> bool:
        """Whether the integer is two's complement signed."""
        return self.value.startswith("i")

    @property
    def minimum(self) -> int:
        """Smallest representable value."""
        return -(1 << (self.bits - 1)) if self.signed else 0

    @property
    def maximum(self) -> int:
        """Largest representable value."""
        return (1 << (self.bits - 1)) - 1 if self.signed else (1 << self.bits) - 1

    @property
    def mask(self) -> int:
        """All bits of the integer set."""
        return (1 << self.bits) - 1

    @property
    def sized(self) -> IntKind:
        """The platform independent kind: pointer sized kinds become 64 bit ones."""
        return _SIZED.get(self, self)

    @property
    def unsigned(self) -> IntKind:
        """The unsigned fixed width kind with the same number of bits."""
        return _UNSIGNED_BY_BITS[self.bits]

    def validate(self, value: int) -> int:
        """Return ``value`` unless it is out of range for this kind."""
        if not self.minimum <= value <= self.maximum:
            raise ValueError(f"value {value} is outside the range of {self.value}")
        return value

    def to_unsigned(self, value: int) -> int:
        """Reinterpret ``value`` as the unsigned integer with the same bits."""
        return self.validate(value) & self.mask

    def from_unsigned(self, value: int) -> int:
        """Reinterpret the low bits of ``value`` as a value of this kind."""
        value &= self.mask
        if self.signed and value >> (self.bits - 1):
            value -= 1 << self.bits
        return value


_BITS = {
    IntKind.U8: 8,
    IntKind.U16: 16,
    IntKind.U32: 32,
    IntKind.U64: 64,
    IntKind.U128: 128,
    IntKind.USIZE: 64,
    IntKind.I8: 8,
    IntKind.I16: 16,
    IntKind.I32: 32,
    IntKind.I64: 64,
    IntKind.I128: 128,
    IntKind.ISIZE: 64,
}

_SIZED = {IntKind.USIZE: IntKind.U64, IntKind.ISIZE: IntKind.I64}

_UNSIGNED_BY_BITS = {
    8: IntKind.U8,
    16: IntKind.U16,
    32: IntKind.U32,
    64: IntKind.U64,
    128: IntKind.U128,
}

_U128_MAX = (1 << 128) - 1


class IntPacking(IntEnum):
    """Possible integer widths, from widest to narrowest."""

    P128 = 0
    P64 = 1
    P32 = 2
    P16 = 3
    P8 = 4

    @property
    def size(self) -> int:
        """Bytes taken by each packed integer."""
        return 16 >> self

    @classmethod
    def for_max(cls, maximum: int) -> IntPacking:
        """Return the narrowest width that holds the unsigned ``maximum``."""
        if not 0 <= maximum <= _U128_MAX:
            raise ValueError(f"maximum must be a 128 bit unsigned value, got {maximum}")
        if maximum <= 0xFF:
            return cls.P8
        if maximum <= 0xFFFF:
            return cls.P16
        if maximum <= 0xFFFF_FFFF:
            return cls.P32
        if maximum <= 0xFFFF_FFFF_FFFF_FFFF:
            return cls.P64
        return cls.P128

    @classmethod
    def for_kind(cls, kind: IntKind) -> IntPacking:
        """Return the packing that leaves integers of ``kind`` at full width."""
        return cls.for_max(kind.unsigned.maximum)

    def write(self, out: bytearray, kind: IntKind, offset_by_min: bool = False) -> None:
        """Append the header byte for this packing of ``kind`` integers to ``out``.

        Zero means no packing; higher numbers mean narrower packing. No packing
        combined with an offset is unrepresentable.
        """
        base = IntPacking.for_kind(kind)
        if self < base:
            raise ValueError(f"{self.name} is wider than {kind.value}")
        if self == base and offset_by_min:
            raise ValueError("unpacked integers cannot be offset by a minimum")
        out.append((self - base) * 2 - int(offset_by_min))

    @classmethod
    def read(cls, reader: Reader, kind: IntKind) -> tuple[IntPacking, bool]:
        """Read a header byte, returning the packing and whether a minimum follows."""
        value = reader.consume_byte()
        index = div_ceil(value, 2) + cls.for_kind(kind)
        if index > cls.P8:
            raise BitcodeError("invalid packing")
        return cls(index), bool(value & 1)


def minmax(values: Iterable[int], kind: IntKind) -> tuple[int, int]:
    """Return ``(min, max)`` of ``values``; ``(kind.maximum, kind.minimum)`` if empty."""
    low, high = kind.maximum, kind.minimum
    for value in values:
        kind.validate(value)
        low = min(low, value)
        high = max(high, value)
    return low, high