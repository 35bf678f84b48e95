"""Packing of runs of integers into the narrowest width that holds them."""

from __future__ import annotations

from collections.abc import Iterable

from bytepack.int_packing import IntKind, IntPacking, minmax
from bytepack.pack import pack_bytes, unpack_bytes
from bytepack.stream import Reader

__all__ = ["pack_ints", "unpack_ints"]

# Only this many leading values are scanned before deciding packing is hopeless.
_SAMPLE_SIZE = 16


def _skip_packing(kind: IntKind, length: int) -> bool:
    if kind.size == 1:
        return True  # Single bytes are only packed by pack_bytes.
    if length == 0:
        return True
    # A single 16 bit integer can't shrink: a header alone takes a byte.
    return kind.size == 2 and length == 1


def _write_values(values: list[int], packing: IntPacking, out: bytearray) -> None:
    if packing is IntPacking.P8:
        out += pack_bytes(values)
    else:
        size = packing.size
        out += b"".join(v.to_bytes(size, "little") for v in values)


def pack_ints(values: Iterable[int], kind: IntKind) -> bytes:
    """Pack integers of ``kind``, narrowing them and offsetting by the minimum when it helps.

    The output is little endian and independent of the platform; pointer sized
    kinds pack exactly like their 64 bit counterparts.
    """
    sized = kind.sized
    ints = [sized.validate(v) for v in values]

    # Signed bytes go straight to pack_bytes so runs like [0, -1, 0, -1] still pack.
    if sized is IntKind.I8:
        return pack_bytes(ints, signed=True)

    unsigned = sized.unsigned
    mask = unsigned.mask
    none = IntPacking.for_kind(unsigned)
    out = bytearray()
    basic = none
    bounds: tuple[int, int] | None = None

    if not _skip_packing(sized, len(ints)):
        low, high = minmax(ints[:_SAMPLE_SIZE], sized)
        spread = (sized.to_unsigned(high) - sized.to_unsigned(low)) & mask
        if IntPacking.for_max(spread) == none:
            none.write(out, unsigned)
        else:
            low, high = minmax(ints, sized)
            # Signed integers pack like unsigned ones when none is negative.
            basic = IntPacking.for_max(sized.to_unsigned(high)) if low >= 0 else none
            bounds = (sized.to_unsigned(low), sized.to_unsigned(high))

    raw = [sized.to_unsigned(v) for v in ints]
    packing = basic
    if bounds is not None:
        low_u, high_u = bounds
        offset = IntPacking.for_max((high_u - low_u) & mask)
        if offset > basic and len(raw) > 5:
            raw = [(v - low_u) & mask for v in raw]
            offset.write(out, unsigned, True)
            out += low_u.to_bytes(unsigned.size, "little")
            packing = offset
        else:
            basic.write(out, unsigned, False)

    _write_values(raw, packing, out)
    return bytes(out)


def unpack_ints(reader: Reader, length: int, kind: IntKind) -> list[int]:
    """Reverse :func:`pack_ints`, reading ``length`` integers of ``kind`` from ``reader``."""
    unsigned = kind.sized.unsigned
    minimum: int | None = None
    if _skip_packing(unsigned, length):
        packing = IntPacking.for_kind(unsigned)
    else:
        packing, offset_by_min = IntPacking.read(reader, unsigned)
        if offset_by_min:
            minimum = int.from_bytes(reader.consume_bytes(unsigned.size), "little")

    if packing is IntPacking.P8:
        raw = list(unpack_bytes(reader, length))
    else:
        raw = [
            int.from_bytes(chunk, "little")
            for chunk in reader.consume_arrays(length, packing.size)
        ]

    if minimum is not None:
        mask = unsigned.mask
        raw = [(minimum + v) & mask for v in raw]
    return [kind.from_unsigned(v) for v in raw]