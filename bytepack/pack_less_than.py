"""Packing of bytes known to be below a bound, without a packing header."""

from __future__ import annotations

from collections.abc import Sequence

from bytepack.arithmetic import (
    factor_to_divisor,
    pack_arithmetic,
    unpack_arithmetic,
    unpack_histogram,
)
from bytepack.histogram import histogram
from bytepack.pack import Packing
from bytepack.stream import BitcodeError, Reader, div_ceil

__all__ = ["pack_bytes_less_than", "unpack_bytes_less_than"]

# Below this many whole packed bytes the values are counted directly.
_PACKED_HISTOGRAM_THRESHOLD = 100


def _packing_for(n: int) -> Packing:
    if not 0 <= n <= 256:
        raise ValueError(f"bound must be within 0..=256, got {n}")
    return Packing.for_max(max(n - 1, 0))


def pack_bytes_less_than(data: bytes | Sequence[int], n: int) -> bytes:
    """Pack bytes that are all below ``n``; the bound replaces the header."""
    packing = _packing_for(n)
    values = bytes(data)
    if any(v >= n for v in values):
        raise ValueError(f"all values must be below {n}")
    if packing is Packing.P256:
        return values
    return pack_arithmetic(values, packing.factor)


def _check_less_than(data: bytes, n: int, factor: int) -> None:
    if factor > n and data and max(data) >= n:
        raise BitcodeError("invalid packing")


def _trim_histogram(counts: Sequence[int], size: int) -> list[int]:
    if any(counts[size:]):
        raise BitcodeError("invalid packing")
    return list(counts[:size])


def _value_histogram(packed: bytes, data: bytes, length: int, factor: int) -> list[int]:
    divisor = factor_to_divisor(factor)
    floor = length // divisor
    whole = packed[:floor]
    partial_length = length - floor * divisor
    partial = packed[floor] if floor < len(packed) else None

    if factor == 2:
        ones = sum(b.bit_count() for b in whole)
        if partial is not None:
            # Clear the bits past the last value, which carry no meaning.
            ones += ((partial << (divisor - partial_length)) & 0xFF).bit_count()
        return [length - ones, ones]

    if len(whole) < _PACKED_HISTOGRAM_THRESHOLD:
        counts = [0] * factor
        for v in data:
            counts[v] += 1
        return counts

    packed_counts = _trim_histogram(histogram(whole), factor**divisor)
    counts = unpack_histogram(packed_counts, factor)
    if partial is not None:
        for _ in range(partial_length):
            counts[partial % factor] += 1
            partial //= factor
    return counts


def unpack_bytes_less_than(
    reader: Reader, length: int, n: int, with_histogram: bool = False
) -> tuple[bytes, list[int] | None]:
    """Reverse :func:`pack_bytes_less_than`, reading ``length`` bytes.

    Returns the bytes, all guaranteed below ``n``, and, when ``with_histogram``
    is true, a list of ``n`` counts of each value (otherwise ``None``).
    """
    packing = _packing_for(n)
    if packing is Packing.P256:
        data = reader.consume_bytes(length)
        if not with_histogram:
            _check_less_than(data, n, 256)
            return data, None
        return data, _trim_histogram(histogram(data), n)

    factor = packing.factor
    packed = reader.consume_bytes(div_ceil(length, factor_to_divisor(factor)))
    data = unpack_arithmetic(Reader(packed), length, factor)
    if not with_histogram:
        _check_less_than(data, n, factor)
        return data, None
    return data, _trim_histogram(_value_histogram(packed, data, length, factor), n)