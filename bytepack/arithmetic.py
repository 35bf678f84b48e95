"""Packing of several small values into single bytes."""

from __future__ import annotations

from collections.abc import Sequence

from bytepack.stream import Reader, div_ceil

__all__ = [
    "factor_to_divisor",
    "pack_arithmetic",
    "unpack_arithmetic",
    "unpack_histogram",
]

_DIVISORS = {2: 8, 3: 5, 4: 4, 6: 3, 16: 2}


def factor_to_divisor(factor: int) -> int:
    """Return how many values below ``factor`` fit in one byte."""
    try:
        return _DIVISORS[factor]
    except KeyError:
        raise ValueError(f"unsupported factor {factor}") from None


def pack_arithmetic(data: bytes | Sequence[int], factor: int) -> bytes:
    """Pack values that are all below ``factor`` into as few bytes as possible.

    Factors 2, 4 and 16 amount to bit packing, 3 and 6 to arithmetic coding.
    The first value of each group occupies the least significant digit.
    """
    divisor = factor_to_divisor(factor)
    values = bytes(data)
    if any(v >= factor for v in values):
        raise ValueError(f"all values must be below {factor}")
    weights = [factor**i for i in range(divisor)]
    return bytes(
        sum(v * w for v, w in zip(values[start:start + divisor], weights))
        for start in range(0, len(values), divisor)
    )


def unpack_arithmetic(reader: Reader, length: int, factor: int) -> bytes:
    """Reverse :func:`pack_arithmetic`, reading ``length`` values from ``reader``."""
    divisor = factor_to_divisor(factor)
    packed = reader.consume_bytes(div_ceil(length, divisor))
    out = bytearray()
    for byte in packed:
        for _ in range(divisor):
            out.append(byte % factor)
            byte //= factor
    del out[length:]
    return bytes(out)


def unpack_histogram(packed_histogram: Sequence[int], factor: int) -> list[int]:
    """Turn a histogram of packed bytes into a histogram of the values they hold.

    ``packed_histogram`` must have ``factor ** divisor`` buckets.
    """
    divisor = factor_to_divisor(factor)
    size = factor**divisor
    if len(packed_histogram) != size:
        raise ValueError(f"expected {size} buckets, got {len(packed_histogram)}")
    result = [0] * factor
    for packed, count in enumerate(packed_histogram):
        if not count:
            continue
        for _ in range(divisor):
            result[packed % factor] += count
            packed //= factor
    return result