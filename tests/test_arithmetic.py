import random

import pytest

from bytepack.arithmetic import (
    factor_to_divisor,
    pack_arithmetic,
    unpack_arithmetic,
    unpack_histogram,
)
from bytepack.histogram import histogram
from bytepack.stream import BitcodeError, Reader

PACK_CASES = [
    (2, [1, 0, 1, 0], [0b0101]),
    (2, [1, 0, 1, 0, 1, 0, 1, 0], [0b01010101]),
    (2, [1, 0, 1, 0, 1, 0, 1, 0, 1], [0b01010101, 0b1]),
    (3, [0], [0]),
    (3, [0, 1], [0 + 1 * 3]),
    (3, [0, 1, 2], [0 + 1 * 3 + 2 * 3 * 3]),
    (3, [2, 0, 0, 0, 0, 0, 1, 2], [2, 0 + 1 * 3 + 2 * 3 * 3]),
    (4, [1, 0], [0b0001]),
    (4, [1, 0, 1, 0], [0b00010001]),
    (4, [1, 0, 1, 0, 1, 0], [0b00010001, 0b0001]),
    (6, [0], [0]),
    (6, [0, 1], [0 + 1 * 6]),
    (6, [0, 1, 2], [0 + 1 * 6 + 2 * 6 * 6]),
    (6, [2, 0, 0, 0, 1, 2], [2, 0 + 1 * 6 + 2 * 6 * 6]),
    (16, [1], [0b0001]),
    (16, [1, 0], [0b00000001]),
    (16, [1, 0, 1], [0b00000001, 0b0001]),
]


@pytest.mark.parametrize("factor,data,expected", PACK_CASES)
def test_pack_arithmetic(factor, data, expected):
    assert pack_arithmetic(data, factor) == bytes(expected)


@pytest.mark.parametrize("factor,data,_expected", PACK_CASES)
def test_unpack_arithmetic(factor, data, _expected):
    packed = pack_arithmetic(data, factor)
    reader = Reader(packed)
    assert unpack_arithmetic(reader, len(data), factor) == bytes(data)
    assert reader.remaining() == b""


@pytest.mark.parametrize("factor", [2, 3, 4, 6, 16])
@pytest.mark.parametrize("length", [0, 1, 7, 8, 9, 100, 1001])
def test_random_round_trip(factor, length):
    rng = random.Random(factor * 10000 + length)
    data = bytes(rng.randrange(factor) for _ in range(length))
    packed = pack_arithmetic(data, factor)
    assert len(packed) == -(-length // factor_to_divisor(factor))
    assert unpack_arithmetic(Reader(packed), length, factor) == data


def test_factor_to_divisor():
    assert [factor_to_divisor(f) for f in (2, 3, 4, 6, 16)] == [8, 5, 4, 3, 2]
    with pytest.raises(ValueError):
        factor_to_divisor(5)


def test_pack_rejects_large_value():
    with pytest.raises(ValueError):
        pack_arithmetic([0, 2], 2)


def test_unpack_eof():
    with pytest.raises(BitcodeError, match="^EOF$"):
        unpack_arithmetic(Reader(b"\x00"), 9, 2)


def test_unpack_garbage_bytes_stay_below_factor():
    out = unpack_arithmetic(Reader(bytes([255])), 5, 3)
    assert len(out) == 5
    assert max(out) < 3


@pytest.mark.parametrize("factor", [2, 3, 4, 6, 16])
def test_unpack_histogram_matches_unpacked(factor):
    divisor = factor_to_divisor(factor)
    size = factor**divisor
    rng = random.Random(factor)
    packed = bytes(rng.randrange(size) for _ in range(500))
    packed_hist = histogram(packed)[:size]
    unpacked = unpack_arithmetic(Reader(packed), len(packed) * divisor, factor)
    assert unpack_histogram(packed_hist, factor) == histogram(unpacked)[:factor]


def test_unpack_histogram_wrong_size():
    with pytest.raises(ValueError):
        unpack_histogram([0] * 256, 3)