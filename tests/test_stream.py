import pytest

from bytepack.stream import BitcodeError, Reader, div_ceil


def test_consume_byte_in_order():
    reader = Reader(bytes([5, 6]))
    assert reader.consume_byte() == 5
    assert reader.consume_byte() == 6
    with pytest.raises(BitcodeError, match="^EOF$"):
        reader.consume_byte()


def test_consume_bytes_and_remaining():
    reader = Reader(b"abcdef")
    assert reader.consume_bytes(2) == b"ab"
    assert reader.remaining() == b"cdef"
    assert len(reader) == 4


def test_consume_bytes_eof_leaves_position():
    reader = Reader(b"abc")
    with pytest.raises(BitcodeError, match="^EOF$"):
        reader.consume_bytes(4)
    assert reader.remaining() == b"abc"


def test_consume_zero_bytes():
    reader = Reader(b"")
    assert reader.consume_bytes(0) == b""
    reader.expect_eof()
    assert reader.remaining() == b""


def test_consume_arrays():
    reader = Reader(b"abcdefg")
    assert reader.consume_arrays(3, 2) == [b"ab", b"cd", b"ef"]
    assert reader.remaining() == b"g"
    with pytest.raises(BitcodeError):
        reader.consume_arrays(1, 2)


def test_expect_eof():
    reader = Reader(b"x")
    with pytest.raises(BitcodeError, match="^Expected EOF$"):
        reader.expect_eof()
    assert reader.consume_byte() == ord("x")
    reader.expect_eof()
    assert len(reader) == 0


def test_negative_length_rejected():
    with pytest.raises(ValueError):
        Reader(b"abc").consume_bytes(-1)


@pytest.mark.parametrize("lhs", range(0, 40))
@pytest.mark.parametrize("rhs", [1, 2, 3, 5, 8])
def test_div_ceil_unsigned_invariant(lhs, rhs):
    q = div_ceil(lhs, rhs)
    assert q * rhs >= lhs
    assert (q - 1) * rhs < lhs


@pytest.mark.parametrize("lhs", range(-20, 21))
@pytest.mark.parametrize("rhs", [-3, -1, 2, 7])
def test_div_ceil_signed_is_smallest_upper_bound(lhs, rhs):
    q = div_ceil(lhs, rhs)
    assert q >= lhs / rhs
    assert q - 1 < lhs / rhs


def test_div_ceil_exact():
    assert div_ceil(16, 8) == 2