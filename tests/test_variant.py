import pytest

from bytepack.pack import pack_bytes
from bytepack.stream import BitcodeError, Reader
from bytepack.variant import VariantDecoder, VariantEncoder


def _encode(values):
    encoder = VariantEncoder()
    for v in values:
        encoder.encode(v)
    return encoder.collect()


def test_collect_matches_pack_bytes():
    values = [0, 1, 0, 1, 0, 1, 0]
    assert _encode(values) == pack_bytes(values)


def test_short_runs_are_raw():
    assert _encode([3, 7]) == bytes([3, 7])


def test_collect_clears():
    encoder = VariantEncoder()
    encoder.encode(4)
    encoder.collect()
    assert encoder.collect() == b""


def test_encode_rejects_out_of_range():
    encoder = VariantEncoder()
    with pytest.raises(ValueError):
        encoder.encode(256)
    with pytest.raises(ValueError):
        encoder.encode(-1)


@pytest.mark.parametrize(
    "values",
    [[0, 1, 1, 2], [5], [255, 0, 255, 3, 3, 3, 3, 200], [0, 0, 0, 0, 0, 0, 0, 0, 0]],
)
def test_round_trip(values):
    reader = Reader(_encode(values))
    decoder = VariantDecoder()
    decoder.populate(reader, len(values))
    assert len(reader) == 0
    assert [decoder.decode() for _ in values] == values
    assert decoder.max_variant_index() == max(values)
    for index in range(max(values) + 1):
        assert decoder.length(index) == values.count(index)


def test_empty_has_no_max_variant():
    decoder = VariantDecoder()
    decoder.populate(Reader(_encode([])), 0)
    assert decoder.max_variant_index() is None
    with pytest.raises(IndexError):
        decoder.length(0)


def test_trailing_unused_variants_trimmed():
    decoder = VariantDecoder()
    decoder.populate(Reader(_encode([0, 0, 0])), 3)
    assert decoder.max_variant_index() == 0
    with pytest.raises(IndexError):
        decoder.length(1)


def test_decode_past_end():
    decoder = VariantDecoder()
    decoder.populate(Reader(_encode([1])), 1)
    assert decoder.decode() == 1
    with pytest.raises(IndexError):
        decoder.decode()


def test_populate_eof():
    decoder = VariantDecoder()
    with pytest.raises(BitcodeError, match="EOF"):
        decoder.populate(Reader(bytes([1])), 5)


def test_populate_invalid_packing():
    decoder = VariantDecoder()
    with pytest.raises(BitcodeError, match="invalid packing"):
        decoder.populate(Reader(bytes([255])), 5)