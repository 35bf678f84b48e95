# bytepack

Building blocks for a compact, column-oriented binary format. Values of the
same kind go into one column, and each column is packed as tightly as its
contents allow.

- Bytes with a small range go several to a byte (`bytepack.pack`): 8 per byte
  for values below 2, 5 for values below 3, 4 for values below 4, 3 for values
  below 6 and 2 for values below 16. When it gives a tighter packing, the
  minimum is subtracted first and stored in the header. A value never spans
  two output bytes.
- Wider integers (`bytepack.pack_ints`, kinds in `bytepack.int_packing.IntKind`)
  are stored as 8, 16, 32, 64 or 128 bits, whichever is the smallest that
  fits, again with an optional minimum offset. `USIZE` and `ISIZE` are taken
  as 64 bit and pack exactly like `U64` and `I64`. Output is little endian.
- Lengths (`bytepack.length`) take one byte when below 255. Larger ones leave
  a 255 marker and go to a separate integer column.
- Strings (`bytepack.strings`) are stored as a column of lengths followed by
  all their UTF-8 bytes. Decoding checks that the bytes are valid UTF-8 and
  that every string starts and ends on a character boundary.

Input is not trusted. Truncated input, bad packing headers, values outside
the allowed range, invalid UTF-8 and oversized length totals raise
`bytepack.stream.BitcodeError` (a `ValueError`). `Reader.expect_eof()` raises
it when bytes are left over.

## Installing

```
pip install bytepack
```

## Reading input

`bytepack.stream.Reader` is a cursor over the input. Every decoding function
takes a `Reader` and consumes what it needs from the front of it:
`consume_byte()`, `consume_bytes(n)`, `consume_arrays(count, size)`,
`remaining()` and `expect_eof()`.

## Packing bytes

```python
from bytepack.pack import pack_bytes, unpack_bytes
from bytepack.stream import Reader

packed = pack_bytes([1, 2, 3, 4, 5, 6, 7])
assert len(packed) == 5

reader = Reader(packed)
assert unpack_bytes(reader, 7) == bytes([1, 2, 3, 4, 5, 6, 7])
reader.expect_eof()

# Signed bytes: unpack_bytes returns a list of ints.
packed = pack_bytes([0, -1, 0, -1, 0, -1, 0], signed=True)
assert unpack_bytes(Reader(packed), 7, signed=True) == [0, -1, 0, -1, 0, -1, 0]
```

`pack_bools` and `unpack_bools` pack eight booleans per byte.

`bytepack.pack_less_than` handles bytes known to be below a bound `n`: the
bound takes the place of the header. `unpack_bytes_less_than(reader, length,
n, with_histogram)` returns the bytes and, if asked, a list of `n` counts of
each value; it raises if any value is not below `n`.

The lower-level pieces are `bytepack.arithmetic` (`pack_arithmetic`,
`unpack_arithmetic`, `unpack_histogram`, `factor_to_divisor`) and
`bytepack.histogram.histogram`, which counts each of the 256 byte values.

## Packing integers

```python
from bytepack.int_packing import IntKind
from bytepack.pack_ints import pack_ints, unpack_ints
from bytepack.stream import Reader

values = [1000, 1001, 1002, 1003, 1004, 1005]
packed = pack_ints(values, IntKind.U64)
assert unpack_ints(Reader(packed), len(values), IntKind.U64) == values
```

`bytepack.int` wraps this as columns: `IntEncoder(kind)` with `encode` and
`collect`, `IntDecoder(kind)` with `populate` and `decode`, and
`CheckedIntDecoder(kind, is_valid, convert)`, which raises during `populate`
if any value fails `is_valid` (for example zero for a non-zero type, or a
value that is not a Unicode scalar value).

## Lengths and strings

```python
from bytepack.length import LengthEncoder, LengthDecoder
from bytepack.strings import StrEncoder, StrDecoder
from bytepack.stream import Reader

lengths = LengthEncoder()
for n in (1, 255, 2):
    lengths.encode(n)

decoder = LengthDecoder()
decoder.populate(Reader(lengths.collect()), 3)
assert decoder.length() == 258
assert [decoder.decode() for _ in range(3)] == [1, 255, 2]

strings = StrEncoder()
strings.encode("abc")
strings.encode("☺")

decoder = StrDecoder()
decoder.populate(Reader(strings.collect()), 2)
assert [decoder.decode(), decoder.decode()] == ["abc", "☺"]
```

`LengthDecoder.populate` raises when the total of the lengths reaches
`bytepack.length.HUGE_LEN`. `LengthDecoder.copy()` gives an independent
decoder at the same position, and `any_greater_than(n, length)` checks the
decoded lengths against a bound.

## Enum variants

`bytepack.variant.VariantEncoder` and `VariantDecoder` hold one variant index
(0 to 255) per value. After `populate`, the decoder reports how often each
variant occurs through `length(i)` and `max_variant_index()`, and returns the
indices in order from `decode()`.

`bytepack.guard.check_zst_len` rejects counts above `ZST_LIMIT` (65536), for
guarding runs of values that take no bytes at all.

## What it does not do

bytepack provides the column encoders and decoders only. It does not turn
whole Python objects into bytes: there is no top-level `encode`/`decode` or
`serialize`/`deserialize`, no schema or type mapping, and no float or bool
column encoders beyond `pack_bools`. Putting the columns together into a
complete message is left to the caller.

## Running the tests

```
pip install -e ".[test]"
pytest
```