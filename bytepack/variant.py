"""Encoding of enum variant indices."""

from __future__ import annotations

from collections.abc import Iterator

from bytepack.histogram import histogram
from bytepack.pack import pack_bytes, unpack_bytes
from bytepack.stream import Reader

__all__ = ["VariantEncoder", "VariantDecoder"]


class VariantEncoder:
    """Collects variant indices (0..=255) and packs them as bytes."""

    def __init__(self) -> None:
        self._data = bytearray()

    def encode(self, value: int) -> None:
        """Record one variant index."""
        if not 0 <= value <= 255:
            raise ValueError(f"variant index must be within 0..=255, got {value}")
        self._data.append(value)

    def collect(self) -> bytes:
        """Return the packed indices and forget them."""
        packed = pack_bytes(self._data)
        self._data.clear()
        return packed


class VariantDecoder:
    """Reads packed variant indices and counts how often each occurs."""

    def __init__(self) -> None:
        self._histogram: list[int] = []
        self._variants: Iterator[int] = iter(())

    def populate(self, reader: Reader, length: int) -> None:
        """Read ``length`` variant indices from ``reader``."""
        variants = unpack_bytes(reader, length)
        counts = histogram(variants)
        used = max((i + 1 for i, c in enumerate(counts) if c), default=0)
        self._histogram = counts[:used]
        self._variants = iter(variants)

    def length(self, variant_index: int) -> int:
        """Return how many times ``variant_index`` occurs."""
        if not 0 <= variant_index < len(self._histogram):
            raise IndexError(f"variant {variant_index} out of range")
        return self._histogram[variant_index]

    def max_variant_index(self) -> int | None:
        """Return the largest variant index present, or ``None`` if there were none."""
        return len(self._histogram) - 1 if self._histogram else None

    def decode(self) -> int:
        """Return the next variant index."""
        try:
            return next(self._variants)
        except StopIteration:
            raise IndexError("no more variants to decode") from None