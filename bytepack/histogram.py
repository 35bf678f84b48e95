"""Byte frequency counting."""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable

__all__ = ["histogram"]


def histogram(data: bytes | bytearray | memoryview | Iterable[int]) -> list[int]:
    """Return a list of 256 counts, one for each byte value in ``data``."""
    counts = Counter(bytes(data))
    return [counts.get(value, 0) for value in range(256)]