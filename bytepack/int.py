"""Encoders and decoders for columns of integers."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from typing import Any

from bytepack.int_packing import IntKind
from bytepack.pack_ints import pack_ints, unpack_ints
from bytepack.stream import BitcodeError, Reader

__all__ = ["IntEncoder", "IntDecoder", "CheckedIntDecoder"]


class IntEncoder:
    """Collects integers of one kind and packs them together."""

    def __init__(self, kind: IntKind) -> None:
        self.kind = kind
        self._values: list[int] = []

    def encode(self, value: int) -> None:
        """Record one integer."""
        self._values.append(self.kind.validate(value))

    def collect(self) -> bytes:
        """Return the packed integers and forget them."""
        packed = pack_ints(self._values, self.kind)
        self._values.clear()
        return packed


class IntDecoder:
    """Reads a packed column of integers and hands them out one by one."""

    def __init__(self, kind: IntKind) -> None:
        self.kind = kind
        self._values: list[int] = []
        self._iter: Iterator[int] = iter(())

    def populate(self, reader: Reader, length: int) -> None:
        """Read ``length`` integers from ``reader``."""
        self._values = unpack_ints(reader, length, self.kind)
        self._iter = iter(self._values)

    def decode(self) -> int:
        """Return the next integer."""
        try:
            return next(self._iter)
        except StopIteration:
            raise IndexError("no more integers to decode") from None


class CheckedIntDecoder:
    """An :class:`IntDecoder` whose values must pass a validity check.

    ``is_valid`` decides which bit patterns are allowed (for example non zero
    values or Unicode scalar values); ``convert`` turns a valid integer into the
    decoded value and defaults to returning it unchanged.
    """

    def __init__(
        self,
        kind: IntKind,
        is_valid: Callable[[int], bool],
        convert: Callable[[int], Any] | None = None,
    ) -> None:
        self._inner = IntDecoder(kind)
        self._is_valid = is_valid
        self._convert = convert

    @property
    def kind(self) -> IntKind:
        """The kind of integer being decoded."""
        return self._inner.kind

    def populate(self, reader: Reader, length: int) -> None:
        """Read ``length`` integers, raising if any of them is invalid."""
        self._inner.populate(reader, length)
        if not all(self._is_valid(v) for v in self._inner._values):
            raise BitcodeError("invalid bit pattern")

    def decode(self) -> Any:
        """Return the next value."""
        value = self._inner.decode()
        return self._convert(value) if self._convert is not None else value