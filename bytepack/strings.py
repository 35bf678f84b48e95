"""Encoding of strings as a column of lengths followed by their concatenated bytes."""

from __future__ import annotations

from bytepack.length import LengthDecoder, LengthEncoder
from bytepack.stream import BitcodeError, Reader

__all__ = ["StrEncoder", "StrDecoder", "is_ascii"]


def is_ascii(data: bytes | bytearray | memoryview) -> bool:
    """Return whether every byte of ``data`` is below 0x80."""
    return bytes(data).isascii()


def _is_continuation(byte: int) -> bool:
    return byte & 0xC0 == 0x80


class StrEncoder:
    """Collects strings: their lengths and their UTF-8 bytes, stored apart."""

    def __init__(self) -> None:
        self._lengths = LengthEncoder()
        self._bytes = bytearray()

    def encode(self, value: str) -> None:
        """Record one string."""
        self.encode_bytes(value.encode("utf-8"))

    def encode_bytes(self, data: bytes | bytearray | memoryview) -> None:
        """Record raw bytes as one string, without checking they are UTF-8."""
        raw = bytes(data)
        self._lengths.encode(len(raw))
        self._bytes += raw

    def collect(self) -> bytes:
        """Return the encoded strings and forget them."""
        out = self._lengths.collect() + bytes(self._bytes)
        self._bytes.clear()
        return out


class StrDecoder:
    """Reads encoded strings, validating them as UTF-8 up front."""

    def __init__(self) -> None:
        self.lengths = LengthDecoder()
        self._bytes = b""
        self._pos = 0

    def populate(self, reader: Reader, length: int) -> None:
        """Read ``length`` strings from ``reader``."""
        self.lengths.populate(reader, length)
        data = reader.consume_bytes(self.lengths.length())
        if not (is_ascii(data) or self._valid_utf8(data, length)):
            raise BitcodeError("invalid utf8")
        self._bytes = data
        self._pos = 0

    def _valid_utf8(self, data: bytes, length: int) -> bool:
        try:
            data.decode("utf-8")
        except UnicodeDecodeError:
            return False
        # Every split between consecutive strings must fall on a character boundary.
        decoder = self.lengths.copy()
        end = 0
        for _ in range(length - 1):
            end += decoder.decode()
            if end < len(data) and _is_continuation(data[end]):
                return False
        return True

    def decode(self) -> str:
        """Return the next string."""
        size = self.lengths.decode()
        chunk = self._bytes[self._pos:self._pos + size]
        self._pos += size
        return chunk.decode("utf-8")