"""Limits against decoding huge runs of zero sized values."""

from __future__ import annotations

from bytepack.stream import BitcodeError

__all__ = ["ZST_LIMIT", "check_zst_len"]

ZST_LIMIT = 1 << 16


def check_zst_len(length: int) -> int:
    """Return ``length`` unless it exceeds :data:`ZST_LIMIT`, in which case raise."""
    if length > ZST_LIMIT:
        raise BitcodeError("too many zero sized types")
    return length