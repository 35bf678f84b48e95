"""Compact columnar packing of bytes, integers, lengths, strings and enum variants."""

__version__ = "0.1.0"

__all__ = [
    "arithmetic",
    "guard",
    "histogram",
    "int",
    "int_packing",
    "length",
    "pack",
    "pack_ints",
    "pack_less_than",
    "stream",
    "strings",
    "variant",
]