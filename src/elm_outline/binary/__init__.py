"""Binary cache codec module.

Exports the byte-level encoder and decoder for outlines, the cache file
helpers, and ``CacheCorruptionError``.
"""
from __future__ import annotations

from elm_outline.binary.codec import (
    BinaryReader,
    BinaryWriter,
    decode_exposed,
    decode_outline,
    encode_exposed,
    encode_outline,
    read_cache,
    write_cache,
)
from elm_outline.binary.errors import CacheCorruptionError

__all__ = [
    "BinaryReader",
    "BinaryWriter",
    "CacheCorruptionError",
    "decode_exposed",
    "decode_outline",
    "encode_exposed",
    "encode_outline",
    "read_cache",
    "write_cache",
]
