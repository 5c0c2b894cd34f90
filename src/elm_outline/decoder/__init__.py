"""Manifest decoder module.

Exports the ``OutlineDecoder`` class, the ``decode`` convenience
function, and decode error types.
"""
from __future__ import annotations

from elm_outline.decoder.decoder import OutlineDecoder, decode
from elm_outline.decoder.errors import (
    DecodeError,
    ErrorKind,
    OutlineError,
    OutlineProblem,
    format_path,
)

__all__ = [
    "OutlineDecoder",
    "decode",
    "DecodeError",
    "ErrorKind",
    "OutlineError",
    "OutlineProblem",
    "format_path",
]
