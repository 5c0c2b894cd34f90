"""elm-outline: parser, validator, encoder and binary cache codec for ``elm.json``.

Public API
----------
The stable public surface is everything exported from this module.
Anything inside submodules not re-exported here is considered private
and may change without notice.

Example
-------
::

    import elm_outline

    # Read and validate the manifest of a project directory
    outline = elm_outline.read("path/to/project")

    # Decode manifest text directly
    outline = elm_outline.decode(b'{"type": "package", ...}')

    # Flatten the exposed modules of a package
    modules = elm_outline.flatten_exposed(outline.exposed)

    # Round-trip through the binary cache form
    data = elm_outline.encode_binary(outline)
    assert elm_outline.decode_binary(data) == outline

    # Write it back
    elm_outline.write("path/to/project", outline)

    elm_outline.__version__
    '0.1.0'
"""
from __future__ import annotations

from typing import TYPE_CHECKING

__version__: str = "0.1.0"

if TYPE_CHECKING:
    from pathlib import Path

    from elm_outline.outline.nodes import Exposed, Outline


def read(root: "Path | str") -> "Outline":
    """Read and validate the manifest under ``root``.

    Raises
    ------
    elm_outline.project.OutlineHasBadStructure
        If the manifest does not decode.
    elm_outline.project.OutlineHasBadSourceDirs
        If an application lists missing source directories.
    """
    from elm_outline.project import read as _read

    return _read(root)


def write(root: "Path | str", outline: "Outline") -> None:
    """Write ``outline`` as the manifest under ``root``."""
    from elm_outline.project import write as _write

    _write(root, outline)


def decode(data: bytes | str) -> "Outline":
    """Decode manifest text into an ``Outline``.

    Raises
    ------
    elm_outline.decoder.DecodeError
        On the first problem found.
    """
    from elm_outline.decoder import decode as _decode

    return _decode(data)


def encode(outline: "Outline") -> dict[str, object]:
    """Encode an ``Outline`` to its manifest JSON tree."""
    from elm_outline.outline.serializer import encode as _encode

    return _encode(outline)


def flatten_exposed(exposed: "Exposed") -> list[str]:
    """Return every exposed module name in order."""
    from elm_outline.outline.nodes import flatten_exposed as _flatten

    return _flatten(exposed)


def encode_binary(outline: "Outline") -> bytes:
    """Encode an ``Outline`` to its binary cache form."""
    from elm_outline.binary import encode_outline

    return encode_outline(outline)


def decode_binary(data: bytes) -> "Outline":
    """Decode a binary cache produced by ``encode_binary``.

    Raises
    ------
    elm_outline.binary.CacheCorruptionError
        If the bytes are corrupt.  This is not an ``Exception`` subclass.
    """
    from elm_outline.binary import decode_outline

    return decode_outline(data)


__all__ = [
    "__version__",
    "read",
    "write",
    "decode",
    "encode",
    "flatten_exposed",
    "encode_binary",
    "decode_binary",
]
