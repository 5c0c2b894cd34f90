"""Reading and writing the manifest of a project directory.

``read`` decodes ``elm.json`` under a project root and, for
applications, checks that every declared source directory exists.
Unlike JSON decoding, that check reports *all* missing directories at
once.  ``write`` encodes an outline and overwrites the manifest without
validating it first.

File-system errors such as ``FileNotFoundError`` propagate unchanged.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Final

from elm_outline.decoder import DecodeError, OutlineError, decode
from elm_outline.outline import AppOutline, Outline, OutlineSerializer

logger = logging.getLogger(__name__)

MANIFEST_FILENAME: Final[str] = "elm.json"


@dataclass(frozen=True)
class OutlineHasBadStructure(OutlineError):
    """The manifest could not be decoded.

    Parameters
    ----------
    error:
        The decode failure.
    """

    error: DecodeError

    def __post_init__(self) -> None:
        object.__setattr__(self, "args", (str(self),))

    def __str__(self) -> str:
        return f"{MANIFEST_FILENAME} has a problem: {self.error}"


@dataclass(frozen=True)
class OutlineHasBadSourceDirs(OutlineError):
    """One or more declared source directories do not exist.

    Parameters
    ----------
    dirs:
        Every missing directory, in declaration order.  Never empty.
    """

    dirs: tuple[str, ...]

    def __post_init__(self) -> None:
        if not self.dirs:
            raise ValueError("OutlineHasBadSourceDirs needs at least one directory")
        object.__setattr__(self, "args", (str(self),))

    def __str__(self) -> str:
        listed = ", ".join(repr(d) for d in self.dirs)
        return f"{MANIFEST_FILENAME} lists source directories that do not exist: {listed}"


def manifest_path(root: Path | str) -> Path:
    """Return the manifest location for the project at ``root``."""
    return Path(root) / MANIFEST_FILENAME


def read(root: Path | str) -> Outline:
    """Read and validate the manifest of the project at ``root``.

    Parameters
    ----------
    root:
        The project directory.

    Returns
    -------
    Outline
        The decoded outline.

    Raises
    ------
    OutlineHasBadStructure
        If the manifest does not decode.
    OutlineHasBadSourceDirs
        If an application lists source directories that do not exist.
    OSError
        If the manifest cannot be read.
    """
    root = Path(root)
    path = manifest_path(root)
    data = path.read_bytes()
    try:
        outline = decode(data)
    except DecodeError as exc:
        logger.debug("Failed to decode %s: %s", path, exc)
        raise OutlineHasBadStructure(exc) from exc

    if isinstance(outline, AppOutline):
        bad_dirs = tuple(d for d in outline.source_dirs if not (root / d).is_dir())
        if bad_dirs:
            logger.debug("Missing source directories in %s: %s", path, bad_dirs)
            raise OutlineHasBadSourceDirs(bad_dirs)

    logger.debug("Read outline from %s", path)
    return outline


def write(root: Path | str, outline: Outline) -> None:
    """Encode ``outline`` and write it to the manifest under ``root``."""
    path = manifest_path(root)
    # Encode first so an unencodable outline leaves the existing file untouched.
    data = OutlineSerializer().to_json(outline).encode("utf-8")
    path.write_bytes(data)
    logger.debug("Wrote outline to %s", path)
