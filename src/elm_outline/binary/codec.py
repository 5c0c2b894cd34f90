"""Binary cache encoding of manifests.

A compact, order-preserving byte form of ``Outline`` used to reload
parsed manifests quickly.  Every union is prefixed by one discriminator
byte and every record writes its fields in declaration order:

=================  ==================================================
Outline            ``0`` = application, ``1`` = package
Exposed            ``0`` = flat list, ``1`` = sections
string             uint64 byte length, then UTF-8 bytes
sequence           uint64 count, then items
map                uint64 count, then key/value pairs in key order
version            three bytes, or ``0xFF`` then three uint16
constraint         version, op byte, op byte, version (``0`` = ``<``)
=================  ==================================================

All integers are big-endian.  Decoding failures raise
``CacheCorruptionError``; they are never reported as ordinary errors.
"""
from __future__ import annotations

import logging
import struct
from pathlib import Path
from typing import Callable, Final, Mapping, TypeVar

from elm_outline.binary.errors import CacheCorruptionError
from elm_outline.grammar import (
    OSI_APPROVED,
    Constraint,
    GrammarError,
    License,
    Op,
    PackageName,
    Version,
)
from elm_outline.outline.nodes import (
    AppOutline,
    Exposed,
    ExposedList,
    ExposedSections,
    Outline,
    PkgOutline,
)

logger = logging.getLogger(__name__)

K = TypeVar("K")
V = TypeVar("V")

_U8: Final[struct.Struct] = struct.Struct(">B")
_U16: Final[struct.Struct] = struct.Struct(">H")
_U64: Final[struct.Struct] = struct.Struct(">Q")

_WIDE_VERSION: Final[int] = 255

_OP_TAGS: Final[dict[Op, int]] = {Op.LESS_THAN: 0, Op.LESS_OR_EQUAL: 1}
_TAG_OPS: Final[dict[int, Op]] = {tag: op for op, tag in _OP_TAGS.items()}


# ---------------------------------------------------------------------------
# Writer
# ---------------------------------------------------------------------------


class BinaryWriter:
    """Appends binary-encoded values to an in-memory buffer."""

    def __init__(self) -> None:
        self._buffer = bytearray()

    def getvalue(self) -> bytes:
        return bytes(self._buffer)

    def write_u8(self, value: int) -> None:
        self._buffer += _U8.pack(value)

    def write_u16(self, value: int) -> None:
        self._buffer += _U16.pack(value)

    def write_u64(self, value: int) -> None:
        self._buffer += _U64.pack(value)

    def write_string(self, value: str) -> None:
        raw = value.encode("utf-8")
        self.write_u64(len(raw))
        self._buffer += raw

    def write_list(self, items: list[V] | tuple[V, ...], write_item: Callable[[V], None]) -> None:
        self.write_u64(len(items))
        for item in items:
            write_item(item)

    def write_map(
        self,
        mapping: Mapping[K, V],
        write_key: Callable[[K], None],
        write_value: Callable[[V], None],
    ) -> None:
        self.write_u64(len(mapping))
        for key in sorted(mapping):
            write_key(key)
            write_value(mapping[key])

    # Domain values

    def write_version(self, version: Version) -> None:
        if version.major < _WIDE_VERSION and version.minor < 256 and version.patch < 256:
            self.write_u8(version.major)
            self.write_u8(version.minor)
            self.write_u8(version.patch)
        else:
            self.write_u8(_WIDE_VERSION)
            self.write_u16(version.major)
            self.write_u16(version.minor)
            self.write_u16(version.patch)

    def write_constraint(self, constraint: Constraint) -> None:
        self.write_version(constraint.lower)
        self.write_u8(_OP_TAGS[constraint.lower_op])
        self.write_u8(_OP_TAGS[constraint.upper_op])
        self.write_version(constraint.upper)

    def write_package_name(self, name: PackageName) -> None:
        self.write_string(name.author)
        self.write_string(name.project)

    def write_license(self, license: License) -> None:
        self.write_string(license.code)

    def write_exposed(self, exposed: Exposed) -> None:
        if isinstance(exposed, ExposedList):
            self.write_u8(0)
            self.write_list(exposed.modules, self.write_string)
        elif isinstance(exposed, ExposedSections):
            self.write_u8(1)
            self.write_list(exposed.sections, self._write_section)
        else:
            raise TypeError(f"Unknown exposed type: {type(exposed)}")

    def _write_section(self, section: tuple[str, tuple[str, ...]]) -> None:
        header, modules = section
        self.write_string(header)
        self.write_list(modules, self.write_string)

    def write_outline(self, outline: Outline) -> None:
        if isinstance(outline, AppOutline):
            self.write_u8(0)
            self.write_version(outline.elm_version)
            self.write_string(outline.source_dirs[0])
            self.write_list(outline.source_dirs[1:], self.write_string)
            for deps in (
                outline.deps_direct,
                outline.deps_indirect,
                outline.test_direct,
                outline.test_indirect,
            ):
                self.write_map(deps, self.write_package_name, self.write_version)
        elif isinstance(outline, PkgOutline):
            self.write_u8(1)
            self.write_package_name(outline.name)
            self.write_string(outline.summary)
            self.write_license(outline.license)
            self.write_version(outline.version)
            self.write_exposed(outline.exposed)
            self.write_map(outline.deps, self.write_package_name, self.write_constraint)
            self.write_map(outline.test_deps, self.write_package_name, self.write_constraint)
            self.write_constraint(outline.elm_version)
        else:
            raise TypeError(f"Unknown outline type: {type(outline)}")


# ---------------------------------------------------------------------------
# Reader
# ---------------------------------------------------------------------------


class BinaryReader:
    """Reads binary-encoded values from a buffer, advancing an offset."""

    def __init__(self, data: bytes) -> None:
        self._data = data
        self._offset = 0

    @property
    def offset(self) -> int:
        return self._offset

    def at_end(self) -> bool:
        return self._offset == len(self._data)

    def _take(self, count: int, what: str) -> bytes:
        end = self._offset + count
        if end > len(self._data):
            raise CacheCorruptionError(what, self._offset)
        chunk = self._data[self._offset:end]
        self._offset = end
        return chunk

    def read_u8(self, what: str = "byte") -> int:
        return _U8.unpack(self._take(1, what))[0]

    def read_u16(self, what: str = "uint16") -> int:
        return _U16.unpack(self._take(2, what))[0]

    def read_u64(self, what: str = "length") -> int:
        return _U64.unpack(self._take(8, what))[0]

    def read_string(self) -> str:
        start = self._offset
        raw = self._take(self.read_u64("string length"), "string")
        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError:
            raise CacheCorruptionError("string", start) from None

    def read_list(self, read_item: Callable[[], V]) -> list[V]:
        return [read_item() for _ in range(self.read_u64("list length"))]

    def read_map(self, read_key: Callable[[], K], read_value: Callable[[], V]) -> dict[K, V]:
        result: dict[K, V] = {}
        for _ in range(self.read_u64("map length")):
            key = read_key()
            result[key] = read_value()
        return result

    # Domain values

    def read_version(self) -> Version:
        first = self.read_u8("Version")
        if first == _WIDE_VERSION:
            return Version(self.read_u16(), self.read_u16(), self.read_u16())
        return Version(first, self.read_u8("Version"), self.read_u8("Version"))

    def _read_op(self) -> Op:
        start = self._offset
        tag = self.read_u8("Op")
        if tag not in _TAG_OPS:
            raise CacheCorruptionError("Op", start)
        return _TAG_OPS[tag]

    def read_constraint(self) -> Constraint:
        start = self._offset
        lower = self.read_version()
        lower_op = self._read_op()
        upper_op = self._read_op()
        upper = self.read_version()
        try:
            return Constraint(lower, lower_op, upper_op, upper)
        except GrammarError:
            raise CacheCorruptionError("Constraint", start) from None

    def read_package_name(self) -> PackageName:
        return PackageName(self.read_string(), self.read_string())

    def read_license(self) -> License:
        start = self._offset
        code = self.read_string()
        if code not in OSI_APPROVED:
            raise CacheCorruptionError("License", start)
        return License(code)

    def read_exposed(self) -> Exposed:
        start = self._offset
        tag = self.read_u8("Exposed")
        if tag == 0:
            return ExposedList(tuple(self.read_list(self.read_string)))
        if tag == 1:
            return ExposedSections(tuple(self.read_list(self._read_section)))
        raise CacheCorruptionError("Exposed", start)

    def _read_section(self) -> tuple[str, tuple[str, ...]]:
        header = self.read_string()
        return header, tuple(self.read_list(self.read_string))

    def read_outline(self) -> Outline:
        start = self._offset
        tag = self.read_u8("Outline")
        if tag == 0:
            elm_version = self.read_version()
            head = self.read_string()
            tail = self.read_list(self.read_string)
            return AppOutline(
                elm_version=elm_version,
                source_dirs=(head, *tail),
                deps_direct=self.read_map(self.read_package_name, self.read_version),
                deps_indirect=self.read_map(self.read_package_name, self.read_version),
                test_direct=self.read_map(self.read_package_name, self.read_version),
                test_indirect=self.read_map(self.read_package_name, self.read_version),
            )
        if tag == 1:
            return PkgOutline(
                name=self.read_package_name(),
                summary=self.read_string(),
                license=self.read_license(),
                version=self.read_version(),
                exposed=self.read_exposed(),
                deps=self.read_map(self.read_package_name, self.read_constraint),
                test_deps=self.read_map(self.read_package_name, self.read_constraint),
                elm_version=self.read_constraint(),
            )
        raise CacheCorruptionError("Outline", start)


# ---------------------------------------------------------------------------
# Public helpers
# ---------------------------------------------------------------------------


def _decode_all(data: bytes, read: Callable[[BinaryReader], V], what: str) -> V:
    reader = BinaryReader(data)
    value = read(reader)
    if not reader.at_end():
        raise CacheCorruptionError(what, reader.offset)
    return value


def encode_outline(outline: Outline) -> bytes:
    """Encode ``outline`` to its binary cache form."""
    writer = BinaryWriter()
    writer.write_outline(outline)
    return writer.getvalue()


def decode_outline(data: bytes) -> Outline:
    """Decode bytes produced by ``encode_outline``.

    Raises
    ------
    CacheCorruptionError
        If ``data`` is not exactly one encoded outline.
    """
    return _decode_all(data, BinaryReader.read_outline, "Outline")


def encode_exposed(exposed: Exposed) -> bytes:
    """Encode an ``Exposed`` value on its own."""
    writer = BinaryWriter()
    writer.write_exposed(exposed)
    return writer.getvalue()


def decode_exposed(data: bytes) -> Exposed:
    """Decode bytes produced by ``encode_exposed``."""
    return _decode_all(data, BinaryReader.read_exposed, "Exposed")


def write_cache(path: Path, outline: Outline) -> None:
    """Write the binary form of ``outline`` to ``path``."""
    data = encode_outline(outline)
    path.write_bytes(data)
    logger.debug("Wrote %d byte outline cache to %s", len(data), path)


def read_cache(path: Path) -> Outline:
    """Read an outline cache written by ``write_cache``.

    ``OSError`` propagates unchanged; a corrupt file raises
    ``CacheCorruptionError``.
    """
    data = path.read_bytes()
    logger.debug("Read %d byte outline cache from %s", len(data), path)
    return decode_outline(data)
