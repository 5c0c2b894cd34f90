"""Manifest decoder: raw JSON bytes to a validated ``Outline``.

The decoder reads only the fields it knows about; extra fields are
ignored.  Fields are decoded in a fixed order and the first failure
raises ``DecodeError`` immediately, so a caller always sees one precise
problem rather than a cascade.

JSON objects are read as ordered ``(key, value)`` pairs.  Section
headers in ``exposed-modules`` keep their document order (and any
duplicates); dependency maps collapse duplicate keys, last one wins.

Usage
-----
::

    from elm_outline.decoder import decode

    outline = decode(Path("elm.json").read_bytes())
"""
from __future__ import annotations

import json
import logging
from typing import Callable, TypeVar

from elm_outline.decoder.errors import (
    DecodeError,
    ErrorKind,
    OutlineProblem,
    PathPart,
)
from elm_outline.grammar import (
    Constraint,
    GrammarError,
    License,
    PackageName,
    Version,
    parse_module_name,
)
from elm_outline.outline.nodes import (
    MAX_HEADER_LENGTH,
    MAX_SUMMARY_LENGTH,
    AppOutline,
    DependencyMap,
    Exposed,
    ExposedList,
    ExposedSections,
    Outline,
    PkgOutline,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")
JsonPath = tuple[PathPart, ...]


class JsonObject(tuple):
    """A JSON object kept as an ordered tuple of ``(key, value)`` pairs."""

    def get_last(self, key: str) -> tuple[bool, object]:
        found, value = False, None
        for k, v in self:
            if k == key:
                found, value = True, v
        return found, value


def _load_json(data: bytes | str) -> object:
    if isinstance(data, bytes):
        try:
            data = data.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise DecodeError(ErrorKind.BAD_JSON, f"the file is not valid UTF-8: {exc.reason}") from exc
    try:
        value = json.loads(data, object_pairs_hook=JsonObject)
    except json.JSONDecodeError as exc:
        raise DecodeError(
            ErrorKind.BAD_JSON,
            f"invalid JSON at line {exc.lineno}, column {exc.colno}: {exc.msg}",
        ) from exc
    except RecursionError as exc:
        raise DecodeError(ErrorKind.BAD_JSON, "invalid JSON: nested too deeply") from exc
    _check_strings(value)
    return value


def _check_strings(value: object) -> None:
    """Reject strings that cannot be written back as UTF-8.

    ``json`` accepts escapes such as ``"\\ud800"`` that decode to lone
    surrogates.  The walk uses an explicit stack so it never recurses.
    """
    stack = [value]
    while stack:
        item = stack.pop()
        if isinstance(item, str):
            try:
                item.encode("utf-8")
            except UnicodeEncodeError as exc:
                raise DecodeError(
                    ErrorKind.BAD_JSON,
                    "invalid JSON: string contains an unpaired surrogate escape",
                ) from exc
        elif isinstance(item, JsonObject):
            for key, child in item:
                stack.append(key)
                stack.append(child)
        elif isinstance(item, list):
            stack.extend(item)


class OutlineDecoder:
    """Decodes manifest JSON into ``AppOutline`` or ``PkgOutline``."""

    def decode(self, data: bytes | str) -> Outline:
        """Decode raw manifest text.

        Parameters
        ----------
        data:
            The manifest contents, as UTF-8 bytes or text.

        Returns
        -------
        Outline
            The decoded outline.

        Raises
        ------
        DecodeError
            On the first structural or field-level problem.
        """
        return self.decode_value(_load_json(data))

    def decode_value(self, value: object) -> Outline:
        """Decode an already-parsed JSON value (objects as ``JsonObject``)."""
        kind = self._field(value, (), "type", self._string)
        if kind == "application":
            outline: Outline = self._app(value)
        elif kind == "package":
            outline = self._pkg(value)
        else:
            raise DecodeError(
                ErrorKind.PROBLEM,
                f'the "type" field must be "application" or "package", not {kind!r}',
                path=("type",),
                problem=OutlineProblem.BAD_TYPE,
                literal=kind,
            )
        logger.debug("Decoded %s outline", kind)
        return outline

    # ------------------------------------------------------------------
    # Project kinds
    # ------------------------------------------------------------------

    def _app(self, obj: object) -> AppOutline:
        elm_version = self._field(obj, (), "elm-version", self._version)
        source_dirs = self._field(obj, (), "source-directories", self._source_dirs)
        deps = self._field(obj, (), "dependencies", self._any)
        deps_direct = self._field(deps, ("dependencies",), "direct", self._version_deps)
        deps_indirect = self._field(deps, ("dependencies",), "indirect", self._version_deps)
        tests = self._field(obj, (), "test-dependencies", self._any)
        test_direct = self._field(tests, ("test-dependencies",), "direct", self._version_deps)
        test_indirect = self._field(tests, ("test-dependencies",), "indirect", self._version_deps)
        return AppOutline(
            elm_version=elm_version,
            source_dirs=source_dirs,
            deps_direct=deps_direct,
            deps_indirect=deps_indirect,
            test_direct=test_direct,
            test_indirect=test_indirect,
        )

    def _pkg(self, obj: object) -> PkgOutline:
        return PkgOutline(
            name=self._field(obj, (), "name", self._package_name),
            summary=self._field(obj, (), "summary", self._summary),
            license=self._field(obj, (), "license", self._license),
            version=self._field(obj, (), "version", self._version),
            exposed=self._field(obj, (), "exposed-modules", self._exposed),
            deps=self._field(obj, (), "dependencies", self._constraint_deps),
            test_deps=self._field(obj, (), "test-dependencies", self._constraint_deps),
            elm_version=self._field(obj, (), "elm-version", self._constraint),
        )

    # ------------------------------------------------------------------
    # Structural primitives
    # ------------------------------------------------------------------

    def _object(self, value: object, path: JsonPath) -> JsonObject:
        if not isinstance(value, JsonObject):
            raise _expecting("an OBJECT", path)
        return value

    def _field(
        self,
        value: object,
        path: JsonPath,
        key: str,
        decode: Callable[[object, JsonPath], T],
    ) -> T:
        found, inner = self._object(value, path).get_last(key)
        if not found:
            raise DecodeError(
                ErrorKind.MISSING_FIELD,
                f"missing required field {key!r}",
                path=path,
                literal=key,
            )
        return decode(inner, path + (key,))

    def _any(self, value: object, path: JsonPath) -> object:
        return value

    def _string(self, value: object, path: JsonPath) -> str:
        if not isinstance(value, str):
            raise _expecting("a STRING", path)
        return value

    def _list(
        self,
        value: object,
        path: JsonPath,
        decode: Callable[[object, JsonPath], T],
    ) -> list[T]:
        if not isinstance(value, list):
            raise _expecting("a LIST", path)
        return [decode(item, path + (index,)) for index, item in enumerate(value)]

    def _pairs(
        self,
        value: object,
        path: JsonPath,
        decode: Callable[[object, JsonPath], T],
    ) -> list[tuple[str, T]]:
        obj = self._object(value, path)
        return [(key, decode(inner, path + (key,))) for key, inner in obj]

    def _grammar(
        self,
        value: object,
        path: JsonPath,
        parse: Callable[[str], T],
        problem: OutlineProblem,
        what: str,
    ) -> T:
        text = self._string(value, path)
        try:
            return parse(text)
        except GrammarError as exc:
            raise DecodeError(
                ErrorKind.PROBLEM,
                f"bad {what} {text!r}: {exc.reason}",
                path=path,
                problem=problem,
                literal=text,
                suggestions=exc.suggestions,
            ) from exc

    # ------------------------------------------------------------------
    # Field decoders
    # ------------------------------------------------------------------

    def _version(self, value: object, path: JsonPath) -> Version:
        return self._grammar(value, path, Version.parse, OutlineProblem.BAD_VERSION, "version")

    def _constraint(self, value: object, path: JsonPath) -> Constraint:
        return self._grammar(
            value, path, Constraint.parse, OutlineProblem.BAD_CONSTRAINT, "constraint"
        )

    def _package_name(self, value: object, path: JsonPath) -> PackageName:
        return self._grammar(
            value, path, PackageName.parse, OutlineProblem.BAD_PKG_NAME, "package name"
        )

    def _license(self, value: object, path: JsonPath) -> License:
        return self._grammar(value, path, License.parse, OutlineProblem.BAD_LICENSE, "license")

    def _module(self, value: object, path: JsonPath) -> str:
        return self._grammar(
            value, path, parse_module_name, OutlineProblem.BAD_MODULE_NAME, "module name"
        )

    def _summary(self, value: object, path: JsonPath) -> str:
        summary = self._string(value, path)
        if len(summary) >= MAX_SUMMARY_LENGTH:
            raise DecodeError(
                ErrorKind.PROBLEM,
                f"the summary must be less than {MAX_SUMMARY_LENGTH} characters"
                f" (found {len(summary)})",
                path=path,
                problem=OutlineProblem.BAD_SUMMARY_TOO_LONG,
                literal=summary,
            )
        return summary

    def _source_dirs(self, value: object, path: JsonPath) -> tuple[str, ...]:
        dirs = self._list(value, path, self._string)
        if not dirs:
            raise DecodeError(
                ErrorKind.PROBLEM,
                "at least one source directory is required",
                path=path,
                problem=OutlineProblem.NO_SRC_DIRS,
            )
        return tuple(dirs)

    def _version_deps(self, value: object, path: JsonPath) -> DependencyMap[Version]:
        return self._deps(value, path, self._version)

    def _constraint_deps(self, value: object, path: JsonPath) -> DependencyMap[Constraint]:
        return self._deps(value, path, self._constraint)

    def _deps(
        self,
        value: object,
        path: JsonPath,
        decode: Callable[[object, JsonPath], T],
    ) -> DependencyMap[T]:
        # Values are decoded before any key is validated.
        pairs = self._pairs(value, path, decode)
        deps: dict[PackageName, T] = {}
        for key, dep in pairs:
            try:
                name = PackageName.parse(key)
            except GrammarError as exc:
                raise DecodeError(
                    ErrorKind.PROBLEM,
                    f"bad dependency name {key!r}: {exc.reason}",
                    path=path + (key,),
                    problem=OutlineProblem.BAD_DEPENDENCY_NAME,
                    literal=key,
                ) from exc
            deps[name] = dep
        return DependencyMap(deps)

    # ------------------------------------------------------------------
    # Exposed modules: a flat list, or else an object of sections
    # ------------------------------------------------------------------

    def _exposed(self, value: object, path: JsonPath) -> Exposed:
        try:
            return ExposedList(tuple(self._list(value, path, self._module)))
        except DecodeError as as_list:
            try:
                return self._sections(value, path)
            except DecodeError as as_sections:
                raise DecodeError(
                    ErrorKind.ONE_OF,
                    "expecting a list of module names, or an object of sections",
                    path=path,
                    alternatives=(as_list, as_sections),
                ) from None

    def _sections(self, value: object, path: JsonPath) -> ExposedSections:
        pairs = self._pairs(value, path, lambda inner, p: tuple(self._list(inner, p, self._module)))
        for header, _ in pairs:
            if len(header) >= MAX_HEADER_LENGTH:
                raise DecodeError(
                    ErrorKind.PROBLEM,
                    f"section header {header!r} must be less than {MAX_HEADER_LENGTH} characters",
                    path=path + (header,),
                    problem=OutlineProblem.BAD_MODULE_HEADER_TOO_LONG,
                    literal=header,
                )
        return ExposedSections(tuple(pairs))


def _expecting(what: str, path: JsonPath) -> DecodeError:
    return DecodeError(ErrorKind.EXPECTING, f"expecting {what}", path=path)


def decode(data: bytes | str) -> Outline:
    """Convenience function: decode manifest text into an ``Outline``.

    Raises
    ------
    DecodeError
        On the first problem found.
    """
    return OutlineDecoder().decode(data)
