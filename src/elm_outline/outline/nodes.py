"""Data model for a project manifest.

A manifest describes exactly one of two project kinds:

* ``AppOutline``: an application with pinned dependency versions.
* ``PkgOutline``: a publishable package with version constraints,
  metadata, and an exposed module surface.

Every node is a frozen dataclass so an ``Outline`` is immutable and
hashable once constructed.  Dependency maps passed in as plain dicts are
copied into a read-only ``DependencyMap``.  The ``Outline`` and
``Exposed`` union types are closed; downstream code dispatches with
``isinstance`` checks.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Final, Iterable, Iterator, Mapping, TypeVar, Union

from elm_outline.grammar import Constraint, License, PackageName, Version

DEFAULT_SUMMARY: Final[str] = "helpful summary of your project, less than 80 characters"

MAX_SUMMARY_LENGTH: Final[int] = 80
MAX_HEADER_LENGTH: Final[int] = 20


# ---------------------------------------------------------------------------
# Exposed modules
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class ExposedList:
    """A flat, ordered list of exposed module names."""

    modules: tuple[str, ...]


@dataclass(frozen=True, slots=True)
class ExposedSections:
    """Exposed modules grouped under ordered section headers.

    Parameters
    ----------
    sections:
        ``(header, modules)`` pairs in document order.  Headers are not
        required to be unique; both header order and module order are
        meaningful.
    """

    sections: tuple[tuple[str, tuple[str, ...]], ...]

    @property
    def headers(self) -> tuple[str, ...]:
        """Return the section headers in order."""
        return tuple(header for header, _ in self.sections)


Exposed = Union[ExposedList, ExposedSections]


def flatten_exposed(exposed: Exposed) -> list[str]:
    """Return every exposed module name in order, discarding section headers."""
    if isinstance(exposed, ExposedList):
        return list(exposed.modules)
    if isinstance(exposed, ExposedSections):
        return [name for _, modules in exposed.sections for name in modules]
    raise TypeError(f"Unknown exposed type: {type(exposed)}")


# ---------------------------------------------------------------------------
# Dependency maps
# ---------------------------------------------------------------------------

V = TypeVar("V")


class DependencyMap(Mapping[PackageName, V]):
    """Read-only, hashable mapping from package name to version or constraint.

    Keys iterate in sorted ``(author, project)`` order.  Equality follows
    ``Mapping``, so a ``DependencyMap`` compares equal to a plain ``dict``
    with the same items.
    """

    __slots__ = ("_items",)

    def __init__(
        self, items: Mapping[PackageName, V] | Iterable[tuple[PackageName, V]] = ()
    ) -> None:
        self._items: dict[PackageName, V] = dict(sorted(dict(items).items()))

    def __getitem__(self, key: PackageName) -> V:
        return self._items[key]

    def __iter__(self) -> Iterator[PackageName]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __hash__(self) -> int:
        return hash(tuple(self._items.items()))

    def __repr__(self) -> str:
        return f"DependencyMap({self._items!r})"


def _freeze(node: object, field_name: str) -> None:
    value = getattr(node, field_name)
    if not isinstance(value, DependencyMap):
        object.__setattr__(node, field_name, DependencyMap(value))


# ---------------------------------------------------------------------------
# Outlines
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class AppOutline:
    """Manifest of an application project.

    Parameters
    ----------
    elm_version:
        The exact compiler version the application targets.
    source_dirs:
        Source directories relative to the project root, in order.
        Never empty.
    deps_direct, deps_indirect:
        Pinned versions of the normal dependencies.
    test_direct, test_indirect:
        Pinned versions of the test-only dependencies.
    """

    elm_version: Version
    source_dirs: tuple[str, ...]
    deps_direct: DependencyMap[Version]
    deps_indirect: DependencyMap[Version]
    test_direct: DependencyMap[Version]
    test_indirect: DependencyMap[Version]

    def __post_init__(self) -> None:
        object.__setattr__(self, "source_dirs", tuple(self.source_dirs))
        if not self.source_dirs:
            raise ValueError("an application needs at least one source directory")
        for field_name in ("deps_direct", "deps_indirect", "test_direct", "test_indirect"):
            _freeze(self, field_name)


@dataclass(frozen=True)
class PkgOutline:
    """Manifest of a package project.

    Parameters
    ----------
    name:
        The package identity, e.g. ``elm/json``.
    summary:
        One-line description, fewer than 80 code points when decoded.
    license:
        The SPDX license of the package.
    version:
        The current version of the package.
    exposed:
        The public module surface.
    deps:
        Version constraints of the normal dependencies.
    test_deps:
        Version constraints of the test-only dependencies.
    elm_version:
        The range of compiler versions the package supports.
    """

    name: PackageName
    summary: str
    license: License
    version: Version
    exposed: Exposed
    deps: DependencyMap[Constraint]
    test_deps: DependencyMap[Constraint]
    elm_version: Constraint

    def __post_init__(self) -> None:
        _freeze(self, "deps")
        _freeze(self, "test_deps")

    def exposed_modules(self) -> list[str]:
        """Return the flattened list of exposed module names."""
        return flatten_exposed(self.exposed)


Outline = Union[AppOutline, PkgOutline]
