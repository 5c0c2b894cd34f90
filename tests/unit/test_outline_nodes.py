"""Unit tests for elm_outline.outline.nodes: construction rules and
``flatten_exposed``.
"""
from __future__ import annotations

import dataclasses

import pytest

from elm_outline.grammar import Constraint, License, PackageName, Version
from elm_outline.outline.nodes import (
    DEFAULT_SUMMARY,
    MAX_SUMMARY_LENGTH,
    AppOutline,
    DependencyMap,
    ExposedList,
    ExposedSections,
    PkgOutline,
    flatten_exposed,
)


def _pkg(exposed: ExposedList | ExposedSections) -> PkgOutline:
    return PkgOutline(
        name=PackageName("author", "project"),
        summary="foo",
        license=License("MIT"),
        version=Version(1, 0, 0),
        exposed=exposed,
        deps={},
        test_deps={},
        elm_version=Constraint.parse("0.19.0 <= v < 0.20.0"),
    )


class TestFlattenExposed:
    def test_list_is_returned_unchanged(self) -> None:
        assert flatten_exposed(ExposedList(("Main", "Foo"))) == ["Main", "Foo"]

    def test_sections_concatenate_in_order(self) -> None:
        exposed = ExposedSections(
            (
                ("Primitives", ("Json.Decode", "Json.Encode")),
                ("Helpers", ("Json.Extra",)),
            )
        )
        assert flatten_exposed(exposed) == ["Json.Decode", "Json.Encode", "Json.Extra"]

    def test_empty_sections(self) -> None:
        assert flatten_exposed(ExposedSections(())) == []
        assert flatten_exposed(ExposedSections((("Empty", ()),))) == []

    def test_unknown_type_raises(self) -> None:
        with pytest.raises(TypeError):
            flatten_exposed(["Main"])  # type: ignore[arg-type]

    def test_pkg_exposed_modules(self) -> None:
        pkg = _pkg(ExposedSections((("A", ("Main",)), ("B", ("Foo",)))))
        assert pkg.exposed_modules() == ["Main", "Foo"]

    def test_section_headers(self) -> None:
        exposed = ExposedSections((("B", ()), ("A", ())))
        assert exposed.headers == ("B", "A")


class TestAppOutline:
    def test_empty_source_dirs_are_rejected(self) -> None:
        with pytest.raises(ValueError):
            AppOutline(
                elm_version=Version(0, 19, 1),
                source_dirs=(),
                deps_direct={},
                deps_indirect={},
                test_direct={},
                test_indirect={},
            )

    def test_outline_is_frozen(self) -> None:
        app = AppOutline(
            elm_version=Version(0, 19, 1),
            source_dirs=("src",),
            deps_direct={},
            deps_indirect={},
            test_direct={},
            test_indirect={},
        )
        with pytest.raises(dataclasses.FrozenInstanceError):
            app.source_dirs = ("lib",)  # type: ignore[misc]


class TestDependencyMap:
    def test_plain_dicts_are_frozen_on_construction(self) -> None:
        pkg = _pkg(ExposedList(("Main",)))
        assert isinstance(pkg.deps, DependencyMap)
        with pytest.raises(TypeError):
            pkg.deps[PackageName("elm", "core")] = Constraint.parse("1.0.0 <= v < 2.0.0")  # type: ignore[index]

    def test_caller_dict_changes_do_not_leak_in(self) -> None:
        deps = {PackageName("elm", "core"): Version(1, 0, 5)}
        app = AppOutline(
            elm_version=Version(0, 19, 1),
            source_dirs=["src"],  # type: ignore[arg-type]
            deps_direct=deps,  # type: ignore[arg-type]
            deps_indirect={},  # type: ignore[arg-type]
            test_direct={},  # type: ignore[arg-type]
            test_indirect={},  # type: ignore[arg-type]
        )
        deps[PackageName("elm", "json")] = Version(1, 1, 3)
        assert list(app.deps_direct) == [PackageName("elm", "core")]
        assert app.source_dirs == ("src",)

    def test_outlines_are_hashable(self) -> None:
        first = _pkg(ExposedSections((("A", ("Main",)), ("A", ("Foo",)))))
        second = _pkg(ExposedSections((("A", ("Main",)), ("A", ("Foo",)))))
        assert hash(first) == hash(second)
        assert len({first, second}) == 1

    def test_keys_iterate_sorted(self) -> None:
        deps = DependencyMap(
            {
                PackageName("elm", "json"): Version(1, 1, 3),
                PackageName("elm", "core"): Version(1, 0, 5),
            }
        )
        assert [str(name) for name in deps] == ["elm/core", "elm/json"]

    def test_equal_to_plain_dict(self) -> None:
        deps = {PackageName("elm", "core"): Version(1, 0, 5)}
        assert DependencyMap(deps) == deps
        assert DependencyMap() == {}


class TestDefaults:
    def test_default_summary_fits(self) -> None:
        assert len(DEFAULT_SUMMARY) < MAX_SUMMARY_LENGTH
