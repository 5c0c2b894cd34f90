"""Unit tests for elm_outline.outline.serializer: key order, canonical
value forms and text rendering.
"""
from __future__ import annotations

import json

import yaml

from elm_outline.decoder import decode
from elm_outline.grammar import Constraint, License, PackageName, Version
from elm_outline.outline import (
    AppOutline,
    ExposedList,
    ExposedSections,
    OutlineSerializer,
    PkgOutline,
    encode,
    to_json,
)


def _app() -> AppOutline:
    return AppOutline(
        elm_version=Version(0, 19, 1),
        source_dirs=("src", "lib"),
        deps_direct={
            PackageName("elm", "html"): Version(1, 0, 0),
            PackageName("elm", "core"): Version(1, 0, 5),
        },
        deps_indirect={PackageName("elm", "json"): Version(1, 1, 3)},
        test_direct={},
        test_indirect={},
    )


def _pkg(exposed: ExposedList | ExposedSections | None = None) -> PkgOutline:
    return PkgOutline(
        name=PackageName("author", "project"),
        summary="Ünïcode summary",
        license=License("BSD-3-Clause"),
        version=Version(2, 1, 0),
        exposed=exposed or ExposedList(("Main", "Foo")),
        deps={PackageName("elm", "core"): Constraint.parse("1.0.0 <= v < 2.0.0")},
        test_deps={},
        elm_version=Constraint.parse("0.19.0 <= v < 0.20.0"),
    )


class TestApplicationEncoding:
    def test_key_order(self) -> None:
        assert list(encode(_app())) == [
            "type",
            "source-directories",
            "elm-version",
            "dependencies",
            "test-dependencies",
        ]

    def test_nested_key_order(self) -> None:
        data = encode(_app())
        assert list(data["dependencies"]) == ["direct", "indirect"]  # type: ignore[arg-type]
        assert list(data["test-dependencies"]) == ["direct", "indirect"]  # type: ignore[arg-type]

    def test_values(self) -> None:
        data = encode(_app())
        assert data["type"] == "application"
        assert data["source-directories"] == ["src", "lib"]
        assert data["elm-version"] == "0.19.1"

    def test_dependencies_sorted_by_name(self) -> None:
        direct = encode(_app())["dependencies"]["direct"]  # type: ignore[index]
        assert list(direct) == ["elm/core", "elm/html"]
        assert direct["elm/core"] == "1.0.5"


class TestPackageEncoding:
    def test_key_order(self) -> None:
        assert list(encode(_pkg())) == [
            "type",
            "name",
            "summary",
            "license",
            "version",
            "exposed-modules",
            "elm-version",
            "dependencies",
            "test-dependencies",
        ]

    def test_canonical_values(self) -> None:
        data = encode(_pkg())
        assert data["name"] == "author/project"
        assert data["license"] == "BSD-3-Clause"
        assert data["version"] == "2.1.0"
        assert data["elm-version"] == "0.19.0 <= v < 0.20.0"
        assert data["dependencies"] == {"elm/core": "1.0.0 <= v < 2.0.0"}
        assert data["test-dependencies"] == {}

    def test_exposed_list_stays_a_list(self) -> None:
        assert encode(_pkg())["exposed-modules"] == ["Main", "Foo"]

    def test_exposed_sections_stay_an_object(self) -> None:
        pkg = _pkg(ExposedSections((("Zeta", ("Z",)), ("Alpha", ("A", "B")))))
        exposed = encode(pkg)["exposed-modules"]
        assert exposed == {"Zeta": ["Z"], "Alpha": ["A", "B"]}
        assert list(exposed) == ["Zeta", "Alpha"]  # type: ignore[arg-type]


class TestTextRendering:
    def test_json_is_deterministic(self) -> None:
        assert to_json(_pkg()) == to_json(_pkg())

    def test_json_uses_four_space_indent_and_newline(self) -> None:
        text = to_json(_app())
        assert text.endswith("}\n")
        assert '\n    "type": "application",' in text

    def test_json_keeps_unicode(self) -> None:
        assert "Ünïcode" in to_json(_pkg())

    def test_json_parses_back(self) -> None:
        assert json.loads(to_json(_pkg())) == encode(_pkg())

    def test_json_matches_stdlib_layout(self) -> None:
        for outline in (_app(), _pkg(), _pkg(ExposedSections((("A", ("Main",)), ("B", ()))))):
            expected = json.dumps(encode(outline), indent=4, ensure_ascii=False) + "\n"
            assert to_json(outline) == expected

    def test_json_writes_repeated_headers_in_order(self) -> None:
        text = to_json(_pkg(ExposedSections((("A", ("Main",)), ("A", ("Foo",))))))
        assert '"A": [\n            "Main"\n        ],\n        "A": [\n            "Foo"\n        ]' in text

    def test_yaml_keeps_key_order(self) -> None:
        text = OutlineSerializer().to_yaml(_pkg())
        loaded = yaml.safe_load(text)
        assert list(loaded) == list(encode(_pkg()))
        assert text.startswith("type: package\n")


class TestRoundTrip:
    def test_application(self) -> None:
        assert decode(to_json(_app())) == _app()

    def test_package_list(self) -> None:
        assert decode(to_json(_pkg())) == _pkg()

    def test_package_sections(self) -> None:
        pkg = _pkg(ExposedSections((("Section A", ("Main",)), ("B", ("Foo", "Bar")))))
        assert decode(to_json(pkg)) == pkg

    def test_package_repeated_headers(self) -> None:
        text = json.dumps(
            {
                "type": "package",
                "name": "author/project",
                "summary": "foo",
                "license": "MIT",
                "version": "1.0.0",
                "exposed-modules": {"A": ["Main"]},
                "elm-version": "0.19.0 <= v < 0.20.0",
                "dependencies": {},
                "test-dependencies": {},
            }
        ).replace('{"A": ["Main"]}', '{"A": ["Main"], "A": ["Foo"]}')
        outline = decode(text)
        assert outline.exposed == ExposedSections((("A", ("Main",)), ("A", ("Foo",))))
        assert decode(to_json(outline)) == outline

    def test_reencode_is_stable(self, package_json: str) -> None:
        once = to_json(decode(package_json))
        assert to_json(decode(once)) == once
