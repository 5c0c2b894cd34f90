"""JSON encoding of manifests.

Converts an ``Outline`` into the exact JSON tree written to disk.  Key
order is fixed per project kind so that encoding an unchanged outline
always produces the same, diffable text.  Dependency maps are written
sorted by package name.

Usage
-----
::

    from elm_outline.outline.serializer import OutlineSerializer

    serializer = OutlineSerializer()
    data = serializer.to_dict(outline)
    json_text = serializer.to_json(outline)
"""
from __future__ import annotations

import json
from typing import Mapping

import yaml

from elm_outline.grammar import PackageName
from elm_outline.outline.nodes import (
    AppOutline,
    Exposed,
    ExposedList,
    ExposedSections,
    Outline,
    PkgOutline,
)


class OutlineSerializer:
    """Converts ``Outline`` objects into plain JSON-compatible dicts.

    Version, constraint, package-name and license values are written in
    their canonical string forms.
    """

    def to_dict(self, outline: Outline) -> dict[str, object]:
        """Encode ``outline`` to an insertion-ordered dict.

        Repeated section headers collapse to the last one here; use
        ``to_json`` for text that keeps them.
        """
        if isinstance(outline, AppOutline):
            return self._app_to_dict(outline)
        if isinstance(outline, PkgOutline):
            return self._pkg_to_dict(outline)
        raise TypeError(f"Unknown outline type: {type(outline)}")

    def _app_to_dict(self, app: AppOutline) -> dict[str, object]:
        return {
            "type": "application",
            "source-directories": list(app.source_dirs),
            "elm-version": str(app.elm_version),
            "dependencies": {
                "direct": self._deps_to_dict(app.deps_direct),
                "indirect": self._deps_to_dict(app.deps_indirect),
            },
            "test-dependencies": {
                "direct": self._deps_to_dict(app.test_direct),
                "indirect": self._deps_to_dict(app.test_indirect),
            },
        }

    def _pkg_to_dict(self, pkg: PkgOutline) -> dict[str, object]:
        return {
            "type": "package",
            "name": str(pkg.name),
            "summary": pkg.summary,
            "license": str(pkg.license),
            "version": str(pkg.version),
            "exposed-modules": self.exposed_to_json(pkg.exposed),
            "elm-version": str(pkg.elm_version),
            "dependencies": self._deps_to_dict(pkg.deps),
            "test-dependencies": self._deps_to_dict(pkg.test_deps),
        }

    def exposed_to_json(self, exposed: Exposed) -> list[str] | dict[str, list[str]]:
        """Encode exposed modules as a flat array or an object of arrays."""
        if isinstance(exposed, ExposedList):
            return list(exposed.modules)
        if isinstance(exposed, ExposedSections):
            return {header: list(modules) for header, modules in exposed.sections}
        raise TypeError(f"Unknown exposed type: {type(exposed)}")

    def _deps_to_dict(self, deps: Mapping[PackageName, object]) -> dict[str, str]:
        return {str(name): str(deps[name]) for name in sorted(deps)}

    # ------------------------------------------------------------------
    # Text helpers
    # ------------------------------------------------------------------

    def to_json(self, outline: Outline, indent: int = 4) -> str:
        """Render ``outline`` as manifest text with a trailing newline.

        Repeated ``exposed-modules`` section headers are written in
        document order, which a ``dict`` cannot represent.
        """
        tree = self.to_dict(outline)
        if isinstance(outline, PkgOutline) and isinstance(outline.exposed, ExposedSections):
            tree["exposed-modules"] = _Pairs(
                (header, list(modules)) for header, modules in outline.exposed.sections
            )
        return _render(tree, " " * indent, "") + "\n"

    def to_yaml(self, outline: Outline) -> str:
        """Render ``outline`` as YAML, keeping the manifest key order."""
        return yaml.safe_dump(
            self.to_dict(outline),
            default_flow_style=False,
            allow_unicode=True,
            sort_keys=False,
        )


def encode(outline: Outline) -> dict[str, object]:
    """Convenience function: encode ``outline`` to a JSON-compatible dict."""
    return OutlineSerializer().to_dict(outline)


def to_json(outline: Outline) -> str:
    """Convenience function: render ``outline`` as manifest text."""
    return OutlineSerializer().to_json(outline)


class _Pairs(tuple):
    """A JSON object given as ``(key, value)`` pairs; keys may repeat."""


def _render(value: object, indent: str, prefix: str) -> str:
    """Format ``value`` the way ``json.dumps(indent=...)`` does."""
    inner = prefix + indent
    if isinstance(value, dict):
        value = _Pairs(value.items())
    if isinstance(value, _Pairs):
        if not value:
            return "{}"
        items = [
            f"{inner}{json.dumps(key, ensure_ascii=False)}: {_render(child, indent, inner)}"
            for key, child in value
        ]
        return "{\n" + ",\n".join(items) + "\n" + prefix + "}"
    if isinstance(value, list):
        if not value:
            return "[]"
        items = [inner + _render(child, indent, inner) for child in value]
        return "[\n" + ",\n".join(items) + "\n" + prefix + "]"
    return json.dumps(value, ensure_ascii=False)
