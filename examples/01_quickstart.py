#!/usr/bin/env python3
"""Example: Quickstart: elm-outline

Minimal working example: decode a package manifest, list its exposed
modules, round-trip it through the binary cache, and print the
canonical JSON.

Usage:
    python examples/01_quickstart.py

Requirements:
    pip install elm-outline
"""
from __future__ import annotations

import elm_outline
from elm_outline.decoder import DecodeError
from elm_outline.outline import OutlineSerializer

MANIFEST = """
{
    "type": "package",
    "name": "author/project",
    "summary": "helpful summary of your project, less than 80 characters",
    "license": "BSD-3-Clause",
    "version": "1.0.0",
    "exposed-modules": {
        "Parsing": ["Project.Parser", "Project.Lexer"],
        "Output": ["Project.Printer"]
    },
    "elm-version": "0.19.0 <= v < 0.20.0",
    "dependencies": {"elm/core": "1.0.0 <= v < 2.0.0"},
    "test-dependencies": {}
}
"""


def main() -> None:
    print(f"elm-outline version: {elm_outline.__version__}")

    # Step 1: Decode manifest text into an outline
    outline = elm_outline.decode(MANIFEST)
    print(f"Decoded package {outline.name} {outline.version}")

    # Step 2: Flatten the exposed modules
    for name in elm_outline.flatten_exposed(outline.exposed):
        print(f"  exposes {name}")

    # Step 3: Round-trip through the binary cache form
    data = elm_outline.encode_binary(outline)
    assert elm_outline.decode_binary(data) == outline
    print(f"Binary cache: {len(data)} bytes")

    # Step 4: Print canonical JSON
    print(OutlineSerializer().to_json(outline), end="")

    # Step 5: See what a decode error looks like
    try:
        elm_outline.decode(MANIFEST.replace('"1.0.0"', '"1.0"'))
    except DecodeError as exc:
        print(f"Decode error: {exc}")


if __name__ == "__main__":
    main()
