"""Shared test fixtures for elm-outline.

Fixtures defined here are available to all tests in the suite without
needing an explicit import. Add project-wide fixtures here; keep
domain-specific fixtures close to the tests that use them.
"""
from __future__ import annotations

import json
from pathlib import Path
from typing import Callable

import pytest

PACKAGE_JSON = (
    '{"type":"package","name":"author/project","summary":"foo",'
    '"license":"BSD-3-Clause","version":"1.0.0","exposed-modules":["Main"],'
    '"elm-version":"0.19.0 <= v < 0.20.0","dependencies":{},"test-dependencies":{}}'
)

APPLICATION_DOC: dict[str, object] = {
    "type": "application",
    "source-directories": ["src"],
    "elm-version": "0.19.1",
    "dependencies": {
        "direct": {"elm/browser": "1.0.2", "elm/core": "1.0.5"},
        "indirect": {"elm/json": "1.1.3"},
    },
    "test-dependencies": {
        "direct": {"elm-explorations/test": "2.1.1"},
        "indirect": {},
    },
}


@pytest.fixture()
def package_name() -> str:
    """Return the importable package name for assertions."""
    return "elm_outline"


@pytest.fixture()
def expected_version() -> str:
    """Return the current expected version string.

    Update this fixture when cutting a release so that the version
    test immediately catches stale ``__version__`` values.
    """
    return "0.1.0"


@pytest.fixture()
def package_json() -> str:
    """Return a minimal, valid package manifest as compact JSON text."""
    return PACKAGE_JSON


@pytest.fixture()
def application_doc() -> dict[str, object]:
    """Return a valid application manifest as a fresh JSON-compatible dict."""
    return json.loads(json.dumps(APPLICATION_DOC))


@pytest.fixture()
def make_project(tmp_path: Path) -> Callable[..., Path]:
    """Return a helper that writes ``elm.json`` (and directories) under ``tmp_path``."""

    def _make(manifest: str | dict[str, object], dirs: tuple[str, ...] = ()) -> Path:
        text = manifest if isinstance(manifest, str) else json.dumps(manifest)
        (tmp_path / "elm.json").write_text(text, encoding="utf-8")
        for directory in dirs:
            (tmp_path / directory).mkdir(parents=True, exist_ok=True)
        return tmp_path

    return _make
