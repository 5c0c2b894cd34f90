"""Unit tests for elm_outline.project: reading with source-directory
checks, and writing.
"""
from __future__ import annotations

import dataclasses
import json
from pathlib import Path
from typing import Callable

import pytest

from elm_outline.decoder import DecodeError, ErrorKind, OutlineError, OutlineProblem
from elm_outline.outline import AppOutline, PkgOutline
from elm_outline.project import (
    MANIFEST_FILENAME,
    OutlineHasBadSourceDirs,
    OutlineHasBadStructure,
    manifest_path,
    read,
    write,
)

MakeProject = Callable[..., Path]


class TestRead:
    def test_package_needs_no_directories(self, make_project: MakeProject, package_json: str) -> None:
        root = make_project(package_json)
        assert isinstance(read(root), PkgOutline)

    def test_application_with_existing_dirs(
        self, make_project: MakeProject, application_doc: dict[str, object]
    ) -> None:
        root = make_project(application_doc, dirs=("src",))
        outline = read(root)
        assert isinstance(outline, AppOutline)
        assert outline.source_dirs == ("src",)

    def test_accepts_str_root(self, make_project: MakeProject, package_json: str) -> None:
        root = make_project(package_json)
        assert isinstance(read(str(root)), PkgOutline)

    def test_all_missing_dirs_reported_in_order(
        self, make_project: MakeProject, application_doc: dict[str, object]
    ) -> None:
        application_doc["source-directories"] = ["gen", "src", "lib"]
        root = make_project(application_doc, dirs=("src",))
        with pytest.raises(OutlineHasBadSourceDirs) as info:
            read(root)
        assert info.value.dirs == ("gen", "lib")

    def test_file_is_not_a_directory(
        self, make_project: MakeProject, application_doc: dict[str, object]
    ) -> None:
        root = make_project(application_doc)
        (root / "src").write_text("not a dir", encoding="utf-8")
        with pytest.raises(OutlineHasBadSourceDirs) as info:
            read(root)
        assert info.value.dirs == ("src",)

    def test_nested_relative_dir(self, make_project: MakeProject, application_doc: dict[str, object]) -> None:
        application_doc["source-directories"] = ["vendor/lib"]
        root = make_project(application_doc, dirs=("vendor/lib",))
        assert isinstance(read(root), AppOutline)

    def test_bad_structure_wraps_decode_error(self, make_project: MakeProject) -> None:
        root = make_project('{"type": "thing"}')
        with pytest.raises(OutlineHasBadStructure) as info:
            read(root)
        assert isinstance(info.value.error, DecodeError)
        assert info.value.error.problem is OutlineProblem.BAD_TYPE
        assert isinstance(info.value.__cause__, DecodeError)

    def test_empty_source_dirs_fail_before_filesystem_check(
        self, make_project: MakeProject, application_doc: dict[str, object]
    ) -> None:
        application_doc["source-directories"] = []
        root = make_project(application_doc)
        with pytest.raises(OutlineHasBadStructure) as info:
            read(root)
        assert info.value.error.problem is OutlineProblem.NO_SRC_DIRS

    def test_read_errors_are_outline_errors(self, make_project: MakeProject) -> None:
        root = make_project("{")
        with pytest.raises(OutlineError):
            read(root)

    def test_deeply_nested_manifest_is_bad_structure(self, make_project: MakeProject) -> None:
        root = make_project("[" * 100_000 + "]" * 100_000)
        with pytest.raises(OutlineHasBadStructure) as info:
            read(root)
        assert info.value.error.kind is ErrorKind.BAD_JSON

    def test_missing_manifest_propagates(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            read(tmp_path)


class TestBadSourceDirsError:
    def test_requires_at_least_one_dir(self) -> None:
        with pytest.raises(ValueError):
            OutlineHasBadSourceDirs(())

    def test_message_lists_every_dir(self) -> None:
        message = str(OutlineHasBadSourceDirs(("a", "b")))
        assert "'a'" in message and "'b'" in message


class TestWrite:
    def test_write_then_read(
        self, make_project: MakeProject, application_doc: dict[str, object]
    ) -> None:
        root = make_project(application_doc, dirs=("src",))
        outline = read(root)
        (root / MANIFEST_FILENAME).unlink()
        write(root, outline)
        assert read(root) == outline

    def test_written_text_is_canonical(self, make_project: MakeProject, package_json: str) -> None:
        root = make_project(package_json)
        write(root, read(root))
        text = manifest_path(root).read_text(encoding="utf-8")
        assert text.endswith("\n")
        assert list(json.loads(text)) == [
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

    def test_unencodable_outline_leaves_file_untouched(
        self, make_project: MakeProject, package_json: str
    ) -> None:
        root = make_project(package_json)
        before = manifest_path(root).read_bytes()
        outline = dataclasses.replace(read(root), summary="bad \ud800")
        with pytest.raises(UnicodeEncodeError):
            write(root, outline)
        assert manifest_path(root).read_bytes() == before

    def test_write_does_not_validate(self, tmp_path: Path) -> None:
        from elm_outline.grammar import Version

        outline = AppOutline(
            elm_version=Version(0, 19, 1),
            source_dirs=("does-not-exist",),
            deps_direct={},
            deps_indirect={},
            test_direct={},
            test_indirect={},
        )
        write(tmp_path, outline)
        assert manifest_path(tmp_path).exists()
        with pytest.raises(OutlineHasBadSourceDirs):
            read(tmp_path)
