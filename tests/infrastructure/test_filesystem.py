"""Tests for manifest file I/O."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from sfmcp.domain.errors import FileSystemError, ParseError
from sfmcp.domain.manifest import ManifestDocument, TypeEntry
from sfmcp.infrastructure.filesystem import (
    default_filtered_path,
    ensure_directory,
    ensure_project_config,
    read_manifest,
    write_manifest,
)


class TestReadManifest:
    def test_reads_and_parses(self, project_root: Path) -> None:
        doc = read_manifest(project_root / "manifest" / "package.xml")
        assert doc.get("ApexClass") is not None

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileSystemError, match="Manifest file not found"):
            read_manifest(tmp_path / "package.xml")

    def test_directory_is_not_a_manifest(self, tmp_path: Path) -> None:
        with pytest.raises(FileSystemError):
            read_manifest(tmp_path)

    def test_malformed_content(self, tmp_path: Path) -> None:
        path = tmp_path / "package.xml"
        path.write_text("<Package><version>59.0</version></Package>", encoding="utf-8")
        with pytest.raises(ParseError):
            read_manifest(path)


class TestWriteManifest:
    def test_creates_parent_directories(self, tmp_path: Path) -> None:
        doc = ManifestDocument(version="59.0", types=(TypeEntry(name="Flow", members=("F",)),))
        path = tmp_path / "a" / "b" / "package.xml"
        write_manifest(path, doc)
        assert read_manifest(path) == doc

    def test_unwritable_target(self, tmp_path: Path) -> None:
        blocker = tmp_path / "file"
        blocker.write_text("", encoding="utf-8")
        doc = ManifestDocument(version="59.0", types=(TypeEntry(name="Flow"),))
        with pytest.raises(FileSystemError, match="Cannot write manifest"):
            write_manifest(blocker / "package.xml", doc)


class TestEnsureDirectory:
    def test_nested(self, tmp_path: Path) -> None:
        ensure_directory(tmp_path / "x" / "y")
        assert (tmp_path / "x" / "y").is_dir()

    def test_blocked_by_file(self, tmp_path: Path) -> None:
        (tmp_path / "x").write_text("", encoding="utf-8")
        with pytest.raises(FileSystemError):
            ensure_directory(tmp_path / "x" / "y")


class TestProjectConfig:
    def test_creates_once(self, tmp_path: Path) -> None:
        created = ensure_project_config(
            tmp_path,
            package_dir="force-app/main/default",
            api_version="59.0",
            login_url="https://login.salesforce.com",
        )
        assert created is True
        config = json.loads((tmp_path / "sfdx-project.json").read_text(encoding="utf-8"))
        assert config["packageDirectories"] == [{"path": "force-app/main/default", "default": True}]
        assert config["sourceApiVersion"] == "59.0"

        again = ensure_project_config(
            tmp_path, package_dir="other", api_version="60.0", login_url="x"
        )
        assert again is False
        config = json.loads((tmp_path / "sfdx-project.json").read_text(encoding="utf-8"))
        assert config["sourceApiVersion"] == "59.0"


class TestDefaultFilteredPath:
    def test_names_types(self) -> None:
        path = default_filtered_path(Path("/m/package.xml"), ["ApexClass", "Flow"])
        assert path == Path("/m/package-filtered-ApexClass-Flow.xml")

    def test_no_types(self) -> None:
        assert default_filtered_path(Path("/m/package.xml"), []) == Path("/m/package-filtered.xml")
