"""Tests for manifest reading."""

from pathlib import Path

import pytest

from conftest import write_manifest
from versioncheck.manifest import (
    ManifestError,
    ManifestNotFound,
    manifest_version,
    parse_manifest,
    read_local_manifest,
    require_version,
)


class TestReadLocalManifest:
    def test_reads_json(self, tmp_path: Path):
        path = write_manifest(tmp_path, "1.2.3")
        assert read_local_manifest(path)["version"] == "1.2.3"

    def test_missing_file_is_neutral(self, tmp_path: Path):
        with pytest.raises(ManifestNotFound):
            read_local_manifest(tmp_path / "package.json")

    def test_invalid_json(self, tmp_path: Path):
        path = tmp_path / "package.json"
        path.write_text("{not json")
        with pytest.raises(ManifestError):
            read_local_manifest(path)

    def test_non_object(self):
        with pytest.raises(ManifestError):
            parse_manifest("[1, 2]", "inline")


class TestManifestVersion:
    def test_valid(self):
        assert manifest_version({"version": "1.0.0-rc.1"}) == "1.0.0-rc.1"

    def test_absent_or_invalid(self):
        assert manifest_version({}) is None
        assert manifest_version({"version": "one"}) is None
        assert manifest_version({"version": 1}) is None
        assert manifest_version(None) is None

    def test_require_version(self):
        with pytest.raises(ManifestError, match="Can't find version field"):
            require_version({"name": "x"}, "package.json")
