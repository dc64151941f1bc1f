"""Tests for semantic-version delta classification."""

import pytest

from versioncheck.versions.classifier import classify, describe_change, is_valid


class TestClassify:
    @pytest.mark.parametrize(
        ("older", "newer", "kind"),
        [
            ("1.1.1", "1.1.2", "patch"),
            ("0.0.1", "0.1.0", "minor"),
            ("0.0.1", "1.0.0", "major"),
            ("1.9.9", "2.0.0", "major"),
            ("0.0.1-foo", "0.0.1-foo.bar", "prerelease"),
            ("1.0.0-rc.1", "1.0.0", "prerelease"),
            ("0.1.0", "0.1.0+foo", "build"),
            ("1.0.0+build.1", "1.0.0+build.2", "build"),
        ],
    )
    def test_forward_kinds(self, older, newer, kind):
        assert classify(older, newer) == kind

    def test_equal_versions(self):
        assert classify("1.2.3", "1.2.3") is None
        assert classify("1.2.3-rc.1+b", "1.2.3-rc.1+b") is None

    def test_lower_second_version(self):
        assert classify("0.0.2", "0.0.1") is None
        assert classify("2.0.0", "1.9.9") is None
        assert classify("1.0.0", "1.0.0-rc.1") is None

    def test_invalid_input(self):
        assert classify("1.2", "1.3") is None
        assert classify(None, "1.0.0") is None
        assert classify("1.0.0", "banana") is None


class TestDescribeChange:
    def test_forward(self):
        assert describe_change("1.1.0", "1.2.0") == "minor"

    def test_downgrade(self):
        assert describe_change("2.0.0", "1.0.0") == "downgrade > major"
        assert describe_change("1.0.1", "1.0.0") == "downgrade > patch"

    def test_no_difference(self):
        assert describe_change("1.0.0", "1.0.0") is None

    def test_never_forward_for_reversed_pair(self):
        assert not (describe_change("1.3.0", "1.2.0") or "").startswith(("major", "minor", "patch"))


class TestIsValid:
    def test_valid(self):
        assert is_valid("1.0.0-alpha+001")

    def test_invalid(self):
        assert not is_valid("v1.0.0")
        assert not is_valid("")
        assert not is_valid(None)
