"""Commit scanning, patch analysis and snapshot comparison."""

from versioncheck.scanner.models import Commit, CommitKind, ScanResult, VersionLines
from versioncheck.scanner.engine import scan
from versioncheck.scanner.patch import analyze_patch
from versioncheck.scanner.refs import Locator, LocatorKind, compare_refs, static_locators

__all__ = [
    "Commit",
    "CommitKind",
    "Locator",
    "LocatorKind",
    "ScanResult",
    "VersionLines",
    "analyze_patch",
    "compare_refs",
    "scan",
    "static_locators",
]
