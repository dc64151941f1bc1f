"""Version token extraction and semantic-version delta classification."""

from versioncheck.versions.classifier import DELTA_KINDS, DeltaKind, classify, describe_change, is_valid
from versioncheck.versions.matcher import extract_line_version, extract_version, extract_versions

__all__ = [
    "DELTA_KINDS",
    "DeltaKind",
    "classify",
    "describe_change",
    "extract_line_version",
    "extract_version",
    "extract_versions",
    "is_valid",
]
