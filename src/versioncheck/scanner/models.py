"""Commit, patch and result data models."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional

from versioncheck.versions.matcher import extract_line_version


class CommitKind(str, Enum):
    LOCAL = "local"  # from a push event payload
    REMOTE = "remote"  # from the commits API


@dataclass(frozen=True)
class Commit:
    """A commit from either source, reduced to what the scanner needs."""

    sha: str
    message: str
    kind: CommitKind = CommitKind.LOCAL
    timestamp: Optional[datetime] = None
    author: Optional[str] = None

    @property
    def short_sha(self) -> str:
        return self.sha[:7]

    @property
    def title(self) -> str:
        return self.message.splitlines()[0] if self.message else ""

    @classmethod
    def from_push_payload(cls, data: Dict[str, Any]) -> "Commit":
        """Build from an entry of a push event's ``commits`` list."""
        author = data.get("author") or {}
        return cls(
            sha=data["id"],
            message=data.get("message") or "",
            kind=CommitKind.LOCAL,
            author=author.get("name"),
        )

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "Commit":
        """Build from a commits API response (``GET /repos/{repo}/commits``)."""
        inner = data.get("commit") or {}
        committer = inner.get("committer") or {}
        author = inner.get("author") or {}
        return cls(
            sha=data["sha"],
            message=inner.get("message") or "",
            kind=CommitKind.REMOTE,
            timestamp=_parse_timestamp(committer.get("date")),
            author=author.get("name"),
        )


def _parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    if not value:
        return None
    try:
        # The API uses a trailing Z, which fromisoformat rejects before 3.11
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None


@dataclass(frozen=True)
class VersionLines:
    """The version-bearing lines of one manifest patch."""

    added: str
    deleted: Optional[str] = None

    @property
    def added_version(self) -> Optional[str]:
        return extract_line_version(self.added)

    @property
    def deleted_version(self) -> Optional[str]:
        return extract_line_version(self.deleted) if self.deleted else None


@dataclass(frozen=True)
class ScanResult:
    """Outcome of a run, translated 1:1 into CI outputs."""

    changed: bool = False
    version: Optional[str] = None
    type: Optional[str] = None
    commit: Optional[str] = None
    previous_version: Optional[str] = None

    def to_outputs(self) -> Dict[str, Any]:
        """Return output key/value pairs, leaving out unset values."""
        outputs: Dict[str, Any] = {"changed": self.changed}
        for key in ("version", "type", "commit", "previous_version"):
            value = getattr(self, key)
            if value is not None:
                outputs[key] = value
        return outputs
