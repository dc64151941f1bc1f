"""Configuration schema — dataclasses for every config section."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal, Optional

AssumeSameVersion = Literal["old", "new"]
StaticChecking = Literal["localIsNew", "remoteIsNew"]

ASSUME_SAME_VERSION_VALUES = ("old", "new")
STATIC_CHECKING_VALUES = ("localIsNew", "remoteIsNew")

# Resolves to the manifest at the pre-push commit
BEFORE_TAG = "::before"


@dataclass
class CheckConfig:
    file_name: str = "package.json"
    file_url: Optional[str] = None  # remote locator or "::before"
    diff_search: bool = False
    assume_same_version: Optional[AssumeSameVersion] = None
    static_checking: Optional[StaticChecking] = None
    token: Optional[str] = None
    version_key: str = "version"


@dataclass
class GitHubContext:
    """Values the CI runner exposes through the environment."""

    workspace: str = "."
    event_path: Optional[str] = None
    event_name: Optional[str] = None
    repository: Optional[str] = None
    api_url: str = "https://api.github.com"
    output_file: Optional[str] = None


@dataclass
class VersionCheckConfig:
    check: CheckConfig = field(default_factory=CheckConfig)
    github: GitHubContext = field(default_factory=GitHubContext)

    @property
    def uses_static_check(self) -> bool:
        return bool(self.check.file_url) or self.check.static_checking is not None
