"""Wire the configuration, the CI event and the collaborators into one check.

Commit data comes from the GitHub API when a repository is configured and
from the local checkout otherwise.
"""

from __future__ import annotations

import json
import logging
import threading
from pathlib import Path
from typing import Any, Dict, List, Optional

from versioncheck.config.loader import ConfigError
from versioncheck.config.schema import BEFORE_TAG, VersionCheckConfig
from versioncheck.git.adapter import commit_patch, list_commits, show_file
from versioncheck.github.client import GitHubClient
from versioncheck.manifest import parse_manifest, read_local_manifest, require_version
from versioncheck.scanner.engine import PatchFetcher, scan
from versioncheck.scanner.models import Commit, ScanResult
from versioncheck.scanner.refs import Locator, LocatorKind, compare_refs, static_locators

logger = logging.getLogger(__name__)

PULL_REQUEST_EVENTS = ("pull_request", "pull_request_target")


class EventError(Exception):
    """The event payload lacks what the selected mode needs."""


def load_event(path: Optional[str]) -> Dict[str, Any]:
    """Read the event payload the runner wrote to *path*; no path means no event."""
    if not path:
        return {}
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as exc:
        raise EventError(f"Couldn't read event payload {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise EventError(f"Event payload is not a JSON object: {path}")
    return data


def _require(data: Dict[str, Any], label: str, *keys: str) -> Any:
    """Walk *keys* into an event payload object, raising EventError when one is missing."""
    value: Any = data
    for key in keys:
        if not isinstance(value, dict) or value.get(key) is None:
            raise EventError(f"Malformed event payload: missing {label}.{'.'.join(keys)}")
        value = value[key]
    return value


class VersionCheck:
    """One version check run over a single event."""

    def __init__(
        self,
        config: VersionCheckConfig,
        event: Dict[str, Any],
        client: Optional[GitHubClient] = None,
    ) -> None:
        self.config = config
        self.event = event
        self.workspace = Path(config.github.workspace)
        self.client = client
        if self.client is None and config.github.repository:
            self.client = GitHubClient(
                config.github.repository,
                token=config.check.token,
                api_url=config.github.api_url,
            )
        # Plain URL reads outside the API, e.g. a file-url in local git mode.
        # Both sides of a comparison may ask for it at once.
        self._url_client: Optional[GitHubClient] = None
        self._url_client_lock = threading.Lock()

    @property
    def manifest_path(self) -> Path:
        return self.workspace / self.config.check.file_name

    # ---- collaborators ----

    def read_manifest(self, locator: Locator) -> Dict[str, Any]:
        if locator.kind == LocatorKind.URL:
            text = self._http().fetch_text(locator.value)
        elif locator.kind == LocatorKind.API_REF:
            if self.client is None:
                raise EventError(f"Can't read {locator} without a repository (GITHUB_REPOSITORY is not set)")
            text = self.client.file_at_ref(locator.value, self.config.check.file_name)
        elif locator.kind == LocatorKind.GIT_REF:
            text = show_file(self.workspace, locator.value, self.config.check.file_name)
        else:
            return read_local_manifest(Path(locator.value))
        return parse_manifest(text, str(locator))

    def _http(self) -> GitHubClient:
        if self.client is not None:
            return self.client
        with self._url_client_lock:
            if self._url_client is None:
                self._url_client = GitHubClient(None, token=self.config.check.token)
        return self._url_client

    def patch_fetcher(self) -> PatchFetcher:
        file_name = self.config.check.file_name
        if self.client is not None:
            client = self.client
            return lambda sha: client.commit_patch(sha, file_name)
        return lambda sha: commit_patch(self.workspace, sha, file_name)

    def ref_locator(self, ref: str) -> Locator:
        """Locator for the manifest at commit *ref*."""
        if self.client is not None:
            return Locator(ref, LocatorKind.API_REF)
        return Locator(ref, LocatorKind.GIT_REF)

    # ---- event ----

    def _pull_request(self) -> Optional[Dict[str, Any]]:
        if self.config.github.event_name in PULL_REQUEST_EVENTS or "pull_request" in self.event:
            return self.event.get("pull_request") or None
        return None

    def commits(self) -> Optional[List[Commit]]:
        """Commits carried or referenced by the event, or None for a bare ref pair."""
        pull_request = self._pull_request()
        if pull_request is not None:
            if self.client is not None:
                number = _require(pull_request, "pull_request", "number")
                if not isinstance(number, int):
                    raise EventError(f"Malformed event payload: bad pull_request.number {number!r}")
                return self.client.pull_request_commits(number)
            base = _require(pull_request, "pull_request", "base", "sha")
            head = _require(pull_request, "pull_request", "head", "sha")
            return list_commits(self.workspace, base, head)

        payload_commits = self.event.get("commits")
        if payload_commits:
            try:
                return [Commit.from_push_payload(c) for c in payload_commits]
            except (AttributeError, KeyError) as exc:
                raise EventError(f"Malformed event payload: bad commit entry ({exc!r})") from exc
        if self.event.get("before") and self.event.get("after"):
            return None
        raise EventError("Can't find commits or before/after refs in the event payload")

    # ---- modes ----

    def static_check(self) -> ScanResult:
        file_url = self.config.check.file_url
        if not file_url:
            raise ConfigError("static-checking needs a file-url to compare against")
        if file_url == BEFORE_TAG:
            before = self.event.get("before")
            if not before:
                raise EventError(f"Can't resolve {BEFORE_TAG}: the event has no 'before' ref")
            remote = self.ref_locator(before)
        else:
            remote = Locator.parse(file_url)
        old, new = static_locators(Locator(str(self.manifest_path)), remote, self.config.check.static_checking)
        return compare_refs(old, new, self.read_manifest)

    def run(self) -> ScanResult:
        local = read_local_manifest(self.manifest_path)
        version = require_version(local, str(self.manifest_path))
        logger.info("Current version: %s", version)

        if self.config.uses_static_check:
            return self.static_check()

        commits = self.commits()
        if commits is None:
            before, after = self.event["before"], self.event["after"]
            logger.info("No commits in the event, comparing refs %s..%s", before[:7], after[:7])
            return compare_refs(self.ref_locator(before), self.ref_locator(after), self.read_manifest)

        logger.info("Searching %d commit(s) for version %s", len(commits), version)
        check = self.config.check
        return scan(
            commits,
            version,
            self.patch_fetcher(),
            diff_search=check.diff_search,
            assume_same_version=check.assume_same_version,
            version_key=check.version_key,
        )

    def close(self) -> None:
        for client in (self.client, self._url_client):
            if client is not None:
                client.close()
