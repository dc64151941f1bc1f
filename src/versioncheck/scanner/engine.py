"""Commit scan engine — finds the commit that introduced a version.

Commits are checked one at a time and the scan stops at the first match,
so the commits API is only called as often as needed.
"""

from __future__ import annotations

import logging
from typing import Callable, Iterable, Iterator, List, Optional, Sequence

from versioncheck.config.schema import AssumeSameVersion
from versioncheck.scanner.models import Commit, CommitKind, ScanResult
from versioncheck.scanner.patch import analyze_patch
from versioncheck.versions.classifier import describe_change
from versioncheck.versions.matcher import extract_versions

logger = logging.getLogger(__name__)

# Push webhooks carry at most this many commits
WEBHOOK_COMMIT_LIMIT = 20

PatchFetcher = Callable[[str], Optional[str]]


def _message_candidates(commits: Iterable[Commit], version: str) -> Iterator[Commit]:
    """Commits whose message names *version*."""
    for commit in commits:
        if version in extract_versions(commit.message):
            yield commit


def newest_first(commits: Sequence[Commit]) -> List[Commit]:
    """Order commits for the diff search.

    Only remote commits carry reliable committer dates; any list holding a
    commit without one keeps its given order.
    """
    if commits and all(c.kind == CommitKind.REMOTE and c.timestamp is not None for c in commits):
        return sorted(commits, key=lambda c: c.timestamp, reverse=True)  # type: ignore[arg-type,return-value]
    return list(commits)


def check_commit(
    commit: Commit,
    version: str,
    fetch_patch: PatchFetcher,
    *,
    assume_same_version: Optional[AssumeSameVersion] = None,
    version_key: str = "version",
) -> Optional[ScanResult]:
    """Return a match result if *commit* bumped the manifest to *version*."""
    try:
        patch = fetch_patch(commit.sha)
    except Exception:
        logger.error("Failed to fetch patch for commit %s", commit.short_sha)
        raise

    lines = analyze_patch(patch, version_key)
    if lines is None:
        return None

    added = version if assume_same_version == "new" else lines.added_version
    deleted = version if assume_same_version == "old" else lines.deleted_version

    if not added:
        return None
    if assume_same_version is None and added != version:
        return None

    return ScanResult(
        changed=True,
        version=added,
        type=describe_change(deleted, added) if deleted else None,
        commit=commit.sha,
        previous_version=deleted,
    )


def scan(
    commits: Sequence[Commit],
    version: str,
    fetch_patch: PatchFetcher,
    *,
    diff_search: bool = False,
    assume_same_version: Optional[AssumeSameVersion] = None,
    version_key: str = "version",
) -> ScanResult:
    """Find the commit in *commits* that set the manifest version to *version*.

    Fetch errors propagate; a commit whose patch shows no usable bump is
    skipped.
    """
    if len(commits) >= WEBHOOK_COMMIT_LIMIT:
        logger.warning(
            "This run topped the commit limit set by GitHub webhooks (%d): "
            "some commits may be missing and the version change may not be found.",
            WEBHOOK_COMMIT_LIMIT,
        )

    phases = [("message", _message_candidates(commits, version))]
    if diff_search:
        phases.append(("diff", iter(newest_first(commits))))

    for phase, candidates in phases:
        if phase == "diff":
            logger.info("No standard version commit found, switching to diff search")
        for commit in candidates:
            logger.debug("Checking %s (%s): %s", commit.short_sha, phase, commit.title)
            result = check_commit(
                commit,
                version,
                fetch_patch,
                assume_same_version=assume_same_version,
                version_key=version_key,
            )
            if result is not None:
                logger.info("Found match for version %s: %s %s", version, commit.short_sha, commit.title)
                return result

    logger.info("No matching commit found.")
    return ScanResult(changed=False)
