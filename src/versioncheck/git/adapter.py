"""Git subprocess wrapper for commit patches, file contents and commit ranges."""

from __future__ import annotations

import subprocess
from datetime import datetime
from pathlib import Path
from typing import List, Optional

from versioncheck.scanner.models import Commit, CommitKind

# Record separators for `git log` output parsing
_FIELD_SEP = "\x1f"
_RECORD_SEP = "\x1e"


class GitError(Exception):
    """Raised when git is unavailable or exits with a non-zero status."""

    def __init__(self, message: str, code: Optional[int] = None) -> None:
        super().__init__(message)
        self.code = code


def _run_git(args: list[str], cwd: Path, timeout: int = 30) -> str:
    """Run a git command and return stdout. Raises GitError on failure."""
    try:
        result = subprocess.run(
            ["git", *args],
            cwd=cwd,
            capture_output=True,
            text=True,
            timeout=timeout,
            encoding="utf-8",
            errors="replace",
        )
    except FileNotFoundError:
        raise GitError("git is not installed or not on PATH")
    except subprocess.TimeoutExpired:
        raise GitError(f"git command timed out after {timeout}s: git {' '.join(args)}")

    if result.returncode != 0:
        stderr = result.stderr.strip()
        raise GitError(
            f"Command failed with code {result.returncode}: git {' '.join(args)}"
            + (f"\n{stderr}" if stderr else ""),
            code=result.returncode,
        )
    return result.stdout


def commit_patch(repo_root: Path, sha: str, path: str) -> Optional[str]:
    """Return the unified diff of *path* in commit *sha*, or None if untouched."""
    out = _run_git(
        ["show", "--format=", "--unified=0", "--no-color", "--no-ext-diff", sha, "--", path],
        cwd=repo_root,
    )
    return out if out.strip() else None


def show_file(repo_root: Path, ref: str, path: str) -> str:
    """Return the content of *path* at *ref*."""
    return _run_git(["show", f"{ref}:{path}"], cwd=repo_root)


def list_commits(repo_root: Path, base: Optional[str], head: str) -> List[Commit]:
    """Return commits in ``base..head`` oldest first, as delivered by a push event."""
    rev = f"{base}..{head}" if base else head
    out = _run_git(
        ["log", "--reverse", f"--format=%H{_FIELD_SEP}%cI{_FIELD_SEP}%an{_FIELD_SEP}%B{_RECORD_SEP}", rev],
        cwd=repo_root,
    )
    commits: List[Commit] = []
    for record in out.split(_RECORD_SEP):
        record = record.strip("\n")
        if not record:
            continue
        sha, date, author, message = record.split(_FIELD_SEP, 3)
        commits.append(
            Commit(
                sha=sha,
                message=message.strip(),
                kind=CommitKind.LOCAL,
                timestamp=datetime.fromisoformat(date),
                author=author,
            )
        )
    return commits
