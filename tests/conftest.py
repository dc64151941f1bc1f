"""Shared test fixtures: sample patches, commits, temp git repos and a fake API."""

from __future__ import annotations

import json
import subprocess
import textwrap
from pathlib import Path
from typing import Callable, Dict, Optional

import httpx
import pytest

from versioncheck.scanner.models import Commit


@pytest.fixture
def patch_minor_bump() -> str:
    """GitHub API style patch (hunks only) bumping 1.1.0 → 1.2.0."""
    return textwrap.dedent("""\
        @@ -1,6 +1,6 @@
         {
           "name": "demo",
        -  "version": "1.1.0",
        +  "version": "1.2.0",
           "main": "index.js",
           "license": "MIT"
    """)


@pytest.fixture
def patch_added_only() -> str:
    """A manifest created with a version field."""
    return textwrap.dedent("""\
        @@ -0,0 +1,4 @@
        +{
        +  "name": "demo",
        +  "version": "0.1.0"
        +}
    """)


@pytest.fixture
def patch_ambiguous() -> str:
    """Three version-tagged lines: the manifest was restructured."""
    return textwrap.dedent("""\
        @@ -1,5 +1,7 @@
         {
        -  "version": "1.1.0",
        +  "version": "1.2.0",
        +  "engines": {
        +    "version": "1.2.0"
        +  },
           "name": "demo"
    """)


@pytest.fixture
def patch_no_version() -> str:
    return textwrap.dedent("""\
        @@ -2,3 +2,3 @@
           "name": "demo",
        -  "main": "index.js",
        +  "main": "lib/index.js",
           "license": "MIT"
    """)


@pytest.fixture
def git_show_patch() -> str:
    """``git show`` output with diff headers around the hunk."""
    return textwrap.dedent("""\
        diff --git a/package.json b/package.json
        index 1234567..abcdef0 100644
        --- a/package.json
        +++ b/package.json
        @@ -3 +3 @@
        -  "version": "2.0.0",
        +  "version": "3.0.0",
    """)


def make_patch(old: Optional[str], new: str) -> str:
    lines = ["@@ -1,3 +1,3 @@", " {"]
    if old is not None:
        lines.append(f'-  "version": "{old}",')
    lines.append(f'+  "version": "{new}",')
    lines.append('   "name": "demo"')
    return "\n".join(lines) + "\n"


class FakePatches:
    """In-memory commit-patch collaborator that records every lookup."""

    def __init__(self, patches: Dict[str, Optional[str]]) -> None:
        self.patches = patches
        self.calls: list[str] = []

    def __call__(self, sha: str) -> Optional[str]:
        self.calls.append(sha)
        return self.patches.get(sha)


@pytest.fixture
def fake_patches() -> Callable[[Dict[str, Optional[str]]], FakePatches]:
    return FakePatches


def local_commit(sha: str, message: str) -> Commit:
    return Commit.from_push_payload({"id": sha, "message": message, "author": {"name": "Test"}})


def remote_commit(sha: str, message: str, date: str) -> Commit:
    return Commit.from_api({
        "sha": sha,
        "commit": {
            "message": message,
            "author": {"name": "Test", "date": date},
            "committer": {"name": "Test", "date": date},
        },
    })


def commit_payload(files: Dict[str, Optional[str]]) -> dict:
    """A commits API response touching *files* (filename → patch)."""
    return {
        "sha": "0" * 40,
        "files": [{"filename": name, "status": "modified", "patch": patch} for name, patch in files.items()],
    }


def mock_transport(routes: Dict[str, object], seen: Optional[list] = None) -> httpx.MockTransport:
    """Route by URL path; dict/list values are returned as JSON, str as text, int as a bare status.

    A ``path?ref=<ref>`` key takes precedence for requests carrying a ``ref`` parameter.
    """

    def handler(request: httpx.Request) -> httpx.Response:
        if seen is not None:
            seen.append(request)
        ref = request.url.params.get("ref")
        body = routes.get(f"{request.url.path}?ref={ref}") if ref else None
        if body is None:
            body = routes.get(request.url.path)
        if body is None:
            return httpx.Response(404, json={"message": "Not Found"})
        if isinstance(body, int):
            return httpx.Response(body)
        if isinstance(body, str):
            return httpx.Response(200, text=body)
        return httpx.Response(200, json=body)

    return httpx.MockTransport(handler)


def write_manifest(root: Path, version: Optional[str], name: str = "package.json") -> Path:
    data = {"name": "demo"}
    if version is not None:
        data["version"] = version
    path = root / name
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    return path


def _git(repo: Path, *args: str) -> str:
    return subprocess.run(
        ["git", *args], cwd=repo, capture_output=True, text=True, check=True,
    ).stdout.strip()


@pytest.fixture
def tmp_git_repo(tmp_path: Path) -> Path:
    """Create a temporary git repository with a package.json at 1.0.0."""
    subprocess.run(["git", "init", str(tmp_path)], capture_output=True, check=True)
    _git(tmp_path, "config", "user.email", "test@test.com")
    _git(tmp_path, "config", "user.name", "Test")
    _git(tmp_path, "config", "commit.gpgsign", "false")
    write_manifest(tmp_path, "1.0.0")
    _git(tmp_path, "add", ".")
    _git(tmp_path, "commit", "-m", "init")
    return tmp_path


def commit_version(repo: Path, version: str, message: str) -> str:
    """Write *version* into the manifest, commit it, and return the sha."""
    write_manifest(repo, version)
    _git(repo, "add", "package.json")
    _git(repo, "commit", "-m", message)
    return _git(repo, "rev-parse", "HEAD")
