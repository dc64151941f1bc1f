"""GitHub REST client for commit patches, pull-request commits and file contents."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional
from urllib.parse import quote

import httpx

from versioncheck.scanner.models import Commit

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "https://api.github.com"
PER_PAGE = 100


class FetchError(Exception):
    """Raised when a remote resource cannot be fetched or decoded."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class GitHubClient:
    """Thin wrapper over :class:`httpx.Client` for the calls a version check needs."""

    def __init__(
        self,
        repository: Optional[str],
        token: Optional[str] = None,
        api_url: str = DEFAULT_API_URL,
        timeout: float = 30.0,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self.repository = repository
        self.api_url = api_url.rstrip("/")
        headers = {
            "Accept": "application/vnd.github+json",
            "User-Agent": "versioncheck",
        }
        if token:
            headers["Authorization"] = f"Bearer {token}"
        self._client = httpx.Client(headers=headers, timeout=timeout, transport=transport, follow_redirects=True)
        # Per-sha cache: the same commit may be checked in both scan phases
        self._commits: Dict[str, Dict[str, Any]] = {}

    def __enter__(self) -> "GitHubClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    # ---- transport ----

    def _get(self, url: str, **kwargs: Any) -> httpx.Response:
        try:
            response = self._client.get(url, **kwargs)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise FetchError(
                f"GET {url} failed with status {exc.response.status_code}",
                status_code=exc.response.status_code,
            ) from exc
        except httpx.HTTPError as exc:
            raise FetchError(f"GET {url} failed: {exc}") from exc
        return response

    def fetch_json(self, url: str, **kwargs: Any) -> Any:
        response = self._get(url, **kwargs)
        try:
            return response.json()
        except ValueError as exc:
            raise FetchError(f"GET {url} returned a body that is not JSON") from exc

    def fetch_text(self, url: str, **kwargs: Any) -> str:
        return self._get(url, **kwargs).text

    def _repo_url(self, path: str) -> str:
        if not self.repository:
            raise FetchError("No repository configured (GITHUB_REPOSITORY is not set)")
        return f"{self.api_url}/repos/{self.repository}/{path}"

    # ---- commits ----

    def get_commit(self, sha: str) -> Dict[str, Any]:
        """Return the commits API payload for *sha*, files and patches included."""
        if sha not in self._commits:
            data = self.fetch_json(self._repo_url(f"commits/{sha}"))
            if not isinstance(data, dict) or not isinstance(data.get("files"), list):
                raise FetchError(f"Malformed commit response for {sha[:7]}")
            self._commits[sha] = data
        return self._commits[sha]

    def commit_patch(self, sha: str, file_name: str) -> Optional[str]:
        """Return the patch of *file_name* in commit *sha*, or None if the commit does not touch it."""
        for entry in self.get_commit(sha)["files"]:
            if entry.get("filename") == file_name:
                return entry.get("patch")
        return None

    def pull_request_commits(self, number: int) -> List[Commit]:
        """Return every commit of pull request *number*, oldest first."""
        commits: List[Commit] = []
        page = 1
        while True:
            data = self.fetch_json(
                self._repo_url(f"pulls/{number}/commits"),
                params={"per_page": PER_PAGE, "page": page},
            )
            if not isinstance(data, list):
                raise FetchError(f"Malformed commit list for pull request #{number}")
            commits.extend(Commit.from_api(item) for item in data)
            if len(data) < PER_PAGE:
                break
            page += 1
        logger.debug("Fetched %d commits for pull request #%d", len(commits), number)
        return commits

    # ---- file contents ----

    def file_at_ref(self, ref: str, path: str) -> str:
        """Return the raw content of *path* at *ref* through the contents API."""
        return self.fetch_text(
            self._repo_url(f"contents/{quote(path)}"),
            params={"ref": ref},
            headers={"Accept": "application/vnd.github.raw"},
        )
