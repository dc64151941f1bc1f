"""GitHub REST API collaborator."""

from versioncheck.github.client import FetchError, GitHubClient

__all__ = ["FetchError", "GitHubClient"]
