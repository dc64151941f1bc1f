"""Git interface layer: adapter, diff parsing and models."""

from versioncheck.git.adapter import (
    GitError,
    commit_patch,
    list_commits,
    show_file,
)
from versioncheck.git.diff_parser import DiffParser
from versioncheck.git.models import DiffLine, LineType

__all__ = [
    "DiffLine",
    "DiffParser",
    "GitError",
    "LineType",
    "commit_patch",
    "list_commits",
    "show_file",
]
