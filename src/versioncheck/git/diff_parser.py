"""Unified diff parser.

Yields DiffLine objects for added and removed lines. Accepts both a full
``git show`` / ``git diff`` output (with ``diff --git`` and ``---``/``+++``
headers) and the bare hunk list the GitHub API returns in a file's
``patch`` field. Handles BOM, CRLF and ``\\ No newline`` markers.
"""

from __future__ import annotations

import re
from typing import Generator, Optional

from versioncheck.git.models import DiffLine, LineType

_DIFF_HEADER_RE = re.compile(r"^diff --git a/(.*) b/(.*)$")
_HUNK_HEADER_RE = re.compile(r"^@@ -(\d+)(?:,(\d+))? \+(\d+)(?:,(\d+))? @@")
_NO_NEWLINE_RE = re.compile(r"^\\ No newline at end of file$")
_FILE_HEADER_OLD = re.compile(r"^--- (?:a/|/dev/null)")
_FILE_HEADER_NEW = re.compile(r"^\+\+\+ (?:b/|/dev/null)")


def _strip_bom(line: str) -> str:
    """Remove UTF-8 BOM if present."""
    return line.lstrip("\ufeff")


def _normalise(line: str) -> str:
    """Strip trailing CR (CRLF → LF)."""
    return line.rstrip("\r")


class DiffParser:
    """Parse unified diff text and yield DiffLine objects.

    Usage::

        parser = DiffParser(patch_text, path="package.json")
        for line in parser.parse():
            ...

    *path* names the file for bare hunk lists that carry no ``diff --git``
    header. With a full diff, *path* restricts output to that file.
    """

    def __init__(self, diff_text: str, path: Optional[str] = None) -> None:
        self._lines = [_normalise(line) for line in diff_text.splitlines()]
        self._path = path

    def parse(self) -> Generator[DiffLine, None, None]:
        current_file: Optional[str] = self._path or ""
        in_hunk = False

        for raw_line in self._lines:
            m = _DIFF_HEADER_RE.match(raw_line)
            if m:
                current_file = m.group(2)
                in_hunk = False
                continue

            if _HUNK_HEADER_RE.match(raw_line):
                in_hunk = True
                continue

            # File headers only appear before the first hunk of a file
            if not in_hunk and (_FILE_HEADER_OLD.match(raw_line) or _FILE_HEADER_NEW.match(raw_line)):
                continue

            if _NO_NEWLINE_RE.match(raw_line):
                continue

            if self._path and current_file != self._path:
                continue

            if raw_line.startswith("+"):
                line_type = LineType.ADDED
            elif raw_line.startswith("-"):
                line_type = LineType.REMOVED
            else:
                # Context lines and anything outside a hunk
                continue

            yield DiffLine(
                file=current_file or "",
                content=_strip_bom(raw_line[1:]),
                line_type=line_type,
                raw=raw_line,
            )
