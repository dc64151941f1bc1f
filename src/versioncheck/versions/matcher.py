"""Find semantic-version tokens in free text and in manifest diff lines."""

from __future__ import annotations

import re
from typing import List, Optional

_NUM = r"(?:0|[1-9]\d*)"
_IDENT = r"[0-9A-Za-z-]+"
_SEMVER = (
    rf"{_NUM}\.{_NUM}\.{_NUM}"
    rf"(?:-{_IDENT}(?:\.{_IDENT})*)?"
    rf"(?:\+{_IDENT}(?:\.{_IDENT})*)?"
)

# A token may carry a leading "v", must not be glued to a word or a dotted
# number on the left, and may end a sentence with a period.
VERSION_RE = re.compile(rf"(?<![\w.-])v?({_SEMVER})(?![0-9A-Za-z-]|\.[0-9A-Za-z])")


def extract_versions(text: Optional[str]) -> List[str]:
    """Return every version token in *text*, in order of appearance."""
    if not text:
        return []
    return [m.group(1) for m in VERSION_RE.finditer(text)]


def extract_version(text: Optional[str]) -> Optional[str]:
    """Return the first version token in *text*, or None."""
    if not text:
        return None
    m = VERSION_RE.search(text)
    return m.group(1) if m else None


def extract_line_version(line: Optional[str]) -> Optional[str]:
    """Return the version held by a manifest diff line such as ``+  "version": "1.2.0",``.

    The line is split on double quotes and the first piece holding a version
    token wins, so JSON punctuation never becomes part of the match. A line
    with a version-like string in another quoted field ahead of the value
    would match that field instead.
    """
    if not line:
        return None
    for token in line.split('"'):
        version = extract_version(token.strip())
        if version:
            return version
    return None
