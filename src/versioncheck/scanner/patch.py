"""Pick the added and deleted version lines out of one manifest patch."""

from __future__ import annotations

import logging
from typing import Dict, Optional

from versioncheck.git.diff_parser import DiffParser
from versioncheck.git.models import LineType
from versioncheck.scanner.models import VersionLines

logger = logging.getLogger(__name__)

# More version lines than this means the patch restructured the manifest
MAX_VERSION_LINES = 2


def version_marker(version_key: str = "version") -> str:
    return f'"{version_key}":'


def analyze_patch(patch_text: Optional[str], version_key: str = "version") -> Optional[VersionLines]:
    """Return the version lines of *patch_text*, or None if it shows no usable bump.

    None covers three cases: no patch, more than two version lines
    (ambiguous), and no added version line.
    """
    if not patch_text:
        return None

    marker = version_marker(version_key)
    lines = [line for line in DiffParser(patch_text).parse() if marker in line.content]

    if len(lines) > MAX_VERSION_LINES:
        logger.debug("Ambiguous patch: %d version lines", len(lines))
        return None

    buckets: Dict[LineType, str] = {}
    for line in lines:
        buckets[line.line_type] = line.raw

    added = buckets.get(LineType.ADDED)
    if added is None:
        return None
    return VersionLines(added=added, deleted=buckets.get(LineType.REMOVED))
