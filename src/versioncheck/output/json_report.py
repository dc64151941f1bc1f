"""JSON reporter for CI pipelines."""

from __future__ import annotations

import json
from typing import Any, Dict

from versioncheck import __version__
from versioncheck.scanner.models import ScanResult


def to_dict(result: ScanResult) -> Dict[str, Any]:
    """Convert ScanResult to a JSON-serialisable dict."""
    return {
        "tool": "versioncheck",
        "tool_version": __version__,
        "changed": result.changed,
        "version": result.version,
        "previous_version": result.previous_version,
        "type": result.type,
        "commit": result.commit,
    }


def render(result: ScanResult) -> str:
    """Return formatted JSON string."""
    return json.dumps(to_dict(result), indent=2)
