"""Read package manifests and pull out their version field."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Optional

from versioncheck.versions.classifier import is_valid


class ManifestNotFound(Exception):
    """The manifest file is absent: nothing to check, not a failure."""


class ManifestError(Exception):
    """The manifest cannot be parsed or has no usable version field."""


def parse_manifest(text: str, source: str) -> Dict[str, Any]:
    """Parse manifest *text*; *source* only names it in error messages."""
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ManifestError(f"Couldn't parse manifest to JSON: {source}: {exc}") from exc
    if not isinstance(data, dict):
        raise ManifestError(f"Manifest is not a JSON object: {source}")
    return data


def read_local_manifest(path: Path) -> Dict[str, Any]:
    """Load the manifest at *path*. Raises ManifestNotFound if it does not exist."""
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise ManifestNotFound(f"Package file not found: {path}") from exc
    except OSError as exc:
        raise ManifestError(f"Couldn't read manifest {path}: {exc}") from exc
    return parse_manifest(text, str(path))


def manifest_version(data: Optional[Dict[str, Any]]) -> Optional[str]:
    """Return the manifest's version if it is a valid semantic version."""
    if not data:
        return None
    version = data.get("version")
    if isinstance(version, str) and is_valid(version):
        return version
    return None


def require_version(data: Dict[str, Any], source: str) -> str:
    version = manifest_version(data)
    if version is None:
        raise ManifestError(f"Can't find version field in {source}")
    return version
