"""Compare the manifest version between two snapshots, without walking commits."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, Optional, Tuple

from versioncheck.manifest import ManifestError, manifest_version
from versioncheck.scanner.models import ScanResult
from versioncheck.versions.classifier import describe_change

logger = logging.getLogger(__name__)

ManifestReader = Callable[["Locator"], Dict[str, Any]]


class LocatorKind(str, Enum):
    PATH = "path"
    URL = "url"
    GIT_REF = "git"  # manifest at a ref of the local checkout
    API_REF = "api"  # manifest at a ref, read through the repository contents API


@dataclass(frozen=True)
class Locator:
    """Where to read a manifest from: a local path, a remote URL, or a ref."""

    value: str
    kind: LocatorKind = LocatorKind.PATH

    @classmethod
    def parse(cls, value: str) -> "Locator":
        if value.startswith(("http://", "https://")):
            return cls(value, LocatorKind.URL)
        if value.startswith("git:"):
            return cls(value[len("git:"):], LocatorKind.GIT_REF)
        return cls(value, LocatorKind.PATH)

    @property
    def remote(self) -> bool:
        return self.kind in (LocatorKind.URL, LocatorKind.API_REF)

    def __str__(self) -> str:
        if self.kind in (LocatorKind.GIT_REF, LocatorKind.API_REF):
            return f"{self.kind.value}:{self.value}"
        return self.value


def compare_refs(
    old: Locator,
    new: Locator,
    read_manifest: ManifestReader,
) -> ScanResult:
    """Classify the version delta from the manifest at *old* to the one at *new*.

    Both manifests are read concurrently; read errors propagate.
    """
    logger.info("Compare manifests:\n- old: %s\n- new: %s", old, new)
    with ThreadPoolExecutor(max_workers=2) as pool:
        old_future = pool.submit(read_manifest, old)
        new_future = pool.submit(read_manifest, new)
        old_data, new_data = old_future.result(), new_future.result()

    versions = {"old": manifest_version(old_data), "new": manifest_version(new_data)}
    for side, locator in (("old", old), ("new", new)):
        if not versions[side]:
            raise ManifestError(f"Can't find version field in {side} manifest: {locator}")
    logger.info("Detected versions:\n- old: %s\n- new: %s", versions["old"], versions["new"])

    if versions["old"] == versions["new"]:
        logger.info("No change detected.")
        return ScanResult(changed=False)

    return ScanResult(
        changed=True,
        version=versions["new"],
        type=describe_change(versions["old"], versions["new"]),
        previous_version=versions["old"],
    )


def static_locators(local: Locator, remote: Locator, static_checking: Optional[str]) -> Tuple[Locator, Locator]:
    """Return ``(old, new)`` for a static check; the local manifest is newer unless ``remoteIsNew``."""
    if static_checking == "remoteIsNew":
        return local, remote
    return remote, local
