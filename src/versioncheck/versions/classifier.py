"""Classify the delta between two semantic versions."""

from __future__ import annotations

from typing import Literal, Optional

import semver

DeltaKind = Literal["major", "minor", "patch", "prerelease", "build"]

# Highest priority first
DELTA_KINDS: tuple[DeltaKind, ...] = ("major", "minor", "patch", "prerelease", "build")


def _parse(version: Optional[str]) -> Optional[semver.Version]:
    if not version:
        return None
    try:
        return semver.Version.parse(version)
    except (TypeError, ValueError):
        return None


def is_valid(version: Optional[str]) -> bool:
    """Return True if *version* follows the semver grammar."""
    return _parse(version) is not None


def _compare_build(a: Optional[str], b: Optional[str]) -> int:
    """Order build metadata; a version with build metadata ranks above one without."""
    if a == b:
        return 0
    if not a:
        return -1
    if not b:
        return 1
    left, right = a.split("."), b.split(".")
    for x, y in zip(left, right):
        if x == y:
            continue
        if x.isdigit() and y.isdigit():
            if int(x) != int(y):
                return -1 if int(x) < int(y) else 1
            continue
        if x.isdigit():
            return -1
        if y.isdigit():
            return 1
        return -1 if x < y else 1
    return (len(left) > len(right)) - (len(left) < len(right))


def classify(older: Optional[str], newer: Optional[str]) -> Optional[DeltaKind]:
    """Return the kind of change from *older* to *newer*.

    None when either side is not a valid version, when they are equal, or
    when *newer* does not rank above *older*. Callers that need to report a
    downgrade use :func:`describe_change`.
    """
    old, new = _parse(older), _parse(newer)
    if old is None or new is None:
        return None

    order = old.compare(new) or _compare_build(old.build, new.build)
    if order >= 0:
        return None

    for kind in DELTA_KINDS:
        if getattr(old, kind) != getattr(new, kind):
            return kind
    return None


def describe_change(older: Optional[str], newer: Optional[str]) -> Optional[str]:
    """Return the forward kind, ``"downgrade > <kind>"`` for a backward move, or None."""
    kind = classify(older, newer)
    if kind is not None:
        return kind
    reverse = classify(newer, older)
    return f"downgrade > {reverse}" if reverse else None
