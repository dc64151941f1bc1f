"""Data models for diff parsing."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class LineType(str, Enum):
    ADDED = "added"
    REMOVED = "removed"


@dataclass(frozen=True, slots=True)
class DiffLine:
    """A single added or removed line from a unified diff."""

    file: str
    content: str  # without the leading '+' / '-'
    line_type: LineType
    raw: str

    @property
    def sign(self) -> str:
        return self.raw[:1]
