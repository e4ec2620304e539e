"""Shared dataclasses for commit changes and aggregated statistics."""

from __future__ import annotations

import json
from dataclasses import dataclass
from enum import Enum
from typing import Any


class Dimension(str, Enum):
    AUTHOR = "author"
    EMAIL = "email"
    FILE = "file"


# Render order when the caller does not ask for specific groups.
DIMENSIONS: tuple[Dimension, ...] = (Dimension.AUTHOR, Dimension.EMAIL, Dimension.FILE)


def to_json(data: Any, indent: int = 2) -> str:
    """Serialise a report (via its ``to_records``) or plain JSON data."""
    if hasattr(data, "to_records"):
        data = data.to_records()
    return json.dumps(data, indent=indent)


@dataclass(frozen=True)
class FileChange:
    path: str
    additions: int
    deletions: int


@dataclass
class Stats:
    name: str
    dimension: Dimension
    commits: int = 1
    additions: int = 0
    deletions: int = 0

    @property
    def key(self) -> tuple[Dimension, str]:
        return (self.dimension, self.name)

    @property
    def line_changes(self) -> int:
        return self.additions + self.deletions

    def add(self, other: Stats) -> None:
        """Sum *other* into this record. Both must share the same key."""
        if other.key != self.key:
            raise ValueError(f"cannot merge {other.key!r} into {self.key!r}")
        self.commits += other.commits
        self.additions += other.additions
        self.deletions += other.deletions

    def copy(self) -> Stats:
        return Stats(self.name, self.dimension, self.commits, self.additions, self.deletions)
