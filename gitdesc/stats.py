"""Turn commits into dimension-tagged statistics records."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from typing import Any

from gitdesc.models import Dimension, Stats


def resolved_name(commit: Any) -> str:
    """Committer name when set, else author name."""
    return commit.committer_name or commit.author_name or ""


def resolved_email(commit: Any) -> str:
    """Committer email when set, else author email."""
    return commit.committer_email or commit.author_email or ""


def to_stats(commit: Any) -> list[Stats]:
    """Return one ``file`` record per changed path plus ``author``/``email`` totals.

    The identity records are only emitted for non-empty identities.  An
    ExtractionError from ``commit.stats()`` propagates to the caller.
    """
    if commit is None:
        return []
    files = commit.stats()

    records: list[Stats] = []
    total_add, total_del = 0, 0
    for f in files:
        records.append(Stats(f.path, Dimension.FILE, 1, f.additions, f.deletions))
        total_add += f.additions
        total_del += f.deletions

    if name := resolved_name(commit):
        records.append(Stats(name, Dimension.AUTHOR, 1, total_add, total_del))
    if email := resolved_email(commit):
        records.append(Stats(email, Dimension.EMAIL, 1, total_add, total_del))
    return records


def iter_stats(commits: Iterable[Any]) -> Iterator[Stats]:
    for commit in commits:
        yield from to_stats(commit)
