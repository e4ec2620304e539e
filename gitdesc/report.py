"""Aggregate statistics records and render them as ranked tables."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence
from typing import IO

import pandas as pd

from gitdesc.models import DIMENSIONS, Dimension, Stats

COLUMNS = ("name", "commits", "additions", "deletions")


def rank_key(s: Stats) -> tuple:
    return (-s.commits, -s.additions, s.name, s.dimension.value)


def rank(records: Iterable[Stats]) -> list[Stats]:
    """Most commits first, then most additions, then by name."""
    return sorted(records, key=rank_key)


class Report:
    """Statistics keyed by ``(dimension, name)``; same-key records are summed."""

    def __init__(self, records: Iterable[Stats] = ()) -> None:
        self._entries: dict[tuple[Dimension, str], Stats] = {}
        for r in records:
            self.add(r)

    def add(self, record: Stats) -> None:
        entry = self._entries.get(record.key)
        if entry is None:
            # own a copy so callers can't mutate report state later
            self._entries[record.key] = record.copy()
        else:
            entry.add(record)

    def merge(self, other: Report) -> None:
        for record in other:
            self.add(record)

    def get(self, dimension: Dimension | str, name: str) -> Stats | None:
        entry = self._entries.get((Dimension(dimension), name))
        return entry.copy() if entry is not None else None

    def dimensions(self) -> list[Dimension]:
        present = {d for d, _ in self._entries}
        return [d for d in DIMENSIONS if d in present]

    def ranked(self, dimension: Dimension | str) -> list[Stats]:
        dim = Dimension(dimension)
        return [s.copy() for s in rank(s for (d, _), s in self._entries.items() if d == dim)]

    def __iter__(self) -> Iterator[Stats]:
        return (s.copy() for s in self._entries.values())

    def __len__(self) -> int:
        return len(self._entries)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Report):
            return NotImplemented
        return self._entries == other._entries

    def render(self, out: IO[str], dimensions: Sequence[Dimension | str] = DIMENSIONS) -> None:
        """Write one titled table per dimension, rows in ranking order."""
        first = True
        for dimension in dimensions:
            rows = self.ranked(dimension)
            if not rows:
                continue
            if not first:
                out.write("\n")
            first = False
            out.write(Dimension(dimension).value.upper() + "\n")
            _write_table(out, [[s.name, str(s.commits), str(s.additions), str(s.deletions)] for s in rows])

    def to_records(self, dimensions: Sequence[Dimension | str] = DIMENSIONS) -> dict[str, list[dict]]:
        return {
            Dimension(d).value: [
                {"name": s.name, "commits": s.commits, "additions": s.additions, "deletions": s.deletions}
                for s in self.ranked(d)
            ]
            for d in dimensions
        }

    def to_frame(self, dimensions: Sequence[Dimension | str] = DIMENSIONS) -> pd.DataFrame:
        rows = [
            {"dimension": dim, **row}
            for dim, group in self.to_records(dimensions).items()
            for row in group
        ]
        return pd.DataFrame(rows, columns=["dimension", *COLUMNS])


def _write_table(out: IO[str], rows: list[list[str]]) -> None:
    table = [list(COLUMNS), *rows]
    widths = [max(len(row[i]) for row in table) for i in range(len(COLUMNS))]
    for row in table:
        line = " | ".join(cell.ljust(widths[i]) for i, cell in enumerate(row))
        out.write(line.rstrip() + "\n")
