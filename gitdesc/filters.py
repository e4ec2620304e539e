"""Commit predicates and the traversal filter.

Two predicate roles share a call shape but not a contract:

- **validity** predicates are stateless inclusion tests; ``True`` means the
  commit counts towards the report.
- **limit** predicates decide where the history walk ends; ``True`` means
  "stop here", and the commit that triggered it is excluded.  They are
  evaluated exactly once per commit, newest first, and may keep state.

Each role has its own wrapper class so one cannot be passed where the other
is expected.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Iterable, Iterator
from datetime import datetime
from typing import Any

from gitdesc.errors import ConfigError, ExtractionError, InvalidPattern

logger = logging.getLogger(__name__)


class ValidityPredicate:
    def __init__(self, fn: Callable[[Any], bool], name: str = "") -> None:
        self._fn = fn
        self.name = name or getattr(fn, "__name__", "predicate")

    def __call__(self, commit: Any) -> bool:
        return bool(self._fn(commit))

    def __repr__(self) -> str:
        return f"ValidityPredicate({self.name})"


class LimitPredicate:
    def __init__(self, fn: Callable[[Any], bool], name: str = "") -> None:
        self._fn = fn
        self.name = name or getattr(fn, "__name__", "limit")

    def __call__(self, commit: Any) -> bool:
        return bool(self._fn(commit))

    def __repr__(self) -> str:
        return f"LimitPredicate({self.name})"


def _require(role: type, predicates: Iterable[Any]) -> list[Any]:
    checked = list(predicates)
    for p in checked:
        if not isinstance(p, role):
            raise TypeError(f"expected {role.__name__}, got {p!r}")
    return checked


# --- validity predicates ---------------------------------------------------


def always() -> ValidityPredicate:
    return ValidityPredicate(lambda c: True, "always")


def compose(*predicates: ValidityPredicate) -> ValidityPredicate:
    """AND the predicates left to right, stopping at the first rejection."""
    preds = _require(ValidityPredicate, predicates)
    if not preds:
        return always()

    def _all(commit: Any) -> bool:
        for p in preds:
            if not p(commit):
                return False
        return True

    return ValidityPredicate(_all, " and ".join(p.name for p in preds))


def negate(predicate: ValidityPredicate) -> ValidityPredicate:
    (p,) = _require(ValidityPredicate, [predicate])
    return ValidityPredicate(lambda c: not p(c), f"not {p.name}")


def _compile(pattern: str) -> re.Pattern[str]:
    try:
        return re.compile(pattern)
    except re.error as e:
        raise InvalidPattern(pattern, str(e))


def match_regex(selector: Callable[[Any], str], pattern: str, name: str = "") -> ValidityPredicate:
    """True when *pattern* is found anywhere in ``selector(commit)``."""
    rx = _compile(pattern)
    return ValidityPredicate(lambda c: rx.search(selector(c) or "") is not None, name or f"/{pattern}/")


def match_author(pattern: str) -> ValidityPredicate:
    return match_regex(lambda c: c.author_name, pattern, f"author~/{pattern}/")


def match_email(pattern: str) -> ValidityPredicate:
    return match_regex(lambda c: c.author_email, pattern, f"email~/{pattern}/")


def match_message(pattern: str) -> ValidityPredicate:
    return match_regex(lambda c: c.message, pattern, f"message~/{pattern}/")


def match_file(pattern: str, strict: bool = False) -> ValidityPredicate:
    """True when any file touched by the commit has a matching path.

    Reading the commit's file list can fail.  By default the commit is then
    treated as not matching; with *strict* the ExtractionError propagates
    and aborts the run.
    """
    rx = _compile(pattern)

    def _any_file(commit: Any) -> bool:
        try:
            files = commit.stats()
        except ExtractionError as e:
            if strict:
                raise
            logger.debug("file filter skipped %r: %s", commit, e)
            return False
        return any(rx.search(f.path) for f in files)

    return ValidityPredicate(_any_file, f"file~/{pattern}/")


# --- limit predicates ------------------------------------------------------


def never() -> LimitPredicate:
    return LimitPredicate(lambda c: False, "never")


def limit_count(n: int) -> LimitPredicate:
    """Stop after the first *n* commits. Every call returns a fresh counter."""
    if n < 0:
        raise ConfigError(f"commit count must not be negative: {n}")
    seen = 0

    def _count(commit: Any) -> bool:
        nonlocal seen
        if seen >= n:
            return True
        seen += 1
        return False

    return LimitPredicate(_count, f"count<={n}")


def limit_before(ts: datetime) -> LimitPredicate:
    """Stop at the first commit strictly older than *ts*."""
    return LimitPredicate(lambda c: c.timestamp < ts, f"before {ts.isoformat()}")


def limit_after(ts: datetime) -> LimitPredicate:
    """Stop at the first commit not newer than *ts*; a commit at *ts* stops."""
    return LimitPredicate(lambda c: not c.timestamp > ts, f"after {ts.isoformat()}")


def compose_limits(*limits: LimitPredicate) -> LimitPredicate:
    """Stop only once every limit asks to stop.

    No short-circuit: each limit sees every commit so counters stay exact.
    """
    lims = _require(LimitPredicate, limits)
    if not lims:
        return never()

    def _all_stop(commit: Any) -> bool:
        decisions = [lim(commit) for lim in lims]
        return all(decisions)

    return LimitPredicate(_all_stop, " and ".join(lim.name for lim in lims))


# --- traversal -------------------------------------------------------------


def traverse(
    commits: Iterable[Any],
    validity: ValidityPredicate | None = None,
    limit: LimitPredicate | None = None,
) -> Iterator[Any]:
    """Yield the commits of *commits* that pass *validity*, until *limit* fires.

    The commit that fires the limit is dropped and nothing further is pulled
    from *commits*.
    """
    if validity is not None:
        _require(ValidityPredicate, [validity])
    if limit is not None:
        _require(LimitPredicate, [limit])

    pulled = 0
    for commit in commits:
        pulled += 1
        if limit is not None and limit(commit):
            logger.debug("limit %s reached at %r after %d commit(s)", limit.name, commit, pulled)
            return
        if validity is None or validity(commit):
            yield commit
    logger.debug("history exhausted after %d commit(s)", pulled)
