"""Run traversal/extraction and aggregation concurrently.

A producer thread walks history, filters it and extracts statistics records;
the calling thread consumes the records from a bounded queue and merges them
into a :class:`~gitdesc.report.Report`.  The first producer error aborts the
run and is re-raised to the caller; the partial report is dropped.
"""

from __future__ import annotations

import logging
import queue
import threading
from collections.abc import Iterable, Iterator
from typing import Any

from git import Repo

from gitdesc.config import FilterOptions, build_limit_filter, build_validity_filter
from gitdesc.errors import ExtractionError, GitDescError
from gitdesc.filters import LimitPredicate, ValidityPredicate, traverse
from gitdesc.repo import head_commit, iter_commits
from gitdesc.report import Report
from gitdesc.stats import to_stats

logger = logging.getLogger(__name__)

_DONE = object()
_POLL_S = 0.1


class _Failure:
    def __init__(self, error: Exception) -> None:
        self.error = error


def _surface(error: Exception) -> GitDescError:
    if isinstance(error, GitDescError):
        return error
    wrapped = ExtractionError(f"history walk failed: {error}")
    wrapped.__cause__ = error
    return wrapped


def run_report(
    commits: Iterable[Any],
    validity: ValidityPredicate | None = None,
    limit: LimitPredicate | None = None,
    *,
    maxsize: int = 1024,
) -> Report:
    """Aggregate the statistics of every commit selected from *commits*.

    *commits* must be newest-first.  *limit* is consumed by this call and
    must not be reused for another traversal.
    """
    channel: queue.Queue[Any] = queue.Queue(maxsize=maxsize)
    stop = threading.Event()

    def send(item: Any) -> bool:
        while not stop.is_set():
            try:
                channel.put(item, timeout=_POLL_S)
                return True
            except queue.Full:
                continue
        return False

    def pull() -> Iterator[Any]:
        # checked per pulled commit, rejected ones included
        for commit in commits:
            if stop.is_set():
                logger.debug("consumer gone, stopping history walk")
                return
            yield commit

    def produce() -> None:
        emitted = 0
        try:
            for commit in traverse(pull(), validity, limit):
                for record in to_stats(commit):
                    if not send(record):
                        return
                emitted += 1
        except Exception as e:
            logger.debug("producer failed after %d commit(s): %s", emitted, e)
            send(_Failure(e))
            return
        logger.debug("producer finished: %d commit(s) selected", emitted)
        send(_DONE)

    producer = threading.Thread(target=produce, name="gitdesc-producer", daemon=True)
    producer.start()

    report = Report()
    try:
        while True:
            try:
                item = channel.get(timeout=_POLL_S)
            except queue.Empty:
                if not producer.is_alive() and channel.empty():
                    raise ExtractionError("history walk stopped without finishing")
                continue
            if item is _DONE:
                break
            if isinstance(item, _Failure):
                raise _surface(item.error)
            report.add(item)
    finally:
        stop.set()
        producer.join()
    return report


def report_for_repo(repo: Repo, options: FilterOptions, rev: str = "HEAD", *, maxsize: int = 1024) -> Report:
    """Validate *options*, walk *rev* of *repo* and return the aggregated report."""
    options.validate()
    head_commit(repo, rev)
    validity = build_validity_filter(options)
    limit = build_limit_filter(options)
    logger.debug("validity=%s limit=%s", validity.name, limit.name)
    return run_report(iter_commits(repo, rev), validity, limit, maxsize=maxsize)
