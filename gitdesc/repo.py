"""Thin helpers for opening a repo and walking its history as commit views."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from datetime import datetime
from pathlib import Path

from git import Commit, GitError, InvalidGitRepositoryError, NoSuchPathError, Repo
from git.exc import ODBError

from gitdesc.errors import ExtractionError, RepositoryAccessError
from gitdesc.models import FileChange

logger = logging.getLogger(__name__)


def open_repo(path: str | Path = ".") -> Repo:
    """Open a git repository at *path* (or any of its parents)."""
    try:
        repo = Repo(str(path), search_parent_directories=True)
    except (InvalidGitRepositoryError, NoSuchPathError):
        raise RepositoryAccessError(f"No git repository found at or above: {path}")
    return repo


def head_commit(repo: Repo, rev: str = "HEAD") -> Commit:
    """Return the commit *rev* points at, usually the current branch tip."""
    try:
        return repo.commit(rev)
    except (GitError, ODBError, ValueError) as e:
        raise RepositoryAccessError(f"Cannot read {rev} in {repo.working_dir or repo.git_dir}: {e}")


class CommitView:
    """Read-only view of a GitPython commit with the fields the report needs."""

    def __init__(self, commit: Commit) -> None:
        self._commit = commit
        self._files: list[FileChange] | None = None

    @property
    def sha(self) -> str:
        return self._commit.hexsha

    @property
    def author_name(self) -> str:
        return self._commit.author.name or ""

    @property
    def author_email(self) -> str:
        return self._commit.author.email or ""

    @property
    def committer_name(self) -> str:
        return self._commit.committer.name or ""

    @property
    def committer_email(self) -> str:
        return self._commit.committer.email or ""

    @property
    def timestamp(self) -> datetime:
        return self._commit.committed_datetime

    @property
    def message(self) -> str:
        return self._commit.message.strip()

    def stats(self) -> list[FileChange]:
        """Per-file added/deleted line counts against the first parent.

        Uses ``commit.stats.files`` which GitPython derives from
        ``git diff-tree --numstat``. Binary files count as 0/0.
        """
        if self._files is None:
            try:
                files = self._commit.stats.files
            except (GitError, ValueError) as e:
                raise ExtractionError(f"cannot compute stats for {self.sha[:8]}: {e}", sha=self.sha)
            self._files = [
                FileChange(path=str(path), additions=int(s.get("insertions", 0)), deletions=int(s.get("deletions", 0)))
                for path, s in files.items()
            ]
        return list(self._files)

    def __repr__(self) -> str:
        return f"CommitView({self.sha[:8]})"


def iter_commits(repo: Repo, rev: str = "HEAD") -> Iterator[CommitView]:
    """Yield commits newest-first from *rev*, following parent links.

    The walk is lazy: callers may stop pulling at any point.
    """
    head = head_commit(repo, rev)
    logger.debug("walking history from %s (%s)", rev, head.hexsha[:8])
    for commit in repo.iter_commits(head.hexsha):
        yield CommitView(commit)
