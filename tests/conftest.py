from __future__ import annotations

import dataclasses
import datetime as dt
from collections.abc import Callable
from pathlib import Path

import pytest
from git import Actor, Repo

from gitdesc.errors import ExtractionError
from gitdesc.models import FileChange

T0 = dt.datetime(2025, 6, 1, 12, 0, tzinfo=dt.timezone.utc)


@dataclasses.dataclass
class FakeCommit:
    sha: str
    timestamp: dt.datetime = T0
    author_name: str = "a"
    author_email: str = "a@example.com"
    committer_name: str = ""
    committer_email: str = ""
    message: str = ""
    files: list[FileChange] = dataclasses.field(default_factory=list)
    broken: bool = False

    def stats(self) -> list[FileChange]:
        if self.broken:
            raise ExtractionError(f"cannot compute stats for {self.sha}", sha=self.sha)
        return list(self.files)


@pytest.fixture
def make_commit() -> Callable[..., FakeCommit]:
    def make(sha: str = "c0", files: list[tuple[str, int, int]] | None = None, **kw: object) -> FakeCommit:
        changes = [FileChange(p, a, d) for p, a, d in (files or [])]
        return FakeCommit(sha=sha, files=changes, **kw)  # type: ignore[arg-type]

    return make


@pytest.fixture
def history(make_commit: Callable[..., FakeCommit]) -> list[FakeCommit]:
    """Five commits, newest first, one day apart, each touching one file."""
    return [
        make_commit(
            sha=f"c{i}",
            timestamp=T0 - dt.timedelta(days=i),
            author_name="alice" if i % 2 == 0 else "bob",
            author_email="alice@example.com" if i % 2 == 0 else "bob@example.com",
            message=f"change {i}",
            files=[(f"f{i}.txt", i + 1, i)],
        )
        for i in range(5)
    ]


class Pulls:
    """Iterable wrapper that counts how many commits were pulled."""

    def __init__(self, commits: list[FakeCommit]) -> None:
        self.commits = commits
        self.pulled = 0

    def __iter__(self):
        for c in self.commits:
            self.pulled += 1
            yield c


def commit_files(repo: Repo, author: str, files: list[tuple[str, str]], message: str) -> None:
    """Write (path, content) pairs and commit them; empty content deletes the path."""
    root = Path(repo.working_dir)
    for path, content in files:
        if content:
            target = root / path
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(content)
            repo.index.add([path])
        else:
            repo.index.remove([path], working_tree=True)
    actor = Actor(author, f"{author}@example.com")
    repo.index.commit(message, author=actor, committer=actor)


@pytest.fixture
def sample_repo(tmp_path: Path) -> Repo:
    """Four commits: a adds three files, a edits `test` twice, b deletes `dir/test`."""
    repo = Repo.init(tmp_path / "repo")
    commit_files(
        repo,
        "a",
        [("test", "something"), ("dir/test", "something"), ("dir/dir/test", "something")],
        "commit 0",
    )
    commit_files(repo, "a", [("test", "otherthing")], "commit 1")
    commit_files(repo, "a", [("test", "other")], "commit 2")
    commit_files(repo, "b", [("dir/test", "")], "commit 3")
    return repo


@pytest.fixture
def counted() -> type[Pulls]:
    return Pulls
