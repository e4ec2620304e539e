"""Error taxonomy shared by the CLI and the report pipeline."""

from __future__ import annotations


class GitDescError(Exception):
    """Base class for every error gitdesc reports to the user."""

    exit_code = 1


class ConfigError(GitDescError):
    """Invalid option value, detected before any history is walked."""

    exit_code = 2


class InvalidPattern(ConfigError):
    def __init__(self, pattern: str, reason: str) -> None:
        super().__init__(f"invalid pattern {pattern!r}: {reason}")
        self.pattern = pattern


class RepositoryAccessError(GitDescError):
    """No repository could be opened, or its HEAD cannot be read."""


class ExtractionError(GitDescError):
    """A commit's per-file statistics could not be computed."""

    def __init__(self, message: str, sha: str | None = None) -> None:
        super().__init__(message)
        self.sha = sha
