"""Filter options and the predicates built from them."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import datetime, timezone

from gitdesc.errors import ConfigError
from gitdesc.filters import (
    LimitPredicate,
    ValidityPredicate,
    compose,
    compose_limits,
    limit_after,
    limit_before,
    limit_count,
    match_author,
    match_email,
    match_file,
    match_message,
    negate,
)

DATE_FORMAT = "%Y-%m-%d"


def parse_date(text: str) -> datetime:
    """Parse ``YYYY-MM-DD`` (midnight UTC) or an ISO-8601 timestamp.

    Values without an offset are taken as UTC.
    """
    value = (text or "").strip()
    if value[-1:] in ("Z", "z"):
        value = value[:-1] + "+00:00"
    try:
        parsed = datetime.strptime(value, DATE_FORMAT)
    except ValueError:
        try:
            parsed = datetime.fromisoformat(value)
        except ValueError:
            raise ConfigError(f"invalid date {text!r} (expected YYYY-MM-DD or ISO-8601)")
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


@dataclass(frozen=True)
class FilterOptions:
    """Commit selection settings. Empty/zero fields add no constraint."""

    author: str = ""
    email: str = ""
    file: str = ""
    message: str = ""
    exclude_authors: tuple[str, ...] = field(default_factory=tuple)
    before: datetime | None = None
    after: datetime | None = None
    max_count: int = 0
    strict_file_match: bool = False

    def validate(self) -> None:
        """Raise ConfigError for values that would fail mid-traversal."""
        if self.max_count < 0:
            raise ConfigError(f"commit count must not be negative: {self.max_count}")
        build_validity_filter(self)


def build_validity_filter(options: FilterOptions) -> ValidityPredicate:
    filters: list[ValidityPredicate] = []
    if options.author:
        filters.append(match_author(options.author))
    if options.email:
        filters.append(match_email(options.email))
    if options.message:
        filters.append(match_message(options.message))
    for name in options.exclude_authors:
        filters.append(negate(match_author(f"(?i)^{re.escape(name)}$")))
    # reads the diff, so it runs after the cheap field checks
    if options.file:
        filters.append(match_file(options.file, strict=options.strict_file_match))
    return compose(*filters)


def build_limit_filter(options: FilterOptions) -> LimitPredicate:
    """Build a fresh limit predicate; call once per traversal."""
    filters: list[LimitPredicate] = []
    if options.max_count:
        filters.append(limit_count(options.max_count))
    if options.before is not None:
        filters.append(limit_before(options.before))
    if options.after is not None:
        filters.append(limit_after(options.after))
    return compose_limits(*filters)
