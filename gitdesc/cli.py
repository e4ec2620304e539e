"""CLI entrypoint for gitdesc.

Usage:
    gitdesc [--repo PATH] [--rev REV] [filters...] [--filter DIM]... [--json] [--csv FILE] [--output FILE]

Filters:
    --author RE              Keep commits whose author name matches RE
    --email RE               Keep commits whose author email matches RE
    --file RE                Keep commits touching a path that matches RE
    --message RE             Keep commits whose message matches RE
    --exclude-author NAME    Drop commits by this author name (repeatable, case-insensitive)
    --before DATE            Stop at the first commit made before DATE
    --after DATE             Stop at the first commit not made after DATE
    -n N                     Only walk the N most recent commits (0 = all)

Output:
    --filter DIM             Only show this dimension: author, email or file (repeatable)
    --json                   Print the report as JSON instead of tables
    --output FILE            Write the JSON report to FILE
    --csv FILE               Write the report to FILE as CSV
"""

from __future__ import annotations

import argparse
import logging
import sys
from datetime import datetime
from pathlib import Path

from gitdesc.config import FilterOptions, parse_date
from gitdesc.errors import ConfigError, GitDescError
from gitdesc.models import DIMENSIONS, Dimension, to_json
from gitdesc.pipeline import report_for_repo
from gitdesc.repo import open_repo
from gitdesc.report import Report

logger = logging.getLogger(__name__)


def _date(text: str) -> datetime:
    try:
        return parse_date(text)
    except ConfigError as e:
        raise argparse.ArgumentTypeError(str(e))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gitdesc",
        description="Summarise who and what changed the most in a git history.",
    )
    parser.add_argument("--repo", default=".", metavar="PATH", help="Path inside the git repo (default: current directory)")
    parser.add_argument("--rev", default="HEAD", metavar="REV", help="Revision to start walking from (default: HEAD)")

    filters = parser.add_argument_group("filters")
    filters.add_argument("--author", default="", metavar="RE", help="commit author regex pattern")
    filters.add_argument("--email", default="", metavar="RE", help="commit email regex pattern")
    filters.add_argument("--file", default="", metavar="RE", help="commit file regex pattern")
    filters.add_argument("--message", "--re", dest="message", default="", metavar="RE", help="commit message regex pattern")
    filters.add_argument(
        "--exclude-author",
        dest="exclude_authors",
        metavar="NAME",
        action="append",
        default=[],
        help="Exclude commits by this author name (repeatable)",
    )
    filters.add_argument("--before", type=_date, default=None, metavar="DATE", help="stop at the first commit made before DATE (YYYY-MM-DD)")
    filters.add_argument("--after", type=_date, default=None, metavar="DATE", help="stop at the first commit not made after DATE (YYYY-MM-DD)")
    filters.add_argument("-n", "--last", dest="max_count", type=int, default=0, metavar="N", help="number of most recent commits to walk (0 = all)")
    filters.add_argument(
        "--strict-file-match",
        action="store_true",
        help="Abort when a commit's files cannot be read for --file instead of skipping the commit",
    )

    output = parser.add_argument_group("output")
    output.add_argument(
        "--filter",
        dest="dimensions",
        action="append",
        choices=[d.value for d in DIMENSIONS],
        default=[],
        help="Only show this dimension (repeatable, shown in the given order)",
    )
    output.add_argument("--json", action="store_true", help="Print the report as JSON")
    output.add_argument("--output", default=None, metavar="FILE", help="Write JSON output to FILE")
    output.add_argument("--csv", default=None, metavar="FILE", help="Write CSV output to FILE")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log traversal details to stderr")
    return parser


def options_from_args(args: argparse.Namespace) -> FilterOptions:
    return FilterOptions(
        author=args.author,
        email=args.email,
        file=args.file,
        message=args.message,
        exclude_authors=tuple(args.exclude_authors),
        before=args.before,
        after=args.after,
        max_count=args.max_count,
        strict_file_match=args.strict_file_match,
    )


def _emit(text: str, output_path: str | None) -> None:
    if output_path:
        Path(output_path).write_text(text + "\n")
        print(f"Output written to: {output_path}", file=sys.stderr)
    else:
        print(text)


def write_report(report: Report, args: argparse.Namespace) -> None:
    dimensions = [Dimension(d) for d in args.dimensions] or list(DIMENSIONS)
    if args.csv:
        report.to_frame(dimensions).to_csv(args.csv, index=False)
        print(f"Output written to: {args.csv}", file=sys.stderr)
    if args.json or args.output:
        _emit(to_json(report.to_records(dimensions)), args.output)
    elif not args.csv:
        report.render(sys.stdout, dimensions)


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        options = options_from_args(args)
        options.validate()
        repo = open_repo(args.repo)
        report = report_for_repo(repo, options, rev=args.rev)
    except GitDescError as e:
        logger.error("%s", e)
        return e.exit_code

    write_report(report, args)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
