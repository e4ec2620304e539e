from __future__ import annotations

import json
from pathlib import Path

import pandas as pd

from gitdesc.cli import build_parser, main, options_from_args


def test_default_output_renders_all_dimensions(sample_repo, capsys) -> None:
    assert main(["--repo", sample_repo.working_dir]) == 0
    out = capsys.readouterr().out
    assert out.index("AUTHOR") < out.index("EMAIL") < out.index("FILE")
    assert "a    | 3       | 5         | 2" in out


def test_filter_limits_dimensions(sample_repo, capsys) -> None:
    assert main(["--repo", sample_repo.working_dir, "--filter", "file", "-n", "1"]) == 0
    out = capsys.readouterr().out
    assert out.startswith("FILE\n")
    assert "AUTHOR" not in out
    assert "dir/test | 1       | 0         | 1" in out


def test_json_output(sample_repo, capsys) -> None:
    assert main(["--repo", sample_repo.working_dir, "--json", "--author", "^a$"]) == 0
    doc = json.loads(capsys.readouterr().out)
    assert doc["author"] == [{"name": "a", "commits": 3, "additions": 5, "deletions": 2}]


def test_csv_output(sample_repo, tmp_path: Path) -> None:
    target = tmp_path / "report.csv"
    assert main(["--repo", sample_repo.working_dir, "--csv", str(target), "--filter", "author"]) == 0
    frame = pd.read_csv(target)
    assert frame.to_dict("records") == [
        {"dimension": "author", "name": "a", "commits": 3, "additions": 5, "deletions": 2},
        {"dimension": "author", "name": "b", "commits": 1, "additions": 0, "deletions": 1},
    ]


def test_bad_pattern_exits_before_walking(sample_repo, capsys) -> None:
    assert main(["--repo", sample_repo.working_dir, "--author", "("]) == 2
    assert capsys.readouterr().out == ""


def test_missing_repository_exits_nonzero(tmp_path: Path, capsys) -> None:
    assert main(["--repo", str(tmp_path / "nowhere")]) == 1
    assert capsys.readouterr().out == ""


def test_parser_dates() -> None:
    args = build_parser().parse_args(["--after", "2024-01-02", "--before", "2024-02-01"])
    assert args.after.isoformat() == "2024-01-02T00:00:00+00:00"
    assert args.before.isoformat() == "2024-02-01T00:00:00+00:00"


def test_strict_file_match_flag_reaches_options() -> None:
    args = build_parser().parse_args(["--file", r"\.py$", "--strict-file-match"])
    opts = options_from_args(args)
    assert opts.strict_file_match is True
    assert options_from_args(build_parser().parse_args([])).strict_file_match is False
