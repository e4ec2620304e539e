from __future__ import annotations

import pytest

import gitdesc
from gitdesc.pipeline import run_report
from gitdesc.report import Report


def test_lazy_exports_resolve_to_submodule_objects() -> None:
    assert gitdesc.Report is Report
    assert gitdesc.run_report is run_report
    assert set(gitdesc.__all__) >= {"Report", "run_report", "FilterOptions"}


def test_unknown_attribute_raises() -> None:
    with pytest.raises(AttributeError):
        gitdesc.nothing_here  # noqa: B018
