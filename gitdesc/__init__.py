"""Commit statistics grouped by author, email and file."""

# Lazy re-exports: `import gitdesc` stays cheap; GitPython and pandas are only
# loaded once an attribute backed by them is first used.
from importlib import import_module as _im


def __getattr__(name: str):  # noqa: N807
    _map = {
        "FilterOptions": ("config", "FilterOptions"),
        "build_validity_filter": ("config", "build_validity_filter"),
        "build_limit_filter": ("config", "build_limit_filter"),
        "Report": ("report", "Report"),
        "Stats": ("models", "Stats"),
        "Dimension": ("models", "Dimension"),
        "open_repo": ("repo", "open_repo"),
        "iter_commits": ("repo", "iter_commits"),
        "run_report": ("pipeline", "run_report"),
        "report_for_repo": ("pipeline", "report_for_repo"),
    }
    if name in _map:
        mod_name, attr = _map[name]
        mod = _im(f"gitdesc.{mod_name}")
        return getattr(mod, attr)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")

__all__ = [
    "FilterOptions",
    "build_validity_filter",
    "build_limit_filter",
    "Report",
    "Stats",
    "Dimension",
    "open_repo",
    "iter_commits",
    "run_report",
    "report_for_repo",
]
