"""Run gitdesc from a source checkout: ``python main.py [options]``.

See ``gitdesc.cli`` for the available options.
"""

from __future__ import annotations

from gitdesc.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
