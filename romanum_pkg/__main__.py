"""Main entry point for running romanum_pkg as a module.

This allows running Romanum with:
    python -m romanum_pkg
    python -m romanum_pkg -e "XIV+XII"
    python -m romanum_pkg --keys "XIV+V"

This is equivalent to running:
    python -m romanum_pkg.cli
    python romanum.py
"""

from __future__ import annotations

import sys

from .cli import main_entry

if __name__ == "__main__":
    sys.exit(main_entry())
