#!/usr/bin/env python3
"""
Romanum - Roman Numeral Calculator

Main entry point for the Romanum calculator application.
This file serves as a thin wrapper that delegates all functionality
to the romanum_pkg package.

Usage:
    python romanum.py                       # Interactive REPL
    python romanum.py -e "XIV+XII"          # Evaluate expression
    python romanum.py --keys "XIV+V"        # Replay keystrokes
    python romanum.py --help                # Show help
"""

from __future__ import annotations

import sys


def main() -> int:
    """
    Main entry point for Romanum.

    Delegates all functionality to the romanum_pkg.cli module,
    which handles argument parsing, evaluation, and output formatting.

    Returns:
        Exit code (0 for success, non-zero for errors).
    """
    try:
        from romanum_pkg.cli import main_entry

        return main_entry(sys.argv[1:])
    except KeyboardInterrupt:
        print("\nInterrupted by user.")
        return 1
    except ImportError as e:
        print(f"Error: Failed to import romanum_pkg: {e}")
        print("Please ensure the package is installed: pip install -e .")
        return 1


if __name__ == "__main__":
    sys.exit(main())
