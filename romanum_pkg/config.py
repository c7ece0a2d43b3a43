"""Centralized configuration for Romanum.

This module defines:
- Input validation limits
- Default evaluator strategy and history size
- Logging defaults
- Character classes and the Roman numeral grammar

Configuration can be overridden via:
- CLI flags (see cli.py)
- Environment variables (prefixed with ROMANUM_)
"""

import os
import re

# Version is defined in pyproject.toml [project] section
try:
    import importlib.metadata

    VERSION = importlib.metadata.version("romanum")
except Exception:
    # Fallback if package not installed
    VERSION = "1.0.0"

# Input validation limits
MAX_INPUT_LENGTH = int(os.getenv("ROMANUM_MAX_INPUT_LENGTH", "1000"))  # characters

# Evaluation
DEFAULT_EVALUATOR = os.getenv(
    "ROMANUM_DEFAULT_EVALUATOR", "precedence"
).lower()  # "precedence", "binary"

# Calculation history kept by the REPL (0 means unbounded)
HISTORY_LIMIT = int(os.getenv("ROMANUM_HISTORY_LIMIT", "100"))

LOG_LEVEL = os.getenv("ROMANUM_LOG_LEVEL", "WARNING").upper()

# Encoder range: vinculum numerals stop below C̄C̄C̄C̄
MAX_ROMAN_VALUE = 399_999

ROMAN_CHARS = frozenset("IVXLCDM")
OPERATOR_CHARS = frozenset("+-*/^")
NUMBER_CHARS = frozenset("0123456789.")

ROMAN_PATTERN = re.compile(
    r"^M{0,4}(CM|CD|D?C{0,3})(XC|XL|L?X{0,3})(IX|IV|V?I{0,3})$", re.IGNORECASE
)
WHITESPACE_RE = re.compile(r"\s+")
NUMBER_RE = re.compile(r"^-?(\d+(\.\d*)?|\.\d+)$")

ROMAN_VALUES = {
    "I": 1,
    "V": 5,
    "X": 10,
    "L": 50,
    "C": 100,
    "D": 500,
    "M": 1000,
}
