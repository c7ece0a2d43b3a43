"""Roman numeral codec.

This module handles:
- Integer to numeral encoding, including vinculum numerals up to 399,999
- Raw numeral decoding (weighted sum, no grammar check)
- Validated decoding for user input
- Sign-aware display formatting
"""

from __future__ import annotations

import math
import unicodedata
from typing import Any

from .config import MAX_ROMAN_VALUE, ROMAN_VALUES
from .logging_config import get_logger
from .types import InvalidNumeralGrammar, NumeralTooLarge
from .validator import is_valid_roman_numeral

logger = get_logger("numerals")

VINCULUM = "\u0304"  # combining macron, multiplies the preceding letter by 1000

ROMAN_NUMERAL_MAP: tuple[tuple[int, str], ...] = (
    (100000, "C" + VINCULUM),
    (90000, "X" + VINCULUM + "C" + VINCULUM),
    (50000, "L" + VINCULUM),
    (40000, "X" + VINCULUM + "L" + VINCULUM),
    (10000, "X" + VINCULUM),
    (9000, "I" + VINCULUM + "X" + VINCULUM),
    (5000, "V" + VINCULUM),
    (4000, "I" + VINCULUM + "V" + VINCULUM),
    (1000, "M"),
    (900, "CM"),
    (500, "D"),
    (400, "CD"),
    (100, "C"),
    (90, "XC"),
    (50, "L"),
    (40, "XL"),
    (10, "X"),
    (9, "IX"),
    (5, "V"),
    (4, "IV"),
    (1, "I"),
)


def to_roman(num: int) -> str:
    """Convert an integer to a Roman numeral.

    Magnitudes of 4000 and above are written with vinculum (overlined)
    letters, each worth 1000 times the plain letter.

    Args:
        num: Integer to convert

    Returns:
        Roman numeral string, or "" for zero and negative numbers

    Raises:
        NumeralTooLarge: If num is 400,000 or more
    """
    if num <= 0:
        return ""
    if num > MAX_ROMAN_VALUE:
        raise NumeralTooLarge(
            f"Numerus nimis magnus (Number too large): {num}"
        )

    remaining = int(num)
    parts = []
    for value, numeral in ROMAN_NUMERAL_MAP:
        while remaining >= value:
            parts.append(numeral)
            remaining -= value
    return "".join(parts)


def _glyph_values(roman: str) -> list[int]:
    """Split a numeral into per-glyph values, folding vinculum marks into their letter."""
    values: list[int] = []
    for char in unicodedata.normalize("NFD", roman.upper()):
        if char == VINCULUM:
            if values:
                values[-1] *= 1000
            continue
        values.append(ROMAN_VALUES.get(char, 0))
    return values


def from_roman(roman: str | None) -> int:
    """Convert a Roman numeral to an integer by a right-to-left weighted sum.

    The numeral is not validated: callers that need a correct value must pass
    a numeral already accepted by the validator (see roman_to_number).
    Unknown characters count as zero.
    """
    if not roman:
        return 0

    result = 0
    prev_value = 0
    for value in reversed(_glyph_values(roman)):
        if value < prev_value:
            result -= value
        else:
            result += value
        prev_value = value
    return result


def roman_to_number(roman: str | None) -> int | None:
    """Convert a validated Roman numeral to an integer.

    Args:
        roman: Numeral in the base range (I to MMMMCMXCIX), any case

    Returns:
        Integer value, or None if the numeral is empty or malformed
    """
    if not roman or not is_valid_roman_numeral(roman):
        return None

    upper = roman.upper()
    result = 0
    i = 0
    while i < len(upper):
        current = ROMAN_VALUES[upper[i]]
        following = ROMAN_VALUES[upper[i + 1]] if i + 1 < len(upper) else 0
        if current < following:
            result += following - current
            i += 2
        else:
            result += current
            i += 1
    return result


def decode_roman(roman: str) -> int:
    """Like roman_to_number, but raises InvalidNumeralGrammar instead of returning None."""
    value = roman_to_number(roman)
    if value is None:
        logger.debug("Rejected numeral %r", roman)
        raise InvalidNumeralGrammar(f"Invalid Roman numeral: {roman!r}")
    return value


def format_number(num: Any) -> str:
    """Format a number for display as a signed Roman numeral.

    The fractional part is dropped by flooring, so -1.5 renders as "-II".
    None and NaN render as "".
    """
    if num is None:
        return ""
    try:
        num = float(num)
    except (TypeError, ValueError):
        return ""
    if math.isnan(num):
        return ""
    if math.isinf(num):
        raise NumeralTooLarge(f"Numerus nimis magnus (Number too large): {num}")

    sign = "-" if num < 0 else ""
    return sign + to_roman(abs(math.floor(num)))
