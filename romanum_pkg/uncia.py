"""Base-12 ("uncia") fraction notation for non-integer results.

Fractional parts are rounded to the nearest twelfth and written with the
dot glyphs of Roman coinage; six twelfths and above start with "S" (semis).
"""

from __future__ import annotations

import math

from .numerals import decode_roman, to_roman
from .types import InvalidNumeralGrammar, NumeralTooLarge

FRACTION_NAMES = {
    0: "",
    1: "uncia",
    2: "sextans",
    3: "quadrans",
    4: "triens",
    5: "quincunx",
    6: "semis",
    7: "septunx",
    8: "bes",
    9: "dodrans",
    10: "dextans",
    11: "deunx",
}

FRACTION_DOTS = {
    0: "",
    1: "·",
    2: ":",
    3: "∴",
    4: "∷",
    5: "⁙",
}
SEMIS = "S"
FRACTION_GLYPHS = {
    twelfths: (SEMIS + FRACTION_DOTS[twelfths - 6]) if twelfths >= 6 else FRACTION_DOTS[twelfths]
    for twelfths in range(12)
}
_GLYPH_TWELFTHS = {glyph: twelfths for twelfths, glyph in FRACTION_GLYPHS.items() if glyph}


def _round_half_up(value: float) -> int:
    # Math.round semantics: halves go toward +infinity
    return math.floor(value + 0.5)


def _split_twelfths(decimal: float) -> tuple[int, int]:
    whole = math.floor(decimal)
    twelfths = _round_half_up((decimal - whole) * 12)
    if twelfths == 12:
        return whole + 1, 0
    return whole, twelfths


def to_roman_fraction(decimal: float) -> str:
    """Convert a decimal to a Roman numeral with an uncia fraction.

    Args:
        decimal: Value to render, e.g. 1.5 or -1/12

    Returns:
        Numeral plus fraction glyph, e.g. "IS" or "-·"; "" when the value
        rounds to zero or is None or NaN

    Raises:
        NumeralTooLarge: For infinite values, like format_number
    """
    if decimal is None or math.isnan(decimal):
        return ""
    if math.isinf(decimal):
        raise NumeralTooLarge(f"Numerus nimis magnus (Number too large): {decimal}")
    if decimal < 0:
        return "-" + to_roman_fraction(-decimal)

    whole, twelfths = _split_twelfths(decimal)
    if whole == 0 and twelfths == 0:
        return ""
    return to_roman(whole) + FRACTION_GLYPHS[twelfths]


def round_to_twelfths(decimal: float) -> float:
    return _round_half_up(decimal * 12) / 12


def has_fraction(decimal: float) -> bool:
    """Check if a value keeps a fractional part after rounding to twelfths."""
    rounded = round_to_twelfths(decimal)
    return rounded != math.floor(rounded)


def get_fraction_name(decimal: float) -> str:
    """Get the Latin name of the rounded fractional part (e.g. 1.25 -> "quadrans")."""
    _, twelfths = _split_twelfths(decimal)
    return FRACTION_NAMES[twelfths]


def from_roman_fraction(text: str) -> float:
    """Parse a numeral written by to_roman_fraction back into a decimal.

    Only base-range whole parts are accepted, since they go through the
    validator.

    Raises:
        InvalidNumeralGrammar: If the text is not a numeral with an optional
            fraction glyph
    """
    body = text.strip()
    sign = 1
    if body.startswith("-"):
        sign = -1
        body = body[1:]
    if not body:
        raise InvalidNumeralGrammar(f"Invalid Roman fraction: {text!r}")

    twelfths = 0
    # Longest glyph first so "S·" wins over "·"
    for glyph in sorted(_GLYPH_TWELFTHS, key=len, reverse=True):
        if body.upper().endswith(glyph):
            twelfths = _GLYPH_TWELFTHS[glyph]
            body = body[: -len(glyph)]
            break

    whole = decode_roman(body) if body else 0
    return sign * (whole + twelfths / 12)
