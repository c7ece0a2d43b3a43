"""Roman numeral grammar checks.

The grammar in config.ROMAN_PATTERN is the single source of truth for
well-formed numerals (I to MMMMCMXCIX). Vinculum numerals produced by the
encoder are outside it.

Next-character suggestions use a small fixed rule table for partial
sequences instead of full lookahead, see could_be_valid_partial.
"""

from __future__ import annotations

from .config import ROMAN_CHARS, ROMAN_PATTERN, ROMAN_VALUES

# Suggestion order for next-character queries
ROMAN_LETTERS_DESC = ("M", "D", "C", "L", "X", "V", "I")

SUBTRACTIVE_PAIRS = frozenset({"IV", "IX", "XL", "XC", "CD", "CM"})
REPEATABLE_LETTERS = frozenset("IXCM")


def is_roman_char(char: str) -> bool:
    """Check if a character is a Roman numeral letter (case-insensitive).

    "S" is not a letter here: it is the semis fraction glyph.
    """
    return len(char) == 1 and char.upper() in ROMAN_CHARS


def is_valid_roman_numeral(numeral: str | None) -> bool:
    """Check if a string is a well-formed Roman numeral."""
    if not numeral:
        return False
    return ROMAN_PATTERN.fullmatch(numeral) is not None


def could_be_valid_partial(partial: str | None) -> bool:
    """Heuristic: could this sequence still be extended into a numeral?

    Single letters are always extendable. Two-letter sequences are
    extendable unless they form a completed subtractive pair; same-letter
    pairs of I, X, C and M are extendable, otherwise the first letter must
    not be smaller than the second. Three or more letters are terminal.
    """
    if not partial:
        return True

    seq = partial.upper()
    if len(seq) == 1:
        return seq in ROMAN_CHARS

    if len(seq) == 2:
        first, second = seq
        if first not in ROMAN_CHARS or second not in ROMAN_CHARS:
            return False
        if seq in SUBTRACTIVE_PAIRS:
            return False
        if first == second and first in REPEATABLE_LETTERS:
            return True
        return ROMAN_VALUES[first] >= ROMAN_VALUES[second]

    return False


def get_valid_next_roman_chars(current_sequence: str | None) -> list[str]:
    """Get the Roman letters that may follow the current sequence.

    A letter is offered if appending it gives a valid numeral or a partial
    sequence accepted by could_be_valid_partial.

    Args:
        current_sequence: Roman run being built (may be empty)

    Returns:
        Letters in M, D, C, L, X, V, I order
    """
    if not current_sequence:
        return list(ROMAN_LETTERS_DESC)

    seq = current_sequence.upper()
    valid_chars = []
    for char in ROMAN_LETTERS_DESC:
        candidate = seq + char
        if is_valid_roman_numeral(candidate) or could_be_valid_partial(candidate):
            valid_chars.append(char)
    return valid_chars


def trailing_roman_run(text: str | None) -> str:
    """Return the rightmost maximal run of Roman letters at the end of text."""
    if not text:
        return ""
    end = len(text)
    start = end
    while start > 0 and is_roman_char(text[start - 1]):
        start -= 1
    return text[start:end]


def can_add_roman_char(current_input: str, roman_char: str) -> bool:
    """Check if a Roman letter can be appended to the trailing Roman run of the input."""
    sequence = trailing_roman_run(current_input)
    return roman_char.upper() in get_valid_next_roman_chars(sequence)
