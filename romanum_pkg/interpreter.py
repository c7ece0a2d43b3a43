"""Mixed-input interpreter for keystrokes combining Arabic digits, operators and Roman letters.

Input is classified left to right into Roman, number and operator tokens.
A Roman run is converted to its integer value as soon as something else
interrupts it. At the end of the input the two public modes differ:

- parse_mixed_input (final mode) converts a trailing Roman run too, ready
  for evaluation.
- parse_for_keyboard (keyboard mode) leaves a trailing Roman run as typed so
  the user can keep extending it (X -> XI -> XIV).

Every call re-derives its state from the whole string; nothing is carried
between calls.
"""

from __future__ import annotations

from .config import NUMBER_CHARS, OPERATOR_CHARS
from .numerals import roman_to_number
from .types import InterpreterState, TokenKind
from .validator import (
    can_add_roman_char,
    is_roman_char,
    is_valid_roman_numeral,
    trailing_roman_run,
)


def _resolve_roman(sequence: str) -> str:
    value = roman_to_number(sequence)
    if value is None:
        # Invalid numeral, keep as typed
        return sequence
    return str(value)


def _flush(state: InterpreterState, output: list[str], force: bool = False) -> None:
    """Emit the pending token; Roman runs are converted only when forced."""
    if not state.current_token:
        return
    if state.token_kind is TokenKind.ROMAN and force:
        output.append(_resolve_roman(state.current_token))
    else:
        output.append(state.current_token)
    state.reset()


def _interpret(text: str | None, keep_trailing_roman: bool) -> str:
    if not text:
        return ""

    state = InterpreterState()
    output: list[str] = []

    for char in text:
        if is_roman_char(char):
            if state.token_kind is not TokenKind.ROMAN:
                _flush(state, output, force=True)
            state.current_token += char.upper()
            state.token_kind = TokenKind.ROMAN
        elif char in NUMBER_CHARS:
            if state.token_kind is not TokenKind.NUMBER:
                _flush(state, output, force=True)
            state.current_token += char
            state.token_kind = TokenKind.NUMBER
        elif char in OPERATOR_CHARS:
            _flush(state, output, force=True)
            output.append(char)
        else:
            _flush(state, output)
            output.append(char)

    if keep_trailing_roman and state.token_kind is TokenKind.ROMAN:
        _flush(state, output, force=False)
    else:
        _flush(state, output, force=True)

    return "".join(output)


def parse_mixed_input(text: str | None) -> str:
    """Convert every Roman run in the input to its integer value.

    Examples:
        >>> parse_mixed_input("12+XIV*3-V")
        '12+14*3-5'
        >>> parse_mixed_input("VV+5")
        'VV+5'
    """
    return _interpret(text, keep_trailing_roman=False)


def parse_for_keyboard(text: str | None) -> str:
    """Convert interrupted Roman runs but keep a trailing one as typed.

    Examples:
        >>> parse_for_keyboard("XIV+XII")
        '14+XII'
    """
    return _interpret(text, keep_trailing_roman=True)


def process_keyboard_input(current_input: str, new_char: str) -> str:
    """Append one keystroke and re-interpret the whole input in keyboard mode."""
    return parse_for_keyboard(current_input + new_char.upper())


def get_current_roman_sequence(text: str | None) -> str:
    """Return the Roman run at the end of the input, or "" if it ends in something else."""
    return trailing_roman_run(text)


def has_incomplete_roman_sequence(text: str | None) -> bool:
    sequence = get_current_roman_sequence(text)
    return bool(sequence) and not is_valid_roman_numeral(sequence)


def get_current_building_sequence(text: str | None) -> str:
    """Return the Roman run or number currently being typed at the end of the input.

    Unlike get_current_roman_sequence this follows token boundaries, so
    "XIV5" yields "5" and "50+" yields "".
    """
    if not text:
        return ""

    current_token = ""
    token_kind = TokenKind.NONE
    for char in text:
        if is_roman_char(char):
            if token_kind is not TokenKind.ROMAN:
                current_token = ""
            current_token += char.upper()
            token_kind = TokenKind.ROMAN
        elif char in NUMBER_CHARS:
            if token_kind is not TokenKind.NUMBER:
                current_token = ""
            current_token += char
            token_kind = TokenKind.NUMBER
        elif char in OPERATOR_CHARS:
            current_token = ""
            token_kind = TokenKind.OPERATOR

    if token_kind in (TokenKind.ROMAN, TokenKind.NUMBER):
        return current_token
    return ""


def can_add_roman_numeral(current_input: str, roman_numeral: str) -> bool:
    """Check if a Roman letter or a whole numeral such as "IV" can be appended.

    Whole numerals are only accepted when no Roman run is being built.
    """
    if not roman_numeral:
        return False

    current_sequence = get_current_building_sequence(current_input)
    if not current_sequence or not all(is_roman_char(c) for c in current_sequence):
        return is_valid_roman_numeral(roman_numeral)

    if len(roman_numeral) > 1:
        return False
    return can_add_roman_char(current_input, roman_numeral)
