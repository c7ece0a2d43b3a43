"""Public API for Romanum - the functions a UI layer calls, with no side effects."""

from __future__ import annotations

from .calculator import get_operation_text, get_operator_symbol
from .expression import get_evaluator
from .interpreter import parse_mixed_input, process_keyboard_input
from .logging_config import get_logger
from .numerals import format_number
from .types import CalculatorError, EvalResult, NumeralTooLarge
from .uncia import to_roman_fraction

logger = get_logger("api")


def interpret_keystroke(accumulated_input: str, new_char: str) -> str:
    """Apply one keystroke to the display string.

    Example:
        >>> from romanum_pkg.api import interpret_keystroke
        >>> interpret_keystroke("XI", "V")
        'XIV'
        >>> interpret_keystroke("XIV", "+")
        '14+'
    """
    return process_keyboard_input(accumulated_input, new_char)


def resolve_expression(text: str) -> str:
    """Convert every Roman run in the input, ready for evaluation.

    Example:
        >>> from romanum_pkg.api import resolve_expression
        >>> resolve_expression("XIV+XII")
        '14+12'
    """
    return parse_mixed_input(text)


def evaluate(expression: str, strategy: str | None = None) -> EvalResult:
    """Evaluate a resolved (Arabic) expression.

    Args:
        expression: Expression string (e.g., "14+2*3-5/2")
        strategy: "precedence" or "binary"; defaults to config.DEFAULT_EVALUATOR

    Returns:
        EvalResult with the value and its Roman renderings, or ok=False with
        an error message and code

    Example:
        >>> from romanum_pkg.api import evaluate
        >>> result = evaluate("10+2^3")
        >>> print(result.value, result.numeral)
        18.0 XVIII
        >>> evaluate("100/0").code
        'DIVISION_BY_ZERO'
    """
    evaluator = get_evaluator(strategy)
    try:
        value = evaluator.evaluate(expression)
    except CalculatorError as e:
        logger.debug("Evaluation of %r with %s failed: %s", expression, evaluator.name, e)
        return EvalResult(ok=False, expression=expression, error=e.message, code=e.code)

    try:
        numeral = to_display_numeral(value)
        fraction = to_display_fraction(value)
    except NumeralTooLarge as e:
        # The value exists but has no numeral form
        return EvalResult(
            ok=False, value=value, expression=expression, error=e.message, code=e.code
        )
    return EvalResult(
        ok=True,
        value=value,
        numeral=numeral,
        fraction=fraction,
        expression=expression,
    )


def to_display_numeral(value: float) -> str:
    return format_number(value)


def to_display_fraction(value: float) -> str:
    return to_roman_fraction(value)


def operator_glyph(operator: str) -> str:
    return get_operator_symbol(operator)


def operator_name(operator: str) -> str:
    return get_operation_text(operator)
