"""Arithmetic expression evaluation over resolved (all-Arabic) input.

Two strategies are available:

- PrecedenceEvaluator tokenizes the whole expression and reduces it in
  three left-to-right passes: ``^``, then ``*``/``/``, then ``+``/``-``.
- BinarySplitEvaluator handles a single binary operation by splitting on
  the rightmost operator, e.g. "745 + 846".

Both raise CalculatorError subclasses; parse_expression,
calculate_from_expression and is_valid_expression turn those into None or
False for callers that only need "value or no value".
"""

from __future__ import annotations

import math
import re
from abc import ABC, abstractmethod

from . import config
from .calculator import OPERATIONS
from .config import NUMBER_CHARS, NUMBER_RE, OPERATOR_CHARS, WHITESPACE_RE
from .logging_config import get_logger
from .types import (
    BinaryExpression,
    CalculatorError,
    DivisionByZero,
    InvalidOperand,
    MalformedExpression,
    Number,
    NumericOverflow,
    Operator,
    Token,
    UnknownOperator,
)

logger = get_logger("expression")

PRECEDENCE_LEVELS = (
    frozenset({"^"}),
    frozenset({"*", "/"}),
    frozenset({"+", "-"}),
)

CONSECUTIVE_OPERATORS_RE = re.compile(r"[+\-*/^]{2,}")
LEADING_OPERATOR_RE = re.compile(r"^[+*/^]")


def _check_length(expression: str) -> None:
    if len(expression) > config.MAX_INPUT_LENGTH:
        raise MalformedExpression(
            f"Input too long (>{config.MAX_INPUT_LENGTH} characters)", "TOO_LONG"
        )


def _parse_number(text: str) -> float:
    if not NUMBER_RE.match(text):
        raise InvalidOperand(f"Invalid number: {text!r}")
    value = float(text)
    if not math.isfinite(value):
        raise NumericOverflow(f"Number out of range: {text[:20]}...")
    return value


def apply_operator(left: float, operator: str, right: float) -> float:
    """Compute ``left <operator> right``.

    Raises:
        UnknownOperator: If the operator is not one of + - * / ^
        DivisionByZero: If dividing by zero
        NumericOverflow: If the result is not a finite real number
    """
    operation = OPERATIONS.get(operator)
    if operation is None:
        raise UnknownOperator(f"Unknown operator: {operator!r}")
    if operator == "/" and right == 0:
        raise DivisionByZero("Division by zero")

    try:
        result = operation(left, right)
    except (OverflowError, ValueError) as e:
        raise NumericOverflow(f"{left} {operator} {right} has no real value") from e
    if not math.isfinite(result):
        raise NumericOverflow(f"{left} {operator} {right} is out of range")
    return result


def check_structure(expression: str) -> str:
    """Reject structurally malformed input before tokenizing.

    Returns:
        The expression with all whitespace removed

    Raises:
        MalformedExpression: If the expression is empty, ends in an operator,
            starts with an operator other than "-", or has consecutive operators
    """
    if not isinstance(expression, str):
        raise MalformedExpression("Expression must be a string")
    _check_length(expression)

    clean = WHITESPACE_RE.sub("", expression.strip())
    if not clean:
        raise MalformedExpression("Empty expression")
    if clean[-1] in OPERATOR_CHARS:
        raise MalformedExpression("Expression ends with an operator")
    if LEADING_OPERATOR_RE.match(clean):
        raise MalformedExpression("Expression starts with an operator")
    if CONSECUTIVE_OPERATORS_RE.search(clean):
        raise MalformedExpression("Consecutive operators")
    return clean


def tokenize(expression: str) -> list[Token]:
    """Split an expression into number and operator tokens.

    A "-" is a sign, folded into the following number, when it starts the
    expression or follows another operator.

    Raises:
        InvalidOperand: On characters that are not digits, ".", operators or
            whitespace, or on malformed numbers such as "1.2.3"
    """
    tokens: list[Token] = []
    current = ""
    previous = ""

    for char in expression:
        if char.isspace():
            continue
        if char in NUMBER_CHARS:
            current += char
        elif char in OPERATOR_CHARS:
            if char == "-" and (not previous or previous in OPERATOR_CHARS):
                current += char
            else:
                if current:
                    tokens.append(Number(_parse_number(current)))
                    current = ""
                tokens.append(Operator(char))
        else:
            raise InvalidOperand(f"Unexpected character {char!r} in expression")
        previous = char

    if current:
        tokens.append(Number(_parse_number(current)))
    return tokens


def evaluate_tokens(tokens: list[Token]) -> float:
    """Evaluate a token list by operator precedence.

    The input list is not modified. Operators of equal precedence group
    left to right, so 2^3^2 is 64.
    """
    if not tokens:
        raise MalformedExpression("Nothing to evaluate")

    items = list(tokens)
    for position, token in enumerate(items):
        expected = Number if position % 2 == 0 else Operator
        if not isinstance(token, expected):
            raise MalformedExpression("Operands and operators must alternate")
    if isinstance(items[-1], Operator):
        raise MalformedExpression("Expression ends with an operator")

    for level in PRECEDENCE_LEVELS:
        i = 1
        while i < len(items):
            operator = items[i]
            if operator.symbol in level:
                value = apply_operator(items[i - 1].value, operator.symbol, items[i + 1].value)
                items[i - 1 : i + 2] = [Number(value)]
            else:
                i += 2

    result = items[0].value
    if not math.isfinite(result):
        raise NumericOverflow(f"{result} is out of range")
    return result


class Evaluator(ABC):
    """Strategy that evaluates a resolved expression string to a number."""

    name = ""

    @abstractmethod
    def evaluate(self, expression: str) -> float:
        """Evaluate the expression or raise a CalculatorError subclass."""


class PrecedenceEvaluator(Evaluator):
    name = "precedence"

    def evaluate(self, expression: str) -> float:
        clean = check_structure(expression)
        return evaluate_tokens(tokenize(clean))


class BinarySplitEvaluator(Evaluator):
    """Evaluate ``operand operator operand`` with at most one operator."""

    name = "binary"

    def split(self, expression: str) -> BinaryExpression:
        """Split on the rightmost operator that is not a leading minus sign.

        The returned expression text is trimmed with runs of whitespace
        collapsed to one space.
        """
        if not isinstance(expression, str):
            raise MalformedExpression("Expression must be a string")
        _check_length(expression)

        clean = " ".join(expression.split())
        if not clean:
            raise MalformedExpression("Empty expression")

        index = next(
            (i for i in range(len(clean) - 1, 0, -1) if clean[i] in OPERATOR_CHARS),
            None,
        )
        if index is None:
            raise MalformedExpression("No operator in expression")

        left = clean[:index].strip()
        right = clean[index + 1 :].strip()
        if not left or not right:
            raise MalformedExpression("Missing operand")

        return BinaryExpression(
            operand1=_parse_number(left),
            operator=clean[index],
            operand2=_parse_number(right),
            expression=clean,
        )

    def evaluate(self, expression: str) -> float:
        parsed = self.split(expression)
        return apply_operator(parsed.operand1, parsed.operator, parsed.operand2)


EVALUATORS: dict[str, Evaluator] = {
    PrecedenceEvaluator.name: PrecedenceEvaluator(),
    BinarySplitEvaluator.name: BinarySplitEvaluator(),
}


def get_evaluator(name: str | None = None) -> Evaluator:
    """Look up an evaluator strategy by name (default: config.DEFAULT_EVALUATOR)."""
    key = (name or config.DEFAULT_EVALUATOR).lower()
    try:
        return EVALUATORS[key]
    except KeyError:
        raise ValueError(
            f"Unknown evaluator {key!r}; expected one of {sorted(EVALUATORS)}"
        ) from None


def parse_expression(expression: str | None) -> float | None:
    """Evaluate with operator precedence, returning None on any failure.

    Examples:
        >>> parse_expression("14+2*3-5/2")
        17.5
        >>> parse_expression("100/0") is None
        True
    """
    if expression is None:
        return None
    try:
        return EVALUATORS["precedence"].evaluate(expression)
    except CalculatorError as e:
        logger.debug("Expression %r rejected: %s [%s]", expression, e, e.code)
        return None


def split_expression(expression: str | None) -> BinaryExpression | None:
    """Split a two-operand expression, or None if it is not one."""
    if expression is None:
        return None
    try:
        return EVALUATORS["binary"].split(expression)
    except CalculatorError as e:
        logger.debug("Expression %r rejected: %s [%s]", expression, e, e.code)
        return None


def evaluate_binary(parsed: BinaryExpression | None) -> float | None:
    """Evaluate a split expression, or None for missing input or a failed operation."""
    if parsed is None:
        return None
    try:
        return apply_operator(parsed.operand1, parsed.operator, parsed.operand2)
    except CalculatorError as e:
        logger.debug("Evaluation of %r failed: %s [%s]", parsed.expression, e, e.code)
        return None


def calculate_from_expression(expression: str | None) -> BinaryExpression | None:
    """Split and evaluate a two-operand expression in one step."""
    parsed = split_expression(expression)
    result = evaluate_binary(parsed)
    if result is None:
        return None
    return BinaryExpression(
        operand1=parsed.operand1,
        operator=parsed.operator,
        operand2=parsed.operand2,
        expression=parsed.expression,
        result=result,
    )


def is_valid_expression(expression: str | None, strategy: str | None = None) -> bool:
    """Check whether the expression evaluates to a finite number with the given strategy."""
    if not expression:
        return False
    try:
        get_evaluator(strategy).evaluate(expression)
    except CalculatorError:
        return False
    return True
