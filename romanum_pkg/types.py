"""Type definitions, result dataclasses and the error hierarchy."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Union


@dataclass(frozen=True)
class Number:
    """Numeric token."""

    value: float


@dataclass(frozen=True)
class Operator:
    """Operator token: one of + - * / ^."""

    symbol: str


Token = Union[Number, Operator]


class TokenKind(Enum):
    """Kind of the token the mixed-input interpreter is currently building."""

    NONE = "none"
    ROMAN = "roman"
    NUMBER = "number"
    OPERATOR = "operator"


@dataclass
class InterpreterState:
    """Pending token of one interpretation pass."""

    current_token: str = ""
    token_kind: TokenKind = TokenKind.NONE

    def reset(self) -> None:
        self.current_token = ""
        self.token_kind = TokenKind.NONE


@dataclass(frozen=True)
class BinaryExpression:
    """A two-operand expression found by splitting on the rightmost operator."""

    operand1: float
    operator: str
    operand2: float
    expression: str
    result: float | None = None


@dataclass(frozen=True)
class CalculationEntry:
    """One entry of the calculation history."""

    operands: tuple[Any, ...]
    operator: str | None
    result: float
    timestamp: float = field(compare=False, default=0.0)

    def to_dict(self) -> dict[str, Any]:
        return {
            "operands": list(self.operands),
            "operator": self.operator,
            "result": self.result,
            "timestamp": self.timestamp,
        }


@dataclass
class EvalResult:
    """Result of evaluating an expression."""

    ok: bool
    value: float | None = None
    numeral: str | None = None
    fraction: str | None = None
    expression: str | None = None
    error: str | None = None
    code: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        result_dict: dict[str, Any] = {"ok": self.ok}
        if self.expression is not None:
            result_dict["expression"] = self.expression
        if self.value is not None:
            result_dict["value"] = self.value
        if self.numeral is not None:
            result_dict["numeral"] = self.numeral
        if self.fraction is not None:
            result_dict["fraction"] = self.fraction
        if self.error is not None:
            result_dict["error"] = self.error
        if self.code is not None:
            result_dict["code"] = self.code
        return result_dict

    def __repr__(self) -> str:
        """Return string representation of the result."""
        if not self.ok:
            return f"EvalResult(ok=False, error={self.error!r}, code={self.code!r})"
        parts = [f"ok={self.ok}", f"value={self.value!r}"]
        if self.numeral is not None:
            parts.append(f"numeral={self.numeral!r}")
        if self.fraction is not None:
            parts.append(f"fraction={self.fraction!r}")
        return f"EvalResult({', '.join(parts)})"


class CalculatorError(Exception):
    """Base class for recoverable calculator errors."""

    default_code = "CALCULATOR_ERROR"

    def __init__(self, message: str, code: str | None = None):
        self.message = message
        self.code = code or self.default_code
        super().__init__(self.message)

    def __str__(self) -> str:
        return self.message


class InvalidOperand(CalculatorError):
    """Raised when operand text is not a number."""

    default_code = "INVALID_OPERAND"


class DivisionByZero(CalculatorError):
    default_code = "DIVISION_BY_ZERO"


class UnknownOperator(CalculatorError):
    default_code = "UNKNOWN_OPERATOR"


class MalformedExpression(CalculatorError):
    """Raised for empty input or misplaced operators."""

    default_code = "MALFORMED_EXPRESSION"


class NumericOverflow(CalculatorError):
    """Raised when a result is not a finite real number."""

    default_code = "NUMERIC_OVERFLOW"


class NumeralTooLarge(CalculatorError, ValueError):
    """Raised by the encoder for magnitudes it cannot write."""

    default_code = "NUMERAL_TOO_LARGE"


class InvalidNumeralGrammar(CalculatorError):
    """Raised when a numeral fails the Roman grammar."""

    default_code = "INVALID_NUMERAL"
