"""Tests for failure modes and invalid input handling."""

import pytest

from romanum_pkg import config
from romanum_pkg.api import evaluate, resolve_expression
from romanum_pkg.expression import check_structure, get_evaluator, tokenize
from romanum_pkg.numerals import decode_roman, format_number, to_roman
from romanum_pkg.types import (
    CalculatorError,
    InvalidNumeralGrammar,
    InvalidOperand,
    MalformedExpression,
    NumeralTooLarge,
)
from romanum_pkg.uncia import from_roman_fraction


class TestInputValidationFailures:
    """Test input validation failure modes."""

    def test_empty_input(self):
        with pytest.raises(MalformedExpression):
            check_structure("")

    def test_whitespace_only(self):
        with pytest.raises(MalformedExpression):
            check_structure("   ")

    def test_too_long_input(self):
        long_input = "1" * (config.MAX_INPUT_LENGTH + 1)
        with pytest.raises(MalformedExpression) as exc_info:
            check_structure(long_input)
        assert exc_info.value.code == "TOO_LONG"

    def test_parentheses_rejected(self):
        with pytest.raises(InvalidOperand):
            tokenize("(1+2)")

    def test_malformed_decimal(self):
        with pytest.raises(InvalidOperand):
            tokenize("1.2.3+4")

    def test_unknown_evaluator(self):
        with pytest.raises(ValueError):
            get_evaluator("rpn")


class TestNumeralFailures:
    """Test encoder and decoder failure modes."""

    def test_encode_above_range(self):
        with pytest.raises(NumeralTooLarge):
            to_roman(400_000)

    def test_format_infinity(self):
        with pytest.raises(NumeralTooLarge):
            format_number(float("inf"))

    def test_numeral_too_large_is_value_error(self):
        with pytest.raises(ValueError):
            to_roman(10**9)

    def test_decode_invalid_grammar(self):
        with pytest.raises(InvalidNumeralGrammar):
            decode_roman("IIII")

    def test_fraction_decode_garbage(self):
        with pytest.raises(InvalidNumeralGrammar):
            from_roman_fraction("X?")

    def test_all_errors_share_base(self):
        for error in (InvalidNumeralGrammar, NumeralTooLarge, MalformedExpression):
            assert issubclass(error, CalculatorError)


class TestEvaluationFailures:
    """Evaluation failures come back as results, never as exceptions."""

    @pytest.mark.parametrize(
        "text,code",
        [
            ("X/0", "DIVISION_BY_ZERO"),
            ("X+", "MALFORMED_EXPRESSION"),
            ("*X", "MALFORMED_EXPRESSION"),
            ("X+*V", "MALFORMED_EXPRESSION"),
            ("VV+5", "INVALID_OPERAND"),
            ("10^400", "NUMERIC_OVERFLOW"),
            ("-8^0.5", "NUMERIC_OVERFLOW"),
            ("MMMM*C", "NUMERAL_TOO_LARGE"),
        ],
    )
    def test_error_codes(self, text, code):
        result = evaluate(resolve_expression(text))
        assert not result.ok
        assert result.code == code
        assert result.error

    def test_too_large_keeps_value(self):
        result = evaluate(resolve_expression("MMMM*C"))
        assert result.value == 400_000
        assert result.numeral is None
