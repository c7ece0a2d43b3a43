"""Tests for the precedence and binary-split expression evaluators."""

import pytest

from romanum_pkg import config
from romanum_pkg.expression import (
    BinarySplitEvaluator,
    PrecedenceEvaluator,
    apply_operator,
    calculate_from_expression,
    check_structure,
    evaluate_binary,
    evaluate_tokens,
    get_evaluator,
    is_valid_expression,
    parse_expression,
    split_expression,
    tokenize,
)
from romanum_pkg.types import (
    BinaryExpression,
    DivisionByZero,
    InvalidOperand,
    MalformedExpression,
    Number,
    NumericOverflow,
    Operator,
    UnknownOperator,
)


class TestTokenize:
    """Test the left-to-right tokenizer."""

    def test_numbers_and_operators(self):
        assert tokenize("14+2*3") == [
            Number(14.0), Operator("+"), Number(2.0), Operator("*"), Number(3.0),
        ]

    def test_decimals(self):
        assert tokenize("3.14/2") == [Number(3.14), Operator("/"), Number(2.0)]

    def test_leading_minus_is_a_sign(self):
        assert tokenize("-5+3") == [Number(-5.0), Operator("+"), Number(3.0)]

    def test_minus_after_operator_is_a_sign(self):
        assert tokenize("2*-3") == [Number(2.0), Operator("*"), Number(-3.0)]

    def test_skips_whitespace(self):
        assert tokenize(" 1 + 2 ") == [Number(1.0), Operator("+"), Number(2.0)]

    def test_rejects_letters(self):
        with pytest.raises(InvalidOperand):
            tokenize("abc+1")

    def test_rejects_parentheses(self):
        with pytest.raises(InvalidOperand):
            tokenize("(2+3)*4")

    def test_rejects_malformed_numbers(self):
        with pytest.raises(InvalidOperand):
            tokenize("1.2.3+1")
        with pytest.raises(InvalidOperand):
            tokenize(".+1")


class TestEvaluateTokens:
    def test_precedence(self):
        tokens = tokenize("2+3*4")
        assert evaluate_tokens(tokens) == 14

    def test_does_not_modify_input(self):
        tokens = tokenize("2^3*4")
        snapshot = list(tokens)
        evaluate_tokens(tokens)
        assert tokens == snapshot

    def test_single_number(self):
        assert evaluate_tokens([Number(7.0)]) == 7

    def test_empty(self):
        with pytest.raises(MalformedExpression):
            evaluate_tokens([])

    def test_non_alternating(self):
        with pytest.raises(MalformedExpression):
            evaluate_tokens([Number(1.0), Number(2.0)])
        with pytest.raises(MalformedExpression):
            evaluate_tokens([Number(1.0), Operator("+")])
        with pytest.raises(MalformedExpression):
            evaluate_tokens([Operator("+"), Number(1.0)])

    def test_non_finite_result_rejected(self):
        with pytest.raises(NumericOverflow):
            evaluate_tokens([Number(float("inf"))])


class TestOutOfRangeLiterals:
    """Literals too large for a float never evaluate to infinity."""

    HUGE = "9" * 400

    def test_tokenize_raises(self):
        with pytest.raises(NumericOverflow):
            tokenize(self.HUGE)

    def test_parse_expression(self):
        assert parse_expression(self.HUGE) is None
        assert parse_expression(self.HUGE + "-1") is None

    def test_is_valid_expression(self):
        assert not is_valid_expression(self.HUGE, "precedence")
        assert not is_valid_expression(self.HUGE + "+1", "binary")

    def test_binary_split_raises(self):
        with pytest.raises(NumericOverflow):
            BinarySplitEvaluator().split("1+" + self.HUGE)


class TestParseExpression:
    """Tokenizing evaluator with operator precedence."""

    def test_precedence(self):
        assert parse_expression("2^3*4") == 32
        assert parse_expression("10+2^3") == 18
        assert parse_expression("14+2*3-5/2") == pytest.approx(17.5)
        assert parse_expression("100 * 2 + 50") == 250

    def test_left_to_right_within_level(self):
        assert parse_expression("100-10-5") == 85
        assert parse_expression("100/10/5") == 2
        assert parse_expression("2^3^2") == 64

    def test_negative_first_operand(self):
        assert parse_expression("-5+3") == -2
        assert parse_expression("-5") == -5

    def test_single_number(self):
        assert parse_expression("745") == 745

    def test_division_by_zero(self):
        assert parse_expression("100/0") is None
        assert parse_expression("1+100/0") is None

    @pytest.mark.parametrize(
        "expression",
        ["", "   ", "745 +", "+ 846", "745 + + 846", "*5", "5*-3", "abc", "(2+3)", None],
    )
    def test_malformed(self, expression):
        assert parse_expression(expression) is None

    def test_no_real_value(self):
        assert parse_expression("-8^0.5") is None
        assert parse_expression("10^400") is None
        assert parse_expression("0^-1") is None

    def test_fractional_results(self):
        assert parse_expression("10/3") == pytest.approx(10 / 3)
        assert parse_expression("2^0.5") == pytest.approx(2 ** 0.5)


class TestCheckStructure:
    def test_returns_compact_expression(self):
        assert check_structure("  1 +  2 ") == "1+2"

    @pytest.mark.parametrize(
        "expression, message",
        [
            ("", "Empty"),
            ("1+", "ends"),
            ("^2", "starts"),
            ("1+*2", "Consecutive"),
        ],
    )
    def test_rejections(self, expression, message):
        with pytest.raises(MalformedExpression) as exc_info:
            check_structure(expression)
        assert message in str(exc_info.value)

    def test_length_limit(self, monkeypatch):
        monkeypatch.setattr(config, "MAX_INPUT_LENGTH", 5)
        with pytest.raises(MalformedExpression) as exc_info:
            check_structure("1+2+3+4")
        assert exc_info.value.code == "TOO_LONG"


class TestApplyOperator:
    def test_operations(self):
        assert apply_operator(2, "+", 3) == 5
        assert apply_operator(2, "-", 3) == -1
        assert apply_operator(2, "*", 3) == 6
        assert apply_operator(3, "/", 2) == 1.5
        assert apply_operator(2, "^", 10) == 1024

    def test_errors(self):
        with pytest.raises(DivisionByZero):
            apply_operator(1, "/", 0)
        with pytest.raises(UnknownOperator):
            apply_operator(1, "%", 2)
        with pytest.raises(NumericOverflow):
            apply_operator(1e308, "*", 10)


class TestBinarySplit:
    """Single-operator evaluator that splits on the rightmost operator."""

    def test_parses_addition(self):
        assert split_expression("745 + 846") == BinaryExpression(
            operand1=745, operator="+", operand2=846, expression="745 + 846"
        )

    def test_parses_other_operators(self):
        assert split_expression("1000 - 255").operator == "-"
        assert split_expression("50 * 2").operator == "*"
        assert split_expression("100 / 4").operator == "/"
        assert split_expression("2 ^ 8").operator == "^"

    def test_without_spaces(self):
        assert split_expression("745+846").expression == "745+846"

    def test_extra_spaces_are_collapsed(self):
        parsed = split_expression("  745   +   846  ")
        assert parsed.expression == "745 + 846"
        assert (parsed.operand1, parsed.operand2) == (745, 846)

    def test_negative_first_operand(self):
        parsed = split_expression("-100 + 50")
        assert parsed.operand1 == -100
        assert parsed.operator == "+"
        assert parsed.operand2 == 50

    @pytest.mark.parametrize(
        "expression", ["745", "745 +", "+ 846", "abc + 123", "", None, "-5"]
    )
    def test_invalid(self, expression):
        assert split_expression(expression) is None

    def test_evaluate_binary(self):
        assert evaluate_binary(BinaryExpression(745, "+", 846, "")) == 1591
        assert evaluate_binary(BinaryExpression(1000, "-", 255, "")) == 745
        assert evaluate_binary(BinaryExpression(50, "*", 2, "")) == 100
        assert evaluate_binary(BinaryExpression(100, "/", 4, "")) == 25

    def test_evaluate_binary_failures(self):
        assert evaluate_binary(BinaryExpression(100, "/", 0, "")) is None
        assert evaluate_binary(BinaryExpression(1, "%", 2, "")) is None
        assert evaluate_binary(None) is None

    def test_calculate_from_expression(self):
        assert calculate_from_expression("745 + 846") == BinaryExpression(
            operand1=745, operator="+", operand2=846, expression="745 + 846", result=1591
        )
        assert calculate_from_expression("50 * 2").result == 100
        assert calculate_from_expression("100 / 4").result == 25
        assert calculate_from_expression("1000 - 255").result == 745

    def test_calculate_from_expression_failures(self):
        assert calculate_from_expression("invalid") is None
        assert calculate_from_expression("100 / 0") is None

    def test_rightmost_operator_wins(self):
        # "2+3" is not a number, so multi-operator input is rejected
        with pytest.raises(InvalidOperand):
            BinarySplitEvaluator().evaluate("2+3*4")


class TestStrategies:
    def test_lookup(self):
        assert isinstance(get_evaluator("precedence"), PrecedenceEvaluator)
        assert isinstance(get_evaluator("BINARY"), BinarySplitEvaluator)

    def test_default_from_config(self, monkeypatch):
        monkeypatch.setattr(config, "DEFAULT_EVALUATOR", "binary")
        assert isinstance(get_evaluator(), BinarySplitEvaluator)

    def test_unknown_strategy(self):
        with pytest.raises(ValueError):
            get_evaluator("rpn")

    def test_strategies_differ_on_precedence(self):
        assert get_evaluator("precedence").evaluate("2+3*4") == 14
        assert is_valid_expression("2+3*4", "binary") is False

    def test_is_valid_expression_binary(self):
        for expression in ["745 + 846", "50 * 2", "100/4", "1000-255"]:
            assert is_valid_expression(expression, "binary")
        for expression in ["745", "745 +", "+ 846", "", "abc + 123", "100/0"]:
            assert not is_valid_expression(expression, "binary")

    def test_is_valid_expression_precedence(self):
        assert is_valid_expression("14+2*3-5/2", "precedence")
        assert is_valid_expression("745", "precedence")
        assert not is_valid_expression("100/0", "precedence")
        assert not is_valid_expression("745 +", "precedence")
        assert not is_valid_expression(None)

    def test_evaluator_base_is_abstract(self):
        from romanum_pkg.expression import Evaluator

        with pytest.raises(TypeError):
            Evaluator()
