"""
Calculator detector tests.

Covers:
- Operator precedence, functions, percentages
- Partial results for dangling operators and open parentheses
- Rejection of plain numbers and prose
"""

import math
import time
import pytest

from contour.services.detectors.calculator import detect_calculator, evaluate, is_math_expression


@pytest.mark.parametrize(
    "text, expected",
    [
        ("5+3*2", 11),
        ("(5+3)*2", 16),
        ("2^10", 1024),
        ("sqrt(16)", 4),
        ("20% of 80", 16),
        ("3 x 4", 12),
        ("10 mod 3", 1),
        ("1,000 + 1", 1001),
        ("2(3+1)", 8),
    ],
)
def test_evaluates_expressions(text, expected):
    result = detect_calculator(text)
    assert result is not None
    assert not result.is_partial
    assert math.isclose(result.value, expected)


def test_display_uses_thousands_separator():
    assert detect_calculator("2^10").display == "1,024"


def test_dangling_operator_is_partial():
    result = detect_calculator("5+")
    assert result is not None
    assert result.is_partial
    assert result.value == 5


def test_open_parenthesis_is_partial():
    result = detect_calculator("(2+3")
    assert result.is_partial
    assert result.value == 5


def test_division_by_zero_is_partial_hint():
    result = detect_calculator("10 / 0")
    assert result.is_partial
    assert result.value is None
    assert "zero" in result.display


@pytest.mark.parametrize("text", ["42", "-5", "hello", "what is 2 plus 2", "", "import os"])
def test_non_expressions_return_none(text):
    assert detect_calculator(text) is None


def test_shape_check_requires_operator_or_function():
    assert is_math_expression("2 * 3")
    assert is_math_expression("sin(0)")
    assert not is_math_expression("2024")


def test_evaluate_rejects_disallowed_nodes():
    with pytest.raises(ValueError):
        evaluate("__import__('os')")


def test_huge_exponent_is_not_computed():
    result = detect_calculator("9^99999")
    assert result.is_partial
    assert result.value is None


@pytest.mark.parametrize("text", ["((9^999)^999)^999", "(9^999)^999", "2^(3^1000)"])
def test_nested_powers_are_rejected_quickly(text):
    started = time.monotonic()
    result = detect_calculator(text)
    assert time.monotonic() - started < 1
    assert result.is_partial
    assert result.value is None
    assert result.display == "Invalid expression"


def test_large_power_within_float_range_still_evaluates():
    assert detect_calculator("2^1000").value == pytest.approx(2.0 ** 1000)
