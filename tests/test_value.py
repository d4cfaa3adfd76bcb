import math

import pytest
from hypothesis import assume, given
from hypothesis import strategies as st

from lox.lox_errors import EvalError
from lox.lox_value import FLOAT, INTEGER, EvaluateResult, Number


def test_integer_arithmetic_stays_integer() -> None:
    result = Number.integer(7) + Number.integer(2)
    assert result == Number.integer(9)
    assert result.kind == INTEGER
    assert (Number.integer(7) - Number.integer(9)).value == -2
    assert (Number.integer(6) * Number.integer(7)).value == 42


def test_float_arithmetic_stays_float() -> None:
    result = Number.float_(7.0) / Number.float_(2.0)
    assert result == Number.float_(3.5)
    assert result.kind == FLOAT


@pytest.mark.parametrize(
    "a,b,expected",
    [(7, 2, 3), (-7, 2, -3), (7, -2, -3), (-7, -2, 3), (6, 3, 2), (0, 5, 0)],
)  # type: ignore[misc]
def test_integer_division_truncates_toward_zero(a: int, b: int, expected: int) -> None:
    assert (Number.integer(a) / Number.integer(b)) == Number.integer(expected)


def test_integer_division_by_zero_raises() -> None:
    with pytest.raises(EvalError, match="division by zero"):
        Number.integer(1) / Number.integer(0)


def test_float_division_by_zero_follows_ieee() -> None:
    assert (Number.float_(1.0) / Number.float_(0.0)).value == math.inf
    assert (Number.float_(-1.0) / Number.float_(0.0)).value == -math.inf
    assert math.isnan((Number.float_(0.0) / Number.float_(0.0)).value)


@pytest.mark.parametrize(
    "op",
    [
        lambda a, b: a + b,
        lambda a, b: a - b,
        lambda a, b: a * b,
        lambda a, b: a / b,
        lambda a, b: a < b,
        lambda a, b: a >= b,
    ],
)  # type: ignore[misc]
def test_mixed_kinds_raise(op: object) -> None:
    with pytest.raises(EvalError, match="integer and float"):
        op(Number.integer(1), Number.float_(2.0))  # type: ignore[operator]


def test_equality_across_kinds_is_false() -> None:
    assert Number.integer(1) != Number.float_(1.0)
    assert Number.integer(1) == Number.integer(1)


def test_negation_preserves_kind() -> None:
    assert -Number.integer(3) == Number.integer(-3)
    assert -Number.float_(1.5) == Number.float_(-1.5)


def test_from_lexeme() -> None:
    assert Number.from_lexeme("12") == Number.integer(12)
    assert Number.from_lexeme("1.25") == Number.float_(1.25)


def test_unknown_kind_rejected() -> None:
    with pytest.raises(ValueError):
        Number("DECIMAL", 1)


@pytest.mark.parametrize(
    "number,text",
    [
        (Number.integer(42), "42"),
        (Number.integer(-7), "-7"),
        (Number.float_(2.5), "2.5"),
        (Number.float_(1.0), "1"),
        (Number.float_(0.1) + Number.float_(0.2), "0.30000000000000004"),
        (Number.float_(1e20), "100000000000000000000"),
        (Number.float_(1e-7), "0.0000001"),
        (Number.float_(math.inf), "inf"),
        (Number.float_(-math.inf), "-inf"),
        (Number.float_(math.nan), "NaN"),
    ],
)  # type: ignore[misc]
def test_number_display(number: Number, text: str) -> None:
    assert str(number) == text


def test_number_repr() -> None:
    assert repr(Number.integer(3)) == "Number(INTEGER, 3)"


@pytest.mark.parametrize(
    "result,text",
    [
        (EvaluateResult.boolean(True), "true"),
        (EvaluateResult.boolean(False), "false"),
        (EvaluateResult.nil(), "nil"),
        (EvaluateResult.string("raw text"), "raw text"),
        (EvaluateResult.number(Number.integer(5)), "5"),
    ],
)  # type: ignore[misc]
def test_evaluate_result_display(result: EvaluateResult, text: str) -> None:
    assert str(result) == text


def test_evaluate_result_equality() -> None:
    assert EvaluateResult.string("a") == EvaluateResult.string("a")
    assert EvaluateResult.string("1") != EvaluateResult.number(Number.integer(1))
    assert EvaluateResult.nil() == EvaluateResult.nil()
    assert EvaluateResult.nil().is_nil
    assert repr(EvaluateResult.nil()) == "EvaluateResult(NIL)"


@given(st.integers(), st.integers())  # type: ignore[misc]
def test_integer_addition_matches_python(a: int, b: int) -> None:
    result = Number.integer(a) + Number.integer(b)
    assert result.kind == INTEGER
    assert result.value == a + b


@given(st.integers(-(10**9), 10**9), st.integers(-(10**9), 10**9))  # type: ignore[misc]
def test_integer_division_identity(a: int, b: int) -> None:
    assume(b != 0)
    q = (Number.integer(a) / Number.integer(b)).value
    r = a - q * b
    assert abs(r) < abs(b)
    assert r == 0 or (r > 0) == (a > 0)
