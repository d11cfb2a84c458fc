# Copyright (c) 2025 Artoo Corporation
# Licensed under the Business Source License 1.1 (see LICENSE).
# Change Date: 2029-09-08  •  Change License: LGPL-3.0-or-later

from fractions import Fraction

import pytest

from shapecheck.exceptions import (
    ConstraintBasicTypeError,
    ConstraintConflictError,
    IntegerConstraintError,
    NegativeConstraintError,
    PositiveConstraintError,
    RangeConstraintError,
    ZeroValueConstraintError,
)
from shapecheck.grammar import build
from shapecheck.valuetype import ValueType


def _test(evaluator, block, value):
    evaluator.test(build(ValueType.NUMBER, block), value)


@pytest.mark.parametrize("value", [0, 3, -7, 3.0, Fraction(4, 2)])
def test_integer_accepts_whole_numbers(evaluator, value):
    _test(evaluator, "integer", value)


@pytest.mark.parametrize("value", [2.5, -0.1, float("nan"), float("inf"), Fraction(1, 3)])
def test_integer_rejects_fractions(evaluator, value):
    with pytest.raises(IntegerConstraintError):
        _test(evaluator, "integer", value)


def test_integer_message(evaluator):
    with pytest.raises(IntegerConstraintError) as excinfo:
        _test(evaluator, "integer", 2.5)

    assert str(excinfo.value) == "Constraint Error: Value 2.5 is not an integer"
    assert excinfo.value.kind == "integer"
    assert excinfo.value.actual == 2.5


def test_not_zero(evaluator):
    _test(evaluator, "notzero", 0.5)
    with pytest.raises(ZeroValueConstraintError, match="Zero is not an allowable value"):
        _test(evaluator, "not zero", 0)


def test_positive_and_negative_bounds_include_zero(evaluator):
    _test(evaluator, "positive", 0)
    _test(evaluator, "negative", 0)
    with pytest.raises(PositiveConstraintError, match="Value -1 is not positive"):
        _test(evaluator, "positive", -1)
    with pytest.raises(NegativeConstraintError, match="Value 1 is not negative"):
        _test(evaluator, "negative", 1)


def test_positive_negative_conflict(evaluator):
    with pytest.raises(ConstraintConflictError):
        _test(evaluator, "positive,negative", 1)


@pytest.mark.parametrize("value", [5, 7, 10, 5.0])
def test_inclusive_range_accepts(evaluator, value):
    _test(evaluator, "min=5,max=10", value)


def test_inclusive_range_rejects_each_side(evaluator):
    with pytest.raises(RangeConstraintError) as low:
        _test(evaluator, "min=5,max=10", 4)
    with pytest.raises(RangeConstraintError) as high:
        _test(evaluator, "min=5,max=10", 11)

    assert str(low.value) == "Constraint Error: Number 4 is less than range minimum of 5"
    assert low.value.below_minimum is True
    assert str(high.value) == "Constraint Error: Number 11 exceeds range maximum of 10"
    assert high.value.bound == 10


def test_exclusive_maximum(evaluator):
    _test(evaluator, "maxx=10", 9.999)
    with pytest.raises(RangeConstraintError) as excinfo:
        _test(evaluator, "maxx=10", 10)

    assert str(excinfo.value) == "Constraint Error: Number 10 exceeds range maximum of 10 (exclusive)"
    assert excinfo.value.exclusive is True


def test_rule_order_integer_before_range(evaluator):
    with pytest.raises(IntegerConstraintError):
        _test(evaluator, "min=5,integer", 2.5)


def test_rule_order_zero_before_sign(evaluator):
    with pytest.raises(ZeroValueConstraintError):
        _test(evaluator, "positive,negative,notzero", 0)


def test_wrong_type_fails_basic_check(evaluator):
    with pytest.raises(ConstraintBasicTypeError) as excinfo:
        _test(evaluator, "min=1", "5")

    assert str(excinfo.value) == "Constraint Error: Incorrect type str, (number expected) 5"


def test_bool_is_not_a_number(evaluator):
    with pytest.raises(ConstraintBasicTypeError):
        _test(evaluator, "min=0", True)
