# Copyright (c) 2025 Artoo Corporation
# Licensed under the Business Source License 1.1 (see LICENSE).
# Change Date: 2029-09-08  •  Change License: LGPL-3.0-or-later

from collections import OrderedDict
from types import MappingProxyType

import pytest

from shapecheck import validate
from shapecheck.exceptions import ConstraintConflictError, ConstraintFailedError
from shapecheck.grammar import build
from shapecheck.validation import own_properties
from shapecheck.valuetype import ValueType


class Widget:
    def __init__(self, **attrs):
        self.__dict__.update(attrs)


class Slotted:
    __slots__ = ("a", "b")

    def __init__(self):
        self.a = 1


def _test(evaluator, block, value):
    evaluator.test(build(ValueType.OBJECT, block), value)


def _failure(evaluator, block, value):
    with pytest.raises(ConstraintFailedError) as excinfo:
        _test(evaluator, block, value)
    return excinfo.value


def test_own_properties_of_mappings_and_instances():
    assert own_properties({"a": 1}) == {"a": 1}
    assert own_properties(Widget(x=1, y=None)) == {"x": 1, "y": None}
    assert own_properties(Slotted()) == {"a": 1}


def test_empty_and_not_empty(evaluator):
    _test(evaluator, "empty", {})
    _test(evaluator, "!empty", Widget(x=1))

    assert str(_failure(evaluator, "empty", {"a": 1})) == "Constraint Error: Failed empty: object contains 1 properties"
    assert str(_failure(evaluator, "notEmpty", {})) == "Constraint Error: Failed !empty: {}"


def test_empty_conflict(evaluator):
    with pytest.raises(ConstraintConflictError, match="Both empty and !empty declared"):
        _test(evaluator, "empty,!empty", {})


def test_property_list_overlap_conflict(evaluator):
    with pytest.raises(ConstraintConflictError) as excinfo:
        _test(evaluator, "hasProperties=a|b,!hasProperties=b|c", {"a": 1, "b": 2})

    assert '"b"' in str(excinfo.value)


def test_disjoint_property_lists_do_not_conflict(evaluator):
    _test(evaluator, "hasProperties=a,!hasProperties=c", {"a": 1, "b": 2})


def test_has_properties_reports_first_missing(evaluator):
    failure = _failure(evaluator, "hasProperties=a|b|c", {"a": 1})

    assert failure.rule == "hasProperties"
    assert failure.actual == "b"


def test_not_has_properties_reports_first_present(evaluator):
    failure = _failure(evaluator, "!hasProperties=x|b|a", {"a": 1, "b": 2})

    assert str(failure) == "Constraint Error: Failed !hasProperties: b"


def test_not_nested_ignores_arrays_and_none(evaluator):
    _test(evaluator, "notNested", {"a": [1, {"deep": True}], "b": None, "c": "x"})

    assert _failure(evaluator, "notNested", {"a": 1, "b": {"c": 1}}).actual == "b"
    assert _failure(evaluator, "notNested", Widget(child=Widget())).actual == "child"


def test_no_prototype_by_type_name(evaluator):
    _test(evaluator, "noPrototype", {"a": 1})

    assert _failure(evaluator, "noPrototype", Widget()).actual == "Widget"
    assert _failure(evaluator, "noPrototype", OrderedDict()).actual == "OrderedDict"


def test_can_serialize(evaluator):
    _test(evaluator, "canSerialize", {"a": [1, 2], "b": {"c": None}})
    _test(evaluator, "canSerialize", Widget(x=1))
    _test(evaluator, "canSerialize", MappingProxyType({"a": 1}))

    assert _failure(evaluator, "canSerialize", {"a": object()}).rule == "canSerialize"

    circular = {}
    circular["self"] = circular
    assert _failure(evaluator, "canSerialize", circular).rule == "canSerialize"


def test_truthiness_rules(evaluator):
    _test(evaluator, "noFalseyProps", {"a": 1, "b": "x", "c": [0]})
    _test(evaluator, "noTruthyProps", {"a": 0, "b": "", "c": None, "d": []})

    assert _failure(evaluator, "noFalseyProps", {"a": 1, "b": 0}).actual == "b"
    assert _failure(evaluator, "noTruthyProps", {"a": 0, "b": "x"}).actual == "b"


def test_instance_of_by_exact_name(evaluator):
    _test(evaluator, "instanceOf=Widget", Widget())
    _test(evaluator, "!instanceOf=dict", Widget())

    assert str(_failure(evaluator, "instanceOf=Widget", {})) == "Constraint Error: Failed instanceOf (Widget): dict"
    assert str(_failure(evaluator, "!instanceOf=dict", {})) == "Constraint Error: Failed !instanceOf: dict"


def test_rule_order_has_properties_before_not_nested(evaluator):
    assert _failure(evaluator, "notNested,hasProperties=z", {"a": {}}).rule == "hasProperties"


def test_mapping_keys_that_print_alike_stay_distinct(evaluator):
    mixed = {1: 0, "1": 5}

    assert own_properties(mixed) == {1: 0, "1": 5}
    assert _failure(evaluator, "noFalseyProps", mixed).actual == 1
    assert _failure(evaluator, "noTruthyProps", mixed).actual == "1"
    assert str(_failure(evaluator, "empty", {1: 1, "1": 2})) == "Constraint Error: Failed empty: object contains 2 properties"


def test_property_names_match_non_string_keys(evaluator):
    _test(evaluator, "hasProperties=1", {1: "x"})

    assert _failure(evaluator, "!hasProperties=1", {1: "x"}).actual == "1"


def test_validate_reports_falsey_value_under_non_string_key():
    assert validate({1: 0, "1": 5}, "noFalseyProps") == "Constraint Error: Failed noFalseyProps: 1"
