# Copyright (c) 2025 Artoo Corporation
# Licensed under the Business Source License 1.1 (see LICENSE).
# Change Date: 2029-09-08  •  Change License: LGPL-3.0-or-later

"""Constraint evaluation engine.

:class:`ConstraintEvaluator` runs one linear, short-circuiting pass of rule
checks per value. Each constraint variant has its own routine, selected
through a dispatch table keyed by :class:`~shapecheck.valuetype.ValueType`.
The first failing rule raises; nothing is aggregated.
"""

from __future__ import annotations

import json
import logging
import math
import numbers
import random
import re
from collections.abc import Mapping
from typing import Any, Callable, Dict, Optional

from ..exceptions import (
    ConstraintBasicTypeError,
    ConstraintConflictError,
    ConstraintFailedError,
    IntegerConstraintError,
    InvalidPatternError,
    NegativeConstraintError,
    PositiveConstraintError,
    RangeConstraintError,
    ZeroValueConstraintError,
)
from ..valuetype import ValueType, is_array, value_type_of
from .constraints import (
    ArrayConstraint,
    Constraint,
    ElementCheckType,
    NumberConstraint,
    ObjectConstraint,
    StringConstraint,
)
from .traversal import traverse

logger = logging.getLogger(__name__)

# type names that count as "no prototype" for noPrototype
DEFAULT_CONSTRUCTORS = frozenset({"dict", "object"})


def own_properties(value: Any) -> Dict[Any, Any]:
    """Return the own properties of an object-like value.

    Mappings contribute their items with their keys unchanged, so ``1`` and
    ``"1"`` stay distinct. Other objects contribute their ``__slots__``
    attributes followed by their instance ``__dict__``.
    """

    if isinstance(value, Mapping):
        return dict(value.items())
    properties: Dict[Any, Any] = {}
    for cls in reversed(type(value).__mro__):
        slots = cls.__dict__.get("__slots__", ())
        if isinstance(slots, str):
            slots = (slots,)
        for name in slots:
            if name in ("__dict__", "__weakref__"):
                continue
            if hasattr(value, name):
                properties[name] = getattr(value, name)
    instance_dict = getattr(value, "__dict__", None)
    if isinstance(instance_dict, dict):
        properties.update(instance_dict)
    return properties


def _is_integral(value: Any) -> bool:
    if isinstance(value, numbers.Integral):
        return True
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        return False
    return math.isfinite(number) and number.is_integer()


def _serializes(value: Any) -> bool:
    payload = dict(value) if isinstance(value, Mapping) else own_properties(value)
    try:
        text = json.dumps(payload)
    except (TypeError, ValueError, OverflowError, RecursionError):
        return False
    return bool(text)


def _compile(pattern: str) -> "re.Pattern[str]":
    try:
        return re.compile(pattern)
    except re.error as exc:
        logger.debug("Pattern %r does not compile: %s", pattern, exc)
        raise InvalidPatternError(pattern, str(exc)) from exc


def _check_pair(
    name: str,
    positive: Optional[str],
    negative: Optional[str],
    value: str,
    predicate: Callable[[str], bool],
) -> None:
    if positive is not None and negative is not None:
        raise ConstraintConflictError(name)
    if positive is not None and not predicate(positive):
        raise ConstraintFailedError(name, value)
    if negative is not None and predicate(negative):
        raise ConstraintFailedError(f"!{name}", value)


class ConstraintEvaluator:
    """Evaluates constraint records against runtime values.

    The evaluator holds no per-call state. Its only collaborator is the
    random source used by the ``random`` and ``firstThenRandom`` traversal
    modes, which can be injected for deterministic tests.
    """

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng if rng is not None else random.Random()
        self._routines: Dict[ValueType, Callable[[Any, Any], None]] = {
            ValueType.NUMBER: self._test_number,
            ValueType.STRING: self._test_string,
            ValueType.OBJECT: self._test_object,
            ValueType.ARRAY: self._test_array,
        }

    def test(self, constraint: Constraint, value: Any) -> None:
        """Raise the first :class:`~shapecheck.exceptions.ConstraintError` *value* triggers."""

        routine = self._routines.get(constraint.value_type, self._test_base)
        routine(constraint, value)

    def _test_base(self, constraint: Constraint, value: Any) -> None:
        if value_type_of(value) is not constraint.value_type:
            raise ConstraintBasicTypeError(value, constraint.value_type.value)

    def _test_number(self, constraint: NumberConstraint, value: Any) -> None:
        self._test_base(constraint, value)

        if constraint.is_integer and not _is_integral(value):
            raise IntegerConstraintError(value)
        if constraint.not_zero and value == 0:
            raise ZeroValueConstraintError(value)
        if constraint.is_positive and constraint.is_negative:
            raise ConstraintConflictError("positive")
        if constraint.is_positive and value < 0:
            raise PositiveConstraintError(value)
        if constraint.is_negative and value > 0:
            raise NegativeConstraintError(value)
        if constraint.min is not None and value < constraint.min:
            raise RangeConstraintError(value, constraint.min)
        if constraint.max is not None and value > constraint.max:
            raise RangeConstraintError(value, constraint.max)
        if constraint.max_exclusive is not None and value >= constraint.max_exclusive:
            raise RangeConstraintError(value, constraint.max_exclusive, exclusive=True)

    def _test_string(self, constraint: StringConstraint, value: Any) -> None:
        self._test_base(constraint, value)

        length = len(value)
        if constraint.min_length is not None and length < constraint.min_length:
            raise RangeConstraintError(length, constraint.min_length, "String Length")
        if constraint.max_length is not None and length > constraint.max_length:
            raise RangeConstraintError(length, constraint.max_length, "String Length")

        _check_pair("startsWith", constraint.starts_with, constraint.not_starts_with, value, value.startswith)
        _check_pair("endsWith", constraint.ends_with, constraint.not_ends_with, value, value.endswith)
        _check_pair("contains", constraint.contains, constraint.not_contains, value, lambda text: text in value)
        _check_pair(
            "match",
            constraint.match,
            constraint.not_match,
            value,
            lambda pattern: _compile(pattern).search(value) is not None,
        )

    def _test_object(self, constraint: ObjectConstraint, value: Any) -> None:
        self._test_base(constraint, value)

        if constraint.empty and constraint.not_empty:
            raise ConstraintConflictError("empty")
        if constraint.has_properties and constraint.not_has_properties:
            overlap = [name for name in constraint.has_properties if name in constraint.not_has_properties]
            if overlap:
                raise ConstraintConflictError(f'hasProperties "{",".join(overlap)}"')

        properties = own_properties(value)
        if constraint.empty and properties:
            raise ConstraintFailedError("empty", f"object contains {len(properties)} properties")
        if constraint.not_empty and not properties:
            raise ConstraintFailedError("!empty", value)
        # property names in the constraint language are strings
        names = {str(key) for key in properties}
        for name in constraint.has_properties or ():
            if name not in names:
                raise ConstraintFailedError("hasProperties", name)
        for name in constraint.not_has_properties or ():
            if name in names:
                raise ConstraintFailedError("!hasProperties", name)
        if constraint.not_nested:
            for name, item in properties.items():
                if value_type_of(item) is ValueType.OBJECT:
                    raise ConstraintFailedError("notNested", name)

        type_name = type(value).__name__
        if constraint.no_prototype and type_name not in DEFAULT_CONSTRUCTORS:
            raise ConstraintFailedError("noPrototype", type_name)
        if constraint.can_serialize and not _serializes(value):
            raise ConstraintFailedError("canSerialize", value)
        if constraint.no_falsey_props:
            for name, item in properties.items():
                if not item:
                    raise ConstraintFailedError("noFalseyProps", name)
        if constraint.no_truthy_props:
            for name, item in properties.items():
                if item:
                    raise ConstraintFailedError("noTruthyProps", name)
        if constraint.instance_of and type_name != constraint.instance_of:
            raise ConstraintFailedError(f"instanceOf ({constraint.instance_of})", type_name)
        if constraint.not_instance_of and type_name == constraint.not_instance_of:
            raise ConstraintFailedError("!instanceOf", type_name)

    def _test_array(self, constraint: ArrayConstraint, value: Any) -> None:
        if not is_array(value):
            raise ConstraintBasicTypeError(value, constraint.value_type.value)

        length = len(value)
        if constraint.min_length is not None and length < constraint.min_length:
            raise RangeConstraintError(length, constraint.min_length, "Array Length")
        if constraint.max_length is not None and length > constraint.max_length:
            raise RangeConstraintError(length, constraint.max_length, "Array Length")

        if constraint.contains is not None and constraint.not_contains is not None:
            raise ConstraintConflictError("contains")
        if constraint.contains is not None and constraint.contains not in value:
            raise ConstraintFailedError("contains", constraint.contains)
        if constraint.not_contains is not None and constraint.not_contains in value:
            raise ConstraintFailedError("!contains", constraint.not_contains)

        if constraint.checks_elements:
            traverse(
                value,
                constraint.element_check_type or ElementCheckType.ALL,
                constraint.element_check_parameter,
                constraint.element_check_parameter2,
                constraint.element_constraints,
                test=self.test,
                rng=self.rng,
            )


__all__ = ["ConstraintEvaluator", "DEFAULT_CONSTRUCTORS", "own_properties"]
