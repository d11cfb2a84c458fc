# Copyright (c) 2025 Artoo Corporation
# Licensed under the Business Source License 1.1 (see LICENSE).
# Change Date: 2029-09-08  •  Change License: LGPL-3.0-or-later

"""Constraint records.

A constraint is a tagged record: the shared fields (``value_type``, ``note``,
``bad_name``) live on :class:`Constraint` and each value kind adds its own
rule fields. Evaluation is not a method of the record; the
:class:`~shapecheck.validation.evaluator.ConstraintEvaluator` dispatches on
``value_type``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Union

from ..valuetype import ValueType, string_from_value_type

Number = Union[int, float]


class ElementCheckType(str, Enum):
    """How many array elements receive element-level checks."""

    NONE = "none"
    ALL = "all"
    RANDOM = "random"
    STEP = "step"
    FIRST = "first"
    LAST = "last"
    FIRST_THEN_LAST = "firstThenLast"
    FIRST_THEN_STEP = "firstThenStep"
    FIRST_THEN_RANDOM = "firstThenRandom"


_CHECK_TYPES = {mode.value.lower(): mode for mode in ElementCheckType}

_TWO_PARAMETER_MODES = frozenset(
    {
        ElementCheckType.FIRST_THEN_LAST,
        ElementCheckType.FIRST_THEN_STEP,
        ElementCheckType.FIRST_THEN_RANDOM,
    }
)


def check_type_from_string(name: str) -> ElementCheckType:
    """Case-insensitive lookup; unknown names check every element."""

    return _CHECK_TYPES.get((name or "").strip().lower(), ElementCheckType.ALL)


def check_type_to_string(mode: ElementCheckType, p1: str = "", p2: str = "") -> str:
    if mode in (ElementCheckType.NONE, ElementCheckType.ALL):
        return mode.value
    if mode in _TWO_PARAMETER_MODES:
        return f"{mode.value}({p1},{p2})"
    return f"{mode.value}({p1})"


def _bounded(value: Optional[Number]) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


@dataclass
class Constraint:
    """Base constraint: a bare type check plus the shared annotation fields."""

    value_type: ValueType = ValueType.OBJECT
    note: Optional[str] = None
    bad_name: Optional[str] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "_sealed", True)

    def __setattr__(self, name: str, value: Any) -> None:
        if name == "value_type" and self.__dict__.get("_sealed"):
            raise AttributeError("a constraint's value_type cannot change after construction")
        super().__setattr__(name, value)

    @property
    def type_name(self) -> str:
        return string_from_value_type(self.value_type)

    def _rule_summaries(self) -> List[str]:
        return []

    def _rule_descriptions(self) -> List[str]:
        return []

    def _base_description(self) -> str:
        if self.bad_name:
            return f'"{self.bad_name}" is not a recognized constraint for {self.type_name}'
        if self.note:
            return self.note
        return "No Constraint"

    def describe(self) -> str:
        """Describe the declared rules in human terms, one per line."""

        lines = self._rule_descriptions()
        if self.note or self.bad_name:
            lines.append(self._base_description())
        return "\n".join(lines) if lines else self._base_description()

    def __str__(self) -> str:
        keys = self._rule_summaries()
        if keys:
            if self.note:
                keys.append(self.note)
            return "- " + ",".join(keys)
        if self.bad_name or self.note:
            return self._base_description()
        return "- No Constraint"


@dataclass
class NumberConstraint(Constraint):
    value_type: ValueType = field(default=ValueType.NUMBER, init=False)
    is_integer: bool = False
    is_positive: bool = False
    is_negative: bool = False
    not_zero: bool = False
    min: Optional[Number] = None
    max: Optional[Number] = None
    max_exclusive: Optional[Number] = None

    def _rule_summaries(self) -> List[str]:
        keys = []
        if self.is_integer:
            keys.append("Integer")
        if self.not_zero:
            keys.append("Not Zero")
        if self.is_positive:
            keys.append("Positive")
        if self.is_negative:
            keys.append("Negative")
        if self.min is not None:
            keys.append(f"Min = {_bounded(self.min)}")
        if self.max is not None:
            keys.append(f"Max = {_bounded(self.max)}")
        if self.max_exclusive is not None:
            keys.append(f"Maxx = {_bounded(self.max_exclusive)}")
        return keys

    def _rule_descriptions(self) -> List[str]:
        lines = []
        if self.is_integer:
            lines.append("number must be an integer")
        if self.not_zero:
            lines.append("number must not be zero")
        if self.is_positive:
            lines.append("number must be positive")
        if self.is_negative:
            lines.append("number must be negative")
        if self.min is not None:
            lines.append(f"Minimum value is {_bounded(self.min)}")
        if self.max is not None:
            lines.append(f"Maximum value is {_bounded(self.max)}")
        if self.max_exclusive is not None:
            lines.append(f"Maximum value is less than {_bounded(self.max_exclusive)}")
        return lines


@dataclass
class StringConstraint(Constraint):
    value_type: ValueType = field(default=ValueType.STRING, init=False)
    min_length: Optional[int] = None
    max_length: Optional[int] = None
    starts_with: Optional[str] = None
    not_starts_with: Optional[str] = None
    ends_with: Optional[str] = None
    not_ends_with: Optional[str] = None
    contains: Optional[str] = None
    not_contains: Optional[str] = None
    match: Optional[str] = None
    not_match: Optional[str] = None

    def _rule_summaries(self) -> List[str]:
        keys = []
        if self.min_length is not None:
            keys.append(f"Min Length = {self.min_length}")
        if self.max_length is not None:
            keys.append(f"Max Length = {self.max_length}")
        for label, text in (
            ("Starts With", self.starts_with),
            ("!StartsWith", self.not_starts_with),
            ("Ends With", self.ends_with),
            ("!EndsWith", self.not_ends_with),
            ("Contains", self.contains),
            ("!Contains", self.not_contains),
            ("Match", self.match),
            ("!Match", self.not_match),
        ):
            if text is not None:
                keys.append(f"{label} = {text}")
        return keys

    def _rule_descriptions(self) -> List[str]:
        lines = []
        if self.min_length is not None:
            lines.append(f"string must be at least {self.min_length} characters long")
        if self.max_length is not None:
            lines.append(f"string must consist of no more than {self.max_length} characters")
        if self.starts_with is not None:
            lines.append(f'string must start with "{self.starts_with}"')
        if self.not_starts_with is not None:
            lines.append(f'string must NOT start with "{self.not_starts_with}"')
        if self.ends_with is not None:
            lines.append(f'string must end with "{self.ends_with}"')
        if self.not_ends_with is not None:
            lines.append(f'string must NOT end with "{self.not_ends_with}"')
        if self.contains is not None:
            lines.append(f'must contain substring "{self.contains}"')
        if self.not_contains is not None:
            lines.append(f'must NOT contain substring "{self.not_contains}"')
        if self.match is not None:
            lines.append(f'must match Regular Expression "{self.match}"')
        if self.not_match is not None:
            lines.append(f'must NOT match RegExp "{self.not_match}"')
        return lines


@dataclass
class ObjectConstraint(Constraint):
    value_type: ValueType = field(default=ValueType.OBJECT, init=False)
    empty: bool = False
    not_empty: bool = False
    has_properties: Optional[List[str]] = None
    not_has_properties: Optional[List[str]] = None
    not_nested: bool = False
    no_prototype: bool = False
    can_serialize: bool = False
    no_falsey_props: bool = False
    no_truthy_props: bool = False
    instance_of: Optional[str] = None
    not_instance_of: Optional[str] = None

    def _rule_summaries(self) -> List[str]:
        keys = []
        if self.empty:
            keys.append("Empty")
        if self.not_empty:
            keys.append("!Empty")
        if self.has_properties:
            keys.append(f"Has Properties = {'|'.join(self.has_properties)}")
        if self.not_has_properties:
            keys.append(f"!Has Properties = {'|'.join(self.not_has_properties)}")
        if self.not_nested:
            keys.append("Not Nested")
        if self.no_prototype:
            keys.append("No Prototype")
        if self.can_serialize:
            keys.append("Can Serialize")
        if self.no_falsey_props:
            keys.append("No Falsey Props")
        if self.no_truthy_props:
            keys.append("No Truthy Props")
        if self.instance_of:
            keys.append(f"Instance Of = {self.instance_of}")
        if self.not_instance_of:
            keys.append(f"Not an instance of {self.not_instance_of}")
        return keys

    def _rule_descriptions(self) -> List[str]:
        lines = []
        if self.empty:
            lines.append("object must be empty")
        if self.not_empty:
            lines.append("object must not be empty")
        if self.has_properties:
            lines.append(f'object must contain properties "{",".join(self.has_properties)}"')
        if self.not_has_properties:
            lines.append(f'object must not contain properties "{",".join(self.not_has_properties)}"')
        if self.not_nested:
            lines.append("object must not contain nested objects")
        if self.no_prototype:
            lines.append("object must not derive from a prototype")
        if self.can_serialize:
            lines.append("object can be serialized")
        if self.no_falsey_props:
            lines.append("object can contain no properties that evaluate as false")
        if self.no_truthy_props:
            lines.append("object can contain no properties that evaluate as true")
        if self.instance_of:
            lines.append(f'object must be an instance of "{self.instance_of}"')
        if self.not_instance_of:
            lines.append(f'object must not be an instance of "{self.not_instance_of}"')
        return lines


@dataclass
class ArrayConstraint(Constraint):
    value_type: ValueType = field(default=ValueType.ARRAY, init=False)
    min_length: Optional[int] = None
    max_length: Optional[int] = None
    contains: Any = None
    not_contains: Any = None
    element_constraints: Dict[str, Constraint] = field(default_factory=dict)
    # None means no checkType directive was given
    element_check_type: Optional[ElementCheckType] = None
    element_check_parameter: str = ""
    element_check_parameter2: str = ""

    @property
    def checks_elements(self) -> bool:
        return bool(self.element_constraints) or self.element_check_type is not None

    def _method(self) -> str:
        mode = self.element_check_type or ElementCheckType.ALL
        return check_type_to_string(mode, self.element_check_parameter, self.element_check_parameter2)

    def _each_listing(self) -> str:
        parts = []
        for type_name, constraint in self.element_constraints.items():
            body = constraint.describe().replace("\n", "\n    - ")
            parts.append(f"\n  {type_name} elements:\n    - {body}")
        return "".join(parts)

    def _rule_summaries(self) -> List[str]:
        keys = []
        if self.min_length is not None:
            keys.append(f"Min Length = {self.min_length}")
        if self.max_length is not None:
            keys.append(f"Max Length = {self.max_length}")
        if self.contains is not None:
            keys.append(f"Contains = {self.contains}")
        if self.not_contains is not None:
            keys.append(f"!Contains = {self.not_contains}")
        if self.element_constraints:
            keys.append(f"Each = {'|'.join(self.element_constraints)}")
        if self.element_check_type is not None:
            keys.append(f"Check Type = {self._method()}")
        return keys

    def _rule_descriptions(self) -> List[str]:
        lines = []
        if self.min_length is not None:
            lines.append(f"array must contain at least {self.min_length} elements")
        if self.max_length is not None:
            lines.append(f"array must contain no more than {self.max_length} elements")
        if self.contains is not None:
            lines.append(f'array must contain element value "{self.contains}"')
        if self.not_contains is not None:
            lines.append(f'array must not contain an element value "{self.not_contains}"')
        if self.element_constraints:
            lines.append(
                "each element of the array has the following constraints by type"
                + self._each_listing()
            )
        if self.checks_elements:
            lines.append(f"(elements will be tested using the {self._method()} method)")
        return lines


_VARIANTS = {
    ValueType.NUMBER: NumberConstraint,
    ValueType.STRING: StringConstraint,
    ValueType.OBJECT: ObjectConstraint,
    ValueType.ARRAY: ArrayConstraint,
}


def new_constraint(value_type: ValueType) -> Constraint:
    """Return an empty constraint record of the variant for *value_type*."""

    variant = _VARIANTS.get(value_type)
    if variant is None:
        return Constraint(value_type=value_type)
    return variant()


__all__ = [
    "ElementCheckType",
    "check_type_from_string",
    "check_type_to_string",
    "Constraint",
    "NumberConstraint",
    "StringConstraint",
    "ObjectConstraint",
    "ArrayConstraint",
    "new_constraint",
]
