# Copyright (c) 2025 Artoo Corporation
# Licensed under the Business Source License 1.1 (see LICENSE).
# Change Date: 2029-09-08  •  Change License: LGPL-3.0-or-later

"""Exception hierarchy for shapecheck.

Every constraint violation raised by the evaluator derives from
:class:`ConstraintError`. The validate entry point is the only place these
are caught and turned into a message string.
"""

from __future__ import annotations

from typing import Any, Optional


class ShapeCheckError(Exception):
    """Base class for all shapecheck errors."""


class ConfigurationError(ShapeCheckError):
    """Raised when shapecheck settings (environment variables) are invalid."""


def _text(value: Any) -> str:
    if value is None:
        return "None"
    return str(value)


class ConstraintError(ShapeCheckError):
    """Base for all constraint violations.

    Carries the failing ``rule`` name and the ``actual`` offending value so
    callers can inspect a violation without parsing its message. ``index``
    is filled in when the violation happened on an array element.
    """

    prefix = "Constraint Error: "
    kind = "constraint"

    def __init__(self, detail: str, *, rule: str = "", actual: Any = None):
        self.message = f"{self.prefix}{detail}"
        self.rule = rule
        self.actual = actual
        self.index: Optional[int] = None
        super().__init__(self.message)

    def __str__(self) -> str:
        return self.message


class ConstraintFailedError(ConstraintError):
    """A named string/object/array rule failed for a value."""

    kind = "rule"

    def __init__(self, fail_type: str, value: Any):
        super().__init__(f"Failed {fail_type}: {_text(value)}", rule=fail_type, actual=value)


class ConstraintBasicTypeError(ConstraintError):
    """The value's runtime type does not match the constraint's type."""

    kind = "basic_type"

    def __init__(self, value: Any, expected_type: str):
        self.expected_type = expected_type
        super().__init__(
            f"Incorrect type {type(value).__name__}, ({expected_type} expected) {_text(value)}",
            rule="type",
            actual=value,
        )


class RangeConstraintError(ConstraintError):
    """A number or a length fell outside an inclusive or exclusive bound."""

    kind = "range"

    def __init__(
        self,
        value: Any,
        bound: Any,
        range_type: str = "Number",
        *,
        exclusive: bool = False,
    ):
        self.bound = bound
        self.exclusive = exclusive
        self.below_minimum = value < bound
        if self.below_minimum:
            detail = f"{range_type} {_text(value)} is less than range minimum of {bound}"
        else:
            detail = f"{range_type} {_text(value)} exceeds range maximum of {bound}"
            if exclusive:
                detail += " (exclusive)"
        super().__init__(detail, rule="range", actual=value)


class IntegerConstraintError(ConstraintError):
    kind = "integer"

    def __init__(self, value: Any):
        detail = "Integer expected" if value is None else f"Value {_text(value)} is not an integer"
        super().__init__(detail, rule="integer", actual=value)


class PositiveConstraintError(ConstraintError):
    kind = "positive"

    def __init__(self, value: Any):
        detail = "Positive value expected" if value is None else f"Value {_text(value)} is not positive"
        super().__init__(detail, rule="positive", actual=value)


class NegativeConstraintError(ConstraintError):
    kind = "negative"

    def __init__(self, value: Any):
        detail = "Negative value expected" if value is None else f"Value {_text(value)} is not negative"
        super().__init__(detail, rule="negative", actual=value)


class ZeroValueConstraintError(ConstraintError):
    kind = "zero"

    def __init__(self, value: Any = 0):
        super().__init__("Zero is not an allowable value", rule="notZero", actual=value)


class ConstraintConflictError(ConstraintError):
    """A directive and its negated counterpart were both declared."""

    kind = "conflict"

    def __init__(self, conflict_type: str):
        self.conflict_type = conflict_type
        super().__init__(f"Both {conflict_type} and !{conflict_type} declared", rule=conflict_type)


class InvalidPatternError(ConstraintError):
    """A ``match`` directive holds a pattern that does not compile."""

    kind = "pattern"

    def __init__(self, pattern: str, reason: str):
        self.pattern = pattern
        super().__init__(
            f"Invalid regular expression {pattern!r}: {reason}",
            rule="match",
            actual=pattern,
        )


__all__ = [
    "ShapeCheckError",
    "ConfigurationError",
    "ConstraintError",
    "ConstraintFailedError",
    "ConstraintBasicTypeError",
    "RangeConstraintError",
    "IntegerConstraintError",
    "PositiveConstraintError",
    "NegativeConstraintError",
    "ZeroValueConstraintError",
    "ConstraintConflictError",
    "InvalidPatternError",
]
