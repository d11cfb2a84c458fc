"""Validation package - constraint records and their evaluation.

Records are built by :mod:`shapecheck.grammar`; this package only checks
values against them. Nothing here parses constraint strings.
"""

from .base import ValidationResult, ValidationViolation
from .constraints import (
    ArrayConstraint,
    Constraint,
    ElementCheckType,
    NumberConstraint,
    ObjectConstraint,
    StringConstraint,
    new_constraint,
)
from .evaluator import ConstraintEvaluator, own_properties
from .traversal import select_indices, traverse

__all__ = [
    "ConstraintEvaluator",
    "ValidationResult",
    "ValidationViolation",
    "Constraint",
    "NumberConstraint",
    "StringConstraint",
    "ObjectConstraint",
    "ArrayConstraint",
    "ElementCheckType",
    "new_constraint",
    "own_properties",
    "select_indices",
    "traverse",
]
