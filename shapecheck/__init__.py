"""shapecheck - validate runtime values against a compact constraint language.

>>> from shapecheck import validate
>>> validate(7, "min=5,max=10")
''
>>> validate(11, "min=5,max=10")
'Constraint Error: Number 11 exceeds range maximum of 10'
"""

__version__ = "0.1.0"

from .exceptions import (
    ConfigurationError,
    ConstraintBasicTypeError,
    ConstraintConflictError,
    ConstraintError,
    ConstraintFailedError,
    IntegerConstraintError,
    InvalidPatternError,
    NegativeConstraintError,
    PositiveConstraintError,
    RangeConstraintError,
    ShapeCheckError,
    ZeroValueConstraintError,
)
from .grammar import build, parse_constraints, tokenize
from .runtime import check, describe, get_evaluator, reset_evaluator, validate
from .validation import (
    ArrayConstraint,
    Constraint,
    ConstraintEvaluator,
    ElementCheckType,
    NumberConstraint,
    ObjectConstraint,
    StringConstraint,
    ValidationResult,
    ValidationViolation,
)
from .valuetype import ValueType, value_type_from_string, value_type_of

__all__ = [
    "__version__",
    # entry points
    "validate",
    "check",
    "describe",
    "get_evaluator",
    "reset_evaluator",
    # grammar
    "tokenize",
    "build",
    "parse_constraints",
    # model
    "ValueType",
    "value_type_of",
    "value_type_from_string",
    "Constraint",
    "NumberConstraint",
    "StringConstraint",
    "ObjectConstraint",
    "ArrayConstraint",
    "ElementCheckType",
    "ConstraintEvaluator",
    "ValidationResult",
    "ValidationViolation",
    # errors
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
