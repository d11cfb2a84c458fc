"""Runtime entry points for validating values against constraint strings."""

from .validator import check, describe, get_evaluator, reset_evaluator, validate

__all__ = [
    "check",
    "describe",
    "get_evaluator",
    "reset_evaluator",
    "validate",
]
