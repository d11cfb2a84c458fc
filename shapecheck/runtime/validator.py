# Copyright (c) 2025 Artoo Corporation
# Licensed under the Business Source License 1.1 (see LICENSE).
# Change Date: 2029-09-08  •  Change License: LGPL-3.0-or-later

"""Validate entry point.

:func:`validate` is the whole consumer contract: it takes a value and a
constraint string and returns ``""`` when the value conforms, otherwise the
message of the first violated rule. :func:`check` runs the same pipeline
and returns a structured :class:`~shapecheck.validation.ValidationResult`.

Each call builds and discards its own constraint record. The only state
shared between calls is the process-wide evaluator and its random source.
"""

from __future__ import annotations

import logging
import random
import time
from typing import Any, Optional, Union

from ..config import get_settings
from ..exceptions import ConstraintError
from ..grammar import build
from ..telemetry import get_tracer, record_validation_metrics
from ..validation import ConstraintEvaluator, ValidationResult
from ..valuetype import ValueType, string_from_value_type, value_type_from_string, value_type_of

logger = logging.getLogger(__name__)

_EVALUATOR: Optional[ConstraintEvaluator] = None


def get_evaluator() -> ConstraintEvaluator:
    """Return the process-wide evaluator.

    Its random source is seeded from ``SHAPECHECK_RANDOM_SEED`` on first use.
    """

    global _EVALUATOR
    if _EVALUATOR is None:
        settings = get_settings()
        _EVALUATOR = ConstraintEvaluator(rng=random.Random(settings.random_seed))
    return _EVALUATOR


def reset_evaluator() -> None:
    """Drop the process-wide evaluator; the next call re-reads settings."""

    global _EVALUATOR
    _EVALUATOR = None


def _resolve_type(value: Any, value_type: Optional[Union[ValueType, str]]) -> ValueType:
    if value_type is None:
        return value_type_of(value)
    if isinstance(value_type, ValueType):
        return value_type
    return value_type_from_string(value_type)


def check(
    value: Any,
    constraint_string: Optional[str],
    *,
    value_type: Optional[Union[ValueType, str]] = None,
    rng: Optional[random.Random] = None,
) -> ValidationResult:
    """Evaluate *value* against *constraint_string*.

    Args:
        value: Any runtime value
        constraint_string: Directive list such as ``"min=5,max=10"``; empty or
            ``None`` means there is nothing to enforce
        value_type: Declared type to build the constraint for; defaults to the
            classification of *value*
        rng: Random source for this call only (``random``/``firstThenRandom``
            traversal); defaults to the process-wide evaluator's

    Returns:
        ValidationResult: ``allowed`` is False when a rule failed, with the
        violation attached
    """
    started_at = time.perf_counter()
    resolved = _resolve_type(value, value_type)
    type_name = string_from_value_type(resolved)

    with get_tracer().start_as_current_span(
        "shapecheck.validate",
        attributes={"shapecheck.value_type": type_name or "none"},
    ) as span:
        constraint = build(resolved, constraint_string)
        if constraint is None:
            record_validation_metrics(type_name, "skipped", started_at)
            return ValidationResult()

        evaluator = get_evaluator() if rng is None else ConstraintEvaluator(rng=rng)
        try:
            evaluator.test(constraint, value)
        except ConstraintError as error:
            span.set_attribute("shapecheck.allowed", False)
            span.set_attribute("shapecheck.violation.kind", error.kind)
            logger.debug("Value %r failed constraint %r: %s", value, constraint_string, error)
            record_validation_metrics(type_name, "failed", started_at, violation_kind=error.kind)
            return ValidationResult.failed(error, constraint)

        span.set_attribute("shapecheck.allowed", True)
        record_validation_metrics(type_name, "passed", started_at)
        return ValidationResult(constraint=constraint)


def validate(
    value: Any,
    constraint_string: Optional[str],
    *,
    value_type: Optional[Union[ValueType, str]] = None,
    rng: Optional[random.Random] = None,
) -> str:
    """Return ``""`` if *value* satisfies *constraint_string*, else the violation message."""

    return check(value, constraint_string, value_type=value_type, rng=rng).message


def describe(value_type: Union[ValueType, str], constraint_string: Optional[str]) -> str:
    """Describe, in plain sentences, what *constraint_string* requires of a *value_type*."""

    constraint = build(value_type, constraint_string)
    if constraint is None:
        return "No Constraint"
    return constraint.describe()


__all__ = [
    "check",
    "describe",
    "get_evaluator",
    "reset_evaluator",
    "validate",
]
