# Copyright (c) 2025 Artoo Corporation
# Licensed under the Business Source License 1.1 (see LICENSE).
# Change Date: 2029-09-08  •  Change License: LGPL-3.0-or-later

"""Result types shared by the evaluator and the runtime entry points."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List, Optional

from ..exceptions import ConstraintError
from .constraints import Constraint


@dataclass(frozen=True)
class ValidationViolation:
    """A single failed rule."""

    rule: str
    message: str
    kind: str
    actual: Any = None
    index: Optional[int] = None

    @classmethod
    def from_error(cls, error: ConstraintError) -> "ValidationViolation":
        return cls(
            rule=error.rule,
            message=error.message,
            kind=error.kind,
            actual=error.actual,
            index=error.index,
        )


@dataclass
class ValidationResult:
    """Outcome of checking one value.

    Evaluation stops at the first failing rule, so ``violations`` holds at
    most one entry.
    """

    allowed: bool = True
    violations: List[ValidationViolation] = field(default_factory=list)
    constraint: Optional[Constraint] = field(default=None, repr=False)

    @property
    def violation(self) -> Optional[ValidationViolation]:
        return self.violations[0] if self.violations else None

    @property
    def message(self) -> str:
        violation = self.violation
        return violation.message if violation is not None else ""

    @classmethod
    def failed(cls, error: ConstraintError, constraint: Optional[Constraint] = None) -> "ValidationResult":
        return cls(
            allowed=False,
            violations=[ValidationViolation.from_error(error)],
            constraint=constraint,
        )


__all__ = ["ValidationResult", "ValidationViolation"]
