# Copyright (c) 2025 Artoo Corporation
# Licensed under the Business Source License 1.1 (see LICENSE).
# Change Date: 2029-09-08  •  Change License: LGPL-3.0-or-later

"""Metric instrument definitions for shapecheck."""

from __future__ import annotations

import logging
import time
from typing import Optional

from .runtime import meter

logger = logging.getLogger(__name__)

validate_total = meter.create_counter(
    name="shapecheck.validate.total",
    description="Counts validate calls, partitioned by value type and outcome.",
    unit="1",
)

violation_total = meter.create_counter(
    name="shapecheck.violation.total",
    description="Counts constraint violations partitioned by violation kind.",
    unit="1",
)

directive_unknown_total = meter.create_counter(
    name="shapecheck.directive.unknown.total",
    description="Counts unrecognised directive keywords encountered while building constraints.",
    unit="1",
)

elements_tested_total = meter.create_counter(
    name="shapecheck.elements.tested.total",
    description="Counts array elements evaluated against an element sub-constraint.",
    unit="1",
)

validate_latency_ms = meter.create_histogram(
    name="shapecheck.validate.latency.ms",
    description="Time taken to build and evaluate a constraint for one value.",
    unit="ms",
)


def record_validation_metrics(
    value_type: str,
    outcome: str,
    started_at: float,
    *,
    violation_kind: Optional[str] = None,
) -> None:
    """Record the latency histogram and counters for one validate call.

    Args:
        value_type: Canonical type name of the validated value ("" for none)
        outcome: "passed", "failed" or "skipped"
        started_at: Timestamp from time.perf_counter() when validation started
        violation_kind: ``ConstraintError.kind`` of the violation, if any
    """
    try:
        duration_ms = (time.perf_counter() - started_at) * 1000.0
        attributes = {"value_type": value_type or "none", "outcome": outcome}
        validate_latency_ms.record(duration_ms, attributes)
        validate_total.add(1, attributes)
        if violation_kind:
            violation_total.add(1, {"kind": violation_kind})
    except Exception:
        # Telemetry must never interfere with validation results
        logger.debug("Failed to record validation metrics", exc_info=True)


__all__ = [
    "validate_total",
    "violation_total",
    "directive_unknown_total",
    "elements_tested_total",
    "validate_latency_ms",
    "record_validation_metrics",
]
