"""Telemetry package - OpenTelemetry instruments for validation runs."""

from .metrics import (
    directive_unknown_total,
    elements_tested_total,
    record_validation_metrics,
    validate_latency_ms,
    validate_total,
    violation_total,
)
from .runtime import get_tracer, meter

__all__ = [
    "meter",
    "get_tracer",
    "validate_total",
    "violation_total",
    "directive_unknown_total",
    "elements_tested_total",
    "validate_latency_ms",
    "record_validation_metrics",
]
