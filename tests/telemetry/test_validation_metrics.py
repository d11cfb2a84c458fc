# Copyright (c) 2025 Artoo Corporation
# Licensed under the Business Source License 1.1 (see LICENSE).
# Change Date: 2029-09-08  •  Change License: LGPL-3.0-or-later

"""Telemetry emitted by the builder, traversal and validate entry point."""

from __future__ import annotations

import pytest
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import SimpleSpanProcessor
from opentelemetry.sdk.trace.export.in_memory_span_exporter import InMemorySpanExporter

from shapecheck import validate


@pytest.fixture
def counters(monkeypatch, recorder_factory):
    recorders = {name: recorder_factory() for name in ("validate", "violation", "latency", "unknown", "elements")}
    monkeypatch.setattr("shapecheck.telemetry.metrics.validate_total", recorders["validate"])
    monkeypatch.setattr("shapecheck.telemetry.metrics.violation_total", recorders["violation"])
    monkeypatch.setattr("shapecheck.telemetry.metrics.validate_latency_ms", recorders["latency"])
    monkeypatch.setattr("shapecheck.grammar.builder.directive_unknown_total", recorders["unknown"])
    monkeypatch.setattr("shapecheck.validation.traversal.elements_tested_total", recorders["elements"])
    return recorders


@pytest.fixture
def spans(monkeypatch):
    exporter = InMemorySpanExporter()
    provider = TracerProvider()
    provider.add_span_processor(SimpleSpanProcessor(exporter))
    monkeypatch.setattr("shapecheck.runtime.validator.get_tracer", lambda name="shapecheck": provider.get_tracer(name))
    return exporter


def test_failed_validation_is_counted(counters):
    validate(11, "max=10")

    assert counters["validate"].calls == [(1, {"value_type": "number", "outcome": "failed"})]
    assert counters["violation"].calls == [(1, {"kind": "range"})]
    assert len(counters["latency"].calls) == 1


def test_passed_and_skipped_outcomes(counters):
    validate("abc", "minLength=1")
    validate(None, "")

    assert [attrs["outcome"] for _, attrs in counters["validate"].calls] == ["passed", "skipped"]
    assert counters["validate"].calls[1][1]["value_type"] == "none"
    assert counters["violation"].calls == []


def test_unknown_directives_are_counted(counters):
    validate(1, "foobar,bazqux")

    assert counters["unknown"].calls == [(1, {"value_type": "number"}), (1, {"value_type": "number"})]


def test_tested_elements_are_counted(counters):
    validate([1, "a", 2], "each(number,positive)")

    assert sum(amount for amount, _ in counters["elements"].calls) == 2


def test_telemetry_failures_never_reach_the_caller(monkeypatch):
    class _Broken:
        def add(self, *_args, **_kwargs):
            raise RuntimeError("exporter down")

        def record(self, *_args, **_kwargs):
            raise RuntimeError("exporter down")

    monkeypatch.setattr("shapecheck.telemetry.metrics.validate_total", _Broken())
    monkeypatch.setattr("shapecheck.telemetry.metrics.validate_latency_ms", _Broken())

    assert validate(5, "min=1") == ""
    assert validate(0, "min=1") != ""


def test_validate_span_attributes(spans):
    validate(11, "max=10")
    validate(3, "max=10")

    finished = spans.get_finished_spans()
    assert [span.name for span in finished] == ["shapecheck.validate", "shapecheck.validate"]
    assert finished[0].attributes["shapecheck.value_type"] == "number"
    assert finished[0].attributes["shapecheck.allowed"] is False
    assert finished[0].attributes["shapecheck.violation.kind"] == "range"
    assert finished[1].attributes["shapecheck.allowed"] is True
