# Copyright (c) 2025 Artoo Corporation
# Licensed under the Business Source License 1.1 (see LICENSE).
# Change Date: 2029-09-08  •  Change License: LGPL-3.0-or-later

"""Shared fixtures for the shapecheck test-suite.

Settings and the process-wide evaluator are cached at module level, so every
test starts from a clean environment and drops both caches on the way in and
out.
"""

from __future__ import annotations

import random

import pytest

from shapecheck.config import RANDOM_SEED_ENV, WARN_UNKNOWN_ENV, reset_settings
from shapecheck.runtime import reset_evaluator
from shapecheck.validation import ConstraintEvaluator


@pytest.fixture(autouse=True)
def _clean_environment(monkeypatch):
    monkeypatch.delenv(RANDOM_SEED_ENV, raising=False)
    monkeypatch.delenv(WARN_UNKNOWN_ENV, raising=False)
    reset_settings()
    reset_evaluator()
    yield
    reset_settings()
    reset_evaluator()


@pytest.fixture
def rng():
    """A seeded random source so sampled traversal is reproducible."""

    return random.Random(1234)


@pytest.fixture
def evaluator(rng):
    return ConstraintEvaluator(rng=rng)


class Recorder:
    """Stand-in for an OpenTelemetry counter or histogram."""

    def __init__(self):
        self.calls = []

    def add(self, amount, attributes=None):
        self.calls.append((amount, dict(attributes or {})))

    def record(self, amount, attributes=None):
        self.calls.append((amount, dict(attributes or {})))


@pytest.fixture
def recorder_factory():
    return Recorder
