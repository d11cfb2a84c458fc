# Copyright (c) 2025 Artoo Corporation
# Licensed under the Business Source License 1.1 (see LICENSE).
# Change Date: 2029-09-08  •  Change License: LGPL-3.0-or-later

"""OpenTelemetry handles shared by the shapecheck instruments.

Only the OpenTelemetry API is used here. Until the host application installs
an SDK meter/tracer provider every instrument and span is a no-op.
"""

from __future__ import annotations

from opentelemetry import metrics, trace

meter = metrics.get_meter("shapecheck")


def get_tracer(name: str = "shapecheck"):
    """Return a tracer for *name* from the globally configured provider."""

    return trace.get_tracer(name)


__all__ = ["meter", "get_tracer"]
