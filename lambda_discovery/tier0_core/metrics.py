"""
lambda_discovery.tier0_core.metrics
─────────────────────────────────────
Counters and histograms with standard naming and labels, exported through
the Prometheus client registry.

Stack: prometheus-client
Configure via: DISCOVERY_METRICS_ENABLED=true|false
               DISCOVERY_METRICS_PORT (default: 8001)
"""
from __future__ import annotations

import os
from typing import Callable

from prometheus_client import Counter, Histogram, start_http_server

# Standard labels applied to every metric
_DEFAULT_LABELS = ["service", "env"]
_SERVICE = os.getenv("APP_NAME", "lambda-discovery")
_ENV = os.getenv("APP_ENV", "development")
_DEFAULT_LABEL_VALUES = [_SERVICE, _ENV]
_DEFAULT_LABEL_KWARGS = dict(zip(_DEFAULT_LABELS, _DEFAULT_LABEL_VALUES))


def counter(name: str, description: str, labels: list[str] | None = None) -> Callable:
    """
    Create a counter with standard labels.

    Usage:
        probes_total = counter("discovery_integration_probes_total", "Probes", ["result"])
        probes_total(result="absent").inc()
    """
    all_labels = _DEFAULT_LABELS + (labels or [])
    c = Counter(name, description, all_labels)

    def _counter(**extra_labels: str) -> Counter:
        return c.labels(**_DEFAULT_LABEL_KWARGS, **extra_labels)

    return _counter


def histogram(
    name: str,
    description: str,
    labels: list[str] | None = None,
    buckets: tuple = (0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0, 60.0),
) -> Callable:
    """
    Create a histogram with standard labels.

    Resolution issues one request per (resource, method) probe, so the
    buckets reach further out than a typical request histogram.
    """
    all_labels = _DEFAULT_LABELS + (labels or [])
    h = Histogram(name, description, all_labels, buckets=buckets)

    def _histogram(**extra_labels: str) -> Histogram:
        return h.labels(**_DEFAULT_LABEL_KWARGS, **extra_labels)

    return _histogram


def start_metrics_server(port: int | None = None) -> None:
    """
    Start the Prometheus HTTP metrics server on a dedicated port.
    Call once at application startup.
    """
    port = port or int(os.getenv("DISCOVERY_METRICS_PORT", "8001"))
    start_http_server(port)


# ── Discovery metrics ─────────────────────────────────────────────────────────

resolutions_total = counter(
    "discovery_resolutions_total",
    "Endpoint resolutions by outcome",
    ["outcome"],
)

integration_probes_total = counter(
    "discovery_integration_probes_total",
    "API Gateway integration probes by result",
    ["result"],
)

resolution_duration = histogram(
    "discovery_resolution_duration_seconds",
    "Wall time of a full endpoint resolution",
)


__all__ = [
    "counter",
    "histogram",
    "start_metrics_server",
    "resolutions_total",
    "integration_probes_total",
    "resolution_duration",
]
