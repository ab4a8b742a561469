"""MetricInstruments registry: typed accessors for the proxy's OTel instruments."""

from __future__ import annotations

import logging

from opentelemetry import metrics

from ..config.telemetry import (
    OTEL_SERVICE_NAME,
    METRIC_ERRORS_TOTAL,
    METRIC_ACTIVE_RELAYS,
    METRIC_RELAY_DURATION,
    METRIC_BACKEND_LAUNCHES_TOTAL,
    METRIC_BACKEND_LAUNCH_DURATION,
    METRIC_UPGRADES_REJECTED_TOTAL,
    METRIC_BACKENDS_RECLAIMED_TOTAL,
    METRIC_BACKEND_LAUNCH_FAILURES_TOTAL,
)

logger = logging.getLogger(__name__)


def _histogram(meter: metrics.Meter, spec: tuple[str, str, str]) -> metrics.Histogram:
    name, unit, desc = spec
    return meter.create_histogram(name, unit=unit, description=desc)


def _counter(meter: metrics.Meter, spec: tuple[str, str, str]) -> metrics.Counter:
    name, unit, desc = spec
    return meter.create_counter(name, unit=unit, description=desc)


def _updown(meter: metrics.Meter, spec: tuple[str, str, str]) -> metrics.UpDownCounter:
    name, unit, desc = spec
    return meter.create_up_down_counter(name, unit=unit, description=desc)


class MetricInstruments:
    """Holds every OTel instrument the proxy records into."""

    __slots__ = (
        "backend_launch_duration",
        "relay_duration",
        "backend_launches_total",
        "backend_launch_failures_total",
        "backends_reclaimed_total",
        "upgrades_rejected_total",
        "errors_total",
        "active_relays",
    )

    def __init__(self, meter: metrics.Meter) -> None:
        # Histograms
        self.backend_launch_duration = _histogram(meter, METRIC_BACKEND_LAUNCH_DURATION)
        self.relay_duration = _histogram(meter, METRIC_RELAY_DURATION)
        # Counters
        self.backend_launches_total = _counter(meter, METRIC_BACKEND_LAUNCHES_TOTAL)
        self.backend_launch_failures_total = _counter(meter, METRIC_BACKEND_LAUNCH_FAILURES_TOTAL)
        self.backends_reclaimed_total = _counter(meter, METRIC_BACKENDS_RECLAIMED_TOTAL)
        self.upgrades_rejected_total = _counter(meter, METRIC_UPGRADES_REJECTED_TOTAL)
        self.errors_total = _counter(meter, METRIC_ERRORS_TOTAL)
        # UpDown counters
        self.active_relays = _updown(meter, METRIC_ACTIVE_RELAYS)


_metrics: MetricInstruments | None = None


def get_metrics() -> MetricInstruments:
    """Return the global MetricInstruments (no-op meter if OTel not initialized)."""
    global _metrics  # noqa: PLW0603
    if _metrics is None:
        _metrics = MetricInstruments(metrics.get_meter(OTEL_SERVICE_NAME))
    return _metrics


def initialize_metrics() -> None:
    """Rebuild MetricInstruments from the current global meter provider."""
    global _metrics  # noqa: PLW0603
    _metrics = MetricInstruments(metrics.get_meter(OTEL_SERVICE_NAME))
    logger.info("Telemetry metrics initialized")


__all__ = ["MetricInstruments", "get_metrics", "initialize_metrics"]
