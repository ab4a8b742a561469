"""Telemetry configuration: env vars, metric specs, Sentry constants."""

import os

# ---------------------------------------------------------------------------
# Sentry
# ---------------------------------------------------------------------------
SENTRY_DSN: str = os.getenv("SENTRY_DSN", "")
SENTRY_ENVIRONMENT: str = os.getenv("SENTRY_ENVIRONMENT", "production")
SENTRY_RELEASE: str = os.getenv("SENTRY_RELEASE", "")
SENTRY_SAMPLE_RATE: float = float(os.getenv("SENTRY_SAMPLE_RATE", "1.0"))

# ---------------------------------------------------------------------------
# OTel metrics export (disabled while the endpoint is empty)
# ---------------------------------------------------------------------------
OTLP_METRICS_ENDPOINT: str = os.getenv("OTLP_METRICS_ENDPOINT", "")
OTLP_API_TOKEN: str = os.getenv("OTLP_API_TOKEN", "")
OTEL_SERVICE_NAME: str = os.getenv("OTEL_SERVICE_NAME", "browser-proxy")
OTEL_ENVIRONMENT: str = os.getenv("OTEL_ENVIRONMENT", "production")
OTEL_METRICS_EXPORT_INTERVAL_MS: int = int(os.getenv("OTEL_METRICS_EXPORT_INTERVAL_MS", "15000"))

# ---------------------------------------------------------------------------
# Metric spec tuples: (name, unit, description)
# ---------------------------------------------------------------------------

# Histograms
METRIC_BACKEND_LAUNCH_DURATION = ("browser_proxy.backend_launch_duration", "s", "Backend process startup time")
METRIC_RELAY_DURATION = ("browser_proxy.relay_duration", "s", "Client/backend pairing lifetime")

# Counters
METRIC_BACKEND_LAUNCHES_TOTAL = ("browser_proxy.backend_launches_total", "{launch}", "Backends started")
METRIC_BACKEND_LAUNCH_FAILURES_TOTAL = (
    "browser_proxy.backend_launch_failures_total",
    "{launch}",
    "Backend launches that failed",
)
METRIC_BACKENDS_RECLAIMED_TOTAL = (
    "browser_proxy.backends_reclaimed_total",
    "{backend}",
    "Backends released for inactivity",
)
METRIC_UPGRADES_REJECTED_TOTAL = (
    "browser_proxy.upgrades_rejected_total",
    "{upgrade}",
    "Relay upgrades refused before acceptance",
)
METRIC_ERRORS_TOTAL = ("browser_proxy.errors_total", "{error}", "Unexpected relay errors")

# UpDown counters
METRIC_ACTIVE_RELAYS = ("browser_proxy.active_relays", "{relay}", "Currently bridged client connections")

# ---------------------------------------------------------------------------
# Sentry constants
# ---------------------------------------------------------------------------
SENTRY_RATE_LIMIT_S: float = 10.0
SENTRY_TAG_CHANNEL = "channel"
SENTRY_TAG_SESSION_ID = "session_id"
SENTRY_TAG_CLIENT = "client"


__all__ = [
    # Sentry env
    "SENTRY_DSN",
    "SENTRY_ENVIRONMENT",
    "SENTRY_RELEASE",
    "SENTRY_SAMPLE_RATE",
    # OTel env
    "OTLP_METRICS_ENDPOINT",
    "OTLP_API_TOKEN",
    "OTEL_SERVICE_NAME",
    "OTEL_ENVIRONMENT",
    "OTEL_METRICS_EXPORT_INTERVAL_MS",
    # Histograms
    "METRIC_BACKEND_LAUNCH_DURATION",
    "METRIC_RELAY_DURATION",
    # Counters
    "METRIC_BACKEND_LAUNCHES_TOTAL",
    "METRIC_BACKEND_LAUNCH_FAILURES_TOTAL",
    "METRIC_BACKENDS_RECLAIMED_TOTAL",
    "METRIC_UPGRADES_REJECTED_TOTAL",
    "METRIC_ERRORS_TOTAL",
    # UpDown counters
    "METRIC_ACTIVE_RELAYS",
    # Sentry constants
    "SENTRY_RATE_LIMIT_S",
    "SENTRY_TAG_CHANNEL",
    "SENTRY_TAG_SESSION_ID",
    "SENTRY_TAG_CLIENT",
]
