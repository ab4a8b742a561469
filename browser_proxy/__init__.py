"""Browser Proxy Server Package.

This package provides a token-authenticated WebSocket proxy in front of a
small pool of browser backends. The server handles:

- Lazy launch of at most one backend process per channel type
  (chromium, firefox, webkit)
- Shared-secret authentication of relay upgrades
- Transparent full-duplex frame relay between clients and backends
- Idle reclamation of backends nobody has used for a while

Architecture Overview:
    - server.py: FastAPI application factory (health + relay routes)
    - config/: Configuration modules (environment-based)
    - backends/: Launchers, the session table and the idle reclaimer
    - handlers/: WebSocket auth, relay state machine and frame pump
    - state/: Channel types and backend session records
    - errors/: Exception taxonomy
    - helpers/: Shared utility functions
    - telemetry/: Sentry error capture and OTel metrics

Example:
    Start the server:

    $ REMOTE_BROWSER_SERVER_AUTH_TOKEN=secret python -m browser_proxy

Environment Variables:
    Required:
        - REMOTE_BROWSER_SERVER_AUTH_TOKEN: Shared secret for relay upgrades

    Optional:
        - PORT: Listening port (default: 3000)
        - AUTO_CLOSE_TIMEOUT: Idle timeout in milliseconds (default: 60000)
        - IDLE_SWEEP_INTERVAL_S: Seconds between idle sweeps (default: 10)
        - LOG_LEVEL: debug, info, warning or error (default: info)
        - BACKEND_LAUNCH_COMMAND: Backend command template
        - SENTRY_DSN: Enables Sentry error reporting
        - OTLP_METRICS_ENDPOINT: Enables OTel metric export
"""
