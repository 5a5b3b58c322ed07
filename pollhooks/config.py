"""Poller configuration defaults."""

import os

# Polling cadence (milliseconds)
DEFAULT_INTERVAL_MS = float(os.environ.get("POLLHOOKS_INTERVAL_MS", "5000"))
DEFAULT_MAX_INTERVAL_MS = float(os.environ.get("POLLHOOKS_MAX_INTERVAL_MS", "60000"))

# Multiplier applied to the interval on every idle cycle
DEFAULT_BACKOFF_MULTIPLIER = float(os.environ.get("POLLHOOKS_BACKOFF_MULTIPLIER", "1.5"))

# HTTP work source request timeout (seconds)
HTTP_TIMEOUT_SECONDS = float(os.environ.get("POLLHOOKS_HTTP_TIMEOUT", "10"))

# Collected config dict for easy access
POLLER_CONFIG = {
    "interval_ms": DEFAULT_INTERVAL_MS,
    "max_interval_ms": DEFAULT_MAX_INTERVAL_MS,
    "backoff_multiplier": DEFAULT_BACKOFF_MULTIPLIER,
    "http_timeout_seconds": HTTP_TIMEOUT_SECONDS,
}
