"""Where: src/snapdiff/config/settings.py
What: Derived runtime constants sourced from the environment.
Why: Expose validated constants to feature layers without file I/O.
Trade-offs: - Validation is limited to simple boundary checks for speed.
"""

from __future__ import annotations

import os


def _env_flag(name: str, default: bool = False) -> bool:
    raw = os.environ.get(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("true", "1", "yes")


def _env_float(name: str, default: float, minimum: float) -> float:
    try:
        value = float(os.environ.get(name, default))
    except ValueError:
        return default
    return value if value >= minimum else default


# Diagnostics -----------------------------------------------------------------

# Dump recorded CSS and snippets per target into the temp directory.
VERBOSE: bool = _env_flag("SNAPDIFF_VERBOSE")


# Service identity ------------------------------------------------------------

APP_NAME: str = "snapdiff"
APP_VERSION: str = "0.1.0"
DEFAULT_ENDPOINT: str = "http://localhost:4432"


# HTTP behaviour --------------------------------------------------------------

HTTP_MAX_ATTEMPTS: int = 3
HTTP_CONNECT_TIMEOUT: float = 5.0
HTTP_READ_TIMEOUT: float = _env_float("SNAPDIFF_HTTP_TIMEOUT", 60.0, 1.0)

# Interval between status polls for synchronous remote comparisons.
POLL_INTERVAL_SECONDS: float = _env_float("SNAPDIFF_POLL_INTERVAL", 2.0, 0.0)


__all__ = [
    "APP_NAME",
    "APP_VERSION",
    "DEFAULT_ENDPOINT",
    "HTTP_CONNECT_TIMEOUT",
    "HTTP_MAX_ATTEMPTS",
    "HTTP_READ_TIMEOUT",
    "POLL_INTERVAL_SECONDS",
    "VERBOSE",
]
