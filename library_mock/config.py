"""Runtime settings read from the environment.

Enable response debug metadata with:
  MOCK_DEBUG=1

Listener settings:
  MOCK_HOST (default 0.0.0.0), MOCK_PORT (default 3002), MOCK_LOG_LEVEL (default info)
"""

from __future__ import annotations

import os
from dataclasses import dataclass

DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 3002
DEFAULT_LOG_LEVEL = "info"


def _truthy(value: str | None) -> bool:
    v = (value or "").strip().lower()
    return v in {"1", "true", "yes", "y", "on"}


def debug_enabled() -> bool:
    return _truthy(os.getenv("MOCK_DEBUG"))


@dataclass(frozen=True, slots=True)
class Settings:
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    log_level: str = DEFAULT_LOG_LEVEL
    debug: bool = False


def load_settings() -> Settings:
    port_raw = (os.getenv("MOCK_PORT") or "").strip()
    return Settings(
        host=os.getenv("MOCK_HOST", DEFAULT_HOST),
        port=int(port_raw) if port_raw else DEFAULT_PORT,
        log_level=os.getenv("MOCK_LOG_LEVEL", DEFAULT_LOG_LEVEL).lower(),
        debug=debug_enabled(),
    )
