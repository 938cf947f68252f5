"""Logging helpers for handled failures.

``handle`` logs every failure it normalizes. Applications that show the
resulting toast themselves often do not want the same failure echoed at
ERROR, so the level is read from the environment on each call:

  - ERRNORM_LOG_LEVEL: explicit level (name or number)
  - ERRNORM_QUIET: truthy -> DEBUG
"""

from __future__ import annotations

import logging
import os
from typing import Any, Optional

_LEVEL_ENV_VAR = "ERRNORM_LOG_LEVEL"
_QUIET_FLAG = "ERRNORM_QUIET"
_REPR_LIMIT = 300


def _coerce_level(value: Optional[str], fallback: int) -> int:
    if not value:
        return fallback
    text = value.strip()
    if not text:
        return fallback
    if text.isdigit():
        return int(text)
    candidate = logging.getLevelName(text.upper())
    if isinstance(candidate, int):
        return candidate
    return fallback


def _env_truthy(value: Optional[str]) -> bool:
    if value is None:
        return False
    return value.strip().lower() in {"1", "true", "yes", "on"}


def failure_log_level(default: int = logging.ERROR) -> int:
    """Return the level handled failures are logged at."""
    explicit = os.getenv(_LEVEL_ENV_VAR)
    if explicit and explicit.strip():
        return _coerce_level(explicit, default)
    if _env_truthy(os.getenv(_QUIET_FLAG)):
        return logging.DEBUG
    return default


def describe_for_log(error: Any, limit: int = _REPR_LIMIT) -> str:
    """Truncated ``repr`` that never raises."""
    try:
        text = repr(error)
    except Exception:
        text = f"<{type(error).__name__} (unrepresentable)>"
    if len(text) > limit:
        return text[:limit] + "..."
    return text


def install_null_handler(name: str = "errnorm") -> logging.Logger:
    """Attach a ``NullHandler`` once so library logs stay silent by default."""
    logger = logging.getLogger(name)
    if not any(isinstance(h, logging.NullHandler) for h in logger.handlers):
        logger.addHandler(logging.NullHandler())
    return logger


__all__ = ["describe_for_log", "failure_log_level", "install_null_handler"]
