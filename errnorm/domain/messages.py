"""Canned user-facing messages and handler configuration.

Everything here is immutable and created once at import time, so the
constants can be read from any call site without coordination.

Call context:
    ``errnorm.domain.extractor`` and ``errnorm.domain.classifier`` read the
    key priority lists and ``DEFAULT_CONFIG``. Applications that need other
    wording build their own ``HandlerConfig`` via ``HandlerConfig.from_dict``.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Any, Dict, Mapping, Tuple

GENERAL_KEY = "general"

DEFAULT_ERROR_MESSAGE = "Something went wrong. Please try again."
NETWORK_ERROR_MESSAGE = "Network error. Please check your connection."
TIMEOUT_ERROR_MESSAGE = "Request timeout. Please try again."

STATUS_MESSAGES: Mapping[int, str] = MappingProxyType(
    {
        400: "Invalid request. Please check your input.",
        401: "Unauthorized. Please log in again.",
        403: "Access denied. You don't have permission.",
        404: "Resource not found.",
        409: "Conflict. Resource already exists.",
        422: "Validation failed. Please check your input.",
        429: "Too many requests. Please try again later.",
        500: "Internal server error. Please try again.",
        502: "Service temporarily unavailable.",
        503: "Service unavailable. Please try again later.",
        504: "Request timeout. Please try again.",
    }
)

# Transport codes meaning the request was aborted or timed out.
TIMEOUT_CODES: Tuple[str, ...] = ("ECONNABORTED", "ETIMEDOUT", "ERR_CANCELED")

# Envelope fields unwrapped once before walking, in priority order.
ENVELOPE_KEYS: Tuple[str, ...] = ("data", "message", "error")

# Keys whose value holds the actual errors of a mapping.
CONTAINER_KEYS: Tuple[str, ...] = (
    "errors",
    "error",
    "validationErrors",
    "fieldErrors",
    "data",
    "details",
    "issues",
    "problems",
)

# Keys tried (dotted paths allowed) when no field errors were found.
MESSAGE_PATHS: Tuple[str, ...] = (
    "message",
    "error",
    "detail",
    "description",
    "msg",
    "errorMessage",
    "general",
    "summary",
    "title",
    "text",
    "content",
)

MAX_DEPTH = 32

# Node limit for the last-resort JSON rendering of a payload.
SERIALIZE_BUDGET = 1000


@dataclass(frozen=True)
class HandlerConfig:
    """Wording and limits used by the extractor and the classifier."""

    default_message: str = DEFAULT_ERROR_MESSAGE
    network_message: str = NETWORK_ERROR_MESSAGE
    timeout_message: str = TIMEOUT_ERROR_MESSAGE
    status_messages: Mapping[int, str] = field(default_factory=lambda: STATUS_MESSAGES)
    timeout_codes: Tuple[str, ...] = TIMEOUT_CODES
    max_depth: int = MAX_DEPTH

    def status_message(self, status: int, status_text: str = "") -> str:
        """Return the canned message for ``status`` or synthesize one."""
        canned = self.status_messages.get(status)
        if canned:
            return canned
        text = (status_text or "").strip()
        if text:
            return f"Error {status}: {text}"
        return f"Error {status}"

    def with_status_messages(self, overrides: Mapping[Any, Any]) -> "HandlerConfig":
        """Return a copy whose status table is merged with ``overrides``."""
        merged = dict(self.status_messages)
        merged.update(_coerce_status_map(overrides))
        return replace(self, status_messages=MappingProxyType(merged))

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "HandlerConfig":
        """Build a config from flat keys, validating every value."""
        if not isinstance(payload, Mapping):
            raise ValueError("Handler config payload must be a mapping of flat keys.")

        allowed = set(cls.__dataclass_fields__.keys())
        unknown = set(payload.keys()) - allowed
        if unknown:
            raise ValueError(
                f"Unsupported handler config keys: {', '.join(sorted(str(key) for key in unknown))}"
            )

        config = cls()
        updates: Dict[str, Any] = {}
        for key in ("default_message", "network_message", "timeout_message"):
            if key in payload:
                updates[key] = _coerce_message(key, payload[key])
        if "timeout_codes" in payload:
            updates["timeout_codes"] = _coerce_codes(payload["timeout_codes"])
        if "max_depth" in payload:
            updates["max_depth"] = _coerce_depth(payload["max_depth"])
        if updates:
            config = replace(config, **updates)
        if "status_messages" in payload:
            config = config.with_status_messages(payload["status_messages"])
        return config

    def to_dict(self) -> dict:
        return {
            "default_message": self.default_message,
            "network_message": self.network_message,
            "timeout_message": self.timeout_message,
            "status_messages": dict(self.status_messages),
            "timeout_codes": list(self.timeout_codes),
            "max_depth": self.max_depth,
        }


def _coerce_message(name: str, value: Any) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValueError(f"{name} must be a non-empty string.")
    return value.strip()


def _coerce_codes(value: Any) -> Tuple[str, ...]:
    if isinstance(value, str):
        value = value.split(",")
    if not isinstance(value, (list, tuple, set, frozenset)):
        raise ValueError("timeout_codes must be a list of strings.")
    codes = tuple(str(code).strip() for code in value if str(code).strip())
    if not codes:
        raise ValueError("timeout_codes must not be empty.")
    return codes


def _coerce_depth(value: Any) -> int:
    if isinstance(value, bool):
        raise ValueError("max_depth must be an integer.")
    try:
        depth = int(value)
    except (TypeError, ValueError) as exc:
        raise ValueError("max_depth must be an integer.") from exc
    if depth < 1:
        raise ValueError("max_depth must be positive.")
    return depth


def _coerce_status_map(value: Any) -> Dict[int, str]:
    if not isinstance(value, Mapping):
        raise ValueError("status_messages must be a mapping.")
    normalized: Dict[int, str] = {}
    for raw_key, raw_val in value.items():
        if isinstance(raw_key, bool):
            raise ValueError(f"status_messages contains unsupported status '{raw_key}'.")
        try:
            status = int(str(raw_key).strip())
        except ValueError as exc:
            raise ValueError(f"status_messages contains unsupported status '{raw_key}'.") from exc
        normalized[status] = _coerce_message(f"status_messages[{status}]", raw_val)
    return normalized


DEFAULT_CONFIG = HandlerConfig()


__all__ = [
    "CONTAINER_KEYS",
    "DEFAULT_CONFIG",
    "DEFAULT_ERROR_MESSAGE",
    "ENVELOPE_KEYS",
    "GENERAL_KEY",
    "HandlerConfig",
    "MAX_DEPTH",
    "MESSAGE_PATHS",
    "NETWORK_ERROR_MESSAGE",
    "SERIALIZE_BUDGET",
    "STATUS_MESSAGES",
    "TIMEOUT_CODES",
    "TIMEOUT_ERROR_MESSAGE",
]
