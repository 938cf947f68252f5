"""Entry points that turn any failure into user-facing error data."""

from __future__ import annotations

import logging
from typing import Any, Optional

from errnorm.adapters.api_errors import describe_requests_failure
from errnorm.domain.classifier import classify, describe_failure
from errnorm.domain.extractor import extract
from errnorm.domain.messages import DEFAULT_CONFIG, GENERAL_KEY, HandlerConfig
from errnorm.domain.ports import ErrorMap, FailureView, UseCaseError
from errnorm.domain.shape import text_of
from errnorm.utils.logging import describe_for_log, failure_log_level

log = logging.getLogger(__name__)


def handle(
    error: Any,
    fallback: Optional[str] = None,
    *,
    config: Optional[HandlerConfig] = None,
) -> ErrorMap:
    """Normalize ``error`` into an ``ErrorMap``.

    Transport failures (a code or a response status) go through the
    classifier, everything else straight through the extractor. The failure
    is logged for diagnostics; logging never changes the result.

    Args:
        error: Exception, response, mapping or raw payload.
        fallback: Message used when nothing better can be derived.
        config: Wording and limits, ``DEFAULT_CONFIG`` when omitted.

    Returns:
        ErrorMap: Non-empty field -> message mapping.
    """
    level = failure_log_level()
    if log.isEnabledFor(level):
        log.log(level, "Error occurred: %s", describe_for_log(error))
    view = _failure_view(error)
    if view.is_transport_failure:
        return classify(view, fallback, config=config)
    return extract(error, fallback, config=config)


def get_toast_message(
    error: Any,
    fallback: Optional[str] = None,
    *,
    config: Optional[HandlerConfig] = None,
) -> str:
    """Return one non-empty message suitable for a toast notification."""
    cfg = config or DEFAULT_CONFIG
    fallback_text = text_of(fallback) or cfg.default_message
    errors = handle(error, fallback_text, config=cfg)
    general = errors.get(GENERAL_KEY)
    if general:
        return general
    for message in errors.values():
        if message:
            return message
    return fallback_text


def map_api_error(
    exc: Exception,
    *,
    fallback: Optional[str] = None,
    config: Optional[HandlerConfig] = None,
) -> UseCaseError:
    """Map any failure to a ``UseCaseError`` with a stable code.

    The error carries the toast message as ``message`` and the full map as
    ``errors`` so forms can highlight individual fields.
    """
    if isinstance(exc, UseCaseError):
        return exc
    cfg = config or DEFAULT_CONFIG
    errors = handle(exc, fallback, config=cfg)
    message = errors.get(GENERAL_KEY) or next(iter(errors.values()))
    return UseCaseError(_error_code(_failure_view(exc), errors, cfg), message, errors)


def _failure_view(error: Any) -> FailureView:
    return describe_requests_failure(error) or describe_failure(error)


def _error_code(view: FailureView, errors: ErrorMap, cfg: HandlerConfig) -> str:
    if not view.is_transport_failure:
        return "UNEXPECTED_ERROR"
    if not view.has_response:
        if view.code in cfg.timeout_codes:
            return "REQUEST_TIMEOUT"
        return "NETWORK_ERROR"
    status = view.status or 0
    if status == 422 and set(errors) != {GENERAL_KEY}:
        return "INVALID_PARAMS"
    if status in (401, 403):
        return "AUTH_FAILED"
    if 400 <= status < 500:
        return "REQUEST_FAILED"
    if 500 <= status < 600:
        return "SERVER_ERROR"
    return "UNEXPECTED_ERROR"


__all__ = ["get_toast_message", "handle", "map_api_error"]
