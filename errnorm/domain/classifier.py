"""Classify a remote call failure into an ``ErrorMap``.

A failure either never received a response (timeout, abort, connectivity)
or carries a response with a status code and a body. The first case maps to
a canned network/timeout message. The second runs the extractor on the body
and only falls back to the status message when the body held nothing
structured.

Call context:
    ``errnorm.usecases.error_mapping.handle`` builds a ``FailureView`` (via
    the requests adapter or ``describe_failure``) and calls ``classify``.
"""

from __future__ import annotations

from typing import Any, Optional

from .extractor import extract
from .messages import DEFAULT_CONFIG, GENERAL_KEY, HandlerConfig
from .ports import ErrorMap, FailureView
from .shape import lookup, text_of


def describe_failure(failure: Any) -> FailureView:
    """Read code/response attributes from a mapping or object failure."""
    if isinstance(failure, FailureView):
        return failure

    raw_code = lookup(failure, "code")
    code = text_of(raw_code) if isinstance(raw_code, str) else None

    # requests.Response is falsy for 4xx/5xx, so only absence counts.
    response = lookup(failure, "response")
    if response is None:
        return FailureView(code=code)

    status = _first_status(lookup(response, "status"), lookup(response, "status_code"))
    status_text = ""
    for key in ("statusText", "status_text", "reason"):
        status_text = text_of(lookup(response, key)) or ""
        if status_text:
            break
    body = lookup(response, "data")
    if body is None:
        body = lookup(response, "body")
    return FailureView(
        code=code,
        has_response=True,
        status=status,
        status_text=status_text,
        body=body,
    )


def looks_like_transport_failure(failure: Any) -> bool:
    """True when ``failure`` has a transport code or a response status."""
    return describe_failure(failure).is_transport_failure


def classify(
    failure: Any,
    fallback: Optional[str] = None,
    *,
    config: Optional[HandlerConfig] = None,
) -> ErrorMap:
    """Map a transport failure to a network, timeout or status-coded result.

    Structured field errors in the response body take priority over the
    generic status message.
    """
    cfg = config or DEFAULT_CONFIG
    view = describe_failure(failure)

    if not view.has_response:
        if view.code and view.code in cfg.timeout_codes:
            return {GENERAL_KEY: cfg.timeout_message}
        return {GENERAL_KEY: cfg.network_message}

    if view.status is None:
        return extract(view.body, fallback, config=cfg)

    status_message = cfg.status_message(view.status, view.status_text)
    specific = extract(view.body, config=cfg)
    if specific == {GENERAL_KEY: cfg.default_message}:
        return {GENERAL_KEY: status_message}
    return specific


def _first_status(*candidates: Any) -> Optional[int]:
    """Return the first positive status; ``0`` means no status was received."""
    for candidate in candidates:
        if isinstance(candidate, bool):
            continue
        if isinstance(candidate, str) and candidate.strip().isdigit():
            candidate = int(candidate.strip())
        if isinstance(candidate, int) and candidate > 0:
            return candidate
    return None


__all__ = ["classify", "describe_failure", "looks_like_transport_failure"]
