"""Typed HTTP failures and ``requests`` integration.

HTTP clients raise the ``ApiError`` family from non-2xx responses via
``raise_for_response``. ``describe_requests_failure`` turns those errors, raw
``requests`` exceptions and ``requests.Response`` objects into the
``FailureView`` consumed by the classifier.

Dependencies:
    - ``requests`` for response and exception types.
    - ``errnorm.domain`` for the view type and message extraction.
"""

from __future__ import annotations

from http import HTTPStatus
from typing import Any, Optional

import requests
from requests import exceptions as req_exc

from errnorm.domain.extractor import extract
from errnorm.domain.messages import DEFAULT_ERROR_MESSAGE, GENERAL_KEY
from errnorm.domain.ports import FailureView

TIMEOUT_CODE = "ETIMEDOUT"
CONNECTION_CODE = "ECONNREFUSED"
NETWORK_CODE = "ERR_NETWORK"


class ApiError(RuntimeError):
    """Base class for REST client failures."""

    def __init__(
        self,
        message: str,
        *,
        status: Optional[int] = None,
        code: Optional[str] = None,
        payload: Any = None,
        context: Optional[str] = None,
        reason: str = "",
    ) -> None:
        super().__init__(message)
        self.status = status
        self.code = code
        self.payload = payload
        self.context = context
        self.reason = reason


class ApiClientError(ApiError):
    """HTTP 4xx from the remote API."""

    def __init__(
        self,
        message: str,
        *,
        status: int,
        code: Optional[str] = None,
        payload: Any = None,
        context: Optional[str] = None,
        reason: str = "",
    ) -> None:
        super().__init__(
            message,
            status=status,
            code=code,
            payload=payload,
            context=context,
            reason=reason,
        )


class ApiServerError(ApiError):
    """HTTP 5xx from the remote API."""

    def __init__(
        self,
        message: str,
        *,
        status: int,
        payload: Any = None,
        context: Optional[str] = None,
        reason: str = "",
    ) -> None:
        super().__init__(
            message,
            status=status,
            payload=payload,
            context=context,
            reason=reason,
        )


class ApiTimeoutError(ApiError):
    """Transport level timeout or connectivity failure."""

    def __init__(
        self,
        message: str,
        *,
        context: Optional[str] = None,
    ) -> None:
        super().__init__(message, code=TIMEOUT_CODE, context=context)


def parse_error_payload(resp: Any) -> Any:
    """Best-effort extraction of error payload without raising."""
    try:
        return resp.json()
    except Exception:
        snippet = getattr(resp, "text", "")
        if not snippet:
            return None
        return snippet[:400]


def build_error_message(ctx: str, status: int, payload: Any) -> str:
    detail = _first_message(payload)
    if detail:
        return f"{ctx}: {detail} (HTTP {status})"
    return f"{ctx}: HTTP {status}"


def extract_error_code(payload: Any) -> Optional[str]:
    if isinstance(payload, dict):
        for key in ("code", "error_code", "errorCode"):
            value = payload.get(key)
            if value is None or isinstance(value, (dict, list)):
                continue
            if isinstance(value, str):
                return value
            return str(value)
    return None


def raise_for_response(resp: requests.Response, ctx: str) -> None:
    """Raise the matching ``ApiError`` subclass for a non-2xx response."""
    if 200 <= resp.status_code < 300:
        return
    status = resp.status_code
    reason = resp.reason or ""
    payload = parse_error_payload(resp)
    message = build_error_message(ctx, status, payload)
    if 400 <= status < 500:
        raise ApiClientError(
            message,
            status=status,
            code=extract_error_code(payload),
            payload=payload,
            context=ctx,
            reason=reason,
        )
    if 500 <= status < 600:
        raise ApiServerError(
            message,
            status=status,
            payload=payload,
            context=ctx,
            reason=reason,
        )
    raise ApiError(message, status=status, payload=payload, context=ctx, reason=reason)


def describe_requests_failure(failure: Any) -> Optional[FailureView]:
    """Return a ``FailureView`` for ``ApiError``/``requests`` failures.

    Returns ``None`` for anything else so callers can fall back to generic
    attribute inspection.
    """
    if isinstance(failure, ApiError):
        if failure.status is None:
            return FailureView(code=(failure.code or "").strip() or NETWORK_CODE)
        return FailureView(
            has_response=True,
            status=failure.status,
            status_text=failure.reason or _phrase(failure.status),
            body=failure.payload,
        )
    if isinstance(failure, requests.Response):
        return _response_view(failure)
    if isinstance(failure, req_exc.RequestException):
        response = getattr(failure, "response", None)
        if response is not None:
            return _response_view(response)
        # ConnectTimeout is both a Timeout and a ConnectionError.
        if isinstance(failure, req_exc.Timeout):
            return FailureView(code=TIMEOUT_CODE)
        if isinstance(failure, req_exc.ConnectionError):
            return FailureView(code=CONNECTION_CODE)
        return FailureView(code=NETWORK_CODE)
    return None


def _response_view(resp: Any) -> FailureView:
    status = getattr(resp, "status_code", None)
    if not isinstance(status, int):
        status = None
    reason = getattr(resp, "reason", None) or ""
    return FailureView(
        has_response=True,
        status=status,
        status_text=str(reason) or (_phrase(status) if status else ""),
        body=parse_error_payload(resp),
    )


def _phrase(status: int) -> str:
    try:
        return HTTPStatus(status).phrase
    except ValueError:
        return ""


def _first_message(payload: Any) -> Optional[str]:
    if payload is None:
        return None
    errors = extract(payload)
    if errors == {GENERAL_KEY: DEFAULT_ERROR_MESSAGE}:
        return None
    message = errors.get(GENERAL_KEY) or next(iter(errors.values()))
    return message[:200]


__all__ = [
    "ApiClientError",
    "ApiError",
    "ApiServerError",
    "ApiTimeoutError",
    "build_error_message",
    "describe_requests_failure",
    "extract_error_code",
    "parse_error_payload",
    "raise_for_response",
]
