from __future__ import annotations

import json
import logging
from typing import Any

import pytest
import requests
from requests import exceptions as req_exc

from errnorm.adapters.api_errors import ApiClientError, ApiError, ApiServerError, ApiTimeoutError
from errnorm.domain.messages import (
    DEFAULT_ERROR_MESSAGE,
    NETWORK_ERROR_MESSAGE,
    TIMEOUT_ERROR_MESSAGE,
    HandlerConfig,
)
from errnorm.domain.ports import UseCaseError
from errnorm.usecases.error_mapping import get_toast_message, handle, map_api_error

FB = "Fallback message."


def _response(status: int, body: Any = None, reason: str = "") -> requests.Response:
    resp = requests.Response()
    resp.status_code = status
    resp.reason = reason
    resp.encoding = "utf-8"
    resp._content = b"" if body is None else json.dumps(body).encode("utf-8")
    return resp


def test_handle_dispatches_transport_failures_to_classifier() -> None:
    assert handle({"code": "ECONNABORTED"}, FB) == {"general": TIMEOUT_ERROR_MESSAGE}
    assert handle({"response": {"status": 404, "data": {}}}, FB) == {"general": "Resource not found."}


def test_handle_dispatches_plain_payloads_to_extractor() -> None:
    assert handle({"email": ["bad"]}, FB) == {"email": "bad"}
    assert handle(None, FB) == {"general": FB}
    assert handle(ValueError("Broken input"), FB) == {"general": "Broken input"}


def test_handle_requests_failures() -> None:
    assert handle(req_exc.ReadTimeout("read timed out"), FB) == {"general": TIMEOUT_ERROR_MESSAGE}
    assert handle(req_exc.ConnectionError("refused"), FB) == {"general": NETWORK_ERROR_MESSAGE}

    resp = _response(422, {"errors": {"email": ["Invalid"]}}, reason="Unprocessable Entity")
    assert handle(req_exc.HTTPError(response=resp), FB) == {"email": "Invalid"}
    assert handle(_response(500), FB) == {"general": "Internal server error. Please try again."}


def test_handle_api_errors() -> None:
    assert handle(ApiTimeoutError("t"), FB) == {"general": TIMEOUT_ERROR_MESSAGE}
    assert handle(ApiClientError("ctx", status=401), FB) == {
        "general": "Unauthorized. Please log in again."
    }


def test_handle_api_errors_keep_transport_codes() -> None:
    assert handle(ApiError("aborted", code="ECONNABORTED"), FB) == {"general": TIMEOUT_ERROR_MESSAGE}
    assert handle(ApiError("cancelled", code="ERR_CANCELED"), FB) == {"general": TIMEOUT_ERROR_MESSAGE}
    assert handle(ApiError("refused", code="ECONNREFUSED"), FB) == {"general": NETWORK_ERROR_MESSAGE}
    assert handle(ApiError("no code"), FB) == {"general": NETWORK_ERROR_MESSAGE}


def test_toast_survives_payload_refusing_truthiness() -> None:
    class Ambiguous:
        def __bool__(self) -> bool:
            raise RuntimeError("truth value is ambiguous")

    assert get_toast_message({"data": Ambiguous()}, FB) == FB


def test_handle_logs_the_failure(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.ERROR, logger="errnorm.usecases.error_mapping"):
        result = handle({"message": "Boom"}, FB)

    assert result == {"general": "Boom"}
    assert any("Error occurred" in rec.getMessage() for rec in caplog.records)


def test_handle_result_does_not_depend_on_logging(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.CRITICAL, logger="errnorm"):
        quiet = handle({"email": "Invalid"}, FB)
    assert quiet == handle({"email": "Invalid"}, FB)


def test_toast_prefers_general_message() -> None:
    assert get_toast_message({"message": "Saved failed"}, FB) == "Saved failed"
    assert get_toast_message({"code": "ECONNABORTED"}, FB) == TIMEOUT_ERROR_MESSAGE


def test_toast_falls_back_to_first_field_message() -> None:
    assert get_toast_message({"errors": {"email": "Invalid", "name": "Required"}}, FB) == "Invalid"


@pytest.mark.parametrize(
    "failure",
    [None, {}, [], "", 0, {"a": {"b": {}}}, object(), {"response": {"status": 999}}],
)
def test_toast_is_never_empty(failure) -> None:
    message = get_toast_message(failure, FB)

    assert isinstance(message, str)
    assert message.strip()


def test_toast_uses_default_when_fallback_missing() -> None:
    assert get_toast_message(None) == DEFAULT_ERROR_MESSAGE
    assert get_toast_message(None, config=HandlerConfig(default_message="Nope.")) == "Nope."


def test_map_api_error_codes() -> None:
    invalid = map_api_error(ApiClientError("ctx", status=422, payload={"name": "Required"}))
    assert invalid.code == "INVALID_PARAMS"
    assert invalid.message == "Required"
    assert invalid.errors == {"name": "Required"}

    assert map_api_error(ApiClientError("ctx", status=403)).code == "AUTH_FAILED"
    assert map_api_error(ApiClientError("ctx", status=404)).code == "REQUEST_FAILED"
    assert map_api_error(ApiServerError("ctx", status=502)).code == "SERVER_ERROR"
    assert map_api_error(ApiTimeoutError("t")).code == "REQUEST_TIMEOUT"
    assert map_api_error(req_exc.ConnectionError()).code == "NETWORK_ERROR"

    unexpected = map_api_error(RuntimeError("kaput"))
    assert unexpected.code == "UNEXPECTED_ERROR"
    assert unexpected.message == "kaput"


def test_map_api_error_passes_use_case_errors_through() -> None:
    err = UseCaseError("CUSTOM", "Already mapped")

    assert map_api_error(err) is err
