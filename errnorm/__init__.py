"""Normalize arbitrary remote-call failures into field -> message maps."""

from .domain.classifier import classify
from .domain.extractor import extract
from .domain.messages import (
    DEFAULT_ERROR_MESSAGE,
    NETWORK_ERROR_MESSAGE,
    STATUS_MESSAGES,
    TIMEOUT_ERROR_MESSAGE,
    HandlerConfig,
)
from .domain.ports import ErrorMap, FailureView, UseCaseError
from .usecases.error_mapping import get_toast_message, handle, map_api_error
from .viewmodels.error_vm import ErrorVM
from .utils.logging import install_null_handler

install_null_handler(__name__)

__version__ = "0.1.0"

__all__ = [
    "DEFAULT_ERROR_MESSAGE",
    "ErrorMap",
    "ErrorVM",
    "FailureView",
    "HandlerConfig",
    "NETWORK_ERROR_MESSAGE",
    "STATUS_MESSAGES",
    "TIMEOUT_ERROR_MESSAGE",
    "UseCaseError",
    "classify",
    "extract",
    "get_toast_message",
    "handle",
    "map_api_error",
]
