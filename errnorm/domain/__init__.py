"""Domain package exports: the pure extraction and classification core."""

from .classifier import classify, describe_failure, looks_like_transport_failure
from .extractor import extract
from .messages import (
    DEFAULT_CONFIG,
    DEFAULT_ERROR_MESSAGE,
    GENERAL_KEY,
    NETWORK_ERROR_MESSAGE,
    STATUS_MESSAGES,
    TIMEOUT_ERROR_MESSAGE,
    HandlerConfig,
)
from .ports import ErrorMap, FailureView, UseCaseError
from .shape import Kind, Shape, inspect_shape

__all__ = [
    "DEFAULT_CONFIG",
    "DEFAULT_ERROR_MESSAGE",
    "ErrorMap",
    "FailureView",
    "GENERAL_KEY",
    "HandlerConfig",
    "Kind",
    "NETWORK_ERROR_MESSAGE",
    "STATUS_MESSAGES",
    "Shape",
    "TIMEOUT_ERROR_MESSAGE",
    "UseCaseError",
    "classify",
    "describe_failure",
    "extract",
    "inspect_shape",
    "looks_like_transport_failure",
]
