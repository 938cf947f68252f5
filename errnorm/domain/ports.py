from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

FieldPath = str
ErrorMap = Dict[FieldPath, str]


# ---- Error model ----
class UseCaseError(Exception):
    """User-presentable error carrying a stable code and the normalized map."""

    def __init__(self, code: str, message: str, errors: Optional[ErrorMap] = None):
        super().__init__(message)
        self.code = code
        self.message = message
        self.errors: ErrorMap = dict(errors or {})


# ---- Failure shapes ----
@dataclass(frozen=True)
class FailureView:
    """Uniform read-only view of a remote call failure.

    Attributes:
        code: Transport-level code such as ``ECONNABORTED`` when no response
            was received.
        has_response: Whether the server answered at all.
        status: HTTP status of the received response.
        status_text: Reason phrase of the received response.
        body: Response payload of arbitrary shape.
    """

    code: Optional[str] = None
    has_response: bool = False
    status: Optional[int] = None
    status_text: str = ""
    body: Any = None

    @property
    def is_transport_failure(self) -> bool:
        return bool(self.code) or (self.has_response and self.status is not None)


__all__ = [
    "ErrorMap",
    "FailureView",
    "FieldPath",
    "UseCaseError",
]
