"""Form/toast error state for reactive front-ends.

Call context:
    A view binds ``on_change`` to re-render field hints, then routes every
    failed remote call through ``set_from_failure``. The view model stores
    copies only; the normalization itself lives in
    ``errnorm.usecases.error_mapping``.
"""

from __future__ import annotations

from typing import Any, Callable, Mapping, Optional

from errnorm.domain.messages import HandlerConfig
from errnorm.domain.ports import ErrorMap
from errnorm.usecases.error_mapping import get_toast_message, handle


class ErrorVM:
    """Holds the current ``ErrorMap`` and exposes query/clear commands."""

    def __init__(
        self,
        *,
        config: Optional[HandlerConfig] = None,
        on_change: Optional[Callable[[ErrorMap], None]] = None,
    ) -> None:
        self.config = config
        self.on_change = on_change
        self._errors: ErrorMap = {}

    @property
    def errors(self) -> ErrorMap:
        return dict(self._errors)

    def set_errors(self, errors: Mapping[str, Any]) -> None:
        """Replace the state with ``errors``; blank messages are dropped."""
        cleaned: ErrorMap = {}
        for field, message in errors.items():
            text = "" if message is None else str(message).strip()
            if text:
                cleaned[str(field)] = text
        self._errors = cleaned
        self._notify()

    def set_from_failure(self, failure: Any, fallback: Optional[str] = None) -> ErrorMap:
        """Normalize ``failure``, store the result and return a copy."""
        errors = handle(failure, fallback, config=self.config)
        self._errors = dict(errors)
        self._notify()
        return dict(errors)

    def clear(self, field: Optional[str] = None) -> None:
        """Clear one field, or everything when ``field`` is omitted."""
        if field:
            if field not in self._errors:
                return
            remaining = dict(self._errors)
            del remaining[field]
            self._errors = remaining
        else:
            if not self._errors:
                return
            self._errors = {}
        self._notify()

    def has(self, field: Optional[str] = None) -> bool:
        if field:
            return bool(self._errors.get(field))
        return bool(self._errors)

    def get(self, field: str) -> Optional[str]:
        return self._errors.get(field) or None

    def toast_message(self, failure: Any, fallback: Optional[str] = None) -> str:
        """Return a single display message without touching the state."""
        return get_toast_message(failure, fallback, config=self.config)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _notify(self) -> None:
        if self.on_change:
            self.on_change(dict(self._errors))


__all__ = ["ErrorVM"]
