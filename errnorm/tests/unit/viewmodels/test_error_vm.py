from __future__ import annotations

from typing import List

from errnorm.domain.messages import HandlerConfig, TIMEOUT_ERROR_MESSAGE
from errnorm.domain.ports import ErrorMap
from errnorm.viewmodels.error_vm import ErrorVM


class _ChangeRecorder:
    def __init__(self) -> None:
        self.states: List[ErrorMap] = []

    def __call__(self, errors: ErrorMap) -> None:
        self.states.append(errors)


def test_set_from_failure_stores_and_returns_copy() -> None:
    vm = ErrorVM()

    result = vm.set_from_failure({"errors": {"email": "Invalid", "name": "Required"}})
    result["email"] = "mutated"

    assert vm.errors == {"email": "Invalid", "name": "Required"}
    assert vm.has()
    assert vm.has("email")
    assert not vm.has("password")
    assert vm.get("name") == "Required"
    assert vm.get("password") is None


def test_errors_property_is_a_copy() -> None:
    vm = ErrorVM()
    vm.set_errors({"email": "Invalid"})

    vm.errors["email"] = "mutated"

    assert vm.get("email") == "Invalid"


def test_clear_single_field_and_everything() -> None:
    vm = ErrorVM()
    vm.set_errors({"email": "Invalid", "name": "Required"})

    vm.clear("email")
    assert vm.errors == {"name": "Required"}

    vm.clear()
    assert vm.errors == {}
    assert not vm.has()


def test_on_change_fires_for_mutations_only() -> None:
    recorder = _ChangeRecorder()
    vm = ErrorVM(on_change=recorder)

    vm.set_from_failure({"code": "ECONNABORTED"})
    vm.clear("missing")
    vm.clear("general")
    vm.clear()

    assert recorder.states == [{"general": TIMEOUT_ERROR_MESSAGE}, {}]


def test_set_errors_drops_blank_messages() -> None:
    vm = ErrorVM()

    vm.set_errors({"email": "  Invalid ", "name": "", "age": None, 3: "Numeric key"})

    assert vm.errors == {"email": "Invalid", "3": "Numeric key"}


def test_toast_message_does_not_touch_state() -> None:
    vm = ErrorVM(config=HandlerConfig(network_message="Offline."))
    vm.set_errors({"email": "Invalid"})

    assert vm.toast_message({"code": "ENOTFOUND"}) == "Offline."
    assert vm.toast_message(None, "Try later.") == "Try later."
    assert vm.errors == {"email": "Invalid"}


def test_fallback_reaches_extractor() -> None:
    vm = ErrorVM()

    assert vm.set_from_failure({}, "Could not save.") == {"general": "Could not save."}
