from __future__ import annotations

from types import SimpleNamespace

import pytest

from errnorm.domain.shape import Kind, inspect_shape, is_present, lookup, lookup_path, text_of


@pytest.mark.parametrize(
    "value,kind",
    [
        ("text", Kind.STRING),
        (ValueError("boom"), Kind.STRING),
        (["a"], Kind.SEQUENCE),
        (("a",), Kind.SEQUENCE),
        ({"a": 1}, Kind.MAPPING),
        (SimpleNamespace(a=1), Kind.MAPPING),
        (None, Kind.NULL),
        (12, Kind.NULL),
        (b"bytes", Kind.NULL),
        (object(), Kind.NULL),
    ],
)
def test_inspect_shape_tags(value, kind) -> None:
    assert inspect_shape(value).kind is kind


def test_dataclass_types_are_not_mappings() -> None:
    from dataclasses import dataclass

    @dataclass
    class Payload:
        field: str = "x"

    assert inspect_shape(Payload).kind is Kind.NULL
    assert inspect_shape(Payload()).value == {"field": "x"}


def test_is_present_treats_blank_strings_as_absent() -> None:
    assert not is_present("   ")
    assert not is_present(None)
    assert not is_present({})
    assert is_present("x")
    assert is_present({"a": 1})


def test_is_present_survives_ambiguous_truthiness() -> None:
    class Ambiguous:
        def __bool__(self):
            raise ValueError("truth value is ambiguous")

    assert is_present(Ambiguous())


def test_lookup_ignores_methods_and_broken_properties() -> None:
    class Response:
        status = 404

        def json(self):
            raise AssertionError("must not be called")

        @property
        def data(self):
            raise RuntimeError("broken")

    resp = Response()

    assert lookup(resp, "status") == 404
    assert lookup(resp, "json") is None
    assert lookup(resp, "data") is None
    assert lookup("text", "upper") is None


def test_lookup_path_follows_dots() -> None:
    payload = {"error": {"detail": {"text": "Deep"}}}

    assert lookup_path(payload, "error.detail.text") == "Deep"
    assert lookup_path(payload, "error.missing.text") is None


def test_text_of_scalars() -> None:
    assert text_of("  hi ") == "hi"
    assert text_of("   ") is None
    assert text_of(5) == "5"
    assert text_of(True) is None
    assert text_of({"message": "x"}) is None
