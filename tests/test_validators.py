import pytest
from pydantic import TypeAdapter, ValidationError

from readyread_api.app.core.validators import (
    Address,
    Label,
    Password,
    PhoneNumber,
    Username,
    alpha,
    alphanumeric,
    ascii_only,
)


def test_alpha():
    assert alpha("Ilya") == "Ilya"
    for value in ("sci123", "Илья", "two words", "", "fantasy\n"):
        with pytest.raises(ValueError):
            alpha(value)


def test_alphanumeric():
    assert alphanumeric("qwERty12") == "qwERty12"
    for value in ("qwerty!", "пароль1", "with space", "qwERty12\n"):
        with pytest.raises(ValueError):
            alphanumeric(value)


def test_ascii_only():
    assert ascii_only("Russia, Moscow, 12") == "Russia, Moscow, 12"
    with pytest.raises(ValueError):
        ascii_only("Москва")


@pytest.mark.parametrize(
    "annotated, valid, invalid",
    [
        (Username, ["abc", "a" * 20], ["ab", "a" * 21, "admin!", "ab\n"]),
        (Password, ["a" * 6, "a" * 24], ["a" * 5, "a" * 25, "secret pass", "secret1\n"]),
        (Address, ["abc", "a" * 100], ["ab", "a" * 101, "Улица"]),
        (PhoneNumber, ["12345", "1" * 12], ["1234", "1" * 13, "+7800", "12345\n"]),
        (Label, ["a", "a" * 30], ["", "a" * 31, "sci123", "fantasy\n"]),
    ],
)
def test_length_and_charset(annotated, valid, invalid):
    adapter = TypeAdapter(annotated)
    for value in valid:
        assert adapter.validate_python(value) == value
    for value in invalid:
        with pytest.raises(ValidationError):
            adapter.validate_python(value)
