"""Validators - tests for the precondition checks.

Tests cover:
    - Each check accepts well-formed input and rejects malformed input
    - Failures are InvalidParameterError, which is also an AssertionError
    - The error names the offending parameter
    - Repeated calls on the same bad input fail the same way
"""

from datetime import datetime, timezone

import pytest

from app.core import validators
from app.core.dto import UserDTO
from app.core.errors import InvalidParameterError


def test_non_zero_length_string_accepts_text():
    validators.is_non_zero_length_string("hello", "msg")


@pytest.mark.parametrize("value", ["", None, 42, b"bytes"])
def test_non_zero_length_string_rejects(value):
    with pytest.raises(InvalidParameterError) as exc_info:
        validators.is_non_zero_length_string(value, "msg")
    assert exc_info.value.param == "msg"


def test_alnum_string_accepts_letters_and_digits():
    validators.is_alnum_string("alice42", "username")


@pytest.mark.parametrize("value", ["with space", "dash-ed", "ümlaut", "", None])
def test_alnum_string_rejects(value):
    with pytest.raises(InvalidParameterError):
        validators.is_alnum_string(value, "username")


def test_positive_integer_accepts_one():
    validators.is_positive_integer(1, "id")


@pytest.mark.parametrize("value", [0, -3, 1.5, "7", True, None])
def test_positive_integer_rejects(value):
    with pytest.raises(InvalidParameterError):
        validators.is_positive_integer(value, "id")


def test_is_date_accepts_datetime():
    validators.is_date(datetime.now(timezone.utc), "logged_in_until")


@pytest.mark.parametrize("value", [None, "2024-01-01", 0])
def test_is_date_rejects(value):
    with pytest.raises(InvalidParameterError):
        validators.is_date(value, "logged_in_until")


def test_instance_of_names_expected_class():
    with pytest.raises(InvalidParameterError, match="UserDTO"):
        validators.is_instance_of({"id": 1}, UserDTO, "author", "UserDTO")


def test_validation_error_is_an_assertion_error():
    with pytest.raises(AssertionError):
        validators.is_positive_integer(0, "id")


def test_validation_is_deterministic():
    messages = []
    for _ in range(2):
        with pytest.raises(InvalidParameterError) as exc_info:
            validators.is_non_zero_length_string("", "username")
        messages.append(str(exc_info.value))
    assert messages[0] == messages[1]
