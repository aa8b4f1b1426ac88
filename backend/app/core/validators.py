"""Validators - precondition checks on primitive inputs.

Invariants:
    - Every check returns None or raises InvalidParameterError naming the parameter
    - No side effects: calling a check twice on the same value behaves identically
    - Alphanumeric means ASCII letters and digits only
"""

import re
from datetime import datetime

from app.core.errors import InvalidParameterError

_ALNUM = re.compile(r"^[A-Za-z0-9]+$")


def is_non_zero_length_string(value: object, name: str) -> None:
    """Assert value is a str with at least one character."""
    if not isinstance(value, str):
        raise InvalidParameterError(
            f"{name} must be a string, got {type(value).__name__}", name,
        )
    if len(value) == 0:
        raise InvalidParameterError(f"{name} must not be empty", name)


def is_alnum_string(value: object, name: str) -> None:
    """Assert value contains only ASCII letters and digits."""
    if not isinstance(value, str) or not _ALNUM.match(value):
        raise InvalidParameterError(
            f"{name} must be alphanumeric, got {value!r}", name,
        )


def is_positive_integer(value: object, name: str) -> None:
    # bool is an int subclass; True must not pass as id 1
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise InvalidParameterError(
            f"{name} must be a positive integer, got {value!r}", name,
        )


def is_date(value: object, name: str) -> None:
    if not isinstance(value, datetime):
        raise InvalidParameterError(
            f"{name} must be a datetime, got {type(value).__name__}", name,
        )


def is_instance_of(
    value: object, cls: type, name: str, class_name: str | None = None,
) -> None:
    """Assert value is an instance of cls."""
    if not isinstance(value, cls):
        raise InvalidParameterError(
            f"{name} must be an instance of {class_name or cls.__name__}, "
            f"got {type(value).__name__}",
            name,
        )
