"""Data Transfer Objects - validated value carriers handed to the business layer.

Invariants:
    - Construction validates every field; a DTO never exists half-valid
    - id, created_at, updated_at, deleted_at and username are fixed after construction
    - UserDTO.logged_in_until is the only reassignable field, and reassignment
      is validated like construction
    - UserDTO accepts no attributes beyond its declared fields, and none can be
      deleted
    - MessageDTO.author is always a UserDTO
    - No equality operators: callers compare `id` fields

Design Decisions:
    - eq=False dataclasses keep identity comparison, so two DTOs for the same row
      are not silently treated as equal
"""

from dataclasses import FrozenInstanceError, dataclass
from datetime import datetime

from app.core import validators


def _check_optional_date(value: object, name: str) -> None:
    if value is not None:
        validators.is_date(value, name)


@dataclass(eq=False)
class UserDTO:
    """A chat user as seen by the business layer."""
    id: int
    username: str
    logged_in_until: datetime
    created_at: datetime
    updated_at: datetime
    deleted_at: datetime | None = None

    _MUTABLE_FIELDS = frozenset({"logged_in_until"})

    def __post_init__(self) -> None:
        validators.is_positive_integer(self.id, "id")
        validators.is_non_zero_length_string(self.username, "username")
        validators.is_alnum_string(self.username, "username")
        validators.is_date(self.logged_in_until, "logged_in_until")
        validators.is_date(self.created_at, "created_at")
        validators.is_date(self.updated_at, "updated_at")
        _check_optional_date(self.deleted_at, "deleted_at")

    def __setattr__(self, name: str, value: object) -> None:
        if name not in self.__dataclass_fields__:
            raise FrozenInstanceError(f"cannot add attribute '{name}'")
        if name in self.__dict__:
            if name not in self._MUTABLE_FIELDS:
                raise FrozenInstanceError(f"cannot assign to field '{name}'")
            validators.is_date(value, name)
        object.__setattr__(self, name, value)

    def __delattr__(self, name: str) -> None:
        raise FrozenInstanceError(f"cannot delete field '{name}'")


@dataclass(eq=False, frozen=True)
class MessageDTO:
    """A chat message together with its author."""
    id: int
    author: UserDTO
    msg: str
    created_at: datetime
    updated_at: datetime
    deleted_at: datetime | None = None

    def __post_init__(self) -> None:
        validators.is_positive_integer(self.id, "id")
        validators.is_instance_of(self.author, UserDTO, "author", "UserDTO")
        validators.is_non_zero_length_string(self.msg, "msg")
        validators.is_date(self.created_at, "created_at")
        validators.is_date(self.updated_at, "updated_at")
        _check_optional_date(self.deleted_at, "deleted_at")
