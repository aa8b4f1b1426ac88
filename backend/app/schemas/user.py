"""User Schemas - request/response models for the user endpoints.

Invariants:
    - LoginRequest.username: 1-255 ASCII letters and digits
    - UserResponse mirrors UserDTO field for field (camelCase on the wire)
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from app.core.dto import UserDTO


class LoginRequest(BaseModel):
    username: str = Field(min_length=1, max_length=255, pattern=r"^[A-Za-z0-9]+$")


class UserResponse(BaseModel):
    """Public-facing user data."""
    model_config = ConfigDict(populate_by_name=True)

    id: int
    username: str
    logged_in_until: datetime = Field(serialization_alias="loggedInUntil")
    created_at: datetime = Field(serialization_alias="createdAt")
    updated_at: datetime = Field(serialization_alias="updatedAt")
    deleted_at: datetime | None = Field(None, serialization_alias="deletedAt")

    @classmethod
    def from_dto(cls, user: UserDTO) -> "UserResponse":
        return cls(
            id=user.id,
            username=user.username,
            logged_in_until=user.logged_in_until,
            created_at=user.created_at,
            updated_at=user.updated_at,
            deleted_at=user.deleted_at,
        )


class UserEnvelope(BaseModel):
    success: UserResponse
