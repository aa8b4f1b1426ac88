"""Message Schemas - request/response models for the message endpoints.

Invariants:
    - MessageCreate.msg: 1-1000 chars after stripping whitespace
    - MessageResponse embeds the author as a UserResponse
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.core.dto import MessageDTO
from app.schemas.user import UserResponse


class MessageCreate(BaseModel):
    msg: str = Field(min_length=1, max_length=1000)

    @field_validator("msg")
    @classmethod
    def strip_msg(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("msg cannot be empty or whitespace")
        return v


class MessageResponse(BaseModel):
    """Public-facing message data."""
    model_config = ConfigDict(populate_by_name=True)

    id: int
    msg: str
    author: UserResponse
    created_at: datetime = Field(serialization_alias="createdAt")
    updated_at: datetime = Field(serialization_alias="updatedAt")
    deleted_at: datetime | None = Field(None, serialization_alias="deletedAt")

    @classmethod
    def from_dto(cls, message: MessageDTO) -> "MessageResponse":
        return cls(
            id=message.id,
            msg=message.msg,
            author=UserResponse.from_dto(message.author),
            created_at=message.created_at,
            updated_at=message.updated_at,
            deleted_at=message.deleted_at,
        )


class MessageEnvelope(BaseModel):
    success: MessageResponse


class MessageListEnvelope(BaseModel):
    success: list[MessageResponse]
