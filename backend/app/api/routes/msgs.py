"""Message Routes - list, post, read and soft-delete chat messages.

Invariants:
    - Posting and deleting require a live login (current_user dependency)
    - Only the author of a message may delete it
    - Deleted messages answer 404 like messages that never existed
"""

import logging

from fastapi import APIRouter, Depends, Path, status

from app.api.dependencies import current_user, get_controller
from app.core.dto import UserDTO
from app.core.errors import PermissionDeniedError, ResourceNotFoundError
from app.schemas.msg import (
    MessageCreate, MessageEnvelope, MessageListEnvelope, MessageResponse,
)
from app.services.chat_controller import ChatController

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/msg", tags=["msgs"])


@router.get("", response_model=MessageListEnvelope)
async def list_msgs(controller: ChatController = Depends(get_controller)):
    msgs = await controller.find_all_msgs()
    return MessageListEnvelope(
        success=[MessageResponse.from_dto(m) for m in msgs],
    )


@router.post(
    "", response_model=MessageEnvelope, status_code=status.HTTP_201_CREATED,
)
async def create_msg(
    body: MessageCreate,
    user: UserDTO = Depends(current_user),
    controller: ChatController = Depends(get_controller),
):
    created = await controller.add_msg(body.msg, user)
    return MessageEnvelope(success=MessageResponse.from_dto(created))


@router.get("/{msg_id}", response_model=MessageEnvelope)
async def get_msg(
    msg_id: int = Path(ge=1),
    controller: ChatController = Depends(get_controller),
):
    found = await controller.find_msg(msg_id)
    if found is None:
        raise ResourceNotFoundError("Message", str(msg_id))
    return MessageEnvelope(success=MessageResponse.from_dto(found))


@router.delete("/{msg_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_msg(
    msg_id: int = Path(ge=1),
    user: UserDTO = Depends(current_user),
    controller: ChatController = Depends(get_controller),
):
    """Soft-delete one of the caller's own messages."""
    found = await controller.find_msg(msg_id)
    if found is None:
        raise ResourceNotFoundError("Message", str(msg_id))
    if found.author.id != user.id:
        raise PermissionDeniedError("Only the author may delete a message")
    await controller.delete_msg(msg_id)
    logger.info(
        f"Message {msg_id} deleted",
        extra={"msg_id": msg_id, "user_id": user.id},
    )
