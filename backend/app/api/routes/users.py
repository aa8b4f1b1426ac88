"""User Routes - login and user lookup.

Invariants:
    - POST /login always answers with the user whose session was just extended
    - GET /{user_id} answers 404 for unknown or soft-deleted users
"""

import logging

from fastapi import APIRouter, Depends, Path

from app.api.dependencies import get_controller
from app.core.errors import ResourceNotFoundError
from app.schemas.user import LoginRequest, UserEnvelope, UserResponse
from app.services.chat_controller import ChatController

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/user", tags=["users"])


@router.post("/login", response_model=UserEnvelope)
async def login(
    body: LoginRequest, controller: ChatController = Depends(get_controller),
):
    """Claim a username; creates the user on first login."""
    user = await controller.login(body.username)
    return UserEnvelope(success=UserResponse.from_dto(user))


@router.get("/{user_id}", response_model=UserEnvelope)
async def get_user(
    user_id: int = Path(ge=1),
    controller: ChatController = Depends(get_controller),
):
    user = await controller.find_user(user_id)
    if user is None:
        raise ResourceNotFoundError("User", str(user_id))
    return UserEnvelope(success=UserResponse.from_dto(user))
