"""Route Dependencies - controller lookup and caller identification.

Invariants:
    - One ChatController per process, stored on app.state by the lifespan
    - current_user resolves the X-Chat-User header through is_logged_in;
      missing, malformed or expired logins raise AuthenticationRequiredError
"""

from fastapi import Depends, Header, Request

from app.core.dto import UserDTO
from app.core.errors import AuthenticationRequiredError, InvalidParameterError
from app.services.chat_controller import ChatController

USER_HEADER = "X-Chat-User"


def get_controller(request: Request) -> ChatController:
    controller = getattr(request.app.state, "controller", None)
    if controller is None:
        raise RuntimeError("Controller not initialized")
    return controller


async def current_user(
    x_chat_user: str | None = Header(None, alias=USER_HEADER),
    controller: ChatController = Depends(get_controller),
) -> UserDTO:
    if not x_chat_user:
        raise AuthenticationRequiredError()
    try:
        user = await controller.is_logged_in(x_chat_user)
    except InvalidParameterError:
        raise AuthenticationRequiredError()
    if user is None:
        raise AuthenticationRequiredError()
    return user
