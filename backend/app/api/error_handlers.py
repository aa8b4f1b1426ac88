"""Error Handlers - every failure leaves the API as a ChatError envelope.

Invariants:
    - Response bodies come only from ChatError.to_response(); no handler builds
      its own error shape
    - Request validation failures become InvalidParameterError (400) naming the
      first offending parameter, with per-parameter details attached
    - Unanticipated exceptions become InternalError (500) and never leak their text
    - Client errors (< 500) log a warning; server errors log with the traceback
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.core.errors import ChatError, InternalError, InvalidParameterError

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ChatError, handle_chat_error)
    app.add_exception_handler(RequestValidationError, handle_request_validation)
    app.add_exception_handler(Exception, handle_unexpected)


async def handle_chat_error(request: Request, exc: ChatError) -> JSONResponse:
    return _respond(request, exc)


async def handle_request_validation(
    request: Request, exc: RequestValidationError,
) -> JSONResponse:
    problems = [
        {"param": _param_name(e["loc"]), "message": e["msg"]}
        for e in exc.errors()
    ]
    first = problems[0] if problems else {"param": "request", "message": "invalid"}
    error = InvalidParameterError(
        f"{first['param']}: {first['message']}", first["param"],
    )
    return _respond(request, error, details=problems)


async def handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
    return _respond(request, InternalError(), cause=exc)


def _respond(
    request: Request,
    error: ChatError,
    details: list[dict] | None = None,
    cause: Exception | None = None,
) -> JSONResponse:
    extra = {"error_code": error.code, "path": request.url.path}
    if error.http_status >= 500:
        logger.error(
            f"{request.method} {request.url.path} failed: {error.message}",
            extra=extra, exc_info=cause or error,
        )
    else:
        logger.warning(
            f"{request.method} {request.url.path} rejected: {error.message}",
            extra=extra,
        )
    body = error.to_response()
    if details:
        body["error"]["details"] = details
    return JSONResponse(status_code=error.http_status, content=body)


def _param_name(loc: tuple) -> str:
    # loc is ("body" | "path" | "header", name, ...); the source is dropped
    parts = [str(p) for p in loc[1:]] or [str(p) for p in loc]
    return ".".join(parts)
