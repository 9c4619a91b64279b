"""Global exception handlers for FastAPI."""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from starlette.responses import JSONResponse

from api.base import error_response, ErrorCodes
from core.exceptions import (
    AlreadyClosedError,
    ConflictError,
    HotelError,
    InternalError,
    NotFoundError,
    RoomUnavailableError,
    ValidationError,
)

logger = logging.getLogger(__name__)


def _json(status_code: int, code: str, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=error_response(code, message).model_dump(mode="json"),
    )


def error_status(exc: HotelError) -> tuple[int, str]:
    """HTTP status and error code for a domain error."""
    if isinstance(exc, ValidationError):
        return 400, ErrorCodes.VALIDATION_ERROR
    if isinstance(exc, NotFoundError):
        return 404, ErrorCodes.NOT_FOUND
    if isinstance(exc, AlreadyClosedError):
        return 409, ErrorCodes.STAY_ALREADY_CLOSED
    if isinstance(exc, RoomUnavailableError):
        return 409, ErrorCodes.ROOM_UNAVAILABLE
    if isinstance(exc, ConflictError):
        return 409, ErrorCodes.CONFLICT
    return 500, ErrorCodes.INTERNAL_ERROR


def register_error_handlers(app: FastAPI) -> None:
    """Register global exception handlers on the app."""

    @app.exception_handler(HotelError)
    async def hotel_error_handler(request: Request, exc: HotelError):
        status_code, code = error_status(exc)
        if isinstance(exc, InternalError) or status_code == 500:
            logger.error("Internal error on %s: %s", request.url.path, exc, exc_info=exc.__cause__)
            return _json(status_code, code, "An internal error occurred")
        return _json(status_code, code, str(exc))

    @app.exception_handler(ValueError)
    async def value_error_handler(request: Request, exc: ValueError):
        return _json(400, ErrorCodes.INVALID_REQUEST, str(exc))

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        return _json(422, ErrorCodes.VALIDATION_ERROR, str(exc.errors()))

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception("Unhandled exception")
        return _json(500, ErrorCodes.INTERNAL_ERROR, "An internal error occurred")
