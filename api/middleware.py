"""Request-scoped middleware for API requests."""

import logging
from uuid import UUID, uuid4

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse

from api.base import current_request_id, error_response, ErrorCodes
from utils.user_context import staff_context

logger = logging.getLogger(__name__)


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Assigns a unique request ID to every request."""

    async def dispatch(self, request: Request, call_next):
        request_id = str(uuid4())
        request.state.request_id = request_id
        token = current_request_id.set(request_id)
        try:
            response = await call_next(request)
        finally:
            current_request_id.reset(token)
        response.headers["X-Request-ID"] = request_id
        return response


class StaffContextMiddleware(BaseHTTPMiddleware):
    """
    Binds the acting staff member for the request.

    Identity comes from the X-User-Id header set by the upstream auth
    gateway. Requests without it run unattributed.
    """

    USER_HEADER = "X-User-Id"

    async def dispatch(self, request: Request, call_next):
        raw_user_id = request.headers.get(self.USER_HEADER)
        if not raw_user_id:
            return await call_next(request)

        try:
            user_id = UUID(raw_user_id)
        except ValueError:
            logger.warning("Rejected malformed %s header", self.USER_HEADER)
            return JSONResponse(
                status_code=400,
                content=error_response(
                    ErrorCodes.INVALID_REQUEST,
                    f"{self.USER_HEADER} must be a UUID",
                ).model_dump(mode="json"),
            )

        request.state.user_id = user_id
        with staff_context(user_id):
            return await call_next(request)
