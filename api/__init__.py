"""HTTP interface for the hotel back office."""

from api.app import create_app
from api.base import (
    APIMeta,
    APIResponse,
    ErrorCodes,
    current_request_id,
    error_response,
    success_response,
)
from api.errors import error_status, register_error_handlers
