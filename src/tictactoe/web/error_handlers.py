import structlog
from fastapi import Request
from fastapi.responses import JSONResponse, Response

from tictactoe.errors import (
    AccessDeniedError,
    AuthenticationError,
    ConflictError,
    NotFoundError,
    RateLimitedError,
    ValidationError,
)
from tictactoe.utils import now

logger = structlog.get_logger(__name__)


def create_json_error_response(
    status_code: int, message: str, error_type: str | None = None, headers: dict[str, str] | None = None
) -> JSONResponse:
    """Create JSON error response with optional type for machine parsing."""
    content = {"status": "error", "message": message}
    if error_type:
        content["type"] = error_type
    return JSONResponse(status_code=status_code, content=content, headers=headers)


async def user_error_handler(_: Request, exc: Exception) -> Response:
    """Handle all UserError subclasses with appropriate status codes."""
    headers = None
    if isinstance(exc, AuthenticationError):
        status_code = 401
        error_type = "authentication_error"
    elif isinstance(exc, AccessDeniedError):
        status_code = 403
        error_type = "access_denied"
    elif isinstance(exc, NotFoundError):
        status_code = 404
        error_type = "not_found"
    elif isinstance(exc, ConflictError):
        status_code = 409
        error_type = "conflict"
    elif isinstance(exc, ValidationError):
        status_code = 422
        error_type = "validation_error"
    elif isinstance(exc, RateLimitedError):
        status_code = 429
        error_type = exc.limiter_type
        retry_seconds = max(0, int((exc.retry_after - now()).total_seconds() + 0.999))
        headers = {"Retry-After": str(retry_seconds)}
    else:
        # Default for any other UserError subclass
        status_code = 400
        error_type = "bad_request"

    return create_json_error_response(status_code=status_code, message=str(exc), error_type=error_type, headers=headers)


async def general_exception_handler(_: Request, exc: Exception) -> Response:
    """Handle unexpected errors (500)."""
    logger.exception("unexpected_error", error=str(exc))
    return create_json_error_response(
        status_code=500, message="An unexpected error occurred.", error_type="internal_server_error"
    )
