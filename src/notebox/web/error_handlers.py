import logging
from collections.abc import Awaitable, Callable

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response

from notebox.errors import ErrorKind, UserError

logger = logging.getLogger(__name__)

ERROR_STATUS_CODES: dict[ErrorKind, int] = {
    ErrorKind.ALREADY_EXISTS: 409,
    ErrorKind.INVALID_CREDENTIALS: 401,
    ErrorKind.UNAUTHENTICATED: 401,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.VALIDATION_ERROR: 400,
    ErrorKind.RATE_LIMITED: 429,
}


def create_json_error_response(status_code: int, message: str, error_type: str) -> JSONResponse:
    """Create JSON error response with a type for machine parsing."""
    return JSONResponse(status_code=status_code, content={"message": message, "type": error_type})


async def user_error_handler(_: Request, exc: Exception) -> Response:
    """Map a UserError to its status code via its kind, never via its message."""
    if not isinstance(exc, UserError):
        raise exc
    return create_json_error_response(ERROR_STATUS_CODES[exc.kind], str(exc), exc.kind)


async def request_validation_error_handler(_: Request, exc: Exception) -> Response:
    """Malformed request bodies and parameters are 400, not FastAPI's default 422."""
    if not isinstance(exc, RequestValidationError):
        raise exc
    details = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error["loc"][1:])
        details.append(f"{location}: {error['msg']}" if location else error["msg"])
    return create_json_error_response(400, "; ".join(details) or "Invalid request", ErrorKind.VALIDATION_ERROR)


def make_general_exception_handler(expose_details: bool) -> Callable[[Request, Exception], Awaitable[Response]]:
    """Build the 500 handler. Details are only exposed outside production."""

    async def general_exception_handler(_: Request, exc: Exception) -> Response:
        logger.exception("Unexpected error: %s", exc)
        message = str(exc) if expose_details else "An unexpected error occurred."
        return create_json_error_response(status_code=500, message=message, error_type="internal_server_error")

    return general_exception_handler
