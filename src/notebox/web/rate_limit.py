import structlog
from fastapi import Request
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address

from notebox.errors import ErrorKind
from notebox.web.error_handlers import ERROR_STATUS_CODES, create_json_error_response

logger = structlog.get_logger(__name__)


def create_limiter(rate_limit: str) -> Limiter:
    """Per-client limiter applied to every route, counters kept in process memory."""
    return Limiter(key_func=get_remote_address, default_limits=[rate_limit])


def rate_limit_exceeded_handler(request: Request, exc: Exception) -> JSONResponse:
    """Answer 429 with the usual error body.

    Must stay synchronous: SlowAPIMiddleware calls it directly.
    """
    if not isinstance(exc, RateLimitExceeded):
        raise exc
    logger.warning("rate_limit_exceeded", client=get_remote_address(request), path=request.url.path, limit=exc.detail)
    return create_json_error_response(
        ERROR_STATUS_CODES[ErrorKind.RATE_LIMITED], "Too many requests, please try again later", ErrorKind.RATE_LIMITED
    )
