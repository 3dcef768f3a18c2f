from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware

from notebox.app import App
from notebox.config import Config
from notebox.errors import UserError
from notebox.web.error_handlers import (
    make_general_exception_handler,
    request_validation_error_handler,
    user_error_handler,
)
from notebox.web.middleware import SecurityHeadersMiddleware
from notebox.web.openapi import set_custom_openapi
from notebox.web.rate_limit import create_limiter, rate_limit_exceeded_handler
from notebox.web.routers import auth_router, notes_router


def create_fastapi_app(app_instance: App, config: Config) -> FastAPI:
    """Create and configure FastAPI application."""

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
        """FastAPI application lifespan management."""
        app.state.app = app_instance
        app.state.config = config
        async with app_instance.lifespan():
            yield

    app = FastAPI(title="Notebox API", lifespan=lifespan)

    # Last added runs first: CORS, then security headers, then the rate limit
    app.state.limiter = create_limiter(config.rate_limit)
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)
    app.add_middleware(SlowAPIMiddleware)
    app.add_middleware(SecurityHeadersMiddleware, hsts=config.is_production)

    # Frontend calls with credentials, so the origin must be explicit
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[config.frontend_url],
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )

    @app.get("/", tags=["system"], summary="Welcome message")
    async def root() -> dict[str, str]:
        return {"message": "Notebox API is running"}

    @app.get("/health", tags=["system"], summary="Health check")
    async def health_check() -> dict[str, str]:
        return {"status": "healthy"}

    app.include_router(auth_router, prefix="/api")
    app.include_router(notes_router, prefix="/api")

    app.add_exception_handler(UserError, user_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)
    app.add_exception_handler(Exception, make_general_exception_handler(expose_details=not config.is_production))

    set_custom_openapi(app)

    return app
