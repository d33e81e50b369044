"""FastAPI application entry point.

Wiring only: lifespan, exception handlers, middleware, routers, and the
app-wide registry and hooks. No business logic here.

Settings are loaded inside create_app() so that tests can set env (and
clear the get_settings cache) before calling create_app().
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from object_selector.api.v1 import api_router
from object_selector.core.config import get_settings
from object_selector.core.exception_handlers import register_exception_handlers
from object_selector.core.lifespan import (
    build_content_registry,
    build_selector_hooks,
    create_lifespan,
)
from object_selector.core.limiter import limiter
from object_selector.middleware import RequestIDMiddleware
from object_selector.shared.telemetry.logging import setup_logging


def create_app() -> FastAPI:
    """Build and return the FastAPI application. Settings are resolved here (deferred from import)."""
    settings = get_settings()
    setup_logging()
    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        debug=settings.debug,
        lifespan=create_lifespan,
    )

    app.state.limiter = limiter
    app.state.registry = build_content_registry(settings)
    app.state.hooks = build_selector_hooks()
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

    register_exception_handlers(app)

    # Last added = outermost: request id wraps CORS.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[o.strip() for o in settings.allowed_origins.split(",") if o.strip()],
        allow_credentials=True,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestIDMiddleware, header_name=settings.request_id_header)

    app.include_router(api_router, prefix="/api/v1")
    return app


app = create_app()
