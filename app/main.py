"""FastAPI application entry point.

Wiring only: lifespan, exception handlers, middleware, routers.
No business logic here. See app.core.lifespan and app.core.exception_handlers.

Settings are loaded inside create_app() so that tests can set env (and optionally
clear get_settings cache) before importing or calling create_app().
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from app.api.v1.cache_policy import CACHE_RULES, INVALIDATION_RULES
from app.api.v1.router import api_router
from app.core.config import get_settings
from app.core.exception_handlers import register_exception_handlers
from app.core.lifespan import create_lifespan
from app.core.limiter import limiter
from app.infrastructure.persistence.memory_store import DocumentStore
from app.middleware import (
    AuthenticationMiddleware,
    CacheInvalidationMiddleware,
    ResponseCacheMiddleware,
)
from app.shared.logging import setup_logging


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

    app.state.store = DocumentStore()
    app.state.cache = None

    limiter.enabled = settings.rate_limit_enabled
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

    register_exception_handlers(app)

    # Middleware: last added = outermost. Order: CORS → authentication → invalidation → response cache.
    app.add_middleware(ResponseCacheMiddleware, rules=CACHE_RULES, prefix=settings.api_prefix)
    app.add_middleware(
        CacheInvalidationMiddleware, rules=INVALIDATION_RULES, prefix=settings.api_prefix
    )
    app.add_middleware(AuthenticationMiddleware, cookie_name=settings.auth_cookie_name)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[o.strip() for o in settings.allowed_origins.split(",") if o.strip()],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(api_router, prefix=settings.api_prefix)

    @app.get("/")
    def root() -> dict[str, str]:
        """Service name, version and where the API lives."""
        return {
            "name": settings.app_name,
            "version": settings.app_version,
            "api": settings.api_prefix,
            "docs": "/docs",
        }

    return app


app = create_app()
