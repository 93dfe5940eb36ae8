"""
Cocktail API — FastAPI Application Factory
============================================

What:  Creates and configures the FastAPI application instance.
Why:   Centralizes configuration, middleware registration, route mounting,
       error rendering and lifecycle management in one place.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   Called by uvicorn (uvicorn cocktail_api.main:app) and by the tests.

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware:  Request ID → Access Log → CORS/GZip   │
    │                                                     │
    │  Routes (guards run as dependencies, in order):     │
    │    GET    /drinks       rate limit                  │
    │    POST   /drinks       rate limit → auth → perm →  │
    │                         validate                    │
    │    PATCH  /drinks/{id}  (same as POST)              │
    │    DELETE /drinks/{id}  rate limit → auth → perm    │
    │                                                     │
    │  Exception Handlers:                                │
    │    400 validation │ 401/403 auth │ 429 │ 500        │
    └─────────────────────────────────────────────────────┘

State (app.state), built from explicit arguments:
    settings, principals, catalog, drink_service, rate_limiters

Lifecycle:
    Startup:  configure logging, start the rate-limit sweep task
    Shutdown: cancel the sweep task
"""

import asyncio
import contextlib
import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Dict, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from cocktail_api import __version__
from cocktail_api.auth.principals import PrincipalRegistry
from cocktail_api.config import Settings, settings as default_settings
from cocktail_api.exceptions import (
    BadRequestError,
    CocktailAPIError,
    ForbiddenError,
    InternalError,
    RateLimitExceededError,
    UnauthenticatedError,
    ValidationError,
)
from cocktail_api.middleware.logging import RequestLoggingMiddleware
from cocktail_api.middleware.rate_limit import build_rate_limiters, sweep_periodically
from cocktail_api.middleware.request_id import RequestIDMiddleware, request_id_var
from cocktail_api.routes import auth, drinks, health, index
from cocktail_api.services.catalog_service import CatalogService
from cocktail_api.services.drink_service import DrinkService

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(level: str) -> None:
    """
    Configure logging for the whole process.

    Format: 2024-01-15T12:00:00 [INFO] cocktail_api.access: GET /drinks 200 ...
    """
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )
    # uvicorn's own access log duplicates RequestLoggingMiddleware
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    settings: Settings = app.state.settings

    # ── Startup ───────────────────────────────────────────────────────────
    setup_logging(settings.log_level)
    logger.info("Cocktail API %s starting up...", __version__)
    logger.info(
        "Catalog: %d drinks | principals: %d | auth scheme: %s",
        len(app.state.catalog),
        len(app.state.principals),
        settings.auth_scheme,
    )

    sweeper = asyncio.create_task(
        sweep_periodically(app.state.rate_limiters.values(), settings.rate_limit_sweep_interval),
        name="rate-limit-sweep",
    )
    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)

    yield

    # ── Shutdown ──────────────────────────────────────────────────────────
    sweeper.cancel()
    with contextlib.suppress(asyncio.CancelledError):
        await sweeper
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _request_id(request: Request) -> str:
    return getattr(request.state, "request_id", "") or request_id_var.get("")


def error_response(
    request: Request,
    status_code: int,
    content: Dict[str, object],
    headers: Optional[Dict[str, str]] = None,
) -> JSONResponse:
    """
    Render an error body with the request ID, keeping any X-RateLimit-* headers
    a rate-limit guard already computed for this request.
    """
    merged: Dict[str, str] = dict(getattr(request.state, "rate_limit_headers", {}) or {})
    merged.update(headers or {})
    body = dict(content)
    body["request_id"] = _request_id(request)
    return JSONResponse(status_code=status_code, content=body, headers=merged)


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exception types to status codes and error bodies.

    Handler hierarchy:
        ValidationError / BadRequestError   → 400
        UnauthenticatedError                → 401
        ForbiddenError                      → 403
        RateLimitExceededError              → 429 + Retry-After
        InternalError                       → 500 with diagnostic details
        CocktailAPIError (base)             → exc.status_code
        StarletteHTTPException              → 404 / 405 for unknown routes
        RequestValidationError              → 400
        Exception (fallback)                → 500, generic message
    """

    @app.exception_handler(ValidationError)
    @app.exception_handler(BadRequestError)
    async def handle_bad_request(request: Request, exc: CocktailAPIError):
        logger.warning("[%s] %s: %s", _request_id(request), exc.error, exc.message)
        return error_response(request, exc.status_code, exc.to_dict())

    @app.exception_handler(UnauthenticatedError)
    @app.exception_handler(ForbiddenError)
    async def handle_auth_error(request: Request, exc: CocktailAPIError):
        return error_response(request, exc.status_code, exc.to_dict())

    @app.exception_handler(RateLimitExceededError)
    async def handle_rate_limit(request: Request, exc: RateLimitExceededError):
        return error_response(
            request,
            exc.status_code,
            exc.to_dict(),
            headers={"Retry-After": str(exc.retry_after)},
        )

    @app.exception_handler(InternalError)
    async def handle_internal_error(request: Request, exc: InternalError):
        logger.error("[%s] Internal error: %s | details: %s", _request_id(request), exc.message, exc.details)
        return error_response(request, exc.status_code, exc.to_dict())

    @app.exception_handler(CocktailAPIError)
    async def handle_app_error(request: Request, exc: CocktailAPIError):
        return error_response(request, exc.status_code, exc.to_dict())

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        if exc.status_code == 404:
            content = {"error": "Not Found", "message": f"Route {request.method} {request.url.path} not found"}
        else:
            content = {"error": str(exc.detail), "message": str(exc.detail)}
        return error_response(request, exc.status_code, content, headers=getattr(exc, "headers", None))

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        details = [
            f"{'.'.join(str(part) for part in error.get('loc', ()))}: {error.get('msg', 'invalid')}"
            for error in exc.errors()
        ]
        return error_response(
            request,
            400,
            {"error": "Validation failed", "message": "Request contains invalid data", "details": details},
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        """Last resort. The traceback is logged; the client gets a generic 500."""
        logger.error("[%s] Unexpected error: %s", _request_id(request), exc, exc_info=True)
        return error_response(
            request,
            500,
            {"error": "Internal Server Error", "message": "An unexpected error occurred"},
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(
    settings: Optional[Settings] = None,
    principals: Optional[PrincipalRegistry] = None,
    catalog: Optional[CatalogService] = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings:   Configuration (defaults to the environment-loaded settings)
        principals: Known principals (defaults to the built-in mock registry)
        catalog:    Drink catalog (defaults to the seed catalog)
    """
    settings = settings or default_settings

    app = FastAPI(
        title="Cocktail API",
        description=(
            "Search a cocktail catalog and exercise mock create/update/delete "
            "endpoints behind rate limiting, authentication and authorization."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.principals = principals or PrincipalRegistry.default()
    app.state.catalog = catalog or CatalogService()
    app.state.drink_service = DrinkService(latency_seconds=settings.mock_latency_ms / 1000)
    app.state.rate_limiters = build_rate_limiters(settings)

    # ── Register Middleware ───────────────────────────────────────────────
    # Last added runs first: RequestID → Logging → GZip → CORS → routes
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=[
            "X-Request-ID",
            "X-RateLimit-Limit",
            "X-RateLimit-Remaining",
            "X-RateLimit-Reset",
            "Retry-After",
        ],
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    app.include_router(index.router)
    app.include_router(drinks.router)
    app.include_router(auth.router)
    app.include_router(health.router)

    return app


# uvicorn expects `cocktail_api.main:app` to be importable
app = create_app()
