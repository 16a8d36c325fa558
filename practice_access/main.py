"""FastAPI application entry point.

Wiring only: lifespan, exception handlers, middleware, routers.
No business logic here. See practice_access.core.lifespan and
practice_access.core.exception_handlers.

Settings are loaded inside create_app() so that tests can set env (and optionally
clear get_settings cache) before importing or calling create_app().
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from practice_access.api.v1.dependencies import evaluate_with_database
from practice_access.api.v1.router import api_router
from practice_access.core.config import get_settings
from practice_access.core.exception_handlers import register_exception_handlers
from practice_access.core.lifespan import create_lifespan
from practice_access.core.limiter import limiter
from practice_access.middleware import (
    AccessGuardMiddleware,
    RequestIDMiddleware,
    RequestSizeLimitMiddleware,
    SecurityHeadersMiddleware,
    TimeoutMiddleware,
)
from practice_access.pages.payment_required import render_payment_required_page
from practice_access.pages.root import render_root_page
from practice_access.shared.telemetry import setup_logging


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
    app.state.access_evaluator = evaluate_with_database
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

    register_exception_handlers(app)

    # Last added = outermost. Order: timeout → size limit → request ID → security → access guard → CORS.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[o.strip() for o in settings.allowed_origins.split(",") if o.strip()],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(AccessGuardMiddleware, cookie_name=settings.session_cookie_name)
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(RequestIDMiddleware, header_name=settings.request_id_header)
    app.add_middleware(RequestSizeLimitMiddleware, max_bytes=settings.max_request_body_bytes)
    app.add_middleware(TimeoutMiddleware, timeout_seconds=settings.request_timeout_seconds)

    app.include_router(api_router, prefix="/api/v1")

    @app.get("/", response_class=HTMLResponse)
    def root(error: str | None = None) -> HTMLResponse:
        """Landing page; ?error=no-role explains a forced sign-out."""
        return HTMLResponse(content=render_root_page(settings.app_name, error))

    @app.get("/payment-required", response_class=HTMLResponse)
    def payment_required() -> HTMLResponse:
        """Where doctors without an active subscription are redirected."""
        return HTMLResponse(
            content=render_payment_required_page(
                settings.app_name, settings.max_proof_size // (1024 * 1024)
            )
        )

    return app


app = create_app()
