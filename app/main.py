"""Credit Intake API: FastAPI application factory."""


import logging
import sys

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.core.config import settings
from app.core.exceptions import register_exception_handlers
from app.core.security import LimitsRateLimitStore, UrlSigner
from app.middleware.security import EdgeSecurityMiddleware
from app.routers.applications import router as applications_router
from app.routers.credit import router as credit_router
from app.routers.shipping import router as shipping_router
from app.routers.signatures import router as signatures_router
from app.routers.upload import router as upload_router
from app.schemas.common import HealthResponse


def _configure_logging() -> None:
    """Set up structured logging for the application."""
    level = logging.DEBUG if settings.app_env == "development" else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
        force=True,
    )
    # Quiet noisy libraries
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("openai").setLevel(logging.WARNING)
    logging.getLogger("botocore").setLevel(logging.WARNING)


def create_app() -> FastAPI:
    _configure_logging()

    app = FastAPI(
        title=settings.app_name,
        version="1.0.0",
        docs_url="/docs" if settings.app_env == "development" else None,
        redoc_url="/redoc" if settings.app_env == "development" else None,
    )

    # Rate-limit counters and the link signer live per app instance
    app.state.rate_limit_store = LimitsRateLimitStore()
    app.state.url_signer = UrlSigner(settings.signature_secret)

    # --- Edge security (rate limit, auth gate, CSRF, headers) ---
    app.add_middleware(
        EdgeSecurityMiddleware,
        settings=settings,
        rate_limit_store=app.state.rate_limit_store,
        url_signer=app.state.url_signer,
    )

    # --- CORS ---
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.frontend_url],
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
    )

    # --- Global exception handlers ---
    register_exception_handlers(app)

    # --- API routes (/api/*) ---
    app.include_router(applications_router)
    app.include_router(signatures_router)
    app.include_router(shipping_router)
    app.include_router(upload_router)
    app.include_router(credit_router)

    # --- Health check ---
    @app.get("/health", response_model=HealthResponse, tags=["Health"])
    async def health():
        return HealthResponse(
            app=settings.app_name,
            env=settings.app_env,
            ai_enabled=settings.ai_enabled,
            storage_enabled=settings.storage_enabled,
        )

    return app


app = create_app()
