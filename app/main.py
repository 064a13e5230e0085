# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Clarity - Mood Journal project.
# Licensed under the MIT License - see the LICENSE file for details.


from contextlib import asynccontextmanager
import logging
import os

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware

from app.config import Settings, get_settings
from app.errors import ClarityError, TokenError, ValidationError
from app.models.database import init_db
from app.routers import auth_router, journal_router
from app.schemas.journal_schemas import validation_details
from app.services.photo_store import LocalPhotoStore
from app.services.token_service import TokenService
from app.utils.rate_limit_utils import limiter
from app.utils.time_utils import utcnow

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # 🗄️ Create DB tables in one go
    init_db()
    logger.info("🚀 Clarity backend started")
    yield
    logger.info("👋 Clarity backend stopped")


def register_exception_handlers(app: FastAPI):

    @app.exception_handler(ClarityError)
    async def clarity_error_handler(request: Request, exc: ClarityError):
        if exc.status_code >= 500:
            logger.error(f"🛑 {request.method} {request.url.path} failed: {exc.message}")
        headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, TokenError) and exc.status_code == 401 else None
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict(), headers=headers)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        error = ValidationError("Validation failed", details=validation_details(exc))
        return JSONResponse(status_code=error.status_code, content=error.to_dict())

    @app.exception_handler(RateLimitExceeded)
    async def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded):
        return JSONResponse(
            status_code=429,
            content={"error": "Too many requests. Please slow down.", "code": "RATE_LIMITED"}
        )

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        # full detail stays in the server log
        logger.exception(f"🛑 Unhandled error on {request.method} {request.url.path}")
        return JSONResponse(
            status_code=500,
            content={"error": "Internal server error", "code": "INTERNAL_ERROR"}
        )


def create_app(settings: Settings = None) -> FastAPI:
    settings = settings or get_settings()

    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = FastAPI(
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
        title="Clarity Mood Journal API",
        description="Accounts, mood journal entries and analytics",
        version="1.0"
    )

    # ✅ Collaborators built once from configuration
    app.state.settings = settings
    app.state.token_service = TokenService.from_settings(settings)
    app.state.photo_store = LocalPhotoStore(settings.upload_dir, settings.max_upload_bytes)

    app.state.limiter = limiter
    app.add_middleware(SlowAPIMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    # Serve uploaded photos from /uploads/
    os.makedirs(settings.upload_dir, exist_ok=True)
    app.mount("/uploads", StaticFiles(directory=settings.upload_dir), name="uploads")

    # Include routers
    app.include_router(auth_router.router)
    app.include_router(journal_router.router)

    @app.get("/health", tags=["Infra"])
    def health_check():
        return {
            "status": "OK",
            "message": "Clarity Backend API is running",
            "timestamp": utcnow().isoformat() + "Z",
        }

    return app


app = create_app()
