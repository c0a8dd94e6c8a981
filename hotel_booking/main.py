from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from hotel_booking.api.v1.router import router as api_v1_router
from hotel_booking.config.logging import setup_logging
from hotel_booking.config.settings import settings
from hotel_booking.core.error_handlers import register_exception_handlers
from hotel_booking.core.middleware import register_middlewares
from hotel_booking.db.init_db import init_db


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging()
    # For production, manage the schema with migrations
    if not settings.is_production():
        await init_db()
    yield


def create_app() -> FastAPI:
    """
    Application factory for the FastAPI app.

    - Configures title, version, debug mode from Settings.
    - Registers CORS, core middleware, and exception handlers.
    - Includes the versioned API router under /api/v1.
    """
    app = FastAPI(
        title=settings.APP_NAME,
        debug=settings.DEBUG,
        version=settings.API_VERSION,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # CORS Configuration
    allow_origins = settings.CORS_ORIGINS or ["*"]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=allow_origins,
        # Wildcard origins cannot be combined with credentials
        allow_credentials=allow_origins != ["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Register shared core middlewares (request ID, timing, security headers)
    register_middlewares(app)
    register_exception_handlers(app)

    # Mount API v1 under /api/v1
    app.include_router(api_v1_router, prefix=settings.API_V1_STR)

    @app.get("/health", tags=["Health"])
    async def health() -> dict:
        return {
            "success": True,
            "status": "healthy",
            "service": settings.APP_NAME,
            "version": settings.API_VERSION,
            "environment": settings.ENVIRONMENT,
        }

    @app.get("/api", tags=["Health"])
    async def api_index() -> dict:
        prefix = settings.API_V1_STR
        return {
            "success": True,
            "message": f"{settings.APP_NAME} API",
            "version": settings.API_VERSION,
            "endpoints": {
                "bookings": f"{prefix}/bookings",
                "rooms": f"{prefix}/rooms",
                "health": "/health",
                "docs": "/docs",
            },
        }

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "hotel_booking.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.is_development(),
    )
