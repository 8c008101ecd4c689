"""FastAPI application entrypoint for the reservation platform."""

import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from core.config import settings
from core.logging import setup_logging
from core.restaurant_config import InvalidConfigurationError
from db.session import init_db
from apps.api.routers import availability, reservations


logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.
    Handles startup and shutdown events.
    """
    setup_logging()
    logger.info(f"Starting {settings.app_name}...")

    try:
        init_db()
        logger.info("Database initialized successfully")
    except Exception as e:
        logger.error(f"Failed to initialize database: {e}")
        raise

    logger.info("Application startup complete")

    yield

    logger.info(f"Shutting down {settings.app_name}...")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title=settings.app_name,
        description="Restaurant reservation availability and booking API",
        version="1.0.0",
        lifespan=lifespan
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(availability.router, prefix=settings.api_v1_prefix)
    app.include_router(reservations.router, prefix=settings.api_v1_prefix)

    @app.exception_handler(InvalidConfigurationError)
    async def invalid_configuration_handler(request: Request, exc: InvalidConfigurationError):
        logger.error(f"Invalid booking configuration on {request.url.path}: {exc}")
        return JSONResponse(
            status_code=500,
            content={"detail": "Reservation settings for this restaurant are misconfigured"},
        )

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {
            "app": settings.app_name,
            "status": "healthy",
            "version": "1.0.0"
        }

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "apps.api.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.debug
    )
