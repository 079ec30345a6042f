"""
Meal Planner FastAPI Application
Main entry point: application factory, middleware, and configuration wiring
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
import logging
import uvicorn
from contextlib import asynccontextmanager
import anyio
from typing import Optional

from api.routes import auth, recipes, plans, health
from adapters import mongo_adapter
from app.config import Settings, get_settings
from app.exceptions import MealPlannerError
from api.middleware import (
    RateLimitMiddleware,
    RequestLoggingMiddleware,
    validation_exception_handler,
    http_exception_handler,
    app_exception_handler,
    general_exception_handler,
)

_logger = logging.getLogger("mealplanner.main")


def configure_logging(settings: Settings) -> None:
    """Setup logging with configured level and format"""
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format=settings.log_format,
    )


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the application around one Settings instance.

    The settings object is kept on ``app.state.settings`` and handed to
    components through dependencies; nothing below reads the environment.
    """
    settings = settings or get_settings()
    settings.check_secrets()
    configure_logging(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Connect to MongoDB on startup and close the client on shutdown."""
        _logger.info(f"Starting {settings.app_name} in {settings.environment.value} mode")
        # pymongo is blocking; keep the ping off the event loop
        await anyio.to_thread.run_sync(mongo_adapter.connect, settings)
        try:
            yield
        finally:
            _logger.info(f"Shutting down {settings.app_name}")
            mongo_adapter.close()

    app = FastAPI(
        title=settings.api_title,
        version=settings.app_version,
        description=settings.api_description,
        lifespan=lifespan,
        debug=settings.debug,
        openapi_url=(
            f"{settings.api_prefix}/openapi.json" if not settings.is_production() else None
        ),
        docs_url=f"{settings.api_prefix}/docs" if not settings.is_production() else None,
        redoc_url=None,
    )
    app.state.settings = settings

    # Middleware added last runs first. CORS must stay outermost so 429s carry
    # its headers.
    app.add_middleware(
        RateLimitMiddleware,
        max_requests=settings.rate_limit_max,
        window_sec=settings.rate_limit_window_sec,
    )
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )

    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(MealPlannerError, app_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)

    app.include_router(auth.router, prefix=settings.api_prefix)
    app.include_router(recipes.router, prefix=settings.api_prefix)
    app.include_router(plans.router, prefix=settings.api_prefix)
    app.include_router(health.router, prefix=settings.api_prefix)

    return app


app = create_app()


if __name__ == "__main__":
    settings = get_settings()
    uvicorn.run(
        "main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.is_development(),
        log_level=settings.log_level.lower(),
    )
