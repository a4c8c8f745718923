# 📄 File: app/main.py
#
# 🧭 Purpose (Layman Explanation):
# The main control center that starts the authentication service, connects all its
# parts together, and makes sure everything is ready to handle requests.
#
# 🧪 Purpose (Technical Summary):
# FastAPI application factory and entry point. The lifespan configures logging, builds
# the AuthContainer from settings and stores it on app.state; shutdown releases the
# database engine and the email HTTP client. Middleware, exception handlers and
# routers are registered in create_app.
#
# 🔗 Dependencies:
# - FastAPI framework, uvicorn
# - app.shared.config.settings
# - app.modules.authentication.container
# - app.api (middleware, error handlers, routers)
#
# 🔄 Connected Modules / Calls From:
# - uvicorn server startup (app.main:app)
# - tests (create_app with explicit settings)

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

import uvicorn
from fastapi import FastAPI, Response
from fastapi.middleware.cors import CORSMiddleware

from app.api.middleware.error_handling import register_exception_handlers
from app.api.middleware.logging import RequestLoggingMiddleware
from app.api.v1.health import health_router
from app.api.v1.router import api_v1_router
from app.modules.authentication.container import build_container
from app.shared.config.settings import Settings, get_settings
from app.shared.utils.logging import log_shutdown_event, log_startup_event, setup_logging

logger = logging.getLogger(__name__)


def _build_lifespan(settings: Settings):
    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        """
        Application lifespan context manager.

        Builds the authentication container on startup and releases its
        resources on shutdown.
        """
        setup_logging(
            log_level=settings.LOG_LEVEL,
            log_format=settings.LOG_FORMAT,
            log_file=settings.LOG_FILE,
        )
        log_startup_event(settings.APP_NAME, settings.APP_VERSION, {"environment": settings.ENVIRONMENT})

        container = build_container(settings)
        try:
            await container.startup()
        except Exception as e:
            logger.error(f"❌ Startup failed: {e}")
            await container.shutdown()
            raise

        app.state.container = container
        logger.info(f"✅ {settings.APP_NAME} startup complete")

        try:
            yield
        finally:
            logger.info(f"🔄 {settings.APP_NAME} shutting down...")
            await container.shutdown()
            log_shutdown_event(settings.APP_NAME)

    return lifespan


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Application factory function.

    Args:
        settings: Settings to use; defaults to the cached environment settings

    Returns:
        FastAPI: Configured FastAPI application instance
    """
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.APP_NAME,
        description=settings.APP_DESCRIPTION,
        version=settings.APP_VERSION,
        docs_url="/docs" if settings.DEBUG else None,
        redoc_url="/redoc" if settings.DEBUG else None,
        openapi_url="/openapi.json" if settings.DEBUG else None,
        lifespan=_build_lifespan(settings),
        debug=settings.DEBUG,
    )

    # =========================================================================
    # MIDDLEWARE CONFIGURATION
    # =========================================================================

    app.add_middleware(RequestLoggingMiddleware)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID", "X-Error-Code"],
    )

    # =========================================================================
    # EXCEPTION HANDLERS
    # =========================================================================

    register_exception_handlers(app)

    # =========================================================================
    # ROUTER REGISTRATION
    # =========================================================================

    app.include_router(health_router, tags=["Health Check"])
    app.include_router(api_v1_router, prefix=settings.API_V1_PREFIX)

    @app.get("/", include_in_schema=False)
    async def root() -> dict:
        """Root endpoint with API information."""
        return {
            "name": settings.APP_NAME,
            "version": settings.APP_VERSION,
            "description": settings.APP_DESCRIPTION,
            "docs_url": "/docs" if settings.DEBUG else None,
            "health_check": "/health",
            "api_base": settings.API_V1_PREFIX,
        }

    @app.get("/favicon.ico", include_in_schema=False)
    async def favicon():
        """Favicon endpoint to prevent 404 errors."""
        return Response(status_code=204)

    return app


# Create the FastAPI application
app = create_app()


def main():
    """
    Run the application in development.

    Used when running ``python -m app.main`` or the ``sigma-auth`` script.
    """
    settings = get_settings()
    uvicorn.run(
        "app.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.is_development,
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    main()
