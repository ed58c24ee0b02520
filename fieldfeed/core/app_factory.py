"""
Builds the orders API application from settings and a dependency container.
"""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from fieldfeed.api.exception_handlers import register_exception_handlers
from fieldfeed.api.middleware.logging_middleware import RequestLoggingMiddleware
from fieldfeed.api.router import api_router
from fieldfeed.config.settings import Settings, get_settings
from fieldfeed.core.container import DependencyContainer
from fieldfeed.core.lifecycle import lifespan
from fieldfeed.database import async_db

logger = logging.getLogger(__name__)


class AppFactory:
    """
    Assembles a FastAPI app step by step.

    Settings and the container are stored on ``app.state`` so request
    dependencies and exception handlers read the same instances the app was
    built with. Tests pass their own of each.
    """

    def __init__(self, settings: Settings | None = None, container: DependencyContainer | None = None) -> None:
        self._settings = settings or get_settings()
        self._container = container or DependencyContainer(self._settings)

    def create_app(self) -> FastAPI:
        settings = self._settings
        docs_prefix = settings.API_V1_STR if settings.is_development else None

        app = FastAPI(
            title=settings.PROJECT_NAME,
            description=settings.PROJECT_DESCRIPTION,
            version=settings.VERSION,
            docs_url=f"{docs_prefix}/docs" if docs_prefix else None,
            redoc_url=f"{docs_prefix}/redoc" if docs_prefix else None,
            lifespan=lifespan,
        )
        app.state.settings = settings
        app.state.container = self._container

        self._add_middleware(app)
        register_exception_handlers(app)
        app.include_router(api_router, prefix=settings.API_V1_STR)
        self._add_health_check(app)

        logger.info(f"{settings.PROJECT_NAME} {settings.VERSION} assembled for {settings.ENVIRONMENT}")
        return app

    def _add_middleware(self, app: FastAPI) -> None:
        # Added last, so CORS is the outermost layer around request logging
        app.add_middleware(RequestLoggingMiddleware)
        app.add_middleware(
            CORSMiddleware,
            allow_origins=self._settings.effective_cors_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    def _add_health_check(self, app: FastAPI) -> None:
        environment = self._settings.ENVIRONMENT

        @app.get("/health", tags=["health"])
        async def health_check() -> dict[str, str]:
            """Liveness plus a database round trip; degraded when the database does not answer."""
            database_ok = await async_db.check_database_health()
            return {
                "status": "ok" if database_ok else "degraded",
                "environment": environment,
                "database": "ok" if database_ok else "unavailable",
            }


def create_app(settings: Settings | None = None, container: DependencyContainer | None = None) -> FastAPI:
    return AppFactory(settings, container).create_app()
