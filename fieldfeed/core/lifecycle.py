"""
Application lifecycle management using the FastAPI lifespan pattern.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from fieldfeed.core.container import DependencyContainer
from fieldfeed.database.async_db import dispose_engine

logger = logging.getLogger(__name__)

# Seconds given to in-flight notifications on shutdown
SHUTDOWN_DRAIN_TIMEOUT = 30.0


class LifecycleManager:
    """
    Manages application lifecycle events.

    Startup only reports configuration problems; shutdown lets detached
    notification tasks finish before the database engine is disposed.
    """

    def __init__(self, container: DependencyContainer) -> None:
        self._container = container
        self._initialized = False

    async def startup(self) -> None:
        if self._initialized:
            logger.warning("Lifecycle already initialized, skipping startup")
            return

        logger.info("Starting application lifecycle...")
        self._verify_configurations()
        self._initialized = True
        logger.info("Application lifecycle startup completed")

    async def shutdown(self) -> None:
        if not self._initialized:
            logger.warning("Lifecycle not initialized, skipping shutdown")
            return

        logger.info("Stopping application lifecycle...")
        await self._container.get_task_runner().shutdown(SHUTDOWN_DRAIN_TIMEOUT)
        await dispose_engine()

        self._initialized = False
        logger.info("Application lifecycle shutdown completed")

    def _verify_configurations(self) -> None:
        """Verify critical application configurations."""
        settings = self._container.settings

        if settings.JWT_SECRET_KEY == "change-me" and not settings.is_development:
            logger.warning("JWT_SECRET_KEY is the default value - set a real secret in production")

        if not settings.NOTIFICATIONS_ENABLED:
            logger.info("Notifications are disabled via NOTIFICATIONS_ENABLED=False")
        elif not (settings.EMAIL_USER and settings.EMAIL_PASS):
            logger.warning("EMAIL_USER/EMAIL_PASS not configured - order emails will fail and be logged")

        if not settings.admin_notification_email:
            logger.warning("No ADMIN_EMAIL configured - admin order alerts will be skipped")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    FastAPI lifespan context manager.

    Usage:
        app = FastAPI(lifespan=lifespan)
        app.state.container = DependencyContainer()
    """
    lifecycle = LifecycleManager(app.state.container)

    await lifecycle.startup()

    yield

    await lifecycle.shutdown()
