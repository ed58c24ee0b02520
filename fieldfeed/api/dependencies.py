"""
Shared FastAPI dependencies: the DI container and admin authentication.
"""

import logging

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from fieldfeed.core.container import DependencyContainer
from fieldfeed.core.domain import AccountLockedException, AuthenticationException
from fieldfeed.database.async_db import get_async_db
from fieldfeed.domains.orders.application.ports import IAdminRepository
from fieldfeed.domains.orders.domain.entities import AdminAccount
from fieldfeed.services.token_service import TokenService

logger = logging.getLogger(__name__)

# Missing credentials are reported by get_current_admin, not by the scheme
bearer_scheme = HTTPBearer(auto_error=False)


def get_di_container(request: Request) -> DependencyContainer:
    """Get the container the application was created with."""
    return request.app.state.container


def get_token_service(
    container: DependencyContainer = Depends(get_di_container),  # noqa: B008
) -> TokenService:
    return container.get_token_service()


def get_admin_repository(
    db: AsyncSession = Depends(get_async_db),  # noqa: B008
    container: DependencyContainer = Depends(get_di_container),  # noqa: B008
) -> IAdminRepository:
    return container.create_admin_repository(db)


async def get_current_admin(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),  # noqa: B008
    token_service: TokenService = Depends(get_token_service),  # noqa: B008
    admin_repository: IAdminRepository = Depends(get_admin_repository),  # noqa: B008
) -> AdminAccount:
    """
    Resolve the admin behind the bearer token.

    Raises:
        AuthenticationException: No token, bad token, unknown or inactive admin (401)
        AccountLockedException: Admin account temporarily locked (423)
    """
    if credentials is None or not credentials.credentials:
        raise AuthenticationException("Access denied. No token provided.")

    admin_id = token_service.admin_id_from_token(credentials.credentials)
    admin = await admin_repository.get_by_id(admin_id)

    if admin is None:
        raise AuthenticationException("Invalid token. Admin not found.")
    if not admin.is_active:
        raise AuthenticationException("Account is deactivated.")
    if admin.is_locked:
        logger.warning(f"Locked admin {admin.email} attempted access")
        raise AccountLockedException()
    return admin
