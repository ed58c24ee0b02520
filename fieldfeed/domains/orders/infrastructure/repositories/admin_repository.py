"""
Admin Repository Implementation
"""

from typing import cast
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from fieldfeed.domains.orders.domain.entities import AdminAccount
from fieldfeed.models.db.admins import Admin as AdminModel


class SQLAlchemyAdminRepository:
    """Read-only access to administrator accounts."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, admin_id: UUID) -> AdminAccount | None:
        result = await self.session.execute(select(AdminModel).where(AdminModel.id == admin_id))
        model = result.scalar_one_or_none()
        if model is None:
            return None
        return AdminAccount(
            id=cast(UUID, model.id),
            name=cast(str, model.name),
            email=cast(str, model.email),
            role=cast(str, model.role),
            is_active=bool(model.is_active),
            is_locked=model.is_locked,
        )
