"""
Administrator accounts
"""

import uuid
from datetime import UTC, datetime

from sqlalchemy import Boolean, Column, DateTime, String
from sqlalchemy.dialects.postgresql import UUID

from .base import Base, TimestampMixin


class Admin(Base, TimestampMixin):
    """Marketplace administrators (bearer-token authenticated)"""

    __tablename__ = "admins"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    name = Column(String(100), nullable=False)
    email = Column(String(255), unique=True, nullable=False, index=True)
    role = Column(String(20), nullable=False, default="admin")  # admin, super_admin
    is_active = Column(Boolean, nullable=False, default=True)
    lock_until = Column(DateTime(timezone=True))
    last_login = Column(DateTime(timezone=True))

    def __repr__(self):
        return f"<Admin(email='{self.email}', role='{self.role}')>"

    @property
    def is_locked(self) -> bool:
        """Locked while ``lock_until`` lies in the future."""
        return self.lock_until is not None and self.lock_until > datetime.now(UTC)
