"""
Admin account as seen by the orders domain
"""

from dataclasses import dataclass
from uuid import UUID


@dataclass(frozen=True)
class AdminAccount:
    """Authenticated administrator acting on orders."""

    id: UUID
    name: str
    email: str
    role: str = "admin"
    is_active: bool = True
    is_locked: bool = False
