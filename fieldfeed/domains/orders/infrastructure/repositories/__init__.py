"""
Orders Infrastructure Repositories
"""

from .admin_repository import SQLAlchemyAdminRepository
from .order_repository import ORDER_NUMBER_FORMAT, SQLAlchemyOrderRepository

__all__ = ["SQLAlchemyOrderRepository", "SQLAlchemyAdminRepository", "ORDER_NUMBER_FORMAT"]
