"""
Database models package
"""

from .admins import Admin
from .base import Base, TimestampMixin
from .orders import Order, OrderItem, order_number_seq

__all__ = [
    "Base",
    "TimestampMixin",
    "Admin",
    "Order",
    "OrderItem",
    "order_number_seq",
]
