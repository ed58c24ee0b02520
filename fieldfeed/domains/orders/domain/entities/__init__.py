"""
Orders Domain Entities
"""

from .admin import AdminAccount
from .order import AdminRef, CustomerInfo, Order, OrderLineItem, RequestMetadata

__all__ = ["Order", "OrderLineItem", "CustomerInfo", "AdminRef", "RequestMetadata", "AdminAccount"]
