"""
Order Repository Port

Persistence contract for the order aggregate.
"""

from typing import Protocol, runtime_checkable
from uuid import UUID

from fieldfeed.domains.orders.application.dto import OrderListQuery, OrderPage, OrderStats
from fieldfeed.domains.orders.domain.entities import AdminAccount, Order


@runtime_checkable
class IOrderRepository(Protocol):
    """
    Interface for order repository.

    ``save`` is a conditional write: it only succeeds while the stored
    version still equals ``order.version`` and raises
    ``ConcurrencyException`` otherwise.
    """

    async def next_order_number(self) -> str:
        """Reserve the next ORD-NNNNNN number"""
        ...

    async def create(self, order: Order) -> Order:
        """Insert a new order (number already assigned)"""
        ...

    async def get_by_id(self, order_id: UUID) -> Order | None:
        """Get order by ID"""
        ...

    async def get_by_number_and_email(self, order_number: str, email: str) -> Order | None:
        """Get order by number, scoped to the customer email"""
        ...

    async def save(self, order: Order) -> Order:
        """Persist changes; bumps the version"""
        ...

    async def delete(self, order_id: UUID) -> bool:
        """Delete an order and its items"""
        ...

    async def list_orders(self, query: OrderListQuery) -> OrderPage:
        """Page through orders"""
        ...

    async def get_stats(self) -> OrderStats:
        """Aggregate counts and values by status"""
        ...

    async def get_recent(self, limit: int = 5) -> list[Order]:
        """Most recent orders with the quoting admin resolved"""
        ...


@runtime_checkable
class IAdminRepository(Protocol):
    """Lookup of administrator accounts for token authentication."""

    async def get_by_id(self, admin_id: UUID) -> AdminAccount | None:
        """Get admin by ID"""
        ...
