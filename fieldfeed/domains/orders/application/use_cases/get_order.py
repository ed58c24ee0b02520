"""
Get Order Use Case
"""

from uuid import UUID

from fieldfeed.core.domain import EntityNotFoundException
from fieldfeed.domains.orders.application.ports import IOrderRepository
from fieldfeed.domains.orders.domain.entities import Order


async def load_order(order_repository: IOrderRepository, order_id: UUID) -> Order:
    """Fetch an order or raise ``EntityNotFoundException``."""
    order = await order_repository.get_by_id(order_id)
    if order is None:
        raise EntityNotFoundException("Order", order_id)
    return order


class GetOrderUseCase:
    """Admin lookup of a single order by ID."""

    def __init__(self, order_repository: IOrderRepository):
        self.order_repository = order_repository

    async def execute(self, order_id: UUID) -> Order:
        return await load_order(self.order_repository, order_id)


__all__ = ["GetOrderUseCase", "load_order"]
