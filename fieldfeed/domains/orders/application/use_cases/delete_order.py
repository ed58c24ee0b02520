"""
Delete Order Use Case
"""

import logging
from uuid import UUID

from fieldfeed.domains.orders.application.ports import IOrderRepository

from .get_order import load_order

logger = logging.getLogger(__name__)


class DeleteOrderUseCase:
    """Hard delete, allowed only for PENDING and CANCELLED orders."""

    def __init__(self, order_repository: IOrderRepository):
        self.order_repository = order_repository

    async def execute(self, order_id: UUID) -> None:
        order = await load_order(self.order_repository, order_id)
        order.ensure_can_be_deleted()

        await self.order_repository.delete(order_id)
        logger.info(f"Order deleted: {order.order_number} (was {order.status.value})")


__all__ = ["DeleteOrderUseCase"]
