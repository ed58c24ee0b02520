"""
Get Order Stats Use Case
"""

from dataclasses import dataclass

from fieldfeed.domains.orders.application.dto import OrderStats
from fieldfeed.domains.orders.application.ports import IOrderRepository
from fieldfeed.domains.orders.domain.entities import Order


@dataclass
class OrderStatsResponse:
    stats: OrderStats
    recent_orders: list[Order]


class GetOrderStatsUseCase:
    """Dashboard numbers: per-status aggregation plus the latest orders."""

    def __init__(self, order_repository: IOrderRepository, recent_limit: int = 5):
        self.order_repository = order_repository
        self.recent_limit = recent_limit

    async def execute(self) -> OrderStatsResponse:
        stats = await self.order_repository.get_stats()
        recent = await self.order_repository.get_recent(self.recent_limit)
        return OrderStatsResponse(stats=stats, recent_orders=recent)


__all__ = ["GetOrderStatsUseCase", "OrderStatsResponse"]
