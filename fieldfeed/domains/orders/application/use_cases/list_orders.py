"""
List Orders Use Case
"""

from fieldfeed.domains.orders.application.dto import OrderListQuery, OrderPage
from fieldfeed.domains.orders.application.ports import IOrderRepository


class ListOrdersUseCase:
    """Admin order list with status filter, text search, sorting and paging."""

    MAX_LIMIT = 100

    def __init__(self, order_repository: IOrderRepository):
        self.order_repository = order_repository

    async def execute(self, query: OrderListQuery) -> OrderPage:
        query.page = max(query.page, 1)
        query.limit = min(max(query.limit, 1), self.MAX_LIMIT)
        if query.search:
            query.search = query.search.strip() or None
        return await self.order_repository.list_orders(query)


__all__ = ["ListOrdersUseCase"]
