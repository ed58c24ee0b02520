"""
Orders Application DTOs

Data Transfer Objects for listing and statistics queries.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any

from fieldfeed.domains.orders.domain.entities import Order
from fieldfeed.domains.orders.domain.value_objects import OrderStatus

# Fields the admin list can be sorted by (API name -> entity attribute)
SORTABLE_FIELDS: dict[str, str] = {
    "createdAt": "created_at",
    "updatedAt": "updated_at",
    "orderNumber": "order_number",
    "status": "status",
    "totalEstimatedValue": "total_estimated_value",
    "priority": "priority",
}


# ==================== List DTOs ====================


@dataclass
class OrderListQuery:
    """Filters, search and paging for the admin order list"""

    page: int = 1
    limit: int = 10
    status: OrderStatus | None = None
    search: str | None = None
    sort_by: str = "createdAt"
    sort_order: str = "desc"

    @property
    def offset(self) -> int:
        return (max(self.page, 1) - 1) * self.limit

    @property
    def descending(self) -> bool:
        return self.sort_order.lower() != "asc"

    @property
    def sort_attribute(self) -> str:
        return SORTABLE_FIELDS.get(self.sort_by, "created_at")


@dataclass
class OrderPage:
    """One page of orders plus paging metadata"""

    orders: list[Order]
    total: int
    page: int
    limit: int

    @property
    def total_pages(self) -> int:
        if self.limit <= 0:
            return 0
        return (self.total + self.limit - 1) // self.limit

    def pagination_dict(self) -> dict[str, Any]:
        return {
            "page": self.page,
            "limit": self.limit,
            "totalOrders": self.total,
            "totalPages": self.total_pages,
            "hasNextPage": self.page < self.total_pages,
            "hasPrevPage": self.page > 1,
        }


# ==================== Statistics DTOs ====================


@dataclass
class StatusBucket:
    """Count and summed estimated value for one status"""

    status: str
    count: int
    total_value: Decimal = Decimal("0")

    def to_dict(self) -> dict[str, Any]:
        return {"_id": self.status, "count": self.count, "totalValue": float(self.total_value)}


@dataclass
class OrderStats:
    """Per-status aggregation plus convenience counts"""

    by_status: list[StatusBucket] = field(default_factory=list)

    def _count(self, *statuses: OrderStatus) -> int:
        wanted = {s.value for s in statuses}
        return sum(bucket.count for bucket in self.by_status if bucket.status in wanted)

    @property
    def total_orders(self) -> int:
        return sum(bucket.count for bucket in self.by_status)

    @property
    def pending_orders(self) -> int:
        return self._count(OrderStatus.PENDING)

    @property
    def processing_orders(self) -> int:
        return self._count(OrderStatus.CONFIRMED, OrderStatus.PROCESSING)

    @property
    def completed_orders(self) -> int:
        return self._count(OrderStatus.DELIVERED)

    def to_dict(self) -> dict[str, Any]:
        return {
            "statusBreakdown": [bucket.to_dict() for bucket in self.by_status],
            "totalOrders": self.total_orders,
            "pendingOrders": self.pending_orders,
            "processingOrders": self.processing_orders,
            "completedOrders": self.completed_orders,
        }


__all__ = ["OrderListQuery", "OrderPage", "StatusBucket", "OrderStats", "SORTABLE_FIELDS"]
