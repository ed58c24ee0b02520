"""
Order Status Value Object for the Orders Domain

Represents the lifecycle states of a bulk order with transition rules.
"""

from dataclasses import dataclass
from datetime import datetime

from fieldfeed.core.domain import StatusEnum


class OrderStatus(StatusEnum):
    """
    Order lifecycle states.

    Happy path:
    - PENDING -> REVIEWED -> QUOTED -> CONFIRMED -> PROCESSING -> SHIPPED -> DELIVERED
    - any state -> CANCELLED

    Admins may assign any status at any time (see ``ADMIN_TRANSITIONS``).
    Customers may only confirm, and only from REVIEWED or QUOTED.
    """

    PENDING = "pending"
    REVIEWED = "reviewed"
    QUOTED = "quoted"
    CONFIRMED = "confirmed"
    PROCESSING = "processing"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"

    def can_admin_transition_to(self, new_status: "OrderStatus") -> bool:
        """Check if an admin may move an order from this status to ``new_status``."""
        return new_status in ADMIN_TRANSITIONS[self]

    def can_customer_confirm(self) -> bool:
        """Check if the customer may confirm the order in this status."""
        return self in CUSTOMER_CONFIRMABLE

    def can_be_deleted(self) -> bool:
        """Only orders that never entered fulfilment may be deleted."""
        return self in DELETABLE

    def is_in_fulfilment(self) -> bool:
        """Confirmed or processing; counted together in order statistics."""
        return self in (OrderStatus.CONFIRMED, OrderStatus.PROCESSING)


# Admin updates are permissive: every status may be assigned from
# every status, including out of the terminal ones.
ADMIN_TRANSITIONS: dict[OrderStatus, frozenset[OrderStatus]] = {
    status: frozenset(OrderStatus) for status in OrderStatus
}

CUSTOMER_CONFIRMABLE: frozenset[OrderStatus] = frozenset({OrderStatus.QUOTED, OrderStatus.REVIEWED})

DELETABLE: frozenset[OrderStatus] = frozenset({OrderStatus.PENDING, OrderStatus.CANCELLED})


class OrderPriority(StatusEnum):
    """Handling priority assigned to an order."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"


@dataclass(frozen=True)
class OrderStatusTransition:
    """
    Result of a lifecycle transition.

    Carries what the endpoints need to decide which notifications to fire.
    """

    from_status: OrderStatus
    to_status: OrderStatus
    occurred_at: datetime
    performed_by: str | None = None

    @property
    def changed(self) -> bool:
        return self.from_status != self.to_status

    def __str__(self) -> str:
        return f"{self.from_status.value} -> {self.to_status.value}"
