"""
Order Lifecycle Manager

Owns every status change of an order: legality checks, timestamp and
ownership stamping, and the versioned write. It never sends notifications;
callers decide which ones to fire from the returned transition.
"""

import logging
from datetime import datetime
from decimal import Decimal
from uuid import UUID

from fieldfeed.core.domain import EntityNotFoundException
from fieldfeed.domains.orders.application.ports import IOrderRepository
from fieldfeed.domains.orders.domain.entities import Order
from fieldfeed.domains.orders.domain.value_objects import OrderStatus, OrderStatusTransition

logger = logging.getLogger(__name__)


class OrderLifecycleManager:
    """
    Applies lifecycle operations to the order aggregate and persists them.

    Example:
        ```python
        lifecycle = OrderLifecycleManager(repository)
        order, transition = await lifecycle.quote(order, Decimal("500"), admin_id=admin.id)
        if transition.changed:
            ...
        ```
    """

    def __init__(self, repository: IOrderRepository):
        self.repository = repository

    async def set_status(
        self,
        order: Order,
        new_status: OrderStatus,
        admin_id: UUID | None = None,
    ) -> tuple[Order, OrderStatusTransition]:
        """
        Move ``order`` to ``new_status`` and persist it in a single write.

        Raises:
            InvalidOperationException: If the transition is not allowed
            ConcurrencyException: If the order changed since it was loaded
        """
        transition = order.apply_status(new_status, admin_id)
        saved = await self.repository.save(order)
        logger.info(f"Order {saved.order_number} status {transition}")
        return saved, transition

    async def quote(
        self,
        order: Order,
        quoted_price: Decimal,
        admin_id: UUID,
        admin_notes: str | None = None,
        expected_delivery: datetime | None = None,
    ) -> tuple[Order, OrderStatusTransition]:
        """Record the quote and force the status to QUOTED."""
        if order.status.is_in_fulfilment() or order.status in (OrderStatus.SHIPPED, OrderStatus.DELIVERED):
            logger.warning(
                f"Re-quoting order {order.order_number} while {order.status.value}; "
                f"previous quote {order.quoted_price}"
            )
        order.record_quote(quoted_price, admin_notes=admin_notes, expected_delivery=expected_delivery)
        return await self.set_status(order, OrderStatus.QUOTED, admin_id)

    async def confirm(self, order_number: str, customer_email: str) -> tuple[Order, OrderStatusTransition]:
        """
        Customer self-confirmation.

        The order is looked up by number and customer email together; a
        mismatch is indistinguishable from a missing order.

        Raises:
            EntityNotFoundException: If no order matches the pair
            InvalidOperationException: If the order is not QUOTED or REVIEWED
        """
        order = await self.repository.get_by_number_and_email(order_number, customer_email.strip().lower())
        if order is None:
            raise EntityNotFoundException(
                "Order",
                order_number,
                message="Order not found or email does not match",
            )

        order.ensure_customer_can_confirm()
        return await self.set_status(order, OrderStatus.CONFIRMED)

    async def update(
        self,
        order: Order,
        admin_id: UUID,
        status: OrderStatus | None = None,
        quoted_price: Decimal | None = None,
        admin_notes: str | None = None,
    ) -> tuple[Order, OrderStatusTransition]:
        """
        Generic admin edit: any of status, quoted price and notes in one write.

        A quoted price given here is stored without forcing QUOTED.
        """
        previous = order.status
        transition = (
            order.apply_status(status, admin_id)
            if status is not None
            else OrderStatusTransition(previous, previous, order.updated_at, str(admin_id))
        )

        if quoted_price is not None:
            order.record_quote(quoted_price)
        if admin_notes is not None:
            order.admin_notes = admin_notes
            order.touch()

        saved = await self.repository.save(order)
        logger.info(f"Order {saved.order_number} updated by admin {admin_id} ({transition})")
        return saved, transition
