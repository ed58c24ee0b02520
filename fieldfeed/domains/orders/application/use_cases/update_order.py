"""
Update Order Use Case

Generic admin edit of status, quoted price and notes.
"""

import logging
from dataclasses import dataclass
from decimal import Decimal
from uuid import UUID

from fieldfeed.domains.orders.application.ports import IOrderNotifier, IOrderRepository, ITaskRunner
from fieldfeed.domains.orders.application.services import OrderLifecycleManager
from fieldfeed.domains.orders.domain.entities import Order
from fieldfeed.domains.orders.domain.value_objects import OrderStatus

from .get_order import load_order

logger = logging.getLogger(__name__)


@dataclass
class UpdateOrderRequest:
    """Any subset of the admin-editable fields."""

    order_id: UUID
    admin_id: UUID
    status: OrderStatus | None = None
    quoted_price: Decimal | None = None
    admin_notes: str | None = None


class UpdateOrderUseCase:
    """
    Use Case: Update Order

    A real status change notifies the customer; a change to CONFIRMED also
    alerts the admins.
    """

    def __init__(
        self,
        order_repository: IOrderRepository,
        notifier: IOrderNotifier,
        task_runner: ITaskRunner,
    ):
        self.order_repository = order_repository
        self.lifecycle = OrderLifecycleManager(order_repository)
        self.notifier = notifier
        self.task_runner = task_runner

    async def execute(self, request: UpdateOrderRequest) -> Order:
        order = await load_order(self.order_repository, request.order_id)

        saved, transition = await self.lifecycle.update(
            order,
            admin_id=request.admin_id,
            status=request.status,
            quoted_price=request.quoted_price,
            admin_notes=request.admin_notes,
        )

        if transition.changed:
            self.task_runner.spawn(
                self.notifier.on_status_changed(saved, transition.to_status, transition.from_status),
                name=f"notify-status-{saved.order_number}",
            )
        return saved


__all__ = ["UpdateOrderUseCase", "UpdateOrderRequest"]
