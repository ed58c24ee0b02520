"""
Provide Quote Use Case
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from uuid import UUID

from fieldfeed.domains.orders.application.ports import IOrderNotifier, IOrderRepository, ITaskRunner
from fieldfeed.domains.orders.application.services import OrderLifecycleManager
from fieldfeed.domains.orders.domain.entities import Order

from .get_order import load_order

logger = logging.getLogger(__name__)


@dataclass
class ProvideQuoteRequest:
    """Quote issued by an admin."""

    order_id: UUID
    admin_id: UUID
    quoted_price: Decimal
    admin_notes: str | None = None
    delivery_time: datetime | None = None


class ProvideQuoteUseCase:
    """
    Use Case: Provide Quote

    Stores the quote, forces the status to QUOTED and sends both the
    "quote ready" message (with invoice) and the regular status update.
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

    async def execute(self, request: ProvideQuoteRequest) -> Order:
        order = await load_order(self.order_repository, request.order_id)

        saved, transition = await self.lifecycle.quote(
            order,
            quoted_price=request.quoted_price,
            admin_id=request.admin_id,
            admin_notes=request.admin_notes,
            expected_delivery=request.delivery_time,
        )
        logger.info(f"Quote provided for order {saved.order_number}: {saved.quoted_price}")

        self.task_runner.spawn(
            self.notifier.on_quote_issued(saved, transition.from_status),
            name=f"notify-quote-{saved.order_number}",
        )
        return saved


__all__ = ["ProvideQuoteUseCase", "ProvideQuoteRequest"]
