"""
Resend Notification Use Case

Operator-triggered re-delivery of a lifecycle message for one order.
"""

import logging
from uuid import UUID

from fieldfeed.core.domain import StatusEnum
from fieldfeed.domains.orders.application.ports import IOrderNotifier, IOrderRepository

from .get_order import load_order

logger = logging.getLogger(__name__)


class NotificationKind(StatusEnum):
    ORDER_RECEIVED = "order_received"
    ADMIN_NEW_ORDER = "admin_new_order"
    STATUS_UPDATE = "status_update"
    QUOTE = "quote"
    ADMIN_CONFIRMED = "admin_confirmed"


class ResendNotificationUseCase:
    """
    Use Case: Resend Notification

    Awaited rather than detached: the operator wants to know whether the
    message went out this time.
    """

    def __init__(self, order_repository: IOrderRepository, notifier: IOrderNotifier):
        self.order_repository = order_repository
        self.notifier = notifier

    async def execute(self, order_id: UUID, kind: NotificationKind, admin_id: UUID | None = None) -> bool:
        order = await load_order(self.order_repository, order_id)
        logger.info(f"Resend of '{kind.value}' for order {order.order_number} requested by {admin_id}")

        if kind == NotificationKind.ORDER_RECEIVED:
            return await self.notifier.send_order_received(order)
        if kind == NotificationKind.ADMIN_NEW_ORDER:
            return await self.notifier.send_admin_new_order(order)
        if kind == NotificationKind.STATUS_UPDATE:
            return await self.notifier.send_status_update(order, order.status)
        if kind == NotificationKind.QUOTE:
            return await self.notifier.send_quote(order)
        return await self.notifier.send_admin_confirmed(order)


__all__ = ["ResendNotificationUseCase", "NotificationKind"]
