"""
Confirm Order Use Case

Customer self-confirmation of a quoted or reviewed order.
"""

from fieldfeed.domains.orders.application.ports import IOrderNotifier, IOrderRepository, ITaskRunner
from fieldfeed.domains.orders.application.services import OrderLifecycleManager
from fieldfeed.domains.orders.domain.entities import Order


class ConfirmOrderUseCase:
    """
    Use Case: Confirm Order

    The (order number, customer email) pair is the only authorization for
    this public operation.
    """

    def __init__(
        self,
        order_repository: IOrderRepository,
        notifier: IOrderNotifier,
        task_runner: ITaskRunner,
    ):
        self.lifecycle = OrderLifecycleManager(order_repository)
        self.notifier = notifier
        self.task_runner = task_runner

    async def execute(self, order_number: str, customer_email: str) -> Order:
        saved, transition = await self.lifecycle.confirm(order_number, customer_email)

        self.task_runner.spawn(
            self.notifier.on_status_changed(saved, transition.to_status, transition.from_status),
            name=f"notify-confirmed-{saved.order_number}",
        )
        return saved


__all__ = ["ConfirmOrderUseCase"]
