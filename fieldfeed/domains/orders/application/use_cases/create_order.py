"""
Create Order Use Case

Public order submission.
"""

import logging
from dataclasses import dataclass
from decimal import Decimal

from fieldfeed.core.domain import Address, ValidationException
from fieldfeed.domains.orders.application.ports import IOrderNotifier, IOrderRepository, ITaskRunner
from fieldfeed.domains.orders.domain.entities import CustomerInfo, Order, OrderLineItem, RequestMetadata
from fieldfeed.domains.orders.domain.value_objects import (
    DEFAULT_TAX_RATE,
    OrderPriority,
    PriceCalculation,
)

logger = logging.getLogger(__name__)


@dataclass
class CreateOrderRequest:
    """Request for creating an order."""

    customer: CustomerInfo | None
    products: list[OrderLineItem]
    delivery_address: Address | None = None
    price_calculation: PriceCalculation | None = None
    requirements: str | None = None
    priority: OrderPriority = OrderPriority.MEDIUM
    metadata: RequestMetadata | None = None


class CreateOrderUseCase:
    """
    Use Case: Create Order

    Responsibilities:
    - Reject submissions without customer info or products
    - Normalise the price breakdown and assign the order number
    - Persist, then hand the "new order" notifications to the task runner
    """

    def __init__(
        self,
        order_repository: IOrderRepository,
        notifier: IOrderNotifier,
        task_runner: ITaskRunner,
        default_tax_rate: Decimal = DEFAULT_TAX_RATE,
        currency: str = "USD",
    ):
        self.order_repository = order_repository
        self.notifier = notifier
        self.task_runner = task_runner
        self.default_tax_rate = default_tax_rate
        self.currency = currency

    async def execute(self, request: CreateOrderRequest) -> Order:
        if request.customer is None or not request.products:
            raise ValidationException("Customer information and products are required")

        order = Order.submit(
            customer=request.customer,
            products=request.products,
            delivery_address=request.delivery_address,
            price_calculation=request.price_calculation,
            requirements=request.requirements,
            priority=request.priority,
            metadata=request.metadata,
            default_tax_rate=self.default_tax_rate,
            currency=self.currency,
        )
        order.order_number = await self.order_repository.next_order_number()
        created = await self.order_repository.create(order)

        logger.info(
            f"Order created: {created.order_number} for {created.customer.email} "
            f"({created.total_items} items, subtotal {created.price_calculation.subtotal})"
        )

        self.task_runner.spawn(
            self.notifier.on_order_created(created),
            name=f"notify-order-created-{created.order_number}",
        )
        return created


__all__ = ["CreateOrderUseCase", "CreateOrderRequest"]
