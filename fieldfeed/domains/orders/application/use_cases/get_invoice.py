"""
Get Invoice Use Case

Invoice figures for an order, reachable by admin ID or by the customer's
order number and email. Both paths use the same calculator.
"""

from dataclasses import dataclass
from typing import Any
from uuid import UUID

from fieldfeed.core.domain import EntityNotFoundException, ValidationException
from fieldfeed.domains.orders.application.ports import IOrderRepository
from fieldfeed.domains.orders.domain.entities import Order
from fieldfeed.domains.orders.domain.services import Invoice, InvoiceCalculator

from .get_order import load_order


@dataclass
class InvoiceResponse:
    order: Order
    invoice: Invoice
    company_info: dict[str, str]

    def to_dict(self) -> dict[str, Any]:
        return {
            **self.invoice.to_dict(),
            "order": self.order.to_detail_dict(),
            "companyInfo": self.company_info,
        }


class GetInvoiceUseCase:
    """Use Case: Get Invoice"""

    def __init__(
        self,
        order_repository: IOrderRepository,
        calculator: InvoiceCalculator,
        company_info: dict[str, str] | None = None,
    ):
        self.order_repository = order_repository
        self.calculator = calculator
        self.company_info = company_info or {}

    async def by_id(self, order_id: UUID) -> InvoiceResponse:
        order = await load_order(self.order_repository, order_id)
        return self._build(order)

    async def by_number_and_email(self, order_number: str | None, customer_email: str | None) -> InvoiceResponse:
        if not order_number or not customer_email:
            raise ValidationException("Order number and customer email are required")

        order = await self.order_repository.get_by_number_and_email(order_number, customer_email.strip().lower())
        if order is None:
            raise EntityNotFoundException("Order", order_number)
        return self._build(order)

    def _build(self, order: Order) -> InvoiceResponse:
        return InvoiceResponse(
            order=order,
            invoice=self.calculator.build(order),
            company_info=dict(self.company_info),
        )


__all__ = ["GetInvoiceUseCase", "InvoiceResponse"]
