"""
Invoice Calculator for the Orders Domain

Domain service producing invoice numbers and canonical invoice totals.
Every invoice path (PDF attachment, public lookup, admin lookup) goes
through ``InvoiceCalculator`` so the same order always yields the same figures.
"""

import re
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from decimal import Decimal
from typing import Any

from ..entities.order import Order
from ..value_objects.price_calculation import (
    DEFAULT_TAX_RATE,
    PriceCalculation,
    round_money,
)

_NON_DIGITS = re.compile(r"\D")


def invoice_number_for(order_number: str | None) -> str:
    """``ORD-000042`` -> ``INV-000042``."""
    digits = _NON_DIGITS.sub("", order_number or "")
    return f"INV-{digits or '000001'}"


@dataclass(frozen=True)
class InvoiceLine:
    """One billed product line."""

    name: str
    category: str
    quantity: int
    unit: str
    unit_price: Decimal
    line_total: Decimal

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "category": self.category,
            "quantity": self.quantity,
            "unit": self.unit,
            "unitPrice": float(self.unit_price),
            "lineTotal": float(self.line_total),
        }


@dataclass(frozen=True)
class Invoice:
    """Invoice figures for an order."""

    invoice_number: str
    order_number: str
    invoice_date: datetime
    due_date: datetime
    totals: PriceCalculation
    lines: list[InvoiceLine] = field(default_factory=list)

    @property
    def subtotal(self) -> Decimal:
        return self.totals.subtotal

    @property
    def tax_rate(self) -> Decimal:
        return self.totals.tax_rate

    @property
    def tax_amount(self) -> Decimal:
        return self.totals.tax_amount

    @property
    def total(self) -> Decimal:
        return self.totals.total

    def to_dict(self) -> dict[str, Any]:
        return {
            "invoiceNumber": self.invoice_number,
            "orderNumber": self.order_number,
            "invoiceDate": self.invoice_date.isoformat(),
            "dueDate": self.due_date.isoformat(),
            "subtotal": float(self.subtotal),
            "taxRate": float(self.tax_rate),
            "taxAmount": float(self.tax_amount),
            "total": float(self.total),
            "currency": self.totals.currency,
            "lines": [line.to_dict() for line in self.lines],
        }


class InvoiceCalculator:
    """
    Computes invoice totals for an order.

    Rules:
    - A stored price breakdown with a non-zero subtotal is used as is.
    - Otherwise the subtotal is the sum of unit price times quantity over the
      products, falling back to the quoted price when that sum is zero, and
      tax is applied at ``fallback_tax_rate``.

    Example:
        ```python
        calculator = InvoiceCalculator()
        invoice = calculator.build(order)
        print(invoice.invoice_number, invoice.total)
        ```
    """

    def __init__(
        self,
        fallback_tax_rate: Decimal = DEFAULT_TAX_RATE,
        due_days: int = 30,
        currency: str = "USD",
    ):
        self.fallback_tax_rate = Decimal(str(fallback_tax_rate))
        self.due_days = due_days
        self.currency = currency

    def totals_for(self, order: Order) -> PriceCalculation:
        stored = order.price_calculation
        if stored is not None and stored.is_present:
            if stored.total > 0:
                return stored
            # Breakdown saved without derived figures
            return PriceCalculation.from_subtotal(stored.subtotal, stored.tax_rate, stored.currency)

        subtotal = sum((item.extended_price for item in order.products), Decimal("0"))
        if subtotal == 0:
            subtotal = order.quoted_price
        currency = stored.currency if stored is not None else self.currency
        return PriceCalculation.from_subtotal(subtotal, self.fallback_tax_rate, currency)

    def lines_for(self, order: Order) -> list[InvoiceLine]:
        return [
            InvoiceLine(
                name=item.name,
                category=item.category,
                quantity=item.quantity,
                unit=item.unit,
                unit_price=item.estimated_price,
                line_total=item.line_total if item.line_total > 0 else round_money(item.extended_price),
            )
            for item in order.products
        ]

    def build(self, order: Order, issued_at: datetime | None = None) -> Invoice:
        issued_at = issued_at or datetime.now(UTC)
        return Invoice(
            invoice_number=invoice_number_for(order.order_number),
            order_number=order.order_number or "",
            invoice_date=issued_at,
            due_date=issued_at + timedelta(days=self.due_days),
            totals=self.totals_for(order),
            lines=self.lines_for(order),
        )
