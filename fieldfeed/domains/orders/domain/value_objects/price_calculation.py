"""
Price Calculation Value Object for the Orders Domain

The price breakdown computed once when an order is submitted.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Any

from fieldfeed.core.domain import ValueObject
from fieldfeed.core.domain.value_objects import CENTS

DEFAULT_TAX_RATE = Decimal("0.18")


def to_decimal(value: Any) -> Decimal:
    """Coerce numbers coming from JSON or the database into Decimal."""
    if value is None:
        return Decimal("0")
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def round_money(value: Decimal) -> Decimal:
    return value.quantize(CENTS, ROUND_HALF_UP)


@dataclass(frozen=True)
class PriceCalculation(ValueObject):
    """
    Subtotal, tax and total for an order.

    ``tax_rate`` is a fraction (0.18 means 18%).
    """

    subtotal: Decimal = Decimal("0")
    tax_rate: Decimal = DEFAULT_TAX_RATE
    tax_amount: Decimal = Decimal("0")
    total: Decimal = Decimal("0")
    currency: str = "USD"

    def _validate(self) -> None:
        for name in ("subtotal", "tax_rate", "tax_amount", "total"):
            value = to_decimal(getattr(self, name))
            if value < 0:
                raise ValueError(f"{name} cannot be negative")
            object.__setattr__(self, name, value)

    @property
    def is_present(self) -> bool:
        """A stored breakdown is only authoritative when it carries a subtotal."""
        return self.subtotal > 0

    @classmethod
    def from_subtotal(
        cls,
        subtotal: Decimal,
        tax_rate: Decimal = DEFAULT_TAX_RATE,
        currency: str = "USD",
    ) -> "PriceCalculation":
        subtotal = round_money(to_decimal(subtotal))
        tax_amount = round_money(subtotal * to_decimal(tax_rate))
        return cls(
            subtotal=subtotal,
            tax_rate=to_decimal(tax_rate),
            tax_amount=tax_amount,
            total=subtotal + tax_amount,
            currency=currency,
        )

    @classmethod
    def from_line_amounts(
        cls,
        amounts: Iterable[Decimal],
        tax_rate: Decimal = DEFAULT_TAX_RATE,
        currency: str = "USD",
    ) -> "PriceCalculation":
        return cls.from_subtotal(sum(amounts, Decimal("0")), tax_rate=tax_rate, currency=currency)

    def to_dict(self) -> dict[str, Any]:
        return {
            "subtotal": float(self.subtotal),
            "taxRate": float(self.tax_rate),
            "taxAmount": float(self.tax_amount),
            "total": float(self.total),
            "currency": self.currency,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> "PriceCalculation | None":
        if not data:
            return None
        return cls(
            subtotal=to_decimal(data.get("subtotal")),
            tax_rate=to_decimal(data.get("taxRate", data.get("tax_rate", DEFAULT_TAX_RATE))),
            tax_amount=to_decimal(data.get("taxAmount", data.get("tax_amount"))),
            total=to_decimal(data.get("total")),
            currency=data.get("currency") or "USD",
        )
