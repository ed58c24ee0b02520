"""
Order Entity for the Orders Domain

Represents a bulk order request: a snapshot of the customer, the requested
line items and the price breakdown, plus the quote/confirm lifecycle.
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from decimal import Decimal
from typing import Any
from uuid import UUID

from fieldfeed.core.domain import (
    Address,
    AggregateRoot,
    Email,
    InvalidOperationException,
    ValidationException,
)

from ..value_objects.order_status import OrderPriority, OrderStatus, OrderStatusTransition
from ..value_objects.price_calculation import (
    DEFAULT_TAX_RATE,
    PriceCalculation,
    round_money,
    to_decimal,
)


@dataclass(frozen=True)
class CustomerInfo:
    """Customer details captured at order time (orders may come from guests)."""

    name: str
    email: str
    phone: str
    company: str = ""

    def __post_init__(self):
        try:
            object.__setattr__(self, "email", Email(self.email).address)
        except ValueError as e:
            raise ValidationException(str(e), field="customerInfo.email") from e

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "email": self.email, "phone": self.phone, "company": self.company}


@dataclass(frozen=True)
class AdminRef:
    """Identity of the admin who issued a quote, resolved for read models."""

    id: UUID
    name: str
    email: str

    def to_dict(self) -> dict[str, Any]:
        return {"id": str(self.id), "name": self.name, "email": self.email}


@dataclass(frozen=True)
class RequestMetadata:
    """Where the order submission came from."""

    source_ip: str | None = None
    user_agent: str | None = None
    referrer: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {"sourceIp": self.source_ip, "userAgent": self.user_agent, "referrer": self.referrer}


@dataclass
class OrderLineItem:
    """
    Requested product line.

    Name, category and unit are copied from the catalogue so later catalogue
    edits do not change historical orders.
    """

    product_id: str
    name: str
    category: str
    quantity: int
    unit: str
    estimated_price: Decimal = Decimal("0")
    line_total: Decimal = Decimal("0")
    notes: str | None = None

    def __post_init__(self):
        if self.quantity < 1:
            raise ValidationException("Quantity must be at least 1", field="products.quantity")
        self.estimated_price = to_decimal(self.estimated_price)
        self.line_total = to_decimal(self.line_total)

    @property
    def extended_price(self) -> Decimal:
        """Unit price times quantity."""
        return round_money(self.estimated_price * self.quantity)

    def to_dict(self) -> dict[str, Any]:
        return {
            "productId": self.product_id,
            "name": self.name,
            "category": self.category,
            "quantity": self.quantity,
            "unit": self.unit,
            "estimatedPrice": float(self.estimated_price),
            "lineTotal": float(self.line_total),
            "notes": self.notes,
        }


@dataclass
class Order(AggregateRoot):
    """
    Order aggregate root.

    Status changes go through ``apply_status`` so that the timestamp and
    ownership stamps always move together with the status.

    Example:
        ```python
        order = Order.submit(customer=CustomerInfo(...), products=[OrderLineItem(...)])
        order.apply_status(OrderStatus.REVIEWED, admin_id)
        order.record_quote(Decimal("500"))
        order.apply_status(OrderStatus.QUOTED, admin_id)
        order.ensure_customer_can_confirm()
        order.apply_status(OrderStatus.CONFIRMED)
        ```
    """

    order_number: str | None = None
    customer: CustomerInfo | None = None
    products: list[OrderLineItem] = field(default_factory=list)
    delivery_address: Address | None = None

    # Pricing
    price_calculation: PriceCalculation | None = None
    total_estimated_value: Decimal = Decimal("0")
    estimated_total: Decimal = Decimal("0")
    estimated_tax: Decimal = Decimal("0")

    # Lifecycle
    status: OrderStatus = OrderStatus.PENDING
    priority: OrderPriority = OrderPriority.MEDIUM
    quoted_price: Decimal = Decimal("0")
    quoted_at: datetime | None = None
    quoted_by: UUID | None = None
    quoted_by_admin: AdminRef | None = None
    confirmed_at: datetime | None = None
    expected_delivery: datetime | None = None

    # Annotations
    requirements: str | None = None
    admin_notes: str | None = None
    metadata: RequestMetadata = field(default_factory=RequestMetadata)

    @property
    def total_items(self) -> int:
        """Number of line items; always derived, never stored independently."""
        return len(self.products)

    @classmethod
    def submit(
        cls,
        customer: CustomerInfo,
        products: list[OrderLineItem],
        delivery_address: Address | None = None,
        price_calculation: PriceCalculation | None = None,
        requirements: str | None = None,
        priority: OrderPriority = OrderPriority.MEDIUM,
        metadata: RequestMetadata | None = None,
        default_tax_rate: Decimal = DEFAULT_TAX_RATE,
        currency: str = "USD",
    ) -> "Order":
        """
        Build a new pending order.

        The price breakdown is always normalised here: the subtotal comes from
        the submitted breakdown when it carries one, otherwise from the line
        items; tax and total are derived from it.

        Raises:
            ValidationException: If there are no products
        """
        if not products:
            raise ValidationException("Customer information and products are required", field="products")

        if price_calculation is not None and price_calculation.is_present:
            calculation = PriceCalculation.from_subtotal(
                price_calculation.subtotal,
                tax_rate=price_calculation.tax_rate,
                currency=price_calculation.currency,
            )
        else:
            tax_rate = price_calculation.tax_rate if price_calculation is not None else default_tax_rate
            calculation = PriceCalculation.from_line_amounts(
                (item.line_total or item.extended_price for item in products),
                tax_rate=tax_rate,
                currency=price_calculation.currency if price_calculation is not None else currency,
            )

        if delivery_address is not None and delivery_address.is_empty():
            delivery_address = None

        return cls(
            customer=customer,
            products=list(products),
            delivery_address=delivery_address,
            price_calculation=calculation,
            total_estimated_value=calculation.subtotal,
            estimated_total=calculation.total,
            estimated_tax=calculation.tax_amount,
            status=OrderStatus.PENDING,
            priority=priority,
            requirements=requirements or "",
            metadata=metadata or RequestMetadata(),
        )

    # Lifecycle

    def apply_status(self, new_status: OrderStatus, admin_id: UUID | None = None) -> OrderStatusTransition:
        """
        Move the order to ``new_status`` and stamp the transition.

        - QUOTED with an acting admin stamps ``quoted_at``/``quoted_by``; a
          re-quote stamps them again, so they name the latest quoting admin.
        - CONFIRMED stamps ``confirmed_at`` the first time, whoever triggers it.
        - Stamps are never cleared by later transitions.
        """
        previous = self.status
        if not previous.can_admin_transition_to(new_status):
            raise InvalidOperationException(operation="set_status", current_state=previous.value)

        now = datetime.now(UTC)
        self.status = new_status

        if new_status == OrderStatus.QUOTED and admin_id is not None:
            self.quoted_at = now
            self.quoted_by = admin_id

        if new_status == OrderStatus.CONFIRMED and self.confirmed_at is None:
            self.confirmed_at = now

        self.updated_at = now
        return OrderStatusTransition(
            from_status=previous,
            to_status=new_status,
            occurred_at=now,
            performed_by=str(admin_id) if admin_id else None,
        )

    def record_quote(
        self,
        quoted_price: Decimal,
        admin_notes: str | None = None,
        expected_delivery: datetime | None = None,
    ) -> None:
        """Store the quoted amount; it also becomes the displayed estimated value."""
        quoted_price = to_decimal(quoted_price)
        if quoted_price < 0:
            raise ValidationException("Quoted price must be a positive number", field="quotedPrice")

        self.quoted_price = quoted_price
        self.total_estimated_value = quoted_price
        if admin_notes:
            self.admin_notes = admin_notes
        if expected_delivery:
            self.expected_delivery = expected_delivery
        self.touch()

    def ensure_customer_can_confirm(self) -> None:
        if not self.status.can_customer_confirm():
            raise InvalidOperationException(
                operation="confirm",
                current_state=self.status.value,
                message=f"Order cannot be confirmed. Current status: {self.status.value}",
            )

    def ensure_can_be_deleted(self) -> None:
        if not self.status.can_be_deleted():
            raise InvalidOperationException(
                operation="delete",
                current_state=self.status.value,
                message="Cannot delete orders that are being processed",
            )

    # Serialization

    def to_summary_dict(self) -> dict[str, Any]:
        """Public view returned to customers after self-confirmation."""
        return {
            "orderNumber": self.order_number,
            "status": self.status.value,
            "confirmedAt": self.confirmed_at.isoformat() if self.confirmed_at else None,
            "quotedPrice": float(self.quoted_price),
        }

    def to_detail_dict(self) -> dict[str, Any]:
        """Full admin view of the order."""
        return {
            "id": str(self.id) if self.id else None,
            "orderNumber": self.order_number,
            "customerInfo": self.customer.to_dict() if self.customer else None,
            "products": [item.to_dict() for item in self.products],
            "deliveryAddress": _address_to_dict(self.delivery_address),
            "totalItems": self.total_items,
            "totalEstimatedValue": float(self.total_estimated_value),
            "estimatedTotal": float(self.estimated_total),
            "estimatedTax": float(self.estimated_tax),
            "priceCalculation": self.price_calculation.to_dict() if self.price_calculation else None,
            "status": self.status.value,
            "priority": self.priority.value,
            "requirements": self.requirements,
            "adminNotes": self.admin_notes,
            "quotedPrice": float(self.quoted_price),
            "quotedAt": self.quoted_at.isoformat() if self.quoted_at else None,
            "quotedBy": (
                self.quoted_by_admin.to_dict()
                if self.quoted_by_admin
                else (str(self.quoted_by) if self.quoted_by else None)
            ),
            "confirmedAt": self.confirmed_at.isoformat() if self.confirmed_at else None,
            "expectedDelivery": self.expected_delivery.isoformat() if self.expected_delivery else None,
            "metadata": self.metadata.to_dict(),
            "createdAt": self.created_at.isoformat() if self.created_at else None,
            "updatedAt": self.updated_at.isoformat() if self.updated_at else None,
        }


def _address_to_dict(address: Address | None) -> dict[str, str] | None:
    if address is None:
        return None
    return {
        "street": address.street,
        "city": address.city,
        "state": address.state,
        "country": address.country,
        "zipCode": address.postal_code,
    }
