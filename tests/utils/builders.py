"""
Test data builders using the Builder pattern.

Provides fluent interfaces for constructing orders and request payloads
with sensible defaults.
"""

from datetime import UTC, datetime, timedelta
from decimal import Decimal
from typing import Any
from uuid import UUID, uuid4

from fieldfeed.core.domain import Address
from fieldfeed.domains.orders.domain.entities import CustomerInfo, Order, OrderLineItem
from fieldfeed.domains.orders.domain.value_objects import OrderStatus, PriceCalculation


def line_item(
    name: str = "Organic Alfalfa Hay",
    quantity: int = 10,
    price: str = "50",
    category: str = "forage",
    unit: str = "bale",
) -> OrderLineItem:
    return OrderLineItem(
        product_id=f"prod-{name.lower().replace(' ', '-')}",
        name=name,
        category=category,
        quantity=quantity,
        unit=unit,
        estimated_price=Decimal(price),
    )


class OrderBuilder:
    """Builder for order entities, by default a 1000.00 subtotal order."""

    def __init__(self):
        self._customer = CustomerInfo(
            name="Priya Farms",
            email="buyer@priyafarms.com",
            phone="+15551234567",
            company="Priya Farms Co-op",
        )
        self._products = [line_item(quantity=10, price="50"), line_item("Corn Silage", quantity=5, price="100")]
        self._status = OrderStatus.PENDING
        self._order_number: str | None = "ORD-000001"
        self._id: UUID | None = uuid4()
        self._quoted_price = Decimal("0")
        self._price_calculation: PriceCalculation | None = None
        self._version = 1
        self._created_at = datetime.now(UTC)

    def with_customer(self, name: str = "Priya Farms", email: str = "buyer@priyafarms.com") -> "OrderBuilder":
        self._customer = CustomerInfo(name=name, email=email, phone="+15551234567")
        return self

    def with_products(self, *products: OrderLineItem) -> "OrderBuilder":
        self._products = list(products)
        return self

    def with_status(self, status: OrderStatus) -> "OrderBuilder":
        self._status = status
        return self

    def with_number(self, order_number: str | None) -> "OrderBuilder":
        self._order_number = order_number
        return self

    def with_id(self, order_id: UUID | None) -> "OrderBuilder":
        self._id = order_id
        return self

    def with_quote(self, amount: str) -> "OrderBuilder":
        self._quoted_price = Decimal(amount)
        return self

    def with_price_calculation(self, calculation: PriceCalculation | None) -> "OrderBuilder":
        self._price_calculation = calculation
        return self

    def created_at(self, when: datetime) -> "OrderBuilder":
        self._created_at = when
        return self

    def build(self) -> Order:
        order = Order.submit(
            customer=self._customer,
            products=self._products,
            delivery_address=Address(street="1 Barn Road", city="Fresno", state="CA", postal_code="93701", country="US"),
            price_calculation=self._price_calculation,
            requirements="Deliver before harvest",
        )
        order.id = self._id
        order.order_number = self._order_number
        order.status = self._status
        order.version = self._version
        order.created_at = self._created_at
        if self._quoted_price:
            order.record_quote(self._quoted_price)
        return order


def order_payload(**overrides: Any) -> dict[str, Any]:
    """JSON body for POST /orders/create."""
    payload: dict[str, Any] = {
        "customerInfo": {
            "name": "Priya Farms",
            "email": "Buyer@PriyaFarms.com",
            "phone": "+15551234567",
            "company": "Priya Farms Co-op",
        },
        "products": [
            {
                "productId": "prod-alfalfa",
                "name": "Organic Alfalfa Hay",
                "category": "forage",
                "quantity": 10,
                "unit": "bale",
                "estimatedPrice": 50,
                "lineTotal": 500,
            },
            {
                "productId": "prod-silage",
                "name": "Corn Silage",
                "category": "forage",
                "quantity": 5,
                "unit": "ton",
                "estimatedPrice": 100,
                "lineTotal": 500,
            },
        ],
        "deliveryAddress": {
            "street": "1 Barn Road",
            "city": "Fresno",
            "state": "CA",
            "country": "US",
            "zipCode": "93701",
        },
        "priceCalculation": {"subtotal": 1000, "taxRate": 0.18, "currency": "USD"},
        "requirements": "Deliver before harvest",
        "priority": "high",
    }
    payload.update(overrides)
    return payload


def utc_days_ago(days: int) -> datetime:
    return datetime.now(UTC) - timedelta(days=days)
