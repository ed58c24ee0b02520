"""
Orders API Schemas

Pydantic schemas for request validation. Field names follow the public
camelCase JSON contract through aliases.
"""

import re
from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from fieldfeed.core.domain import Address
from fieldfeed.domains.orders.application.use_cases import (
    CreateOrderRequest,
    NotificationKind,
)
from fieldfeed.domains.orders.domain.entities import CustomerInfo, OrderLineItem, RequestMetadata
from fieldfeed.domains.orders.domain.value_objects import (
    DEFAULT_TAX_RATE,
    OrderPriority,
    OrderStatus,
    PriceCalculation,
)

ORDER_NUMBER_PATTERN = re.compile(r"^ORD-\d{6}$")


class CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)


# ==================== Order creation ====================


class CustomerInfoSchema(CamelModel):
    """Customer snapshot submitted with the order."""

    name: str = Field(..., min_length=2, max_length=100)
    email: EmailStr
    phone: str = Field(..., min_length=10, max_length=20)
    company: str | None = Field(default=None, max_length=200)

    def to_domain(self) -> CustomerInfo:
        return CustomerInfo(name=self.name, email=str(self.email), phone=self.phone, company=self.company or "")


class ProductLineSchema(CamelModel):
    product_id: str = Field(..., alias="productId", min_length=1)
    name: str = Field(..., min_length=1)
    category: str = ""
    quantity: int = Field(..., ge=1)
    unit: str = ""
    estimated_price: Decimal = Field(default=Decimal("0"), alias="estimatedPrice", ge=0)
    line_total: Decimal = Field(default=Decimal("0"), alias="lineTotal", ge=0)
    notes: str | None = None

    def to_domain(self) -> OrderLineItem:
        return OrderLineItem(
            product_id=self.product_id,
            name=self.name,
            category=self.category,
            quantity=self.quantity,
            unit=self.unit,
            estimated_price=self.estimated_price,
            line_total=self.line_total,
            notes=self.notes,
        )


class DeliveryAddressSchema(CamelModel):
    street: str = ""
    city: str = ""
    state: str = ""
    country: str = ""
    zip_code: str = Field(default="", alias="zipCode")

    def to_domain(self) -> Address:
        return Address(
            street=self.street,
            city=self.city,
            state=self.state,
            postal_code=self.zip_code,
            country=self.country,
        )


class PriceCalculationSchema(CamelModel):
    """Client-side breakdown; the server recomputes tax and total from it."""

    subtotal: Decimal = Field(default=Decimal("0"), ge=0)
    tax_rate: Decimal = Field(default=DEFAULT_TAX_RATE, alias="taxRate", ge=0, lt=1)
    tax_amount: Decimal = Field(default=Decimal("0"), alias="taxAmount", ge=0)
    total: Decimal = Field(default=Decimal("0"), ge=0)
    currency: str = Field(default="USD", min_length=3, max_length=3)

    def to_domain(self) -> PriceCalculation:
        return PriceCalculation(
            subtotal=self.subtotal,
            tax_rate=self.tax_rate,
            tax_amount=self.tax_amount,
            total=self.total,
            currency=self.currency.upper(),
        )


class CreateOrderSchema(CamelModel):
    """Public order submission."""

    customer_info: CustomerInfoSchema = Field(..., alias="customerInfo")
    products: list[ProductLineSchema] = Field(..., min_length=1)
    delivery_address: DeliveryAddressSchema | None = Field(default=None, alias="deliveryAddress")
    price_calculation: PriceCalculationSchema | None = Field(default=None, alias="priceCalculation")
    requirements: str | None = Field(default=None, max_length=1000)
    priority: OrderPriority = OrderPriority.MEDIUM

    def to_request(self, metadata: RequestMetadata | None = None) -> CreateOrderRequest:
        return CreateOrderRequest(
            customer=self.customer_info.to_domain(),
            products=[product.to_domain() for product in self.products],
            delivery_address=self.delivery_address.to_domain() if self.delivery_address else None,
            price_calculation=self.price_calculation.to_domain() if self.price_calculation else None,
            requirements=self.requirements,
            priority=self.priority,
            metadata=metadata,
        )


# ==================== Admin updates ====================


class UpdateOrderSchema(CamelModel):
    """Any subset of status, quoted price and admin notes."""

    status: OrderStatus | None = None
    quoted_price: Decimal | None = Field(default=None, alias="quotedPrice")
    admin_notes: str | None = Field(default=None, alias="adminNotes", max_length=1000)

    @field_validator("status", mode="before")
    @classmethod
    def validate_status(cls, v):
        if v is None or isinstance(v, OrderStatus):
            return v
        if isinstance(v, str) and v in OrderStatus.values():
            return OrderStatus(v)
        raise ValueError("Invalid status value")

    @field_validator("quoted_price")
    @classmethod
    def validate_quoted_price(cls, v):
        if v is not None and v < 0:
            raise ValueError("Quoted price must be a positive number")
        return v


class QuoteSchema(CamelModel):
    quoted_price: Decimal = Field(..., alias="quotedPrice")
    admin_notes: str | None = Field(default=None, alias="adminNotes", max_length=1000)
    delivery_time: datetime | None = Field(default=None, alias="deliveryTime")

    @field_validator("quoted_price")
    @classmethod
    def validate_quoted_price(cls, v):
        if v < 0:
            raise ValueError("Quoted price must be a positive number")
        return v


# ==================== Public confirmation ====================


class ConfirmOrderSchema(CamelModel):
    order_number: str = Field(..., alias="orderNumber")
    customer_email: EmailStr = Field(..., alias="customerEmail")

    @field_validator("order_number")
    @classmethod
    def validate_order_number(cls, v):
        if not ORDER_NUMBER_PATTERN.match(v):
            raise ValueError("Invalid order number format")
        return v


# ==================== Operator resend ====================


class ResendNotificationSchema(CamelModel):
    kind: NotificationKind
