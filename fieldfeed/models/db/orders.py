"""
Bulk order models
"""

import uuid
from typing import TYPE_CHECKING, List

from sqlalchemy import Column, DateTime, ForeignKey, Index, Integer, Numeric, Sequence, String, Text
from sqlalchemy.dialects.postgresql import JSONB, UUID
from sqlalchemy.orm import Mapped, relationship

from .base import Base, TimestampMixin

if TYPE_CHECKING:
    from .admins import Admin

# Source of ORD-NNNNNN numbers; unique without counting rows
order_number_seq = Sequence("order_number_seq", start=1, metadata=Base.metadata)


class Order(Base, TimestampMixin):
    """Bulk order requests"""

    __tablename__ = "orders"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    order_number = Column(String(20), unique=True, nullable=False, index=True)

    # Customer snapshot
    customer_name = Column(String(100), nullable=False)
    customer_email = Column(String(255), nullable=False, index=True)  # stored lowercased
    customer_phone = Column(String(20), nullable=False)
    customer_company = Column(String(200))

    delivery_address = Column(JSONB)  # {"street", "city", "state", "country", "zipCode"}

    # Pricing
    price_calculation = Column(JSONB)  # {"subtotal", "taxRate", "taxAmount", "total", "currency"}
    total_items = Column(Integer, nullable=False, default=0)
    total_estimated_value = Column(Numeric(14, 2), nullable=False, default=0)
    estimated_total = Column(Numeric(14, 2), nullable=False, default=0)
    estimated_tax = Column(Numeric(14, 2), nullable=False, default=0)

    # Lifecycle
    status = Column(String(20), nullable=False, default="pending")
    priority = Column(String(10), nullable=False, default="medium")  # low, medium, high, urgent
    quoted_price = Column(Numeric(14, 2), nullable=False, default=0)
    quoted_at = Column(DateTime(timezone=True))
    quoted_by = Column(UUID(as_uuid=True), ForeignKey("admins.id", ondelete="SET NULL"))
    confirmed_at = Column(DateTime(timezone=True))
    expected_delivery = Column(DateTime(timezone=True))

    # Annotations
    requirements = Column(Text)
    admin_notes = Column(Text)

    # Request metadata: {"sourceIp", "userAgent", "referrer"}
    meta_data = Column("metadata", JSONB, default=dict)

    # Optimistic concurrency token
    version = Column(Integer, nullable=False, default=1)

    # Relationships
    items: Mapped[List["OrderItem"]] = relationship(
        "OrderItem",
        back_populates="order",
        cascade="all, delete-orphan",
        order_by="OrderItem.position",
    )
    quoted_by_admin: Mapped["Admin"] = relationship("Admin")

    __table_args__ = (
        Index("idx_orders_status", status),
        Index("idx_orders_created_at", "created_at"),
        Index("idx_orders_number_email", order_number, customer_email),
    )

    def __repr__(self):
        return f"<Order(number='{self.order_number}', status='{self.status}', version={self.version})>"


class OrderItem(Base, TimestampMixin):
    """Line item snapshot of an order"""

    __tablename__ = "order_items"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    order_id = Column(UUID(as_uuid=True), ForeignKey("orders.id", ondelete="CASCADE"), nullable=False)
    position = Column(Integer, nullable=False, default=0)

    # Catalogue snapshot at order time
    product_id = Column(String(64), nullable=False)
    product_name = Column(String(255), nullable=False)
    category = Column(String(100), nullable=False, default="")
    unit = Column(String(30), nullable=False, default="")
    quantity = Column(Integer, nullable=False)
    estimated_price = Column(Numeric(14, 2), nullable=False, default=0)
    line_total = Column(Numeric(14, 2), nullable=False, default=0)
    notes = Column(Text)

    order: Mapped["Order"] = relationship("Order", back_populates="items")

    __table_args__ = (Index("idx_order_items_order", order_id),)

    def __repr__(self):
        return f"<OrderItem(product='{self.product_name}', quantity={self.quantity})>"
