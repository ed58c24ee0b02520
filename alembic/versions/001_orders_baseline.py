"""Baseline migration - admins, orders and order items.

Revision ID: 001_orders_baseline
Revises: None
Create Date: 2026-10-19

Creates:
- admins: bearer-token authenticated administrators
- orders: bulk order aggregate with optimistic version column
- order_items: line item snapshots (cascade delete with the order)
- order_number_seq: source of ORD-NNNNNN order numbers
"""

from typing import Sequence, Union

import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import JSONB, UUID

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "001_orders_baseline"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.text("now()")),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.text("now()")),
    ]


def upgrade() -> None:
    """Create the order lifecycle schema."""

    # ==========================================================================
    # 1. Administrators
    # ==========================================================================
    op.create_table(
        "admins",
        sa.Column("id", UUID(as_uuid=True), primary_key=True, server_default=sa.text("gen_random_uuid()")),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("role", sa.String(20), nullable=False, server_default="admin"),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.text("true")),
        sa.Column("lock_until", sa.DateTime(timezone=True), nullable=True),
        sa.Column("last_login", sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_admins_email", "admins", ["email"], unique=True)

    # ==========================================================================
    # 2. Order number sequence
    # ==========================================================================
    op.execute("CREATE SEQUENCE IF NOT EXISTS order_number_seq START WITH 1")

    # ==========================================================================
    # 3. Orders
    # ==========================================================================
    op.create_table(
        "orders",
        sa.Column("id", UUID(as_uuid=True), primary_key=True, server_default=sa.text("gen_random_uuid()")),
        sa.Column("order_number", sa.String(20), nullable=False),
        # Customer snapshot
        sa.Column("customer_name", sa.String(100), nullable=False),
        sa.Column("customer_email", sa.String(255), nullable=False, comment="Stored lowercased"),
        sa.Column("customer_phone", sa.String(20), nullable=False),
        sa.Column("customer_company", sa.String(200), nullable=True),
        sa.Column("delivery_address", JSONB(), nullable=True),
        # Pricing
        sa.Column("price_calculation", JSONB(), nullable=True),
        sa.Column("total_items", sa.Integer(), nullable=False, server_default=sa.text("0")),
        sa.Column("total_estimated_value", sa.Numeric(14, 2), nullable=False, server_default=sa.text("0")),
        sa.Column("estimated_total", sa.Numeric(14, 2), nullable=False, server_default=sa.text("0")),
        sa.Column("estimated_tax", sa.Numeric(14, 2), nullable=False, server_default=sa.text("0")),
        # Lifecycle
        sa.Column("status", sa.String(20), nullable=False, server_default="pending"),
        sa.Column("priority", sa.String(10), nullable=False, server_default="medium"),
        sa.Column("quoted_price", sa.Numeric(14, 2), nullable=False, server_default=sa.text("0")),
        sa.Column("quoted_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column(
            "quoted_by",
            UUID(as_uuid=True),
            sa.ForeignKey("admins.id", ondelete="SET NULL"),
            nullable=True,
        ),
        sa.Column("confirmed_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("expected_delivery", sa.DateTime(timezone=True), nullable=True),
        # Annotations
        sa.Column("requirements", sa.Text(), nullable=True),
        sa.Column("admin_notes", sa.Text(), nullable=True),
        sa.Column("metadata", JSONB(), nullable=True),
        sa.Column("version", sa.Integer(), nullable=False, server_default=sa.text("1")),
        *_timestamps(),
        sa.CheckConstraint(
            "status IN ('pending', 'reviewed', 'quoted', 'confirmed', 'processing', 'shipped', 'delivered', 'cancelled')",
            name="ck_orders_status",
        ),
        sa.CheckConstraint("quoted_price >= 0", name="ck_orders_quoted_price"),
    )
    op.create_index("ix_orders_order_number", "orders", ["order_number"], unique=True)
    op.create_index("ix_orders_customer_email", "orders", ["customer_email"])
    op.create_index("idx_orders_status", "orders", ["status"])
    op.create_index("idx_orders_created_at", "orders", ["created_at"])
    op.create_index("idx_orders_number_email", "orders", ["order_number", "customer_email"])

    # ==========================================================================
    # 4. Order items
    # ==========================================================================
    op.create_table(
        "order_items",
        sa.Column("id", UUID(as_uuid=True), primary_key=True, server_default=sa.text("gen_random_uuid()")),
        sa.Column(
            "order_id",
            UUID(as_uuid=True),
            sa.ForeignKey("orders.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("position", sa.Integer(), nullable=False, server_default=sa.text("0")),
        sa.Column("product_id", sa.String(64), nullable=False),
        sa.Column("product_name", sa.String(255), nullable=False),
        sa.Column("category", sa.String(100), nullable=False, server_default=""),
        sa.Column("unit", sa.String(30), nullable=False, server_default=""),
        sa.Column("quantity", sa.Integer(), nullable=False),
        sa.Column("estimated_price", sa.Numeric(14, 2), nullable=False, server_default=sa.text("0")),
        sa.Column("line_total", sa.Numeric(14, 2), nullable=False, server_default=sa.text("0")),
        sa.Column("notes", sa.Text(), nullable=True),
        *_timestamps(),
        sa.CheckConstraint("quantity >= 1", name="ck_order_items_quantity"),
    )
    op.create_index("idx_order_items_order", "order_items", ["order_id"])


def downgrade() -> None:
    """Drop the order lifecycle schema."""
    op.drop_index("idx_order_items_order", table_name="order_items")
    op.drop_table("order_items")

    op.drop_index("idx_orders_number_email", table_name="orders")
    op.drop_index("idx_orders_created_at", table_name="orders")
    op.drop_index("idx_orders_status", table_name="orders")
    op.drop_index("ix_orders_customer_email", table_name="orders")
    op.drop_index("ix_orders_order_number", table_name="orders")
    op.drop_table("orders")

    op.execute("DROP SEQUENCE IF EXISTS order_number_seq")

    op.drop_index("ix_admins_email", table_name="admins")
    op.drop_table("admins")
