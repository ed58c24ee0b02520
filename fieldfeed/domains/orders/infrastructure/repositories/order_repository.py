"""
Order Repository Implementation

SQLAlchemy implementation of IOrderRepository.
"""

import logging
from datetime import datetime
from decimal import Decimal
from typing import Any, cast
from uuid import UUID

from sqlalchemy import func, inspect, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from fieldfeed.core.domain import Address, ConcurrencyException
from fieldfeed.domains.orders.application.dto import OrderListQuery, OrderPage, OrderStats, StatusBucket
from fieldfeed.domains.orders.domain.entities import (
    AdminRef,
    CustomerInfo,
    Order,
    OrderLineItem,
    RequestMetadata,
)
from fieldfeed.domains.orders.domain.value_objects import OrderPriority, OrderStatus, PriceCalculation
from fieldfeed.models.db.orders import Order as OrderModel
from fieldfeed.models.db.orders import OrderItem as OrderItemModel
from fieldfeed.models.db.orders import order_number_seq

logger = logging.getLogger(__name__)

ORDER_NUMBER_FORMAT = "ORD-{:06d}"


class SQLAlchemyOrderRepository:
    """
    SQLAlchemy implementation of order repository.

    Writes commit immediately so that a notification spawned after a write
    never observes uncommitted state.
    """

    def __init__(self, session: AsyncSession):
        """
        Initialize repository.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    def _with_relations(self):
        return select(OrderModel).options(
            selectinload(OrderModel.items),
            selectinload(OrderModel.quoted_by_admin),
        )

    async def next_order_number(self) -> str:
        """Draw from the Postgres sequence; numbers are never reused."""
        result = await self.session.execute(select(order_number_seq.next_value()))
        return ORDER_NUMBER_FORMAT.format(result.scalar_one())

    async def create(self, order: Order) -> Order:
        """Create a new order."""
        model = self._to_model(order)
        model.version = 1
        self.session.add(model)
        try:
            await self.session.commit()
        except Exception as e:
            logger.error(f"Error creating order {order.order_number}: {e}")
            await self.session.rollback()
            raise

        order.id = cast(UUID, model.id)
        order.created_at = cast(datetime, model.created_at)
        order.updated_at = cast(datetime, model.updated_at)
        order.version = 1
        logger.info(f"Order {order.order_number} created with {order.total_items} item(s)")
        return order

    async def get_by_id(self, order_id: UUID) -> Order | None:
        """Get order by ID."""
        result = await self.session.execute(self._with_relations().where(OrderModel.id == order_id))
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def get_by_number_and_email(self, order_number: str, email: str) -> Order | None:
        """Get order by number, only when the customer email matches too."""
        result = await self.session.execute(
            self._with_relations().where(
                OrderModel.order_number == order_number,
                OrderModel.customer_email == email.strip().lower(),
            )
        )
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def save(self, order: Order) -> Order:
        """
        Write the mutable fields back, guarded by the version column.

        Raises:
            ConcurrencyException: If another request saved the order first
        """
        expected_version = order.version
        values = self._mutable_values(order)
        values["version"] = expected_version + 1

        try:
            result = await self.session.execute(
                update(OrderModel)
                .where(OrderModel.id == order.id, OrderModel.version == expected_version)
                .values(**values)
                .execution_options(synchronize_session=False)
            )
            if result.rowcount == 0:
                await self.session.rollback()
                actual = await self.session.execute(select(OrderModel.version).where(OrderModel.id == order.id))
                raise ConcurrencyException("Order", order.id, expected_version, actual.scalar_one_or_none())
            await self.session.commit()
        except ConcurrencyException:
            logger.warning(f"Stale write rejected for order {order.order_number} (version {expected_version})")
            raise
        except Exception as e:
            logger.error(f"Error saving order {order.order_number}: {e}")
            await self.session.rollback()
            raise

        order.increment_version()
        return order

    async def delete(self, order_id: UUID) -> bool:
        """Delete an order; its items go with it."""
        result = await self.session.execute(select(OrderModel).where(OrderModel.id == order_id))
        model = result.scalar_one_or_none()
        if not model:
            return False
        await self.session.delete(model)
        await self.session.commit()
        return True

    async def list_orders(self, query: OrderListQuery) -> OrderPage:
        """Filter, search, sort and page through orders."""
        conditions = []
        if query.status is not None:
            conditions.append(OrderModel.status == query.status.value)
        if query.search:
            pattern = f"%{query.search.strip()}%"
            conditions.append(
                or_(
                    OrderModel.order_number.ilike(pattern),
                    OrderModel.customer_name.ilike(pattern),
                    OrderModel.customer_email.ilike(pattern),
                    OrderModel.customer_company.ilike(pattern),
                )
            )

        count_result = await self.session.execute(select(func.count(OrderModel.id)).where(*conditions))
        total = count_result.scalar_one()

        sort_column = getattr(OrderModel, query.sort_attribute)
        stmt = (
            self._with_relations()
            .where(*conditions)
            .order_by(sort_column.desc() if query.descending else sort_column.asc(), OrderModel.id)
            .offset(query.offset)
            .limit(query.limit)
        )
        result = await self.session.execute(stmt)
        orders = [self._to_entity(m) for m in result.scalars().all()]
        return OrderPage(orders=orders, total=total, page=query.page, limit=query.limit)

    async def get_stats(self) -> OrderStats:
        """Count and summed estimated value per status."""
        result = await self.session.execute(
            select(
                OrderModel.status,
                func.count(OrderModel.id),
                func.coalesce(func.sum(OrderModel.total_estimated_value), 0),
            )
            .group_by(OrderModel.status)
            .order_by(OrderModel.status)
        )
        buckets = [
            StatusBucket(status=status, count=count, total_value=Decimal(str(total_value)))
            for status, count, total_value in result.all()
        ]
        return OrderStats(by_status=buckets)

    async def get_recent(self, limit: int = 5) -> list[Order]:
        """Most recently created orders."""
        result = await self.session.execute(
            self._with_relations().order_by(OrderModel.created_at.desc()).limit(limit)
        )
        return [self._to_entity(m) for m in result.scalars().all()]

    # Mapping methods

    @staticmethod
    def _mutable_values(order: Order) -> dict[str, Any]:
        """Columns that lifecycle operations may change after creation."""
        return {
            "status": order.status.value,
            "priority": order.priority.value,
            "quoted_price": order.quoted_price,
            "quoted_at": order.quoted_at,
            "quoted_by": order.quoted_by,
            "confirmed_at": order.confirmed_at,
            "expected_delivery": order.expected_delivery,
            "total_estimated_value": order.total_estimated_value,
            "admin_notes": order.admin_notes,
            "updated_at": order.updated_at,
        }

    def _to_entity(self, model: OrderModel) -> Order:
        """Convert model to entity."""
        products = [
            OrderLineItem(
                product_id=cast(str, item.product_id),
                name=cast(str, item.product_name),
                category=cast(str, item.category) or "",
                quantity=cast(int, item.quantity),
                unit=cast(str, item.unit) or "",
                estimated_price=cast(Decimal, item.estimated_price),
                line_total=cast(Decimal, item.line_total),
                notes=cast(str | None, item.notes),
            )
            for item in model.items or []
        ]

        address_data = cast(dict | None, model.delivery_address)
        delivery_address = None
        if address_data:
            delivery_address = Address(
                street=address_data.get("street") or "",
                city=address_data.get("city") or "",
                state=address_data.get("state") or "",
                postal_code=address_data.get("zipCode") or "",
                country=address_data.get("country") or "",
            )

        metadata = cast(dict | None, model.meta_data) or {}

        # The quoting admin is only present when the query loaded it
        quoted_by_admin = None
        if "quoted_by_admin" not in inspect(model).unloaded and model.quoted_by_admin is not None:
            admin = model.quoted_by_admin
            quoted_by_admin = AdminRef(id=cast(UUID, admin.id), name=cast(str, admin.name), email=cast(str, admin.email))

        return Order(
            id=cast(UUID, model.id),
            created_at=cast(datetime, model.created_at),
            updated_at=cast(datetime, model.updated_at),
            version=cast(int, model.version),
            order_number=cast(str, model.order_number),
            customer=CustomerInfo(
                name=cast(str, model.customer_name),
                email=cast(str, model.customer_email),
                phone=cast(str, model.customer_phone),
                company=cast(str | None, model.customer_company) or "",
            ),
            products=products,
            delivery_address=delivery_address,
            price_calculation=PriceCalculation.from_dict(cast(dict | None, model.price_calculation)),
            total_estimated_value=cast(Decimal, model.total_estimated_value),
            estimated_total=cast(Decimal, model.estimated_total),
            estimated_tax=cast(Decimal, model.estimated_tax),
            status=OrderStatus(cast(str, model.status)),
            priority=OrderPriority(cast(str, model.priority)),
            quoted_price=cast(Decimal, model.quoted_price),
            quoted_at=cast(datetime | None, model.quoted_at),
            quoted_by=cast(UUID | None, model.quoted_by),
            quoted_by_admin=quoted_by_admin,
            confirmed_at=cast(datetime | None, model.confirmed_at),
            expected_delivery=cast(datetime | None, model.expected_delivery),
            requirements=cast(str | None, model.requirements),
            admin_notes=cast(str | None, model.admin_notes),
            metadata=RequestMetadata(
                source_ip=metadata.get("sourceIp"),
                user_agent=metadata.get("userAgent"),
                referrer=metadata.get("referrer"),
            ),
        )

    def _to_model(self, order: Order) -> OrderModel:
        """Convert a new entity to a model (items included)."""
        customer = order.customer
        if customer is None:
            raise ValueError("Cannot persist an order without customer information")

        address = order.delivery_address
        model = OrderModel(
            order_number=order.order_number,
            customer_name=customer.name,
            customer_email=customer.email,
            customer_phone=customer.phone,
            customer_company=customer.company or None,
            delivery_address=(
                {
                    "street": address.street,
                    "city": address.city,
                    "state": address.state,
                    "country": address.country,
                    "zipCode": address.postal_code,
                }
                if address is not None
                else None
            ),
            price_calculation=order.price_calculation.to_dict() if order.price_calculation else None,
            total_items=order.total_items,
            total_estimated_value=order.total_estimated_value,
            estimated_total=order.estimated_total,
            estimated_tax=order.estimated_tax,
            status=order.status.value,
            priority=order.priority.value,
            quoted_price=order.quoted_price,
            quoted_at=order.quoted_at,
            quoted_by=order.quoted_by,
            confirmed_at=order.confirmed_at,
            expected_delivery=order.expected_delivery,
            requirements=order.requirements,
            admin_notes=order.admin_notes,
            meta_data=order.metadata.to_dict(),
            created_at=order.created_at,
            updated_at=order.updated_at,
        )
        model.items = [
            OrderItemModel(
                position=position,
                product_id=item.product_id,
                product_name=item.name,
                category=item.category,
                unit=item.unit,
                quantity=item.quantity,
                estimated_price=item.estimated_price,
                line_total=item.line_total,
                notes=item.notes,
            )
            for position, item in enumerate(order.products)
        ]
        return model
