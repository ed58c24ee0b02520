"""
In-memory fakes for the order ports.

They honour the same contracts as the SQLAlchemy repositories (versioned
saves, lookups scoped by customer email) so use cases and routes can be
tested without a database.
"""

import copy
from dataclasses import dataclass, field
from datetime import UTC, datetime
from decimal import Decimal
from pathlib import Path
from uuid import UUID, uuid4

from fieldfeed.core.domain import ConcurrencyException, NotificationException
from fieldfeed.domains.orders.application.dto import OrderListQuery, OrderPage, OrderStats, StatusBucket
from fieldfeed.domains.orders.application.ports import EmailMessage
from fieldfeed.domains.orders.domain.entities import AdminAccount, AdminRef, Order

ADMIN_EMAIL = "alerts@fieldtofeed.com"


class InMemoryOrderRepository:
    """IOrderRepository backed by a dict of snapshots."""

    def __init__(self, admins: "InMemoryAdminRepository | None" = None):
        self._orders: dict[UUID, Order] = {}
        self._sequence = 0
        self._admins = admins
        self.save_calls = 0

    def _snapshot(self, order: Order) -> Order:
        return copy.deepcopy(order)

    def _resolve(self, order: Order) -> Order:
        loaded = self._snapshot(order)
        if loaded.quoted_by and self._admins is not None:
            admin = self._admins.admins.get(loaded.quoted_by)
            if admin is not None:
                loaded.quoted_by_admin = AdminRef(id=admin.id, name=admin.name, email=admin.email)
        return loaded

    async def next_order_number(self) -> str:
        self._sequence += 1
        return f"ORD-{self._sequence:06d}"

    async def create(self, order: Order) -> Order:
        order.id = order.id or uuid4()
        order.version = 1
        self._orders[order.id] = self._snapshot(order)
        return order

    async def get_by_id(self, order_id: UUID) -> Order | None:
        stored = self._orders.get(order_id)
        return self._resolve(stored) if stored else None

    async def get_by_number_and_email(self, order_number: str, email: str) -> Order | None:
        for stored in self._orders.values():
            if stored.order_number == order_number and stored.customer.email == email.strip().lower():
                return self._resolve(stored)
        return None

    async def save(self, order: Order) -> Order:
        self.save_calls += 1
        stored = self._orders.get(order.id)
        if stored is None or stored.version != order.version:
            raise ConcurrencyException("Order", order.id, order.version, stored.version if stored else None)
        order.increment_version()
        self._orders[order.id] = self._snapshot(order)
        return order

    async def delete(self, order_id: UUID) -> bool:
        return self._orders.pop(order_id, None) is not None

    async def list_orders(self, query: OrderListQuery) -> OrderPage:
        orders = list(self._orders.values())
        if query.status is not None:
            orders = [o for o in orders if o.status == query.status]
        if query.search:
            needle = query.search.lower()
            orders = [
                o
                for o in orders
                if any(
                    needle in (value or "").lower()
                    for value in (o.order_number, o.customer.name, o.customer.email, o.customer.company)
                )
            ]
        orders.sort(key=lambda o: _sort_value(getattr(o, query.sort_attribute)), reverse=query.descending)
        page = orders[query.offset : query.offset + query.limit]
        return OrderPage(
            orders=[self._resolve(o) for o in page],
            total=len(orders),
            page=query.page,
            limit=query.limit,
        )

    async def get_stats(self) -> OrderStats:
        buckets: dict[str, StatusBucket] = {}
        for order in self._orders.values():
            bucket = buckets.setdefault(order.status.value, StatusBucket(status=order.status.value, count=0))
            bucket.count += 1
            bucket.total_value += order.total_estimated_value
        return OrderStats(by_status=sorted(buckets.values(), key=lambda b: b.status))

    async def get_recent(self, limit: int = 5) -> list[Order]:
        recent = sorted(self._orders.values(), key=lambda o: o.created_at, reverse=True)[:limit]
        return [self._resolve(o) for o in recent]

    # Test helpers

    def stored(self, order_id: UUID) -> Order:
        return self._orders[order_id]

    def bump_version(self, order_id: UUID) -> None:
        """Simulate a concurrent write by another request."""
        self._orders[order_id].version += 1

    def __len__(self) -> int:
        return len(self._orders)


def _sort_value(value):
    if hasattr(value, "value"):
        return value.value
    if value is None:
        return ""
    return value


class InMemoryAdminRepository:
    """IAdminRepository over a dict."""

    def __init__(self, *admins: AdminAccount):
        self.admins: dict[UUID, AdminAccount] = {admin.id: admin for admin in admins}

    def add(self, admin: AdminAccount) -> AdminAccount:
        self.admins[admin.id] = admin
        return admin

    async def get_by_id(self, admin_id: UUID) -> AdminAccount | None:
        return self.admins.get(admin_id)


@dataclass
class SentMessage:
    """What the transport saw, captured while attachments still existed."""

    message: EmailMessage
    attachment_paths: list[Path] = field(default_factory=list)
    attachment_bytes: list[bytes] = field(default_factory=list)

    @property
    def to(self) -> str:
        return self.message.to

    @property
    def subject(self) -> str:
        return self.message.subject


class RecordingEmailSender:
    """IEmailSender that records messages; can be told to fail."""

    def __init__(self):
        self.sent: list[SentMessage] = []
        self.fail_for: set[str] = set()
        self.fail_all = False

    async def send(self, message: EmailMessage) -> None:
        if self.fail_all or message.to in self.fail_for:
            raise NotificationException("SMTP unavailable", recipient=message.to)
        self.sent.append(
            SentMessage(
                message=message,
                attachment_paths=[a.path for a in message.attachments],
                attachment_bytes=[a.path.read_bytes() for a in message.attachments],
            )
        )

    def to(self, recipient: str) -> list[SentMessage]:
        return [m for m in self.sent if m.to == recipient]

    def subjects(self) -> list[str]:
        return [m.subject for m in self.sent]


def make_admin(name: str = "Dana Admin", email: str = "dana@fieldtofeed.com", **kwargs) -> AdminAccount:
    return AdminAccount(id=kwargs.pop("id", uuid4()), name=name, email=email, **kwargs)


def utc(year: int, month: int, day: int) -> datetime:
    return datetime(year, month, day, tzinfo=UTC)


def money(value: str) -> Decimal:
    return Decimal(value)


class RecordingTaskRunner:
    """ITaskRunner that holds spawned coroutines until the test runs them."""

    def __init__(self):
        self.spawned: list[tuple[str | None, object]] = []

    def spawn(self, coro, name: str | None = None) -> None:
        self.spawned.append((name, coro))

    @property
    def names(self) -> list[str | None]:
        return [name for name, _ in self.spawned]

    async def run_all(self) -> None:
        pending, self.spawned = self.spawned, []
        for _, coro in pending:
            await coro

    def close(self) -> None:
        for _, coro in self.spawned:
            coro.close()
        self.spawned = []
