"""
Notification Ports

Contracts for outbound mail, the order notification dispatcher and the
detached task runner the endpoints hand notifications to.
"""

from collections.abc import Coroutine
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Protocol, runtime_checkable

from fieldfeed.domains.orders.domain.entities import Order
from fieldfeed.domains.orders.domain.value_objects import OrderStatus


@dataclass(frozen=True)
class EmailAttachment:
    """File attached to an outgoing message, read from ``path`` at send time."""

    filename: str
    path: Path
    content_type: str = "application/pdf"


@dataclass
class EmailMessage:
    """A rendered message ready for the transport."""

    to: str
    subject: str
    html: str
    text: str = ""
    attachments: list[EmailAttachment] = field(default_factory=list)


@runtime_checkable
class IEmailSender(Protocol):
    """Mail transport."""

    async def send(self, message: EmailMessage) -> None:
        """Deliver ``message``; raises NotificationException on failure"""
        ...


@runtime_checkable
class IOrderNotifier(Protocol):
    """
    Translates lifecycle events into outbound messages.

    Implementations never raise: delivery failures are logged with the order
    number, recipient and template so an operator can resend.
    """

    async def on_order_created(self, order: Order) -> None: ...

    async def on_status_changed(self, order: Order, new_status: OrderStatus, previous_status: OrderStatus) -> None: ...

    async def on_quote_issued(self, order: Order, previous_status: OrderStatus) -> None: ...

    async def send_order_received(self, order: Order) -> bool: ...

    async def send_admin_new_order(self, order: Order) -> bool: ...

    async def send_status_update(
        self, order: Order, new_status: OrderStatus, previous_status: OrderStatus | None = None
    ) -> bool: ...

    async def send_quote(self, order: Order) -> bool: ...

    async def send_admin_confirmed(self, order: Order) -> bool: ...


@runtime_checkable
class ITaskRunner(Protocol):
    """Runs coroutines detached from the request."""

    def spawn(self, coro: Coroutine[Any, Any, Any], name: str | None = None) -> Any: ...
