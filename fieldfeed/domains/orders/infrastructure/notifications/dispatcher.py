"""
Order Notification Dispatcher

Turns lifecycle events into customer and admin emails. Every send is
isolated: a failure is logged with the order number, recipient and template
(enough for an operator to resend) and never propagates to the caller.
"""

import asyncio
from typing import Any

from fieldfeed.core.domain import NotificationException
from fieldfeed.core.shared.logger import ContextLogger, get_service_logger
from fieldfeed.domains.orders.application.ports import (
    EmailAttachment,
    EmailMessage,
    IEmailSender,
    IInvoiceRenderer,
)
from fieldfeed.domains.orders.domain.entities import Order
from fieldfeed.domains.orders.domain.value_objects import OrderStatus
from fieldfeed.domains.orders.infrastructure.invoices import InvoiceTempStorage

from .email_templates import EmailTemplateRenderer, format_money
from .status_messages import status_message_for

TEMPLATE_ADMIN_NEW_ORDER = "admin_new_order"
TEMPLATE_ORDER_RECEIVED = "order_received"
TEMPLATE_STATUS_UPDATE = "status_update"
TEMPLATE_QUOTE = "quote"
TEMPLATE_ADMIN_CONFIRMED = "admin_confirmed"


class OrderNotificationDispatcher:
    """
    Implements ``IOrderNotifier`` over an email transport.

    Event methods (``on_*``) decide which messages a lifecycle event needs;
    ``send_*`` methods deliver exactly one message and report success. The
    dispatcher keeps no state between calls, so any ``send_*`` can be
    re-invoked for the same order to resend a message.

    Example:
        ```python
        dispatcher = OrderNotificationDispatcher(sender, templates, pdf_generator, temp_storage, admin_email)
        await dispatcher.on_status_changed(order, OrderStatus.SHIPPED, OrderStatus.PROCESSING)
        ```
    """

    def __init__(
        self,
        sender: IEmailSender,
        templates: EmailTemplateRenderer,
        invoice_renderer: IInvoiceRenderer,
        temp_storage: InvoiceTempStorage,
        admin_email: str | None,
        enabled: bool = True,
    ):
        self.sender = sender
        self.templates = templates
        self.invoice_renderer = invoice_renderer
        self.temp_storage = temp_storage
        self.admin_email = admin_email
        self.enabled = enabled
        self.logger = get_service_logger("notifications")

    # Lifecycle events

    async def on_order_created(self, order: Order) -> None:
        """Admin alert and customer confirmation (with invoice), concurrently."""
        await asyncio.gather(
            self.send_admin_new_order(order),
            self.send_order_received(order),
        )

    async def on_status_changed(self, order: Order, new_status: OrderStatus, previous_status: OrderStatus) -> None:
        if new_status == previous_status:
            return

        sends = [self.send_status_update(order, new_status, previous_status)]
        if new_status == OrderStatus.CONFIRMED:
            sends.append(self.send_admin_confirmed(order))
        await asyncio.gather(*sends)

    async def on_quote_issued(self, order: Order, previous_status: OrderStatus) -> None:
        """The "quote ready" message plus the regular status-history message."""
        await self.send_quote(order)
        await self.send_status_update(order, OrderStatus.QUOTED, previous_status)

    # Single messages

    async def send_admin_new_order(self, order: Order) -> bool:
        return await self._dispatch(
            order,
            template=TEMPLATE_ADMIN_NEW_ORDER,
            recipient=self.admin_email,
            subject=f"New Order {order.order_number} - Immediate Attention Required",
        )

    async def send_order_received(self, order: Order) -> bool:
        return await self._dispatch(
            order,
            template=TEMPLATE_ORDER_RECEIVED,
            recipient=self._customer_email(order),
            subject=f"Order Confirmation & Invoice - {order.order_number} | {self.templates.company_info.get('name', '')}",
            with_invoice=True,
        )

    async def send_status_update(
        self,
        order: Order,
        new_status: OrderStatus,
        previous_status: OrderStatus | None = None,
    ) -> bool:
        status_info = status_message_for(new_status)
        return await self._dispatch(
            order,
            template=TEMPLATE_STATUS_UPDATE,
            recipient=self._customer_email(order),
            subject=f"{status_info.title} - Order {order.order_number}",
            context={"status_info": status_info, "new_status": new_status, "previous_status": previous_status},
        )

    async def send_quote(self, order: Order) -> bool:
        amount = format_money(order.quoted_price, self.templates.currency)
        return await self._dispatch(
            order,
            template=TEMPLATE_QUOTE,
            recipient=self._customer_email(order),
            subject=f"Your Quote & Invoice Ready! {amount} - Order {order.order_number}",
            with_invoice=True,
        )

    async def send_admin_confirmed(self, order: Order) -> bool:
        return await self._dispatch(
            order,
            template=TEMPLATE_ADMIN_CONFIRMED,
            recipient=self.admin_email,
            subject=f"Order {order.order_number} CONFIRMED - Payment & Processing Required",
        )

    # Delivery

    @staticmethod
    def _customer_email(order: Order) -> str | None:
        return order.customer.email if order.customer else None

    async def _dispatch(
        self,
        order: Order,
        template: str,
        recipient: str | None,
        subject: str,
        context: dict[str, Any] | None = None,
        with_invoice: bool = False,
    ) -> bool:
        log = self.logger.with_context(order_number=order.order_number, recipient=recipient, template=template)

        if not self.enabled:
            log.info("Notifications disabled, message skipped")
            return False
        if not recipient:
            log.warning("No recipient for message, skipped")
            return False

        try:
            if with_invoice:
                await self._send_with_invoice(order, template, recipient, subject, context or {}, log)
            else:
                html = self.templates.render(template, order=order, **(context or {}))
                await self.sender.send(EmailMessage(to=recipient, subject=subject, html=html))
        except NotificationException as e:
            log.error(f"Notification failed: {e.message}", error_code=e.code)
            return False
        except Exception as e:
            log.exception(f"Notification failed unexpectedly: {e}")
            return False

        log.info(f"Notification sent: {subject}")
        return True

    async def _send_with_invoice(
        self,
        order: Order,
        template: str,
        recipient: str,
        subject: str,
        context: dict[str, Any],
        log: ContextLogger,
    ) -> None:
        rendered = await asyncio.to_thread(self.invoice_renderer.render, order)
        log.debug(f"Invoice {rendered.invoice_number} rendered for attachment")

        async with self.temp_storage.hold(rendered) as path:
            html = self.templates.render(template, order=order, invoice=rendered.invoice, **context)
            message = EmailMessage(
                to=recipient,
                subject=subject,
                html=html,
                attachments=[EmailAttachment(filename=rendered.filename, path=path)],
            )
            await self.sender.send(message)
