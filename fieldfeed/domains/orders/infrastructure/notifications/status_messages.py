"""
Customer-facing wording for each order status.
"""

from dataclasses import dataclass

from fieldfeed.domains.orders.domain.value_objects import OrderStatus


@dataclass(frozen=True)
class StatusMessage:
    title: str
    message: str
    action: str


STATUS_MESSAGES: dict[OrderStatus, StatusMessage] = {
    OrderStatus.PENDING: StatusMessage(
        "Order Received",
        "Your order has been received and is pending review.",
        "Our team will review your order and get back to you within 24 hours.",
    ),
    OrderStatus.REVIEWED: StatusMessage(
        "Order Under Review",
        "Your order is currently being reviewed by our team.",
        "We are preparing a detailed quote for your requirements.",
    ),
    OrderStatus.QUOTED: StatusMessage(
        "Quote Ready",
        "We have prepared a quote for your order.",
        "Please review the quote and confirm your order to proceed with payment.",
    ),
    OrderStatus.CONFIRMED: StatusMessage(
        "Order Confirmed",
        "Your order has been confirmed and accepted.",
        "We will contact you shortly for payment details and processing.",
    ),
    OrderStatus.PROCESSING: StatusMessage(
        "Order Processing",
        "Your order is now being processed.",
        "We are preparing your products for shipment.",
    ),
    OrderStatus.SHIPPED: StatusMessage(
        "Order Shipped",
        "Your order has been shipped and is on its way!",
        "You will receive tracking details and delivery updates.",
    ),
    OrderStatus.DELIVERED: StatusMessage(
        "Order Delivered",
        "Your order has been successfully delivered.",
        "Thank you for choosing us! Please let us know if you need anything else.",
    ),
    OrderStatus.CANCELLED: StatusMessage(
        "Order Cancelled",
        "Your order has been cancelled.",
        "If you have any questions, please contact our support team.",
    ),
}


def status_message_for(status: OrderStatus | str) -> StatusMessage:
    """Wording for ``status``; unknown values get a generic message."""
    try:
        return STATUS_MESSAGES[OrderStatus(status)]
    except (KeyError, ValueError):
        value = getattr(status, "value", status)
        return StatusMessage(
            "Order Status Updated",
            f"Your order status has been updated to {value}.",
            "Please contact us if you have any questions.",
        )
