"""
Orders Use Cases

Application layer use cases for the order lifecycle.
"""

from .confirm_order import ConfirmOrderUseCase
from .create_order import CreateOrderRequest, CreateOrderUseCase
from .delete_order import DeleteOrderUseCase
from .get_invoice import GetInvoiceUseCase, InvoiceResponse
from .get_order import GetOrderUseCase
from .get_order_stats import GetOrderStatsUseCase, OrderStatsResponse
from .list_orders import ListOrdersUseCase
from .provide_quote import ProvideQuoteRequest, ProvideQuoteUseCase
from .resend_notification import NotificationKind, ResendNotificationUseCase
from .update_order import UpdateOrderRequest, UpdateOrderUseCase

__all__ = [
    "CreateOrderUseCase",
    "CreateOrderRequest",
    "ListOrdersUseCase",
    "GetOrderUseCase",
    "UpdateOrderUseCase",
    "UpdateOrderRequest",
    "ProvideQuoteUseCase",
    "ProvideQuoteRequest",
    "ConfirmOrderUseCase",
    "GetInvoiceUseCase",
    "InvoiceResponse",
    "DeleteOrderUseCase",
    "GetOrderStatsUseCase",
    "OrderStatsResponse",
    "ResendNotificationUseCase",
    "NotificationKind",
]
