"""
Orders Application Ports

Interface definitions (ports) for the Orders domain.
Uses Protocol for structural typing.
"""

from .invoice_port import IInvoiceRenderer, RenderedInvoice
from .notification_port import EmailAttachment, EmailMessage, IEmailSender, IOrderNotifier, ITaskRunner
from .order_repository_port import IAdminRepository, IOrderRepository

__all__ = [
    "IOrderRepository",
    "IAdminRepository",
    "IInvoiceRenderer",
    "RenderedInvoice",
    "IEmailSender",
    "IOrderNotifier",
    "ITaskRunner",
    "EmailMessage",
    "EmailAttachment",
]
