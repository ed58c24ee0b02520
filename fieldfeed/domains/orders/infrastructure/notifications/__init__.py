"""
Order notification infrastructure
"""

from .dispatcher import OrderNotificationDispatcher
from .email_templates import EmailTemplateRenderer
from .smtp_sender import SmtpEmailSender
from .status_messages import STATUS_MESSAGES, StatusMessage, status_message_for

__all__ = [
    "OrderNotificationDispatcher",
    "EmailTemplateRenderer",
    "SmtpEmailSender",
    "STATUS_MESSAGES",
    "StatusMessage",
    "status_message_for",
]
