"""
Orders Application Services
"""

from .order_lifecycle import OrderLifecycleManager

__all__ = ["OrderLifecycleManager"]
