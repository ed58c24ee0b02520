"""
Orders Domain Value Objects
"""

from .order_status import (
    ADMIN_TRANSITIONS,
    CUSTOMER_CONFIRMABLE,
    DELETABLE,
    OrderPriority,
    OrderStatus,
    OrderStatusTransition,
)
from .price_calculation import DEFAULT_TAX_RATE, PriceCalculation, round_money, to_decimal

__all__ = [
    "OrderStatus",
    "OrderPriority",
    "OrderStatusTransition",
    "ADMIN_TRANSITIONS",
    "CUSTOMER_CONFIRMABLE",
    "DELETABLE",
    "PriceCalculation",
    "DEFAULT_TAX_RATE",
    "round_money",
    "to_decimal",
]
