"""
Tests for the order status value object and its transition tables.
"""

import pytest

from fieldfeed.domains.orders.domain.value_objects import OrderStatus


class TestOrderStatus:
    def test_values_are_the_eight_lifecycle_states(self):
        assert OrderStatus.values() == [
            "pending",
            "reviewed",
            "quoted",
            "confirmed",
            "processing",
            "shipped",
            "delivered",
            "cancelled",
        ]

    @pytest.mark.parametrize("current", list(OrderStatus))
    def test_admin_may_assign_any_status(self, current):
        """Admin edits are not constrained by the happy path, terminal states included."""
        assert all(current.can_admin_transition_to(target) for target in OrderStatus)

    @pytest.mark.parametrize(
        "status,expected",
        [
            (OrderStatus.PENDING, False),
            (OrderStatus.REVIEWED, True),
            (OrderStatus.QUOTED, True),
            (OrderStatus.CONFIRMED, False),
            (OrderStatus.PROCESSING, False),
            (OrderStatus.SHIPPED, False),
            (OrderStatus.DELIVERED, False),
            (OrderStatus.CANCELLED, False),
        ],
    )
    def test_customer_can_confirm_only_reviewed_or_quoted(self, status, expected):
        assert status.can_customer_confirm() is expected

    def test_only_pending_and_cancelled_are_deletable(self):
        deletable = {status for status in OrderStatus if status.can_be_deleted()}
        assert deletable == {OrderStatus.PENDING, OrderStatus.CANCELLED}

    def test_fulfilment_covers_confirmed_and_processing(self):
        assert OrderStatus.CONFIRMED.is_in_fulfilment()
        assert OrderStatus.PROCESSING.is_in_fulfilment()
        assert not OrderStatus.SHIPPED.is_in_fulfilment()
