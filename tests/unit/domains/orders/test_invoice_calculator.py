"""
Tests for InvoiceCalculator: canonical invoice numbers and totals.
"""

from datetime import UTC, datetime
from decimal import Decimal

import pytest

from fieldfeed.domains.orders.domain.services import InvoiceCalculator, invoice_number_for
from fieldfeed.domains.orders.domain.value_objects import PriceCalculation

from tests.utils.builders import OrderBuilder, line_item


@pytest.fixture
def calculator() -> InvoiceCalculator:
    return InvoiceCalculator(fallback_tax_rate=Decimal("0.18"), due_days=30)


class TestInvoiceNumber:
    @pytest.mark.parametrize(
        "order_number,expected",
        [("ORD-000042", "INV-000042"), ("ORD-123456", "INV-123456"), (None, "INV-000001"), ("", "INV-000001")],
    )
    def test_derived_from_order_number_digits(self, order_number, expected):
        assert invoice_number_for(order_number) == expected


class TestInvoiceTotals:
    def test_stored_breakdown_is_used_as_is(self, calculator):
        stored = PriceCalculation(
            subtotal=Decimal("1000"), tax_rate=Decimal("0.10"), tax_amount=Decimal("100"), total=Decimal("1100")
        )
        order = OrderBuilder().build()
        order.price_calculation = stored

        assert calculator.totals_for(order) == stored

    def test_breakdown_without_total_is_completed(self, calculator):
        order = OrderBuilder().build()
        order.price_calculation = PriceCalculation(subtotal=Decimal("200"), tax_rate=Decimal("0.05"))

        totals = calculator.totals_for(order)

        assert totals.tax_amount == Decimal("10.00")
        assert totals.total == Decimal("210.00")

    def test_missing_breakdown_recomputes_from_lines(self, calculator):
        order = OrderBuilder().build()
        order.price_calculation = None

        totals = calculator.totals_for(order)

        assert totals.subtotal == Decimal("1000.00")
        assert totals.tax_amount == Decimal("180.00")
        assert totals.total == Decimal("1180.00")

    def test_zero_line_prices_fall_back_to_quote(self, calculator):
        order = OrderBuilder().with_products(line_item(price="0")).with_quote("500").build()
        order.price_calculation = None

        totals = calculator.totals_for(order)

        assert totals.subtotal == Decimal("500.00")
        assert totals.total == Decimal("590.00")

    def test_build_is_deterministic_for_the_same_order(self, calculator):
        order = OrderBuilder().with_number("ORD-000007").build()
        issued = datetime(2026, 10, 1, tzinfo=UTC)

        first = calculator.build(order, issued_at=issued)
        second = calculator.build(order, issued_at=issued)

        assert first == second
        assert first.invoice_number == "INV-000007"
        assert first.due_date == datetime(2026, 10, 31, tzinfo=UTC)
        assert len(first.lines) == 2

    def test_line_totals_default_to_extended_price(self, calculator):
        order = OrderBuilder().with_products(line_item(quantity=4, price="12.50")).build()

        invoice = calculator.build(order)

        assert invoice.lines[0].line_total == Decimal("50.00")
        assert invoice.to_dict()["lines"][0]["lineTotal"] == 50.0
