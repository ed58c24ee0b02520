"""
Tests for OrderLifecycleManager: transitions, quoting, customer
confirmation and versioned writes.
"""

from decimal import Decimal
from uuid import uuid4

import pytest

from fieldfeed.core.domain import ConcurrencyException, EntityNotFoundException, InvalidOperationException
from fieldfeed.domains.orders.application.services import OrderLifecycleManager
from fieldfeed.domains.orders.domain.value_objects import OrderStatus

from tests.utils.builders import OrderBuilder
from tests.utils.fakes import InMemoryOrderRepository


@pytest.fixture
def repository() -> InMemoryOrderRepository:
    return InMemoryOrderRepository()


@pytest.fixture
def lifecycle(repository) -> OrderLifecycleManager:
    return OrderLifecycleManager(repository)


async def _stored(repository, builder: OrderBuilder):
    order = builder.build()
    await repository.create(order)
    return await repository.get_by_id(order.id)


class TestSetStatus:
    @pytest.mark.asyncio
    async def test_status_and_stamps_persist_in_one_write(self, repository, lifecycle):
        order = await _stored(repository, OrderBuilder())
        admin_id = uuid4()

        saved, transition = await lifecycle.set_status(order, OrderStatus.QUOTED, admin_id)

        stored = repository.stored(order.id)
        assert repository.save_calls == 1
        assert stored.status == OrderStatus.QUOTED
        assert stored.quoted_by == admin_id
        assert stored.quoted_at == saved.quoted_at
        assert stored.version == 2
        assert transition.from_status == OrderStatus.PENDING

    @pytest.mark.asyncio
    async def test_stale_version_raises_conflict_and_keeps_stored_order(self, repository, lifecycle):
        order = await _stored(repository, OrderBuilder())
        repository.bump_version(order.id)

        with pytest.raises(ConcurrencyException):
            await lifecycle.set_status(order, OrderStatus.REVIEWED)

        assert repository.stored(order.id).status == OrderStatus.PENDING


class TestQuote:
    @pytest.mark.asyncio
    async def test_quote_forces_quoted_and_mirrors_price(self, repository, lifecycle):
        order = await _stored(repository, OrderBuilder().with_status(OrderStatus.REVIEWED))
        admin_id = uuid4()

        saved, transition = await lifecycle.quote(order, Decimal("500"), admin_id, admin_notes="Net 30")

        assert saved.status == OrderStatus.QUOTED
        assert saved.quoted_price == Decimal("500")
        assert saved.total_estimated_value == Decimal("500")
        assert saved.quoted_at is not None
        assert saved.quoted_by == admin_id
        assert saved.admin_notes == "Net 30"
        assert transition.from_status == OrderStatus.REVIEWED

    @pytest.mark.asyncio
    async def test_requote_after_confirmation_is_allowed_and_logged(self, repository, lifecycle, caplog):
        order = await _stored(repository, OrderBuilder().with_status(OrderStatus.CONFIRMED).with_quote("500"))

        with caplog.at_level("WARNING"):
            saved, _ = await lifecycle.quote(order, Decimal("650"), uuid4())

        assert saved.status == OrderStatus.QUOTED
        assert saved.quoted_price == Decimal("650")
        assert "Re-quoting order" in caplog.text


class TestConfirm:
    @pytest.mark.asyncio
    @pytest.mark.parametrize("status", [OrderStatus.QUOTED, OrderStatus.REVIEWED])
    async def test_confirm_from_quoted_or_reviewed(self, repository, lifecycle, status):
        order = await _stored(repository, OrderBuilder().with_status(status))

        saved, transition = await lifecycle.confirm("ORD-000001", "BUYER@priyafarms.com ")

        assert saved.status == OrderStatus.CONFIRMED
        assert saved.confirmed_at is not None
        assert transition.from_status == status
        assert repository.stored(order.id).status == OrderStatus.CONFIRMED

    @pytest.mark.asyncio
    async def test_second_confirm_is_rejected(self, repository, lifecycle):
        await _stored(repository, OrderBuilder().with_status(OrderStatus.QUOTED))
        await lifecycle.confirm("ORD-000001", "buyer@priyafarms.com")

        with pytest.raises(InvalidOperationException) as exc_info:
            await lifecycle.confirm("ORD-000001", "buyer@priyafarms.com")
        assert exc_info.value.current_state == "confirmed"

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "status", [OrderStatus.PENDING, OrderStatus.PROCESSING, OrderStatus.DELIVERED, OrderStatus.CANCELLED]
    )
    async def test_confirm_outside_allowed_states_leaves_order_untouched(self, repository, lifecycle, status):
        order = await _stored(repository, OrderBuilder().with_status(status))

        with pytest.raises(InvalidOperationException):
            await lifecycle.confirm("ORD-000001", "buyer@priyafarms.com")

        stored = repository.stored(order.id)
        assert stored.status == status
        assert stored.confirmed_at is None
        assert stored.version == 1
        assert repository.save_calls == 0

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status", list(OrderStatus))
    async def test_email_mismatch_is_not_found_regardless_of_status(self, repository, lifecycle, status):
        await _stored(repository, OrderBuilder().with_status(status))

        with pytest.raises(EntityNotFoundException) as exc_info:
            await lifecycle.confirm("ORD-000001", "intruder@example.com")
        assert exc_info.value.message == "Order not found or email does not match"


class TestUpdate:
    @pytest.mark.asyncio
    async def test_price_and_notes_without_status_change(self, repository, lifecycle):
        order = await _stored(repository, OrderBuilder().with_status(OrderStatus.REVIEWED))

        saved, transition = await lifecycle.update(
            order, admin_id=uuid4(), quoted_price=Decimal("900"), admin_notes="Call first"
        )

        assert not transition.changed
        assert saved.status == OrderStatus.REVIEWED
        assert saved.quoted_price == Decimal("900")
        assert saved.admin_notes == "Call first"
        assert repository.save_calls == 1

    @pytest.mark.asyncio
    async def test_admin_may_reopen_a_delivered_order(self, repository, lifecycle):
        order = await _stored(repository, OrderBuilder().with_status(OrderStatus.DELIVERED))

        saved, transition = await lifecycle.update(order, admin_id=uuid4(), status=OrderStatus.PROCESSING)

        assert transition.changed
        assert saved.status == OrderStatus.PROCESSING
