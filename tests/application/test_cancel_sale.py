"""Integration tests for the CancelSale and ReactivateSale use cases."""

import logging
from decimal import Decimal

import pytest

from sms.application.cancel_sale import CancelSaleHandler
from sms.application.create_sale import CreateSaleHandler
from sms.application.dto import SaleItemSpec
from sms.application.reactivate_sale import ReactivateSaleHandler
from sms.domain.events import SaleCancelled, SaleReactivated
from sms.domain.exceptions import (
    EntityNotFoundError,
    InsufficientStockError,
    SaleAlreadyCancelledError,
    SaleNotCancelledError,
    ValidationError,
)
from tests.fakes import (
    FailingEventPublisher,
    FakeUnitOfWork,
    RecordingEventPublisher,
    make_branch,
    make_customer,
    make_product,
)


def _setup(publisher=None):
    """Fake unit of work with one sale of 4 x p1 and 2 x p2 already made."""
    uow = FakeUnitOfWork(
        products=[
            make_product("p1", price="100.00", stock=10),
            make_product("p2", price="5.00", stock=10),
        ],
        customers=[make_customer("c1")],
        branches=[make_branch("b1")],
    )
    publisher = publisher or RecordingEventPublisher()
    created = CreateSaleHandler(uow, RecordingEventPublisher()).handle(
        "c1", "b1", [SaleItemSpec("p1", 4), SaleItemSpec("p2", 2)]
    )
    return uow, publisher, created


class TestCancelSale:

    def test_restores_stock(self):
        uow, publisher, created = _setup()
        assert uow.products.get_by_id("p1").stock_quantity == 6

        CancelSaleHandler(uow, publisher).handle(created.id)

        assert uow.products.get_by_id("p1").stock_quantity == 10
        assert uow.products.get_by_id("p2").stock_quantity == 10

    def test_sale_is_kept_and_marked_cancelled(self):
        uow, publisher, created = _setup()
        dto = CancelSaleHandler(uow, publisher).handle(created.id)

        assert dto.is_cancelled is True
        assert dto.cancelled_at is not None
        assert dto.skipped_product_ids == []
        saved = uow.sales.get_by_id(created.id)
        assert saved.is_cancelled is True
        assert saved.item_count == 2

    def test_cancel_twice_rejected_without_double_restock(self):
        uow, publisher, created = _setup()
        handler = CancelSaleHandler(uow, publisher)
        handler.handle(created.id)

        with pytest.raises(SaleAlreadyCancelledError, match="already cancelled"):
            handler.handle(created.id)
        assert uow.products.get_by_id("p1").stock_quantity == 10

    def test_unknown_sale(self):
        uow, publisher, _ = _setup()
        with pytest.raises(EntityNotFoundError, match="Sale with ID 'nope' not found"):
            CancelSaleHandler(uow, publisher).handle("nope")

    def test_blank_id(self):
        uow, publisher, _ = _setup()
        with pytest.raises(ValidationError, match="Sale ID is required"):
            CancelSaleHandler(uow, publisher).handle("")

    def test_missing_product_is_skipped(self, caplog):
        uow, publisher, created = _setup()
        uow.products.delete("p2")

        with caplog.at_level(logging.WARNING):
            dto = CancelSaleHandler(uow, publisher).handle(created.id)

        assert dto.skipped_product_ids == ["p2"]
        assert uow.products.get_by_id("p1").stock_quantity == 10
        assert "not restocked" in caplog.text

    def test_publishes_sale_cancelled(self):
        uow, publisher, created = _setup()
        uow.products.delete("p2")
        CancelSaleHandler(uow, publisher).handle(created.id)

        [event] = publisher.events
        assert isinstance(event, SaleCancelled)
        assert event.sale_number == created.sale_number
        assert event.total_amount == Decimal("370.00")
        assert event.original_sale_date is not None
        assert event.cancelled_at is not None
        assert event.skipped_product_ids == ("p2",)
        assert len(event.items) == 2

    def test_publish_failure_does_not_undo_cancel(self):
        uow, _, created = _setup()
        CancelSaleHandler(uow, FailingEventPublisher()).handle(created.id)
        assert uow.sales.get_by_id(created.id).is_cancelled is True
        assert uow.products.get_by_id("p1").stock_quantity == 10


class TestReactivateSale:

    def test_reactivate_takes_stock_again(self):
        uow, publisher, created = _setup()
        CancelSaleHandler(uow, publisher).handle(created.id)

        dto = ReactivateSaleHandler(uow, publisher).handle(created.id)

        assert dto.is_cancelled is False
        assert dto.cancelled_at is None
        assert uow.products.get_by_id("p1").stock_quantity == 6
        assert uow.products.get_by_id("p2").stock_quantity == 8
        assert isinstance(publisher.events[-1], SaleReactivated)

    def test_cancel_reactivate_cancel_restocks_once_per_cancel(self):
        uow, publisher, created = _setup()
        cancel = CancelSaleHandler(uow, publisher)
        cancel.handle(created.id)
        ReactivateSaleHandler(uow, publisher).handle(created.id)
        cancel.handle(created.id)
        assert uow.products.get_by_id("p1").stock_quantity == 10

    def test_active_sale_cannot_be_reactivated(self):
        uow, publisher, created = _setup()
        with pytest.raises(SaleNotCancelledError, match="is not cancelled"):
            ReactivateSaleHandler(uow, publisher).handle(created.id)
        assert uow.products.get_by_id("p1").stock_quantity == 6

    def test_not_enough_stock_keeps_sale_cancelled(self):
        uow, publisher, created = _setup()
        CancelSaleHandler(uow, publisher).handle(created.id)
        # Someone else buys most of p1 in the meantime.
        CreateSaleHandler(uow, publisher).handle("c1", "b1", [SaleItemSpec("p1", 8)])

        with pytest.raises(InsufficientStockError):
            ReactivateSaleHandler(uow, publisher).handle(created.id)

        assert uow.sales.get_by_id(created.id).is_cancelled is True
        assert uow.products.get_by_id("p1").stock_quantity == 2
        assert uow.products.get_by_id("p2").stock_quantity == 10

    def test_unknown_sale(self):
        uow, publisher, _ = _setup()
        with pytest.raises(EntityNotFoundError):
            ReactivateSaleHandler(uow, publisher).handle("nope")
