"""Tests for the cancel-and-delete use case."""

import pytest

from wholesale.application.cancel_order import CancelOrderHandler
from wholesale.domain.exceptions import (
    EntityNotFoundError,
    ForbiddenError,
    InvalidTransitionError,
)
from wholesale.domain.model.order import OrderStatus
from wholesale.domain.model.principal import Principal
from wholesale.domain.model.product import Product
from wholesale.domain.model.value_objects import Money
from tests.fakes import FakeStore, seed_order, uow_factory

SELLER = Principal.seller("s1")


def _setup():
    store = FakeStore([
        Product(id="A", seller_id="s1", name="Purple Punch", price=Money.of("10.00"), available_quantity=1),
        Product(id="B", seller_id="s1", name="Jack Herer", price=Money.of("6.00"), available_quantity=0),
    ])
    return store, CancelOrderHandler(uow_factory(store))


class TestCancelOrder:

    def test_processing_order_is_deleted_and_restocked(self):
        store, handler = _setup()
        order = seed_order(store, "s1", [("A", 5), ("B", 2)], status=OrderStatus.PROCESSING)

        handler.handle(SELLER, order.id)

        assert order.id not in store.orders
        assert store.products["A"].available_quantity == 6
        assert store.products["B"].available_quantity == 2

    @pytest.mark.parametrize("status", [OrderStatus.PENDING, OrderStatus.CONFIRMED])
    def test_unshipped_statuses_qualify(self, status):
        store, handler = _setup()
        order = seed_order(store, "s1", [("A", 1)], status=status)
        handler.handle(SELLER, order.id)
        assert store.orders == {}

    @pytest.mark.parametrize(
        "status", [OrderStatus.SHIPPED, OrderStatus.DELIVERED, OrderStatus.CANCELLED]
    )
    def test_later_statuses_rejected(self, status):
        store, handler = _setup()
        order = seed_order(store, "s1", [("A", 5)], status=status)
        with pytest.raises(InvalidTransitionError):
            handler.handle(SELLER, order.id)
        assert store.orders[order.id].status == status
        assert store.products["A"].available_quantity == 1

    def test_restock_skips_products_that_are_gone(self):
        store, handler = _setup()
        order = seed_order(store, "s1", [("A", 5), ("B", 2)])
        del store.products["B"]
        handler.handle(SELLER, order.id)
        assert store.orders == {}
        assert store.products["A"].available_quantity == 6

    def test_other_seller_forbidden(self):
        store, handler = _setup()
        order = seed_order(store, "s1", [("A", 5)])
        with pytest.raises(ForbiddenError):
            handler.handle(Principal.seller("s2"), order.id)
        assert order.id in store.orders

    def test_unknown_order(self):
        _, handler = _setup()
        with pytest.raises(EntityNotFoundError):
            handler.handle(SELLER, 42)
