"""Unit tests for the InventoryLedger domain service."""

import logging

import pytest

from wholesale.domain.exceptions import (
    EntityNotFoundError,
    InsufficientStockError,
    ValidationError,
)
from wholesale.domain.model.product import Product
from wholesale.domain.model.value_objects import Money
from wholesale.domain.service.inventory_ledger import InventoryLedger
from tests.fakes import FakeProductRepository, FakeStore


def _ledger(*products: Product) -> tuple[InventoryLedger, FakeProductRepository]:
    repo = FakeProductRepository(FakeStore(list(products)))
    return InventoryLedger(repo), repo


def _product(qty: int = 10, available: bool = True) -> Product:
    return Product(
        id="p1", seller_id="s1", name="Blue Dream", price=Money.of("10.00"),
        available_quantity=qty, is_available=available,
    )


class TestCheckAvailability:

    def test_enough_stock(self):
        ledger, _ = _ledger(_product(10))
        assert ledger.check_availability("p1", 10)

    def test_not_enough_stock(self):
        ledger, _ = _ledger(_product(10))
        assert not ledger.check_availability("p1", 11)

    def test_unlisted_product(self):
        ledger, _ = _ledger(_product(10, available=False))
        assert not ledger.check_availability("p1", 1)

    def test_missing_product(self):
        ledger, _ = _ledger()
        assert not ledger.check_availability("nope", 1)


class TestDecrement:

    def test_exact_quantity_leaves_zero(self):
        ledger, repo = _ledger(_product(5))
        ledger.decrement("p1", 5)
        assert repo.get_by_id("p1").available_quantity == 0

    def test_one_more_than_available_fails_and_leaves_stock(self):
        ledger, repo = _ledger(_product(5))
        with pytest.raises(InsufficientStockError) as excinfo:
            ledger.decrement("p1", 6)
        assert excinfo.value.requested == 6
        assert excinfo.value.available == 5
        assert repo.get_by_id("p1").available_quantity == 5

    def test_unlisted_product_fails(self):
        ledger, repo = _ledger(_product(5, available=False))
        with pytest.raises(InsufficientStockError):
            ledger.decrement("p1", 1)
        assert repo.get_by_id("p1").available_quantity == 5

    def test_missing_product(self):
        ledger, _ = _ledger()
        with pytest.raises(EntityNotFoundError):
            ledger.decrement("nope", 1)

    def test_non_positive_quantity_rejected(self):
        ledger, _ = _ledger(_product(5))
        with pytest.raises(ValidationError, match="must be positive"):
            ledger.decrement("p1", 0)


class TestRestore:

    def test_round_trip(self):
        ledger, repo = _ledger(_product(7))
        ledger.decrement("p1", 4)
        assert ledger.restore("p1", 4) is True
        assert repo.get_by_id("p1").available_quantity == 7

    def test_missing_product_is_logged_noop(self, caplog):
        ledger, _ = _ledger()
        with caplog.at_level(logging.WARNING, logger="wholesale"):
            assert ledger.restore("gone", 3) is False
        assert "product gone no longer exists" in caplog.text

    def test_non_positive_quantity_rejected(self):
        ledger, _ = _ledger(_product(5))
        with pytest.raises(ValidationError):
            ledger.restore("p1", -1)
