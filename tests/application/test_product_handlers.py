"""Tests for the product catalog use cases."""

import pytest

from wholesale.application.add_product import AddProductHandler
from wholesale.application.restock_product import RestockProductHandler
from wholesale.domain.exceptions import (
    EntityNotFoundError,
    ForbiddenError,
    ValidationError,
)
from wholesale.domain.model.principal import Principal
from wholesale.domain.model.value_objects import Money
from tests.fakes import FakeStore, uow_factory

SELLER = Principal.seller("s1")


class TestAddProduct:

    def test_adds_product_owned_by_seller(self):
        store = FakeStore()
        product = AddProductHandler(uow_factory(store)).handle(
            SELLER, "P1", " Northern Lights ", "12.00", quantity=20
        )
        assert product.seller_id == "s1"
        assert store.products["P1"].name == "Northern Lights"
        assert store.products["P1"].price == Money.of("12.00")
        assert store.products["P1"].available_quantity == 20

    def test_duplicate_id_rejected(self):
        store = FakeStore()
        handler = AddProductHandler(uow_factory(store))
        handler.handle(SELLER, "P1", "Northern Lights", "12.00")
        with pytest.raises(ValidationError):
            handler.handle(SELLER, "P1", "Other", "1.00")

    def test_padded_id_cannot_take_over_existing_product(self):
        store = FakeStore()
        handler = AddProductHandler(uow_factory(store))
        handler.handle(SELLER, "A", "Blue Dream", "10.00", quantity=50)

        with pytest.raises(ValidationError, match="already exists"):
            handler.handle(Principal.seller("s2"), " A ", "Knockoff", "0.01")

        product = store.products["A"]
        assert (product.seller_id, product.name, product.available_quantity) == ("s1", "Blue Dream", 50)
        assert product.price == Money.of("10.00")
        assert list(store.products) == ["A"]

    @pytest.mark.parametrize("price, quantity", [("-1", 0), ("abc", 0), ("1.00", -3)])
    def test_invalid_values_rejected(self, price, quantity):
        store = FakeStore()
        with pytest.raises(ValidationError):
            AddProductHandler(uow_factory(store)).handle(SELLER, "P1", "NL", price, quantity)
        assert store.products == {}

    def test_buyer_forbidden(self):
        with pytest.raises(ForbiddenError):
            AddProductHandler(uow_factory(FakeStore())).handle(
                Principal.buyer("b1"), "P1", "NL", "1.00"
            )


class TestRestockProduct:

    def _setup(self):
        store = FakeStore()
        AddProductHandler(uow_factory(store)).handle(SELLER, "P1", "NL", "12.00", quantity=3)
        return store, RestockProductHandler(uow_factory(store))

    def test_adds_units(self):
        store, handler = self._setup()
        assert handler.handle(SELLER, "P1", 7) == 10
        assert store.products["P1"].available_quantity == 10

    def test_non_positive_quantity_rejected(self):
        _, handler = self._setup()
        with pytest.raises(ValidationError):
            handler.handle(SELLER, "P1", 0)

    def test_other_seller_forbidden(self):
        store, handler = self._setup()
        with pytest.raises(ForbiddenError):
            handler.handle(Principal.seller("s2"), "P1", 5)
        assert store.products["P1"].available_quantity == 3

    def test_unknown_product(self):
        _, handler = self._setup()
        with pytest.raises(EntityNotFoundError):
            handler.handle(SELLER, "NOPE", 5)
