"""In-memory fakes for testing.

These implement the same abstract interfaces as the SQLAlchemy
repositories but keep everything in dicts.  No database, no side effects.

Repositories hand out copies, like a database would, so a test only sees
changes that went through the repository.  ``FakeUnitOfWork`` snapshots the
store on entry and restores it on rollback.
"""

from __future__ import annotations

import copy

from wholesale.domain.model.order import Order, OrderLine, OrderPricing, OrderStatus
from wholesale.domain.model.product import Product
from wholesale.domain.model.value_objects import Quantity
from wholesale.domain.repository.order_repository import OrderRepository
from wholesale.domain.repository.product_repository import ProductRepository
from wholesale.domain.repository.unit_of_work import UnitOfWork


class FakeStore:
    """The 'database' shared by every unit of work of one test."""

    def __init__(self, products: list[Product] | None = None) -> None:
        self.products: dict[str, Product] = {p.id: p for p in products or []}
        self.orders: dict[int, Order] = {}
        self.next_order_id = 1

    def snapshot(self) -> tuple:
        return copy.deepcopy((self.products, self.orders, self.next_order_id))

    def restore(self, snapshot: tuple) -> None:
        self.products, self.orders, self.next_order_id = copy.deepcopy(snapshot)


class FakeProductRepository(ProductRepository):

    def __init__(self, store: FakeStore) -> None:
        self._store = store

    def get_by_id(self, product_id: str) -> Product | None:
        return copy.deepcopy(self._store.products.get(product_id))

    def list_all(self, seller_id: str | None = None) -> list[Product]:
        return [
            copy.deepcopy(p)
            for p in self._store.products.values()
            if seller_id is None or p.seller_id == seller_id
        ]

    def save(self, product: Product) -> None:
        self._store.products[product.id] = copy.deepcopy(product)

    def decrement_if_available(self, product_id: str, quantity: int) -> bool:
        product = self._store.products.get(product_id)
        if product is None or not product.can_supply(quantity):
            return False
        product.available_quantity -= quantity
        return True

    def increment(self, product_id: str, quantity: int) -> bool:
        product = self._store.products.get(product_id)
        if product is None:
            return False
        product.available_quantity += quantity
        return True


class FakeOrderRepository(OrderRepository):

    def __init__(self, store: FakeStore) -> None:
        self._store = store

    def get_by_id(self, order_id: int) -> Order | None:
        return copy.deepcopy(self._store.orders.get(order_id))

    def get_many(self, order_ids: list[int]) -> list[Order]:
        return [
            copy.deepcopy(self._store.orders[oid])
            for oid in order_ids
            if oid in self._store.orders
        ]

    def list_by_seller(
        self,
        seller_id: str,
        status: OrderStatus | None = None,
        offset: int = 0,
        limit: int | None = None,
    ) -> list[Order]:
        matches = [
            o
            for o in self._store.orders.values()
            if o.seller_id == seller_id and (status is None or o.status == status)
        ]
        matches.sort(key=lambda o: (o.created_at, o.id), reverse=True)
        end = None if limit is None else offset + limit
        return copy.deepcopy(matches[offset:end])

    def count_by_seller(self, seller_id: str, status: OrderStatus | None = None) -> int:
        return len(self.list_by_seller(seller_id, status))

    def add(self, order: Order) -> None:
        order.id = self._store.next_order_id
        self._store.next_order_id += 1
        self._store.orders[order.id] = copy.deepcopy(order)

    def compare_and_set_status(self, order: Order, expected: OrderStatus) -> bool:
        stored = self._store.orders.get(order.id)
        if stored is None or stored.status != expected:
            return False
        stored.status = order.status
        stored.shipped_at = order.shipped_at
        stored.delivered_at = order.delivered_at
        stored.updated_at = order.updated_at
        return True

    def update_notes(self, order: Order) -> None:
        stored = self._store.orders[order.id]
        stored.notes = order.notes
        stored.updated_at = order.updated_at

    def delete_if_status(self, order_id: int, expected: OrderStatus) -> bool:
        stored = self._store.orders.get(order_id)
        if stored is None or stored.status != expected:
            return False
        del self._store.orders[order_id]
        return True


class FakeUnitOfWork(UnitOfWork):

    def __init__(self, store: FakeStore) -> None:
        self.store = store
        self.products = FakeProductRepository(store)
        self.orders = FakeOrderRepository(store)
        self.committed = False
        self._snapshot: tuple | None = None

    def __enter__(self) -> FakeUnitOfWork:
        self._snapshot = self.store.snapshot()
        return self

    def commit(self) -> None:
        self._snapshot = self.store.snapshot()
        self.committed = True

    def rollback(self) -> None:
        if self._snapshot is not None:
            self.store.restore(self._snapshot)


def uow_factory(store: FakeStore):
    return lambda: FakeUnitOfWork(store)


def seed_order(
    store: FakeStore,
    seller_id: str,
    items: list[tuple[str, int]],
    status: OrderStatus = OrderStatus.PENDING,
    buyer_id: str = "b1",
) -> Order:
    """Put an order straight into the store, priced from its products.

    Stock is not touched: the order is assumed to have been placed earlier.
    """
    lines = [
        OrderLine(
            product_id=pid,
            seller_id=seller_id,
            product_name=store.products[pid].name,
            quantity=Quantity(qty),
            unit_price=store.products[pid].price,
        )
        for pid, qty in items
    ]
    order = Order.create(seller_id, buyer_id, lines, OrderPricing())
    order.status = status
    FakeOrderRepository(store).add(order)
    return order
