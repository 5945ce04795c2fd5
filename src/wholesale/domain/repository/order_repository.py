"""Abstract repository for Order aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from wholesale.domain.model.order import Order, OrderStatus


class OrderRepository(ABC):

    @abstractmethod
    def get_by_id(self, order_id: int) -> Order | None:
        """Return an order (with its lines) by ID, or None if not found."""

    @abstractmethod
    def get_many(self, order_ids: list[int]) -> list[Order]:
        """Return the orders that exist among *order_ids* (any order)."""

    @abstractmethod
    def list_by_seller(
        self,
        seller_id: str,
        status: OrderStatus | None = None,
        offset: int = 0,
        limit: int | None = None,
    ) -> list[Order]:
        """Return a seller's orders, newest first."""

    @abstractmethod
    def count_by_seller(self, seller_id: str, status: OrderStatus | None = None) -> int:
        """Count a seller's orders, optionally filtered by status."""

    @abstractmethod
    def add(self, order: Order) -> None:
        """Persist a new order and its lines, assigning ``order.id``."""

    @abstractmethod
    def compare_and_set_status(self, order: Order, expected: OrderStatus) -> bool:
        """Write the order's status and timestamps iff the stored status is *expected*.

        Returns False when another writer changed the status first.
        """

    @abstractmethod
    def update_notes(self, order: Order) -> None:
        """Persist the order's notes."""

    @abstractmethod
    def delete_if_status(self, order_id: int, expected: OrderStatus) -> bool:
        """Delete the order and its lines iff the stored status is *expected*."""
