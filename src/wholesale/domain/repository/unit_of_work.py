"""Abstract unit of work — one transaction spanning both repositories.

Usage::

    with uow:
        ... uow.products / uow.orders ...
        uow.commit()

Leaving the block without ``commit()`` (or through an exception) rolls
every change back, including stock decrements.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from wholesale.domain.repository.order_repository import OrderRepository
from wholesale.domain.repository.product_repository import ProductRepository


class UnitOfWork(ABC):

    products: ProductRepository
    orders: OrderRepository

    def __enter__(self) -> UnitOfWork:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.rollback()

    @abstractmethod
    def commit(self) -> None:
        """Make every change in this unit durable."""

    @abstractmethod
    def rollback(self) -> None:
        """Discard every uncommitted change.  Safe to call after commit."""
