"""Abstract repository for Product aggregate.

Defined in the domain layer so the domain never depends on
infrastructure.  Concrete implementations (SQLAlchemy, in-memory)
live in the infrastructure layer and in the test fakes.

Stock changes are expressed as conditional updates rather than
read-modify-write through ``save()``: this is the only way two
concurrent checkouts can race on the same product without driving
its quantity negative.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from wholesale.domain.model.product import Product


class ProductRepository(ABC):

    @abstractmethod
    def get_by_id(self, product_id: str) -> Product | None:
        """Return a product by its ID, or None if not found."""

    @abstractmethod
    def list_all(self, seller_id: str | None = None) -> list[Product]:
        """Return every product, optionally restricted to one seller."""

    @abstractmethod
    def save(self, product: Product) -> None:
        """Persist a new or updated product."""

    @abstractmethod
    def decrement_if_available(self, product_id: str, quantity: int) -> bool:
        """Subtract *quantity* where the product is available and has enough stock.

        Returns True when a row was changed.  Must be a single atomic
        conditional update.
        """

    @abstractmethod
    def increment(self, product_id: str, quantity: int) -> bool:
        """Add *quantity* to the product's stock.

        Returns False when the product does not exist.
        """
