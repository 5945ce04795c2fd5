"""Domain service: Inventory Ledger.

Owns every change to a product's available quantity.  Stock is only ever
moved through conditional updates on the product repository, so the
check-then-act window that a read/compare/write sequence would open is
closed at the storage level:

- ``decrement`` subtracts only where enough stock remains,
- ``restore`` adds back what a cancelled order had taken.
"""

from __future__ import annotations

import logging

from wholesale.domain.exceptions import (
    EntityNotFoundError,
    InsufficientStockError,
    ValidationError,
)
from wholesale.domain.model.order import Order
from wholesale.domain.repository.product_repository import ProductRepository

logger = logging.getLogger(__name__)


class InventoryLedger:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def check_availability(self, product_id: str, quantity: int) -> bool:
        """True iff the product exists, is available and has *quantity* in stock."""
        product = self._product_repo.get_by_id(product_id)
        return product is not None and product.can_supply(quantity)

    def decrement(self, product_id: str, quantity: int) -> None:
        """Atomically take *quantity* units out of stock.

        Raises InsufficientStockError when the conditional update matched
        no row (stock consumed concurrently, or product unlisted).
        """
        _require_positive(quantity, "Decrement")
        if self._product_repo.decrement_if_available(product_id, quantity):
            return

        product = self._product_repo.get_by_id(product_id)
        if product is None:
            raise EntityNotFoundError(f"Product '{product_id}' not found")
        raise InsufficientStockError(
            product_id,
            quantity,
            product.available_quantity if product.is_available else 0,
        )

    def restore(self, product_id: str, quantity: int) -> bool:
        """Atomically put *quantity* units back into stock.

        A product that no longer exists cannot be restocked: this is logged
        and reported as False, never raised.
        """
        _require_positive(quantity, "Restore")
        if self._product_repo.increment(product_id, quantity):
            return True
        logger.warning(
            "Skipped restock of %d unit(s): product %s no longer exists",
            quantity,
            product_id,
        )
        return False

    def restore_order(self, order: Order) -> None:
        """Restore every line of *order* (used when it is cancelled)."""
        for line in order.lines:
            if self.restore(line.product_id, line.quantity.value):
                logger.info(
                    "Restocked %d unit(s) of product %s from order %s",
                    line.quantity.value,
                    line.product_id,
                    order.order_number,
                )


def _require_positive(quantity: int, action: str) -> None:
    if quantity <= 0:
        raise ValidationError(f"{action} quantity must be positive")
