"""Application service: Restock Product use case."""

from __future__ import annotations

import logging
from collections.abc import Callable

from wholesale.domain.exceptions import EntityNotFoundError, ForbiddenError
from wholesale.domain.model.principal import Principal
from wholesale.domain.repository.unit_of_work import UnitOfWork
from wholesale.domain.service.inventory_ledger import InventoryLedger

logger = logging.getLogger(__name__)


class RestockProductHandler:

    def __init__(self, uow_factory: Callable[[], UnitOfWork]) -> None:
        self._uow_factory = uow_factory

    def handle(self, principal: Principal, product_id: str, quantity: int) -> int:
        """Add *quantity* units to a product the seller owns; return the new level."""
        seller_id = principal.require_seller()

        with self._uow_factory() as uow:
            product = uow.products.get_by_id(product_id)
            if product is None:
                raise EntityNotFoundError(f"Product '{product_id}' not found")
            if product.seller_id != seller_id:
                raise ForbiddenError(f"Product '{product_id}' does not belong to you")

            InventoryLedger(uow.products).restore(product_id, quantity)
            uow.commit()
            level = uow.products.get_by_id(product_id).available_quantity

        logger.info("Seller %s restocked %d unit(s) of %s", seller_id, quantity, product_id)
        return level
