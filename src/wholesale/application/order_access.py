"""Shared lookup for use cases that act on a single seller-owned order."""

from __future__ import annotations

import logging

from wholesale.domain.exceptions import EntityNotFoundError, ForbiddenError
from wholesale.domain.model.order import Order
from wholesale.domain.repository.order_repository import OrderRepository

logger = logging.getLogger(__name__)


def load_seller_order(order_repo: OrderRepository, order_id: int, seller_id: str) -> Order:
    """Return the order if it exists and belongs to *seller_id*."""
    order = order_repo.get_by_id(order_id)
    if order is None:
        raise EntityNotFoundError(f"Order #{order_id} not found")
    if not order.belongs_to_seller(seller_id):
        logger.warning("Seller %s denied access to order %s", seller_id, order_id)
        raise ForbiddenError(f"Order #{order_id} does not belong to you")
    return order
