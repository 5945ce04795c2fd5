"""Application service: Show Order use case (query)."""

from __future__ import annotations

from collections.abc import Callable

from wholesale.application.dto import OrderDTO
from wholesale.domain.exceptions import EntityNotFoundError, ForbiddenError
from wholesale.domain.model.principal import Principal, Role
from wholesale.domain.repository.unit_of_work import UnitOfWork


class ShowOrderHandler:

    def __init__(self, uow_factory: Callable[[], UnitOfWork]) -> None:
        self._uow_factory = uow_factory

    def handle(self, principal: Principal, order_id: int) -> OrderDTO:
        """Return the order to its seller, its buyer, or an admin."""
        with self._uow_factory() as uow:
            order = uow.orders.get_by_id(order_id)
        if order is None:
            raise EntityNotFoundError(f"Order #{order_id} not found")

        if principal.role is Role.ADMIN:
            return OrderDTO.from_order(order)
        if principal.role is Role.GROWER and order.seller_id == principal.seller_id:
            return OrderDTO.from_order(order)
        if principal.role is Role.DISPENSARY and order.buyer_id == principal.buyer_id:
            return OrderDTO.from_order(order)
        raise ForbiddenError(f"Order #{order_id} does not belong to you")
