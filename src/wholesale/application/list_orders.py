"""Application service: List Orders use case (query).

A seller's orders, newest first, optionally filtered by status.
"""

from __future__ import annotations

from collections.abc import Callable

from wholesale.application.dto import OrderDTO, OrderPageDTO
from wholesale.domain.exceptions import ValidationError
from wholesale.domain.model.order import OrderStatus
from wholesale.domain.model.principal import Principal
from wholesale.domain.repository.unit_of_work import UnitOfWork

MAX_PAGE_SIZE = 100


class ListOrdersHandler:

    def __init__(self, uow_factory: Callable[[], UnitOfWork]) -> None:
        self._uow_factory = uow_factory

    def handle(
        self,
        principal: Principal,
        status: OrderStatus | None = None,
        page: int = 1,
        limit: int = 20,
    ) -> OrderPageDTO:
        seller_id = principal.require_seller()
        if page < 1:
            raise ValidationError("Page must be 1 or greater")
        if not 1 <= limit <= MAX_PAGE_SIZE:
            raise ValidationError(f"Limit must be between 1 and {MAX_PAGE_SIZE}")

        with self._uow_factory() as uow:
            orders = uow.orders.list_by_seller(
                seller_id, status=status, offset=(page - 1) * limit, limit=limit
            )
            total = uow.orders.count_by_seller(seller_id, status=status)

        return OrderPageDTO(
            orders=[OrderDTO.from_order(o) for o in orders],
            page=page,
            limit=limit,
            total=total,
        )
