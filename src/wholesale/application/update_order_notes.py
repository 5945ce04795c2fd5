"""Application service: Update Order Notes use case."""

from __future__ import annotations

from collections.abc import Callable

from wholesale.application.order_access import load_seller_order
from wholesale.domain.model.order import utcnow
from wholesale.domain.model.principal import Principal
from wholesale.domain.repository.unit_of_work import UnitOfWork


class UpdateOrderNotesHandler:

    def __init__(self, uow_factory: Callable[[], UnitOfWork]) -> None:
        self._uow_factory = uow_factory

    def handle(self, principal: Principal, order_id: int, notes: str | None) -> None:
        seller_id = principal.require_seller()

        with self._uow_factory() as uow:
            order = load_seller_order(uow.orders, order_id, seller_id)
            order.notes = notes.strip() if notes and notes.strip() else None
            order.updated_at = utcnow()
            uow.orders.update_notes(order)
            uow.commit()
