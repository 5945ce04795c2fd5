"""Application service: Cancel Order use case (cancel-and-delete path).

Restocks every line of the order and deletes it, in one transaction.
Only orders that have not shipped yet (PENDING, CONFIRMED, PROCESSING)
qualify.
"""

from __future__ import annotations

from collections.abc import Callable

from wholesale.application.order_access import load_seller_order
from wholesale.domain.model.principal import Principal
from wholesale.domain.repository.unit_of_work import UnitOfWork
from wholesale.domain.service.order_lifecycle import OrderLifecycle


class CancelOrderHandler:

    def __init__(self, uow_factory: Callable[[], UnitOfWork]) -> None:
        self._uow_factory = uow_factory

    def handle(self, principal: Principal, order_id: int) -> None:
        seller_id = principal.require_seller()

        with self._uow_factory() as uow:
            order = load_seller_order(uow.orders, order_id, seller_id)
            OrderLifecycle(uow).cancel_and_delete(order, actor_id=principal.user_id)
            uow.commit()
