"""Application service: Update Order Status use case.

Moves one order along its lifecycle on behalf of the owning seller.
Cancelling through this path restocks every line in the same transaction
as the status write; the order is kept as a CANCELLED record.
"""

from __future__ import annotations

from collections.abc import Callable

from wholesale.application.dto import StatusChangeDTO, format_timestamp
from wholesale.application.order_access import load_seller_order
from wholesale.domain.model.order import OrderStatus
from wholesale.domain.model.principal import Principal
from wholesale.domain.repository.unit_of_work import UnitOfWork
from wholesale.domain.service.order_lifecycle import OrderLifecycle


class UpdateOrderStatusHandler:

    def __init__(self, uow_factory: Callable[[], UnitOfWork]) -> None:
        self._uow_factory = uow_factory

    def handle(self, principal: Principal, order_id: int, status: OrderStatus) -> StatusChangeDTO:
        seller_id = principal.require_seller()

        with self._uow_factory() as uow:
            order = load_seller_order(uow.orders, order_id, seller_id)
            outcome = OrderLifecycle(uow).transition(order, status, actor_id=principal.user_id)
            if outcome.changed:
                uow.commit()

        order = outcome.order
        return StatusChangeDTO(
            order_id=order_id,
            status=order.status.value,
            shipped_at=format_timestamp(order.shipped_at) if order.shipped_at else None,
            delivered_at=format_timestamp(order.delivered_at) if order.delivered_at else None,
            changed=outcome.changed,
        )
