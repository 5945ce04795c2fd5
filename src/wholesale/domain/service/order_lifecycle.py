"""Domain service: Order Lifecycle.

Applies status transitions to persisted orders.  Both the single-order and
the batch use cases route every order through ``transition()``, so the
lifecycle table, timestamp stamping and restock-on-cancel behave the same
on every path.

Status writes are compare-and-set: the stored status must still be the one
the order was read with.  When another writer got there first the order is
reloaded and the table is consulted again, so the loser sees either a
no-op (same status) or InvalidTransitionError.  The lifecycle graph has no
cycles, which bounds the number of retries by the number of statuses.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from wholesale.domain.exceptions import EntityNotFoundError, InvalidTransitionError
from wholesale.domain.model.order import (
    ALLOWED_TRANSITIONS,
    Order,
    OrderStatus,
)
from wholesale.domain.repository.unit_of_work import UnitOfWork
from wholesale.domain.service.inventory_ledger import InventoryLedger

logger = logging.getLogger(__name__)

_MAX_ATTEMPTS = len(OrderStatus)


@dataclass(frozen=True)
class TransitionOutcome:
    order: Order
    changed: bool


class OrderLifecycle:
    """Runs inside an open unit of work; the caller commits."""

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow
        self._ledger = InventoryLedger(uow.products)

    def transition(self, order: Order, target: OrderStatus, actor_id: str) -> TransitionOutcome:
        for _ in range(_MAX_ATTEMPTS):
            previous = order.status
            try:
                changed = order.transition_to(target)
            except InvalidTransitionError:
                logger.warning(
                    "Rejected transition of order %s from %s to %s by %s",
                    order.id, previous.value, target.value, actor_id,
                )
                raise
            if not changed:
                return TransitionOutcome(order, changed=False)

            if self._uow.orders.compare_and_set_status(order, expected=previous):
                if target == OrderStatus.CANCELLED:
                    self._ledger.restore_order(order)
                logger.info(
                    "Order %s (%s) moved from %s to %s by %s",
                    order.id, order.order_number, previous.value, target.value, actor_id,
                )
                return TransitionOutcome(order, changed=True)

            logger.info(
                "Order %s changed concurrently while moving to %s; re-checking",
                order.id, target.value,
            )
            order = self._reload(order.id)

        raise InvalidTransitionError(order.status, target, ALLOWED_TRANSITIONS[order.status])

    def cancel_and_delete(self, order: Order, actor_id: str) -> None:
        """Restock every line, then delete the order.

        Only orders whose status may move to CANCELLED qualify.
        """
        for _ in range(_MAX_ATTEMPTS):
            if not order.is_cancellable:
                logger.warning(
                    "Rejected cancellation of order %s in %s by %s",
                    order.id, order.status.value, actor_id,
                )
                raise InvalidTransitionError(
                    order.status,
                    OrderStatus.CANCELLED,
                    ALLOWED_TRANSITIONS[order.status],
                )
            if self._uow.orders.delete_if_status(order.id, expected=order.status):
                self._ledger.restore_order(order)
                logger.info(
                    "Order %s (%s) cancelled and deleted by %s",
                    order.id, order.order_number, actor_id,
                )
                return
            order = self._reload(order.id)

        raise InvalidTransitionError(
            order.status, OrderStatus.CANCELLED, ALLOWED_TRANSITIONS[order.status]
        )

    def _reload(self, order_id: int) -> Order:
        fresh = self._uow.orders.get_by_id(order_id)
        if fresh is None:
            raise EntityNotFoundError(f"Order #{order_id} not found")
        return fresh
