"""Application service: Batch Order Status use case.

Applies one target status to many orders of the same seller in a single
transaction.  The batch is all-or-nothing:

- every id must exist and belong to the seller, otherwise ForbiddenError;
- every order must be allowed to move to the target by the lifecycle
  table, otherwise InvalidTransitionError;

both checks run before anything is written.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from wholesale.application.dto import BatchStatusResultDTO
from wholesale.domain.exceptions import ForbiddenError, ValidationError
from wholesale.domain.model.order import OrderStatus, check_transition
from wholesale.domain.model.principal import Principal
from wholesale.domain.repository.unit_of_work import UnitOfWork
from wholesale.domain.service.order_lifecycle import OrderLifecycle

logger = logging.getLogger(__name__)


class BatchUpdateOrderStatusHandler:

    def __init__(self, uow_factory: Callable[[], UnitOfWork]) -> None:
        self._uow_factory = uow_factory

    def handle(
        self,
        principal: Principal,
        order_ids: list[int],
        status: OrderStatus,
    ) -> BatchStatusResultDTO:
        seller_id = principal.require_seller()
        unique_ids = list(dict.fromkeys(order_ids))
        if not unique_ids:
            raise ValidationError("At least one order ID is required")

        with self._uow_factory() as uow:
            orders = uow.orders.get_many(unique_ids)
            owned = [o for o in orders if o.belongs_to_seller(seller_id)]
            if len(owned) != len(unique_ids):
                logger.warning(
                    "Batch update to %s by seller %s rejected: %d of %d order(s) "
                    "missing or not owned",
                    status.value, seller_id, len(unique_ids) - len(owned), len(unique_ids),
                )
                raise ForbiddenError("Some orders not found or do not belong to you")

            # Validate the whole batch before the first write.
            for order in owned:
                check_transition(order.status, status)

            lifecycle = OrderLifecycle(uow)
            updated = 0
            for order in owned:
                if lifecycle.transition(order, status, actor_id=principal.user_id).changed:
                    updated += 1
            uow.commit()

        logger.info(
            "Batch update by seller %s: %d of %d order(s) moved to %s",
            seller_id, updated, len(unique_ids), status.value,
        )
        return BatchStatusResultDTO(updated_count=updated, status=status.value)
