"""Application service: Checkout use case.

Turns a buyer's multi-vendor cart into one order per seller.  Each vendor
group is built in its own unit of work: checkout is atomic per vendor and
best-effort across vendors, so one seller's failure never rolls back
another seller's committed order, nor stops the sellers after it.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from wholesale.application.build_order import OrderBuilder
from wholesale.application.dto import (
    CheckoutResultDTO,
    FailureReason,
    LineFailureDTO,
    OrderDTO,
)
from wholesale.domain.exceptions import EmptyCartError
from wholesale.domain.model.cart import CartLine
from wholesale.domain.model.order import OrderPricing
from wholesale.domain.model.principal import Principal
from wholesale.domain.repository.unit_of_work import UnitOfWork
from wholesale.domain.service.cart_partitioner import partition_cart

logger = logging.getLogger(__name__)


class CheckoutHandler:

    def __init__(
        self,
        uow_factory: Callable[[], UnitOfWork],
        pricing: OrderPricing,
    ) -> None:
        self._builder = OrderBuilder(uow_factory, pricing)

    def handle(
        self,
        principal: Principal,
        lines: list[CartLine],
        notes: str | None = None,
    ) -> CheckoutResultDTO:
        buyer_id = principal.require_buyer()
        if not lines:
            raise EmptyCartError()

        created: list[OrderDTO] = []
        failures: list[LineFailureDTO] = []

        for seller_id, group in partition_cart(lines).items():
            try:
                result = self._builder.build(
                    seller_id=seller_id,
                    buyer_id=buyer_id,
                    lines=group,
                    notes=notes,
                )
            except Exception:
                # The group rolled back; orders already committed stand.
                logger.exception(
                    "Order for seller %s / buyer %s could not be placed", seller_id, buyer_id
                )
                failures.extend(_group_failed(group))
                continue
            failures.extend(result.failures)
            if result.order is not None:
                created.append(OrderDTO.from_order(result.order))

        checkout = CheckoutResultDTO(created_orders=created, line_failures=failures)
        logger.info(
            "Checkout for buyer %s: %s (%d order(s), %d failed line(s))",
            buyer_id, checkout.outcome.value, len(created), len(failures),
        )
        return checkout


def _group_failed(group: list[CartLine]) -> list[LineFailureDTO]:
    return [
        LineFailureDTO(
            product_id=line.product_id,
            seller_id=line.seller_id,
            quantity=line.quantity.value,
            reason=FailureReason.ERROR,
            message="Order could not be placed for this seller; please retry",
        )
        for line in group
    ]
