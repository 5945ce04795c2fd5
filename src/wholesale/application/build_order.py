"""Application service: build one vendor-scoped order.

Given the cart lines of a single seller, re-validates every line against the
current product record, takes stock with conditional decrements and saves
the order with its lines.  Everything happens in one unit of work: either
the order, its lines and the decrements they depend on are committed
together, or nothing is.

Lines that cannot be fulfilled are returned as failures; they never abort
their sibling lines (unless ``strict`` is requested).
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from wholesale.application.dto import FailureReason, LineFailureDTO
from wholesale.domain.exceptions import (
    EntityNotFoundError,
    InsufficientStockError,
    ValidationError,
)
from wholesale.domain.model.cart import CartLine
from wholesale.domain.model.order import Order, OrderLine, OrderPricing
from wholesale.domain.model.product import Product
from wholesale.domain.model.value_objects import Money
from wholesale.domain.repository.unit_of_work import UnitOfWork
from wholesale.domain.service.inventory_ledger import InventoryLedger

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BuildResult:
    order: Order | None
    failures: list[LineFailureDTO] = field(default_factory=list)


class OrderBuilder:

    def __init__(
        self,
        uow_factory: Callable[[], UnitOfWork],
        pricing: OrderPricing,
    ) -> None:
        self._uow_factory = uow_factory
        self._pricing = pricing

    def build(
        self,
        seller_id: str,
        buyer_id: str,
        lines: list[CartLine],
        notes: str | None = None,
        shipping_fee: Money | None = None,
        strict: bool = False,
    ) -> BuildResult:
        """Create the order for one vendor group.

        Steps:
        1. Re-fetch each product; its current price is the unit price.
        2. Decrement stock for each line that passes validation.
        3. If any line was accepted, create the order and commit.
        """
        accepted: list[OrderLine] = []
        failures: list[LineFailureDTO] = []

        with self._uow_factory() as uow:
            ledger = InventoryLedger(uow.products)

            for line in lines:
                qty = line.quantity.value
                product = uow.products.get_by_id(line.product_id)
                failure = _validate(product, line, seller_id)
                if failure is None:
                    try:
                        ledger.decrement(line.product_id, qty)
                    except InsufficientStockError as exc:
                        # Stock consumed between the read and the update.
                        failure = _failure(line, FailureReason.INSUFFICIENT_STOCK, str(exc))
                    except EntityNotFoundError as exc:
                        failure = _failure(line, FailureReason.NOT_FOUND, str(exc))

                if failure is not None:
                    logger.warning(
                        "Line for product %s (qty %d) rejected for seller %s: %s",
                        line.product_id, qty, seller_id, failure.reason.value,
                    )
                    if strict:
                        _raise_for(failure)
                    failures.append(failure)
                    continue

                accepted.append(
                    OrderLine(
                        product_id=product.id,
                        seller_id=seller_id,
                        product_name=product.name,
                        quantity=line.quantity,
                        unit_price=product.price,  # <-- price snapshot
                    )
                )

            if not accepted:
                logger.info(
                    "No order created for seller %s / buyer %s: all %d line(s) failed",
                    seller_id, buyer_id, len(lines),
                )
                return BuildResult(order=None, failures=failures)

            order = Order.create(
                seller_id=seller_id,
                buyer_id=buyer_id,
                lines=accepted,
                pricing=self._pricing,
                shipping_fee=shipping_fee,
                notes=notes,
            )
            uow.orders.add(order)
            uow.commit()

        logger.info(
            "Created order %s (#%s) for seller %s / buyer %s: %d line(s), total %s",
            order.order_number, order.id, seller_id, buyer_id, len(accepted), order.total,
        )
        return BuildResult(order=order, failures=failures)


def _validate(product: Product | None, line: CartLine, seller_id: str) -> LineFailureDTO | None:
    qty = line.quantity.value
    if product is None:
        return _failure(line, FailureReason.NOT_FOUND, f"Product '{line.product_id}' not found")
    if product.seller_id != seller_id:
        return _failure(
            line,
            FailureReason.SELLER_MISMATCH,
            f"Product '{product.id}' is not sold by seller '{seller_id}'",
        )
    if not product.is_available:
        return _failure(
            line, FailureReason.UNAVAILABLE, f"{product.name} is not available for sale"
        )
    if not product.can_supply(qty):
        return _failure(
            line,
            FailureReason.INSUFFICIENT_STOCK,
            f"Insufficient inventory for {product.name} "
            f"(need {qty}, have {product.available_quantity} available)",
        )
    return None


def _failure(line: CartLine, reason: FailureReason, message: str) -> LineFailureDTO:
    return LineFailureDTO(
        product_id=line.product_id,
        seller_id=line.seller_id,
        quantity=line.quantity.value,
        reason=reason,
        message=message,
    )


def _raise_for(failure: LineFailureDTO) -> None:
    if failure.reason is FailureReason.NOT_FOUND:
        raise EntityNotFoundError(failure.message)
    if failure.reason in (FailureReason.SELLER_MISMATCH, FailureReason.UNAVAILABLE):
        raise ValidationError(failure.message)
    raise InsufficientStockError(failure.product_id, failure.quantity)
