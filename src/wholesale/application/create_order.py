"""Application service: seller-created order.

A seller books an order on behalf of a buyer (e.g. a phone order).  Unlike
checkout this is all-or-nothing: if any line cannot be fulfilled the whole
order is refused and no stock is taken.
"""

from __future__ import annotations

from collections.abc import Callable

from wholesale.application.build_order import OrderBuilder
from wholesale.application.dto import OrderDTO, OrderLineSpec
from wholesale.domain.exceptions import ValidationError
from wholesale.domain.model.cart import CartLine
from wholesale.domain.model.order import OrderPricing
from wholesale.domain.model.principal import Principal
from wholesale.domain.model.value_objects import Money, Quantity
from wholesale.domain.repository.unit_of_work import UnitOfWork


class CreateOrderHandler:

    def __init__(
        self,
        uow_factory: Callable[[], UnitOfWork],
        pricing: OrderPricing,
    ) -> None:
        self._builder = OrderBuilder(uow_factory, pricing)

    def handle(
        self,
        principal: Principal,
        buyer_id: str,
        items: list[OrderLineSpec],
        notes: str | None = None,
        shipping_fee: str | None = None,
    ) -> OrderDTO:
        seller_id = principal.require_seller()
        if not buyer_id or not buyer_id.strip():
            raise ValidationError("Buyer is required")
        if not items:
            raise ValidationError("Order must contain at least one line")

        # The builder re-prices every line from the product record.
        lines = [
            CartLine(
                product_id=item.product_id,
                seller_id=seller_id,
                unit_price=Money.zero(),
                quantity=Quantity(item.quantity),
            )
            for item in items
        ]
        result = self._builder.build(
            seller_id=seller_id,
            buyer_id=buyer_id.strip(),
            lines=lines,
            notes=notes,
            shipping_fee=Money.of(shipping_fee) if shipping_fee is not None else None,
            strict=True,
        )
        return OrderDTO.from_order(result.order)  # type: ignore[arg-type]
