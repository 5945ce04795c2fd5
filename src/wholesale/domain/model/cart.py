"""Cart lines — what a buyer asked for, before anything is persisted."""

from __future__ import annotations

from dataclasses import dataclass

from wholesale.domain.model.value_objects import Money, Quantity


@dataclass(frozen=True)
class CartLine:
    """One line of a buyer's cart.

    ``unit_price`` is the price the buyer saw when adding to the cart.  It is
    informational only: the order builder re-prices from the product record.
    """

    product_id: str
    seller_id: str
    unit_price: Money
    quantity: Quantity

    @staticmethod
    def of(product_id: str, seller_id: str, unit_price: str, quantity: int) -> CartLine:
        return CartLine(
            product_id=product_id,
            seller_id=seller_id,
            unit_price=Money.of(unit_price),
            quantity=Quantity(quantity),
        )
