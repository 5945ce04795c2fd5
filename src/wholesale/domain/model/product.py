"""Product aggregate.

Products are owned by a single seller and carry the one authoritative
stock figure (``available_quantity``).  Checkout never trusts prices or
stock from the cart payload; it re-reads this record.
"""

from __future__ import annotations

from dataclasses import dataclass

from wholesale.domain.exceptions import ValidationError
from wholesale.domain.model.value_objects import Money


@dataclass
class Product:
    """A product in a seller's catalog.

    Invariants:
    - ``available_quantity`` is always >= 0
    - ``price`` is never negative (enforced by Money)
    """

    id: str
    seller_id: str
    name: str
    price: Money
    available_quantity: int = 0
    is_available: bool = True

    def __post_init__(self) -> None:
        if self.available_quantity < 0:
            raise ValidationError(
                f"Available quantity for {self.name} cannot be negative"
            )

    def can_supply(self, quantity: int) -> bool:
        """True when the product is listed and has at least *quantity* in stock."""
        return self.is_available and self.available_quantity >= quantity
