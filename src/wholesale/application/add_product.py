"""Application service: Add Product use case.

Catalog management proper lives outside this system; this exists so a
seller (or a test fixture) can list stock that orders can draw from.
"""

from __future__ import annotations

from collections.abc import Callable

from wholesale.domain.exceptions import ValidationError
from wholesale.domain.model.principal import Principal
from wholesale.domain.model.product import Product
from wholesale.domain.model.value_objects import Money
from wholesale.domain.repository.unit_of_work import UnitOfWork


class AddProductHandler:

    def __init__(self, uow_factory: Callable[[], UnitOfWork]) -> None:
        self._uow_factory = uow_factory

    def handle(
        self,
        principal: Principal,
        product_id: str,
        name: str,
        price: str,
        quantity: int = 0,
    ) -> Product:
        """Add a new product to the seller's catalog."""
        seller_id = principal.require_seller()
        product_id = (product_id or "").strip()
        if not product_id:
            raise ValidationError("Product ID is required")
        if not name or not name.strip():
            raise ValidationError("Product name is required")

        with self._uow_factory() as uow:
            if uow.products.get_by_id(product_id) is not None:
                raise ValidationError(f"Product '{product_id}' already exists")

            product = Product(
                id=product_id,
                seller_id=seller_id,
                name=name.strip(),
                price=Money.of(price),
                available_quantity=quantity,
            )
            uow.products.save(product)
            uow.commit()
        return product
