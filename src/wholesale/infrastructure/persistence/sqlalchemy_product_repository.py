"""SQLAlchemy-backed implementation of ProductRepository."""

from __future__ import annotations

from sqlalchemy import select, update
from sqlalchemy.orm import Session

from wholesale.domain.model.product import Product
from wholesale.domain.model.value_objects import Money
from wholesale.domain.repository.product_repository import ProductRepository
from wholesale.infrastructure.persistence.tables import ProductRow


class SqlAlchemyProductRepository(ProductRepository):

    def __init__(self, session: Session) -> None:
        self._session = session

    # --- ProductRepository interface ------------------------------------------

    def get_by_id(self, product_id: str) -> Product | None:
        row = self._session.execute(
            select(ProductRow)
            .where(ProductRow.id == product_id)
            .execution_options(populate_existing=True)
        ).scalar_one_or_none()
        return self._to_domain(row) if row is not None else None

    def list_all(self, seller_id: str | None = None) -> list[Product]:
        stmt = select(ProductRow).order_by(ProductRow.id)
        if seller_id is not None:
            stmt = stmt.where(ProductRow.seller_id == seller_id)
        rows = self._session.execute(stmt.execution_options(populate_existing=True)).scalars()
        return [self._to_domain(row) for row in rows]

    def save(self, product: Product) -> None:
        row = self._session.get(ProductRow, product.id)
        if row is None:
            row = ProductRow(id=product.id)
            self._session.add(row)
        row.seller_id = product.seller_id
        row.name = product.name
        row.price = product.price.amount
        row.currency = product.price.currency
        row.available_quantity = product.available_quantity
        row.is_available = product.is_available
        self._session.flush()

    def decrement_if_available(self, product_id: str, quantity: int) -> bool:
        result = self._session.execute(
            update(ProductRow)
            .where(
                ProductRow.id == product_id,
                ProductRow.is_available.is_(True),
                ProductRow.available_quantity >= quantity,
            )
            .values(available_quantity=ProductRow.available_quantity - quantity)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1

    def increment(self, product_id: str, quantity: int) -> bool:
        result = self._session.execute(
            update(ProductRow)
            .where(ProductRow.id == product_id)
            .values(available_quantity=ProductRow.available_quantity + quantity)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1

    # --- Mapping --------------------------------------------------------------

    @staticmethod
    def _to_domain(row: ProductRow) -> Product:
        return Product(
            id=row.id,
            seller_id=row.seller_id,
            name=row.name,
            price=Money(row.price, row.currency),
            available_quantity=row.available_quantity,
            is_available=row.is_available,
        )
