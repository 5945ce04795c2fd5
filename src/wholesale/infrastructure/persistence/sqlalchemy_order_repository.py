"""SQLAlchemy-backed implementation of OrderRepository."""

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import delete, func, select, update
from sqlalchemy.orm import Session, selectinload

from wholesale.domain.model.order import Order, OrderLine, OrderStatus
from wholesale.domain.model.value_objects import Money, Quantity
from wholesale.domain.repository.order_repository import OrderRepository
from wholesale.infrastructure.persistence.tables import OrderLineRow, OrderRow


class SqlAlchemyOrderRepository(OrderRepository):

    def __init__(self, session: Session) -> None:
        self._session = session

    # --- OrderRepository interface --------------------------------------------

    def get_by_id(self, order_id: int) -> Order | None:
        row = self._session.execute(
            self._select().where(OrderRow.id == order_id)
        ).scalar_one_or_none()
        return self._to_domain(row) if row is not None else None

    def get_many(self, order_ids: list[int]) -> list[Order]:
        if not order_ids:
            return []
        rows = self._session.execute(
            self._select().where(OrderRow.id.in_(order_ids)).order_by(OrderRow.id)
        ).scalars()
        return [self._to_domain(row) for row in rows]

    def list_by_seller(
        self,
        seller_id: str,
        status: OrderStatus | None = None,
        offset: int = 0,
        limit: int | None = None,
    ) -> list[Order]:
        stmt = (
            self._select()
            .where(OrderRow.seller_id == seller_id)
            .order_by(OrderRow.created_at.desc(), OrderRow.id.desc())
            .offset(offset)
        )
        if status is not None:
            stmt = stmt.where(OrderRow.status == status.value)
        if limit is not None:
            stmt = stmt.limit(limit)
        return [self._to_domain(row) for row in self._session.execute(stmt).scalars()]

    def count_by_seller(self, seller_id: str, status: OrderStatus | None = None) -> int:
        stmt = select(func.count()).select_from(OrderRow).where(OrderRow.seller_id == seller_id)
        if status is not None:
            stmt = stmt.where(OrderRow.status == status.value)
        return self._session.execute(stmt).scalar_one()

    def add(self, order: Order) -> None:
        row = OrderRow(
            order_number=order.order_number,
            seller_id=order.seller_id,
            buyer_id=order.buyer_id,
            status=order.status.value,
            currency=order.total.currency,
            subtotal=order.subtotal.amount,
            tax=order.tax.amount,
            shipping_fee=order.shipping_fee.amount,
            total_amount=order.total.amount,
            notes=order.notes,
            shipped_at=order.shipped_at,
            delivered_at=order.delivered_at,
            created_at=order.created_at,
            updated_at=order.updated_at,
            lines=[
                OrderLineRow(
                    product_id=line.product_id,
                    seller_id=line.seller_id,
                    product_name=line.product_name,
                    quantity=line.quantity.value,
                    unit_price=line.unit_price.amount,
                    line_total=line.line_total.amount,
                )
                for line in order.lines
            ],
        )
        self._session.add(row)
        self._session.flush()
        order.id = row.id

    def compare_and_set_status(self, order: Order, expected: OrderStatus) -> bool:
        result = self._session.execute(
            update(OrderRow)
            .where(OrderRow.id == order.id, OrderRow.status == expected.value)
            .values(
                status=order.status.value,
                shipped_at=order.shipped_at,
                delivered_at=order.delivered_at,
                updated_at=order.updated_at,
            )
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1

    def update_notes(self, order: Order) -> None:
        self._session.execute(
            update(OrderRow)
            .where(OrderRow.id == order.id)
            .values(notes=order.notes, updated_at=order.updated_at)
            .execution_options(synchronize_session=False)
        )

    def delete_if_status(self, order_id: int, expected: OrderStatus) -> bool:
        result = self._session.execute(
            delete(OrderRow)
            .where(OrderRow.id == order_id, OrderRow.status == expected.value)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount != 1:
            return False
        self._session.execute(
            delete(OrderLineRow)
            .where(OrderLineRow.order_id == order_id)
            .execution_options(synchronize_session=False)
        )
        return True

    # --- Mapping --------------------------------------------------------------

    @staticmethod
    def _select():
        return (
            select(OrderRow)
            .options(selectinload(OrderRow.lines))
            .execution_options(populate_existing=True)
        )

    @staticmethod
    def _to_domain(row: OrderRow) -> Order:
        currency = row.currency
        return Order(
            id=row.id,
            order_number=row.order_number,
            seller_id=row.seller_id,
            buyer_id=row.buyer_id,
            lines=[
                OrderLine(
                    product_id=line.product_id,
                    seller_id=line.seller_id,
                    product_name=line.product_name,
                    quantity=Quantity(line.quantity),
                    unit_price=Money(line.unit_price, currency),
                )
                for line in row.lines
            ],
            subtotal=Money(row.subtotal, currency),
            tax=Money(row.tax, currency),
            shipping_fee=Money(row.shipping_fee, currency),
            total=Money(row.total_amount, currency),
            status=OrderStatus(row.status),
            notes=row.notes,
            shipped_at=_aware(row.shipped_at),
            delivered_at=_aware(row.delivered_at),
            created_at=_aware(row.created_at),
            updated_at=_aware(row.updated_at),
        )


def _aware(moment: datetime | None) -> datetime | None:
    """SQLite hands back naive datetimes; every stored timestamp is UTC."""
    if moment is not None and moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment
