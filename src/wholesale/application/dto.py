"""Data Transfer Objects — plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from wholesale.domain.model.order import Order


class FailureReason(Enum):
    NOT_FOUND = "NOT_FOUND"
    UNAVAILABLE = "UNAVAILABLE"
    SELLER_MISMATCH = "SELLER_MISMATCH"
    INSUFFICIENT_STOCK = "INSUFFICIENT_STOCK"
    ERROR = "ERROR"


class CheckoutOutcome(Enum):
    PLACED = "PLACED"
    PARTIAL = "PARTIAL"
    FAILED = "FAILED"


@dataclass(frozen=True)
class OrderLineSpec:
    """Input: a seller-entered line (product + quantity, priced server-side)."""

    product_id: str
    quantity: int


@dataclass(frozen=True)
class LineFailureDTO:
    """Output: one cart line that could not be fulfilled, and why."""

    product_id: str
    seller_id: str
    quantity: int
    reason: FailureReason
    message: str


@dataclass(frozen=True)
class OrderLineDTO:
    """Output: a single order line as displayed to the user."""

    product_id: str
    product_name: str
    quantity: int
    unit_price: str  # formatted, e.g. "$15.00"
    line_total: str


@dataclass(frozen=True)
class OrderDTO:
    """Output: a complete order as displayed to the user."""

    id: int
    order_number: str
    seller_id: str
    buyer_id: str
    status: str
    items: list[OrderLineDTO]
    subtotal: str
    tax: str
    shipping_fee: str
    total: str
    notes: str | None
    created_at: str
    shipped_at: str | None
    delivered_at: str | None

    @staticmethod
    def from_order(order: Order) -> OrderDTO:
        return OrderDTO(
            id=order.id,  # type: ignore[arg-type]
            order_number=order.order_number,
            seller_id=order.seller_id,
            buyer_id=order.buyer_id,
            status=order.status.value,
            items=[
                OrderLineDTO(
                    product_id=line.product_id,
                    product_name=line.product_name,
                    quantity=line.quantity.value,
                    unit_price=str(line.unit_price),
                    line_total=str(line.line_total),
                )
                for line in order.lines
            ],
            subtotal=str(order.subtotal),
            tax=str(order.tax),
            shipping_fee=str(order.shipping_fee),
            total=str(order.total),
            notes=order.notes,
            created_at=format_timestamp(order.created_at),
            shipped_at=format_timestamp(order.shipped_at) if order.shipped_at else None,
            delivered_at=format_timestamp(order.delivered_at) if order.delivered_at else None,
        )


@dataclass(frozen=True)
class CheckoutResultDTO:
    """Output: what a checkout produced, per vendor and per line."""

    created_orders: list[OrderDTO]
    line_failures: list[LineFailureDTO]

    @property
    def outcome(self) -> CheckoutOutcome:
        if not self.created_orders:
            return CheckoutOutcome.FAILED
        if self.line_failures:
            return CheckoutOutcome.PARTIAL
        return CheckoutOutcome.PLACED


@dataclass(frozen=True)
class StatusChangeDTO:
    order_id: int
    status: str
    shipped_at: str | None
    delivered_at: str | None
    changed: bool


@dataclass(frozen=True)
class BatchStatusResultDTO:
    updated_count: int
    status: str


@dataclass(frozen=True)
class OrderPageDTO:
    orders: list[OrderDTO]
    page: int
    limit: int
    total: int

    @property
    def total_pages(self) -> int:
        return -(-self.total // self.limit) if self.limit else 0


def format_timestamp(moment) -> str:
    return moment.strftime("%Y-%m-%d %H:%M UTC")
