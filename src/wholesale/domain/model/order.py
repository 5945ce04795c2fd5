"""Order aggregate — the core of the domain.

The Order is an aggregate root that owns its lines.  One order always
belongs to exactly one seller; a multi-vendor cart becomes several orders.

The lifecycle is an explicit table (``ALLOWED_TRANSITIONS``) checked by the
single ``check_transition`` function.  Every code path that changes an
order's status goes through it.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum

from wholesale.domain.exceptions import InvalidTransitionError, ValidationError
from wholesale.domain.model.value_objects import Money, Quantity


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class OrderStatus(Enum):
    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    PROCESSING = "PROCESSING"
    SHIPPED = "SHIPPED"
    DELIVERED = "DELIVERED"
    CANCELLED = "CANCELLED"


# Strict adjacency, no skipping.  SHIPPED orders are physically in transit
# and cannot be cancelled with a restock.
ALLOWED_TRANSITIONS: dict[OrderStatus, frozenset[OrderStatus]] = {
    OrderStatus.PENDING: frozenset({OrderStatus.CONFIRMED, OrderStatus.CANCELLED}),
    OrderStatus.CONFIRMED: frozenset({OrderStatus.PROCESSING, OrderStatus.CANCELLED}),
    OrderStatus.PROCESSING: frozenset({OrderStatus.SHIPPED, OrderStatus.CANCELLED}),
    OrderStatus.SHIPPED: frozenset({OrderStatus.DELIVERED}),
    OrderStatus.DELIVERED: frozenset(),
    OrderStatus.CANCELLED: frozenset(),
}

TERMINAL_STATUSES = frozenset(
    status for status, targets in ALLOWED_TRANSITIONS.items() if not targets
)
CANCELLABLE_STATUSES = frozenset(
    status
    for status, targets in ALLOWED_TRANSITIONS.items()
    if OrderStatus.CANCELLED in targets
)


def check_transition(current: OrderStatus, target: OrderStatus) -> bool:
    """Validate a status change against the lifecycle table.

    Returns False when *target* equals *current* (idempotent no-op),
    True when the transition is allowed, and raises InvalidTransitionError
    otherwise.
    """
    if current == target:
        return False
    allowed = ALLOWED_TRANSITIONS[current]
    if target not in allowed:
        raise InvalidTransitionError(current, target, allowed)
    return True


def generate_order_number(now: datetime | None = None) -> str:
    """Human-readable unique order number, e.g. ``ORD-20260119143000-9F2C01AB``."""
    stamp = (now or utcnow()).strftime("%Y%m%d%H%M%S")
    return f"ORD-{stamp}-{uuid.uuid4().hex[:8].upper()}"


@dataclass(frozen=True)
class OrderPricing:
    """Tax rate and default shipping fee applied when an order is built."""

    tax_rate: Decimal = Decimal("0.06")
    default_shipping_fee: Money = field(default_factory=Money.zero)

    def __post_init__(self) -> None:
        if not isinstance(self.tax_rate, Decimal):
            raise ValidationError("Tax rate must be a Decimal")
        if not self.tax_rate.is_finite():
            raise ValidationError(f"Tax rate must be finite, got {self.tax_rate}")
        if not Decimal("0") <= self.tax_rate < Decimal("1"):
            raise ValidationError(f"Tax rate must be in [0, 1), got {self.tax_rate}")


@dataclass
class OrderLine:
    """Captures the price snapshot of a product at order-creation time.

    ``quantity`` and ``unit_price`` never change after creation.
    """

    product_id: str
    seller_id: str
    product_name: str
    quantity: Quantity
    unit_price: Money  # locked at order-creation time

    @property
    def line_total(self) -> Money:
        return self.unit_price * self.quantity.value


@dataclass
class Order:
    """Aggregate root for vendor-scoped wholesale orders.

    Use the ``Order.create()`` factory for new orders — it computes the
    totals and enforces the single-seller rule.  The ``__init__`` is kept
    simple so repositories can reconstitute persisted orders without
    re-validating.
    """

    id: int | None
    order_number: str
    seller_id: str
    buyer_id: str
    lines: list[OrderLine]
    subtotal: Money
    tax: Money
    shipping_fee: Money
    total: Money
    status: OrderStatus = OrderStatus.PENDING
    notes: str | None = None
    shipped_at: datetime | None = None
    delivered_at: datetime | None = None
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)

    # --- Factory (used for NEW orders only) -----------------------------------

    @staticmethod
    def create(
        seller_id: str,
        buyer_id: str,
        lines: list[OrderLine],
        pricing: OrderPricing,
        shipping_fee: Money | None = None,
        notes: str | None = None,
    ) -> Order:
        """Create a new PENDING order, computing subtotal, tax and total."""
        if not seller_id:
            raise ValidationError("Seller is required")
        if not buyer_id:
            raise ValidationError("Buyer is required")
        if not lines:
            raise ValidationError("Order must contain at least one line")

        for line in lines:
            if line.seller_id != seller_id:
                raise ValidationError(
                    f"Line for product '{line.product_id}' belongs to seller "
                    f"'{line.seller_id}', not '{seller_id}'"
                )

        subtotal = Money.total(line.line_total for line in lines)
        tax = subtotal.apply_rate(pricing.tax_rate)
        shipping = shipping_fee if shipping_fee is not None else pricing.default_shipping_fee
        now = utcnow()

        return Order(
            id=None,
            order_number=generate_order_number(now),
            seller_id=seller_id,
            buyer_id=buyer_id,
            lines=list(lines),
            subtotal=subtotal,
            tax=tax,
            shipping_fee=shipping,
            total=subtotal + tax + shipping,
            notes=notes.strip() if notes and notes.strip() else None,
            created_at=now,
            updated_at=now,
        )

    # --- State transitions ----------------------------------------------------

    def transition_to(self, target: OrderStatus, now: datetime | None = None) -> bool:
        """Move to *target* if the lifecycle table allows it.

        Returns False for a same-status request (nothing changes).  Stamps
        ``shipped_at`` / ``delivered_at`` the first time the order enters
        SHIPPED / DELIVERED.  Inventory restoration on CANCELLED is the
        caller's job (coordinated through the inventory ledger).
        """
        if not check_transition(self.status, target):
            return False
        now = now or utcnow()
        if target == OrderStatus.SHIPPED and self.shipped_at is None:
            self.shipped_at = now
        if target == OrderStatus.DELIVERED and self.delivered_at is None:
            self.delivered_at = now
        self.status = target
        self.updated_at = now
        return True

    @property
    def is_cancellable(self) -> bool:
        return self.status in CANCELLABLE_STATUSES

    def belongs_to_seller(self, seller_id: str) -> bool:
        return self.seller_id == seller_id
