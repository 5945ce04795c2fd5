"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the CLI layer can catch them uniformly and display user-friendly messages.

Line-level stock problems during checkout are *not* raised; they are
collected as data (see ``LineFailureDTO``).  The exceptions below are
request-fatal for the single call that raised them.
"""

from __future__ import annotations


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A business rule or invariant was violated."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class EmptyCartError(DomainException):
    """Checkout was invoked without any cart lines."""

    def __init__(self) -> None:
        super().__init__("Cart is empty")


class InsufficientStockError(DomainException):
    """A product cannot cover the requested quantity."""

    def __init__(self, product_id: str, requested: int, available: int | None = None) -> None:
        self.product_id = product_id
        self.requested = requested
        self.available = available
        if available is None:
            msg = f"Insufficient inventory for product '{product_id}' (need {requested})"
        else:
            msg = (
                f"Insufficient inventory for product '{product_id}' "
                f"(need {requested}, have {available} available)"
            )
        super().__init__(msg)


class InvalidTransitionError(DomainException):
    """The requested status change is not permitted from the current status."""

    def __init__(self, current, target, allowed) -> None:
        self.current = current
        self.target = target
        self.allowed = frozenset(allowed)
        names = ", ".join(sorted(s.value for s in self.allowed)) or "none"
        super().__init__(
            f"Cannot go from {current.value} to {target.value} "
            f"(allowed: {names})"
        )


class ForbiddenError(DomainException):
    """The caller is not allowed to act on the target entity."""
