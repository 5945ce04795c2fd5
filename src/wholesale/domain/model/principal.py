"""The authenticated caller, resolved once at the boundary.

Business logic never looks up a session on its own; every handler receives
a ``Principal`` explicitly.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from wholesale.domain.exceptions import ForbiddenError


class Role(Enum):
    GROWER = "GROWER"
    DISPENSARY = "DISPENSARY"
    ADMIN = "ADMIN"


@dataclass(frozen=True)
class Principal:
    user_id: str
    role: Role
    seller_id: str | None = None
    buyer_id: str | None = None

    @staticmethod
    def seller(seller_id: str, user_id: str | None = None) -> Principal:
        return Principal(user_id=user_id or seller_id, role=Role.GROWER, seller_id=seller_id)

    @staticmethod
    def buyer(buyer_id: str, user_id: str | None = None) -> Principal:
        return Principal(user_id=user_id or buyer_id, role=Role.DISPENSARY, buyer_id=buyer_id)

    def require_seller(self) -> str:
        """Return the owned seller id, or raise ForbiddenError."""
        if self.role is not Role.GROWER or not self.seller_id:
            raise ForbiddenError(f"User '{self.user_id}' is not a seller")
        return self.seller_id

    def require_buyer(self) -> str:
        """Return the owned buyer id, or raise ForbiddenError."""
        if self.role is not Role.DISPENSARY or not self.buyer_id:
            raise ForbiddenError(f"User '{self.user_id}' is not a buyer")
        return self.buyer_id
