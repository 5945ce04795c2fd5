"""Domain service: split a multi-vendor cart into vendor groups."""

from __future__ import annotations

from wholesale.domain.model.cart import CartLine


def partition_cart(lines: list[CartLine]) -> dict[str, list[CartLine]]:
    """Group cart lines by seller.

    Sellers appear in order of their first line; each seller keeps its lines
    in cart order.  Each group becomes an independent order.
    """
    groups: dict[str, list[CartLine]] = {}
    for line in lines:
        groups.setdefault(line.seller_id, []).append(line)
    return groups
