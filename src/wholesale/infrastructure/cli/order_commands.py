"""CLI commands for the Order aggregate."""

from __future__ import annotations

import click

from wholesale.application.batch_update_status import BatchUpdateOrderStatusHandler
from wholesale.application.cancel_order import CancelOrderHandler
from wholesale.application.checkout import CheckoutHandler
from wholesale.application.create_order import CreateOrderHandler
from wholesale.application.dto import CheckoutOutcome, OrderDTO, OrderLineSpec
from wholesale.application.list_orders import ListOrdersHandler
from wholesale.application.show_order import ShowOrderHandler
from wholesale.application.update_order_notes import UpdateOrderNotesHandler
from wholesale.application.update_order_status import UpdateOrderStatusHandler
from wholesale.domain.exceptions import DomainException
from wholesale.domain.model.cart import CartLine
from wholesale.domain.model.order import OrderStatus
from wholesale.domain.model.principal import Principal
from wholesale.domain.model.value_objects import Quantity

STATUS_CHOICE = click.Choice([s.value for s in OrderStatus], case_sensitive=False)


def _parse_items(raw: str) -> list[OrderLineSpec]:
    """Parse 'P-1:3,P-2:5' into OrderLineSpec list."""
    specs: list[OrderLineSpec] = []
    for pair in raw.split(","):
        pair = pair.strip()
        if ":" not in pair:
            raise click.BadParameter(
                f"Invalid item format '{pair}'. Expected 'ProductID:Quantity'."
            )
        product_id, qty_str = pair.rsplit(":", 1)
        try:
            qty = int(qty_str)
        except ValueError:
            raise click.BadParameter(
                f"Invalid quantity '{qty_str}' for product '{product_id}'."
            )
        specs.append(OrderLineSpec(product_id=product_id.strip(), quantity=qty))
    return specs


def _parse_ids(raw: str) -> list[int]:
    try:
        return [int(part) for part in raw.split(",") if part.strip()]
    except ValueError:
        raise click.BadParameter(f"Invalid order ID list '{raw}'. Expected '1,2,3'.")


def _build_cart(container, specs: list[OrderLineSpec]) -> list[CartLine]:
    """Turn product/quantity pairs into cart lines the way the storefront would."""
    lines: list[CartLine] = []
    with container.uow_factory() as uow:
        for spec in specs:
            product = uow.products.get_by_id(spec.product_id)
            if product is None:
                raise click.BadParameter(f"Unknown product '{spec.product_id}'.")
            try:
                quantity = Quantity(spec.quantity)
            except DomainException as exc:
                raise click.BadParameter(f"{spec.product_id}: {exc}")
            lines.append(
                CartLine(
                    product_id=product.id,
                    seller_id=product.seller_id,
                    unit_price=product.price,
                    quantity=quantity,
                )
            )
    return lines


def _display_order(dto: OrderDTO) -> None:
    """Shared formatting for displaying an order."""
    click.echo(f"Order #{dto.id} {dto.order_number}  (status={dto.status})")
    click.echo(f"Seller: {dto.seller_id}   Buyer: {dto.buyer_id}")
    click.echo(f"Created:  {dto.created_at}")
    if dto.shipped_at:
        click.echo(f"Shipped:  {dto.shipped_at}")
    if dto.delivered_at:
        click.echo(f"Delivered: {dto.delivered_at}")
    if dto.notes:
        click.echo(f"Notes: {dto.notes}")
    click.echo()
    click.echo(f"  {'Product':<20} {'Qty':>5} {'Price':>10} {'Total':>10}")
    click.echo(f"  {'-'*47}")
    for item in dto.items:
        click.echo(
            f"  {item.product_name:<20} {item.quantity:>5} {item.unit_price:>10} {item.line_total:>10}"
        )
    click.echo(f"  {'-'*47}")
    click.echo(f"  {'Subtotal':<27} {dto.subtotal:>20}")
    click.echo(f"  {'Tax':<27} {dto.tax:>20}")
    click.echo(f"  {'Shipping':<27} {dto.shipping_fee:>20}")
    click.echo(f"  {'Order Total':<27} {dto.total:>20}")


@click.command("checkout")
@click.option("--buyer", required=True, help="Your buyer (dispensary) ID.")
@click.option("--items", required=True, help="Cart as 'ProductID:Qty,ProductID:Qty'.")
@click.option("--notes", default=None, help="Notes for every created order.")
@click.pass_obj
def order_checkout(container, buyer: str, items: str, notes: str | None) -> None:
    """Check out a multi-vendor cart (one order per seller)."""
    lines = _build_cart(container, _parse_items(items))
    handler = CheckoutHandler(container.uow_factory, container.pricing)

    try:
        result = handler.handle(Principal.buyer(buyer), lines, notes=notes)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    headline = {
        CheckoutOutcome.PLACED: "Checkout complete",
        CheckoutOutcome.PARTIAL: "Checkout partially placed",
        CheckoutOutcome.FAILED: "Checkout failed",
    }[result.outcome]
    click.echo(f"{headline}: {len(result.created_orders)} order(s) created")
    for dto in result.created_orders:
        click.echo(f"  #{dto.id} {dto.order_number}  seller={dto.seller_id}  total={dto.total}")
    for failure in result.line_failures:
        click.echo(f"  ! {failure.product_id} x{failure.quantity}: {failure.message}")

    if result.outcome is CheckoutOutcome.FAILED:
        raise click.exceptions.Exit(1)


@click.command("create")
@click.option("--seller", required=True, help="Your seller ID.")
@click.option("--buyer", required=True, help="Buyer (dispensary) ID.")
@click.option("--items", required=True, help="Items as 'ProductID:Qty,ProductID:Qty'.")
@click.option("--notes", default=None, help="Order notes.")
@click.option("--shipping-fee", default=None, help="Shipping fee (e.g. 25.00).")
@click.pass_obj
def order_create(
    container, seller: str, buyer: str, items: str, notes: str | None, shipping_fee: str | None
) -> None:
    """Book an order for a buyer (all lines or nothing)."""
    specs = _parse_items(items)
    handler = CreateOrderHandler(container.uow_factory, container.pricing)

    try:
        dto = handler.handle(
            Principal.seller(seller), buyer, specs, notes=notes, shipping_fee=shipping_fee
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_order(dto)


@click.command("show")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to display.")
@click.option("--seller", default=None, help="View as this seller.")
@click.option("--buyer", default=None, help="View as this buyer.")
@click.pass_obj
def order_show(container, order_id: int, seller: str | None, buyer: str | None) -> None:
    """Show details of an existing order."""
    if bool(seller) == bool(buyer):
        raise click.UsageError("Pass exactly one of --seller or --buyer.")
    principal = Principal.seller(seller) if seller else Principal.buyer(buyer)
    handler = ShowOrderHandler(container.uow_factory)

    try:
        dto = handler.handle(principal, order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_order(dto)


@click.command("list")
@click.option("--seller", required=True, help="Your seller ID.")
@click.option("--status", "status", type=STATUS_CHOICE, default=None, help="Filter by status.")
@click.option("--page", default=1, type=int, help="Page number (1-based).")
@click.option("--limit", default=20, type=int, help="Orders per page.")
@click.pass_obj
def order_list(container, seller: str, status: str | None, page: int, limit: int) -> None:
    """List your orders, newest first."""
    handler = ListOrdersHandler(container.uow_factory)

    try:
        result = handler.handle(
            Principal.seller(seller),
            status=OrderStatus(status.upper()) if status else None,
            page=page,
            limit=limit,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not result.orders:
        click.echo("No orders found.")
        return

    click.echo(f"{'ID':<6} {'Number':<30} {'Buyer':<12} {'Status':<11} {'Total':>10}")
    click.echo("-" * 73)
    for dto in result.orders:
        click.echo(
            f"{dto.id:<6} {dto.order_number:<30} {dto.buyer_id:<12} {dto.status:<11} {dto.total:>10}"
        )
    click.echo(f"Page {result.page} of {result.total_pages} ({result.total} order(s))")


@click.command("status")
@click.option("--seller", required=True, help="Your seller ID.")
@click.option("--id", "order_id", required=True, type=int, help="Order ID.")
@click.option("--to", "status", required=True, type=STATUS_CHOICE, help="New status.")
@click.pass_obj
def order_status(container, seller: str, order_id: int, status: str) -> None:
    """Move an order to a new status."""
    handler = UpdateOrderStatusHandler(container.uow_factory)

    try:
        dto = handler.handle(Principal.seller(seller), order_id, OrderStatus(status.upper()))
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if dto.changed:
        click.echo(f"Order #{order_id} is now {dto.status}.")
    else:
        click.echo(f"Order #{order_id} is already {dto.status}.")


@click.command("batch-status")
@click.option("--seller", required=True, help="Your seller ID.")
@click.option("--ids", required=True, help="Order IDs as '1,2,3'.")
@click.option("--to", "status", required=True, type=STATUS_CHOICE, help="New status.")
@click.pass_obj
def order_batch_status(container, seller: str, ids: str, status: str) -> None:
    """Move several of your orders to the same status."""
    handler = BatchUpdateOrderStatusHandler(container.uow_factory)

    try:
        result = handler.handle(Principal.seller(seller), _parse_ids(ids), OrderStatus(status.upper()))
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"{result.updated_count} order(s) moved to {result.status}.")


@click.command("notes")
@click.option("--seller", required=True, help="Your seller ID.")
@click.option("--id", "order_id", required=True, type=int, help="Order ID.")
@click.option("--notes", required=True, help="New notes (empty string clears them).")
@click.pass_obj
def order_notes(container, seller: str, order_id: int, notes: str) -> None:
    """Replace the notes on one of your orders."""
    handler = UpdateOrderNotesHandler(container.uow_factory)

    try:
        handler.handle(Principal.seller(seller), order_id, notes)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order #{order_id} notes updated.")


@click.command("cancel")
@click.option("--seller", required=True, help="Your seller ID.")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to cancel.")
@click.pass_obj
def order_cancel(container, seller: str, order_id: int) -> None:
    """Cancel and delete an unshipped order (restocks its products)."""
    handler = CancelOrderHandler(container.uow_factory)

    try:
        handler.handle(Principal.seller(seller), order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order #{order_id} cancelled — inventory restored.")
