"""CLI commands for the Product aggregate."""

from __future__ import annotations

import click

from wholesale.application.add_product import AddProductHandler
from wholesale.application.restock_product import RestockProductHandler
from wholesale.domain.exceptions import DomainException
from wholesale.domain.model.principal import Principal


@click.command("add")
@click.option("--seller", required=True, help="Your seller ID.")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--name", required=True, help="Product name.")
@click.option("--price", required=True, help="Unit price (e.g. 15.00).")
@click.option("--quantity", default=0, type=click.IntRange(min=0), help="Units in stock.")
@click.pass_obj
def product_add(container, seller: str, product_id: str, name: str, price: str, quantity: int) -> None:
    """Add a new product to your catalog."""
    handler = AddProductHandler(container.uow_factory)

    try:
        product = handler.handle(
            Principal.seller(seller), product_id=product_id, name=name, price=price, quantity=quantity
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(
        f"Product '{product.id}' ({product.name}) added at {product.price}, "
        f"{product.available_quantity} in stock"
    )


@click.command("list")
@click.option("--seller", default=None, help="Only this seller's products.")
@click.pass_obj
def product_list(container, seller: str | None) -> None:
    """List products and their stock."""
    with container.uow_factory() as uow:
        products = uow.products.list_all(seller_id=seller)

    if not products:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<12} {'Seller':<12} {'Name':<20} {'Price':>10} {'Stock':>7}")
    click.echo("-" * 65)
    for p in products:
        click.echo(
            f"{p.id:<12} {p.seller_id:<12} {p.name:<20} {str(p.price):>10} {p.available_quantity:>7}"
        )


@click.command("restock")
@click.option("--seller", required=True, help="Your seller ID.")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--quantity", required=True, type=click.IntRange(min=1), help="Units to add.")
@click.pass_obj
def product_restock(container, seller: str, product_id: str, quantity: int) -> None:
    """Add stock to one of your products."""
    handler = RestockProductHandler(container.uow_factory)

    try:
        level = handler.handle(Principal.seller(seller), product_id=product_id, quantity=quantity)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product '{product_id}' now has {level} in stock")
