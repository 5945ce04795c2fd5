import click

from wholesale.domain.exceptions import DomainException
from wholesale.infrastructure.bootstrap import Container
from wholesale.infrastructure.cli.order_commands import (
    order_batch_status,
    order_cancel,
    order_checkout,
    order_create,
    order_list,
    order_notes,
    order_show,
    order_status,
)
from wholesale.infrastructure.cli.product_commands import (
    product_add,
    product_list,
    product_restock,
)
from wholesale.infrastructure.config import Settings
from wholesale.infrastructure.logging_config import configure_logging


@click.group()
@click.option("-v", "--verbose", is_flag=True, default=False, help="Log at INFO level.")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """Wholesale — order fulfillment for growers and dispensaries"""
    try:
        settings = Settings.from_env()
    except DomainException as exc:
        raise click.ClickException(f"Invalid configuration: {exc}")
    configure_logging("INFO" if verbose else settings.log_level)
    ctx.obj = Container(settings)


@cli.group()
def order() -> None:
    """Manage orders."""


@cli.group()
def product() -> None:
    """Manage products."""


# Register subcommands
order.add_command(order_batch_status)
order.add_command(order_cancel)
order.add_command(order_checkout)
order.add_command(order_create)
order.add_command(order_list)
order.add_command(order_notes)
order.add_command(order_show)
order.add_command(order_status)
product.add_command(product_add)
product.add_command(product_list)
product.add_command(product_restock)
