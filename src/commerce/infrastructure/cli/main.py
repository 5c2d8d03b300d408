import click

from commerce.infrastructure import settings
from commerce.infrastructure.cli.order_commands import (
    order_add_item,
    order_cancel,
    order_create,
    order_delete,
    order_list,
    order_remove_item,
    order_set_customer,
    order_set_quantity,
    order_show,
    order_stats,
    order_status,
    order_submit,
)
from commerce.infrastructure.cli.product_commands import (
    product_activate,
    product_create,
    product_deactivate,
    product_delete,
    product_list,
    product_price,
    product_show,
    product_update,
)
from commerce.shared.infrastructure.logging_setup import configure_logging


@click.group()
@click.option("--log-level", default=None, help="Override COMMERCE_LOG_LEVEL.")
def cli(log_level: str | None) -> None:
    """Commerce: product catalog and customer orders."""
    configure_logging(level=log_level or settings.LOG_LEVEL, json=settings.LOG_JSON)


@cli.group()
def order() -> None:
    """Manage orders."""


@cli.group()
def product() -> None:
    """Manage products."""


# Register subcommands
order.add_command(order_add_item)
order.add_command(order_cancel)
order.add_command(order_create)
order.add_command(order_delete)
order.add_command(order_list)
order.add_command(order_remove_item)
order.add_command(order_set_customer)
order.add_command(order_set_quantity)
order.add_command(order_show)
order.add_command(order_stats)
order.add_command(order_status)
order.add_command(order_submit)
product.add_command(product_activate)
product.add_command(product_create)
product.add_command(product_deactivate)
product.add_command(product_delete)
product.add_command(product_list)
product.add_command(product_price)
product.add_command(product_show)
product.add_command(product_update)
