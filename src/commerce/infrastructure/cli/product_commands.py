"""CLI commands for the Product aggregate."""

from __future__ import annotations

import click

from commerce.catalog.application.change_product_status import (
    ActivateProductHandler,
    DeactivateProductHandler,
)
from commerce.catalog.application.create_product import CreateProductHandler
from commerce.catalog.application.dto import ProductDTO
from commerce.catalog.application.show_product import (
    DeleteProductHandler,
    GetProductHandler,
    ListProductsHandler,
)
from commerce.catalog.application.update_product import (
    UpdatePriceHandler,
    UpdateProductHandler,
)
from commerce.infrastructure import settings
from commerce.infrastructure.bootstrap import event_publisher, product_repository
from commerce.shared.domain.exceptions import DomainException


def _display_product(dto: ProductDTO) -> None:
    click.echo(f"Product {dto.id}  (status={dto.status})")
    click.echo(f"Name:        {dto.name}")
    click.echo(f"SKU:         {dto.sku}")
    click.echo(f"Price:       {dto.display_price}")
    if dto.description:
        click.echo(f"Description: {dto.description}")
    click.echo(f"Purchasable: {'yes' if dto.available_for_purchase else 'no'}")
    click.echo(f"Updated:     {dto.updated_at}")


@click.command("create")
@click.option("--name", required=True, help="Product name.")
@click.option("--sku", required=True, help="Stock keeping unit, unique in the catalog.")
@click.option("--price", required=True, help="Price (e.g. 15.00).")
@click.option("--currency", default=None, help="ISO 4217 code (defaults to the configured currency).")
@click.option("--description", default="", help="Free-text description.")
def product_create(
    name: str, sku: str, price: str, currency: str | None, description: str
) -> None:
    """Add a new product to the catalog (status DRAFT)."""
    handler = CreateProductHandler(
        product_repo=product_repository(),
        event_publisher=event_publisher(),
    )

    try:
        dto = handler.handle(
            name=name,
            description=description,
            price=price,
            sku=sku,
            currency=currency or settings.DEFAULT_CURRENCY,
        )
    except DomainException as exc:
        raise click.ClickException(f"{exc} [{exc.code}]")

    click.echo(f"Product {dto.id} '{dto.name}' created at {dto.display_price} (status={dto.status})")


@click.command("list")
@click.option("--status", default=None, help="Only products in this status.")
def product_list(status: str | None) -> None:
    """List products in the catalog."""
    handler = ListProductsHandler(product_repo=product_repository())

    try:
        products = handler.handle(status=status)
    except DomainException as exc:
        raise click.ClickException(f"{exc} [{exc.code}]")

    if not products:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<36}  {'SKU':<12} {'Name':<20} {'Status':<9} {'Price':>10}")
    click.echo("-" * 91)
    for p in products:
        click.echo(f"{p.id:<36}  {p.sku:<12} {p.name:<20} {p.status:<9} {p.display_price:>10}")


@click.command("show")
@click.option("--id", "product_id", required=True, help="Product ID.")
def product_show(product_id: str) -> None:
    """Show details of a product."""
    handler = GetProductHandler(product_repo=product_repository())

    try:
        dto = handler.handle(product_id)
    except DomainException as exc:
        raise click.ClickException(f"{exc} [{exc.code}]")

    _display_product(dto)


@click.command("update")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--name", required=True, help="New name.")
@click.option("--description", default="", help="New description.")
def product_update(product_id: str, name: str, description: str) -> None:
    """Update a product's name and description."""
    handler = UpdateProductHandler(
        product_repo=product_repository(),
        event_publisher=event_publisher(),
    )

    try:
        dto = handler.handle(product_id=product_id, name=name, description=description)
    except DomainException as exc:
        raise click.ClickException(f"{exc} [{exc.code}]")

    click.echo(f"Product {dto.id} updated: '{dto.name}'")


@click.command("price")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--price", required=True, help="New price (e.g. 29.99).")
@click.option("--currency", default=None, help="ISO 4217 code (defaults to the configured currency).")
def product_price(product_id: str, price: str, currency: str | None) -> None:
    """Change a product's price.  Existing orders keep their price."""
    handler = UpdatePriceHandler(
        product_repo=product_repository(),
        event_publisher=event_publisher(),
    )

    try:
        dto = handler.handle(
            product_id=product_id,
            new_price=price,
            currency=currency or settings.DEFAULT_CURRENCY,
        )
    except DomainException as exc:
        raise click.ClickException(f"{exc} [{exc.code}]")

    click.echo(f"Product {dto.id} price updated to {dto.display_price}")


@click.command("activate")
@click.option("--id", "product_id", required=True, help="Product ID.")
def product_activate(product_id: str) -> None:
    """Make a product available for purchase."""
    handler = ActivateProductHandler(
        product_repo=product_repository(),
        event_publisher=event_publisher(),
    )

    try:
        dto = handler.handle(product_id)
    except DomainException as exc:
        raise click.ClickException(f"{exc} [{exc.code}]")

    click.echo(f"Product {dto.id} activated.")


@click.command("deactivate")
@click.option("--id", "product_id", required=True, help="Product ID.")
def product_deactivate(product_id: str) -> None:
    """Withdraw a product from sale."""
    handler = DeactivateProductHandler(
        product_repo=product_repository(),
        event_publisher=event_publisher(),
    )

    try:
        dto = handler.handle(product_id)
    except DomainException as exc:
        raise click.ClickException(f"{exc} [{exc.code}]")

    click.echo(f"Product {dto.id} deactivated.")


@click.command("delete")
@click.option("--id", "product_id", required=True, help="Product ID.")
def product_delete(product_id: str) -> None:
    """Delete a product from the catalog."""
    handler = DeleteProductHandler(product_repo=product_repository())

    try:
        handler.handle(product_id)
    except DomainException as exc:
        raise click.ClickException(f"{exc} [{exc.code}]")

    click.echo(f"Product {product_id} deleted.")
