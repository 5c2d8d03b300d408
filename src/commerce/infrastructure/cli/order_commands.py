"""CLI commands for the Order aggregate."""

from __future__ import annotations

import click

from commerce.infrastructure import settings
from commerce.infrastructure.bootstrap import (
    event_publisher,
    order_domain_service,
    order_repository,
    product_port,
)
from commerce.ordering.application.create_order import CreateOrderHandler
from commerce.ordering.application.dto import AddressSpec, OrderDTO, OrderItemSpec
from commerce.ordering.application.manage_items import (
    AddOrderItemHandler,
    RemoveOrderItemHandler,
    SetCustomerInfoHandler,
    UpdateItemQuantityHandler,
)
from commerce.ordering.application.show_order import (
    DeleteOrderHandler,
    GetOrderHandler,
    ListOrdersHandler,
    OrderStatisticsHandler,
)
from commerce.ordering.application.submit_order import SubmitOrderHandler
from commerce.ordering.application.update_order_status import (
    CancelOrderHandler,
    UpdateOrderStatusHandler,
)
from commerce.shared.domain.exceptions import DomainException


def _parse_items(raw: str) -> list[OrderItemSpec]:
    """Parse 'product-id:3,other-id:5' into OrderItemSpec list."""
    specs: list[OrderItemSpec] = []
    for pair in raw.split(","):
        pair = pair.strip()
        if ":" not in pair:
            raise click.BadParameter(
                f"Invalid item format '{pair}'. Expected 'ProductId:Quantity'."
            )
        product_id, qty_str = pair.rsplit(":", 1)
        try:
            qty = int(qty_str)
        except ValueError:
            raise click.BadParameter(
                f"Invalid quantity '{qty_str}' for product '{product_id}'."
            )
        specs.append(OrderItemSpec(product_id=product_id.strip(), quantity=qty))
    return specs


def _display_order(dto: OrderDTO) -> None:
    """Shared formatting for displaying an order."""
    number = dto.order_number or "(not submitted)"
    click.echo(f"Order {dto.id}  {number}  (status={dto.status})")
    click.echo(f"Customer: {dto.customer_id}")
    if dto.customer_info is not None:
        contact = dto.customer_info.email
        if dto.customer_info.phone:
            contact += f", {dto.customer_info.phone}"
        click.echo(f"Contact:  {dto.customer_info.name} <{contact}>")
    click.echo(f"Ship to:  {dto.shipping_address}")
    click.echo(f"Created:  {dto.created_at}")
    if dto.cancellation_reason:
        click.echo(f"Cancelled: {dto.cancellation_reason}")
    click.echo()

    click.echo(f"  {'Product':<20} {'Qty':>5} {'Price':>10} {'Total':>10}")
    click.echo(f"  {'-'*47}")
    for item in dto.items:
        click.echo(
            f"  {item.product_name:<20} {item.quantity:>5} {item.unit_price:>10} {item.subtotal:>10}"
        )
    click.echo(f"  {'-'*47}")
    click.echo(f"  {'Subtotal':<27} {dto.subtotal:>20}")
    click.echo(f"  {'Shipping':<27} {dto.shipping_cost:>20}")
    click.echo(f"  {'Order Total':<27} {dto.total:>20}")


@click.command("create")
@click.option("--customer", required=True, help="Customer ID.")
@click.option("--street", required=True)
@click.option("--city", required=True)
@click.option("--state", required=True)
@click.option("--zip", "zip_code", required=True, help="Postal code.")
@click.option("--country", required=True)
@click.option("--items", default=None, help="Items as 'ProductId:Qty,ProductId:Qty'.")
def order_create(
    customer: str,
    street: str,
    city: str,
    state: str,
    zip_code: str,
    country: str,
    items: str | None,
) -> None:
    """Open a new DRAFT order."""
    specs = _parse_items(items) if items else []

    handler = CreateOrderHandler(
        order_repo=order_repository(),
        product_port=product_port(),
        domain_service=order_domain_service(),
        event_publisher=event_publisher(),
    )

    try:
        dto = handler.handle(
            customer_id=customer,
            address=AddressSpec(
                street=street, city=city, state=state, zip_code=zip_code, country=country
            ),
            item_specs=specs,
        )
    except DomainException as exc:
        raise click.ClickException(f"{exc} [{exc.code}]")

    click.echo(f"Order {dto.id} created  (status={dto.status})")
    _display_order(dto)


@click.command("show")
@click.option("--id", "order_id", required=True, help="Order ID to display.")
def order_show(order_id: str) -> None:
    """Show details of an existing order."""
    handler = GetOrderHandler(
        order_repo=order_repository(),
        domain_service=order_domain_service(),
    )

    try:
        dto = handler.handle(order_id)
    except DomainException as exc:
        raise click.ClickException(f"{exc} [{exc.code}]")

    _display_order(dto)


@click.command("list")
@click.option("--customer", default=None, help="Only orders of this customer.")
@click.option("--status", default=None, help="Only orders in this status.")
def order_list(customer: str | None, status: str | None) -> None:
    """List orders."""
    if customer and status:
        raise click.UsageError("Use either --customer or --status, not both.")

    handler = ListOrdersHandler(
        order_repo=order_repository(),
        domain_service=order_domain_service(),
    )

    try:
        if customer:
            orders = handler.by_customer(customer)
        elif status:
            orders = handler.by_status(status)
        else:
            orders = handler.all()
    except DomainException as exc:
        raise click.ClickException(f"{exc} [{exc.code}]")

    if not orders:
        click.echo("No orders found.")
        return

    click.echo(f"{'ID':<36}  {'Number':<15} {'Customer':<15} {'Status':<10} {'Total':>10}")
    click.echo("-" * 91)
    for o in orders:
        click.echo(
            f"{o.id:<36}  {o.order_number or '-':<15} {o.customer_id:<15} "
            f"{o.status:<10} {o.total:>10}"
        )


@click.command("add-item")
@click.option("--id", "order_id", required=True, help="Order ID.")
@click.option("--product", "product_id", required=True, help="Catalog product ID.")
@click.option("--quantity", required=True, type=int)
def order_add_item(order_id: str, product_id: str, quantity: int) -> None:
    """Add a product to a DRAFT order at its current price."""
    handler = AddOrderItemHandler(
        order_repo=order_repository(),
        product_port=product_port(),
        domain_service=order_domain_service(),
        event_publisher=event_publisher(),
    )

    try:
        dto = handler.handle(order_id, product_id, quantity)
    except DomainException as exc:
        raise click.ClickException(f"{exc} [{exc.code}]")

    click.echo(f"Item added. Order subtotal is now {dto.subtotal}.")


@click.command("remove-item")
@click.option("--id", "order_id", required=True, help="Order ID.")
@click.option("--product", "product_id", required=True, help="Catalog product ID.")
def order_remove_item(order_id: str, product_id: str) -> None:
    """Remove a product from a DRAFT order."""
    handler = RemoveOrderItemHandler(
        order_repo=order_repository(),
        domain_service=order_domain_service(),
        event_publisher=event_publisher(),
    )

    try:
        dto = handler.handle(order_id, product_id)
    except DomainException as exc:
        raise click.ClickException(f"{exc} [{exc.code}]")

    click.echo(f"Item removed. Order subtotal is now {dto.subtotal}.")


@click.command("set-quantity")
@click.option("--id", "order_id", required=True, help="Order ID.")
@click.option("--product", "product_id", required=True, help="Catalog product ID.")
@click.option("--quantity", required=True, type=int)
def order_set_quantity(order_id: str, product_id: str, quantity: int) -> None:
    """Change the quantity of an item in a DRAFT order."""
    handler = UpdateItemQuantityHandler(
        order_repo=order_repository(),
        domain_service=order_domain_service(),
        event_publisher=event_publisher(),
    )

    try:
        dto = handler.handle(order_id, product_id, quantity)
    except DomainException as exc:
        raise click.ClickException(f"{exc} [{exc.code}]")

    click.echo(f"Quantity updated. Order subtotal is now {dto.subtotal}.")


@click.command("set-customer")
@click.option("--id", "order_id", required=True, help="Order ID.")
@click.option("--name", required=True)
@click.option("--email", required=True)
@click.option("--phone", default=None)
def order_set_customer(order_id: str, name: str, email: str, phone: str | None) -> None:
    """Attach customer contact details to a DRAFT order."""
    handler = SetCustomerInfoHandler(
        order_repo=order_repository(),
        domain_service=order_domain_service(),
        event_publisher=event_publisher(),
    )

    try:
        handler.handle(order_id, name=name, email=email, phone=phone)
    except DomainException as exc:
        raise click.ClickException(f"{exc} [{exc.code}]")

    click.echo(f"Customer info set on order {order_id}.")


@click.command("submit")
@click.option("--id", "order_id", required=True, help="Order ID to submit.")
def order_submit(order_id: str) -> None:
    """Submit a DRAFT order (re-checks product availability)."""
    handler = SubmitOrderHandler(
        order_repo=order_repository(),
        product_port=product_port(),
        domain_service=order_domain_service(),
        event_publisher=event_publisher(),
    )

    try:
        dto = handler.handle(order_id)
    except DomainException as exc:
        raise click.ClickException(f"{exc} [{exc.code}]")

    click.echo(f"Order {dto.id} submitted as {dto.order_number}  (total {dto.total})")


@click.command("status")
@click.option("--id", "order_id", required=True, help="Order ID.")
@click.option(
    "--to",
    "new_status",
    required=True,
    help="CONFIRMED, PROCESSING, SHIPPED, DELIVERED or CANCELLED.",
)
@click.option("--reason", default=None, help="Required when cancelling.")
def order_status(order_id: str, new_status: str, reason: str | None) -> None:
    """Move a submitted order along its lifecycle."""
    handler = UpdateOrderStatusHandler(
        order_repo=order_repository(),
        domain_service=order_domain_service(),
        event_publisher=event_publisher(),
    )

    try:
        dto = handler.handle(order_id, new_status, reason=reason)
    except DomainException as exc:
        raise click.ClickException(f"{exc} [{exc.code}]")

    click.echo(f"Order {dto.id} is now {dto.status}.")


@click.command("cancel")
@click.option("--id", "order_id", required=True, help="Order ID to cancel.")
@click.option("--reason", required=True, help="Why the order is cancelled.")
def order_cancel(order_id: str, reason: str) -> None:
    """Cancel an order that has not shipped."""
    handler = CancelOrderHandler(
        order_repo=order_repository(),
        domain_service=order_domain_service(),
        event_publisher=event_publisher(),
    )

    try:
        dto = handler.handle(order_id, reason)
    except DomainException as exc:
        raise click.ClickException(f"{exc} [{exc.code}]")

    click.echo(f"Order {order_id} cancelled. Refund: {dto.subtotal}")


@click.command("stats")
@click.option("--status", default=None, help="Only orders in this status.")
def order_stats(status: str | None) -> None:
    """Order count, revenue and average order value."""
    handler = OrderStatisticsHandler(
        order_repo=order_repository(),
        domain_service=order_domain_service(),
        currency=settings.DEFAULT_CURRENCY,
    )

    try:
        stats = handler.handle(status=status)
    except DomainException as exc:
        raise click.ClickException(f"{exc} [{exc.code}]")

    click.echo(f"Orders:        {stats.order_count}")
    click.echo(f"Revenue:       {stats.total_revenue}")
    click.echo(f"Average order: {stats.average_order_value}")


@click.command("delete")
@click.option("--id", "order_id", required=True, help="Order ID to delete.")
def order_delete(order_id: str) -> None:
    """Delete an order and its items."""
    handler = DeleteOrderHandler(order_repo=order_repository())

    try:
        handler.handle(order_id)
    except DomainException as exc:
        raise click.ClickException(f"{exc} [{exc.code}]")

    click.echo(f"Order {order_id} deleted.")
