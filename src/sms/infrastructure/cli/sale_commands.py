"""CLI commands for the Sale aggregate."""

from __future__ import annotations

import click

from sms.application.cancel_sale import CancelSaleHandler
from sms.application.create_sale import CreateSaleHandler
from sms.application.dto import SaleDTO, SaleItemSpec
from sms.application.reactivate_sale import ReactivateSaleHandler
from sms.application.show_sale import ListSalesHandler, ShowSaleHandler
from sms.domain.exceptions import DomainException
from sms.infrastructure.bootstrap import event_publisher, unit_of_work
from sms.infrastructure.config import Settings


def _parse_items(raw: str) -> list[SaleItemSpec]:
    """Parse 'p1:3,p2:5' into a SaleItemSpec list."""
    specs: list[SaleItemSpec] = []
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
        specs.append(SaleItemSpec(product_id=product_id.strip(), quantity=qty))
    return specs


def _display_sale(dto: SaleDTO) -> None:
    """Shared formatting for displaying a sale."""
    status = "cancelled" if dto.is_cancelled else "active"
    click.echo(f"Sale {dto.sale_number}  (id={dto.id}, status={status})")
    click.echo(f"Customer: {dto.customer.name} <{dto.customer.detail}>")
    click.echo(f"Branch:   {dto.branch.name} [{dto.branch.detail}]")
    click.echo(f"Date:     {dto.sale_date}")
    if dto.cancelled_at:
        click.echo(f"Cancelled: {dto.cancelled_at}")
    click.echo()
    click.echo(f"  {'Product':<20} {'Qty':>5} {'Price':>10} {'Discount':>10} {'Total':>10}")
    click.echo(f"  {'-'*58}")
    for item in dto.items:
        click.echo(
            f"  {item.product_name:<20} {item.quantity:>5} {item.unit_price:>10} "
            f"{item.discount:>10} {item.total_amount:>10}"
        )
    click.echo(f"  {'-'*58}")
    click.echo(f"  {'Sale Total':<27} {dto.total_amount:>31}")


@click.command("create")
@click.option("--customer", "customer_id", required=True, help="Customer ID.")
@click.option("--branch", "branch_id", required=True, help="Branch ID.")
@click.option("--items", required=True, help="Items as 'ProductId:Qty,ProductId:Qty'.")
@click.pass_obj
def sale_create(settings: Settings, customer_id: str, branch_id: str, items: str) -> None:
    """Record a new sale and take its items out of stock."""
    specs = _parse_items(items)

    handler = CreateSaleHandler(
        uow=unit_of_work(settings.data_dir),
        publisher=event_publisher(),
    )

    try:
        dto = handler.handle(customer_id=customer_id, branch_id=branch_id, item_specs=specs)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo("Sale created.")
    _display_sale(dto)


@click.command("show")
@click.option("--id", "sale_id", default=None, help="Sale ID.")
@click.option("--number", "sale_number", default=None, help="Sale number, e.g. SALE-20240501-0001.")
@click.pass_obj
def sale_show(settings: Settings, sale_id: str | None, sale_number: str | None) -> None:
    """Show details of an existing sale."""
    handler = ShowSaleHandler(uow=unit_of_work(settings.data_dir))

    try:
        dto = handler.handle(sale_id=sale_id, sale_number=sale_number)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_sale(dto)


@click.command("list")
@click.option("--customer", "customer_id", default=None, help="Only sales for this customer ID.")
@click.option("--branch", "branch_id", default=None, help="Only sales made at this branch ID.")
@click.option(
    "--cancelled/--active",
    "cancelled",
    default=None,
    help="Only cancelled or only active sales.",
)
@click.pass_obj
def sale_list(
    settings: Settings,
    customer_id: str | None,
    branch_id: str | None,
    cancelled: bool | None,
) -> None:
    """List sales, newest first."""
    handler = ListSalesHandler(uow=unit_of_work(settings.data_dir))
    sales = handler.handle(customer_id=customer_id, branch_id=branch_id, cancelled=cancelled)

    if not sales:
        click.echo("No sales found.")
        return

    click.echo(f"{'Number':<20} {'Date':<21} {'Customer':<20} {'Total':>12} Status")
    click.echo("-" * 82)
    for s in sales:
        status = "cancelled" if s.is_cancelled else "active"
        click.echo(
            f"{s.sale_number:<20} {s.sale_date:<21} {s.customer.name:<20} "
            f"{s.total_amount:>12} {status}"
        )


@click.command("cancel")
@click.option("--id", "sale_id", required=True, help="Sale ID to cancel.")
@click.pass_obj
def sale_cancel(settings: Settings, sale_id: str) -> None:
    """Cancel a sale and return its items to stock."""
    handler = CancelSaleHandler(
        uow=unit_of_work(settings.data_dir),
        publisher=event_publisher(),
    )

    try:
        dto = handler.handle(sale_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Sale {dto.sale_number} cancelled at {dto.cancelled_at}.")
    if dto.skipped_product_ids:
        click.echo(
            "Not restocked (product no longer exists): "
            + ", ".join(dto.skipped_product_ids)
        )


@click.command("reactivate")
@click.option("--id", "sale_id", required=True, help="Sale ID to reactivate.")
@click.pass_obj
def sale_reactivate(settings: Settings, sale_id: str) -> None:
    """Undo a cancellation, taking the items out of stock again."""
    handler = ReactivateSaleHandler(
        uow=unit_of_work(settings.data_dir),
        publisher=event_publisher(),
    )

    try:
        dto = handler.handle(sale_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Sale {dto.sale_number} reactivated.")
