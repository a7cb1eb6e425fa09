"""CLI commands for the Product aggregate."""

from __future__ import annotations

import click

from sms.application.add_product import AddProductHandler
from sms.application.set_active import SetActiveHandler
from sms.application.update_product import RestockProductHandler, UpdateProductHandler
from sms.domain.exceptions import DomainException
from sms.infrastructure.bootstrap import unit_of_work
from sms.infrastructure.config import Settings


@click.command("add")
@click.option("--name", required=True, help="Product name.")
@click.option("--sku", required=True, help="Unique stock keeping unit.")
@click.option("--price", required=True, help="Price (e.g. 15.00).")
@click.option("--stock", "stock_quantity", default=0, type=int, help="Initial stock.")
@click.option("--description", default="", help="Free-text description.")
@click.option("--category", default="", help="Category label.")
@click.pass_obj
def product_add(
    settings: Settings,
    name: str,
    sku: str,
    price: str,
    stock_quantity: int,
    description: str,
    category: str,
) -> None:
    """Add a new product to the catalog."""
    handler = AddProductHandler(uow=unit_of_work(settings.data_dir))

    try:
        product = handler.handle(
            name=name,
            sku=sku,
            price=price,
            stock_quantity=stock_quantity,
            description=description,
            category=category,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(
        f"Product {product.id} '{product.name}' ({product.sku}) added at "
        f"{product.price}, stock {product.stock_quantity}"
    )


@click.command("list")
@click.pass_obj
def product_list(settings: Settings) -> None:
    """List all products in the catalog."""
    with unit_of_work(settings.data_dir) as uow:
        products = uow.products.list_all()

    if not products:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<32} {'SKU':<12} {'Name':<20} {'Price':>10} {'Stock':>6} Active")
    click.echo("-" * 90)
    for p in products:
        click.echo(
            f"{p.id:<32} {p.sku:<12} {p.name:<20} {str(p.price):>10} "
            f"{p.stock_quantity:>6} {'yes' if p.is_active else 'no'}"
        )


@click.command("update")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--price", required=True, help="New price (e.g. 29.99).")
@click.pass_obj
def product_update(settings: Settings, product_id: str, price: str) -> None:
    """Update a product's price."""
    handler = UpdateProductHandler(uow=unit_of_work(settings.data_dir))

    try:
        product = handler.handle(product_id=product_id, new_price=price)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product {product_id} price updated to {product.price}")


@click.command("restock")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--quantity", required=True, type=int, help="Units to add.")
@click.pass_obj
def product_restock(settings: Settings, product_id: str, quantity: int) -> None:
    """Add units to a product's stock."""
    handler = RestockProductHandler(uow=unit_of_work(settings.data_dir))

    try:
        product = handler.handle(product_id=product_id, quantity=quantity)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product {product_id} stock is now {product.stock_quantity}")


@click.command("activate")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.pass_obj
def product_activate(settings: Settings, product_id: str) -> None:
    """Allow a product on new sales again."""
    try:
        SetActiveHandler(uow=unit_of_work(settings.data_dir)).handle(
            "product", product_id, active=True
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product {product_id} activated.")


@click.command("deactivate")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.pass_obj
def product_deactivate(settings: Settings, product_id: str) -> None:
    """Keep a product off new sales."""
    try:
        SetActiveHandler(uow=unit_of_work(settings.data_dir)).handle(
            "product", product_id, active=False
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product {product_id} deactivated.")
