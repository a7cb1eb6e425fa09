from pathlib import Path

import click

from sms.infrastructure.cli.party_commands import (
    branch_activate,
    branch_add,
    branch_deactivate,
    branch_list,
    customer_activate,
    customer_add,
    customer_deactivate,
    customer_list,
)
from sms.infrastructure.cli.product_commands import (
    product_activate,
    product_add,
    product_deactivate,
    product_list,
    product_restock,
    product_update,
)
from sms.infrastructure.cli.sale_commands import (
    sale_cancel,
    sale_create,
    sale_list,
    sale_reactivate,
    sale_show,
)
from sms.infrastructure.config import Settings
from sms.infrastructure.logging_setup import configure_logging


@click.group()
@click.option(
    "--data-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Directory holding the JSON data files (overrides SMS_DATA_DIR).",
)
@click.pass_context
def cli(ctx: click.Context, data_dir: Path | None) -> None:
    """SMS: Sales Management System"""
    settings = Settings.from_env().with_data_dir(data_dir)
    configure_logging(settings)
    ctx.obj = settings


@cli.group()
def sale() -> None:
    """Manage sales."""


@cli.group()
def product() -> None:
    """Manage products."""


@cli.group()
def customer() -> None:
    """Manage customers."""


@cli.group()
def branch() -> None:
    """Manage branches."""


# Register subcommands
sale.add_command(sale_cancel)
sale.add_command(sale_create)
sale.add_command(sale_list)
sale.add_command(sale_reactivate)
sale.add_command(sale_show)
product.add_command(product_activate)
product.add_command(product_add)
product.add_command(product_deactivate)
product.add_command(product_list)
product.add_command(product_restock)
product.add_command(product_update)
customer.add_command(customer_activate)
customer.add_command(customer_add)
customer.add_command(customer_deactivate)
customer.add_command(customer_list)
branch.add_command(branch_activate)
branch.add_command(branch_add)
branch.add_command(branch_deactivate)
branch.add_command(branch_list)
