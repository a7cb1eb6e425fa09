"""CLI commands for customers and branches."""

from __future__ import annotations

import click

from sms.application.add_party import AddBranchHandler, AddCustomerHandler
from sms.application.set_active import SetActiveHandler
from sms.domain.exceptions import DomainException
from sms.infrastructure.bootstrap import unit_of_work
from sms.infrastructure.config import Settings


def _set_active(settings: Settings, kind: str, entity_id: str, active: bool) -> None:
    try:
        SetActiveHandler(uow=unit_of_work(settings.data_dir)).handle(kind, entity_id, active)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    verb = "activated" if active else "deactivated"
    click.echo(f"{kind.capitalize()} {entity_id} {verb}.")


# --- Customers ----------------------------------------------------------------


@click.command("add")
@click.option("--name", required=True, help="Customer name.")
@click.option("--email", required=True, help="Unique e-mail address.")
@click.option("--phone", default="", help="Phone in international format, e.g. +15551234567.")
@click.pass_obj
def customer_add(settings: Settings, name: str, email: str, phone: str) -> None:
    """Register a customer."""
    handler = AddCustomerHandler(uow=unit_of_work(settings.data_dir))

    try:
        customer = handler.handle(name=name, email=email, phone=phone)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Customer {customer.id} '{customer.name}' <{customer.email}> added")


@click.command("list")
@click.pass_obj
def customer_list(settings: Settings) -> None:
    """List all customers."""
    with unit_of_work(settings.data_dir) as uow:
        customers = uow.customers.list_all()

    if not customers:
        click.echo("No customers found.")
        return

    click.echo(f"{'ID':<32} {'Name':<20} {'Email':<30} Active")
    click.echo("-" * 90)
    for c in customers:
        click.echo(f"{c.id:<32} {c.name:<20} {c.email:<30} {'yes' if c.is_active else 'no'}")


@click.command("activate")
@click.option("--id", "customer_id", required=True, help="Customer ID.")
@click.pass_obj
def customer_activate(settings: Settings, customer_id: str) -> None:
    """Allow a customer on new sales again."""
    _set_active(settings, "customer", customer_id, active=True)


@click.command("deactivate")
@click.option("--id", "customer_id", required=True, help="Customer ID.")
@click.pass_obj
def customer_deactivate(settings: Settings, customer_id: str) -> None:
    """Keep a customer off new sales."""
    _set_active(settings, "customer", customer_id, active=False)


# --- Branches -----------------------------------------------------------------


@click.command("add")
@click.option("--name", required=True, help="Branch name.")
@click.option("--code", required=True, help="Unique branch code.")
@click.option("--city", default="", help="City.")
@click.pass_obj
def branch_add(settings: Settings, name: str, code: str, city: str) -> None:
    """Register a branch."""
    handler = AddBranchHandler(uow=unit_of_work(settings.data_dir))

    try:
        branch = handler.handle(name=name, code=code, city=city)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Branch {branch.id} '{branch.name}' [{branch.code}] added")


@click.command("list")
@click.pass_obj
def branch_list(settings: Settings) -> None:
    """List all branches."""
    with unit_of_work(settings.data_dir) as uow:
        branches = uow.branches.list_all()

    if not branches:
        click.echo("No branches found.")
        return

    click.echo(f"{'ID':<32} {'Code':<10} {'Name':<20} {'City':<15} Active")
    click.echo("-" * 90)
    for b in branches:
        click.echo(
            f"{b.id:<32} {b.code:<10} {b.name:<20} {b.city:<15} "
            f"{'yes' if b.is_active else 'no'}"
        )


@click.command("activate")
@click.option("--id", "branch_id", required=True, help="Branch ID.")
@click.pass_obj
def branch_activate(settings: Settings, branch_id: str) -> None:
    """Allow a branch on new sales again."""
    _set_active(settings, "branch", branch_id, active=True)


@click.command("deactivate")
@click.option("--id", "branch_id", required=True, help="Branch ID.")
@click.pass_obj
def branch_deactivate(settings: Settings, branch_id: str) -> None:
    """Keep a branch off new sales."""
    _set_active(settings, "branch", branch_id, active=False)
