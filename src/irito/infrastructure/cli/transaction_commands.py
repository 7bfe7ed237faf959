"""CLI commands for inventory transactions."""

from __future__ import annotations

import click

from irito.domain.exceptions import DomainException
from irito.domain.model.transaction import TransactionType
from irito.infrastructure.bootstrap import Container
from irito.infrastructure.cli.errors import to_click_error


@click.command("create")
@click.option("--product-id", required=True, help="Product ID.")
@click.option(
    "--type",
    "transaction_type",
    required=True,
    type=click.Choice([t.value for t in TransactionType]),
    help="Movement type.",
)
@click.option("--quantity", required=True, type=int, help="Units moved (signed for adjustment).")
@click.option("--user", "user_id", required=True, help="Acting user ID.")
@click.option("--note", default=None, help="Free-text note.")
@click.option("--order-id", default=None, help="Related order reference.")
@click.pass_obj
def transaction_create(
    container: Container,
    product_id: str,
    transaction_type: str,
    quantity: int,
    user_id: str,
    note: str | None,
    order_id: str | None,
) -> None:
    """Record an inbound, outbound or adjustment movement."""
    handler = container.submit_transaction()

    try:
        tx = handler.handle(
            product_id=product_id,
            transaction_type=transaction_type,
            quantity=quantity,
            user_id=user_id,
            note=note,
            order_id=order_id,
        )
    except DomainException as exc:
        raise to_click_error(exc)

    click.echo(
        f"Transaction {tx.id} recorded  ({tx.type.value} {tx.quantity}: "
        f"{tx.previous_stock} -> {tx.new_stock})"
    )


@click.command("list")
@click.option("--limit", type=click.IntRange(min=1), default=None, help="Maximum rows to show.")
@click.pass_obj
def transaction_list(container: Container, limit: int | None) -> None:
    """Show recent transactions, newest first."""
    transactions = container.store.list_transactions(limit)

    if not transactions:
        click.echo("No transactions found.")
        return

    codes = {p.id: p.code for p in container.store.list_all()}
    click.echo(f"{'Time':<20} {'Product':<14} {'Type':<11} {'Qty':>6} {'Stock':>13} {'Voice':>6}")
    click.echo("-" * 75)
    for tx in transactions:
        stock = f"{tx.previous_stock}->{tx.new_stock}"
        click.echo(
            f"{tx.timestamp.strftime('%Y-%m-%d %H:%M:%S'):<20} "
            f"{codes.get(tx.product_id, tx.product_id):<14} {tx.type.value:<11} "
            f"{tx.quantity:>6} {stock:>13} {'yes' if tx.is_voice_command else '':>6}"
        )
