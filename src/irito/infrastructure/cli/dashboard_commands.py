"""CLI commands for read-only dashboard views."""

from __future__ import annotations

import json

import click

from irito.application.dto import kpi_to_dict
from irito.infrastructure import settings
from irito.infrastructure.bootstrap import Container


@click.command("show")
@click.pass_obj
def kpi_show(container: Container) -> None:
    """Show today's KPI counters."""
    kpi = container.kpis.current()
    click.echo(f"KPIs for {kpi.date}")
    click.echo(f"  Inbound:          {kpi.total_inbound:>8}")
    click.echo(f"  Outbound:         {kpi.total_outbound:>8}")
    click.echo(f"  Low-stock alerts: {kpi.low_stock_alerts:>8}")
    click.echo(f"  Voice commands:   {kpi.voice_commands_used:>8}")


@click.command("list")
@click.pass_obj
def location_list(container: Container) -> None:
    """List storage areas and how many products each holds."""
    locations = container.store.list_locations()
    if not locations:
        click.echo("No locations found.")
        return
    for location in locations:
        count = len(container.store.list_by_location(location))
        click.echo(f"{location:<10} {count:>4} products")


@click.command("dashboard")
@click.option("--recent", type=click.IntRange(min=0), default=settings.DASHBOARD_RECENT_LIMIT, show_default=True, help="Recent transactions to include.")
@click.option("--json", "as_json", is_flag=True, default=False, help="Print the dashboard as JSON.")
@click.pass_obj
def dashboard(container: Container, recent: int, as_json: bool) -> None:
    """Show the dashboard summary."""
    dto = container.show_dashboard().handle(recent_limit=recent)

    if as_json:
        click.echo(json.dumps(dto.to_dict(), ensure_ascii=False, indent=2))
        return

    kpis = kpi_to_dict(dto.kpis)
    click.echo(f"Dashboard  ({kpis['date']})")
    click.echo(
        f"Inbound {kpis['totalInbound']}  Outbound {kpis['totalOutbound']}  "
        f"Alerts {kpis['lowStockAlerts']}  Voice {kpis['voiceCommandsUsed']}"
    )
    click.echo(f"Products: {len(dto.products)}  Locations: {', '.join(dto.locations)}")
    click.echo()

    click.echo("Low stock:")
    if not dto.low_stock_products:
        click.echo("  (none)")
    for product in dto.low_stock_products:
        click.echo(
            f"  {product.code:<14} {product.name:<20} {product.current_stock:>6} / min {product.min_stock}"
        )

    click.echo()
    click.echo("Recent activity:")
    if not dto.recent_transactions:
        click.echo("  (none)")
    for tx in dto.recent_transactions:
        click.echo(
            f"  {tx.timestamp.strftime('%H:%M:%S')} {tx.type.value:<11} {tx.quantity:>6} "
            f"{tx.previous_stock}->{tx.new_stock}"
        )
