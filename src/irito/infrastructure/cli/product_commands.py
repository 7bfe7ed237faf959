"""CLI commands for the Product aggregate."""

from __future__ import annotations

import click

from irito.domain.exceptions import DomainException
from irito.infrastructure.bootstrap import Container
from irito.infrastructure.cli.errors import NotFoundError, to_click_error


@click.command("add")
@click.option("--code", required=True, help="Unique product code (e.g. IPH14P-256).")
@click.option("--name", required=True, help="Display name.")
@click.option("--category", required=True, help="Category label.")
@click.option("--location", required=True, help="Storage area (e.g. A区域).")
@click.option("--stock", "current_stock", type=click.IntRange(min=0), default=0, help="Initial stock.")
@click.option("--min-stock", type=click.IntRange(min=0), default=0, help="Reorder threshold.")
@click.option("--max-stock", type=click.IntRange(min=0), default=1000, help="Soft ceiling.")
@click.option("--unit", default="個", help="Unit label.")
@click.pass_obj
def product_add(
    container: Container,
    code: str,
    name: str,
    category: str,
    location: str,
    current_stock: int,
    min_stock: int,
    max_stock: int,
    unit: str,
) -> None:
    """Add a new product to the catalog."""
    handler = container.add_product()

    try:
        product = handler.handle(
            code=code,
            name=name,
            category=category,
            location=location,
            current_stock=current_stock,
            min_stock=min_stock,
            max_stock=max_stock,
            unit=unit,
        )
    except DomainException as exc:
        raise to_click_error(exc)

    click.echo(f"Product {product.id} '{product.name}' ({product.code}) added")


@click.command("list")
@click.option("--location", default=None, help="Only products in this area.")
@click.option("--low-stock", is_flag=True, default=False, help="Only products at or below minimum.")
@click.pass_obj
def product_list(container: Container, location: str | None, low_stock: bool) -> None:
    """List products with their stock levels."""
    lines = container.show_inventory().handle(location=location, low_stock_only=low_stock)

    if not lines:
        click.echo("No products found.")
        return

    click.echo(f"{'Code':<14} {'Name':<20} {'Location':<8} {'Stock':>6} {'Min':>6} {'Max':>6}")
    click.echo("-" * 66)
    for line in lines:
        flag = "  LOW" if line.low_stock else ""
        click.echo(
            f"{line.code:<14} {line.name:<20} {line.location:<8} "
            f"{line.current:>6} {line.minimum:>6} {line.maximum:>6}{flag}"
        )


@click.command("show")
@click.option("--code", required=True, help="Product code.")
@click.pass_obj
def product_show(container: Container, code: str) -> None:
    """Show a single product by code."""
    product = container.store.get_by_code(code)
    if product is None:
        raise NotFoundError(f"Product with code '{code}' not found")

    click.echo(f"{product.name}  ({product.code})")
    click.echo(f"Category: {product.category}")
    click.echo(f"Location: {product.location}")
    click.echo(f"Stock:    {product.current_stock}{product.unit} (min {product.min_stock}, max {product.max_stock})")
    click.echo(f"Updated:  {product.last_updated.strftime('%Y-%m-%d %H:%M UTC')}")
