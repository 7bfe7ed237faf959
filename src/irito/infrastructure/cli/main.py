import sys
from pathlib import Path

import click

from irito.infrastructure import settings
from irito.infrastructure.bootstrap import load_container
from irito.infrastructure.cli.dashboard_commands import dashboard, kpi_show, location_list
from irito.infrastructure.cli.product_commands import product_add, product_list, product_show
from irito.infrastructure.cli.transaction_commands import transaction_create, transaction_list
from irito.infrastructure.cli.voice_commands import voice
from irito.infrastructure.logger import setup_logger
from irito.infrastructure.realtime.sinks import StreamSink


@click.group()
@click.option(
    "--data-dir",
    type=click.Path(file_okay=False, path_type=Path),
    envvar="IRITO_DATA_DIR",
    default=settings.DATA_DIR,
    show_default=True,
    help="Directory holding the JSON snapshot.",
)
@click.option("--echo-events", is_flag=True, default=False, help="Print published events to stderr.")
@click.pass_context
def cli(ctx: click.Context, data_dir: Path, echo_events: bool) -> None:
    """IritoDeVoice: voice-driven inventory management"""
    setup_logger()
    container = load_container(data_dir)
    if echo_events:
        container.broadcaster.register(StreamSink(sys.stderr))
    ctx.obj = container
    ctx.call_on_close(container.flush)


@cli.group()
def product() -> None:
    """Manage products."""


@cli.group()
def transaction() -> None:
    """Record and review stock movements."""


@cli.group()
def location() -> None:
    """Browse storage areas."""


@cli.group()
def kpi() -> None:
    """Daily KPI counters."""


# Register subcommands
cli.add_command(voice)
cli.add_command(dashboard)
product.add_command(product_add)
product.add_command(product_list)
product.add_command(product_show)
transaction.add_command(transaction_create)
transaction.add_command(transaction_list)
location.add_command(location_list)
kpi.add_command(kpi_show)
