"""Composition root: wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
There is no process-wide store: every Container is built explicitly and
owns its state for the lifecycle ``load (or seed) -> serve -> flush``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import Callable

from irito.application.add_product import AddProductHandler
from irito.application.broadcaster import UpdateBroadcaster
from irito.application.execute_command import CommandExecutor
from irito.application.show_dashboard import ShowDashboardHandler
from irito.application.show_inventory import ShowInventoryHandler
from irito.application.submit_transaction import SubmitTransactionHandler
from irito.application.submit_voice_command import SubmitVoiceCommandHandler
from irito.domain.service.auto_order_policy import AutoOrderPolicy
from irito.domain.service.command_parser import CommandParser
from irito.domain.service.kpi_aggregator import KpiAggregator
from irito.infrastructure import settings
from irito.infrastructure.persistence.in_memory_inventory_store import (
    InMemoryInventoryStore,
)
from irito.infrastructure.persistence.json_inventory_snapshot import (
    JsonInventorySnapshot,
)
from irito.infrastructure.seed import sample_products

logger = logging.getLogger(__name__)


@dataclass
class Container:
    store: InMemoryInventoryStore
    kpis: KpiAggregator
    broadcaster: UpdateBroadcaster
    parser: CommandParser
    executor: CommandExecutor
    snapshot: JsonInventorySnapshot | None = None

    # --- Use cases ------------------------------------------------------------

    def submit_voice_command(self) -> SubmitVoiceCommandHandler:
        return SubmitVoiceCommandHandler(
            store=self.store,
            parser=self.parser,
            executor=self.executor,
            kpis=self.kpis,
            broadcaster=self.broadcaster,
        )

    def submit_transaction(self) -> SubmitTransactionHandler:
        return SubmitTransactionHandler(store=self.store, broadcaster=self.broadcaster)

    def add_product(self) -> AddProductHandler:
        return AddProductHandler(store=self.store)

    def show_inventory(self) -> ShowInventoryHandler:
        return ShowInventoryHandler(store=self.store)

    def show_dashboard(self) -> ShowDashboardHandler:
        return ShowDashboardHandler(store=self.store, kpis=self.kpis)

    # --- Lifecycle ------------------------------------------------------------

    def flush(self) -> None:
        if self.snapshot is not None:
            self.snapshot.flush(self.store, self.kpis)


def build_container(
    snapshot: JsonInventorySnapshot | None = None,
    today: Callable[[], date] = date.today,
    transaction_limit: int = settings.TRANSACTION_LIMIT,
) -> Container:
    """Create and wire every component.

    Loads *snapshot* when it has data, otherwise seeds the sample catalog.
    """
    store = InMemoryInventoryStore(transaction_limit=transaction_limit)
    kpis = KpiAggregator(today=today)

    if snapshot is not None and snapshot.exists():
        snapshot.load(store, kpis)
    else:
        for product in sample_products():
            store.add_product(product)
        logger.debug("Seeded %d sample products", len(store.list_all()))

    store.subscribe(kpis.on_transaction_committed)

    return Container(
        store=store,
        kpis=kpis,
        broadcaster=UpdateBroadcaster(),
        parser=CommandParser(),
        executor=CommandExecutor(store, AutoOrderPolicy(store)),
        snapshot=snapshot,
    )


def load_container(data_dir: Path | None = None) -> Container:
    """Container backed by the JSON files in *data_dir*."""
    return build_container(JsonInventorySnapshot(data_dir or settings.DATA_DIR))
