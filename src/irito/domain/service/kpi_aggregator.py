"""Domain service: KPI Aggregator.

Keeps today's running counters. It is a pure accumulator fed by the
store's commit notifications and by the voice command handler; it never
recomputes from the ledger, so a missed notification is not self-healing.
"""

from __future__ import annotations

import threading
from dataclasses import replace
from datetime import date
from typing import Callable

from irito.domain.model.kpi import DailyKpi
from irito.domain.model.product import Product
from irito.domain.model.transaction import InventoryTransaction, TransactionType


class KpiAggregator:

    def __init__(self, today: Callable[[], date] = date.today) -> None:
        self._today = today
        self._records: dict[str, DailyKpi] = {}
        self._lock = threading.Lock()

    # --- Accumulation ---------------------------------------------------------

    def on_transaction_committed(
        self,
        transaction: InventoryTransaction,
        product: Product | None = None,
    ) -> None:
        """Add a committed movement to today's inbound/outbound totals.

        When *product* is given, a commit that takes the product from
        above its minimum to at-or-below it counts as a low-stock alert.
        """
        with self._lock:
            kpi = self._record_for_today()
            if transaction.type == TransactionType.INBOUND:
                kpi.total_inbound += transaction.quantity
            elif transaction.type == TransactionType.OUTBOUND:
                kpi.total_outbound += transaction.quantity

            if product is not None and (
                transaction.previous_stock > product.min_stock >= transaction.new_stock
            ):
                kpi.low_stock_alerts += 1

    def on_voice_command_processed(self) -> None:
        with self._lock:
            self._record_for_today().voice_commands_used += 1

    # --- Queries --------------------------------------------------------------

    def current(self) -> DailyKpi:
        """Snapshot of today's counters (zeroed if nothing happened yet)."""
        with self._lock:
            return replace(self._record_for_today())

    def history(self) -> list[DailyKpi]:
        with self._lock:
            return [replace(self._records[key]) for key in sorted(self._records)]

    def restore(self, records: list[DailyKpi]) -> None:
        with self._lock:
            self._records = {record.date: replace(record) for record in records}

    # --- Internal helpers -----------------------------------------------------

    def _record_for_today(self) -> DailyKpi:
        key = self._today().isoformat()
        kpi = self._records.get(key)
        if kpi is None:
            kpi = DailyKpi(date=key)
            self._records[key] = kpi
        return kpi
