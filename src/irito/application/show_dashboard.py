"""Application service: Show Dashboard use case (query).

Gathers the read-only view the dashboard renders: the catalog, today's
KPI snapshot, low-stock alerts, recent ledger activity and the known
locations.
"""

from __future__ import annotations

from irito.application.dto import DashboardDTO
from irito.domain.repository.inventory_store import InventoryStore
from irito.domain.service.kpi_aggregator import KpiAggregator

DEFAULT_RECENT_LIMIT = 10


class ShowDashboardHandler:

    def __init__(self, store: InventoryStore, kpis: KpiAggregator) -> None:
        self._store = store
        self._kpis = kpis

    def handle(self, recent_limit: int = DEFAULT_RECENT_LIMIT) -> DashboardDTO:
        return DashboardDTO(
            products=self._store.list_all(),
            kpis=self._kpis.current(),
            low_stock_products=self._store.list_low_stock(),
            recent_transactions=self._store.list_transactions(recent_limit),
            locations=self._store.list_locations(),
        )
