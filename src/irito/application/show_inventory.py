"""Application service: Show Inventory use case (query)."""

from __future__ import annotations

from irito.application.dto import InventoryLineDTO
from irito.domain.repository.inventory_store import InventoryStore


class ShowInventoryHandler:

    def __init__(self, store: InventoryStore) -> None:
        self._store = store

    def handle(
        self,
        location: str | None = None,
        low_stock_only: bool = False,
    ) -> list[InventoryLineDTO]:
        if location:
            products = self._store.list_by_location(location)
        else:
            products = self._store.list_all()
        if low_stock_only:
            products = [p for p in products if p.is_low_stock]

        return [
            InventoryLineDTO(
                code=p.code,
                name=p.name,
                location=p.location,
                current=p.current_stock,
                minimum=p.min_stock,
                maximum=p.max_stock,
                unit=p.unit,
                low_stock=p.is_low_stock,
            )
            for p in products
        ]
