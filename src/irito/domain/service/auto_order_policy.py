"""Domain service: Auto-order policy.

Answers "what would be re-ordered right now?". Every product at or below
its minimum stock is a candidate, topped back up to its soft ceiling.
"""

from __future__ import annotations

from dataclasses import dataclass

from irito.domain.repository.inventory_store import InventoryStore


@dataclass(frozen=True)
class ReorderSuggestion:
    product_id: str
    product_code: str
    product_name: str
    current_stock: int
    min_stock: int
    suggested_quantity: int
    unit: str


class AutoOrderPolicy:

    def __init__(self, store: InventoryStore) -> None:
        self._store = store

    def suggestions(self) -> list[ReorderSuggestion]:
        return [
            ReorderSuggestion(
                product_id=product.id,
                product_code=product.code,
                product_name=product.name,
                current_stock=product.current_stock,
                min_stock=product.min_stock,
                suggested_quantity=product.reorder_quantity,
                unit=product.unit,
            )
            for product in self._store.list_low_stock()
        ]
