"""Application service: Add Product use case."""

from __future__ import annotations

import uuid

from irito.domain.exceptions import DuplicateProductCodeError
from irito.domain.model.product import DEFAULT_MAX_STOCK, DEFAULT_UNIT, Product
from irito.domain.repository.inventory_store import InventoryStore


class AddProductHandler:

    def __init__(self, store: InventoryStore) -> None:
        self._store = store

    def handle(
        self,
        code: str,
        name: str,
        category: str,
        location: str,
        current_stock: int = 0,
        min_stock: int = 0,
        max_stock: int = DEFAULT_MAX_STOCK,
        unit: str = DEFAULT_UNIT,
    ) -> Product:
        """Add a new product to the catalog under a fresh id."""
        existing = self._store.get_by_code(code.strip()) if code else None
        if existing is not None:
            raise DuplicateProductCodeError(
                f"Product code '{existing.code}' already exists"
            )

        product = Product.create(
            product_id=str(uuid.uuid4()),
            code=code,
            name=name,
            category=category,
            location=location,
            current_stock=current_stock,
            min_stock=min_stock,
            max_stock=max_stock,
            unit=unit,
        )
        # The store re-checks the code under its own lock
        self._store.add_product(product)
        return product
