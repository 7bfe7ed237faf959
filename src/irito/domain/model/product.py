"""Product aggregate.

Products carry their own stock level. The only legitimate way to change
``current_stock`` is ``apply_delta()``, which the inventory store calls
inside its per-product critical section so that the stock level and the
ledger entry for the same movement always agree.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone

from irito.domain.exceptions import InsufficientStockError, ValidationError
from irito.domain.model.value_objects import area_key

DEFAULT_UNIT = "個"
DEFAULT_MAX_STOCK = 1000


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class Product:
    """A stock-keeping product in the warehouse.

    Invariants:
    - ``current_stock`` is never negative
    - ``code`` is the business key; uniqueness is enforced by the store
    """

    id: str
    code: str
    name: str
    category: str
    current_stock: int = 0
    min_stock: int = 0
    max_stock: int = DEFAULT_MAX_STOCK
    unit: str = DEFAULT_UNIT
    location: str = ""
    last_updated: datetime = field(default_factory=utcnow)

    # --- Factory (used for NEW products only) ---------------------------------

    @staticmethod
    def create(
        product_id: str,
        code: str,
        name: str,
        category: str,
        location: str,
        current_stock: int = 0,
        min_stock: int = 0,
        max_stock: int = DEFAULT_MAX_STOCK,
        unit: str = DEFAULT_UNIT,
    ) -> Product:
        """Create a new product, enforcing all invariants."""
        if not code or not code.strip():
            raise ValidationError("Product code is required")
        if not name or not name.strip():
            raise ValidationError("Product name is required")
        if not category or not category.strip():
            raise ValidationError("Product category is required")
        if not location or not location.strip():
            raise ValidationError("Product location is required")
        if current_stock < 0:
            raise ValidationError("Current stock cannot be negative")
        if min_stock < 0:
            raise ValidationError("Minimum stock cannot be negative")
        if max_stock < min_stock:
            raise ValidationError(
                f"Maximum stock {max_stock} is below minimum stock {min_stock}"
            )

        return Product(
            id=product_id,
            code=code.strip(),
            name=name.strip(),
            category=category.strip(),
            current_stock=current_stock,
            min_stock=min_stock,
            max_stock=max_stock,
            unit=unit.strip() or DEFAULT_UNIT,
            location=location.strip(),
        )

    # --- Stock mutation -------------------------------------------------------

    def apply_delta(self, delta: int, at: datetime | None = None) -> tuple[int, int]:
        """Shift ``current_stock`` by *delta* and stamp ``last_updated``.

        Returns ``(previous_stock, new_stock)``. Raises
        InsufficientStockError, leaving the product untouched, when the
        result would be negative.
        """
        previous = self.current_stock
        new = previous + delta
        if new < 0:
            raise InsufficientStockError(
                f"Insufficient stock for {self.name} "
                f"(need {-delta}, have {previous} {self.unit})"
            )
        self.current_stock = new
        self.last_updated = at or utcnow()
        return previous, new

    # --- Computed properties --------------------------------------------------

    @property
    def is_low_stock(self) -> bool:
        return self.current_stock <= self.min_stock

    @property
    def reorder_quantity(self) -> int:
        """Units needed to bring stock back up to the soft ceiling."""
        return max(self.max_stock - self.current_stock, 1)

    def in_area(self, area: str) -> bool:
        return area_key(self.location) == area_key(area)
