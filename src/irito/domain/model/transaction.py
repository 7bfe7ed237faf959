"""InventoryTransaction: the append-only ledger entry.

One transaction is written per committed stock mutation. It is frozen:
``previous_stock`` and ``new_stock`` form the audit record of that single
atomic change and are never edited afterwards.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from irito.domain.model.product import utcnow


class TransactionType(Enum):
    INBOUND = "inbound"
    OUTBOUND = "outbound"
    ADJUSTMENT = "adjustment"


@dataclass(frozen=True)
class InventoryTransaction:
    """A committed stock movement.

    ``quantity`` is positive for inbound/outbound. For adjustments it is
    the signed delta that was applied.
    """

    id: str
    product_id: str
    type: TransactionType
    quantity: int
    previous_stock: int
    new_stock: int
    user_id: str
    sequence: int = 0
    order_id: str | None = None
    note: str | None = None
    is_voice_command: bool = False
    timestamp: datetime = field(default_factory=utcnow)

    @property
    def delta(self) -> int:
        if self.type == TransactionType.OUTBOUND:
            return -self.quantity
        return self.quantity

    @property
    def is_consistent(self) -> bool:
        """True when the stock snapshots agree with type and quantity."""
        return (
            self.new_stock >= 0
            and self.new_stock - self.previous_stock == self.delta
        )
