"""Application service: Submit Transaction use case.

The manual (non-voice) entry point for stock movements. Input is
validated here, before anything reaches the store; store failures
propagate as their own exception types so the boundary can tell
"no such product" from "not enough stock".
"""

from __future__ import annotations

from irito.application.broadcaster import INVENTORY_UPDATE, UpdateBroadcaster
from irito.application.dto import inventory_update_data
from irito.domain.exceptions import InvalidInputError
from irito.domain.model.transaction import InventoryTransaction, TransactionType
from irito.domain.model.value_objects import Quantity
from irito.domain.repository.inventory_store import InventoryStore


class SubmitTransactionHandler:

    def __init__(self, store: InventoryStore, broadcaster: UpdateBroadcaster) -> None:
        self._store = store
        self._broadcaster = broadcaster

    def handle(
        self,
        product_id: str,
        transaction_type: str | TransactionType,
        quantity: int,
        user_id: str,
        note: str | None = None,
        order_id: str | None = None,
    ) -> InventoryTransaction:
        """Record a stock movement and publish it.

        Raises InvalidInputError, ProductNotFoundError or
        InsufficientStockError.
        """
        if not product_id or not str(product_id).strip():
            raise InvalidInputError("Product ID is required")
        if not user_id or not user_id.strip():
            raise InvalidInputError("User ID is required")

        kind = self._parse_type(transaction_type)
        delta = self._delta_for(kind, quantity)

        transaction = self._store.mutate_stock(
            product_id,
            delta,
            kind,
            user_id=user_id.strip(),
            note=note or None,
            order_id=order_id or None,
        )
        self._broadcaster.publish(INVENTORY_UPDATE, inventory_update_data(transaction))
        return transaction

    # --- Validation -----------------------------------------------------------

    @staticmethod
    def _parse_type(raw: str | TransactionType) -> TransactionType:
        if isinstance(raw, TransactionType):
            return raw
        try:
            return TransactionType(str(raw).strip().lower())
        except ValueError:
            allowed = ", ".join(t.value for t in TransactionType)
            raise InvalidInputError(
                f"Unknown transaction type '{raw}' (expected one of: {allowed})"
            )

    @staticmethod
    def _delta_for(kind: TransactionType, quantity: int) -> int:
        if kind == TransactionType.ADJUSTMENT:
            if not isinstance(quantity, int) or isinstance(quantity, bool) or quantity == 0:
                raise InvalidInputError("Adjustment quantity must be a non-zero integer")
            return quantity
        value = Quantity(quantity).value
        return -value if kind == TransactionType.OUTBOUND else value
