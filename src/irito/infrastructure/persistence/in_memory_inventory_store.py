"""In-memory implementation of InventoryStore.

Product records live in an insertion-ordered dict, the ledger and the
voice log in append-only lists. ``mutate_stock`` runs under a lock keyed
by product id and computes the new product state on a copy. The updated
record replaces the stored one in the same step as the paired ledger
append, so a reader never sees a stock level without its transaction.
Different products never contend with each other.

Lock order is always product lock -> registry lock -> ledger lock.
"""

from __future__ import annotations

import logging
import threading
import uuid
from copy import copy
from itertools import islice

from irito.domain.exceptions import (
    DuplicateProductCodeError,
    InvalidInputError,
    ProductNotFoundError,
    ValidationError,
)
from irito.domain.model.product import Product, utcnow
from irito.domain.model.transaction import InventoryTransaction, TransactionType
from irito.domain.model.voice_command import VoiceCommand
from irito.domain.repository.inventory_store import (
    DEFAULT_TRANSACTION_LIMIT,
    CommitListener,
    InventoryStore,
)

logger = logging.getLogger(__name__)


class InMemoryInventoryStore(InventoryStore):

    def __init__(
        self,
        products: list[Product] | None = None,
        transaction_limit: int = DEFAULT_TRANSACTION_LIMIT,
    ) -> None:
        self._products: dict[str, Product] = {}
        self._ledger: list[InventoryTransaction] = []
        self._voice_log: list[VoiceCommand] = []
        self._listeners: list[CommitListener] = []
        self._transaction_limit = transaction_limit

        self._registry_lock = threading.Lock()
        self._ledger_lock = threading.Lock()
        self._product_locks: dict[str, threading.Lock] = {}

        for product in products or []:
            self.add_product(product)

    # --- Products -------------------------------------------------------------

    def get_by_code(self, code: str) -> Product | None:
        with self._registry_lock:
            for product in self._products.values():
                if product.code == code:
                    return copy(product)
        return None

    def get_by_id(self, product_id: str) -> Product | None:
        with self._registry_lock:
            product = self._products.get(product_id)
            return copy(product) if product is not None else None

    def list_all(self) -> list[Product]:
        with self._registry_lock:
            return [copy(p) for p in self._products.values()]

    def list_low_stock(self) -> list[Product]:
        return [p for p in self.list_all() if p.is_low_stock]

    def list_by_location(self, area: str) -> list[Product]:
        return [p for p in self.list_all() if p.in_area(area)]

    def list_locations(self) -> list[str]:
        seen: dict[str, None] = {}
        for product in self.list_all():
            seen.setdefault(product.location, None)
        return list(seen)

    def add_product(self, product: Product) -> None:
        with self._registry_lock:
            if product.id in self._products:
                raise ValidationError(f"Product ID '{product.id}' already exists")
            for existing in self._products.values():
                if existing.code == product.code:
                    raise DuplicateProductCodeError(
                        f"Product code '{product.code}' is already used by "
                        f"'{existing.name}'"
                    )
            self._products[product.id] = copy(product)
            self._product_locks[product.id] = threading.Lock()

    # --- Stock mutation -------------------------------------------------------

    def mutate_stock(
        self,
        product_id: str,
        delta: int,
        kind: TransactionType,
        *,
        user_id: str,
        note: str | None = None,
        order_id: str | None = None,
        is_voice_command: bool = False,
    ) -> InventoryTransaction:
        self._check_delta(delta, kind)

        with self._registry_lock:
            lock = self._product_locks.get(product_id)
        if lock is None:
            raise ProductNotFoundError(f"Product with ID '{product_id}' not found")

        with lock:
            with self._registry_lock:
                updated = copy(self._products[product_id])

            # Work on a private copy; readers keep seeing the committed record
            # until the swap below.
            now = utcnow()
            try:
                previous, new = updated.apply_delta(delta, at=now)
            except ValidationError:
                logger.info(
                    "Rejected %s of %d for %s (stock %d)",
                    kind.value, abs(delta), updated.code, updated.current_stock,
                )
                raise

            with self._registry_lock, self._ledger_lock:
                transaction = InventoryTransaction(
                    id=str(uuid.uuid4()),
                    product_id=updated.id,
                    type=kind,
                    quantity=delta if kind == TransactionType.ADJUSTMENT else abs(delta),
                    previous_stock=previous,
                    new_stock=new,
                    user_id=user_id,
                    sequence=len(self._ledger) + 1,
                    order_id=order_id,
                    note=note,
                    is_voice_command=is_voice_command,
                    timestamp=now,
                )
                self._products[product_id] = updated
                self._ledger.append(transaction)
            snapshot = copy(updated)

        logger.info(
            "Committed %s %s: %d -> %d (user=%s, voice=%s)",
            kind.value, snapshot.code, previous, new, user_id, is_voice_command,
        )
        for listener in list(self._listeners):
            listener(transaction, snapshot)
        return transaction

    def subscribe(self, listener: CommitListener) -> None:
        self._listeners.append(listener)

    # --- Ledger ---------------------------------------------------------------

    def list_transactions(self, limit: int | None = None) -> list[InventoryTransaction]:
        limit = self._transaction_limit if limit is None else limit
        with self._ledger_lock:
            ordered = sorted(
                self._ledger,
                key=lambda t: (t.timestamp, t.sequence),
                reverse=True,
            )
        return ordered[: max(limit, 0)]

    # --- Voice command log ----------------------------------------------------

    def record_voice_command(self, command: VoiceCommand) -> None:
        with self._ledger_lock:
            self._voice_log.append(command)

    def list_voice_commands(self, limit: int | None = None) -> list[VoiceCommand]:
        limit = self._transaction_limit if limit is None else limit
        with self._ledger_lock:
            return list(islice(reversed(self._voice_log), max(limit, 0)))

    # --- Snapshot lifecycle ---------------------------------------------------

    def restore(
        self,
        products: list[Product],
        transactions: list[InventoryTransaction],
        voice_commands: list[VoiceCommand],
    ) -> None:
        """Replace all state with previously persisted records.

        Used once at startup, before the store starts serving requests.
        """
        with self._registry_lock:
            self._products = {}
            self._product_locks = {}
        for product in products:
            self.add_product(product)
        with self._ledger_lock:
            self._ledger = sorted(transactions, key=lambda t: t.sequence)
            self._voice_log = list(voice_commands)

    def export_transactions(self) -> list[InventoryTransaction]:
        """Every ledger entry in commit order."""
        with self._ledger_lock:
            return list(self._ledger)

    def export_voice_commands(self) -> list[VoiceCommand]:
        with self._ledger_lock:
            return list(self._voice_log)

    # --- Internal helpers -----------------------------------------------------

    @staticmethod
    def _check_delta(delta: int, kind: TransactionType) -> None:
        if delta == 0:
            raise InvalidInputError("Stock mutation delta must not be zero")
        if kind == TransactionType.INBOUND and delta < 0:
            raise InvalidInputError("Inbound delta must be positive")
        if kind == TransactionType.OUTBOUND and delta > 0:
            raise InvalidInputError("Outbound delta must be negative")
