"""Abstract store for products, the transaction ledger and the voice log.

Defined in the domain layer so the domain never depends on
infrastructure. The store is the sole owner of Product and
InventoryTransaction data: stock levels change only through
``mutate_stock``, which writes the matching ledger entry in the same
critical section. No public method appends a stock-affecting
transaction on its own.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Callable

from irito.domain.model.product import Product
from irito.domain.model.transaction import InventoryTransaction, TransactionType
from irito.domain.model.voice_command import VoiceCommand

CommitListener = Callable[[InventoryTransaction, Product], None]

DEFAULT_TRANSACTION_LIMIT = 50


class InventoryStore(ABC):

    # --- Products -------------------------------------------------------------

    @abstractmethod
    def get_by_code(self, code: str) -> Product | None:
        """Return a product by its business code, or None."""

    @abstractmethod
    def get_by_id(self, product_id: str) -> Product | None:
        """Return a product by its id, or None."""

    @abstractmethod
    def list_all(self) -> list[Product]:
        """Return every product in insertion order."""

    @abstractmethod
    def list_low_stock(self) -> list[Product]:
        """Return products whose current stock is at or below minimum."""

    @abstractmethod
    def list_by_location(self, area: str) -> list[Product]:
        """Return products stored in *area* (``A区域`` matches ``Aエリア``)."""

    @abstractmethod
    def list_locations(self) -> list[str]:
        """Return distinct location labels in first-seen order."""

    @abstractmethod
    def add_product(self, product: Product) -> None:
        """Register a new product. Codes must be unique."""

    # --- Stock mutation -------------------------------------------------------

    @abstractmethod
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
        """Atomically apply *delta* to a product and append the ledger entry.

        Raises ProductNotFoundError, InsufficientStockError (no mutation
        happens) or InvalidInputError for a zero delta or one whose sign
        contradicts *kind*.
        """

    @abstractmethod
    def subscribe(self, listener: CommitListener) -> None:
        """Call *listener* with every committed transaction."""

    # --- Ledger ---------------------------------------------------------------

    @abstractmethod
    def list_transactions(self, limit: int | None = None) -> list[InventoryTransaction]:
        """Return the most recent transactions first, at most *limit*."""

    # --- Voice command log ----------------------------------------------------

    @abstractmethod
    def record_voice_command(self, command: VoiceCommand) -> None:
        """Append a processed voice command to the log."""

    @abstractmethod
    def list_voice_commands(self, limit: int | None = None) -> list[VoiceCommand]:
        """Return the most recent voice commands first."""
