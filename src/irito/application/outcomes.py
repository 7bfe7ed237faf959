"""Outcomes returned by the command executor.

Every execution ends in exactly one outcome. Failures are values, not
exceptions: ``Failed`` carries a typed reason that the boundary layer
maps to its own error reporting.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar

from irito.application.dto import (
    product_to_dict,
    suggestion_to_dict,
    transaction_to_dict,
)
from irito.domain.model.product import Product
from irito.domain.model.transaction import InventoryTransaction
from irito.domain.service.auto_order_policy import ReorderSuggestion


class FailureReason(Enum):
    PRODUCT_NOT_FOUND = "product_not_found"
    INSUFFICIENT_STOCK = "insufficient_stock"
    UNSUPPORTED_INTENT = "unsupported_intent"
    INVALID_INPUT = "invalid_input"


@dataclass(frozen=True)
class Outcome:
    result_type: ClassVar[str]

    message: str

    @property
    def succeeded(self) -> bool:
        return True

    def to_payload(self) -> dict:
        """The ``{type, message, ...payload}`` result shape."""
        return {"type": self.result_type, "message": self.message}


@dataclass(frozen=True)
class StockChecked(Outcome):
    result_type: ClassVar[str] = "stock_check"

    product: Product

    def to_payload(self) -> dict:
        payload = super().to_payload()
        payload["product"] = product_to_dict(self.product)
        return payload


@dataclass(frozen=True)
class Transacted(Outcome):
    result_type: ClassVar[str] = "transaction"

    transaction: InventoryTransaction
    product: Product

    def to_payload(self) -> dict:
        payload = super().to_payload()
        payload["transaction"] = transaction_to_dict(self.transaction)
        payload["product"] = product_to_dict(self.product)
        return payload


@dataclass(frozen=True)
class ProductsListed(Outcome):
    """Result of a read-only listing intent (low stock, area stock)."""

    result_type: ClassVar[str] = "product_list"

    kind: str
    products: list[Product]
    area: str | None = None

    def to_payload(self) -> dict:
        payload = super().to_payload()
        payload["kind"] = self.kind
        payload["products"] = [product_to_dict(p) for p in self.products]
        if self.area is not None:
            payload["area"] = self.area
        return payload


@dataclass(frozen=True)
class AutoOrderChecked(Outcome):
    result_type: ClassVar[str] = "auto_order"

    suggestions: list[ReorderSuggestion]

    def to_payload(self) -> dict:
        payload = super().to_payload()
        payload["suggestions"] = [suggestion_to_dict(s) for s in self.suggestions]
        return payload


@dataclass(frozen=True)
class Failed(Outcome):
    result_type: ClassVar[str] = "error"

    reason: FailureReason

    @property
    def succeeded(self) -> bool:
        return False

    def to_payload(self) -> dict:
        payload = super().to_payload()
        payload["reason"] = self.reason.value
        return payload
