"""Intents: typed interpretations of a voice transcript.

Intents are produced fresh by the command parser for every transcript.
They carry no identity and are never persisted; the executor dispatches
on their concrete type.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar

from irito.domain.model.transaction import TransactionType


class IntentAction(Enum):
    INBOUND = "inbound"
    OUTBOUND = "outbound"
    CHECK_STOCK = "check_stock"
    SHOW_LOW_STOCK = "show_low_stock"
    SHOW_AREA_STOCK = "show_area_stock"
    CHECK_AUTO_ORDER = "check_auto_order"
    UNRECOGNIZED = "unrecognized"


@dataclass(frozen=True)
class Intent:
    action: ClassVar[IntentAction]

    @property
    def recognized(self) -> bool:
        return self.action != IntentAction.UNRECOGNIZED

    def parameters(self) -> dict:
        return {}


@dataclass(frozen=True)
class StockMovement(Intent):
    """Common shape of the inbound and outbound intents."""

    product_code: str
    quantity: int

    transaction_type: ClassVar[TransactionType]

    @property
    def delta(self) -> int:
        if self.transaction_type == TransactionType.OUTBOUND:
            return -self.quantity
        return self.quantity

    def parameters(self) -> dict:
        return {"productCode": self.product_code, "quantity": self.quantity}


@dataclass(frozen=True)
class Inbound(StockMovement):
    action: ClassVar[IntentAction] = IntentAction.INBOUND
    transaction_type: ClassVar[TransactionType] = TransactionType.INBOUND


@dataclass(frozen=True)
class Outbound(StockMovement):
    action: ClassVar[IntentAction] = IntentAction.OUTBOUND
    transaction_type: ClassVar[TransactionType] = TransactionType.OUTBOUND


@dataclass(frozen=True)
class CheckStock(Intent):
    action: ClassVar[IntentAction] = IntentAction.CHECK_STOCK

    product_code: str

    def parameters(self) -> dict:
        return {"productCode": self.product_code}


@dataclass(frozen=True)
class ShowLowStock(Intent):
    action: ClassVar[IntentAction] = IntentAction.SHOW_LOW_STOCK


@dataclass(frozen=True)
class ShowAreaStock(Intent):
    action: ClassVar[IntentAction] = IntentAction.SHOW_AREA_STOCK

    area: str

    def parameters(self) -> dict:
        return {"area": self.area}


@dataclass(frozen=True)
class CheckAutoOrder(Intent):
    action: ClassVar[IntentAction] = IntentAction.CHECK_AUTO_ORDER


@dataclass(frozen=True)
class Unrecognized(Intent):
    action: ClassVar[IntentAction] = IntentAction.UNRECOGNIZED

    raw_text: str
