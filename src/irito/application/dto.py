"""Data Transfer Objects: plain containers that cross layer boundaries.

DTOs carry data between the CLI / event feed and the application layer
without exposing domain internals. The ``*_to_dict`` helpers produce the
camelCase wire shape the dashboard consumes.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from irito.domain.model.kpi import DailyKpi
from irito.domain.model.product import Product
from irito.domain.model.transaction import InventoryTransaction
from irito.domain.model.voice_command import VoiceCommand
from irito.domain.service.auto_order_policy import ReorderSuggestion


def product_to_dict(product: Product) -> dict:
    return {
        "id": product.id,
        "code": product.code,
        "name": product.name,
        "category": product.category,
        "currentStock": product.current_stock,
        "minStock": product.min_stock,
        "maxStock": product.max_stock,
        "unit": product.unit,
        "location": product.location,
        "lastUpdated": product.last_updated.isoformat(),
    }


def transaction_to_dict(transaction: InventoryTransaction) -> dict:
    return {
        "id": transaction.id,
        "productId": transaction.product_id,
        "type": transaction.type.value,
        "quantity": transaction.quantity,
        "previousStock": transaction.previous_stock,
        "newStock": transaction.new_stock,
        "orderId": transaction.order_id,
        "userId": transaction.user_id,
        "note": transaction.note,
        "isVoiceCommand": transaction.is_voice_command,
        "timestamp": transaction.timestamp.isoformat(),
    }


def kpi_to_dict(kpi: DailyKpi) -> dict:
    return {
        "date": kpi.date,
        "totalInbound": kpi.total_inbound,
        "totalOutbound": kpi.total_outbound,
        "lowStockAlerts": kpi.low_stock_alerts,
        "voiceCommandsUsed": kpi.voice_commands_used,
    }


def suggestion_to_dict(suggestion: ReorderSuggestion) -> dict:
    return {
        "productId": suggestion.product_id,
        "productCode": suggestion.product_code,
        "productName": suggestion.product_name,
        "currentStock": suggestion.current_stock,
        "minStock": suggestion.min_stock,
        "suggestedQuantity": suggestion.suggested_quantity,
        "unit": suggestion.unit,
    }


def voice_command_to_dict(command: VoiceCommand) -> dict:
    return {
        "id": command.id,
        "transcript": command.transcript,
        "interpretation": command.interpretation,
        "successful": command.successful,
        "userId": command.user_id,
        "confidence": command.confidence,
        "timestamp": command.timestamp.isoformat(),
    }


@dataclass(frozen=True)
class VoiceCommandResponse:
    """Output of a processed transcript.

    ``interpretation`` is ``{success, action?, message}``; ``result`` is
    ``{type, message, ...payload}`` or None when nothing was executed.
    """

    voice_command: VoiceCommand
    interpretation: dict
    result: dict | None = None

    def to_dict(self) -> dict:
        return {
            "voiceCommand": voice_command_to_dict(self.voice_command),
            "interpretation": self.interpretation,
            "result": self.result,
        }


@dataclass(frozen=True)
class InventoryLineDTO:
    """A single product row as displayed to the user."""

    code: str
    name: str
    location: str
    current: int
    minimum: int
    maximum: int
    unit: str
    low_stock: bool


@dataclass(frozen=True)
class DashboardDTO:
    """Everything the dashboard page renders in one read."""

    products: list[Product]
    kpis: DailyKpi
    low_stock_products: list[Product]
    recent_transactions: list[InventoryTransaction]
    locations: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "products": [product_to_dict(p) for p in self.products],
            "kpis": kpi_to_dict(self.kpis),
            "lowStockProducts": [product_to_dict(p) for p in self.low_stock_products],
            "recentTransactions": [
                transaction_to_dict(t) for t in self.recent_transactions
            ],
            "locations": list(self.locations),
        }


def inventory_update_data(transaction: InventoryTransaction) -> dict:
    """Payload of an ``inventory_update`` event."""
    return {
        "productId": transaction.product_id,
        "newStock": transaction.new_stock,
        "transaction": transaction_to_dict(transaction),
    }
