"""JSON-file-backed snapshot of the in-memory inventory state.

The store serves requests from memory. This snapshot loads it at startup
and flushes it back afterwards, one file per record kind:
``products.json``, ``transactions.json``, ``voice_commands.json`` and
``kpis.json``.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime
from pathlib import Path

from irito.domain.model.kpi import DailyKpi
from irito.domain.model.product import Product
from irito.domain.model.transaction import InventoryTransaction, TransactionType
from irito.domain.model.voice_command import VoiceCommand
from irito.domain.service.kpi_aggregator import KpiAggregator
from irito.infrastructure.persistence.in_memory_inventory_store import (
    InMemoryInventoryStore,
)

logger = logging.getLogger(__name__)


class JsonInventorySnapshot:

    def __init__(self, data_dir: Path) -> None:
        self._data_dir = data_dir
        self._products_path = data_dir / "products.json"
        self._transactions_path = data_dir / "transactions.json"
        self._voice_commands_path = data_dir / "voice_commands.json"
        self._kpis_path = data_dir / "kpis.json"

    def exists(self) -> bool:
        return self._products_path.exists()

    # --- Lifecycle ------------------------------------------------------------

    def load(self, store: InMemoryInventoryStore, kpis: KpiAggregator) -> None:
        """Replace the state of *store* and *kpis* with the files' content."""
        products = [self._product_to_domain(r) for r in self._load_raw(self._products_path)]
        transactions = [
            self._transaction_to_domain(r) for r in self._load_raw(self._transactions_path)
        ]
        voice_commands = [
            self._voice_command_to_domain(r)
            for r in self._load_raw(self._voice_commands_path)
        ]
        store.restore(products, transactions, voice_commands)
        kpis.restore([self._kpi_to_domain(r) for r in self._load_raw(self._kpis_path)])
        logger.debug(
            "Loaded %d products and %d transactions from %s",
            len(products), len(transactions), self._data_dir,
        )

    def flush(self, store: InMemoryInventoryStore, kpis: KpiAggregator) -> None:
        self._data_dir.mkdir(parents=True, exist_ok=True)
        self._persist_raw(
            self._products_path, [self._product_to_raw(p) for p in store.list_all()]
        )
        self._persist_raw(
            self._transactions_path,
            [self._transaction_to_raw(t) for t in store.export_transactions()],
        )
        self._persist_raw(
            self._voice_commands_path,
            [self._voice_command_to_raw(c) for c in store.export_voice_commands()],
        )
        self._persist_raw(self._kpis_path, [self._kpi_to_raw(k) for k in kpis.history()])

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _product_to_raw(product: Product) -> dict:
        return {
            "id": product.id,
            "code": product.code,
            "name": product.name,
            "category": product.category,
            "current_stock": product.current_stock,
            "min_stock": product.min_stock,
            "max_stock": product.max_stock,
            "unit": product.unit,
            "location": product.location,
            "last_updated": product.last_updated.isoformat(),
        }

    @staticmethod
    def _product_to_domain(raw: dict) -> Product:
        return Product(
            id=raw["id"],
            code=raw["code"],
            name=raw["name"],
            category=raw["category"],
            current_stock=raw["current_stock"],
            min_stock=raw.get("min_stock", 0),
            max_stock=raw.get("max_stock", 1000),
            unit=raw.get("unit", "個"),
            location=raw.get("location", ""),
            last_updated=datetime.fromisoformat(raw["last_updated"]),
        )

    @staticmethod
    def _transaction_to_raw(transaction: InventoryTransaction) -> dict:
        return {
            "id": transaction.id,
            "sequence": transaction.sequence,
            "product_id": transaction.product_id,
            "type": transaction.type.value,
            "quantity": transaction.quantity,
            "previous_stock": transaction.previous_stock,
            "new_stock": transaction.new_stock,
            "order_id": transaction.order_id,
            "user_id": transaction.user_id,
            "note": transaction.note,
            "is_voice_command": transaction.is_voice_command,
            "timestamp": transaction.timestamp.isoformat(),
        }

    @staticmethod
    def _transaction_to_domain(raw: dict) -> InventoryTransaction:
        return InventoryTransaction(
            id=raw["id"],
            sequence=raw["sequence"],
            product_id=raw["product_id"],
            type=TransactionType(raw["type"]),
            quantity=raw["quantity"],
            previous_stock=raw["previous_stock"],
            new_stock=raw["new_stock"],
            order_id=raw.get("order_id"),
            user_id=raw["user_id"],
            note=raw.get("note"),
            is_voice_command=raw.get("is_voice_command", False),
            timestamp=datetime.fromisoformat(raw["timestamp"]),
        )

    @staticmethod
    def _voice_command_to_raw(command: VoiceCommand) -> dict:
        return {
            "id": command.id,
            "transcript": command.transcript,
            "interpretation": command.interpretation,
            "successful": command.successful,
            "user_id": command.user_id,
            "confidence": command.confidence,
            "timestamp": command.timestamp.isoformat(),
        }

    @staticmethod
    def _voice_command_to_domain(raw: dict) -> VoiceCommand:
        return VoiceCommand(
            id=raw["id"],
            transcript=raw["transcript"],
            interpretation=raw.get("interpretation") or {},
            successful=raw.get("successful", False),
            user_id=raw["user_id"],
            confidence=raw.get("confidence"),
            timestamp=datetime.fromisoformat(raw["timestamp"]),
        )

    @staticmethod
    def _kpi_to_raw(kpi: DailyKpi) -> dict:
        return {
            "date": kpi.date,
            "total_inbound": kpi.total_inbound,
            "total_outbound": kpi.total_outbound,
            "low_stock_alerts": kpi.low_stock_alerts,
            "voice_commands_used": kpi.voice_commands_used,
        }

    @staticmethod
    def _kpi_to_domain(raw: dict) -> DailyKpi:
        return DailyKpi(
            date=raw["date"],
            total_inbound=raw.get("total_inbound", 0),
            total_outbound=raw.get("total_outbound", 0),
            low_stock_alerts=raw.get("low_stock_alerts", 0),
            voice_commands_used=raw.get("voice_commands_used", 0),
        )

    # --- File helpers ---------------------------------------------------------

    @staticmethod
    def _load_raw(path: Path) -> list[dict]:
        if not path.exists():
            return []
        return json.loads(path.read_text(encoding="utf-8"))

    @staticmethod
    def _persist_raw(path: Path, records: list[dict]) -> None:
        path.write_text(
            json.dumps(records, indent=2, ensure_ascii=False) + "\n", encoding="utf-8"
        )
