"""Application service: Command Executor.

Takes a parsed Intent, resolves the target product through the store,
applies the business rule for the action and returns an Outcome. Product
resolution is by code only; free-text product names that the parser
could not turn into a code simply fail as ``product_not_found``.

Typed domain errors from the store are converted to ``Failed`` outcomes
here, so callers never see an exception for an ordinary rejection.
"""

from __future__ import annotations

import logging
from dataclasses import replace

from irito.application.outcomes import (
    AutoOrderChecked,
    Failed,
    FailureReason,
    Outcome,
    ProductsListed,
    StockChecked,
    Transacted,
)
from irito.domain.exceptions import (
    InsufficientStockError,
    InvalidInputError,
    ProductNotFoundError,
)
from irito.domain.model.intent import (
    CheckAutoOrder,
    CheckStock,
    Intent,
    ShowAreaStock,
    ShowLowStock,
    StockMovement,
)
from irito.domain.model.transaction import TransactionType
from irito.domain.repository.inventory_store import InventoryStore
from irito.domain.service.auto_order_policy import AutoOrderPolicy

logger = logging.getLogger(__name__)

DEFAULT_VOICE_USER = "voice_user"

_ACTION_LABELS = {
    TransactionType.INBOUND: "入荷",
    TransactionType.OUTBOUND: "出荷",
}

MSG_PRODUCT_NOT_FOUND = "商品が見つかりません"
MSG_INSUFFICIENT_STOCK = "在庫が不足しています"
MSG_INVALID_QUANTITY = "数量は1以上で指定してください"
MSG_UNSUPPORTED = "音声コマンドを理解できませんでした。もう一度お試しください。"


class CommandExecutor:

    def __init__(
        self,
        store: InventoryStore,
        auto_order_policy: AutoOrderPolicy | None = None,
    ) -> None:
        self._store = store
        self._auto_order_policy = auto_order_policy or AutoOrderPolicy(store)

    def execute(
        self,
        intent: Intent,
        *,
        user_id: str = DEFAULT_VOICE_USER,
        voice: bool = False,
    ) -> Outcome:
        """Run *intent* against the store.

        Inbound/outbound commit exactly one ledger entry on success;
        every other intent is read-only.
        """
        if isinstance(intent, StockMovement):
            return self._move_stock(intent, user_id=user_id, voice=voice)
        if isinstance(intent, CheckStock):
            return self._check_stock(intent)
        if isinstance(intent, ShowLowStock):
            products = self._store.list_low_stock()
            return ProductsListed(
                message=f"安全在庫を下回った商品は{len(products)}件です",
                kind=intent.action.value,
                products=products,
            )
        if isinstance(intent, ShowAreaStock):
            products = self._store.list_by_location(intent.area)
            return ProductsListed(
                message=f"{intent.area}の商品は{len(products)}件です",
                kind=intent.action.value,
                products=products,
                area=intent.area,
            )
        if isinstance(intent, CheckAutoOrder):
            suggestions = self._auto_order_policy.suggestions()
            return AutoOrderChecked(
                message=f"自動発注の対象は{len(suggestions)}件です",
                suggestions=suggestions,
            )

        logger.info("No handler for intent %r", intent)
        return Failed(message=MSG_UNSUPPORTED, reason=FailureReason.UNSUPPORTED_INTENT)

    # --- Handlers -------------------------------------------------------------

    def _move_stock(self, intent: StockMovement, user_id: str, voice: bool) -> Outcome:
        product = self._store.get_by_code(intent.product_code)
        if product is None:
            return Failed(message=MSG_PRODUCT_NOT_FOUND, reason=FailureReason.PRODUCT_NOT_FOUND)

        label = _ACTION_LABELS[intent.transaction_type]
        try:
            transaction = self._store.mutate_stock(
                product.id,
                intent.delta,
                intent.transaction_type,
                user_id=user_id,
                note=f"音声コマンドによる{label}操作" if voice else None,
                is_voice_command=voice,
            )
        except ProductNotFoundError:
            return Failed(message=MSG_PRODUCT_NOT_FOUND, reason=FailureReason.PRODUCT_NOT_FOUND)
        except InsufficientStockError:
            current = self._store.get_by_id(product.id) or product
            return Failed(
                message=f"{current.name}の{MSG_INSUFFICIENT_STOCK}"
                f"(現在{current.current_stock}{current.unit})",
                reason=FailureReason.INSUFFICIENT_STOCK,
            )
        except InvalidInputError:
            return Failed(message=MSG_INVALID_QUANTITY, reason=FailureReason.INVALID_INPUT)

        updated = replace(
            product,
            current_stock=transaction.new_stock,
            last_updated=transaction.timestamp,
        )
        return Transacted(
            message=f"{product.name}の{label}を完了しました",
            transaction=transaction,
            product=updated,
        )

    def _check_stock(self, intent: CheckStock) -> Outcome:
        product = self._store.get_by_code(intent.product_code)
        if product is None:
            return Failed(message=MSG_PRODUCT_NOT_FOUND, reason=FailureReason.PRODUCT_NOT_FOUND)
        return StockChecked(
            message=f"{product.name}の現在在庫は{product.current_stock}{product.unit}です",
            product=product,
        )
