"""Application service: Submit Voice Command use case.

Orchestrates one transcript end to end:

1. Parse the transcript into an Intent (pure).
2. Log the voice command and count it in today's KPIs. Every processed
   command counts, whether or not it was understood or succeeded.
3. Execute recognized intents through the CommandExecutor.
4. Publish ``inventory_update`` for a committed movement and
   ``voice_command`` for every recognized command.
"""

from __future__ import annotations

import logging
import uuid

from irito.application.broadcaster import (
    INVENTORY_UPDATE,
    VOICE_COMMAND,
    UpdateBroadcaster,
)
from irito.application.dto import VoiceCommandResponse, inventory_update_data
from irito.application.execute_command import MSG_UNSUPPORTED, CommandExecutor
from irito.application.outcomes import Transacted
from irito.domain.exceptions import InvalidInputError
from irito.domain.model.intent import (
    CheckAutoOrder,
    CheckStock,
    Inbound,
    Intent,
    Outbound,
    ShowAreaStock,
    ShowLowStock,
)
from irito.domain.model.voice_command import VoiceCommand
from irito.domain.repository.inventory_store import InventoryStore
from irito.domain.service.command_parser import CommandParser
from irito.domain.service.kpi_aggregator import KpiAggregator

logger = logging.getLogger(__name__)


def interpret(intent: Intent) -> dict:
    """Describe *intent* as the ``{success, action?, message}`` mapping."""
    if not intent.recognized:
        return {"success": False, "message": MSG_UNSUPPORTED}

    if isinstance(intent, Inbound):
        message = f"商品{intent.product_code}を{intent.quantity}個入荷登録します"
    elif isinstance(intent, Outbound):
        message = f"商品{intent.product_code}を{intent.quantity}個出荷登録します"
    elif isinstance(intent, CheckStock):
        message = f"商品{intent.product_code}の在庫を確認します"
    elif isinstance(intent, ShowLowStock):
        message = "安全在庫を下回った商品を表示します"
    elif isinstance(intent, ShowAreaStock):
        message = f"{intent.area}の在庫状況を表示します"
    elif isinstance(intent, CheckAutoOrder):
        message = "自動発注状況を確認します"
    else:
        message = intent.action.value

    action = {"type": intent.action.value}
    action.update(intent.parameters())
    return {"success": True, "action": action, "message": message}


class SubmitVoiceCommandHandler:

    def __init__(
        self,
        store: InventoryStore,
        parser: CommandParser,
        executor: CommandExecutor,
        kpis: KpiAggregator,
        broadcaster: UpdateBroadcaster,
    ) -> None:
        self._store = store
        self._parser = parser
        self._executor = executor
        self._kpis = kpis
        self._broadcaster = broadcaster

    def handle(
        self,
        transcript: str,
        user_id: str,
        confidence: float | None = None,
    ) -> VoiceCommandResponse:
        if not transcript or not transcript.strip():
            raise InvalidInputError("Transcript is required")
        if not user_id or not user_id.strip():
            raise InvalidInputError("User ID is required")
        if confidence is not None and not 0.0 <= confidence <= 1.0:
            raise InvalidInputError(
                f"Confidence must be between 0 and 1, got {confidence}"
            )

        intent = self._parser.parse(transcript)
        interpretation = interpret(intent)

        command = VoiceCommand(
            id=str(uuid.uuid4()),
            transcript=transcript,
            interpretation=interpretation,
            successful=intent.recognized,
            user_id=user_id,
            confidence=confidence,
        )
        self._store.record_voice_command(command)
        self._kpis.on_voice_command_processed()

        if not intent.recognized:
            logger.info("Could not interpret transcript %r", transcript)
            return VoiceCommandResponse(
                voice_command=command, interpretation=interpretation
            )

        outcome = self._executor.execute(intent, user_id=user_id, voice=True)
        result = outcome.to_payload()
        if not outcome.succeeded:
            logger.info("Voice command %r failed: %s", transcript, result["reason"])

        if isinstance(outcome, Transacted):
            self._broadcaster.publish(
                INVENTORY_UPDATE, inventory_update_data(outcome.transaction)
            )
        self._broadcaster.publish(
            VOICE_COMMAND,
            {
                "transcript": transcript,
                "interpretation": interpretation,
                "result": result,
            },
        )
        return VoiceCommandResponse(
            voice_command=command, interpretation=interpretation, result=result
        )
