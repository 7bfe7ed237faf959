"""VoiceCommand: log entry for one processed transcript."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from irito.domain.model.product import utcnow


@dataclass(frozen=True)
class VoiceCommand:
    id: str
    transcript: str
    interpretation: dict
    successful: bool
    user_id: str
    confidence: float | None = None
    timestamp: datetime = field(default_factory=utcnow)
