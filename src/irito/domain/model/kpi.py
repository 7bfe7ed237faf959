"""DailyKpi: running counters for a single calendar day."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class DailyKpi:
    """Counters for one local date (``YYYY-MM-DD``).

    All counters only grow during the day. A new date gets a fresh,
    zeroed record instead of a reset.
    """

    date: str
    total_inbound: int = 0
    total_outbound: int = 0
    low_stock_alerts: int = 0
    voice_commands_used: int = 0
