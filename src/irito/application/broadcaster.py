"""Update Broadcaster: best-effort fan-out to live observers.

Observers are opaque sinks. Publishing walks the registered sinks under a
single lock, so every sink sees events in publish order. Delivery is
fire-and-forget: nothing is buffered per sink, nothing is replayed to a
sink registered later, and a sink that reports itself closed or fails
with an unexpected error is dropped. Sink errors never reach the caller.

Sinks are called with the lock held, so a sink that blocks stalls every
publisher. Slow consumers belong behind a bounded QueueSink.
"""

from __future__ import annotations

import logging
import threading
from abc import ABC, abstractmethod
from datetime import datetime, timezone

logger = logging.getLogger(__name__)

INVENTORY_UPDATE = "inventory_update"
VOICE_COMMAND = "voice_command"


class SinkClosedError(Exception):
    """Raised by a sink whose underlying connection is gone."""


class SinkBusyError(Exception):
    """Raised by a sink that cannot take a message right now."""


class Sink(ABC):

    @property
    def is_open(self) -> bool:
        return True

    @abstractmethod
    def send(self, message: dict) -> None:
        """Deliver *message* without blocking.

        Runs under the broadcaster lock and must return promptly. Raise
        SinkClosedError when the sink is gone for good, or
        SinkBusyError to skip just this message.
        """


class UpdateBroadcaster:

    def __init__(self) -> None:
        self._sinks: list[Sink] = []
        self._lock = threading.Lock()

    def register(self, sink: Sink) -> None:
        with self._lock:
            if sink not in self._sinks:
                self._sinks.append(sink)

    def unregister(self, sink: Sink) -> None:
        with self._lock:
            if sink in self._sinks:
                self._sinks.remove(sink)

    @property
    def sink_count(self) -> int:
        with self._lock:
            return len(self._sinks)

    def publish(self, event_type: str, data: dict) -> dict:
        """Send ``{type, data, timestamp}`` to every open sink.

        Returns the message that was published.
        """
        message = {
            "type": event_type,
            "data": data,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }
        with self._lock:
            for sink in list(self._sinks):
                if not sink.is_open:
                    self._sinks.remove(sink)
                    logger.debug("Dropped closed sink %r", sink)
                    continue
                try:
                    sink.send(message)
                except SinkClosedError:
                    self._sinks.remove(sink)
                    logger.debug("Dropped sink %r after failed delivery", sink)
                except SinkBusyError:
                    logger.debug("Skipped %s for busy sink %r", event_type, sink)
                except Exception:
                    self._sinks.remove(sink)
                    logger.exception("Dropped sink %r after unexpected error", sink)
        return message
