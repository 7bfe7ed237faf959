"""Concrete sinks for the update broadcaster."""

from __future__ import annotations

import json
import queue
from typing import TextIO

from irito.application.broadcaster import Sink, SinkBusyError, SinkClosedError


class StreamSink(Sink):
    """Writes each message as one JSON line to a text stream.

    The write is synchronous. Use it for streams that drain promptly, such
    as an interactive stderr; wrap slower readers in a QueueSink consumer.
    """

    def __init__(self, stream: TextIO) -> None:
        self._stream = stream

    @property
    def is_open(self) -> bool:
        return not self._stream.closed

    def send(self, message: dict) -> None:
        try:
            self._stream.write(json.dumps(message, ensure_ascii=False) + "\n")
            self._stream.flush()
        except (OSError, ValueError) as exc:
            raise SinkClosedError(str(exc)) from exc


class QueueSink(Sink):
    """Hands messages to an in-process consumer through a bounded queue.

    A full queue skips the message instead of blocking the publisher.
    """

    def __init__(self, maxsize: int = 100) -> None:
        self._queue: queue.Queue[dict] = queue.Queue(maxsize=maxsize)
        self._closed = False

    @property
    def is_open(self) -> bool:
        return not self._closed

    def close(self) -> None:
        self._closed = True

    def send(self, message: dict) -> None:
        if self._closed:
            raise SinkClosedError("queue sink is closed")
        try:
            self._queue.put_nowait(message)
        except queue.Full as exc:
            raise SinkBusyError("queue sink is full") from exc

    def get(self, timeout: float | None = None) -> dict:
        return self._queue.get(timeout=timeout)

    def drain(self) -> list[dict]:
        messages = []
        while True:
            try:
                messages.append(self._queue.get_nowait())
            except queue.Empty:
                return messages
