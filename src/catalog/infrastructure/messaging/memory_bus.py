"""In-memory message bus for tests and local runs.

No external dependencies. Each topic is an append-only list; a
subscription remembers the offset it starts from. While ``run()`` is
active, ``send()`` dispatches synchronously to the handler in send
order, so a single process sees per-topic ordering.
"""

from __future__ import annotations

import logging
from collections import defaultdict

from catalog.application.message_bus import BusMessage, MessageBus, MessageHandler

logger = logging.getLogger(__name__)


class InMemoryMessageBus(MessageBus):

    def __init__(self, connected: bool = False) -> None:
        self._connected = connected
        self._topics: dict[str, list[BusMessage]] = defaultdict(list)
        self._sent: list[tuple[str, BusMessage]] = []
        self._offsets: dict[str, int] = {}
        self._handler: MessageHandler | None = None
        self._fail_with: Exception | None = None

    # --- Lifecycle ------------------------------------------------------------

    @property
    def is_connected(self) -> bool:
        return self._connected

    def connect(self) -> None:
        self._connected = True

    def disconnect(self) -> None:
        self.stop()
        self._connected = False

    # --- Publish / Subscribe --------------------------------------------------

    def send(
        self,
        topic: str,
        key: str,
        value: str,
        headers: dict[str, str] | None = None,
    ) -> None:
        if not self._connected:
            raise ConnectionError("InMemoryMessageBus not connected")
        if self._fail_with is not None:
            raise self._fail_with

        log = self._topics[topic]
        message = BusMessage(key=key, value=value, headers=dict(headers or {}),
                             offset=str(len(log)))
        log.append(message)
        self._sent.append((topic, message))

        if self._handler is not None and topic in self._offsets:
            self._drain(topic)

    def subscribe(self, topics: list[str], from_beginning: bool = False) -> None:
        for topic in topics:
            self._offsets[topic] = 0 if from_beginning else len(self._topics[topic])

    def run(self, on_message: MessageHandler) -> None:
        """Deliver the backlog, then keep dispatching on every ``send()``."""
        self._handler = on_message
        for topic in list(self._offsets):
            self._drain(topic)

    def stop(self) -> None:
        self._handler = None

    # --- Testing helpers ------------------------------------------------------

    def messages(self, topic: str | None = None) -> list[tuple[str, BusMessage]]:
        """Every message sent so far in send order, optionally filtered by topic."""
        return [(t, m) for t, m in self._sent if topic is None or t == topic]

    def fail_sends_with(self, exc: Exception | None) -> None:
        """Make every following ``send()`` raise *exc* (``None`` to reset)."""
        self._fail_with = exc

    # --- Internal helpers -----------------------------------------------------

    def _drain(self, topic: str) -> None:
        log = self._topics[topic]
        while self._handler is not None and self._offsets[topic] < len(log):
            message = log[self._offsets[topic]]
            self._offsets[topic] += 1
            try:
                self._handler(topic, 0, message)
            except Exception:
                logger.exception("Handler error on topic=%s offset=%s", topic, message.offset)
