"""Abstract message bus.

The application only needs a handful of operations from the broker:
connect, send a keyed message to a topic, subscribe to topics and run a
handler over inbound records. Adapters live in
``catalog.infrastructure.messaging``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass, field

PRODUCT_EVENTS_TOPIC = "catalog.product.events"
CATEGORY_EVENTS_TOPIC = "catalog.category.events"
DEFAULT_EVENTS_TOPIC = "catalog.events"


@dataclass(frozen=True)
class BusMessage:
    """One inbound record as handed to a message handler."""

    key: str | None
    value: str | None
    headers: dict[str, str] = field(default_factory=dict)
    offset: str = ""


MessageHandler = Callable[[str, int, BusMessage], None]
"""Called with ``(topic, partition, message)`` for every inbound record."""


class MessageBus(ABC):

    @property
    @abstractmethod
    def is_connected(self) -> bool:
        """True once ``connect()`` has succeeded and until ``disconnect()``."""

    @abstractmethod
    def connect(self) -> None:
        """Open the broker connection. Raises on failure."""

    @abstractmethod
    def disconnect(self) -> None:
        """Stop any running loop and close the connection."""

    @abstractmethod
    def send(
        self,
        topic: str,
        key: str,
        value: str,
        headers: dict[str, str] | None = None,
    ) -> None:
        """Append one message to *topic*. Raises on transport failure."""

    @abstractmethod
    def subscribe(self, topics: list[str], from_beginning: bool = False) -> None:
        """Register interest in *topics*.

        With ``from_beginning=False`` only messages sent after the
        subscription are delivered.
        """

    @abstractmethod
    def run(self, on_message: MessageHandler) -> None:
        """Deliver subscribed messages to *on_message* until ``stop()``."""

    @abstractmethod
    def stop(self) -> None:
        """Ask a running ``run()`` loop to return."""
