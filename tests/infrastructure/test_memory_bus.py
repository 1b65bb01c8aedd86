"""Tests for the in-memory message bus."""

import pytest

from catalog.application.message_bus import BusMessage
from catalog.infrastructure.messaging.memory_bus import InMemoryMessageBus


def _collect():
    received: list[tuple[str, str]] = []

    def handler(topic: str, partition: int, message: BusMessage) -> None:
        received.append((topic, message.value))

    return received, handler


class TestInMemoryMessageBus:

    def test_send_requires_connection(self):
        with pytest.raises(ConnectionError):
            InMemoryMessageBus().send("t", "k", "v")

    def test_delivers_in_send_order_while_running(self):
        bus = InMemoryMessageBus(connected=True)
        received, handler = _collect()
        bus.subscribe(["a", "b"])
        bus.run(handler)

        bus.send("a", "k1", "1")
        bus.send("b", "k2", "2")
        bus.send("a", "k1", "3")

        assert received == [("a", "1"), ("b", "2"), ("a", "3")]

    def test_from_beginning_replays_backlog(self):
        bus = InMemoryMessageBus(connected=True)
        bus.send("a", "k", "old")
        received, handler = _collect()

        bus.subscribe(["a"], from_beginning=True)
        bus.run(handler)

        assert received == [("a", "old")]

    def test_latest_skips_backlog(self):
        bus = InMemoryMessageBus(connected=True)
        bus.send("a", "k", "old")
        received, handler = _collect()

        bus.subscribe(["a"])
        bus.run(handler)
        bus.send("a", "k", "new")

        assert received == [("a", "new")]

    def test_unsubscribed_topics_are_not_delivered(self):
        bus = InMemoryMessageBus(connected=True)
        received, handler = _collect()
        bus.subscribe(["a"])
        bus.run(handler)

        bus.send("b", "k", "x")

        assert received == []
        assert [t for t, _ in bus.messages()] == ["b"]

    def test_handler_error_does_not_stop_delivery(self):
        bus = InMemoryMessageBus(connected=True)
        seen = []

        def handler(topic, partition, message):
            seen.append(message.value)
            if message.value == "bad":
                raise ValueError("boom")

        bus.subscribe(["a"])
        bus.run(handler)
        bus.send("a", "k", "bad")
        bus.send("a", "k", "good")

        assert seen == ["bad", "good"]

    def test_stop_pauses_delivery_until_next_run(self):
        bus = InMemoryMessageBus(connected=True)
        received, handler = _collect()
        bus.subscribe(["a"])
        bus.run(handler)
        bus.stop()

        bus.send("a", "k", "queued")
        assert received == []

        bus.run(handler)
        assert received == [("a", "queued")]

    def test_messages_keep_headers_and_offsets(self):
        bus = InMemoryMessageBus(connected=True)
        bus.send("a", "k", "v", headers={"event-type": "X"})
        bus.send("a", "k", "w")

        [(_, first), (_, second)] = bus.messages("a")
        assert first.headers == {"event-type": "X"}
        assert (first.offset, second.offset) == ("0", "1")

    def test_disconnect(self):
        bus = InMemoryMessageBus(connected=True)
        bus.disconnect()
        assert not bus.is_connected
