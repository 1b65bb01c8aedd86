"""Redis Streams message bus.

One stream per topic. Messages carry ``key``, ``value`` and JSON-encoded
``headers`` fields. Consumers read through a consumer group, so several
audit workers can share the load; a message is acknowledged after the
handler returns. Entries left unacknowledged by a crashed worker are
redelivered to the same consumer name when it starts again.

Redis Streams have no partitions: every message is reported as
partition 0 and ordering is per stream.
"""

from __future__ import annotations

import json
import logging

import redis
from redis.backoff import ExponentialBackoff
from redis.retry import Retry

from catalog.application.message_bus import BusMessage, MessageBus, MessageHandler

logger = logging.getLogger(__name__)


class RedisStreamsBus(MessageBus):

    def __init__(
        self,
        redis_url: str = "redis://localhost:6379/0",
        group: str = "audit-log-group",
        consumer_name: str = "audit-worker",
        client_name: str = "catalog-service",
        retries: int = 8,
        backoff_base: float = 0.1,
        backoff_cap: float = 30.0,
        max_stream_length: int = 10_000,
        block_ms: int = 1000,
        batch_size: int = 10,
    ) -> None:
        self._redis_url = redis_url
        self._group = group
        self._consumer_name = consumer_name
        self._client_name = client_name
        self._retry = Retry(ExponentialBackoff(cap=backoff_cap, base=backoff_base), retries)
        self._max_len = max_stream_length
        self._block_ms = block_ms
        self._batch_size = batch_size

        self._redis: redis.Redis | None = None
        self._streams: dict[str, str] = {}
        self._running = False

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    @property
    def is_connected(self) -> bool:
        return self._redis is not None

    def connect(self) -> None:
        client = redis.Redis.from_url(
            self._redis_url,
            decode_responses=True,
            client_name=self._client_name,
            retry=self._retry,
            retry_on_error=[redis.ConnectionError, redis.TimeoutError],
        )
        client.ping()
        self._redis = client
        logger.info("Connected to Redis at %s", self._redis_url)

    def disconnect(self) -> None:
        self.stop()
        if self._redis is not None:
            self._redis.close()
            self._redis = None
            logger.info("Disconnected from Redis")

    # ------------------------------------------------------------------
    # Publish / Subscribe
    # ------------------------------------------------------------------

    def send(
        self,
        topic: str,
        key: str,
        value: str,
        headers: dict[str, str] | None = None,
    ) -> None:
        client = self._client()

        fields = {
            "key": key,
            "value": value,
            "headers": json.dumps(headers or {}),
        }
        client.xadd(topic, fields, maxlen=self._max_len, approximate=True)


    def subscribe(self, topics: list[str], from_beginning: bool = False) -> None:
        self._client()

        # "$" = only entries added after the group is created
        start_id = "0" if from_beginning else "$"
        for topic in topics:
            self._ensure_group(topic, start_id)
            self._streams[topic] = ">"

    def run(self, on_message: MessageHandler) -> None:
        client = self._client()
        if not self._streams:
            raise RuntimeError("RedisStreamsBus.run() called without a subscription")

        self._running = True
        self._replay_pending(on_message)

        while self._running:
            entries = client.xreadgroup(
                groupname=self._group,
                consumername=self._consumer_name,
                streams=self._streams,
                count=self._batch_size,
                block=self._block_ms,
            )
            for topic, messages in entries or []:
                for msg_id, fields in messages:
                    self._deliver(on_message, topic, msg_id, fields)

    def stop(self) -> None:
        self._running = False

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _client(self) -> redis.Redis:
        if self._redis is None:
            raise RuntimeError("RedisStreamsBus not connected")
        return self._redis

    def _replay_pending(self, on_message: MessageHandler) -> None:
        """Redeliver entries this consumer read earlier but never acked.

        Reading from an explicit id returns the consumer's pending list
        instead of new entries. Each stream is paged until it comes back
        empty; only then does ``run()`` switch to ``">"``.
        """
        client = self._client()
        cursors = {topic: "0" for topic in self._streams}

        while self._running and cursors:
            entries = client.xreadgroup(
                groupname=self._group,
                consumername=self._consumer_name,
                streams=dict(cursors),
                count=self._batch_size,
            )
            returned = dict(entries or [])
            for topic in list(cursors):
                messages = returned.get(topic) or []
                if not messages:
                    del cursors[topic]
                    continue
                logger.info("Replaying %d pending message(s) on %s", len(messages), topic)
                for msg_id, fields in messages:
                    self._deliver(on_message, topic, msg_id, fields)
                    cursors[topic] = msg_id

    def _deliver(
        self,
        on_message: MessageHandler,
        topic: str,
        msg_id: str,
        fields: dict[str, str] | None,
    ) -> None:
        client = self._client()

        # Pending entries trimmed from the stream come back without fields
        if not fields:
            logger.warning("Pending entry %s on %s no longer in stream", msg_id, topic)
            client.xack(topic, self._group, msg_id)
            return

        try:
            headers = json.loads(fields.get("headers") or "{}")
        except ValueError:
            logger.warning("Malformed headers on %s msg=%s", topic, msg_id)
            headers = {}

        message = BusMessage(
            key=fields.get("key"),
            value=fields.get("value"),
            headers=headers,
            offset=str(msg_id),
        )
        try:
            on_message(topic, 0, message)
        except Exception:
            logger.exception("Handler error on %s msg=%s", topic, msg_id)
        finally:
            # Acked either way so one bad message cannot wedge the group
            client.xack(topic, self._group, msg_id)

    def _ensure_group(self, topic: str, start_id: str) -> None:
        """Create consumer group, ignoring BUSYGROUP if it already exists."""
        try:
            self._client().xgroup_create(topic, self._group, id=start_id, mkstream=True)
        except redis.ResponseError as e:
            if "BUSYGROUP" not in str(e):
                raise
