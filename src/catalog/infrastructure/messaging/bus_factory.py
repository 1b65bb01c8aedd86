"""Message bus factory.

Creates the appropriate bus implementation based on settings.
"""

from __future__ import annotations

from catalog.application.message_bus import MessageBus
from catalog.infrastructure.config import Settings

from .memory_bus import InMemoryMessageBus
from .redis_streams_bus import RedisStreamsBus


def create_message_bus(settings: Settings) -> MessageBus:
    """Create a message bus for the configured backend.

    - memory: InMemoryMessageBus (no external deps, single process)
    - redis: RedisStreamsBus (persistent, shared between processes)
    """
    if settings.bus_backend == "memory":
        return InMemoryMessageBus()
    return RedisStreamsBus(
        redis_url=settings.redis_url,
        group=settings.consumer_group,
        consumer_name=settings.consumer_name,
        client_name=settings.client_id,
        retries=settings.bus_retries,
        backoff_base=settings.bus_backoff_base,
        backoff_cap=settings.bus_backoff_cap,
        max_stream_length=settings.bus_max_stream_length,
        block_ms=settings.bus_block_ms,
        batch_size=settings.bus_batch_size,
    )
