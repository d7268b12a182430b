"""Per-table change fan-out.

``RealtimeManager`` keeps one channel per table (``public:{table}``) with a set
of subscriber callbacks. Repositories publish a ``ChangeEvent`` after every
committed write, and the manager delivers it to a snapshot of that channel's
subscribers. A channel exists only while it has subscribers.

``stream()`` adapts a channel to an async iterator backed by a bounded queue,
which is what the Server-Sent Events endpoint consumes.
"""

from __future__ import annotations

import asyncio
import inspect
from datetime import datetime
from enum import Enum
from typing import Any, AsyncIterator, Awaitable, Callable, Dict, List, Optional, Set, Union

from pydantic import BaseModel, Field

from fleetdesk.core.database.base import utc_now
from fleetdesk.core.logging_config import get_logger
from fleetdesk.server.core.config import settings

logger = get_logger(__name__)


class ChangeType(str, Enum):
    INSERT = "INSERT"
    UPDATE = "UPDATE"
    DELETE = "DELETE"


class ChangeEvent(BaseModel):
    """A committed row change on one table."""

    event_type: ChangeType
    table: str
    new: Optional[Dict[str, Any]] = Field(default=None, description="Row after the change (INSERT/UPDATE)")
    old: Optional[Dict[str, Any]] = Field(default=None, description="Row before the change (DELETE)")
    commit_timestamp: datetime = Field(default_factory=utc_now)

    @property
    def channel(self) -> str:
        return RealtimeManager.channel_key(self.table)


Subscriber = Callable[[ChangeEvent], Union[None, Awaitable[None]]]


class RealtimeManager:
    """In-process publish/subscribe keyed by table name."""

    def __init__(self, queue_size: int = 100) -> None:
        self._subscribers: Dict[str, Set[Subscriber]] = {}
        self._queue_size = queue_size

    @staticmethod
    def channel_key(table: str) -> str:
        return f"public:{table}"

    @property
    def channels(self) -> List[str]:
        return sorted(self._subscribers)

    def subscriber_count(self, table: str) -> int:
        return len(self._subscribers.get(self.channel_key(table), ()))

    def subscribe(self, table: str, callback: Subscriber) -> Callable[[], None]:
        """Register ``callback`` for changes on ``table``.

        Args:
            table: Table name, e.g. "trips"
            callback: Sync or async callable receiving each ChangeEvent

        Returns:
            A callable that removes this subscription. Calling it twice is harmless.
        """
        key = self.channel_key(table)
        self._subscribers.setdefault(key, set()).add(callback)
        logger.debug(f"Subscribed to {key} ({len(self._subscribers[key])} subscribers)")
        return lambda: self._unsubscribe(table, callback)

    def _unsubscribe(self, table: str, callback: Subscriber) -> None:
        key = self.channel_key(table)
        callbacks = self._subscribers.get(key)
        if callbacks is None:
            return
        callbacks.discard(callback)
        if not callbacks:
            del self._subscribers[key]
            logger.debug(f"Channel {key} closed")

    async def publish(self, event: ChangeEvent) -> int:
        """Deliver ``event`` to every current subscriber of its table.

        Returns:
            Number of subscribers that received the event without raising.
        """
        callbacks = list(self._subscribers.get(event.channel, ()))
        delivered = 0
        for callback in callbacks:
            try:
                result = callback(event)
                if inspect.isawaitable(result):
                    await result
                delivered += 1
            except Exception as e:
                logger.warning(f"Realtime subscriber failed on {event.channel}: {e}", exc_info=True)
        return delivered

    async def stream(self, table: str) -> AsyncIterator[ChangeEvent]:
        """Yield changes on ``table`` until the consumer stops iterating."""
        queue: asyncio.Queue[ChangeEvent] = asyncio.Queue(maxsize=self._queue_size)

        def enqueue(event: ChangeEvent) -> None:
            try:
                queue.put_nowait(event)
            except asyncio.QueueFull:
                logger.warning(f"Realtime stream for {event.channel} is full; dropping {event.event_type.value} event")

        unsubscribe = self.subscribe(table, enqueue)
        try:
            while True:
                yield await queue.get()
        finally:
            unsubscribe()

    def cleanup(self) -> None:
        """Drop every channel and subscriber."""
        count = len(self._subscribers)
        self._subscribers.clear()
        logger.info(f"Realtime manager cleaned up {count} channels")


realtime_manager = RealtimeManager(queue_size=settings.realtime.queue_size)


def get_realtime_manager() -> RealtimeManager:
    return realtime_manager
