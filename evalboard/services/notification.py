"""Live update hub for teacher and evaluation changes.

Events fan out to every open subscription and are kept in a capped,
de-duplicated history. The history lives in a Redis list when Redis is
configured and in process memory otherwise.
"""

import asyncio
import logging
from collections import deque
from typing import Deque, List, Optional, Set
from uuid import uuid4

from evalboard.core.config import settings
from evalboard.core.redis import redis_get_list, redis_push_capped, redis_replace_list
from evalboard.models.enums import NotificationKind
from evalboard.schemas.notification import NotificationEvent, NotificationListResponse

logger = logging.getLogger(__name__)

_CLOSED = object()


class Subscription:
    """Async iterator over events published after it was opened."""

    def __init__(self, hub: "NotificationHub", limit: int):
        self._hub = hub
        self._limit = limit
        self._queue: asyncio.Queue = asyncio.Queue()
        self.closed = False

    def _deliver(self, event: NotificationEvent) -> None:
        if self.closed:
            return
        # A slow reader only keeps the newest `limit` events
        while self._queue.qsize() >= self._limit:
            self._queue.get_nowait()
        self._queue.put_nowait(event)

    def close(self) -> None:
        if self.closed:
            return
        self.closed = True
        self._hub._subscriptions.discard(self)
        self._queue.put_nowait(_CLOSED)

    def __aiter__(self) -> "Subscription":
        return self

    async def __anext__(self) -> NotificationEvent:
        if self.closed and self._queue.empty():
            raise StopAsyncIteration
        item = await self._queue.get()
        if item is _CLOSED:
            raise StopAsyncIteration
        return item


class NotificationHub:
    """Process-wide publisher of change notifications."""

    def __init__(self, limit: Optional[int] = None, redis_key: Optional[str] = None):
        self.limit = limit or settings.NOTIFICATION_HISTORY_LIMIT
        self.redis_key = redis_key or settings.NOTIFICATION_REDIS_KEY
        self._history: Deque[NotificationEvent] = deque(maxlen=self.limit)
        self._subscriptions: Set[Subscription] = set()

    def subscribe(self) -> Subscription:
        subscription = Subscription(self, self.limit)
        self._subscriptions.add(subscription)
        return subscription

    @property
    def subscriber_count(self) -> int:
        return len(self._subscriptions)

    async def history(self) -> List[NotificationEvent]:
        """Stored events, newest first."""
        stored = await redis_get_list(self.redis_key)
        if stored is None:
            return list(self._history)
        return [NotificationEvent.model_validate(item) for item in stored]

    async def publish(
        self,
        kind: NotificationKind,
        message: str,
        teacher_id: Optional[int] = None,
        evaluation_id: Optional[int] = None,
        event_id: Optional[str] = None,
    ) -> Optional[NotificationEvent]:
        """Record and fan out one event. Returns None for a duplicate id."""
        event = NotificationEvent(
            id=event_id or uuid4().hex,
            kind=kind,
            message=message,
            teacher_id=teacher_id,
            evaluation_id=evaluation_id,
        )

        if any(existing.id == event.id for existing in await self.history()):
            logger.debug(f"Dropping duplicate notification {event.id}")
            return None

        self._history.appendleft(event)
        await redis_push_capped(self.redis_key, event.model_dump(mode="json"), self.limit)

        for subscription in list(self._subscriptions):
            subscription._deliver(event)

        logger.info(f"Notification {kind.value}: {message}")
        return event

    async def get_notifications(self) -> NotificationListResponse:
        items = await self.history()
        return NotificationListResponse(
            items=items,
            unread_count=sum(1 for item in items if not item.read),
        )

    async def mark_all_read(self) -> int:
        """Mark every stored event as read; returns how many changed."""
        items = await self.history()
        changed = sum(1 for item in items if not item.read)

        for item in self._history:
            item.read = True
        updated = [item.model_copy(update={"read": True}) for item in items]
        await redis_replace_list(self.redis_key, [item.model_dump(mode="json") for item in updated])
        return changed

    async def clear(self) -> None:
        """Forget the stored history."""
        self._history.clear()
        await redis_replace_list(self.redis_key, [])

    def close_all(self) -> None:
        """Close every open subscription, e.g. at shutdown."""
        for subscription in list(self._subscriptions):
            subscription.close()


notification_hub = NotificationHub()


def get_notification_hub() -> NotificationHub:
    """Notification hub dependency."""
    return notification_hub
