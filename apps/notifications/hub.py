"""
In-process publish/subscribe registry of connected notification clients.

Each subscription owns an asyncio queue bound to the event loop of the request
that opened it. Publishing is thread-safe: payloads are handed over with
`loop.call_soon_threadsafe`, so synchronous views (or their on-commit hooks)
can publish to async stream consumers.

Audience is decided per subscription at delivery time with
`can_access_vendor`, so a client only ever receives events of the vendor it is
allowed to see.
"""

import asyncio
import logging
import threading

from django.conf import settings

from apps.common.utils import can_access_vendor, is_admin

logger = logging.getLogger(__name__)

DEFAULT_QUEUE_SIZE = 100


class Subscription:
    def __init__(self, hub, user, loop: asyncio.AbstractEventLoop, maxsize: int = DEFAULT_QUEUE_SIZE):
        self.user = user
        self.queue: asyncio.Queue = asyncio.Queue(maxsize=maxsize)
        self._hub = hub
        self._loop = loop

    def accepts(self, vendor_id) -> bool:
        if not can_access_vendor(self.user, vendor_id):
            return False
        if is_admin(self.user) and not getattr(settings, "NOTIFICATIONS_ADMIN_BROADCAST", True):
            return False
        return True

    def offer(self, payload: dict) -> None:
        """Schedule `payload` onto this subscription's loop. Safe from any thread."""
        self._loop.call_soon_threadsafe(self._put, payload)

    def _put(self, payload: dict) -> None:
        try:
            self.queue.put_nowait(payload)
        except asyncio.QueueFull:
            logger.warning("Notification queue full for user %s, dropping event", getattr(self.user, "pk", None))

    async def get(self) -> dict:
        return await self.queue.get()

    def close(self) -> None:
        self._hub.unsubscribe(self)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()


class NotificationHub:
    def __init__(self):
        self._subscriptions: set[Subscription] = set()
        self._lock = threading.Lock()

    def subscribe(self, user, loop: asyncio.AbstractEventLoop | None = None, **kwargs) -> Subscription:
        subscription = Subscription(self, user, loop or asyncio.get_running_loop(), **kwargs)
        with self._lock:
            self._subscriptions.add(subscription)
        logger.debug("User %s subscribed to notifications", getattr(user, "pk", None))
        return subscription

    def unsubscribe(self, subscription: Subscription) -> None:
        with self._lock:
            self._subscriptions.discard(subscription)

    def audience(self, vendor_id) -> list[Subscription]:
        with self._lock:
            subscriptions = list(self._subscriptions)
        return [subscription for subscription in subscriptions if subscription.accepts(vendor_id)]

    def publish(self, vendor_id, payload: dict) -> int:
        """Deliver `payload` to every subscription allowed to see `vendor_id`; return how many got it."""
        delivered = 0
        for subscription in self.audience(vendor_id):
            try:
                subscription.offer(payload)
            except RuntimeError:
                # Loop already closed: the client went away without unsubscribing.
                self.unsubscribe(subscription)
                continue
            delivered += 1

        logger.info(
            "Published %s notification for vendor %s to %d client(s)", payload.get("type"), vendor_id, delivered
        )
        return delivered

    def __len__(self):
        with self._lock:
            return len(self._subscriptions)


hub = NotificationHub()
