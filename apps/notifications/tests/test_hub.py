"""Tests for the in-process notification hub."""

import asyncio
from types import SimpleNamespace

import pytest

from apps.common.constants import UserRole
from apps.notifications.hub import NotificationHub


def _identity(pk, role, vendor_id=None):
    return SimpleNamespace(pk=pk, id=pk, role=role, vendor_id=vendor_id, is_authenticated=True)


VENDOR_7 = _identity(7, UserRole.VENDOR)
STAFF_OF_7 = _identity(20, UserRole.STAFF, vendor_id=7)
VENDOR_8 = _identity(8, UserRole.VENDOR)
STAFF_OF_8 = _identity(21, UserRole.STAFF, vendor_id=8)
ADMIN = _identity(1, UserRole.ADMIN)


class TestAudience:
    async def test_event_reaches_vendor_staff_and_admin_only(self):
        hub = NotificationHub()
        subscriptions = {
            name: hub.subscribe(identity)
            for name, identity in {
                "vendor_7": VENDOR_7,
                "staff_of_7": STAFF_OF_7,
                "vendor_8": VENDOR_8,
                "staff_of_8": STAFF_OF_8,
                "admin": ADMIN,
            }.items()
        }

        delivered = hub.publish(7, {"id": 1, "type": "new_order"})
        await asyncio.sleep(0)

        assert delivered == 3
        received = {name: subscription.queue.qsize() for name, subscription in subscriptions.items()}
        assert received == {"vendor_7": 1, "staff_of_7": 1, "vendor_8": 0, "staff_of_8": 0, "admin": 1}
        assert await subscriptions["staff_of_7"].get() == {"id": 1, "type": "new_order"}

    async def test_admin_broadcast_can_be_disabled(self, settings):
        settings.NOTIFICATIONS_ADMIN_BROADCAST = False
        hub = NotificationHub()
        admin = hub.subscribe(ADMIN)
        vendor = hub.subscribe(VENDOR_7)

        assert hub.publish(7, {"id": 2, "type": "payment"}) == 1
        await asyncio.sleep(0)

        assert admin.queue.empty()
        assert vendor.queue.qsize() == 1

    async def test_unsubscribe_on_exit(self):
        hub = NotificationHub()

        with hub.subscribe(VENDOR_7):
            assert len(hub) == 1
        assert len(hub) == 0
        assert hub.publish(7, {"id": 3, "type": "payment"}) == 0

    async def test_full_queue_drops_events(self):
        hub = NotificationHub()
        subscription = hub.subscribe(VENDOR_7, maxsize=1)

        hub.publish(7, {"id": 1, "type": "new_order"})
        hub.publish(7, {"id": 2, "type": "new_order"})
        await asyncio.sleep(0)

        assert subscription.queue.qsize() == 1
        assert (await subscription.get())["id"] == 1

    async def test_events_keep_publish_order(self):
        hub = NotificationHub()
        subscription = hub.subscribe(STAFF_OF_7)

        for event_id in range(5):
            hub.publish(7, {"id": event_id, "type": "order_status"})

        received = [(await asyncio.wait_for(subscription.get(), timeout=1))["id"] for _ in range(5)]
        assert received == [0, 1, 2, 3, 4]


class TestClosedLoops:
    def test_subscription_on_closed_loop_is_pruned(self):
        hub = NotificationHub()
        loop = asyncio.new_event_loop()
        hub.subscribe(VENDOR_7, loop=loop)
        loop.close()

        assert hub.publish(7, {"id": 1, "type": "new_order"}) == 0
        assert len(hub) == 0

    def test_anonymous_subscription_never_receives(self):
        hub = NotificationHub()
        loop = asyncio.new_event_loop()
        try:
            anonymous = SimpleNamespace(pk=None, is_authenticated=False)
            hub.subscribe(anonymous, loop=loop)

            assert hub.publish(7, {"id": 1, "type": "new_order"}) == 0
        finally:
            loop.close()


@pytest.fixture(autouse=True)
def _broadcast_default(settings):
    settings.NOTIFICATIONS_ADMIN_BROADCAST = True
