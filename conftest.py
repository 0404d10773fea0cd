"""
Pytest configuration shared by all app tests.
"""

from unittest.mock import MagicMock, patch

import pytest
from rest_framework.test import APIClient

from apps.users.tests.factories import AdminFactory, StaffFactory, VendorFactory


@pytest.fixture
def api_client() -> APIClient:
    """Anonymous DRF client."""
    return APIClient()


@pytest.fixture
def client_for():
    """Build a DRF client authenticated as the given user."""

    def _client_for(user) -> APIClient:
        client = APIClient()
        client.force_authenticate(user=user)
        return client

    return _client_for


@pytest.fixture
def vendor(db):
    return VendorFactory(restaurant_name="Momo House")


@pytest.fixture
def other_vendor(db):
    return VendorFactory(restaurant_name="Pizza Corner")


@pytest.fixture
def staff(vendor):
    return StaffFactory(vendor=vendor)


@pytest.fixture
def admin_user(db):
    return AdminFactory()


@pytest.fixture
def fake_redis():
    """In-memory stand-in for the Redis client used by order services."""
    store = {}
    client = MagicMock()
    client.setex.side_effect = lambda key, ttl, value: store.__setitem__(key, str(value))
    client.get.side_effect = store.get
    client.delete.side_effect = lambda key: store.pop(key, None)
    client.store = store

    with patch("apps.orders.services.redis_client", client):
        yield client
