"""Integration tests for registration and JWT endpoints."""

import pytest
from rest_framework_simplejwt.tokens import AccessToken

from apps.common.constants import UserRole
from apps.users.models import User
from apps.users.tests.factories import DEFAULT_PASSWORD


@pytest.mark.django_db
class TestRegister:
    def test_register_creates_vendor_with_tokens(self, api_client):
        response = api_client.post(
            "/api/auth/register/",
            {
                "email": "owner@example.com",
                "password": DEFAULT_PASSWORD,
                "password2": DEFAULT_PASSWORD,
                "restaurant_name": "Momo House",
            },
            format="json",
        )

        assert response.status_code == 201
        data = response.json()
        assert data["role"] == UserRole.VENDOR
        assert data["access"]
        assert data["refresh"]
        assert "refresh_token" in response.cookies
        assert User.objects.get(email="owner@example.com").restaurant_name == "Momo House"

    def test_password_mismatch(self, api_client):
        response = api_client.post(
            "/api/auth/register/",
            {
                "email": "owner@example.com",
                "password": DEFAULT_PASSWORD,
                "password2": "Different-Passw0rd!",
                "restaurant_name": "Momo House",
            },
            format="json",
        )

        assert response.status_code == 400
        assert not User.objects.filter(email="owner@example.com").exists()


@pytest.mark.django_db
class TestLogin:
    def test_vendor_token_carries_role_and_vendor(self, api_client, vendor):
        response = api_client.post(
            "/api/auth/login/", {"email": vendor.email, "password": DEFAULT_PASSWORD}, format="json"
        )

        assert response.status_code == 200
        data = response.json()
        assert data["user"]["id"] == vendor.id
        token = AccessToken(data["access"])
        assert token["role"] == UserRole.VENDOR
        assert token["vendor_id"] == vendor.id

    def test_staff_token_carries_owning_vendor(self, api_client, staff):
        response = api_client.post(
            "/api/auth/login/", {"email": staff.email, "password": DEFAULT_PASSWORD}, format="json"
        )

        assert response.status_code == 200
        token = AccessToken(response.json()["access"])
        assert token["role"] == UserRole.STAFF
        assert token["vendor_id"] == staff.vendor_id

    def test_wrong_password(self, api_client, vendor):
        response = api_client.post("/api/auth/login/", {"email": vendor.email, "password": "nope"}, format="json")

        assert response.status_code == 401

    def test_inactive_staff_cannot_log_in(self, api_client, staff):
        staff.is_active = False
        staff.save()

        response = api_client.post(
            "/api/auth/login/", {"email": staff.email, "password": DEFAULT_PASSWORD}, format="json"
        )

        assert response.status_code == 401


@pytest.mark.django_db
class TestRefreshAndLogout:
    def _login(self, api_client, user):
        return api_client.post("/api/auth/login/", {"email": user.email, "password": DEFAULT_PASSWORD}, format="json")

    def test_refresh_from_body(self, api_client, vendor):
        refresh = self._login(api_client, vendor).json()["refresh"]
        api_client.cookies.clear()

        response = api_client.post("/api/auth/refresh/", {"refresh": refresh}, format="json")

        assert response.status_code == 200
        assert response.json()["access"]

    def test_logout_blacklists_refresh_token(self, api_client, vendor):
        refresh = self._login(api_client, vendor).json()["refresh"]
        api_client.cookies.clear()

        response = api_client.post("/api/auth/logout/", {"refresh": refresh}, format="json")
        assert response.status_code == 204

        response = api_client.post("/api/auth/refresh/", {"refresh": refresh}, format="json")
        assert response.status_code == 401
