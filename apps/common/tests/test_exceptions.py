"""Tests for the API error envelope."""

import pytest


@pytest.mark.django_db
class TestErrorEnvelope:
    def test_unauthenticated_request_uses_error_key(self, api_client, vendor):
        response = api_client.get(f"/api/vendors/{vendor.id}/menu")

        assert response.status_code == 401
        assert "error" in response.json()

    def test_forbidden_request_uses_permission_message(self, client_for, vendor, other_vendor):
        response = client_for(other_vendor).get(f"/api/vendors/{vendor.id}/menu")

        assert response.status_code == 403
        assert response.json()["error"] == "Access denied. You can only access your own restaurant's data."

    def test_validation_errors_keep_field_detail(self, client_for, vendor):
        response = client_for(vendor).post(f"/api/vendors/{vendor.id}/menu", {"name": "Momo"}, format="json")

        assert response.status_code == 400
        body = response.json()
        assert body["error"]
        assert "price" in body["errors"]
