"""Integration tests for order endpoints."""

import re
from decimal import Decimal

import pytest

from apps.common.constants import OrderStatus, PaymentStatus
from apps.menus.tests.factories import MenuItemFactory
from apps.orders.models import Order
from apps.orders.tests.factories import OrderFactory, OrderItemFactory
from apps.tables.tests.factories import TableFactory
from apps.users.tests.factories import StaffFactory


@pytest.mark.django_db
class TestOrderStatusEndpoint:
    def test_staff_accepts_order(self, client_for, vendor, staff):
        order = OrderFactory(vendor=vendor)

        response = client_for(staff).patch(f"/api/orders/{order.id}/status", {"status": "accepted"}, format="json")

        assert response.status_code == 200
        assert response.json()["status"] == OrderStatus.ACCEPTED

    def test_second_accept_is_a_conflict(self, client_for, vendor):
        order = OrderFactory(vendor=vendor)
        client = client_for(vendor)
        client.patch(f"/api/orders/{order.id}/status", {"status": "accepted"}, format="json")

        response = client.patch(f"/api/orders/{order.id}/status", {"status": "accepted"}, format="json")

        assert response.status_code == 409
        assert response.json() == {"error": "Cannot change order status from 'accepted' to 'accepted'."}

    def test_unknown_status_is_a_conflict(self, client_for, vendor):
        order = OrderFactory(vendor=vendor)

        response = client_for(vendor).patch(f"/api/orders/{order.id}/status", {"status": "cooking"}, format="json")

        assert response.status_code == 409

    def test_completing_unpaid_order_is_a_conflict(self, client_for, vendor):
        order = OrderFactory(vendor=vendor, status=OrderStatus.ACCEPTED)

        response = client_for(vendor).patch(f"/api/orders/{order.id}/status", {"status": "completed"}, format="json")

        assert response.status_code == 409
        assert "payment" in response.json()["error"]

    def test_staff_of_another_vendor_is_denied(self, client_for, vendor, other_vendor):
        order = OrderFactory(vendor=vendor)
        outsider = StaffFactory(vendor=other_vendor)

        response = client_for(outsider).patch(f"/api/orders/{order.id}/status", {"status": "accepted"}, format="json")

        assert response.status_code == 403
        order.refresh_from_db()
        assert order.status == OrderStatus.PENDING

    def test_admin_may_act_on_any_order(self, client_for, vendor, admin_user):
        order = OrderFactory(vendor=vendor)

        response = client_for(admin_user).patch(
            f"/api/orders/{order.id}/status", {"status": "rejected"}, format="json"
        )

        assert response.status_code == 200

    def test_missing_order(self, client_for, vendor):
        response = client_for(vendor).patch("/api/orders/999999/status", {"status": "accepted"}, format="json")

        assert response.status_code == 404

    def test_requires_authentication(self, api_client, vendor):
        order = OrderFactory(vendor=vendor)

        response = api_client.patch(f"/api/orders/{order.id}/status", {"status": "accepted"}, format="json")

        assert response.status_code == 401


@pytest.mark.django_db
class TestOrderPaymentEndpoint:
    def test_mark_paid(self, client_for, vendor):
        order = OrderFactory(vendor=vendor)

        response = client_for(vendor).patch(
            f"/api/orders/{order.id}/payment", {"payment_status": "paid", "payment_method": "cash"}, format="json"
        )

        assert response.status_code == 200
        assert response.json()["payment_status"] == PaymentStatus.PAID

    def test_invalid_payment_transition(self, client_for, vendor):
        order = OrderFactory(vendor=vendor, payment_status=PaymentStatus.PAID)

        response = client_for(vendor).patch(
            f"/api/orders/{order.id}/payment", {"payment_status": "pending"}, format="json"
        )

        assert response.status_code == 400
        assert "error" in response.json()

    def test_empty_body(self, client_for, vendor):
        order = OrderFactory(vendor=vendor)

        response = client_for(vendor).patch(f"/api/orders/{order.id}/payment", {}, format="json")

        assert response.status_code == 400


@pytest.mark.django_db
class TestVendorOrders:
    def test_list_and_filter(self, client_for, vendor, other_vendor):
        pending = OrderFactory(vendor=vendor)
        OrderFactory(vendor=vendor, status=OrderStatus.ACCEPTED)
        OrderFactory(vendor=other_vendor)

        response = client_for(vendor).get(f"/api/vendors/{vendor.id}/orders", {"status": "pending"})

        assert response.status_code == 200
        assert [row["id"] for row in response.json()["results"]] == [pending.id]

    def test_detail_includes_items(self, client_for, vendor, staff):
        item = OrderItemFactory(order__vendor=vendor, quantity=2, price=Decimal("10.00"))

        response = client_for(staff).get(f"/api/orders/{item.order_id}")

        assert response.status_code == 200
        assert response.json()["items"][0]["subtotal"] == "20.00"

    def test_delivery_code(self, client_for, vendor, fake_redis):
        order = OrderFactory(vendor=vendor, status=OrderStatus.ACCEPTED)

        response = client_for(vendor).post(f"/api/orders/{order.id}/delivery-code")

        assert response.status_code == 201
        assert re.fullmatch(r"\d{6}", response.json()["verification_code"])


@pytest.mark.django_db
class TestCustomerOrders:
    def test_place_order(self, api_client, vendor):
        item = MenuItemFactory(vendor=vendor, price=Decimal("250.00"))
        table = TableFactory(vendor=vendor, name="Table 2")

        response = api_client.post(
            "/api/customer/orders",
            {"vendor_id": vendor.id, "table_identifier": str(table.qr_code), "items": [{"id": item.id, "quantity": 2}]},
            format="json",
        )

        assert response.status_code == 201
        data = response.json()
        assert re.fullmatch(r"INV-\d{8}-\d{5}", data["invoice_no"])
        assert data["total_amount"] == "500.00"
        assert data["table_name"] == "Table 2"
        assert data["vendor_name"] == "Momo House"
        assert data["status"] == OrderStatus.PENDING

    def test_order_without_valid_items(self, api_client, vendor):
        response = api_client.post(
            "/api/customer/orders", {"vendor_id": vendor.id, "items": [{"id": 999999}]}, format="json"
        )

        assert response.status_code == 400
        assert response.json() == {"error": "No valid menu items found."}

    def test_track_order(self, api_client, vendor):
        item = OrderItemFactory(order__vendor=vendor)

        response = api_client.get(f"/api/customer/orders/{item.order_id}")

        assert response.status_code == 200
        data = response.json()
        assert data["items"][0]["name"] == item.name
        assert "transaction_id" in data

    def test_pay(self, api_client, vendor):
        order = OrderFactory(vendor=vendor)

        response = api_client.post(f"/api/customer/orders/{order.id}/pay", {"payment_method": "esewa"}, format="json")

        assert response.status_code == 200
        assert response.json()["payment_status"] == PaymentStatus.PENDING

    def test_verify_with_malformed_code(self, api_client, vendor):
        order = OrderFactory(vendor=vendor, status=OrderStatus.ACCEPTED)

        response = api_client.post(f"/api/orders/{order.id}/verify", {"code": "12ab"}, format="json")

        assert response.status_code == 400

    def test_verify_with_code(self, api_client, client_for, vendor, fake_redis):
        order = OrderFactory(vendor=vendor, status=OrderStatus.ACCEPTED, payment_status=PaymentStatus.PAID)
        code = client_for(vendor).post(f"/api/orders/{order.id}/delivery-code").json()["verification_code"]

        response = api_client.post(f"/api/orders/{order.id}/verify", {"code": code}, format="json")

        assert response.status_code == 200
        assert response.json()["status"] == OrderStatus.COMPLETED

    def test_report_and_resolve_issue(self, api_client, client_for, vendor):
        order = OrderFactory(vendor=vendor, status=OrderStatus.ACCEPTED)

        response = api_client.post(f"/api/orders/{order.id}/report-issue", {}, format="json")
        assert response.status_code == 200
        assert response.json()["delivery_issue_reported"] is True

        response = client_for(vendor).post(
            f"/api/orders/{order.id}/resolve-issue", {"resolution_message": "Re-served"}, format="json"
        )
        assert response.status_code == 200
        assert response.json()["issue_resolved"] is True


@pytest.mark.django_db
class TestStaffOrderCreate:
    def test_staff_places_order_for_own_table(self, client_for, vendor, staff):
        item = MenuItemFactory(vendor=vendor, price=Decimal("120.00"))
        table = TableFactory(vendor=vendor, name="Table 5")

        response = client_for(staff).post(
            "/api/orders",
            {"vendor_id": vendor.id, "table_id": table.id, "items": [{"id": item.id, "quantity": 3}]},
            format="json",
        )

        assert response.status_code == 201
        data = response.json()
        assert data["vendor_id"] == vendor.id
        assert data["table_id"] == table.id
        assert data["table_name"] == "Table 5"
        assert data["total_amount"] == "360.00"

    def test_unknown_table(self, client_for, vendor):
        item = MenuItemFactory(vendor=vendor)

        response = client_for(vendor).post(
            "/api/orders", {"vendor_id": vendor.id, "table_id": 999999, "items": [{"id": item.id}]}, format="json"
        )

        assert response.status_code == 404
        assert response.json() == {"error": "Table not found."}

    def test_other_vendor_is_denied(self, client_for, vendor, other_vendor):
        item = MenuItemFactory(vendor=vendor)
        outsider = StaffFactory(vendor=other_vendor)

        response = client_for(outsider).post(
            "/api/orders", {"vendor_id": vendor.id, "items": [{"id": item.id}]}, format="json"
        )

        assert response.status_code == 403
        assert not Order.objects.exists()

    def test_admin_may_place_orders(self, client_for, vendor, admin_user):
        item = MenuItemFactory(vendor=vendor)

        response = client_for(admin_user).post(
            "/api/orders", {"vendor_id": vendor.id, "items": [{"id": item.id}]}, format="json"
        )

        assert response.status_code == 201

    def test_requires_authentication(self, api_client, vendor):
        item = MenuItemFactory(vendor=vendor)

        response = api_client.post("/api/orders", {"vendor_id": vendor.id, "items": [{"id": item.id}]}, format="json")

        assert response.status_code == 401


@pytest.mark.django_db
class TestCustomerOrderTables:
    def test_inactive_table_is_ignored(self, api_client, vendor):
        item = MenuItemFactory(vendor=vendor)
        table = TableFactory(vendor=vendor, name="Table 8", is_active=False)

        response = api_client.post(
            "/api/customer/orders",
            {"vendor_id": vendor.id, "table_identifier": str(table.qr_code), "items": [{"id": item.id}]},
            format="json",
        )

        assert response.status_code == 201
        assert Order.objects.get().table_id is None
