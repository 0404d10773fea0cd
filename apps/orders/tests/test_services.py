"""Tests for order services."""

from decimal import Decimal
from unittest.mock import patch

import pytest

from apps.common.constants import NotificationType, OrderStatus, PaymentMethod, PaymentStatus
from apps.menus.tests.factories import MenuItemFactory
from apps.notifications.hub import hub
from apps.notifications.models import Notification
from apps.orders import services
from apps.orders.lifecycle import (
    DeliveryCodeMismatch,
    InvalidPaymentTransition,
    InvalidTransition,
    InvoiceNumberExhausted,
    OrderError,
    OrderNotFound,
    PaymentNotSettled,
    TableNotFound,
)
from apps.orders.models import Order
from apps.orders.tests.factories import OrderFactory
from apps.tables.tests.factories import TableFactory


@pytest.mark.django_db
class TestCreateCustomerOrder:
    def test_totals_and_snapshots(self, vendor):
        momo = MenuItemFactory(vendor=vendor, name="Momo", price=Decimal("250.00"))
        lassi = MenuItemFactory(vendor=vendor, name="Lassi", price=Decimal("120.50"))

        order = services.create_customer_order(vendor.id, [{"id": momo.id, "quantity": 2}, {"id": lassi.id}])

        assert order.status == OrderStatus.PENDING
        assert order.payment_status == PaymentStatus.UNPAID
        assert order.total_amount == Decimal("620.50")
        lines = {item.name: (item.quantity, item.price) for item in order.items.all()}
        assert lines == {"Momo": (2, Decimal("250.00")), "Lassi": (1, Decimal("120.50"))}

    def test_skips_unavailable_and_foreign_items(self, vendor, other_vendor):
        momo = MenuItemFactory(vendor=vendor, price=Decimal("100.00"))
        sold_out = MenuItemFactory(vendor=vendor, is_available=False)
        foreign = MenuItemFactory(vendor=other_vendor)

        order = services.create_customer_order(
            vendor.id, [{"id": momo.id}, {"id": sold_out.id}, {"id": foreign.id}, {"id": 999999}]
        )

        assert order.items.count() == 1
        assert order.total_amount == Decimal("100.00")

    def test_no_valid_items(self, vendor):
        sold_out = MenuItemFactory(vendor=vendor, is_available=False)

        with pytest.raises(OrderError, match="No valid menu items"):
            services.create_customer_order(vendor.id, [{"id": sold_out.id}])
        assert not Order.objects.exists()

    def test_unknown_vendor(self, db):
        with pytest.raises(OrderNotFound):
            services.create_customer_order(999999, [{"id": 1}])

    def test_resolves_table_by_name_or_qr_code(self, vendor):
        item = MenuItemFactory(vendor=vendor)
        table = TableFactory(vendor=vendor, name="Table 4")

        by_name = services.create_customer_order(vendor.id, [{"id": item.id}], table_identifier="Table 4")
        by_code = services.create_customer_order(vendor.id, [{"id": item.id}], table_identifier=str(table.qr_code))
        unknown = services.create_customer_order(vendor.id, [{"id": item.id}], table_identifier="Patio")

        assert by_name.table_id == table.id
        assert by_code.table_id == table.id
        assert by_code.table_name == "Table 4"
        assert unknown.table_id is None
        assert unknown.table_name == "Patio"

    def test_inactive_table_is_not_matched(self, vendor):
        item = MenuItemFactory(vendor=vendor)
        TableFactory(vendor=vendor, name="Table 9", is_active=False)

        order = services.create_customer_order(vendor.id, [{"id": item.id}], table_identifier="Table 9")

        assert order.table_id is None
        assert order.table_name == "Table 9"

    def test_invoice_collision_is_retried(self, vendor):
        item = MenuItemFactory(vendor=vendor)
        OrderFactory(vendor=vendor, invoice_no="INV-20260101-00001")

        with patch(
            "apps.orders.services.generate_invoice_number",
            side_effect=["INV-20260101-00001", "INV-20260101-00002"],
        ):
            order = services.create_customer_order(vendor.id, [{"id": item.id}])

        assert order.invoice_no == "INV-20260101-00002"

    def test_invoice_numbers_exhausted(self, vendor, settings):
        settings.ORDER_INVOICE_MAX_ATTEMPTS = 3
        item = MenuItemFactory(vendor=vendor)
        OrderFactory(vendor=vendor, invoice_no="INV-20260101-00001")

        with patch("apps.orders.services.generate_invoice_number", return_value="INV-20260101-00001") as generate:
            with pytest.raises(InvoiceNumberExhausted) as exc:
                services.create_customer_order(vendor.id, [{"id": item.id}])

        assert generate.call_count == 3
        assert exc.value.status_code == 503
        assert Order.objects.count() == 1

    def test_new_order_notification(self, vendor, django_capture_on_commit_callbacks):
        item = MenuItemFactory(vendor=vendor, name="Momo")

        with patch.object(hub, "publish") as publish:
            with django_capture_on_commit_callbacks(execute=True):
                order = services.create_customer_order(vendor.id, [{"id": item.id, "quantity": 3}])

        notification = Notification.objects.get(vendor=vendor)
        assert notification.type == NotificationType.NEW_ORDER
        assert notification.key == f"order-{order.id}-created"
        assert notification.data["items"][0] == {"name": "Momo", "quantity": 3, "price": "10.00"}

        publish.assert_called_once()
        vendor_id, payload = publish.call_args[0]
        assert vendor_id == vendor.id
        assert payload["id"] == notification.id
        assert payload["data"]["order_id"] == order.id


@pytest.mark.django_db
class TestCreateStaffOrder:
    def test_places_order_for_own_table(self, vendor, staff):
        item = MenuItemFactory(vendor=vendor, price=Decimal("150.00"))
        table = TableFactory(vendor=vendor, name="Table 1")

        order = services.create_staff_order(vendor.id, [{"id": item.id, "quantity": 2}], table_id=table.id, actor=staff)

        assert order.table_id == table.id
        assert order.table_identifier == "Table 1"
        assert order.total_amount == Decimal("300.00")
        assert order.status == OrderStatus.PENDING

    def test_without_table(self, vendor):
        item = MenuItemFactory(vendor=vendor)

        order = services.create_staff_order(vendor.id, [{"id": item.id}])

        assert order.table_id is None
        assert order.table_identifier == ""

    def test_table_of_another_vendor(self, vendor, other_vendor):
        item = MenuItemFactory(vendor=vendor)
        foreign_table = TableFactory(vendor=other_vendor)

        with pytest.raises(TableNotFound) as exc:
            services.create_staff_order(vendor.id, [{"id": item.id}], table_id=foreign_table.id)

        assert exc.value.status_code == 404
        assert not Order.objects.exists()

    def test_inactive_table(self, vendor):
        item = MenuItemFactory(vendor=vendor)
        table = TableFactory(vendor=vendor, is_active=False)

        with pytest.raises(TableNotFound, match="Table not found."):
            services.create_staff_order(vendor.id, [{"id": item.id}], table_id=table.id)


@pytest.mark.django_db
class TestChangeStatus:
    def test_accept(self, vendor, staff):
        order = OrderFactory(vendor=vendor)

        order = services.change_status(order.id, OrderStatus.ACCEPTED, actor=staff)

        assert order.status == OrderStatus.ACCEPTED
        notification = Notification.objects.get(type=NotificationType.ORDER_STATUS)
        assert notification.key == f"order-{order.id}-accepted"
        assert notification.data["old_status"] == OrderStatus.PENDING

    def test_second_accept_conflicts(self, vendor):
        order = OrderFactory(vendor=vendor)
        services.change_status(order.id, OrderStatus.ACCEPTED)

        with pytest.raises(InvalidTransition):
            services.change_status(order.id, OrderStatus.ACCEPTED)

    def test_reject_after_accept_conflicts(self, vendor):
        order = OrderFactory(vendor=vendor, status=OrderStatus.ACCEPTED)

        with pytest.raises(InvalidTransition):
            services.change_status(order.id, OrderStatus.REJECTED)
        order.refresh_from_db()
        assert order.status == OrderStatus.ACCEPTED

    def test_completion_needs_payment(self, vendor):
        order = OrderFactory(vendor=vendor, status=OrderStatus.ACCEPTED)

        with pytest.raises(PaymentNotSettled):
            services.change_status(order.id, OrderStatus.COMPLETED)

        services.update_payment(order.id, payment_status=PaymentStatus.PAID)
        order = services.change_status(order.id, OrderStatus.COMPLETED)
        assert order.status == OrderStatus.COMPLETED

    def test_missing_order(self, db):
        with pytest.raises(OrderNotFound):
            services.change_status(999999, OrderStatus.ACCEPTED)


@pytest.mark.django_db
class TestUpdatePayment:
    def test_mark_paid_with_transaction(self, vendor):
        order = OrderFactory(vendor=vendor)

        order = services.update_payment(
            order.id, payment_status=PaymentStatus.PAID, payment_method=PaymentMethod.ESEWA, transaction_id="TX-1"
        )

        assert order.payment_status == PaymentStatus.PAID
        assert order.payment_method == PaymentMethod.ESEWA
        assert order.transaction_id == "TX-1"
        assert Notification.objects.filter(type=NotificationType.PAYMENT).count() == 1

    def test_paid_is_final(self, vendor):
        order = OrderFactory(vendor=vendor, payment_status=PaymentStatus.PAID)

        with pytest.raises(InvalidPaymentTransition):
            services.update_payment(order.id, payment_status=PaymentStatus.PENDING)
        with pytest.raises(InvalidPaymentTransition):
            services.update_payment(order.id, payment_method=PaymentMethod.CARD)

    def test_transaction_id_is_set_once(self, vendor):
        order = OrderFactory(vendor=vendor, payment_status=PaymentStatus.PENDING, transaction_id="TX-1")

        services.update_payment(order.id, transaction_id="TX-1")
        with pytest.raises(InvalidPaymentTransition, match="already set"):
            services.update_payment(order.id, transaction_id="TX-2")

    def test_initiate_payment_marks_pending(self, vendor):
        order = OrderFactory(vendor=vendor)

        order = services.initiate_payment(order.id, PaymentMethod.CARD)

        assert order.payment_status == PaymentStatus.PENDING
        assert order.payment_method == PaymentMethod.CARD


@pytest.mark.django_db
class TestDelivery:
    def test_code_requires_accepted_order(self, vendor, fake_redis):
        order = OrderFactory(vendor=vendor)

        with pytest.raises(InvalidTransition):
            services.issue_delivery_code(order.id)
        fake_redis.setex.assert_not_called()

    def test_code_is_stored_with_ttl(self, vendor, fake_redis, settings):
        settings.DELIVERY_CODE_TTL = 600
        order = OrderFactory(vendor=vendor, status=OrderStatus.ACCEPTED)

        code = services.issue_delivery_code(order.id)

        assert len(code) == 6 and code.isdigit()
        fake_redis.setex.assert_called_once_with(f"delivery:code:{order.id}", 600, code)

    def test_wrong_code(self, vendor, fake_redis):
        order = OrderFactory(vendor=vendor, status=OrderStatus.ACCEPTED)
        code = services.issue_delivery_code(order.id)
        wrong = "100000" if code != "100000" else "100001"

        with pytest.raises(DeliveryCodeMismatch):
            services.verify_delivery(order.id, wrong)
        order.refresh_from_db()
        assert not order.customer_verified

    def test_paid_order_completes_on_verification(self, vendor, fake_redis):
        order = OrderFactory(vendor=vendor, status=OrderStatus.ACCEPTED, payment_status=PaymentStatus.PAID)
        code = services.issue_delivery_code(order.id)

        order = services.verify_delivery(order.id, code)

        assert order.customer_verified
        assert order.status == OrderStatus.COMPLETED
        assert f"delivery:code:{order.id}" not in fake_redis.store
        assert Notification.objects.filter(type=NotificationType.VERIFICATION).exists()

    def test_unpaid_order_stays_accepted(self, vendor, fake_redis):
        order = OrderFactory(vendor=vendor, status=OrderStatus.ACCEPTED)
        code = services.issue_delivery_code(order.id)

        order = services.verify_delivery(order.id, code)

        assert order.customer_verified
        assert order.status == OrderStatus.ACCEPTED


@pytest.mark.django_db
class TestIssues:
    def test_report_and_resolve(self, vendor, staff):
        order = OrderFactory(vendor=vendor, status=OrderStatus.ACCEPTED)

        order = services.report_issue(order.id, "Food never arrived")
        assert order.delivery_issue_reported
        assert order.issue_description == "Food never arrived"
        assert Notification.objects.filter(type=NotificationType.ISSUE).exists()

        order = services.resolve_issue(order.id, "Served again", actor=staff)
        assert order.issue_resolved
        assert order.resolution_message == "Served again"

    def test_resolve_without_report(self, vendor):
        order = OrderFactory(vendor=vendor)

        with pytest.raises(OrderError, match="No delivery issue"):
            services.resolve_issue(order.id)
