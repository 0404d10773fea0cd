import logging
import uuid
from dataclasses import dataclass

from django.conf import settings
from django.contrib.auth import get_user_model
from django.core.exceptions import ObjectDoesNotExist
from django.db import IntegrityError, transaction
from django.db.models import Q
from django.utils import timezone

from apps.common.constants import OrderStatus, PaymentStatus, UserRole
from apps.common.redis_client import redis_client
from apps.menus.models import MenuItem
from apps.notifications import services as notifications
from apps.orders.lifecycle import (
    DeliveryCodeMismatch,
    InvalidPaymentTransition,
    InvalidTransition,
    InvoiceNumberExhausted,
    OrderError,
    OrderNotFound,
    TableNotFound,
    calculate_total,
    generate_invoice_number,
    generate_verification_code,
    validate_payment_transition,
    validate_status_transition,
)
from apps.orders.models import Order, OrderItem
from apps.tables.models import Table

logger = logging.getLogger(__name__)

User = get_user_model()

DELIVERY_CODE_KEY = "delivery:code:{order_id}"


@dataclass
class OrderLine:
    menu_item: MenuItem
    quantity: int


def _get_locked_order(order_id) -> Order:
    try:
        return Order.objects.select_for_update().get(pk=order_id)
    except ObjectDoesNotExist as err:
        raise OrderNotFound("Order not found.") from err


def _resolve_table(vendor, table_identifier: str | None) -> Table | None:
    if not table_identifier:
        return None

    lookup = Q(name=table_identifier)
    try:
        lookup |= Q(qr_code=uuid.UUID(str(table_identifier)))
    except ValueError:
        pass
    return Table.objects.filter(lookup, vendor=vendor, is_active=True).first()


def _resolve_lines(vendor, items) -> list[OrderLine]:
    """Keep the entries that name an available item of this vendor; skip the rest."""
    lines = []
    for entry in items:
        menu_item = MenuItem.objects.filter(pk=entry.get("id"), vendor=vendor, is_available=True).first()
        if menu_item is None:
            logger.info("Skipping unknown or unavailable menu item %s for vendor %s", entry.get("id"), vendor.pk)
            continue
        lines.append(OrderLine(menu_item=menu_item, quantity=entry.get("quantity") or 1))
    return lines


def _get_vendor(vendor_id):
    vendor = User.objects.filter(pk=vendor_id, role=UserRole.VENDOR, is_active=True).first()
    if vendor is None:
        raise OrderNotFound("Vendor not found.")
    return vendor


def create_customer_order(vendor_id, items, table_identifier: str | None = None) -> Order:
    """
    Place an order from the public menu.

    `items` is a sequence of `{"id": menu_item_id, "quantity": n}`; quantity
    defaults to 1. An unknown table identifier leaves the order without a table.
    """
    vendor = _get_vendor(vendor_id)
    lines = _resolve_lines(vendor, items)
    if not lines:
        raise OrderError("No valid menu items found.")
    return _place_order(vendor, lines, _resolve_table(vendor, table_identifier), table_identifier or "")


def create_staff_order(vendor_id, items, table_id=None, actor=None) -> Order:
    """Staff or the vendor place an order; the table, when given, must be an active table of the vendor."""
    vendor = _get_vendor(vendor_id)

    table = None
    if table_id is not None:
        table = Table.objects.filter(pk=table_id, vendor=vendor, is_active=True).first()
        if table is None:
            raise TableNotFound("Table not found.")

    lines = _resolve_lines(vendor, items)
    if not lines:
        raise OrderError("No valid menu items found.")

    order = _place_order(vendor, lines, table, table.name if table else "")
    logger.info("Order %s placed by user %s", order.pk, getattr(actor, "pk", None))
    return order


def _place_order(vendor, lines: list[OrderLine], table: Table | None, table_identifier: str) -> Order:
    """
    Persist the order and its items.

    The invoice number is regenerated on a uniqueness violation up to
    `ORDER_INVOICE_MAX_ATTEMPTS` times.
    """
    total_amount = calculate_total((line.menu_item.price, line.quantity) for line in lines)

    max_attempts = settings.ORDER_INVOICE_MAX_ATTEMPTS
    for attempt in range(1, max_attempts + 1):
        invoice_no = generate_invoice_number()
        try:
            with transaction.atomic():
                order = Order.objects.create(
                    vendor=vendor,
                    table=table,
                    table_identifier=table_identifier,
                    invoice_no=invoice_no,
                    total_amount=total_amount,
                )
                OrderItem.objects.bulk_create(
                    [
                        OrderItem(
                            order=order,
                            menu_item=line.menu_item,
                            name=line.menu_item.name,
                            quantity=line.quantity,
                            price=line.menu_item.price,
                        )
                        for line in lines
                    ]
                )
                notifications.notify_order_created(order)
        except IntegrityError:
            if not Order.objects.filter(invoice_no=invoice_no).exists():
                raise
            logger.warning(
                "Invoice number %s collided (attempt %d/%d), regenerating", invoice_no, attempt, max_attempts
            )
            continue

        logger.info("Order %s (%s) created for vendor %s, total %s", order.pk, invoice_no, vendor.pk, total_amount)
        return order

    logger.error("Could not allocate a unique invoice number after %d attempts", max_attempts)
    raise InvoiceNumberExhausted("Could not allocate a unique invoice number, please retry.")


@transaction.atomic
def change_status(order_id, new_status: str, actor=None) -> Order:
    """
    Move the order to `new_status`.

    The row is locked and the write is conditional on the status that was
    validated, so of two concurrent contradictory requests only the first wins;
    the second sees the new status and fails with `InvalidTransition`.
    """
    order = _get_locked_order(order_id)
    old_status = order.status
    validate_status_transition(old_status, new_status, order.payment_status)

    updated = Order.objects.filter(pk=order.pk, status=old_status).update(status=new_status, updated_at=timezone.now())
    if not updated:
        raise InvalidTransition(old_status, new_status)

    order.refresh_from_db()
    logger.info(
        "Order %s status %s -> %s by user %s", order.pk, old_status, new_status, getattr(actor, "pk", None)
    )
    notifications.notify_status_changed(order, old_status)
    return order


@transaction.atomic
def update_payment(order_id, payment_status=None, payment_method=None, transaction_id=None, actor=None) -> Order:
    order = _get_locked_order(order_id)
    old_payment_status = order.payment_status
    updates = {}

    if payment_status:
        validate_payment_transition(old_payment_status, payment_status)
        updates["payment_status"] = payment_status

    if payment_method:
        if old_payment_status == PaymentStatus.PAID:
            raise InvalidPaymentTransition(
                old_payment_status, payment_status or old_payment_status, "Cannot change the method of a paid order."
            )
        updates["payment_method"] = payment_method

    if transaction_id:
        if order.transaction_id and order.transaction_id != transaction_id:
            raise InvalidPaymentTransition(
                old_payment_status, payment_status or old_payment_status, "Transaction id is already set."
            )
        updates["transaction_id"] = transaction_id

    if not updates:
        return order

    updated = Order.objects.filter(pk=order.pk, payment_status=old_payment_status).update(
        updated_at=timezone.now(), **updates
    )
    if not updated:
        raise InvalidPaymentTransition(old_payment_status, payment_status or old_payment_status)

    order.refresh_from_db()
    if order.payment_status != old_payment_status:
        logger.info(
            "Order %s payment %s -> %s by user %s",
            order.pk,
            old_payment_status,
            order.payment_status,
            getattr(actor, "pk", None),
        )
        notifications.notify_payment_updated(order, old_payment_status)
    return order


def initiate_payment(order_id, payment_method: str) -> Order:
    """Customer starts paying: the order's payment becomes pending with the chosen method."""
    return update_payment(order_id, payment_status=PaymentStatus.PENDING, payment_method=payment_method)


def issue_delivery_code(order_id) -> str:
    order = Order.objects.filter(pk=order_id).first()
    if order is None:
        raise OrderNotFound("Order not found.")
    if order.status != OrderStatus.ACCEPTED:
        raise InvalidTransition(
            order.status, OrderStatus.COMPLETED, "Delivery codes can only be issued for accepted orders."
        )

    code = generate_verification_code()
    redis_client.setex(DELIVERY_CODE_KEY.format(order_id=order.pk), settings.DELIVERY_CODE_TTL, code)
    logger.info("Delivery code issued for order %s", order.pk)
    return code


def verify_delivery(order_id, code: str) -> Order:
    """
    Customer confirms receipt with the delivery code.

    The order is marked verified and, when already paid, completed. An unpaid
    order stays accepted until payment settles.
    """
    key = DELIVERY_CODE_KEY.format(order_id=order_id)
    expected = redis_client.get(key)
    if not expected or expected != str(code).strip():
        raise DeliveryCodeMismatch("Invalid or expired verification code.")

    with transaction.atomic():
        order = _get_locked_order(order_id)
        order.customer_verified = True
        order.verification_timestamp = timezone.now()
        order.save(update_fields=["customer_verified", "verification_timestamp", "updated_at"])

        if order.status == OrderStatus.ACCEPTED and order.payment_status == PaymentStatus.PAID:
            order = change_status(order.pk, OrderStatus.COMPLETED)

        notifications.notify_delivery_verified(order)

    redis_client.delete(key)
    logger.info("Order %s delivery verified by customer", order.pk)
    return order


@transaction.atomic
def report_issue(order_id, description: str = "") -> Order:
    order = _get_locked_order(order_id)
    order.delivery_issue_reported = True
    order.issue_report_timestamp = timezone.now()
    order.issue_description = description or "Customer reported not receiving order"
    order.issue_resolved = False
    order.save(
        update_fields=[
            "delivery_issue_reported",
            "issue_report_timestamp",
            "issue_description",
            "issue_resolved",
            "updated_at",
        ]
    )
    logger.warning("Delivery issue reported for order %s", order.pk)
    notifications.notify_issue_reported(order)
    return order


@transaction.atomic
def resolve_issue(order_id, resolution_message: str = "", actor=None) -> Order:
    order = _get_locked_order(order_id)
    if not order.delivery_issue_reported:
        raise OrderError("No delivery issue has been reported for this order.")

    order.issue_resolved = True
    order.issue_resolution_timestamp = timezone.now()
    order.resolution_message = resolution_message or "Issue has been resolved"
    order.save(update_fields=["issue_resolved", "issue_resolution_timestamp", "resolution_message", "updated_at"])
    logger.info("Delivery issue of order %s resolved by user %s", order.pk, getattr(actor, "pk", None))
    return order
