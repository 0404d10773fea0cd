import logging

from django.db import transaction

from apps.common.constants import UNNAMED_ITEM, NotificationType
from apps.notifications.hub import hub
from apps.notifications.models import Notification
from apps.notifications.serializers import NotificationSerializer

logger = logging.getLogger(__name__)

STATUS_MESSAGES = {
    "accepted": "Order has been accepted",
    "rejected": "Order has been rejected",
    "completed": "Order is completed",
}


def notify_vendor(
    vendor_id,
    notification_type: str,
    title: str,
    message: str,
    data: dict | None = None,
    key: str = "",
):
    """
    Persist a notification for the vendor's feed and push it to connected clients.

    The push runs after the surrounding transaction commits, so clients never
    see an event for a row that was rolled back.
    """
    notification = Notification.objects.create(
        vendor_id=vendor_id,
        type=notification_type,
        key=key,
        title=title,
        message=message,
        data=data or {},
    )
    payload = dict(NotificationSerializer(notification).data)
    transaction.on_commit(lambda: hub.publish(vendor_id, payload))
    logger.info("Notification %s (%s) queued for vendor %s", notification.pk, notification_type, vendor_id)
    return notification


def _order_data(order, **extra) -> dict:
    data = {
        "order_id": order.id,
        "invoice_no": order.invoice_no,
        "table_name": order.table_name,
        "total_amount": str(order.total_amount),
        "status": order.status,
        "payment_status": order.payment_status,
    }
    data.update(extra)
    return data


def notify_order_created(order):
    items = [
        {"name": item.name or UNNAMED_ITEM, "quantity": item.quantity, "price": str(item.price)}
        for item in order.items.all()
    ]
    return notify_vendor(
        order.vendor_id,
        NotificationType.NEW_ORDER,
        "New Order Received",
        f"New order #{order.id} from {order.table_name or 'customer'}",
        _order_data(order, items=items),
        key=f"order-{order.id}-created",
    )


def notify_status_changed(order, old_status: str):
    return notify_vendor(
        order.vendor_id,
        NotificationType.ORDER_STATUS,
        f"Order #{order.id} {order.status.capitalize()}",
        STATUS_MESSAGES.get(order.status, f"Order is {order.status}"),
        _order_data(order, old_status=old_status, new_status=order.status),
        key=f"order-{order.id}-{order.status}",
    )


def notify_payment_updated(order, old_payment_status: str):
    return notify_vendor(
        order.vendor_id,
        NotificationType.PAYMENT,
        f"Payment {order.payment_status.capitalize()}",
        f"Payment for order #{order.id} is {order.payment_status}",
        _order_data(order, old_payment_status=old_payment_status, payment_method=order.payment_method),
        key=f"order-{order.id}-payment-{order.payment_status}",
    )


def notify_issue_reported(order):
    return notify_vendor(
        order.vendor_id,
        NotificationType.ISSUE,
        "Delivery Issue Reported",
        f"Customer reported issue with order #{order.id}",
        _order_data(order, issue_description=order.issue_description),
        key=f"order-{order.id}-issue",
    )


def notify_delivery_verified(order):
    return notify_vendor(
        order.vendor_id,
        NotificationType.VERIFICATION,
        "Order Verified",
        f"Customer verified delivery of order #{order.id}",
        _order_data(order),
        key=f"order-{order.id}-verified",
    )


def notify_waiter_call(vendor_id, table_identifier: str, table_name: str):
    return notify_vendor(
        vendor_id,
        NotificationType.WAITER_CALL,
        "Waiter Called",
        f"Customer at {table_name} is calling for assistance",
        {"table_identifier": table_identifier, "table_name": table_name},
        key=f"waiter-{vendor_id}-{table_identifier}",
    )
