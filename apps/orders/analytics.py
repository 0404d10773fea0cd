"""
Dashboard figures for one vendor.

Revenue only ever counts orders that are both completed and paid.
"""

from datetime import timedelta
from decimal import Decimal

from django.db.models import Count, DecimalField, F, Q, Sum
from django.db.models.functions import TruncDate
from django.utils import timezone

from apps.common.constants import OrderStatus, PaymentStatus
from apps.menus.models import MenuItem
from apps.orders.lifecycle import quantize_amount
from apps.orders.models import Order, OrderItem
from apps.tables.models import Table

TIMEFRAMES = ("day", "week", "month", "year")
DEFAULT_TIMEFRAME = "week"

SETTLED = Q(status=OrderStatus.COMPLETED, payment_status=PaymentStatus.PAID)

_AMOUNT = DecimalField(max_digits=12, decimal_places=2)


def timeframe_start(timeframe: str, now=None):
    now = now or timezone.now()
    if timeframe == "day":
        return now.replace(hour=0, minute=0, second=0, microsecond=0)
    if timeframe == "month":
        return now - timedelta(days=30)
    if timeframe == "year":
        return now - timedelta(days=365)
    return now - timedelta(days=7)


def dashboard_stats(vendor_id: int) -> dict:
    orders = Order.objects.filter(vendor_id=vendor_id)
    totals = orders.aggregate(
        total_orders=Count("id"),
        pending_orders=Count("id", filter=Q(status__in=OrderStatus.active())),
        total_revenue=Sum("total_amount", filter=SETTLED),
    )
    return {
        "total_orders": totals["total_orders"],
        "pending_orders": totals["pending_orders"],
        "total_revenue": quantize_amount(totals["total_revenue"]),
        "active_items": MenuItem.objects.filter(vendor_id=vendor_id, is_available=True).count(),
        "total_tables": Table.objects.filter(vendor_id=vendor_id, is_active=True).count(),
    }


def sales_report(vendor_id: int, timeframe: str = DEFAULT_TIMEFRAME) -> dict:
    start_date = timeframe_start(timeframe)
    rows = (
        Order.objects.filter(SETTLED, vendor_id=vendor_id, created_at__gte=start_date)
        .annotate(date=TruncDate("created_at"))
        .values("date")
        .annotate(order_count=Count("id"), revenue=Sum("total_amount"))
        .order_by("date")
    )
    sales = [
        {"date": row["date"], "order_count": row["order_count"], "revenue": quantize_amount(row["revenue"])}
        for row in rows
    ]
    return {
        "timeframe": timeframe,
        "start_date": start_date,
        "total_orders": sum(day["order_count"] for day in sales),
        "total_revenue": quantize_amount(sum((day["revenue"] for day in sales), Decimal("0"))),
        "sales": sales,
    }


def popular_items(vendor_id: int, limit: int = 10) -> list[dict]:
    rows = (
        OrderItem.objects.filter(
            order__vendor_id=vendor_id,
            order__status=OrderStatus.COMPLETED,
            order__payment_status=PaymentStatus.PAID,
            menu_item__isnull=False,
        )
        .values("menu_item_id", "menu_item__name", "menu_item__category", "menu_item__price")
        .annotate(
            order_count=Count("id"),
            total_quantity=Sum("quantity"),
            total_revenue=Sum(F("price") * F("quantity"), output_field=_AMOUNT),
        )
        .order_by("-order_count", "-total_quantity", "menu_item_id")[:limit]
    )
    return [
        {
            "id": row["menu_item_id"],
            "name": row["menu_item__name"],
            "category": row["menu_item__category"],
            "price": row["menu_item__price"],
            "order_count": row["order_count"],
            "total_quantity": row["total_quantity"],
            "total_revenue": quantize_amount(row["total_revenue"]),
        }
        for row in rows
    ]
