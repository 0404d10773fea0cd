from decimal import Decimal

from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models

from apps.common.constants import DELETED_ITEM, OrderStatus, PaymentMethod, PaymentStatus
from apps.common.models import BaseModel


class Order(BaseModel):
    vendor = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="orders",
        db_column="vendor_id",
    )
    table = models.ForeignKey(
        "tables.Table",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="orders",
        db_column="table_id",
    )
    table_identifier = models.CharField(max_length=100, blank=True)
    invoice_no = models.CharField(max_length=20, unique=True)  # INV-YYYYMMDD-NNNNN
    status = models.CharField(max_length=20, choices=OrderStatus.choices, default=OrderStatus.PENDING)
    payment_status = models.CharField(max_length=20, choices=PaymentStatus.choices, default=PaymentStatus.UNPAID)
    payment_method = models.CharField(max_length=20, choices=PaymentMethod.choices, default=PaymentMethod.CASH)
    transaction_id = models.CharField(max_length=100, null=True, blank=True)
    total_amount = models.DecimalField(max_digits=10, decimal_places=2, default=Decimal("0.00"))

    customer_verified = models.BooleanField(default=False)
    verification_timestamp = models.DateTimeField(null=True, blank=True)

    delivery_issue_reported = models.BooleanField(default=False)
    issue_report_timestamp = models.DateTimeField(null=True, blank=True)
    issue_description = models.TextField(blank=True)
    issue_resolved = models.BooleanField(default=False)
    issue_resolution_timestamp = models.DateTimeField(null=True, blank=True)
    resolution_message = models.TextField(blank=True)

    class Meta:
        db_table = "order"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["vendor", "status"], name="order_vendor_status_idx"),
            models.Index(fields=["payment_status"], name="order_payment_status_idx"),
            models.Index(fields=["table"], name="order_table_idx"),
        ]

    @property
    def table_name(self) -> str | None:
        if self.table_id is not None:
            return self.table.name
        return self.table_identifier or None

    def __str__(self):
        return f"{self.invoice_no} • {self.status}"


class OrderItem(BaseModel):
    order = models.ForeignKey(
        Order,
        on_delete=models.CASCADE,
        related_name="items",
        db_column="order_id",
    )
    menu_item = models.ForeignKey(
        "menus.MenuItem",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="order_items",
        db_column="menu_item_id",
    )
    name = models.CharField(max_length=100, default=DELETED_ITEM)
    quantity = models.PositiveIntegerField(validators=[MinValueValidator(1)])
    price = models.DecimalField(max_digits=8, decimal_places=2)

    class Meta:
        db_table = "order_item"
        ordering = ["id"]
        indexes = [
            models.Index(fields=["order"], name="order_item_order_idx"),
        ]

    @property
    def subtotal(self) -> Decimal:
        return self.price * self.quantity

    def __str__(self):
        return f"{self.order.invoice_no} · {self.name} × {self.quantity}"
