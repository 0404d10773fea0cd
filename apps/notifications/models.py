from django.conf import settings
from django.db import models

from apps.common.constants import NotificationType
from apps.common.models import BaseModel


class Notification(BaseModel):
    vendor = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="notifications",
        db_column="vendor_id",
    )
    type = models.CharField(max_length=30, choices=NotificationType.choices)
    key = models.CharField(max_length=100, blank=True, help_text="Event key, e.g. order-12-created")
    title = models.CharField(max_length=200)
    message = models.TextField(blank=True)
    data = models.JSONField(default=dict, blank=True)
    read = models.BooleanField(default=False)

    class Meta:
        db_table = "notification"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["vendor", "read"], name="notification_vendor_read_idx"),
        ]

    def __str__(self):
        return f"{self.title} · vendor {self.vendor_id}"
