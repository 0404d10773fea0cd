from decimal import Decimal

from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models
from imagekit.models import ProcessedImageField
from imagekit.processors import ResizeToFit

from apps.common.models import BaseModel


class MenuItem(BaseModel):
    vendor = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="menu_items",
        db_column="vendor_id",
    )
    name = models.CharField(max_length=100)
    description = models.TextField(blank=True, max_length=1000)
    price = models.DecimalField(
        max_digits=8,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0.00"))],
    )
    category = models.CharField(max_length=50)
    image = ProcessedImageField(
        upload_to="menu_items",
        processors=[ResizeToFit(800, 800)],
        format="JPEG",
        options={"quality": 85},
        null=True,
        blank=True,
    )
    is_available = models.BooleanField(default=True)

    class Meta:
        db_table = "menu_item"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["vendor", "category"], name="menu_item_vendor_cat_idx"),
            models.Index(fields=["vendor", "is_available"], name="menu_item_vendor_avail_idx"),
        ]

    def __str__(self):
        return f"{self.name} ({self.category})"
