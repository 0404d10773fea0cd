import uuid

from django.conf import settings
from django.db import models

from apps.common.models import BaseModel


class Table(BaseModel):
    vendor = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="tables",
        db_column="vendor_id",
    )
    name = models.CharField(max_length=100, help_text="Name or number of the table, e.g. 'Table 1' or 'Patio 3'")
    qr_code = models.UUIDField(default=uuid.uuid4, unique=True, editable=False)

    class Meta:
        db_table = "table"
        ordering = ["name"]
        constraints = [
            models.UniqueConstraint(fields=["vendor", "name"], name="table_unique_vendor_name"),
        ]

    def regenerate_qr_code(self):
        self.qr_code = uuid.uuid4()
        self.save(update_fields=["qr_code", "updated_at"])
        return self.qr_code

    @property
    def menu_url(self) -> str:
        return f"{settings.FRONTEND_URL.rstrip('/')}/menu/{self.vendor_id}/{self.qr_code}"

    def __str__(self):
        return f"{self.name} · vendor {self.vendor_id}"
