import decimal

import django.core.validators
import django.db.models.deletion
import imagekit.models.fields
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):
    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="MenuItem",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("is_active", models.BooleanField(default=True)),
                ("name", models.CharField(max_length=100)),
                ("description", models.TextField(blank=True, max_length=1000)),
                (
                    "price",
                    models.DecimalField(
                        decimal_places=2,
                        max_digits=8,
                        validators=[django.core.validators.MinValueValidator(decimal.Decimal("0.00"))],
                    ),
                ),
                ("category", models.CharField(max_length=50)),
                ("image", imagekit.models.fields.ProcessedImageField(blank=True, null=True, upload_to="menu_items")),
                ("is_available", models.BooleanField(default=True)),
                (
                    "vendor",
                    models.ForeignKey(
                        db_column="vendor_id",
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="menu_items",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "db_table": "menu_item",
                "ordering": ["-created_at"],
                "indexes": [
                    models.Index(fields=["vendor", "category"], name="menu_item_vendor_cat_idx"),
                    models.Index(fields=["vendor", "is_available"], name="menu_item_vendor_avail_idx"),
                ],
            },
        ),
    ]
