import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):
    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Notification",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("is_active", models.BooleanField(default=True)),
                (
                    "type",
                    models.CharField(
                        choices=[
                            ("new_order", "New order"),
                            ("order_status", "Order status"),
                            ("payment", "Payment"),
                            ("issue", "Delivery issue"),
                            ("verification", "Delivery verified"),
                            ("waiter_call", "Waiter call"),
                        ],
                        max_length=30,
                    ),
                ),
                (
                    "key",
                    models.CharField(blank=True, help_text="Event key, e.g. order-12-created", max_length=100),
                ),
                ("title", models.CharField(max_length=200)),
                ("message", models.TextField(blank=True)),
                ("data", models.JSONField(blank=True, default=dict)),
                ("read", models.BooleanField(default=False)),
                (
                    "vendor",
                    models.ForeignKey(
                        db_column="vendor_id",
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="notifications",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "db_table": "notification",
                "ordering": ["-created_at"],
                "indexes": [
                    models.Index(fields=["vendor", "read"], name="notification_vendor_read_idx"),
                ],
            },
        ),
    ]
