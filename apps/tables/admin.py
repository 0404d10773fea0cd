from django.contrib import admin
from unfold.admin import ModelAdmin

from apps.tables.models import Table


@admin.register(Table)
class TableAdmin(ModelAdmin):
    list_display = ("name", "vendor", "qr_code", "is_active", "created_at")
    list_filter = ("is_active",)
    search_fields = ("name", "qr_code", "vendor__restaurant_name", "vendor__email")
    readonly_fields = ("qr_code", "created_at", "updated_at")
    autocomplete_fields = ["vendor"]
