from django.contrib import admin
from unfold.admin import ModelAdmin

from apps.menus.models import MenuItem


@admin.register(MenuItem)
class MenuItemAdmin(ModelAdmin):
    list_display = ("name", "vendor", "category", "price", "is_available")
    list_filter = ("is_available", "category")
    list_editable = ("is_available",)
    search_fields = ("name", "category", "vendor__restaurant_name", "vendor__email")
    readonly_fields = ("created_at", "updated_at")
    autocomplete_fields = ["vendor"]
