from django.contrib import admin
from unfold.admin import ModelAdmin

from apps.notifications.models import Notification


@admin.register(Notification)
class NotificationAdmin(ModelAdmin):
    list_display = ("title", "vendor", "type", "read", "created_at")
    list_filter = ("type", "read", "created_at")
    search_fields = ("title", "message", "key", "vendor__restaurant_name", "vendor__email")
    readonly_fields = ("key", "data", "created_at", "updated_at")
    autocomplete_fields = ["vendor"]
