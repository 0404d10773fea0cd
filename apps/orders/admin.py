from django.contrib import admin
from unfold.admin import ModelAdmin, TabularInline

from apps.orders.models import Order, OrderItem


class OrderItemInline(TabularInline):
    model = OrderItem
    extra = 0
    readonly_fields = ("menu_item", "name", "quantity", "price")
    can_delete = False

    def has_add_permission(self, request, obj):
        return False


@admin.register(Order)
class OrderAdmin(ModelAdmin):
    list_display = ("invoice_no", "vendor", "table_name", "status", "payment_status", "total_amount", "created_at")
    list_filter = ("status", "payment_status", "payment_method", "delivery_issue_reported", "created_at")
    search_fields = ("invoice_no", "transaction_id", "vendor__restaurant_name", "vendor__email")
    # Status and payment change only through apps.orders.services.
    readonly_fields = (
        "invoice_no",
        "status",
        "payment_status",
        "transaction_id",
        "total_amount",
        "created_at",
        "updated_at",
    )
    inlines = [OrderItemInline]
    autocomplete_fields = ["vendor", "table"]

    def get_list_display_links(self, request, list_display):
        return ("invoice_no",)


@admin.register(OrderItem)
class OrderItemAdmin(ModelAdmin):
    list_display = ("invoice_no", "name", "quantity", "price")
    list_filter = ("order__status",)
    search_fields = ("order__invoice_no", "name")
    readonly_fields = ("created_at", "updated_at")
    autocomplete_fields = ["order", "menu_item"]

    def invoice_no(self, obj):
        return obj.order.invoice_no

    invoice_no.short_description = "Invoice No"
    invoice_no.admin_order_field = "order__invoice_no"
