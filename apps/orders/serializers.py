from rest_framework import serializers

from apps.common.constants import PaymentMethod, PaymentStatus
from apps.orders.analytics import DEFAULT_TIMEFRAME, TIMEFRAMES
from apps.orders.models import Order, OrderItem


class OrderItemSerializer(serializers.ModelSerializer):
    menu_item_id = serializers.IntegerField(read_only=True)
    subtotal = serializers.DecimalField(max_digits=10, decimal_places=2, read_only=True)

    class Meta:
        model = OrderItem
        fields = ["id", "menu_item_id", "name", "quantity", "price", "subtotal"]


class OrderSerializer(serializers.ModelSerializer):
    """Staff-facing order representation."""

    vendor_id = serializers.IntegerField(read_only=True)
    table_id = serializers.IntegerField(read_only=True)
    table_name = serializers.CharField(read_only=True, allow_null=True)
    items = OrderItemSerializer(many=True, read_only=True)

    class Meta:
        model = Order
        fields = [
            "id",
            "invoice_no",
            "vendor_id",
            "table_id",
            "table_name",
            "table_identifier",
            "status",
            "payment_status",
            "payment_method",
            "transaction_id",
            "total_amount",
            "items",
            "customer_verified",
            "verification_timestamp",
            "delivery_issue_reported",
            "issue_report_timestamp",
            "issue_description",
            "issue_resolved",
            "issue_resolution_timestamp",
            "resolution_message",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class CustomerOrderItemSerializer(serializers.ModelSerializer):
    class Meta:
        model = OrderItem
        fields = ["id", "name", "quantity", "price"]


class CustomerOrderSerializer(serializers.ModelSerializer):
    """What a customer sees when tracking an order."""

    vendor_id = serializers.IntegerField(read_only=True)
    vendor_name = serializers.CharField(source="vendor.restaurant_name", read_only=True)
    table_name = serializers.CharField(read_only=True, allow_null=True)
    items = CustomerOrderItemSerializer(many=True, read_only=True)

    class Meta:
        model = Order
        fields = [
            "id",
            "invoice_no",
            "status",
            "payment_status",
            "payment_method",
            "total_amount",
            "transaction_id",
            "table_name",
            "table_identifier",
            "vendor_id",
            "vendor_name",
            "customer_verified",
            "delivery_issue_reported",
            "issue_resolved",
            "resolution_message",
            "created_at",
            "items",
        ]
        read_only_fields = fields


class OrderLineSerializer(serializers.Serializer):
    id = serializers.IntegerField(help_text="Menu item id")
    quantity = serializers.IntegerField(min_value=1, required=False, default=1)


class CustomerOrderCreateSerializer(serializers.Serializer):
    vendor_id = serializers.IntegerField()
    table_identifier = serializers.CharField(max_length=100, required=False, allow_blank=True)
    items = OrderLineSerializer(many=True, allow_empty=False)


class OrderStatusUpdateSerializer(serializers.Serializer):
    # Free text: unknown targets are rejected by the state machine as invalid transitions.
    status = serializers.CharField(max_length=20)


class PaymentUpdateSerializer(serializers.Serializer):
    payment_status = serializers.ChoiceField(choices=PaymentStatus.choices, required=False)
    payment_method = serializers.ChoiceField(choices=PaymentMethod.choices, required=False)
    transaction_id = serializers.CharField(max_length=100, required=False, allow_blank=False)

    def validate(self, attrs):
        if not attrs:
            raise serializers.ValidationError("Provide payment_status, payment_method or transaction_id.")
        return attrs


class PaymentInitiateSerializer(serializers.Serializer):
    payment_method = serializers.ChoiceField(choices=PaymentMethod.choices, default=PaymentMethod.CASH)


class DeliveryCodeSerializer(serializers.Serializer):
    order_id = serializers.IntegerField()
    verification_code = serializers.RegexField(r"^\d{6}$")
    expires_in = serializers.IntegerField(help_text="Seconds until the code expires")


class DeliveryVerifySerializer(serializers.Serializer):
    code = serializers.RegexField(r"^\d{6}$", error_messages={"invalid": "Code must be 6 digits."})


class IssueReportSerializer(serializers.Serializer):
    issue_description = serializers.CharField(max_length=1000, required=False, allow_blank=True)


class IssueResolveSerializer(serializers.Serializer):
    resolution_message = serializers.CharField(max_length=1000, required=False, allow_blank=True)


class StaffOrderCreateSerializer(serializers.Serializer):
    vendor_id = serializers.IntegerField()
    table_id = serializers.IntegerField(required=False, allow_null=True)
    items = OrderLineSerializer(many=True, allow_empty=False)


# --- Dashboard ---
class DashboardLimitSerializer(serializers.Serializer):
    limit = serializers.IntegerField(min_value=1, max_value=100, default=10)


class SalesReportQuerySerializer(serializers.Serializer):
    timeframe = serializers.ChoiceField(choices=TIMEFRAMES, default=DEFAULT_TIMEFRAME)


class DashboardStatsSerializer(serializers.Serializer):
    total_orders = serializers.IntegerField()
    pending_orders = serializers.IntegerField()
    total_revenue = serializers.DecimalField(max_digits=12, decimal_places=2)
    active_items = serializers.IntegerField()
    total_tables = serializers.IntegerField()


class SalesDaySerializer(serializers.Serializer):
    date = serializers.DateField()
    order_count = serializers.IntegerField()
    revenue = serializers.DecimalField(max_digits=12, decimal_places=2)


class SalesReportSerializer(serializers.Serializer):
    timeframe = serializers.CharField()
    start_date = serializers.DateTimeField()
    total_orders = serializers.IntegerField()
    total_revenue = serializers.DecimalField(max_digits=12, decimal_places=2)
    sales = SalesDaySerializer(many=True)


class PopularItemSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    name = serializers.CharField()
    category = serializers.CharField()
    price = serializers.DecimalField(max_digits=8, decimal_places=2)
    order_count = serializers.IntegerField()
    total_quantity = serializers.IntegerField()
    total_revenue = serializers.DecimalField(max_digits=12, decimal_places=2)


class RecentOrderSerializer(serializers.ModelSerializer):
    order_number = serializers.SerializerMethodField()
    table_name = serializers.CharField(read_only=True, allow_null=True)

    class Meta:
        model = Order
        fields = [
            "id",
            "order_number",
            "invoice_no",
            "status",
            "payment_status",
            "total_amount",
            "table_name",
            "created_at",
        ]
        read_only_fields = fields

    def get_order_number(self, obj) -> str:
        return f"ORD{obj.pk:03d}"
