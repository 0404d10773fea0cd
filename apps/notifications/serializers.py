from rest_framework import serializers

from apps.notifications.models import Notification


class NotificationSerializer(serializers.ModelSerializer):
    vendor_id = serializers.IntegerField(read_only=True)
    timestamp = serializers.DateTimeField(source="created_at", read_only=True)

    class Meta:
        model = Notification
        fields = ["id", "key", "vendor_id", "type", "title", "message", "timestamp", "created_at", "read", "data"]
        read_only_fields = fields


class NotificationBulkActionSerializer(serializers.Serializer):
    ACTIONS = ("mark_all_read", "clear")

    action = serializers.ChoiceField(choices=ACTIONS)


class WaiterCallSerializer(serializers.Serializer):
    vendor_id = serializers.IntegerField()
    table_identifier = serializers.CharField(max_length=100)
    table_name = serializers.CharField(max_length=100, required=False, allow_blank=True)
