from rest_framework import serializers

from apps.tables.models import Table


class TableSerializer(serializers.ModelSerializer):
    vendor_id = serializers.IntegerField(read_only=True)
    menu_url = serializers.CharField(read_only=True)

    class Meta:
        model = Table
        fields = ["id", "vendor_id", "name", "qr_code", "menu_url", "is_active", "created_at"]
        read_only_fields = ["id", "vendor_id", "qr_code", "created_at"]

    def validate_name(self, value):
        value = value.strip()
        if not value:
            raise serializers.ValidationError("Table name is required.")

        vendor_id = self.instance.vendor_id if self.instance else self.context.get("vendor_id")
        duplicates = Table.objects.filter(vendor_id=vendor_id, name=value)
        if self.instance:
            duplicates = duplicates.exclude(pk=self.instance.pk)
        if duplicates.exists():
            raise serializers.ValidationError("A table with this name already exists.")
        return value


class TableQRSerializer(serializers.Serializer):
    table_id = serializers.IntegerField()
    name = serializers.CharField()
    qr_code = serializers.UUIDField()
    menu_url = serializers.CharField()
    qr_image = serializers.CharField(help_text="Base64-encoded PNG")


class PublicTableStatusSerializer(serializers.Serializer):
    table_id = serializers.IntegerField()
    name = serializers.CharField()
    qr_code = serializers.UUIDField()
    is_active = serializers.BooleanField()
    vendor_id = serializers.IntegerField()
    has_active_order = serializers.BooleanField()
    active_order_id = serializers.IntegerField(allow_null=True)
