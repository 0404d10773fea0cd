from rest_framework import serializers

from apps.menus.models import MenuItem


class MenuItemSerializer(serializers.ModelSerializer):
    vendor_id = serializers.IntegerField(read_only=True)
    image_url = serializers.SerializerMethodField()

    class Meta:
        model = MenuItem
        fields = [
            "id",
            "vendor_id",
            "name",
            "description",
            "price",
            "category",
            "image",
            "image_url",
            "is_available",
            "created_at",
        ]
        read_only_fields = ["id", "vendor_id", "created_at"]
        extra_kwargs = {"image": {"write_only": True, "required": False}}

    def validate_name(self, value):
        value = value.strip()
        if not value:
            raise serializers.ValidationError("Name is required.")
        return value

    def validate_category(self, value):
        value = value.strip()
        if not value:
            raise serializers.ValidationError("Category is required.")
        return value

    def get_image_url(self, obj) -> str | None:
        if not obj.image:
            return None
        request = self.context.get("request")
        return request.build_absolute_uri(obj.image.url) if request else obj.image.url


class MenuCategorySerializer(serializers.Serializer):
    name = serializers.CharField()
    items = MenuItemSerializer(many=True)


class VendorInfoSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    restaurant_name = serializers.CharField()
    owner_name = serializers.CharField()
    email = serializers.EmailField()
    phone = serializers.CharField()
    location = serializers.CharField()
    opening_time = serializers.TimeField(allow_null=True)
    closing_time = serializers.TimeField(allow_null=True)
    description = serializers.CharField()


def group_by_category(items, context=None) -> list[dict]:
    """Group menu items into `[{name, items}]`, keeping the queryset order."""
    categories: dict[str, list] = {}
    for item in items:
        categories.setdefault(item.category or "Other", []).append(item)

    return [
        {"name": name, "items": MenuItemSerializer(grouped, many=True, context=context).data}
        for name, grouped in categories.items()
    ]
