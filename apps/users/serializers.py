from django.contrib.auth import get_user_model, password_validation
from rest_framework import serializers

from apps.common.utils import get_effective_vendor_id

User = get_user_model()


class UserSerializer(serializers.ModelSerializer):
    vendor_id = serializers.IntegerField(read_only=True)
    effective_vendor_id = serializers.SerializerMethodField()

    class Meta:
        model = User
        fields = [
            "id",
            "email",
            "role",
            "vendor_id",
            "effective_vendor_id",
            "restaurant_name",
            "owner_name",
            "phone",
            "location",
            "description",
            "opening_time",
            "closing_time",
            "is_active",
            "created_at",
        ]
        read_only_fields = ["id", "email", "role", "is_active", "created_at"]

    def get_effective_vendor_id(self, obj) -> int | None:
        return get_effective_vendor_id(obj)


class StaffSerializer(serializers.ModelSerializer):
    vendor_id = serializers.IntegerField(read_only=True)

    class Meta:
        model = User
        fields = ["id", "email", "owner_name", "phone", "role", "vendor_id", "is_active", "created_at"]
        read_only_fields = ["id", "role", "vendor_id", "is_active", "created_at"]


class StaffCreateSerializer(serializers.ModelSerializer):
    password = serializers.CharField(write_only=True, min_length=8)

    class Meta:
        model = User
        fields = ["id", "email", "password", "owner_name", "phone"]

    def validate_email(self, value):
        if User.objects.filter(email__iexact=value).exists():
            raise serializers.ValidationError("Email already registered.")
        return value

    def validate_password(self, value):
        password_validation.validate_password(value)
        return value

    def create(self, validated_data):
        vendor = self.context["vendor"]
        password = validated_data.pop("password")
        return User.objects.create_staff(vendor, validated_data.pop("email"), password, **validated_data)

    def to_representation(self, instance):
        return StaffSerializer(instance, context=self.context).data


class StaffUpdateSerializer(serializers.ModelSerializer):
    password = serializers.CharField(write_only=True, min_length=8, required=False)

    class Meta:
        model = User
        fields = ["email", "password", "owner_name", "phone"]

    def validate_email(self, value):
        if User.objects.filter(email__iexact=value).exclude(pk=self.instance.pk).exists():
            raise serializers.ValidationError("Email already registered.")
        return value

    def validate_password(self, value):
        password_validation.validate_password(value, self.instance)
        return value

    def update(self, instance, validated_data):
        password = validated_data.pop("password", None)
        if password:
            instance.set_password(password)
        return super().update(instance, validated_data)

    def to_representation(self, instance):
        return StaffSerializer(instance, context=self.context).data
