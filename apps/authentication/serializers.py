from django.contrib.auth import get_user_model, password_validation
from rest_framework import serializers
from rest_framework_simplejwt.exceptions import InvalidToken
from rest_framework_simplejwt.serializers import TokenObtainPairSerializer, TokenRefreshSerializer

from apps.authentication.utils import generate_tokens_for_user, get_custom_token
from apps.common.constants import UserRole
from apps.users.serializers import UserSerializer

User = get_user_model()


class CustomTokenObtainPairSerializer(TokenObtainPairSerializer):
    @classmethod
    def get_token(cls, user):
        return get_custom_token(user)

    def validate(self, attrs):
        data = super().validate(attrs)
        data["user"] = UserSerializer(self.user).data
        return data


class RefreshSerializer(TokenRefreshSerializer):
    refresh = serializers.CharField(required=False, allow_blank=True, write_only=True)

    def validate(self, attrs):
        # Cookie first, body as a fallback for non-browser clients
        refresh_token = self.context["request"].COOKIES.get("refresh_token") or attrs.get("refresh")
        if not refresh_token:
            raise InvalidToken("No valid refresh token found in cookie 'refresh_token' or request body")

        attrs["refresh"] = refresh_token
        return super().validate(attrs)


class RegisterSerializer(serializers.ModelSerializer):
    password = serializers.CharField(write_only=True, min_length=8)
    password2 = serializers.CharField(write_only=True, min_length=8)
    restaurant_name = serializers.CharField(max_length=100)

    class Meta:
        model = User
        fields = (
            "id",
            "email",
            "password",
            "password2",
            "restaurant_name",
            "owner_name",
            "phone",
            "location",
            "description",
            "opening_time",
            "closing_time",
        )
        read_only_fields = ("id",)

    def validate_email(self, value):
        if User.objects.filter(email__iexact=value).exists():
            raise serializers.ValidationError("Email already registered.")
        return value

    def validate_password(self, value):
        password_validation.validate_password(value, self.instance)
        return value

    def validate(self, data):
        if data["password"] != data["password2"]:
            raise serializers.ValidationError({"password2": "Passwords do not match."})
        return data

    def create(self, validated_data):
        validated_data.pop("password2")
        validated_data["role"] = UserRole.VENDOR
        return User.objects.create_user(**validated_data)

    def to_representation(self, instance):
        # A new vendor is signed in straight away.
        return {**UserSerializer(instance).data, **generate_tokens_for_user(instance)}
