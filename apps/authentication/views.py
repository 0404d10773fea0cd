import logging

from django.conf import settings
from django.contrib.auth import get_user_model
from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.generics import CreateAPIView
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView
from rest_framework_simplejwt.exceptions import InvalidToken, TokenError
from rest_framework_simplejwt.tokens import RefreshToken
from rest_framework_simplejwt.views import TokenObtainPairView, TokenRefreshView

from apps.authentication.serializers import CustomTokenObtainPairSerializer, RefreshSerializer, RegisterSerializer

logger = logging.getLogger(__name__)

User = get_user_model()

COOKIE_NAME = "refresh_token"
COOKIE_PATH = "/"
COOKIE_SAMESITE = "Lax"


class RefreshCookieMixin:
    """
    Mirrors a successful response's `refresh` token into an httpOnly cookie.

    The token stays in the body as well: dashboards read it from the cookie,
    kiosks and scripts from the JSON.
    """

    def finalize_response(self, request, response, *args, **kwargs):
        refresh = response.data.get("refresh") if isinstance(getattr(response, "data", None), dict) else None
        if refresh and status.is_success(response.status_code):
            response.set_cookie(
                COOKIE_NAME,
                refresh,
                max_age=int(settings.SIMPLE_JWT["REFRESH_TOKEN_LIFETIME"].total_seconds()),
                path=COOKIE_PATH,
                samesite=COOKIE_SAMESITE,
                secure=request.is_secure() or not settings.DEBUG,
                httponly=True,
            )
        return super().finalize_response(request, response, *args, **kwargs)


@extend_schema(summary="Register a vendor (restaurant) account")
class RegisterView(RefreshCookieMixin, CreateAPIView):
    permission_classes = [AllowAny]
    authentication_classes = []

    queryset = User.objects.all()
    serializer_class = RegisterSerializer

    def perform_create(self, serializer):
        vendor = serializer.save()
        logger.info("Vendor %s registered (%s)", vendor.pk, vendor.email)


@extend_schema(summary="Obtain access and refresh tokens")
class LoginView(RefreshCookieMixin, TokenObtainPairView):
    permission_classes = [AllowAny]
    authentication_classes = []
    serializer_class = CustomTokenObtainPairSerializer


@extend_schema(summary="Rotate the refresh token (cookie first, then body)")
class RefreshView(RefreshCookieMixin, TokenRefreshView):
    permission_classes = [AllowAny]
    authentication_classes = []
    serializer_class = RefreshSerializer


@extend_schema(summary="Blacklist the refresh token", request=None, responses={204: None})
class LogoutView(APIView):
    permission_classes = [AllowAny]
    authentication_classes = []

    def post(self, request):
        refresh = request.COOKIES.get(COOKIE_NAME) or request.data.get("refresh")

        if refresh:
            try:
                RefreshToken(refresh).blacklist()
            except (InvalidToken, TokenError):
                logger.info("Logout with an invalid or already blacklisted refresh token")

        response = Response(status=status.HTTP_204_NO_CONTENT)
        response.delete_cookie(COOKIE_NAME, path=COOKIE_PATH, samesite=COOKIE_SAMESITE)
        return response
