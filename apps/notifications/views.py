import asyncio
import json
import logging
import uuid

from asgiref.sync import sync_to_async
from django.conf import settings
from django.contrib.auth import get_user_model
from django.core.serializers.json import DjangoJSONEncoder
from django.db.models import Q
from django.http import JsonResponse, StreamingHttpResponse
from django.shortcuts import get_object_or_404
from django.views.decorators.http import require_GET
from drf_spectacular.utils import extend_schema
from rest_framework import generics, status
from rest_framework.exceptions import AuthenticationFailed
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView
from rest_framework_simplejwt.authentication import JWTAuthentication
from rest_framework_simplejwt.exceptions import InvalidToken, TokenError

from apps.common.constants import UserRole
from apps.common.drf_permissions import CanAccessVendor
from apps.common.mixins import EffectiveVendorMixin
from apps.notifications.hub import hub
from apps.notifications.models import Notification
from apps.notifications.serializers import (
    NotificationBulkActionSerializer,
    NotificationSerializer,
    WaiterCallSerializer,
)
from apps.notifications.services import notify_waiter_call
from apps.tables.models import Table

logger = logging.getLogger(__name__)

User = get_user_model()


@extend_schema(summary="Notification feed of the caller's vendor (all vendors for admins)")
class NotificationListView(EffectiveVendorMixin, generics.ListAPIView):
    queryset = Notification.objects.all()
    serializer_class = NotificationSerializer
    filterset_fields = ["read", "type"]


class NotificationDetailView(generics.GenericAPIView):
    queryset = Notification.objects.all()
    serializer_class = NotificationSerializer
    permission_classes = [CanAccessVendor]
    lookup_url_kwarg = "notification_id"

    @extend_schema(summary="Mark a notification as read", request=None, responses=NotificationSerializer)
    def post(self, request, notification_id):
        notification = self.get_object()
        if not notification.read:
            notification.read = True
            notification.save(update_fields=["read", "updated_at"])
        return Response(self.get_serializer(notification).data)

    @extend_schema(summary="Delete a notification", responses={204: None})
    def delete(self, request, notification_id):
        notification = self.get_object()
        notification.delete()
        return Response(status=status.HTTP_204_NO_CONTENT)


@extend_schema(summary="Mark all notifications read, or clear them", request=NotificationBulkActionSerializer)
class NotificationBulkActionView(EffectiveVendorMixin, generics.GenericAPIView):
    queryset = Notification.objects.all()
    serializer_class = NotificationBulkActionSerializer

    def post(self, request):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        action = serializer.validated_data["action"]

        queryset = self.get_queryset()
        if action == "mark_all_read":
            affected = queryset.filter(read=False).update(read=True)
        else:
            affected, _ = queryset.delete()

        return Response({"action": action, "affected": affected}, status=status.HTTP_200_OK)


@extend_schema(summary="Customer: call a waiter to the table", request=WaiterCallSerializer)
class CallWaiterView(APIView):
    permission_classes = [AllowAny]
    authentication_classes = []

    def post(self, request):
        serializer = WaiterCallSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        vendor = get_object_or_404(User, pk=data["vendor_id"], role=UserRole.VENDOR)
        identifier = data["table_identifier"]

        lookup = Q(name=identifier)
        try:
            lookup |= Q(qr_code=uuid.UUID(identifier))
        except ValueError:
            pass
        table = Table.objects.filter(lookup, vendor=vendor).first()
        table_name = table.name if table else (data.get("table_name") or identifier)

        notification = notify_waiter_call(vendor.pk, identifier, table_name)
        logger.info("Waiter called to %s at vendor %s", table_name, vendor.pk)
        return Response(
            {
                "success": True,
                "message": "Waiter has been notified",
                "data": NotificationSerializer(notification).data,
            },
            status=status.HTTP_200_OK,
        )


# --- Server-sent events ---
def _authenticate(request):
    """Resolve the caller from the Authorization header, or `?token=` for EventSource clients."""
    auth = JWTAuthentication()
    try:
        result = auth.authenticate(request)
        if result is not None:
            return result[0]

        raw_token = request.GET.get("token")
        if not raw_token:
            return None
        return auth.get_user(auth.get_validated_token(raw_token))
    except (InvalidToken, TokenError, AuthenticationFailed):
        return None


async def _event_stream(user, keepalive: float):
    with hub.subscribe(user) as subscription:
        ready = {"countdown_seconds": settings.NOTIFICATION_COUNTDOWN_SECONDS}
        yield f"event: ready\ndata: {json.dumps(ready)}\n\n"
        while True:
            try:
                payload = await asyncio.wait_for(subscription.get(), timeout=keepalive)
            except TimeoutError:
                yield ": keepalive\n\n"
                continue
            yield f"event: notification\ndata: {json.dumps(payload, cls=DjangoJSONEncoder)}\n\n"


@require_GET
async def notification_stream(request):
    user = await sync_to_async(_authenticate)(request)
    if user is None or not user.is_active:
        return JsonResponse({"error": "Authentication credentials were not provided or are invalid."}, status=401)

    logger.info("Notification stream opened for user %s", user.pk)
    response = StreamingHttpResponse(
        _event_stream(user, settings.NOTIFICATION_STREAM_KEEPALIVE),
        content_type="text/event-stream",
    )
    response["Cache-Control"] = "no-cache"
    response["X-Accel-Buffering"] = "no"
    return response
