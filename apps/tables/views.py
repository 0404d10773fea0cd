import logging

from django.contrib.auth import get_user_model
from django.shortcuts import get_object_or_404
from drf_spectacular.utils import extend_schema, extend_schema_view
from rest_framework import generics, status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.common.constants import OrderStatus, UserRole
from apps.common.mixins import VendorScopedMixin
from apps.orders.models import Order
from apps.tables.models import Table
from apps.tables.serializers import PublicTableStatusSerializer, TableQRSerializer, TableSerializer
from apps.tables.utils import render_qr_png_base64

logger = logging.getLogger(__name__)

User = get_user_model()


def _qr_payload(table) -> dict:
    return {
        "table_id": table.id,
        "name": table.name,
        "qr_code": table.qr_code,
        "menu_url": table.menu_url,
        "qr_image": render_qr_png_base64(table.menu_url),
    }


@extend_schema_view(
    get=extend_schema(summary="Vendor/Staff: list tables"),
    post=extend_schema(summary="Vendor/Staff: create a table"),
)
class TableListCreateView(VendorScopedMixin, generics.ListCreateAPIView):
    queryset = Table.objects.all()
    serializer_class = TableSerializer
    filterset_fields = ["is_active"]

    def get_serializer_context(self):
        context = super().get_serializer_context()
        context["vendor_id"] = self.get_vendor_id()
        return context

    def perform_create(self, serializer):
        vendor = get_object_or_404(User, pk=self.get_vendor_id(), role=UserRole.VENDOR)
        table = serializer.save(vendor=vendor)
        logger.info("Table %s created for vendor %s", table.pk, vendor.pk)


@extend_schema_view(
    get=extend_schema(summary="Vendor/Staff: table detail"),
    patch=extend_schema(summary="Vendor/Staff: rename or (de)activate a table"),
    delete=extend_schema(summary="Vendor/Staff: delete a table"),
)
class TableDetailView(VendorScopedMixin, generics.RetrieveUpdateDestroyAPIView):
    queryset = Table.objects.all()
    serializer_class = TableSerializer
    lookup_url_kwarg = "table_id"
    http_method_names = ["get", "patch", "delete", "head", "options"]


@extend_schema(summary="Vendor/Staff: QR code image for a table", responses=TableQRSerializer)
class TableQRView(VendorScopedMixin, generics.GenericAPIView):
    queryset = Table.objects.all()
    serializer_class = TableQRSerializer

    def get(self, request, vendor_id, table_id):
        table = get_object_or_404(self.get_queryset(), pk=table_id)
        return Response(TableQRSerializer(_qr_payload(table)).data)


@extend_schema(
    summary="Vendor/Staff: issue a new QR identifier, invalidating the printed one",
    request=None,
    responses=TableQRSerializer,
)
class TableRegenerateQRView(VendorScopedMixin, generics.GenericAPIView):
    queryset = Table.objects.all()
    serializer_class = TableQRSerializer

    def post(self, request, vendor_id, table_id):
        table = get_object_or_404(self.get_queryset(), pk=table_id)
        table.regenerate_qr_code()
        logger.info("QR code regenerated for table %s", table.pk)
        return Response(TableQRSerializer(_qr_payload(table)).data, status=status.HTTP_200_OK)


@extend_schema(summary="Public: table status by QR identifier", responses=PublicTableStatusSerializer)
class PublicTableStatusView(APIView):
    permission_classes = [AllowAny]
    authentication_classes = []

    def get(self, request, vendor_id, qr_code):
        table = get_object_or_404(Table, vendor_id=vendor_id, qr_code=qr_code)
        active_order = (
            Order.objects.filter(table=table, status__in=OrderStatus.active()).order_by("-created_at").first()
        )

        data = {
            "table_id": table.id,
            "name": table.name,
            "qr_code": table.qr_code,
            "is_active": table.is_active,
            "vendor_id": table.vendor_id,
            "has_active_order": active_order is not None,
            "active_order_id": active_order.id if active_order else None,
        }
        return Response(PublicTableStatusSerializer(data).data)
