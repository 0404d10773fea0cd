import logging

from django.contrib.auth import get_user_model
from django.shortcuts import get_object_or_404
from drf_spectacular.utils import extend_schema, extend_schema_view
from rest_framework import generics, permissions, status
from rest_framework.response import Response

from apps.common.constants import UserRole
from apps.common.mixins import VendorOwnerMixin

from .serializers import StaffCreateSerializer, StaffSerializer, StaffUpdateSerializer, UserSerializer

logger = logging.getLogger(__name__)

User = get_user_model()


@extend_schema_view(
    get=extend_schema(summary="Current user profile"),
    patch=extend_schema(summary="Update own profile fields"),
)
class MeView(generics.RetrieveUpdateAPIView):
    serializer_class = UserSerializer
    permission_classes = [permissions.IsAuthenticated]
    http_method_names = ["get", "patch", "head", "options"]

    def get_object(self):
        return self.request.user


class _StaffMixin(VendorOwnerMixin):
    queryset = User.objects.filter(role=UserRole.STAFF)

    def get_vendor(self):
        return get_object_or_404(User, pk=self.get_vendor_id(), role=UserRole.VENDOR)


@extend_schema_view(
    get=extend_schema(summary="Vendor: list staff accounts"),
    post=extend_schema(summary="Vendor: create a staff account"),
)
class StaffListCreateView(_StaffMixin, generics.ListCreateAPIView):
    def get_serializer_class(self):
        if self.request.method == "POST":
            return StaffCreateSerializer
        return StaffSerializer

    def get_serializer_context(self):
        context = super().get_serializer_context()
        if self.request.method == "POST":
            context["vendor"] = self.get_vendor()
        return context

    def perform_create(self, serializer):
        staff = serializer.save()
        logger.info("Staff %s created for vendor %s", staff.pk, staff.vendor_id)


@extend_schema_view(
    get=extend_schema(summary="Vendor: staff account detail"),
    patch=extend_schema(summary="Vendor: update a staff account"),
    delete=extend_schema(summary="Vendor: delete a staff account"),
)
class StaffDetailView(_StaffMixin, generics.RetrieveUpdateDestroyAPIView):
    lookup_url_kwarg = "staff_id"
    http_method_names = ["get", "patch", "delete", "head", "options"]

    def get_serializer_class(self):
        if self.request.method == "PATCH":
            return StaffUpdateSerializer
        return StaffSerializer

    def perform_destroy(self, instance):
        logger.info("Staff %s deleted from vendor %s", instance.pk, instance.vendor_id)
        instance.delete()


@extend_schema(summary="Vendor: activate or deactivate a staff account", request=None, responses=StaffSerializer)
class StaffToggleStatusView(_StaffMixin, generics.GenericAPIView):
    serializer_class = StaffSerializer

    def patch(self, request, vendor_id, staff_id):
        staff = get_object_or_404(self.get_queryset(), pk=staff_id)
        staff.set_active(not staff.is_active)
        logger.info("Staff %s of vendor %s is now %s", staff.pk, vendor_id, "active" if staff.is_active else "inactive")
        return Response(StaffSerializer(staff).data, status=status.HTTP_200_OK)
