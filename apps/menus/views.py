from django.contrib.auth import get_user_model
from django.shortcuts import get_object_or_404
from drf_spectacular.utils import extend_schema, extend_schema_view
from rest_framework import generics, status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.common.constants import UserRole
from apps.common.mixins import VendorScopedMixin
from apps.menus.models import MenuItem
from apps.menus.serializers import MenuCategorySerializer, MenuItemSerializer, VendorInfoSerializer, group_by_category

User = get_user_model()


# --- Vendor-scoped items ---
@extend_schema_view(
    get=extend_schema(summary="Vendor/Staff: list menu items"),
    post=extend_schema(summary="Vendor/Staff: create a menu item"),
)
class MenuItemListCreateView(VendorScopedMixin, generics.ListCreateAPIView):
    queryset = MenuItem.objects.all()
    serializer_class = MenuItemSerializer
    filterset_fields = ["category", "is_available"]

    def perform_create(self, serializer):
        vendor = get_object_or_404(User, pk=self.get_vendor_id(), role=UserRole.VENDOR)
        serializer.save(vendor=vendor)


@extend_schema(summary="Vendor/Staff: menu items grouped by category", responses=MenuCategorySerializer(many=True))
class MenuCategoriesView(VendorScopedMixin, generics.GenericAPIView):
    queryset = MenuItem.objects.order_by("category", "name")

    def get(self, request, vendor_id):
        items = list(self.get_queryset())
        return Response(
            {
                "categories": group_by_category(items, context={"request": request}),
                "total_items": len(items),
            }
        )


@extend_schema_view(
    get=extend_schema(summary="Vendor/Staff: menu item detail"),
    patch=extend_schema(summary="Vendor/Staff: update a menu item"),
    delete=extend_schema(summary="Vendor/Staff: delete a menu item"),
)
class MenuItemDetailView(VendorScopedMixin, generics.RetrieveUpdateDestroyAPIView):
    queryset = MenuItem.objects.all()
    serializer_class = MenuItemSerializer
    lookup_url_kwarg = "item_id"
    http_method_names = ["get", "patch", "delete", "head", "options"]


@extend_schema(summary="Vendor/Staff: toggle menu item availability", request=None, responses=MenuItemSerializer)
class MenuItemToggleView(VendorScopedMixin, generics.GenericAPIView):
    queryset = MenuItem.objects.all()
    serializer_class = MenuItemSerializer

    def patch(self, request, vendor_id, item_id):
        item = get_object_or_404(self.get_queryset(), pk=item_id)
        item.is_available = not item.is_available
        item.save(update_fields=["is_available", "updated_at"])
        return Response(MenuItemSerializer(item, context={"request": request}).data, status=status.HTTP_200_OK)


# --- Public ---
@extend_schema(summary="Public: available menu of a vendor grouped by category")
class PublicMenuView(APIView):
    permission_classes = [AllowAny]
    authentication_classes = []

    def get(self, request, vendor_id):
        vendor = get_object_or_404(User, pk=vendor_id, role=UserRole.VENDOR, is_active=True)
        items = MenuItem.objects.filter(vendor=vendor, is_available=True).order_by("category", "name")

        return Response(
            {
                "vendor_info": VendorInfoSerializer(vendor).data,
                "categories": group_by_category(items, context={"request": request}),
            }
        )
