import logging

from django.conf import settings
from django.shortcuts import get_object_or_404
from drf_spectacular.utils import extend_schema
from rest_framework import generics, status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.common.drf_permissions import CanAccessVendor
from apps.common.mixins import VendorScopedMixin
from apps.common.utils import can_access_vendor
from apps.orders import analytics, services
from apps.orders.lifecycle import OrderError
from apps.orders.models import Order
from apps.orders.serializers import (
    CustomerOrderCreateSerializer,
    CustomerOrderSerializer,
    DashboardLimitSerializer,
    DashboardStatsSerializer,
    DeliveryCodeSerializer,
    DeliveryVerifySerializer,
    IssueReportSerializer,
    IssueResolveSerializer,
    OrderSerializer,
    OrderStatusUpdateSerializer,
    PaymentInitiateSerializer,
    PaymentUpdateSerializer,
    PopularItemSerializer,
    RecentOrderSerializer,
    SalesReportQuerySerializer,
    SalesReportSerializer,
    StaffOrderCreateSerializer,
)

logger = logging.getLogger(__name__)


def _error(e: OrderError) -> Response:
    return Response({"error": str(e)}, status=e.status_code)


class _OrderQuerysetMixin:
    queryset = Order.objects.select_related("table", "vendor").prefetch_related("items")


class _ScopedOrderMixin(_OrderQuerysetMixin):
    """Order-addressed staff routes: 404 when missing, 403 when it belongs to another vendor."""

    permission_classes = [CanAccessVendor]
    lookup_url_kwarg = "order_id"


class _PublicOrderMixin(_OrderQuerysetMixin):
    permission_classes = [AllowAny]
    authentication_classes = []
    lookup_url_kwarg = "order_id"


# --- Vendor / staff ---
@extend_schema(summary="Vendor/Staff: list orders of a vendor")
class VendorOrderListView(VendorScopedMixin, _OrderQuerysetMixin, generics.ListAPIView):
    serializer_class = OrderSerializer
    filterset_fields = ["status", "payment_status", "table"]


@extend_schema(
    summary="Vendor/Staff: place an order for one of the vendor's tables",
    request=StaffOrderCreateSerializer,
    responses={201: OrderSerializer},
)
class StaffOrderCreateView(generics.GenericAPIView):
    permission_classes = [CanAccessVendor]
    serializer_class = StaffOrderCreateSerializer

    def post(self, request):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        if not can_access_vendor(request.user, data["vendor_id"]):
            self.permission_denied(request, message=CanAccessVendor.message)

        try:
            order = services.create_staff_order(
                data["vendor_id"], data["items"], table_id=data.get("table_id"), actor=request.user
            )
        except OrderError as e:
            return _error(e)
        return Response(OrderSerializer(order).data, status=status.HTTP_201_CREATED)


@extend_schema(summary="Vendor/Staff: order detail")
class OrderDetailView(_ScopedOrderMixin, generics.RetrieveAPIView):
    serializer_class = OrderSerializer


@extend_schema(
    summary="Vendor/Staff: accept, reject or complete an order",
    request=OrderStatusUpdateSerializer,
    responses={200: OrderSerializer},
)
class OrderStatusView(_ScopedOrderMixin, generics.GenericAPIView):
    serializer_class = OrderStatusUpdateSerializer

    def patch(self, request, order_id):
        order = self.get_object()
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            order = services.change_status(order.pk, serializer.validated_data["status"], actor=request.user)
        except OrderError as e:
            return _error(e)
        return Response(OrderSerializer(order).data, status=status.HTTP_200_OK)


@extend_schema(
    summary="Vendor/Staff: update payment status, method or transaction id",
    request=PaymentUpdateSerializer,
    responses={200: OrderSerializer},
)
class OrderPaymentView(_ScopedOrderMixin, generics.GenericAPIView):
    serializer_class = PaymentUpdateSerializer

    def patch(self, request, order_id):
        order = self.get_object()
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            order = services.update_payment(order.pk, actor=request.user, **serializer.validated_data)
        except OrderError as e:
            return _error(e)
        return Response(OrderSerializer(order).data, status=status.HTTP_200_OK)


@extend_schema(
    summary="Vendor/Staff: issue a delivery code for the customer",
    request=None,
    responses={201: DeliveryCodeSerializer},
)
class OrderDeliveryCodeView(_ScopedOrderMixin, generics.GenericAPIView):
    serializer_class = DeliveryCodeSerializer

    def post(self, request, order_id):
        order = self.get_object()
        try:
            code = services.issue_delivery_code(order.pk)
        except OrderError as e:
            return _error(e)

        data = {"order_id": order.pk, "verification_code": code, "expires_in": settings.DELIVERY_CODE_TTL}
        return Response(DeliveryCodeSerializer(data).data, status=status.HTTP_201_CREATED)


@extend_schema(
    summary="Vendor/Staff: resolve a reported delivery issue",
    request=IssueResolveSerializer,
    responses={200: OrderSerializer},
)
class OrderResolveIssueView(_ScopedOrderMixin, generics.GenericAPIView):
    serializer_class = IssueResolveSerializer

    def post(self, request, order_id):
        order = self.get_object()
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            order = services.resolve_issue(
                order.pk, serializer.validated_data.get("resolution_message", ""), actor=request.user
            )
        except OrderError as e:
            return _error(e)
        return Response(OrderSerializer(order).data, status=status.HTTP_200_OK)


# --- Public (customer) ---
@extend_schema(
    summary="Customer: place an order from the public menu",
    request=CustomerOrderCreateSerializer,
    responses={201: CustomerOrderSerializer},
)
class CustomerOrderCreateView(APIView):
    permission_classes = [AllowAny]
    authentication_classes = []

    def post(self, request):
        serializer = CustomerOrderCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        try:
            order = services.create_customer_order(
                data["vendor_id"], data["items"], table_identifier=data.get("table_identifier") or None
            )
        except OrderError as e:
            return _error(e)
        return Response(CustomerOrderSerializer(order).data, status=status.HTTP_201_CREATED)


@extend_schema(summary="Customer: track an order")
class CustomerOrderDetailView(_PublicOrderMixin, generics.RetrieveAPIView):
    serializer_class = CustomerOrderSerializer


@extend_schema(
    summary="Customer: start paying for an order",
    request=PaymentInitiateSerializer,
    responses={200: CustomerOrderSerializer},
)
class CustomerOrderPayView(_PublicOrderMixin, generics.GenericAPIView):
    serializer_class = PaymentInitiateSerializer

    def post(self, request, order_id):
        order = get_object_or_404(Order, pk=order_id)
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            order = services.initiate_payment(order.pk, serializer.validated_data["payment_method"])
        except OrderError as e:
            return _error(e)
        return Response(CustomerOrderSerializer(order).data, status=status.HTTP_200_OK)


@extend_schema(
    summary="Customer: report that an order was not received",
    request=IssueReportSerializer,
    responses={200: CustomerOrderSerializer},
)
class OrderReportIssueView(_PublicOrderMixin, generics.GenericAPIView):
    serializer_class = IssueReportSerializer

    def post(self, request, order_id):
        order = get_object_or_404(Order, pk=order_id)
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            order = services.report_issue(order.pk, serializer.validated_data.get("issue_description", ""))
        except OrderError as e:
            return _error(e)
        return Response(CustomerOrderSerializer(order).data, status=status.HTTP_200_OK)


@extend_schema(
    summary="Customer: confirm delivery with the 6-digit code",
    request=DeliveryVerifySerializer,
    responses={200: CustomerOrderSerializer},
)
class OrderVerifyView(_PublicOrderMixin, generics.GenericAPIView):
    serializer_class = DeliveryVerifySerializer

    def post(self, request, order_id):
        order = get_object_or_404(Order, pk=order_id)
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            order = services.verify_delivery(order.pk, serializer.validated_data["code"])
        except OrderError as e:
            return _error(e)
        return Response(CustomerOrderSerializer(order).data, status=status.HTTP_200_OK)


# --- Dashboard ---
@extend_schema(summary="Vendor/Staff: dashboard totals", responses=DashboardStatsSerializer)
class DashboardStatsView(VendorScopedMixin, _OrderQuerysetMixin, generics.GenericAPIView):
    def get(self, request, vendor_id):
        stats = analytics.dashboard_stats(self.get_vendor_id())
        return Response(DashboardStatsSerializer(stats).data)


@extend_schema(
    summary="Vendor/Staff: daily sales of completed, paid orders",
    parameters=[SalesReportQuerySerializer],
    responses=SalesReportSerializer,
)
class SalesReportView(VendorScopedMixin, _OrderQuerysetMixin, generics.GenericAPIView):
    def get(self, request, vendor_id):
        query = SalesReportQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        report = analytics.sales_report(self.get_vendor_id(), query.validated_data["timeframe"])
        return Response(SalesReportSerializer(report).data)


@extend_schema(
    summary="Vendor/Staff: best selling menu items",
    parameters=[DashboardLimitSerializer],
    responses=PopularItemSerializer(many=True),
)
class PopularItemsView(VendorScopedMixin, _OrderQuerysetMixin, generics.GenericAPIView):
    def get(self, request, vendor_id):
        query = DashboardLimitSerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        items = analytics.popular_items(self.get_vendor_id(), query.validated_data["limit"])
        return Response({"popular_items": PopularItemSerializer(items, many=True).data})


@extend_schema(
    summary="Vendor/Staff: latest orders",
    parameters=[DashboardLimitSerializer],
    responses=RecentOrderSerializer(many=True),
)
class RecentOrdersView(VendorScopedMixin, _OrderQuerysetMixin, generics.GenericAPIView):
    def get(self, request, vendor_id):
        query = DashboardLimitSerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        orders = self.get_queryset().order_by("-created_at", "-id")[: query.validated_data["limit"]]
        return Response({"recent_orders": RecentOrderSerializer(orders, many=True).data})
