from django.urls import path

from apps.orders import views

app_name = "orders"

urlpatterns = [
    # Vendor / staff
    path("vendors/<int:vendor_id>/orders", views.VendorOrderListView.as_view(), name="vendor-orders"),
    path("vendors/<int:vendor_id>/dashboard/stats", views.DashboardStatsView.as_view(), name="dashboard-stats"),
    path("vendors/<int:vendor_id>/dashboard/sales-report", views.SalesReportView.as_view(), name="sales-report"),
    path("vendors/<int:vendor_id>/dashboard/popular-items", views.PopularItemsView.as_view(), name="popular-items"),
    path("vendors/<int:vendor_id>/dashboard/recent-orders", views.RecentOrdersView.as_view(), name="recent-orders"),
    path("orders", views.StaffOrderCreateView.as_view(), name="order-create"),
    path("orders/<int:order_id>", views.OrderDetailView.as_view(), name="order-detail"),
    path("orders/<int:order_id>/status", views.OrderStatusView.as_view(), name="order-status"),
    path("orders/<int:order_id>/payment", views.OrderPaymentView.as_view(), name="order-payment"),
    path("orders/<int:order_id>/delivery-code", views.OrderDeliveryCodeView.as_view(), name="order-delivery-code"),
    path("orders/<int:order_id>/resolve-issue", views.OrderResolveIssueView.as_view(), name="order-resolve-issue"),
    # Public (customer)
    path("customer/orders", views.CustomerOrderCreateView.as_view(), name="customer-order-create"),
    path("customer/orders/<int:order_id>", views.CustomerOrderDetailView.as_view(), name="customer-order-detail"),
    path("customer/orders/<int:order_id>/pay", views.CustomerOrderPayView.as_view(), name="customer-order-pay"),
    path("orders/<int:order_id>/report-issue", views.OrderReportIssueView.as_view(), name="order-report-issue"),
    path("orders/<int:order_id>/verify", views.OrderVerifyView.as_view(), name="order-verify"),
]
