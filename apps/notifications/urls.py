from django.urls import path

from . import views

app_name = "notifications"

urlpatterns = [
    path("notifications/", views.NotificationListView.as_view(), name="list"),
    path("notifications/bulk-actions/", views.NotificationBulkActionView.as_view(), name="bulk-actions"),
    path("notifications/stream", views.notification_stream, name="stream"),
    path("notifications/<int:notification_id>/", views.NotificationDetailView.as_view(), name="detail"),
    path("call-waiter", views.CallWaiterView.as_view(), name="call-waiter"),
]
