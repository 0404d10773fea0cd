from django.urls import path

from . import views

app_name = "users"

urlpatterns = [
    path("users/me", views.MeView.as_view(), name="me"),  # GET, PATCH
    # Staff management (vendor or admin)
    path("vendors/<int:vendor_id>/staff", views.StaffListCreateView.as_view(), name="staff-list"),
    path("vendors/<int:vendor_id>/staff/<int:staff_id>", views.StaffDetailView.as_view(), name="staff-detail"),
    path(
        "vendors/<int:vendor_id>/staff/<int:staff_id>/toggle-status",
        views.StaffToggleStatusView.as_view(),
        name="staff-toggle-status",
    ),
]
