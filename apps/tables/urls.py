from django.urls import path

from . import views

app_name = "tables"

urlpatterns = [
    path("vendors/<int:vendor_id>/tables", views.TableListCreateView.as_view(), name="table-list"),  # GET, POST
    path("vendors/<int:vendor_id>/tables/<int:table_id>", views.TableDetailView.as_view(), name="table-detail"),
    path("vendors/<int:vendor_id>/tables/<int:table_id>/qr", views.TableQRView.as_view(), name="table-qr"),
    path(
        "vendors/<int:vendor_id>/tables/<int:table_id>/regenerate-qr",
        views.TableRegenerateQRView.as_view(),
        name="table-regenerate-qr",
    ),
    # --- Public ---
    path("public-table/<int:vendor_id>/<uuid:qr_code>/", views.PublicTableStatusView.as_view(), name="public-table"),
]
