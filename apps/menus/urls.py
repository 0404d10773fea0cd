from django.urls import path

from . import views

app_name = "menus"

urlpatterns = [
    # --- Vendor-scoped items ---
    path("vendors/<int:vendor_id>/menu", views.MenuItemListCreateView.as_view(), name="item-list"),  # GET, POST
    path("vendors/<int:vendor_id>/menu/categories", views.MenuCategoriesView.as_view(), name="categories"),
    path("vendors/<int:vendor_id>/menu/<int:item_id>", views.MenuItemDetailView.as_view(), name="item-detail"),
    path("vendors/<int:vendor_id>/menu/<int:item_id>/toggle", views.MenuItemToggleView.as_view(), name="item-toggle"),
    # --- Public ---
    path("public-menu/<int:vendor_id>/", views.PublicMenuView.as_view(), name="public-menu"),
]
