from .drf_permissions import CanAccessVendor, IsVendorOrAdmin
from .utils import can_access_vendor, get_effective_vendor_id, is_admin, is_authenticated


class VendorScopedMixin:
    """
    For routes nested under `vendors/<vendor_id>/`.
    Checks access to the URL vendor and limits the queryset to its rows.
    """

    permission_classes = [CanAccessVendor]

    def get_vendor_id(self) -> int:
        return int(self.kwargs["vendor_id"])

    def get_queryset(self):
        queryset = super().get_queryset()
        user = getattr(self.request, "user", None)

        if not can_access_vendor(user, self.kwargs.get("vendor_id")):
            return queryset.none()

        return queryset.filter(vendor_id=self.get_vendor_id())


class VendorOwnerMixin(VendorScopedMixin):
    permission_classes = [IsVendorOrAdmin, CanAccessVendor]


class EffectiveVendorMixin:
    """
    For listings that are not nested under a vendor URL (the notification feed).
    Non-admins see rows of their effective vendor; admins see everything.
    """

    permission_classes = [CanAccessVendor]

    def get_queryset(self):
        queryset = super().get_queryset()
        user = getattr(self.request, "user", None)

        if not is_authenticated(user):
            return queryset.none()

        if is_admin(user):
            return queryset

        vendor_id = get_effective_vendor_id(user)
        if vendor_id is None:
            return queryset.none()
        return queryset.filter(vendor_id=vendor_id)
