from rest_framework import permissions

from .constants import UserRole
from .utils import can_access_vendor, has_role, is_admin, is_authenticated


class CanAccessVendor(permissions.BasePermission):
    """
    Guards vendor-scoped resources.

    The vendor comes from the `vendor_id` URL kwarg for collection routes and
    from `obj.vendor_id` for object routes.
    """

    message = "Access denied. You can only access your own restaurant's data."

    def has_permission(self, request, view) -> bool:
        if not is_authenticated(request.user):
            return False

        vendor_id = view.kwargs.get("vendor_id")
        if vendor_id is None:
            return True
        return can_access_vendor(request.user, vendor_id)

    def has_object_permission(self, request, view, obj) -> bool:
        return can_access_vendor(request.user, getattr(obj, "vendor_id", None))


class IsVendorOrAdmin(permissions.BasePermission):
    message = "Access denied. Vendor privileges required."

    def has_permission(self, request, view) -> bool:
        return has_role(request.user, UserRole.VENDOR) or is_admin(request.user)
