"""
Shared utility functions for role resolution and tenant scoping.
Every vendor-scoped permission class, mixin and service goes through these,
so access decisions are made the same way everywhere.
"""

from apps.common.constants import UserRole


def is_authenticated(user) -> bool:
    return user is not None and getattr(user, "is_authenticated", False)


def has_role(user, role: str) -> bool:
    return is_authenticated(user) and getattr(user, "role", None) == role


def is_admin(user) -> bool:
    return has_role(user, UserRole.ADMIN)


def get_effective_vendor_id(user) -> int | None:
    """
    Return the vendor id this identity acts on behalf of.

    Staff act for their owning vendor, everybody else for themselves.
    Admins get their own id here even though they are not scoped by it;
    `can_access_vendor` is what grants them global access.
    """
    if not is_authenticated(user):
        return None
    if user.role == UserRole.STAFF:
        return user.vendor_id
    return user.id


def normalize_vendor_id(vendor_id) -> int | None:
    """Parse an int or numeric string; anything else becomes None (never matches)."""
    if isinstance(vendor_id, bool):
        return None
    if isinstance(vendor_id, int):
        return vendor_id
    try:
        return int(str(vendor_id).strip())
    except (TypeError, ValueError):
        return None


def can_access_vendor(user, vendor_id) -> bool:
    if not is_authenticated(user):
        return False
    if is_admin(user):
        return True

    effective_vendor_id = get_effective_vendor_id(user)
    target = normalize_vendor_id(vendor_id)
    if effective_vendor_id is None or target is None:
        return False
    return effective_vendor_id == target
