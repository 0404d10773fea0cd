from rest_framework_simplejwt.tokens import RefreshToken

from apps.common.utils import get_effective_vendor_id


def get_custom_token(user):
    """
    Return a refresh token with custom claims.

    The claims are informational for clients; every request still resolves
    the effective vendor from the database user, not from the token.
    """
    refresh = RefreshToken.for_user(user)
    refresh["role"] = user.role
    refresh["vendor_id"] = get_effective_vendor_id(user)
    refresh["email"] = user.email
    return refresh


def generate_tokens_for_user(user) -> dict:
    """
    Convenience function for access + refresh as strings.
    """
    refresh = get_custom_token(user)
    return {
        "access": str(refresh.access_token),
        "refresh": str(refresh),
    }
