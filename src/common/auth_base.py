"""Permission-aware authentication classes for the EventHub API."""

import typing as t

from django.contrib.auth.models import AnonymousUser
from django.http import HttpRequest
from django.utils.translation import gettext_lazy as _
from ninja_extra import status
from ninja_extra.exceptions import APIException

from .authentication import ActiveUserJWTAuth


class PermissionDenied(APIException):
    """Exception raised when user doesn't have required permissions."""

    status_code = status.HTTP_403_FORBIDDEN
    default_detail = _("Permission denied")


class BaseJWTAuth(ActiveUserJWTAuth):
    """JWT authentication with additional permission checks.

    Checks platform admin status or a verified email address on top of
    plain authentication.
    """

    def __init__(
        self,
        *,
        is_platform_admin: bool = False,
        requires_verified_email: bool = False,
    ) -> None:
        """Initialize the BaseJWTAuth authentication class.

        Args:
            is_platform_admin: Whether the user must be a platform admin (or a Django superuser).
            requires_verified_email: Whether the endpoint requires a verified email address.
        """
        self.is_platform_admin = is_platform_admin
        self.requires_verified_email = requires_verified_email
        super().__init__()

    def authenticate(self, request: HttpRequest, token: str) -> t.Any:
        """Authenticate and verify user permissions.

        Raises:
            PermissionDenied: If user doesn't meet required criteria
        """
        user = super().authenticate(request, token)

        if user and not isinstance(user, AnonymousUser):
            if self.requires_verified_email and not getattr(user, "email_verified", False):
                raise PermissionDenied(str(_("Email verification required.")))

            if self.is_platform_admin and not getattr(user, "is_platform_admin", False):
                raise PermissionDenied(str(_("Admin access required.")))

        return user


class PlatformAdminAuth(BaseJWTAuth):
    """Shortcut for endpoints reserved to platform admins."""

    def __init__(self) -> None:
        """Require platform admin rights."""
        super().__init__(is_platform_admin=True)
