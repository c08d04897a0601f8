import typing as t

import structlog
from django.conf import settings
from django.contrib.auth.models import AnonymousUser
from django.http import HttpRequest
from django.utils.translation import gettext_lazy as _
from ninja_jwt.authentication import JWTAuth
from ninja_jwt.exceptions import AuthenticationFailed

logger = structlog.get_logger(__name__)


class ActiveUserJWTAuth(JWTAuth):
    """JWT authentication that refuses banned accounts.

    A token issued before a ban stays cryptographically valid until it expires, so the
    ban flag is checked on every request instead of only at login.

    Usage:
        @route.get("/endpoint", auth=ActiveUserJWTAuth())
        def my_endpoint(request):
            ...
    """

    def authenticate(self, request: HttpRequest, token: str) -> t.Any:
        """Authenticate the request and reject banned users.

        Raises:
            AuthenticationFailed: If the token is invalid or the account is banned
        """
        user = super().authenticate(request, token)

        if user and getattr(user, "is_banned", False):
            logger.warning("banned_user_request_rejected", user_id=str(user.pk))
            raise AuthenticationFailed(str(_("Your account has been banned.")))

        return user


class OptionalAuth(ActiveUserJWTAuth):
    """Optional JWT authentication.

    - If a JWT token is present: authenticates the user
    - If no JWT token: sets request.user to AnonymousUser and continues

    Used by public endpoints that enrich their payload for signed-in callers
    (e.g. `is_following` on user search results).
    """

    def __call__(self, request: HttpRequest) -> t.Any | None:
        """Overrides ActiveUserJWTAuth __call__ to provide optional auth."""
        headers = request.headers
        auth_value = headers.get(self.header)
        if not auth_value:
            request.user = AnonymousUser()
            return request.user
        parts = auth_value.split(" ")

        if parts[0].lower() != self.openapi_scheme:
            if settings.DEBUG:
                logger.error("unexpected_auth_header", auth_scheme=parts[0])
            return None
        token = " ".join(parts[1:])
        return self.authenticate(request, token)
