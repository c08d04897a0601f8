"""Token issuing for the accounts app."""

import structlog
from django.utils import timezone
from django.utils.translation import gettext_lazy as _
from ninja.errors import HttpError
from ninja_jwt.exceptions import TokenError
from ninja_jwt.tokens import RefreshToken

from accounts import schema
from accounts.models import User

logger = structlog.get_logger(__name__)


def get_token_pair_for_user(user: User) -> schema.TokenPairSchema:
    """Get a token pair for the user.

    The access token carries the user's public profile so that clients can render
    the navbar without an extra round trip.
    """
    user.last_login = timezone.now()
    user.save(update_fields=["last_login"])

    logger.info("token_pair_generated", user_id=str(user.id))
    token = RefreshToken.for_user(user)
    token.payload.update(schema.MinimalUserSchema.from_orm(user).model_dump(mode="json"))
    token.payload.update(
        {
            "sub": str(user.id),
            "is_admin": user.is_platform_admin,
        }
    )
    return schema.TokenPairSchema(access=str(token.access_token), refresh=str(token))


def login(username: str, password: str) -> tuple[User, schema.TokenPairSchema]:
    """Authenticate with username and password.

    Raises:
        HttpError: 401 on bad credentials, 403 if the account is banned.
    """
    user = User.objects.filter(username__iexact=username).first()
    if user is None or not user.is_active or not user.check_password(password):
        logger.info("login_failed", username=username)
        raise HttpError(401, str(_("Invalid username or password")))
    if user.is_banned:
        logger.warning("login_blocked_banned_user", user_id=str(user.id))
        raise HttpError(403, str(_("This account has been suspended.")))
    logger.info("login_succeeded", user_id=str(user.id))
    return user, get_token_pair_for_user(user)


def refresh(refresh_token: str) -> schema.TokenPairSchema:
    """Rotate a refresh token into a fresh pair."""
    try:
        token = RefreshToken(refresh_token)  # type: ignore[arg-type]
        user = User.objects.get(id=token.payload["user_id"])
    except (TokenError, KeyError, User.DoesNotExist):
        raise HttpError(401, str(_("Invalid refresh token.")))
    if user.is_banned:
        raise HttpError(403, str(_("This account has been suspended.")))
    token.blacklist()
    return get_token_pair_for_user(user)


def logout(refresh_token: str) -> None:
    """Blacklist the refresh token so it cannot be used again."""
    try:
        RefreshToken(refresh_token).blacklist()  # type: ignore[arg-type]
    except TokenError:
        # Already expired or blacklisted: the session is over either way.
        logger.info("logout_with_invalid_token")
        return
    logger.info("logout_completed")
