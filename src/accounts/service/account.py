"""Service layer for account lifecycle: signup, e-mail verification, password reset, profile."""

import structlog
from django.conf import settings
from django.db import IntegrityError, transaction
from django.shortcuts import get_object_or_404
from django.utils import timezone
from django.utils.translation import gettext_lazy as _
from ninja.errors import HttpError

from accounts import schema, tasks
from accounts.jwt import blacklist as blacklist_token
from accounts.jwt import check_blacklist, create_token, token_to_payload
from accounts.models import User
from accounts.password_validation import validate_password

logger = structlog.get_logger(__name__)


def ensure_email_available(email: str, *, exclude: User | None = None) -> None:
    qs = User.objects.filter(email__iexact=email)
    if exclude is not None:
        qs = qs.exclude(pk=exclude.pk)
    if qs.exists():
        raise HttpError(400, str(_("Email already registered")))


def register_user(payload: schema.SignupSchema) -> User:
    """Register a new user and send a verification email.

    Args:
        payload (schema.SignupSchema): The user data.

    Returns:
        User: The newly created user.
    """
    logger.info("user_registration_started", username=payload.username, email=payload.email)
    if User.objects.filter(username__iexact=payload.username).exists():
        logger.warning("user_registration_duplicate_username", username=payload.username)
        raise HttpError(400, str(_("Username already taken")))
    ensure_email_available(payload.email)
    validate_password(payload.password, user=User(username=payload.username, email=payload.email))
    try:
        new_user = User.objects.create_user(
            username=payload.username,
            email=payload.email,
            password=payload.password,
            display_name=payload.display_name or payload.username,
        )
    except IntegrityError:
        # Lost a race against a concurrent signup with the same username or email.
        raise HttpError(400, str(_("Username already taken")))
    logger.info("user_registration_completed", user_id=str(new_user.id))
    send_verification_email_for_user(new_user)
    return new_user


def send_verification_email_for_user(user: User) -> str:
    """Queue a verification email for a user and return the token."""
    if not user.email:
        raise HttpError(400, str(_("User email not found")))
    logger.info("verification_email_requested", user_id=str(user.id))
    verification_payload = schema.VerifyEmailJWTPayloadSchema(
        user_id=user.id,
        email=user.email,
        exp=timezone.now() + settings.EMAIL_TOKEN_LIFETIME,
    )
    token = create_token(verification_payload.model_dump(mode="json"))
    tasks.send_verification_email.delay(user.email, token)
    return token


def resend_verification_email(user: User) -> str:
    """Send a fresh verification link, unless the address is already verified."""
    if user.email_verified:
        raise HttpError(400, str(_("Email already verified")))
    return send_verification_email_for_user(user)


@transaction.atomic
def verify_email(token: str) -> User:
    """Verify a user's email.

    Args:
        token (str): The verification token.

    Returns:
        User: The verified user.
    """
    payload = token_to_payload(token, schema.VerifyEmailJWTPayloadSchema)
    check_blacklist(payload.jti)
    user = User.objects.filter(id=payload.user_id).first()
    if user is None:
        logger.warning("email_verification_failed_user_not_found", user_id=str(payload.user_id))
        raise HttpError(400, str(_("A user with this email no longer exists.")))
    if user.email.lower() != payload.email.lower():
        logger.warning("email_verification_failed_email_changed", user_id=str(user.id))
        raise HttpError(400, str(_("Invalid token.")))
    blacklist_token(token)
    user.email_verified = True
    user.save(update_fields=["email_verified", "updated_at"])
    logger.info("email_verified", user_id=str(user.id))
    return user


def request_password_reset(email: str) -> str | None:
    """Request a password reset.

    Silently does nothing for unknown addresses so the endpoint cannot be used to enumerate accounts.

    Args:
        email (str): The email address of the user.

    Returns:
        The reset token, or None when no user owns the address.
    """
    logger.info("password_reset_requested")
    user = User.objects.filter(email__iexact=email).first()
    if user is None:
        logger.info("password_reset_user_not_found")
        return None
    payload = schema.PasswordResetJWTPayloadSchema(
        user_id=user.id,
        email=user.email,
        exp=timezone.now() + settings.EMAIL_TOKEN_LIFETIME,
    )
    token = create_token(payload.model_dump(mode="json"))
    tasks.send_password_reset_link.delay(user.email, token)
    logger.info("password_reset_email_sent", user_id=str(user.id))
    return token


@transaction.atomic
def reset_password(token: str, new_password: str) -> User:
    """Reset a user's password.

    Args:
        token (str): The password reset token.
        new_password (str): The new password.
    """
    payload = token_to_payload(token, schema.PasswordResetJWTPayloadSchema)
    check_blacklist(payload.jti)
    user = get_object_or_404(User, id=payload.user_id)
    validate_password(new_password, user=user)
    user.set_password(new_password)
    user.save(update_fields=["password", "updated_at"])
    blacklist_token(token)
    logger.info("password_reset_completed", user_id=str(user.id))
    return user


@transaction.atomic
def update_profile(user: User, payload: schema.ProfileUpdateSchema) -> User:
    """Apply a partial profile update.

    Changing the e-mail address drops the verified flag and sends a new verification link.
    """
    data = payload.model_dump(exclude_unset=True)
    email_changed = False
    if "email" in data and data["email"] is not None and data["email"].lower() != user.email.lower():
        ensure_email_available(data["email"], exclude=user)
        email_changed = True
    for key, value in data.items():
        if value is None and key not in ("date_of_birth",):
            continue
        setattr(user, key, value)
    if email_changed:
        user.email_verified = False
    user.save()
    logger.info("profile_updated", user_id=str(user.id), fields=sorted(data.keys()))
    if email_changed:
        transaction.on_commit(lambda: send_verification_email_for_user(user))
    return user
