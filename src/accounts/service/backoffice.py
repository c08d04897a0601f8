"""User management for platform admins."""

import structlog
from django.db import transaction
from django.utils.translation import gettext_lazy as _
from ninja.errors import HttpError

from accounts import schema
from accounts.models import User

from .account import ensure_email_available

logger = structlog.get_logger(__name__)


@transaction.atomic
def update_user(user: User, payload: schema.AdminUserUpdateSchema, admin: User) -> User:
    """Edit another user's profile and admin flag."""
    data = {k: v for k, v in payload.model_dump(exclude_unset=True).items() if v is not None}
    if "email" in data and data["email"].lower() != user.email.lower():
        ensure_email_available(data["email"], exclude=user)
    for key, value in data.items():
        setattr(user, key, value)
    user.save()
    logger.info("admin_user_updated", user_id=str(user.id), admin_id=str(admin.id), fields=sorted(data))
    return user


def toggle_ban(user: User, admin: User) -> User:
    """Ban or unban a user.

    Raises:
        HttpError: 400 when an admin tries to ban themselves.
    """
    if user.pk == admin.pk:
        raise HttpError(400, str(_("You cannot ban your own account")))
    user.is_banned = not user.is_banned
    user.save(update_fields=["is_banned", "updated_at"])
    logger.warning("user_ban_toggled", user_id=str(user.id), admin_id=str(admin.id), is_banned=user.is_banned)
    return user
