"""Service functions for following other users."""

from uuid import UUID

import structlog
from django.db import IntegrityError, transaction
from django.db.models import QuerySet
from django.shortcuts import get_object_or_404
from django.utils.translation import gettext_lazy as _
from ninja.errors import HttpError

from accounts.models import User, UserFollow
from notifications.service.notification_helpers import notify_new_follower

logger = structlog.get_logger(__name__)


def follow_user(follower: User, target_id: UUID) -> UserFollow:
    """Follow a user, reactivating an archived follow if there is one.

    The followed user gets a `new_follower` notification.

    Raises:
        HttpError: 400 on self-follow or when already following, 404 for an unknown target.
    """
    if follower.pk == target_id:
        raise HttpError(400, str(_("You cannot follow yourself")))
    target = get_object_or_404(User, pk=target_id)
    already_following = str(_("Already following"))

    try:
        with transaction.atomic():
            follow, created = UserFollow.objects.get_or_create(
                follower=follower, following=target, defaults={"is_archived": False}
            )
            if not created:
                if not follow.is_archived:
                    raise HttpError(400, already_following)
                follow.is_archived = False
                follow.save(update_fields=["is_archived", "updated_at"])
            transaction.on_commit(lambda: notify_new_follower(follower, target))
    except IntegrityError:
        raise HttpError(400, already_following)

    logger.info("user_followed", follower_id=str(follower.id), following_id=str(target.id), reactivated=not created)
    return follow


def unfollow_user(follower: User, target_id: UUID) -> None:
    """Archive the follow relationship.

    Raises:
        HttpError: 404 when there is no active follow.
    """
    follow = UserFollow.objects.active().filter(follower=follower, following_id=target_id).first()
    if follow is None:
        raise HttpError(404, str(_("Not following this user")))
    follow.is_archived = True
    follow.save(update_fields=["is_archived", "updated_at"])
    logger.info("user_unfollowed", follower_id=str(follower.id), following_id=str(target_id))


def followers(user_id: UUID) -> QuerySet[User]:
    """Users actively following the given user, newest follow first."""
    user = get_object_or_404(User, pk=user_id)
    return User.objects.filter(
        following_relationships__following=user, following_relationships__is_archived=False
    ).order_by("-following_relationships__created_at")


def following(user_id: UUID) -> QuerySet[User]:
    """Users the given user actively follows, newest follow first."""
    user = get_object_or_404(User, pk=user_id)
    return User.objects.filter(
        follower_relationships__follower=user, follower_relationships__is_archived=False
    ).order_by("-follower_relationships__created_at")


def is_following(follower: User, target_id: UUID) -> bool:
    return UserFollow.objects.active().filter(follower=follower, following_id=target_id).exists()


def are_friends(user: User, other_id: UUID) -> bool:
    """Whether both users actively follow each other."""
    return is_following(user, other_id) and UserFollow.objects.active().filter(
        follower_id=other_id, following=user
    ).exists()


def friends(user: User) -> QuerySet[User]:
    """Mutual follows of the user."""
    following_ids = UserFollow.objects.active().filter(follower=user).values("following_id")
    follower_ids = UserFollow.objects.active().filter(following=user).values("follower_id")
    return User.objects.filter(pk__in=following_ids).filter(pk__in=follower_ids).order_by("username")
