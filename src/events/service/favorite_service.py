import structlog
from django.db.models import QuerySet

from accounts.models import User
from events.models import Event, UserFavorite

logger = structlog.get_logger(__name__)


def toggle_favorite(event: Event, user: User) -> bool:
    """Add the event to the user's favorites, or remove it if already there.

    Returns:
        Whether the event is now favorited.
    """
    deleted, _ = UserFavorite.objects.filter(event=event, user=user).delete()
    if deleted:
        logger.info("event_unfavorited", event_id=str(event.id), user_id=str(user.id))
        return False
    UserFavorite.objects.create(event=event, user=user)
    logger.info("event_favorited", event_id=str(event.id), user_id=str(user.id))
    return True


def is_favorited(event: Event, user: User) -> bool:
    return UserFavorite.objects.filter(event=event, user=user).exists()


def favorite_events(user: User) -> QuerySet[Event]:
    """The user's favorited events, most recently favorited first."""
    return Event.objects.with_owner().filter(favorited_by__user=user).order_by("-favorited_by__created_at")
