"""Read-side user queries: listing, profiles and search."""

from django.contrib.auth.models import AnonymousUser
from django.db.models import Count, Exists, OuterRef, QuerySet

from accounts.models import User, UserFollow


def list_users() -> QuerySet[User]:
    """All users that may appear in public listings."""
    return User.objects.active().order_by("username")


def search_users(query: str, location: str, viewer: User | AnonymousUser) -> list[User]:
    """Search users by text and location.

    Without any criteria the result is empty rather than the whole user base. Each
    result is annotated with ``events_count`` and ``is_following`` (relative to the viewer).
    """
    query = query.strip()
    location = location.strip()
    if not query and not location:
        return []
    qs = User.objects.active().search(query, location).annotate(events_count=Count("owned_events", distinct=True))
    if viewer.is_authenticated:
        qs = qs.annotate(
            is_following=Exists(
                UserFollow.objects.active().filter(follower_id=viewer.pk, following_id=OuterRef("pk"))
            )
        )
    return list(qs.order_by("username"))


def profiles() -> QuerySet[User]:
    """Users annotated with the number of events they host."""
    return User.objects.annotate(events_count=Count("owned_events", distinct=True))
