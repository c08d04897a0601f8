from decimal import ROUND_HALF_UP, Decimal

import structlog
from django.db import transaction
from django.db.models import Avg, Count

from accounts.models import User
from events.models import Event, EventRating

logger = structlog.get_logger(__name__)


def recompute_rating(event: Event) -> tuple[Decimal, int]:
    """Store the arithmetic mean of all ratings, rounded to two decimals."""
    aggregate = EventRating.objects.filter(event=event).aggregate(average=Avg("rating"), count=Count("id"))
    count = aggregate["count"] or 0
    average = Decimal(str(aggregate["average"] or 0)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    Event.objects.filter(pk=event.pk).update(rating_average=average, rating_count=count)
    event.rating_average = average
    event.rating_count = count
    return average, count


@transaction.atomic
def rate_event(event: Event, user: User, rating: int) -> EventRating:
    """Create or replace the user's rating of an event."""
    event_rating, created = EventRating.objects.update_or_create(
        event=event, user=user, defaults={"rating": rating}
    )
    average, count = recompute_rating(event)
    logger.info(
        "event_rated",
        event_id=str(event.id),
        user_id=str(user.id),
        rating=rating,
        created=created,
        average=str(average),
        count=count,
    )
    return event_rating


def get_user_rating(event: Event, user: User | None) -> int | None:
    if user is None or not user.is_authenticated:
        return None
    return EventRating.objects.filter(event=event, user=user).values_list("rating", flat=True).first()
