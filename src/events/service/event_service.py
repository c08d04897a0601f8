import math
import typing as t
from uuid import UUID

import structlog
from django.db import transaction
from django.db.models import F, QuerySet
from django.shortcuts import get_object_or_404
from django.utils import timezone
from django.utils.translation import gettext_lazy as _
from ninja.errors import HttpError

from accounts.models import User
from events.filters import EventFilterSchema
from events.models import Event, EventAttendee
from events.schema import EventCreateSchema, EventUpdateSchema
from notifications.service.notification_helpers import (
    get_event_audience,
    notify_event_canceled,
    notify_event_updated,
    snapshot_event,
)

from . import update_db_instance
from .ticket_service import create_ticket_types

logger = structlog.get_logger(__name__)

DEFAULT_PAGE_SIZE = 7
DEFAULT_FEATURED_LIMIT = 5

UPDATABLE_FIELDS = frozenset(
    {
        "title",
        "description",
        "date",
        "time",
        "location",
        "latitude",
        "longitude",
        "image",
        "images",
        "video",
        "featured",
        "category",
        "max_attendees",
        "is_free",
        "price",
        "tags",
        "has_multiple_ticket_types",
        "gender_restriction",
        "age_restrictions",
    }
)


def list_events(filters: EventFilterSchema, page: int = 1, limit: int = DEFAULT_PAGE_SIZE) -> dict[str, t.Any]:
    """A page of events sorted by date, with page metadata."""
    qs = filters.filter(Event.objects.with_owner()).order_by("date", "time", "created_at")
    total_count = qs.count()
    total_pages = math.ceil(total_count / limit) if total_count else 0
    offset = (page - 1) * limit
    return {
        "events": list(qs[offset : offset + limit]),
        "pagination": {
            "page": page,
            "limit": limit,
            "total_count": total_count,
            "total_pages": total_pages,
            "has_more": page < total_pages,
        },
    }


def featured_events(limit: int = DEFAULT_FEATURED_LIMIT) -> QuerySet[Event]:
    return Event.objects.with_owner().featured().order_by("date", "time")[:limit]


def search_events(query: str) -> QuerySet[Event]:
    """Case-insensitive search over title, description, location and category."""
    if not query.strip():
        return Event.objects.none()
    return Event.objects.with_owner().search(query.strip()).order_by("date", "time")


def get_event(event_id: UUID) -> Event:
    return get_object_or_404(Event.objects.with_owner(), pk=event_id)


def view_event(event_id: UUID) -> Event:
    """Fetch an event and count the view."""
    event = get_event(event_id)
    Event.objects.filter(pk=event.pk).update(views=F("views") + 1)
    event.refresh_from_db(fields=["views"])
    return event


def _ensure_can_manage(event: Event, user: User, message: str) -> None:
    if not event.can_be_managed_by(user):
        raise HttpError(403, message)


@transaction.atomic
def create_event(owner: User, payload: EventCreateSchema) -> Event:
    """Create an event owned by the caller.

    Only platform admins may feature an event. Ticket types are created when the
    event declares several of them.
    """
    data = payload.model_dump(exclude={"ticket_types"})
    data["age_restrictions"] = [str(band) for band in payload.age_restrictions]
    if not owner.is_platform_admin:
        data["featured"] = False
    event = Event.objects.create(owner=owner, **data)

    if payload.has_multiple_ticket_types and payload.ticket_types:
        create_ticket_types(event, payload.ticket_types)

    logger.info("event_created", event_id=str(event.id), owner_id=str(owner.id), featured=event.featured)
    return event


@transaction.atomic
def update_event(event: Event, user: User, payload: EventUpdateSchema) -> Event:
    """Apply a partial update and tell the attendees.

    Raises:
        HttpError: 403 for anyone but the owner or an admin, 400 when nothing to update.
    """
    _ensure_can_manage(event, user, str(_("You can only edit your own events")))

    data = {k: v for k, v in payload.model_dump(exclude_unset=True).items() if k in UPDATABLE_FIELDS}
    if "featured" in data and not user.is_platform_admin:
        data.pop("featured")
    if not data:
        raise HttpError(400, str(_("No valid fields provided for update.")))
    if data.get("age_restrictions") is not None:
        data["age_restrictions"] = [str(band) for band in data["age_restrictions"]]

    event = update_db_instance(event, **data)

    recipients = get_event_audience(event)
    transaction.on_commit(lambda: notify_event_updated(event, recipients))
    logger.info("event_updated", event_id=str(event.id), user_id=str(user.id), fields=sorted(data))
    return event


@transaction.atomic
def delete_event(event: Event, user: User) -> None:
    """Delete an event with everything that hangs off it and tell the attendees.

    Comments, attendance, tickets, ratings, favorites and ticket types are removed
    by cascade.
    """
    _ensure_can_manage(event, user, str(_("You can only delete your own events")))

    recipients = get_event_audience(event)
    context = snapshot_event(event)
    owner_id = event.owner_id
    event_id = str(event.id)

    event.delete()

    transaction.on_commit(lambda: notify_event_canceled(context, owner_id, recipients))
    logger.info("event_deleted", event_id=event_id, user_id=str(user.id), notified=len(recipients))


def user_events(user_id: UUID) -> QuerySet[Event]:
    """Events created by a user."""
    owner = get_object_or_404(User, pk=user_id)
    return Event.objects.with_owner().filter(owner=owner).order_by("-date", "-time")


def upcoming_events_for_user(user_id: UUID) -> QuerySet[Event]:
    """Events from today on that the user is going to, soonest first."""
    user = get_object_or_404(User, pk=user_id)
    return (
        Event.objects.with_owner()
        .filter(attendances__user=user, attendances__status=EventAttendee.Status.GOING)
        .upcoming(timezone.localdate())
    )
