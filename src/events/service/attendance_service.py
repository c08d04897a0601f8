import structlog
from django.db import transaction
from django.db.models import QuerySet
from django.utils.translation import gettext_lazy as _
from ninja.errors import HttpError

from accounts.models import User
from events.models import Event, EventAttendee
from notifications.service.notification_helpers import notify_attendance_update

logger = structlog.get_logger(__name__)


def recompute_attendees_count(event: Event) -> int:
    """Store the number of 'going' attendances on the event."""
    count = EventAttendee.objects.filter(event=event).going().count()
    Event.objects.filter(pk=event.pk).update(attendees_count=count)
    event.attendees_count = count
    return count


def get_attendance(event: Event, user: User) -> EventAttendee | None:
    return EventAttendee.objects.filter(event=event, user=user).first()


def upsert_attendance(event: Event, user: User, status: EventAttendee.Status) -> EventAttendee:
    """Create or update the attendance row and keep the event counter in sync.

    No capacity check is made here.
    """
    attendance, _created = EventAttendee.objects.update_or_create(
        event=event, user=user, defaults={"status": status}
    )
    recompute_attendees_count(event)
    return attendance


@transaction.atomic
def set_attendance(event: Event, user: User, status: EventAttendee.Status) -> EventAttendee:
    """Set the caller's attendance status.

    Raises:
        HttpError: 400 when 'going' would exceed the event capacity.
    """
    locked_event = Event.objects.select_for_update().get(pk=event.pk)
    current = get_attendance(locked_event, user)
    already_going = current is not None and current.status == EventAttendee.Status.GOING

    if status == EventAttendee.Status.GOING and not already_going:
        going = EventAttendee.objects.filter(event=locked_event).going().count()
        if going >= locked_event.max_attendees:
            raise HttpError(400, str(_("Event is full")))

    attendance = upsert_attendance(locked_event, user, status)
    event.attendees_count = locked_event.attendees_count

    logger.info(
        "event_attendance_updated",
        event_id=str(event.id),
        user_id=str(user.id),
        status=status,
        attendees_count=locked_event.attendees_count,
    )
    transaction.on_commit(lambda: notify_attendance_update(locked_event, user, status))
    return attendance


def list_attendees(event: Event) -> QuerySet[EventAttendee]:
    return EventAttendee.objects.filter(event=event).select_related("user").order_by("-updated_at")
