"""Helper functions for sending notifications.

These functions build the notification context for a domain event and send
`notification_requested` for every recipient. Callers run them after commit.
"""

import typing as t
from collections.abc import Iterable

import structlog

from accounts.models import User
from events.models import Event, EventAttendee
from notifications.enums import NotificationType
from notifications.signals import notification_requested

logger = structlog.get_logger(__name__)


def _event_context(event: Event) -> dict[str, t.Any]:
    return {
        "event_id": str(event.id),
        "event_title": event.title,
        "event_date": event.date.isoformat() if event.date else "",
        "event_time": event.time.strftime("%H:%M") if event.time else "",
    }


def _actor_context(actor: User) -> dict[str, t.Any]:
    return {"actor_id": str(actor.id), "actor_name": actor.public_name}


def get_event_audience(event: Event) -> list[User]:
    """Users who said they are going to or interested in the event."""
    return [
        attendance.user
        for attendance in event.attendances.filter(
            status__in=[EventAttendee.Status.GOING, EventAttendee.Status.INTERESTED]
        ).select_related("user")
    ]


def notify_event_updated(event: Event, recipients: Iterable[User]) -> int:
    """Tell attendees that an event they follow changed."""
    context = _event_context(event)
    count = 0
    for user in recipients:
        if user.pk == event.owner_id:
            continue
        notification_requested.send(
            sender=notify_event_updated,
            user=user,
            notification_type=NotificationType.EVENT_UPDATE,
            context=context,
            event=event,
        )
        count += 1
    logger.info("event_update_notifications_sent", event_id=str(event.id), count=count)
    return count


def notify_event_canceled(event_context: dict[str, t.Any], owner_id: t.Any, recipients: Iterable[User]) -> int:
    """Tell attendees that an event was deleted.

    The event row is gone by the time this runs, so only its context is passed.
    """
    count = 0
    for user in recipients:
        if user.pk == owner_id:
            continue
        notification_requested.send(
            sender=notify_event_canceled,
            user=user,
            notification_type=NotificationType.EVENT_CANCELED,
            context=event_context,
        )
        count += 1
    logger.info("event_canceled_notifications_sent", event_id=event_context.get("event_id"), count=count)
    return count


def snapshot_event(event: Event) -> dict[str, t.Any]:
    """Context for notifications that must outlive the event."""
    return _event_context(event)


def notify_new_comment(event: Event, commenter: User) -> None:
    """Tell the event owner about a new comment."""
    if commenter.pk == event.owner_id:
        return
    notification_requested.send(
        sender=notify_new_comment,
        user=event.owner,
        notification_type=NotificationType.NEW_COMMENT,
        context=_event_context(event) | _actor_context(commenter),
        event=event,
        related_user=commenter,
    )


def notify_attendance_update(event: Event, attendee: User, status: str) -> None:
    """Tell the event owner that someone changed their attendance."""
    if attendee.pk == event.owner_id:
        return
    notification_requested.send(
        sender=notify_attendance_update,
        user=event.owner,
        notification_type=NotificationType.ATTENDANCE_UPDATE,
        context=_event_context(event) | _actor_context(attendee) | {"status": status},
        event=event,
        related_user=attendee,
    )


def notify_new_follower(follower: User, followed: User) -> None:
    """Tell a user they gained a follower."""
    notification_requested.send(
        sender=notify_new_follower,
        user=followed,
        notification_type=NotificationType.NEW_FOLLOWER,
        context=_actor_context(follower),
        related_user=follower,
    )


def notify_event_starting_today(event: Event) -> int:
    """Remind everyone going to the event that it starts today."""
    context = _event_context(event)
    count = 0
    for attendance in event.attendances.filter(status=EventAttendee.Status.GOING).select_related("user"):
        notification_requested.send(
            sender=notify_event_starting_today,
            user=attendance.user,
            notification_type=NotificationType.EVENT_STARTING_TODAY,
            context=context,
            event=event,
        )
        count += 1
    return count
