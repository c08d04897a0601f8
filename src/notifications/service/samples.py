"""Sample notifications for trying out the notification UI."""

import structlog

from accounts.models import User
from events.models import Event
from notifications.enums import NotificationType
from notifications.models import Notification
from notifications.service.dispatcher import NotificationData, bulk_create_notifications

logger = structlog.get_logger(__name__)


def generate_sample_notifications(user: User) -> list[Notification]:
    """Create one notification of every type for the given user.

    The most recent event the user owns, if any, is the subject of the event
    notifications and the user is their own "actor".
    """
    event = Event.objects.filter(owner=user).order_by("-created_at").first()
    event_context = {
        "event_id": str(event.id) if event else "",
        "event_title": event.title if event else "Sample Event",
        "event_date": event.date.isoformat() if event and event.date else "",
        "event_time": event.time.strftime("%H:%M") if event and event.time else "",
    }
    actor_context = {"actor_id": str(user.id), "actor_name": user.public_name}

    contexts: dict[NotificationType, dict[str, str]] = {
        NotificationType.EVENT_REMINDER: event_context,
        NotificationType.EVENT_UPDATE: event_context,
        NotificationType.EVENT_CANCELED: event_context,
        NotificationType.EVENT_STARTING_TODAY: event_context,
        NotificationType.NEW_COMMENT: event_context | actor_context,
        NotificationType.ATTENDANCE_UPDATE: event_context | actor_context | {"status": "going"},
        NotificationType.NEW_FOLLOWER: actor_context,
        NotificationType.ADMIN_MESSAGE: {
            "title": "Platform Update",
            "message": "Welcome to the new notification system! Check out the notification bell in the top navigation.",
        },
    }

    data = [
        NotificationData(
            notification_type=notification_type,
            user=user,
            context=context,
            event=event if "event_id" in context else None,
            related_user=user if "actor_id" in context else None,
        )
        for notification_type, context in contexts.items()
    ]
    notifications = bulk_create_notifications(data)
    logger.info("sample_notifications_generated", user_id=str(user.id), count=len(notifications))
    return notifications
