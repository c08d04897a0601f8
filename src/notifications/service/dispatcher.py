"""Core notification dispatcher service."""

import typing as t
from collections.abc import Sequence

import structlog

from accounts.models import User
from events.models import Event
from notifications.enums import NotificationType
from notifications.models import Notification
from notifications.service.templates.registry import get_template

logger = structlog.get_logger(__name__)


class NotificationData(t.NamedTuple):
    """Data for creating a notification."""

    notification_type: NotificationType
    user: User
    context: dict[str, t.Any]
    event: Event | None = None
    related_user: User | None = None


def _build(data: NotificationData) -> Notification:
    template = get_template(data.notification_type)
    return Notification(
        notification_type=NotificationType(data.notification_type),
        user=data.user,
        event=data.event,
        related_user=data.related_user,
        context=data.context,
        title=template.get_title(data.context),
        message=template.get_message(data.context),
    )


def create_notification(
    notification_type: NotificationType | str,
    user: User,
    context: dict[str, t.Any] | None = None,
    *,
    event: Event | None = None,
    related_user: User | None = None,
) -> Notification:
    """Render and store a notification.

    Args:
        notification_type: Type of notification
        user: User to notify
        context: Data used to render the title and message
        event: Event the notification refers to, if any
        related_user: User who triggered the notification, if any

    Returns:
        Created Notification instance

    Raises:
        ValueError: If the notification type is unknown
    """
    notification = _build(
        NotificationData(NotificationType(notification_type), user, context or {}, event, related_user)
    )
    notification.save()

    logger.info(
        "notification_created",
        notification_id=str(notification.id),
        notification_type=notification.notification_type,
        user_id=str(user.id),
    )
    return notification


def bulk_create_notifications(notifications_data: Sequence[NotificationData]) -> list[Notification]:
    """Create multiple notifications in a single INSERT.

    All templates are rendered before anything is written, so an unknown type
    creates nothing.
    """
    if not notifications_data:
        return []

    created = Notification.objects.bulk_create([_build(data) for data in notifications_data])

    logger.info(
        "notifications_bulk_created",
        count=len(created),
        notification_type=notifications_data[0].notification_type,
    )
    return created
