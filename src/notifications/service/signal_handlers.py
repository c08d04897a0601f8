"""Signal handlers for notification system."""

import typing as t

import structlog
from django.dispatch import receiver

from notifications.service.dispatcher import create_notification
from notifications.signals import notification_requested

logger = structlog.get_logger(__name__)


def _sender_name(sender: t.Any) -> str:
    return sender.__name__ if hasattr(sender, "__name__") else str(sender)


@receiver(notification_requested)
def handle_notification_request(sender: t.Any, **kwargs: t.Any) -> None:
    """Handle notification_requested signal.

    IMPORTANT: This handler MUST NOT raise exceptions to prevent crashes in endpoints.
    All errors are logged and swallowed.

    Expected kwargs:
        - notification_type: NotificationType enum value or string
        - user: recipient User instance
        - context: dict used to render the notification
        - event: optional Event
        - related_user: optional User who triggered the notification
    """
    try:
        notification_type = kwargs.get("notification_type")
        user = kwargs.get("user")

        if not notification_type or not user:
            logger.error(
                "invalid_notification_request",
                notification_type=notification_type,
                user=user,
                sender=_sender_name(sender),
            )
            return

        notification = create_notification(
            notification_type=notification_type,
            user=user,
            context=kwargs.get("context") or {},
            event=kwargs.get("event"),
            related_user=kwargs.get("related_user"),
        )

        logger.info(
            "notification_request_handled",
            notification_id=str(notification.id),
            notification_type=notification_type,
            user_id=str(user.id),
            sender=_sender_name(sender),
        )
    except Exception as e:
        # Never let notification errors crash endpoints
        user = kwargs.get("user")
        logger.exception(
            "notification_request_failed",
            notification_type=kwargs.get("notification_type"),
            user_id=str(user.id) if user else None,
            sender=_sender_name(sender),
            error=str(e),
            error_type=type(e).__name__,
        )
