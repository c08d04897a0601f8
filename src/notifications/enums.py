"""Enums for the notification system."""

from django.db.models import TextChoices


class NotificationType(TextChoices):
    """All in-app notification types."""

    # Event notifications
    EVENT_REMINDER = "event_reminder"
    EVENT_UPDATE = "event_update"
    EVENT_CANCELED = "event_canceled"
    EVENT_STARTING_TODAY = "event_starting_today"

    # Social notifications
    NEW_COMMENT = "new_comment"
    ATTENDANCE_UPDATE = "attendance_update"
    NEW_FOLLOWER = "new_follower"

    # System notifications
    ADMIN_MESSAGE = "admin_message"
