"""Models for the notification system."""

from django.conf import settings
from django.db import models
from django.utils import timezone

from common.models import TimeStampedModel
from notifications.enums import NotificationType


class NotificationQuerySet(models.QuerySet["Notification"]):
    def for_user(self, user: models.Model) -> "NotificationQuerySet":
        """Notifications addressed to the given user."""
        return self.filter(user=user)

    def unread(self) -> "NotificationQuerySet":
        """Notifications that have not been read yet."""
        return self.filter(read_at__isnull=True)


class Notification(TimeStampedModel):
    """In-app notification record.

    The rendered title and message are stored with the row. The optional event and
    related user links are kept so that clients can deep-link, and are nulled when the
    target disappears (a cancellation notice outlives its event).
    """

    notification_type = models.CharField(
        max_length=50,
        db_index=True,
        choices=NotificationType.choices,
    )
    title = models.CharField(max_length=255)
    message = models.TextField()

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="notifications", db_index=True
    )
    event = models.ForeignKey(
        "events.Event", on_delete=models.SET_NULL, null=True, blank=True, related_name="notifications"
    )
    related_user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="triggered_notifications",
    )

    context = models.JSONField(default=dict, blank=True, help_text="Data used to render the notification")

    read_at = models.DateTimeField(null=True, blank=True, db_index=True)

    objects = NotificationQuerySet.as_manager()

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["user", "read_at"], name="ix_notification_user_read"),
            models.Index(fields=["user", "created_at"], name="ix_notification_user_created"),
        ]
        verbose_name = "Notification"
        verbose_name_plural = "Notifications"

    def __str__(self) -> str:
        return f"{self.notification_type} for user {self.user_id} at {self.created_at}"

    def mark_read(self) -> None:
        """Mark notification as read."""
        if not self.read_at:
            self.read_at = timezone.now()
            self.save(update_fields=["read_at"])

    def mark_unread(self) -> None:
        """Mark notification as unread."""
        if self.read_at:
            self.read_at = None
            self.save(update_fields=["read_at"])

    @property
    def is_read(self) -> bool:
        """Check if notification has been read."""
        return self.read_at is not None
