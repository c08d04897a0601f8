"""Notification signals.

Domain code requests notifications by sending `notification_requested`; it never
creates `Notification` rows directly.
"""

from django.dispatch import Signal

# Signal for requesting a notification
# Expected kwargs:
#   - notification_type: NotificationType enum value
#   - user: recipient User instance
#   - context: dict used to render title and message
#   - event: optional Event the notification is about
#   - related_user: optional User who triggered the notification
notification_requested = Signal()

__all__ = ["notification_requested"]
