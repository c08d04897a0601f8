"""Tests for notification dispatcher service."""

import pytest

from accounts.models import User
from events.models import Event
from notifications.enums import NotificationType
from notifications.models import Notification
from notifications.service.dispatcher import NotificationData, bulk_create_notifications, create_notification

pytestmark = pytest.mark.django_db


class TestCreateNotification:
    def test_renders_title_and_message(self, user: User, other_user: User, event: Event) -> None:
        """The rendered text is stored together with the context and the links."""
        # Arrange
        context = {"actor_id": str(other_user.id), "actor_name": "Thabo", "event_title": event.title}

        # Act
        notification = create_notification(
            NotificationType.NEW_COMMENT, user, context, event=event, related_user=other_user
        )

        # Assert
        notification.refresh_from_db()
        assert notification.title == "New Comment"
        assert notification.message == "Thabo commented on your event 'Braai in the Park'"
        assert notification.context == context
        assert notification.event == event
        assert notification.related_user == other_user
        assert notification.is_read is False

    def test_accepts_plain_string_type(self, user: User) -> None:
        notification = create_notification("admin_message", user, {"title": "Hello", "message": "Welcome"})

        assert notification.notification_type == NotificationType.ADMIN_MESSAGE
        assert notification.title == "Hello"
        assert notification.message == "Welcome"

    def test_unknown_type_raises(self, user: User) -> None:
        with pytest.raises(ValueError):
            create_notification("not_a_type", user)

        assert not Notification.objects.exists()


class TestBulkCreateNotifications:
    def test_creates_all(self, user: User, other_user: User) -> None:
        """Every recipient gets its own rendered row."""
        # Arrange
        data = [
            NotificationData(NotificationType.EVENT_REMINDER, recipient, {"event_title": "Jazz Night"})
            for recipient in (user, other_user)
        ]

        # Act
        created = bulk_create_notifications(data)

        # Assert
        assert len(created) == 2
        assert Notification.objects.filter(title="Event Reminder").count() == 2
        assert set(Notification.objects.values_list("user", flat=True)) == {user.id, other_user.id}

    def test_empty_input(self) -> None:
        assert bulk_create_notifications([]) == []
