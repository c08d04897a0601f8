"""Tests for the notification_requested signal handler."""

from unittest.mock import MagicMock, patch

import pytest

from accounts.models import User
from notifications.enums import NotificationType
from notifications.models import Notification
from notifications.signals import notification_requested

pytestmark = pytest.mark.django_db


def test_signal_creates_notification(user: User, other_user: User) -> None:
    notification_requested.send(
        sender=test_signal_creates_notification,
        user=user,
        notification_type=NotificationType.NEW_FOLLOWER,
        context={"actor_name": "otheruser"},
        related_user=other_user,
    )

    notification = Notification.objects.get()
    assert notification.user == user
    assert notification.related_user == other_user
    assert notification.message == "otheruser started following you"


@pytest.mark.parametrize("missing", ["user", "notification_type"])
def test_incomplete_request_is_ignored(user: User, missing: str) -> None:
    kwargs = {"user": user, "notification_type": NotificationType.NEW_FOLLOWER}
    kwargs.pop(missing)

    notification_requested.send(sender=None, **kwargs)

    assert not Notification.objects.exists()


@patch("notifications.service.signal_handlers.create_notification")
def test_errors_are_swallowed(mock_create: MagicMock, user: User) -> None:
    """A failing notification must never break the caller."""
    # Arrange
    mock_create.side_effect = RuntimeError("database is on fire")

    # Act
    notification_requested.send(sender=None, user=user, notification_type=NotificationType.ADMIN_MESSAGE)

    # Assert
    mock_create.assert_called_once()
    assert not Notification.objects.exists()


def test_unknown_type_is_swallowed(user: User) -> None:
    notification_requested.send(sender=None, user=user, notification_type="no_such_type")

    assert not Notification.objects.exists()
