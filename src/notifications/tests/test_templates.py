"""Tests for notification templates and their registry."""

import typing as t

import pytest

from notifications.enums import NotificationType
from notifications.service.templates.base import NotificationTemplate
from notifications.service.templates.registry import TemplateRegistry, get_template, is_template_registered


@pytest.mark.parametrize("notification_type", list(NotificationType))
def test_every_type_has_a_template(notification_type: NotificationType) -> None:
    assert is_template_registered(notification_type)


def test_unregistered_type_raises() -> None:
    registry = TemplateRegistry()

    with pytest.raises(ValueError, match="No template registered"):
        registry.get(NotificationType.NEW_FOLLOWER)


def test_registry_returns_registered_template() -> None:
    class StaticTemplate(NotificationTemplate):
        def get_title(self, context: dict[str, t.Any]) -> str:
            return "Title"

        def get_message(self, context: dict[str, t.Any]) -> str:
            return "Message"

    registry = TemplateRegistry()
    template = StaticTemplate()
    registry.register(NotificationType.ADMIN_MESSAGE, template)

    assert registry.get("admin_message") is template
    assert registry.is_registered(NotificationType.ADMIN_MESSAGE)
    assert not registry.is_registered(NotificationType.NEW_COMMENT)


@pytest.mark.parametrize(
    "notification_type,context,title,message",
    [
        (
            NotificationType.NEW_FOLLOWER,
            {"actor_name": "Lerato"},
            "New Follower",
            "Lerato started following you",
        ),
        (NotificationType.NEW_FOLLOWER, {}, "New Follower", "Someone started following you"),
        (
            NotificationType.ATTENDANCE_UPDATE,
            {"actor_name": "Lerato", "event_title": "Jazz Night", "status": "going"},
            "New Attendee",
            "Lerato is attending your event 'Jazz Night'",
        ),
        (
            NotificationType.ATTENDANCE_UPDATE,
            {"actor_name": "Lerato", "event_title": "Jazz Night", "status": "interested"},
            "Attendance Update",
            "Lerato is interested in your event 'Jazz Night'",
        ),
        (
            NotificationType.ATTENDANCE_UPDATE,
            {"actor_name": "Lerato", "event_title": "Jazz Night", "status": "not_going"},
            "Attendance Update",
            "Lerato is no longer attending your event 'Jazz Night'",
        ),
        (
            NotificationType.EVENT_REMINDER,
            {"event_title": "Jazz Night", "event_date": "2030-06-15"},
            "Event Reminder",
            "Don't forget: 'Jazz Night' is coming up on 2030-06-15.",
        ),
        (
            NotificationType.EVENT_CANCELED,
            {"event_title": "Jazz Night"},
            "Event Canceled",
            "The event 'Jazz Night' has been canceled by the organizer.",
        ),
        (
            NotificationType.EVENT_STARTING_TODAY,
            {"event_title": "Jazz Night", "event_time": "19:30"},
            "Event Starting Today",
            "'Jazz Night' is starting today at 19:30!",
        ),
        (
            NotificationType.EVENT_STARTING_TODAY,
            {},
            "Event Starting Today",
            "'an event' is starting today!",
        ),
        (
            NotificationType.ADMIN_MESSAGE,
            {"message": "Scheduled maintenance tonight"},
            "Platform Update",
            "Scheduled maintenance tonight",
        ),
    ],
)
def test_rendering(notification_type: NotificationType, context: dict[str, t.Any], title: str, message: str) -> None:
    template = get_template(notification_type)

    assert template.get_title(context) == title
    assert template.get_message(context) == message
