"""Templates for event-related notifications."""

import typing as t

from django.utils.translation import gettext as _

from notifications.enums import NotificationType
from notifications.service.templates.base import NotificationTemplate
from notifications.service.templates.registry import register_template


class EventReminderTemplate(NotificationTemplate):
    """Template for EVENT_REMINDER notification."""

    def get_title(self, context: dict[str, t.Any]) -> str:
        return _("Event Reminder")

    def get_message(self, context: dict[str, t.Any]) -> str:
        event_date = context.get("event_date")
        if event_date:
            return _("Don't forget: '%(event)s' is coming up on %(date)s.") % {
                "event": self.event_title(context),
                "date": event_date,
            }
        return _("Don't forget: '%(event)s' is coming up soon.") % {"event": self.event_title(context)}


class EventUpdateTemplate(NotificationTemplate):
    """Template for EVENT_UPDATE notification (to attendees)."""

    def get_title(self, context: dict[str, t.Any]) -> str:
        return _("Event Updated")

    def get_message(self, context: dict[str, t.Any]) -> str:
        return _("The event '%(event)s' has been updated. Check the latest details.") % {
            "event": self.event_title(context)
        }


class EventCanceledTemplate(NotificationTemplate):
    """Template for EVENT_CANCELED notification (to attendees)."""

    def get_title(self, context: dict[str, t.Any]) -> str:
        return _("Event Canceled")

    def get_message(self, context: dict[str, t.Any]) -> str:
        return _("The event '%(event)s' has been canceled by the organizer.") % {
            "event": self.event_title(context)
        }


class EventStartingTodayTemplate(NotificationTemplate):
    """Template for EVENT_STARTING_TODAY notification."""

    def get_title(self, context: dict[str, t.Any]) -> str:
        return _("Event Starting Today")

    def get_message(self, context: dict[str, t.Any]) -> str:
        event_time = context.get("event_time")
        if event_time:
            return _("'%(event)s' is starting today at %(time)s!") % {
                "event": self.event_title(context),
                "time": event_time,
            }
        return _("'%(event)s' is starting today!") % {"event": self.event_title(context)}


register_template(NotificationType.EVENT_REMINDER, EventReminderTemplate())
register_template(NotificationType.EVENT_UPDATE, EventUpdateTemplate())
register_template(NotificationType.EVENT_CANCELED, EventCanceledTemplate())
register_template(NotificationType.EVENT_STARTING_TODAY, EventStartingTodayTemplate())
