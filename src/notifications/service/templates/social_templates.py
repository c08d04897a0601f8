"""Templates for follower, comment and attendance notifications."""

import typing as t

from django.utils.translation import gettext as _

from notifications.enums import NotificationType
from notifications.service.templates.base import NotificationTemplate
from notifications.service.templates.registry import register_template


class NewFollowerTemplate(NotificationTemplate):
    """Template for NEW_FOLLOWER notification (to the followed user)."""

    def get_title(self, context: dict[str, t.Any]) -> str:
        return _("New Follower")

    def get_message(self, context: dict[str, t.Any]) -> str:
        return _("%(actor)s started following you") % {"actor": self.actor_name(context)}


class NewCommentTemplate(NotificationTemplate):
    """Template for NEW_COMMENT notification (to the event owner)."""

    def get_title(self, context: dict[str, t.Any]) -> str:
        return _("New Comment")

    def get_message(self, context: dict[str, t.Any]) -> str:
        return _("%(actor)s commented on your event '%(event)s'") % {
            "actor": self.actor_name(context),
            "event": self.event_title(context),
        }


class AttendanceUpdateTemplate(NotificationTemplate):
    """Template for ATTENDANCE_UPDATE notification (to the event owner)."""

    def get_title(self, context: dict[str, t.Any]) -> str:
        if context.get("status") == "going":
            return _("New Attendee")
        return _("Attendance Update")

    def get_message(self, context: dict[str, t.Any]) -> str:
        params = {"actor": self.actor_name(context), "event": self.event_title(context)}
        status = context.get("status")
        if status == "going":
            return _("%(actor)s is attending your event '%(event)s'") % params
        if status == "interested":
            return _("%(actor)s is interested in your event '%(event)s'") % params
        return _("%(actor)s is no longer attending your event '%(event)s'") % params


register_template(NotificationType.NEW_FOLLOWER, NewFollowerTemplate())
register_template(NotificationType.NEW_COMMENT, NewCommentTemplate())
register_template(NotificationType.ATTENDANCE_UPDATE, AttendanceUpdateTemplate())
