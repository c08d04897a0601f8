"""Templates for platform messages."""

import typing as t

from django.utils.translation import gettext as _

from notifications.enums import NotificationType
from notifications.service.templates.base import NotificationTemplate
from notifications.service.templates.registry import register_template


class AdminMessageTemplate(NotificationTemplate):
    """Template for ADMIN_MESSAGE notification.

    Admin messages carry their own text in the context.
    """

    def get_title(self, context: dict[str, t.Any]) -> str:
        return str(context.get("title") or _("Platform Update"))

    def get_message(self, context: dict[str, t.Any]) -> str:
        return str(context.get("message", ""))


register_template(NotificationType.ADMIN_MESSAGE, AdminMessageTemplate())
