"""Base template interface for notifications."""

import typing as t
from abc import ABC, abstractmethod


class NotificationTemplate(ABC):
    """Base class for notification templates.

    A template turns the structured context of a notification into the title and
    message shown in-app. Missing context keys fall back to neutral wording so a
    partially populated context still renders.
    """

    @abstractmethod
    def get_title(self, context: dict[str, t.Any]) -> str:
        """Get the notification title.

        Args:
            context: The notification context

        Returns:
            Title string
        """

    @abstractmethod
    def get_message(self, context: dict[str, t.Any]) -> str:
        """Get the notification message.

        Args:
            context: The notification context

        Returns:
            Message string
        """

    @staticmethod
    def event_title(context: dict[str, t.Any]) -> str:
        return str(context.get("event_title") or "an event")

    @staticmethod
    def actor_name(context: dict[str, t.Any]) -> str:
        return str(context.get("actor_name") or "Someone")
