"""Schemas for notification API."""

import typing as t
from datetime import datetime
from uuid import UUID

from ninja import Schema

from notifications.enums import NotificationType


class NotificationSchema(Schema):
    """Schema for notification response."""

    id: UUID
    notification_type: NotificationType
    title: str
    message: str
    event_id: UUID | None = None
    related_user_id: UUID | None = None
    context: dict[str, t.Any]
    is_read: bool
    read_at: datetime | None
    created_at: datetime


class UnreadCountSchema(Schema):
    count: int


class GeneratedNotificationsSchema(Schema):
    success: bool
    message: str
    count: int
