"""API controller for notification management."""

from uuid import UUID

from django.db.models import QuerySet
from django.shortcuts import get_object_or_404
from django.utils import timezone
from ninja import Query
from ninja_extra import api_controller, route, status
from ninja_extra.pagination import PageNumberPaginationExtra, PaginatedResponseSchema, paginate

from common.auth_base import PlatformAdminAuth
from common.authentication import ActiveUserJWTAuth
from common.controllers import UserAwareController
from common.schema import ResponseMessage
from common.throttling import UserDefaultThrottle, WriteThrottle
from notifications.filters import NotificationFilterSchema
from notifications.models import Notification
from notifications.schema import GeneratedNotificationsSchema, NotificationSchema, UnreadCountSchema
from notifications.service.samples import generate_sample_notifications


@api_controller(
    "/notifications",
    tags=["Notifications"],
    auth=ActiveUserJWTAuth(),
    throttle=UserDefaultThrottle(),
)
class NotificationController(UserAwareController):
    """API endpoints for in-app notifications."""

    def get_queryset(self) -> QuerySet[Notification]:
        return Notification.objects.for_user(self.user())

    @route.get("", url_name="list_notifications", response=PaginatedResponseSchema[NotificationSchema])
    @paginate(PageNumberPaginationExtra, page_size=20)
    def list_notifications(
        self,
        params: NotificationFilterSchema = Query(...),  # type: ignore[type-arg]
    ) -> QuerySet[Notification]:
        """List the user's notifications, newest first.

        Supports filtering by unread status and notification type.
        """
        return params.filter(self.get_queryset().order_by("-created_at"))

    @route.get("/unread-count", url_name="unread_count", response=UnreadCountSchema)
    def unread_count(self) -> dict[str, int]:
        """Get count of unread notifications for current user."""
        return {"count": self.get_queryset().unread().count()}

    @route.post("/read-all", url_name="mark_all_read", response=ResponseMessage, throttle=WriteThrottle())
    def mark_all_read(self) -> ResponseMessage:
        """Mark all user's notifications as read."""
        self.get_queryset().unread().update(read_at=timezone.now())
        return ResponseMessage(message="All notifications marked as read")

    @route.post(
        "/generate",
        url_name="generate_notifications",
        response={status.HTTP_201_CREATED: GeneratedNotificationsSchema},
        auth=PlatformAdminAuth(),
        throttle=WriteThrottle(),
    )
    def generate(self) -> tuple[int, GeneratedNotificationsSchema]:
        """Create one sample notification of every type for the calling admin."""
        notifications = generate_sample_notifications(self.user())
        return status.HTTP_201_CREATED, GeneratedNotificationsSchema(
            success=True, message="Sample notifications created successfully", count=len(notifications)
        )

    @route.post(
        "/{uuid:notification_id}/read",
        url_name="mark_notification_read",
        response=NotificationSchema,
        throttle=WriteThrottle(),
    )
    def mark_read(self, notification_id: UUID) -> Notification:
        """Mark a notification as read."""
        notification = get_object_or_404(self.get_queryset(), id=notification_id)
        notification.mark_read()
        return notification

    @route.post(
        "/{uuid:notification_id}/unread",
        url_name="mark_notification_unread",
        response=NotificationSchema,
        throttle=WriteThrottle(),
    )
    def mark_unread(self, notification_id: UUID) -> Notification:
        """Mark a notification as unread."""
        notification = get_object_or_404(self.get_queryset(), id=notification_id)
        notification.mark_unread()
        return notification

    @route.delete(
        "/{uuid:notification_id}", url_name="delete_notification", response={204: None}, throttle=WriteThrottle()
    )
    def delete_notification(self, notification_id: UUID) -> tuple[int, None]:
        """Delete one of the user's notifications."""
        notification = get_object_or_404(self.get_queryset(), id=notification_id)
        notification.delete()
        return 204, None
