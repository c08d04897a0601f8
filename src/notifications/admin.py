"""Django admin for notification models."""

from django.contrib import admin
from unfold.admin import ModelAdmin

from notifications.models import Notification


@admin.register(Notification)
class NotificationAdmin(ModelAdmin):  # type: ignore[misc]
    """Admin for Notification model."""

    list_display = ["id", "notification_type", "user", "title", "is_read", "created_at"]
    list_filter = ["notification_type", "read_at", "created_at"]
    search_fields = ["user__email", "user__username", "title", "message"]
    readonly_fields = ["id", "created_at", "updated_at", "notification_type", "context"]
    raw_id_fields = ["user", "event", "related_user"]
    date_hierarchy = "created_at"
    ordering = ["-created_at"]

    fieldsets = (
        ("Basic Information", {"fields": ("id", "notification_type", "user", "title", "message")}),
        ("Links", {"fields": ("event", "related_user", "context")}),
        ("Status", {"fields": ("read_at", "created_at", "updated_at")}),
    )

    @admin.display(boolean=True, description="Read")
    def is_read(self, obj: Notification) -> bool:
        return obj.is_read
