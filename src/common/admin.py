from django.contrib import admin
from unfold.admin import ModelAdmin

from . import models


@admin.register(models.SiteSettings)
class SiteSettingsAdmin(ModelAdmin):  # type: ignore[misc]
    readonly_fields = ["created_at", "updated_at"]
    fieldsets = (
        ("Emails", {"fields": ("live_emails", "internal_catchall_email")}),
        ("URLs", {"fields": ("frontend_base_url",)}),
        ("Payments", {"fields": ("paystack_live_mode", "platform_fee_percent")}),
        ("Timestamps", {"fields": ("created_at", "updated_at")}),
    )


@admin.register(models.EmailLog)
class EmailLogAdmin(ModelAdmin):  # type: ignore[misc]
    list_display = ["to", "subject", "sent_at", "test_only"]
    list_filter = ["test_only", "sent_at"]
    search_fields = ["to", "subject"]
    readonly_fields = ["to", "subject", "sent_at", "test_only", "body", "html"]
    exclude = ["compressed_body", "compressed_html"]
    date_hierarchy = "sent_at"
