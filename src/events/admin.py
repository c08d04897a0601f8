# src/events/admin.py

import typing as t

from django.contrib import admin
from django.urls import reverse
from django.utils.html import format_html
from unfold.admin import ModelAdmin, TabularInline

from . import models


# --- Helper Mixins for Reusable Link Fields ---
class UserLinkMixin:
    """Mixin to add a link to a user."""

    def user_link(self, obj: t.Any) -> str:
        user = getattr(obj, "user", getattr(obj, "owner", None))
        url = reverse("admin:accounts_user_change", args=[user.id])  # type: ignore[union-attr]
        return format_html('<a href="{}">{}</a>', url, user.username)  # type: ignore[union-attr]

    user_link.short_description = "User"  # type: ignore[attr-defined]


class EventLinkMixin:
    """Mixin to add a link to an event."""

    def event_link(self, obj: t.Any) -> str | None:
        if not hasattr(obj, "event") or not obj.event:
            return None
        url = reverse("admin:events_event_change", args=[obj.event.id])
        return format_html('<a href="{}">{}</a>', url, obj.event.title)

    event_link.short_description = "Event"  # type: ignore[attr-defined]


# --- Inlines ---
class TicketTypeInline(TabularInline):  # type: ignore[misc]
    model = models.TicketType
    extra = 0
    fields = ["name", "price", "quantity", "sold_count", "is_active"]
    readonly_fields = ["sold_count"]


class EventTicketInline(TabularInline):  # type: ignore[misc]
    model = models.EventTicket
    extra = 0
    fields = ["user", "ticket_type", "total_amount", "payment_status", "payment_reference", "purchase_date"]
    readonly_fields = ["purchase_date"]
    raw_id_fields = ["user", "ticket_type"]


class EventAttendeeInline(TabularInline):  # type: ignore[misc]
    model = models.EventAttendee
    extra = 0
    fields = ["user", "status", "updated_at"]
    readonly_fields = ["updated_at"]
    raw_id_fields = ["user"]


# --- ModelAdmins ---
@admin.register(models.Event)
class EventAdmin(ModelAdmin, UserLinkMixin):  # type: ignore[misc]
    """Admin model for Events."""

    list_display = ["title", "owner_link", "category", "date", "time", "attendee_count", "is_free", "featured"]
    list_filter = ["featured", "is_free", "category", "gender_restriction", "date"]
    search_fields = ["title", "description", "location", "category", "owner__username"]
    raw_id_fields = ["owner"]
    readonly_fields = ["views", "attendees_count", "rating_average", "rating_count", "created_at", "updated_at"]
    date_hierarchy = "date"

    fieldsets = [
        (
            "Details",
            {
                "fields": (
                    "owner",
                    "title",
                    "description",
                    ("date", "time"),
                    "location",
                    ("latitude", "longitude"),
                    ("category", "tags"),
                    ("image", "video"),
                    "images",
                )
            },
        ),
        (
            "Configuration",
            {
                "fields": (
                    ("is_free", "price", "has_multiple_ticket_types"),
                    "max_attendees",
                    ("gender_restriction", "age_restrictions"),
                    "featured",
                )
            },
        ),
        (
            "Stats",
            {
                "fields": (
                    ("views", "attendees_count"),
                    ("rating_average", "rating_count"),
                    ("created_at", "updated_at"),
                )
            },
        ),
    ]

    inlines = [EventAttendeeInline, EventTicketInline, TicketTypeInline]

    @admin.display(description="Owner")
    def owner_link(self, obj: models.Event) -> str:
        return self.user_link(obj)

    @admin.display(description="Attendees")
    def attendee_count(self, obj: models.Event) -> str:
        return f"{obj.attendees_count} / {obj.max_attendees}"


@admin.register(models.TicketType)
class TicketTypeAdmin(ModelAdmin, EventLinkMixin):  # type: ignore[misc]
    list_display = ["name", "event_link", "price", "quantity", "sold_count", "is_active"]
    list_filter = ["is_active"]
    search_fields = ["name", "event__title"]
    raw_id_fields = ["event"]


@admin.register(models.EventTicket)
class EventTicketAdmin(ModelAdmin, UserLinkMixin, EventLinkMixin):  # type: ignore[misc]
    list_display = ["payment_reference", "event_link", "user_link", "total_amount", "platform_fee", "payment_status"]
    list_filter = ["payment_status", "purchase_date"]
    search_fields = ["payment_reference", "event__title", "user__username", "user__email"]
    raw_id_fields = ["event", "user", "ticket_type"]
    readonly_fields = ["id", "purchase_date", "platform_fee", "raw_response"]
    date_hierarchy = "purchase_date"


@admin.register(models.Comment)
class CommentAdmin(ModelAdmin, UserLinkMixin, EventLinkMixin):  # type: ignore[misc]
    list_display = ["id", "event_link", "user_link", "short_content", "created_at"]
    search_fields = ["content", "event__title", "user__username"]
    raw_id_fields = ["event", "user"]

    @admin.display(description="Content")
    def short_content(self, obj: models.Comment) -> str:
        return obj.content[:80]


@admin.register(models.EventRating)
class EventRatingAdmin(ModelAdmin, UserLinkMixin, EventLinkMixin):  # type: ignore[misc]
    list_display = ["event_link", "user_link", "rating", "updated_at"]
    list_filter = ["rating"]
    raw_id_fields = ["event", "user"]


@admin.register(models.Withdrawal)
class WithdrawalAdmin(ModelAdmin, UserLinkMixin):  # type: ignore[misc]
    list_display = ["id", "user_link", "amount", "bank_name", "status", "created_at", "processed_at"]
    list_filter = ["status", "created_at"]
    search_fields = ["user__username", "user__email", "account_name", "bank_name"]
    raw_id_fields = ["user"]
    readonly_fields = ["id", "created_at", "updated_at", "processed_at"]
    date_hierarchy = "created_at"
