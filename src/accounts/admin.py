"""Admin interface for the accounts app."""

from django.contrib import admin
from django.contrib.auth.admin import UserAdmin
from django.db.models import Count, QuerySet
from django.http import HttpRequest
from unfold.admin import ModelAdmin, TabularInline

from accounts.models import User, UserFollow


class FollowingInline(TabularInline):  # type: ignore[misc]
    """Users this user follows."""

    model = UserFollow
    fk_name = "follower"
    extra = 0
    fields = ["following", "is_archived", "created_at"]
    readonly_fields = ["created_at"]
    raw_id_fields = ["following"]
    verbose_name = "Following"
    verbose_name_plural = "Following"


@admin.register(User)
class EventHubUserAdmin(UserAdmin, ModelAdmin):  # type: ignore[type-arg,misc]
    """Admin for users, with moderation flags and balances."""

    # List view configuration
    list_display = [
        "username",
        "email",
        "display_name",
        "email_verified_display",
        "is_admin",
        "is_banned",
        "platform_balance",
        "date_joined",
        "event_count",
    ]
    list_filter = [
        "is_admin",
        "is_banned",
        "is_superuser",
        "is_active",
        "email_verified",
        "gender",
        "date_joined",
    ]
    search_fields = ["username", "email", "display_name", "location"]
    ordering = ["-date_joined"]
    date_hierarchy = "date_joined"

    # Detail view configuration
    readonly_fields = ["id", "date_joined", "last_login", "updated_at"]

    fieldsets = (
        (
            "Profile",
            {
                "fields": (
                    "id",
                    ("username", "email"),
                    "display_name",
                    "bio",
                    ("avatar", "location"),
                    ("gender", "date_of_birth"),
                    "preferences",
                )
            },
        ),
        (
            "Authentication",
            {
                "fields": (
                    "password",
                    "email_verified",
                    ("date_joined", "last_login", "updated_at"),
                )
            },
        ),
        (
            "Moderation & Balance",
            {"fields": (("is_admin", "is_banned"), "platform_balance")},
        ),
        (
            "Permissions",
            {
                "fields": (
                    ("is_active", "is_staff", "is_superuser"),
                    "groups",
                    "user_permissions",
                ),
                "classes": ["collapse"],
            },
        ),
    )
    add_fieldsets = (
        (
            None,
            {
                "classes": ("wide",),
                "fields": ("username", "email", "password1", "password2"),
            },
        ),
    )

    inlines = [FollowingInline]

    def get_queryset(self, request: HttpRequest) -> QuerySet[User]:
        return super().get_queryset(request).annotate(_event_count=Count("owned_events", distinct=True))

    @admin.display(boolean=True, description="Email Verified", ordering="email_verified")
    def email_verified_display(self, obj: User) -> bool:
        return obj.email_verified

    @admin.display(description="Events", ordering="_event_count")
    def event_count(self, obj: User) -> int:
        return getattr(obj, "_event_count", 0)


@admin.register(UserFollow)
class UserFollowAdmin(ModelAdmin):  # type: ignore[misc]
    list_display = ["follower", "following", "is_archived", "created_at"]
    list_filter = ["is_archived", "created_at"]
    search_fields = ["follower__username", "following__username"]
    raw_id_fields = ["follower", "following"]
    readonly_fields = ["id", "created_at", "updated_at"]
