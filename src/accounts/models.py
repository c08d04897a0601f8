import typing as t
import uuid
from datetime import date
from decimal import Decimal

from django.contrib.auth.models import AbstractUser, UserManager
from django.db import models
from django.db.models import Q
from django.db.models.functions import Lower

from common.models import TimeStampedModel


class UserQuerySet(models.QuerySet["User"]):
    def active(self) -> t.Self:
        """Users who are allowed to use the platform."""
        return self.filter(is_active=True, is_banned=False)

    def platform_admins(self) -> t.Self:
        """Platform administrators, oldest account first."""
        return self.filter(Q(is_admin=True) | Q(is_superuser=True)).order_by("date_joined")

    def search(self, query: str = "", location: str = "") -> t.Self:
        """Case-insensitive substring search on identity fields, optionally narrowed by location."""
        qs = self
        if query:
            qs = qs.filter(
                Q(username__icontains=query)
                | Q(display_name__icontains=query)
                | Q(bio__icontains=query)
                | Q(email__icontains=query)
            )
        if location:
            qs = qs.filter(location__icontains=location)
        return qs


class EventHubUserManager(UserManager["User"]):
    def get_queryset(self) -> UserQuerySet:
        """Get queryset for User."""
        return UserQuerySet(self.model, using=self._db)

    def active(self) -> UserQuerySet:
        """Shortcut to the active users."""
        return self.get_queryset().active()

    def platform_admins(self) -> UserQuerySet:
        """Shortcut to the platform admins."""
        return self.get_queryset().platform_admins()

    def search(self, query: str = "", location: str = "") -> UserQuerySet:
        """Shortcut to user search."""
        return self.get_queryset().search(query, location)


class User(AbstractUser):
    class Gender(models.TextChoices):
        MALE = "male", "Male"
        FEMALE = "female", "Female"
        OTHER = "other", "Other"
        UNSPECIFIED = "", "Unspecified"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    email = models.EmailField(blank=True, default="", db_index=True)
    display_name = models.CharField(max_length=255, blank=True, db_index=True)
    bio = models.TextField(blank=True)
    avatar = models.URLField(max_length=1024, blank=True)
    location = models.CharField(max_length=255, blank=True, db_index=True)
    gender = models.CharField(max_length=10, choices=Gender.choices, blank=True, default=Gender.UNSPECIFIED)
    date_of_birth = models.DateField(null=True, blank=True)
    preferences = models.JSONField(default=dict, blank=True)
    email_verified = models.BooleanField(default=False)
    is_admin = models.BooleanField(default=False, help_text="Platform administrator.")
    is_banned = models.BooleanField(default=False, db_index=True)
    platform_balance = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))
    updated_at = models.DateTimeField(auto_now=True)

    objects = EventHubUserManager()  # type: ignore[misc]

    class Meta:
        ordering = ["username"]
        constraints = [
            models.UniqueConstraint(
                Lower("email"),
                condition=~Q(email=""),
                name="unique_user_email_case_insensitive",
            )
        ]

    def __str__(self) -> str:
        return self.username

    @property
    def is_platform_admin(self) -> bool:
        """Platform admins manage users, payouts and payment settings."""
        return self.is_admin or self.is_superuser

    @property
    def public_name(self) -> str:
        """The display name, falling back to the username."""
        return self.display_name or self.username

    @property
    def followers_count(self) -> int:
        """Number of active followers."""
        return self.follower_relationships.filter(is_archived=False).count()

    @property
    def following_count(self) -> int:
        """Number of users this user actively follows."""
        return self.following_relationships.filter(is_archived=False).count()

    def age_on(self, day: date) -> int | None:
        """The user's age in full years on the given day, if the date of birth is known."""
        if not self.date_of_birth:
            return None
        dob = self.date_of_birth
        return day.year - dob.year - ((day.month, day.day) < (dob.month, dob.day))


class UserFollowQuerySet(models.QuerySet["UserFollow"]):
    def active(self) -> t.Self:
        """Non-archived follow relationships."""
        return self.filter(is_archived=False)


class UserFollow(TimeStampedModel):
    """A user following another user.

    Unfollowing archives the row so that a later follow reactivates it.
    """

    follower = models.ForeignKey(User, on_delete=models.CASCADE, related_name="following_relationships")
    following = models.ForeignKey(User, on_delete=models.CASCADE, related_name="follower_relationships")
    is_archived = models.BooleanField(default=False, db_index=True)

    objects = UserFollowQuerySet.as_manager()

    class Meta:
        constraints = [
            models.UniqueConstraint(fields=["follower", "following"], name="unique_user_follow"),
            models.CheckConstraint(condition=~Q(follower=models.F("following")), name="no_self_follow"),
        ]
        indexes = [
            models.Index(fields=["following", "is_archived"], name="ix_userfollow_following_active"),
        ]
        ordering = ["-created_at"]

    def __str__(self) -> str:
        return f"{self.follower} -> {self.following}"
