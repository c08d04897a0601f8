import typing as t
from datetime import date

from django.conf import settings
from django.core.exceptions import ValidationError as DjangoValidationError
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models
from django.db.models import Q

from common.models import TimeStampedModel

DEFAULT_MAX_ATTENDEES = 100


class AgeBand(models.TextChoices):
    UNDER_18 = "under 18", "Under 18"
    TWENTIES = "20s", "20s"
    THIRTIES = "30s", "30s"
    FORTY_PLUS = "40plus", "40+"


class EventQuerySet(models.QuerySet["Event"]):
    def with_owner(self) -> t.Self:
        """Select the related owner."""
        return self.select_related("owner")

    def featured(self) -> t.Self:
        return self.filter(featured=True)

    def search(self, query: str) -> t.Self:
        """Case-insensitive match over title, description, location and category."""
        return self.filter(
            Q(title__icontains=query)
            | Q(description__icontains=query)
            | Q(location__icontains=query)
            | Q(category__icontains=query)
        )

    def upcoming(self, today: date) -> t.Self:
        return self.filter(date__gte=today).order_by("date", "time")


class EventManager(models.Manager["Event"]):
    def get_queryset(self) -> EventQuerySet:
        return EventQuerySet(self.model, using=self._db)

    def with_owner(self) -> EventQuerySet:
        return self.get_queryset().with_owner()

    def featured(self) -> EventQuerySet:
        return self.get_queryset().featured()

    def search(self, query: str) -> EventQuerySet:
        return self.get_queryset().search(query)


class Event(TimeStampedModel):
    """A listing created by a user, with a date, a location, pricing and media."""

    class GenderRestriction(models.TextChoices):
        NONE = "", "No restriction"
        MALE_ONLY = "male-only", "Excludes male attendees"
        FEMALE_ONLY = "female-only", "Excludes female attendees"

    owner = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="owned_events")

    title = models.CharField(max_length=255, db_index=True)
    description = models.TextField()
    date = models.DateField(db_index=True)
    time = models.TimeField(null=True, blank=True)
    location = models.CharField(max_length=255, blank=True, default="")
    latitude = models.DecimalField(
        max_digits=9,
        decimal_places=6,
        null=True,
        blank=True,
        validators=[MinValueValidator(-90), MaxValueValidator(90)],
    )
    longitude = models.DecimalField(
        max_digits=9,
        decimal_places=6,
        null=True,
        blank=True,
        validators=[MinValueValidator(-180), MaxValueValidator(180)],
    )

    image = models.URLField(max_length=1024, blank=True, default="")
    images = models.JSONField(default=list, blank=True, help_text="Additional image URLs")
    video = models.URLField(max_length=1024, blank=True, default="")
    category = models.CharField(max_length=100, blank=True, default="", db_index=True)
    tags = models.CharField(max_length=500, blank=True, default="", help_text="Comma separated tags")

    featured = models.BooleanField(default=False, db_index=True)
    views = models.PositiveIntegerField(default=0)
    attendees_count = models.PositiveIntegerField(default=0, help_text="Number of 'going' attendances")
    max_attendees = models.PositiveIntegerField(default=DEFAULT_MAX_ATTENDEES)

    is_free = models.BooleanField(default=True)
    price = models.DecimalField(max_digits=10, decimal_places=2, default=0, validators=[MinValueValidator(0)])
    has_multiple_ticket_types = models.BooleanField(default=False)

    gender_restriction = models.CharField(
        max_length=20, choices=GenderRestriction.choices, blank=True, default=GenderRestriction.NONE
    )
    age_restrictions = models.JSONField(default=list, blank=True, help_text="Excluded age bands")

    rating_average = models.DecimalField(max_digits=3, decimal_places=2, default=0)
    rating_count = models.PositiveIntegerField(default=0)

    objects = EventManager()

    class Meta:
        ordering = ["-created_at"]
        indexes = [models.Index(fields=["date", "time"], name="ix_event_date_time")]

    def __str__(self) -> str:
        return self.title

    def clean(self) -> None:
        """Validate the age restriction bands."""
        super().clean()
        allowed = set(AgeBand.values)
        if not isinstance(self.age_restrictions, list) or any(
            band not in allowed for band in self.age_restrictions
        ):
            raise DjangoValidationError(
                {"age_restrictions": f"Age restrictions must be a list of: {', '.join(AgeBand.values)}."}
            )

    def is_owned_by(self, user: t.Any) -> bool:
        return bool(user and user.is_authenticated and self.owner_id == user.pk)

    def can_be_managed_by(self, user: t.Any) -> bool:
        """Whether the user is the owner or a platform admin."""
        return self.is_owned_by(user) or bool(getattr(user, "is_platform_admin", False))
