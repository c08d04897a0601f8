import typing as t

from django.conf import settings
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models

from common.models import TimeStampedModel


class Comment(TimeStampedModel):
    event = models.ForeignKey("events.Event", on_delete=models.CASCADE, related_name="comments")
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="comments")
    content = models.TextField()

    class Meta:
        ordering = ["-created_at"]

    def __str__(self) -> str:
        return f"Comment by {self.user_id} on {self.event_id}"


class EventRating(TimeStampedModel):
    event = models.ForeignKey("events.Event", on_delete=models.CASCADE, related_name="ratings")
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="event_ratings")
    rating = models.PositiveSmallIntegerField(validators=[MinValueValidator(1), MaxValueValidator(5)])

    class Meta:
        constraints = [
            models.UniqueConstraint(fields=["event", "user"], name="unique_event_rating_per_user"),
            models.CheckConstraint(condition=models.Q(rating__gte=1, rating__lte=5), name="event_rating_range"),
        ]

    def __str__(self) -> str:
        return f"{self.rating}/5 by {self.user_id} on {self.event_id}"


class EventAttendeeQuerySet(models.QuerySet["EventAttendee"]):
    def going(self) -> t.Self:
        return self.filter(status=EventAttendee.Status.GOING)


class EventAttendee(TimeStampedModel):
    class Status(models.TextChoices):
        GOING = "going", "Going"
        INTERESTED = "interested", "Interested"
        NOT_GOING = "not_going", "Not going"

    event = models.ForeignKey("events.Event", on_delete=models.CASCADE, related_name="attendances")
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="attendances")
    status = models.CharField(max_length=20, choices=Status.choices, db_index=True)

    objects = EventAttendeeQuerySet.as_manager()

    class Meta:
        constraints = [models.UniqueConstraint(fields=["event", "user"], name="unique_event_attendee")]
        ordering = ["-updated_at"]

    def __str__(self) -> str:
        return f"{self.user_id} {self.status} {self.event_id}"


class UserFavorite(TimeStampedModel):
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="favorites")
    event = models.ForeignKey("events.Event", on_delete=models.CASCADE, related_name="favorited_by")

    class Meta:
        constraints = [models.UniqueConstraint(fields=["user", "event"], name="unique_user_favorite")]
        ordering = ["-created_at"]

    def __str__(self) -> str:
        return f"Favorite {self.event_id} of {self.user_id}"
