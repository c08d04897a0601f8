from uuid import UUID

from django.db.models import QuerySet
from ninja_extra import api_controller, route, status

from common.authentication import ActiveUserJWTAuth, OptionalAuth
from common.controllers import UserAwareController
from common.throttling import WriteThrottle
from events import models, schema
from events.service import (
    attendance_service,
    comment_service,
    event_service,
    favorite_service,
    rating_service,
)


@api_controller("/events", auth=OptionalAuth(), tags=["Event Social"])
class EventSocialController(UserAwareController):
    """Comments, ratings, attendance and favorites of an event."""

    # ---- Comments ----

    @route.get("/{uuid:event_id}/comments", url_name="list_comments", response=list[schema.CommentSchema])
    def list_comments(self, event_id: UUID) -> QuerySet[models.Comment]:
        """Comments on the event, newest first."""
        return comment_service.list_comments(event_service.get_event(event_id))

    @route.post(
        "/{uuid:event_id}/comments",
        url_name="add_comment",
        response={status.HTTP_201_CREATED: schema.CommentSchema},
        auth=ActiveUserJWTAuth(),
        throttle=WriteThrottle(),
    )
    def add_comment(self, event_id: UUID, payload: schema.CommentEditSchema) -> tuple[int, models.Comment]:
        """Comment on an event. The owner is notified unless they wrote it."""
        event = event_service.get_event(event_id)
        return status.HTTP_201_CREATED, comment_service.add_comment(event, self.user(), payload.content)

    # ---- Ratings ----

    @route.get("/{uuid:event_id}/ratings", url_name="get_ratings", response=schema.RatingSummarySchema)
    def get_ratings(self, event_id: UUID) -> schema.RatingSummarySchema:
        """Average rating and count, plus the caller's own rating when signed in."""
        event = event_service.get_event(event_id)
        user = self.maybe_user()
        return schema.RatingSummarySchema(
            average=event.rating_average,
            count=event.rating_count,
            user_rating=rating_service.get_user_rating(event, user if user.is_authenticated else None),
        )

    @route.post(
        "/{uuid:event_id}/ratings",
        url_name="rate_event",
        response=schema.RatingSummarySchema,
        auth=ActiveUserJWTAuth(),
        throttle=WriteThrottle(),
    )
    def rate_event(self, event_id: UUID, payload: schema.RatingCreateSchema) -> schema.RatingSummarySchema:
        """Rate an event from 1 to 5. Rating again replaces the previous rating."""
        event = event_service.get_event(event_id)
        rating = rating_service.rate_event(event, self.user(), payload.rating)
        return schema.RatingSummarySchema(
            average=event.rating_average, count=event.rating_count, user_rating=rating.rating
        )

    # ---- Attendance ----

    @route.get(
        "/{uuid:event_id}/attendance",
        url_name="get_attendance",
        response=schema.AttendanceStatusSchema,
        auth=ActiveUserJWTAuth(),
    )
    def get_attendance(self, event_id: UUID) -> schema.AttendanceStatusSchema:
        event = event_service.get_event(event_id)
        attendance = attendance_service.get_attendance(event, self.user())
        return schema.AttendanceStatusSchema(status=attendance.status if attendance else None)

    @route.post(
        "/{uuid:event_id}/attendance",
        url_name="set_attendance",
        response=schema.AttendanceSchema,
        auth=ActiveUserJWTAuth(),
        throttle=WriteThrottle(),
    )
    def set_attendance(self, event_id: UUID, payload: schema.AttendanceUpdateSchema) -> schema.AttendanceSchema:
        """Mark yourself as going, interested or not going.

        Going is refused once the event is full. The owner is notified.
        """
        event = event_service.get_event(event_id)
        attendance = attendance_service.set_attendance(event, self.user(), payload.status)
        return schema.AttendanceSchema(status=attendance.status, attendees_count=event.attendees_count)

    @route.get("/{uuid:event_id}/attendees", url_name="list_attendees", response=list[schema.AttendeeSchema])
    def list_attendees(self, event_id: UUID) -> QuerySet[models.EventAttendee]:
        return attendance_service.list_attendees(event_service.get_event(event_id))

    # ---- Favorites ----

    @route.put(
        "/{uuid:event_id}/favorite",
        url_name="toggle_favorite",
        response=schema.FavoriteToggleSchema,
        auth=ActiveUserJWTAuth(),
        throttle=WriteThrottle(),
    )
    def toggle_favorite(self, event_id: UUID) -> schema.FavoriteToggleSchema:
        """Add the event to the caller's favorites, or remove it if it is already there."""
        event = event_service.get_event(event_id)
        is_favorited = favorite_service.toggle_favorite(event, self.user())
        message = "Event added to favorites" if is_favorited else "Event removed from favorites"
        return schema.FavoriteToggleSchema(is_favorited=is_favorited, message=message)

    @route.get(
        "/{uuid:event_id}/favorite",
        url_name="favorite_status",
        response=schema.FavoriteStatusSchema,
        auth=ActiveUserJWTAuth(),
    )
    def favorite_status(self, event_id: UUID) -> schema.FavoriteStatusSchema:
        event = event_service.get_event(event_id)
        return schema.FavoriteStatusSchema(is_favorited=favorite_service.is_favorited(event, self.user()))
