"""Comment, rating, attendance and favorite schemas."""

from datetime import datetime
from decimal import Decimal

from ninja import ModelSchema, Schema
from pydantic import UUID4, Field

from accounts.schema import MinimalUserSchema
from events.models import Comment, EventAttendee


class CommentSchema(ModelSchema):
    id: UUID4
    event_id: UUID4
    user: MinimalUserSchema

    class Meta:
        model = Comment
        fields = ["id", "content", "created_at", "updated_at"]


class CommentEditSchema(Schema):
    content: str = Field(..., min_length=1, max_length=5000)


class RatingSummarySchema(Schema):
    average: Decimal
    count: int
    user_rating: int | None = None


class RatingCreateSchema(Schema):
    rating: int = Field(..., ge=1, le=5)


class AttendanceStatusSchema(Schema):
    status: EventAttendee.Status | None = None


class AttendanceUpdateSchema(Schema):
    status: EventAttendee.Status


class AttendanceSchema(Schema):
    status: EventAttendee.Status
    attendees_count: int


class AttendeeSchema(Schema):
    user: MinimalUserSchema
    status: EventAttendee.Status
    updated_at: datetime


class FavoriteStatusSchema(Schema):
    is_favorited: bool


class FavoriteToggleSchema(FavoriteStatusSchema):
    message: str
