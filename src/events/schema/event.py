"""Event schemas."""

import datetime
import typing as t
from decimal import Decimal

from ninja import ModelSchema, Schema
from pydantic import UUID4, Field, model_validator

from accounts.schema import MinimalUserSchema
from common.schema import OneToTwoHundredString, StrippedString
from events.models import DEFAULT_MAX_ATTENDEES, AgeBand, Event

from .ticket import TicketTypeCreateSchema


class MinimalEventSchema(ModelSchema):
    id: UUID4

    class Meta:
        model = Event
        fields = ["id", "title", "date", "time", "location", "image", "category"]


class EventSchema(ModelSchema):
    id: UUID4
    owner: MinimalUserSchema
    price: Decimal
    rating_average: Decimal
    images: list[str]
    age_restrictions: list[str]

    class Meta:
        model = Event
        fields = [
            "id",
            "title",
            "description",
            "date",
            "time",
            "location",
            "latitude",
            "longitude",
            "image",
            "images",
            "video",
            "category",
            "tags",
            "featured",
            "views",
            "attendees_count",
            "max_attendees",
            "is_free",
            "price",
            "has_multiple_ticket_types",
            "gender_restriction",
            "age_restrictions",
            "rating_average",
            "rating_count",
            "created_at",
            "updated_at",
        ]


class EventCreateSchema(Schema):
    title: OneToTwoHundredString
    description: StrippedString = Field(..., min_length=1)
    date: datetime.date
    time: datetime.time | None = None
    location: StrippedString = Field("", max_length=255)
    latitude: Decimal | None = Field(None, ge=-90, le=90)
    longitude: Decimal | None = Field(None, ge=-180, le=180)
    image: str = Field("", max_length=1024)
    images: list[str] = Field(default_factory=list)
    video: str = Field("", max_length=1024)
    category: StrippedString = Field("", max_length=100)
    tags: StrippedString = Field("", max_length=500)
    featured: bool = False
    max_attendees: int = Field(DEFAULT_MAX_ATTENDEES, ge=1)
    is_free: bool = True
    price: Decimal = Field(Decimal("0"), ge=0)
    has_multiple_ticket_types: bool = False
    gender_restriction: Event.GenderRestriction = Event.GenderRestriction.NONE
    age_restrictions: list[AgeBand] = Field(default_factory=list)
    ticket_types: list[TicketTypeCreateSchema] = Field(default_factory=list)

    @model_validator(mode="after")
    def validate_coordinates(self) -> t.Self:
        """Latitude and longitude come in pairs."""
        if (self.latitude is None) != (self.longitude is None):
            raise ValueError("Latitude and longitude must be provided together")
        return self


class EventUpdateSchema(Schema):
    """Partial update: only the fields that are sent are applied."""

    title: OneToTwoHundredString | None = None
    description: StrippedString | None = Field(None, min_length=1)
    date: datetime.date | None = None
    time: datetime.time | None = None
    location: StrippedString | None = Field(None, max_length=255)
    latitude: Decimal | None = Field(None, ge=-90, le=90)
    longitude: Decimal | None = Field(None, ge=-180, le=180)
    image: str | None = Field(None, max_length=1024)
    images: list[str] | None = None
    video: str | None = Field(None, max_length=1024)
    featured: bool | None = None
    category: StrippedString | None = Field(None, max_length=100)
    max_attendees: int | None = Field(None, ge=1)
    is_free: bool | None = None
    price: Decimal | None = Field(None, ge=0)
    tags: StrippedString | None = Field(None, max_length=500)
    has_multiple_ticket_types: bool | None = None
    gender_restriction: Event.GenderRestriction | None = None
    age_restrictions: list[AgeBand] | None = None


class PaginationSchema(Schema):
    page: int
    limit: int
    total_count: int
    total_pages: int
    has_more: bool


class EventListSchema(Schema):
    events: list[EventSchema]
    pagination: PaginationSchema
