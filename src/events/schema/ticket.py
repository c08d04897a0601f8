"""Ticket, ticket type and payment schemas."""

import typing as t
from decimal import Decimal

from ninja import ModelSchema, Schema
from pydantic import UUID4, Field

from common.schema import OneToTwoHundredString
from events.models import Event, EventTicket, TicketType


class TicketTypeSchema(ModelSchema):
    id: UUID4
    event_id: UUID4
    price: Decimal
    remaining: int

    class Meta:
        model = TicketType
        fields = ["id", "name", "description", "price", "quantity", "sold_count", "is_active"]


class TicketTypeCreateSchema(Schema):
    name: OneToTwoHundredString
    description: str = ""
    price: Decimal = Field(Decimal("0"), ge=0)
    quantity: int = Field(..., ge=1)
    is_active: bool = True


class TicketEventSchema(ModelSchema):
    id: UUID4

    class Meta:
        model = Event
        fields = ["id", "title", "date", "time", "location", "image"]


class TicketSchema(ModelSchema):
    id: UUID4
    event: TicketEventSchema
    ticket_type_id: UUID4 | None = None
    total_amount: Decimal
    platform_fee: Decimal

    class Meta:
        model = EventTicket
        fields = [
            "id",
            "quantity",
            "total_amount",
            "payment_reference",
            "payment_status",
            "platform_fee",
            "purchase_date",
        ]


class TicketAttendeeSchema(Schema):
    user_id: UUID4
    username: str
    display_name: str
    avatar: str
    quantity: int


class FreeTicketSchema(Schema):
    event_id: UUID4


class PaymentInitializeSchema(Schema):
    amount: Decimal | None = Field(None, ge=0)
    event_id: UUID4 | None = None
    ticket_type_id: UUID4 | None = None


class PaymentInitializeResponseSchema(Schema):
    payment_url: str
    reference: str


class PaymentVerifyResponseSchema(Schema):
    success: bool
    already_processed: bool = False
    ticket: TicketSchema | None = None
    verification: dict[str, t.Any] | None = None


class PaymentChannelsSchema(Schema):
    mode: t.Literal["live", "test"]
    currency: str
    channels: list[str]


class WebhookAckSchema(Schema):
    received: bool = True
