"""Paystack checkout: initialization, verification and purchase restrictions."""

import typing as t
from decimal import Decimal
from urllib.parse import urlencode
from uuid import UUID

import structlog
from django.conf import settings
from django.db import transaction
from django.utils import timezone
from django.utils.translation import gettext_lazy as _
from ninja.errors import HttpError

from accounts.models import User
from common.models import SiteSettings
from events.exceptions import TicketConflictError
from events.models import AgeBand, Event, EventTicket, TicketType
from events.schema import PaymentInitializeSchema

from . import ticket_service
from .paystack_client import from_minor_units, get_paystack_client, is_live_mode

logger = structlog.get_logger(__name__)

PAYSTACK_SUCCESS = "success"


def _age_band(age: int) -> AgeBand | None:
    """The restriction band an age falls into. Ages 18 and 19 fall into none."""
    if age < 18:
        return AgeBand.UNDER_18
    if 20 <= age < 30:
        return AgeBand.TWENTIES
    if 30 <= age < 40:
        return AgeBand.THIRTIES
    if age >= 40:
        return AgeBand.FORTY_PLUS
    return None


def check_purchase_restrictions(event: Event, user: User) -> None:
    """Refuse buyers that the event excludes.

    Both restriction fields name the excluded group: `male-only` keeps men out.
    A user without a date of birth is never age restricted.

    Raises:
        HttpError: 403 when the user is excluded.
    """
    excluded_gender = {
        Event.GenderRestriction.MALE_ONLY: User.Gender.MALE,
        Event.GenderRestriction.FEMALE_ONLY: User.Gender.FEMALE,
    }.get(event.gender_restriction)
    if excluded_gender and user.gender == excluded_gender:
        raise HttpError(
            403,
            str(_("This event restricts %(gender)s attendees from participating")) % {"gender": excluded_gender},
        )

    if event.age_restrictions:
        age = user.age_on(timezone.localdate())
        band = _age_band(age) if age is not None else None
        if band is not None and band in event.age_restrictions:
            raise HttpError(403, str(_("You cannot purchase tickets due to age restriction for this event")))


def _get_event(event_id: UUID) -> Event:
    event = Event.objects.filter(pk=event_id).first()
    if event is None:
        raise HttpError(404, str(_("Event not found")))
    return event


def _duplicate_ticket_error() -> HttpError:
    return HttpError(
        400,
        str(_("You cannot buy two tickets for yourself. You already have a ticket for this event.")),
    )


def build_callback_url(reference: str, amount: Decimal) -> str:
    frontend_base_url = SiteSettings.get_solo().frontend_base_url.rstrip("/")
    return f"{frontend_base_url}/payment/success?{urlencode({'reference': reference, 'amount': str(amount)})}"


@transaction.atomic
def initialize_payment(user: User, payload: PaymentInitializeSchema) -> dict[str, str]:
    """Create a pending ticket and start a Paystack hosted checkout for it.

    Returns:
        `payment_url` to redirect the buyer to and the transaction `reference`.
    """
    if not payload.amount or not payload.event_id:
        raise HttpError(400, str(_("Amount and event ID are required")))
    if not user.email:
        raise HttpError(400, str(_("User email not found")))

    event = _get_event(payload.event_id)

    ticket_type: TicketType | None = None
    if payload.ticket_type_id:
        # Lock the type for the rest of the transaction so availability cannot change under us
        ticket_type = TicketType.objects.select_for_update().filter(pk=payload.ticket_type_id, event=event).first()
        if ticket_type is None:
            raise HttpError(404, str(_("Ticket type not found")))
        if ticket_type.is_sold_out:
            raise HttpError(400, str(_("This ticket type is sold out")))

    check_purchase_restrictions(event, user)

    if ticket_service.has_live_ticket(user, event):
        raise _duplicate_ticket_error()

    amount = payload.amount
    reference = ticket_service.build_payment_reference(event, user)
    ticket = EventTicket.objects.create(
        user=user,
        event=event,
        ticket_type=ticket_type,
        quantity=1,
        total_amount=amount,
        payment_reference=reference,
        payment_status=EventTicket.PaymentStatus.PENDING,
    )

    with get_paystack_client() as client:
        transaction_data = client.initialize_transaction(
            email=user.email,
            amount=amount,
            reference=reference,
            callback_url=build_callback_url(reference, amount),
            channels=list(settings.PAYSTACK_PAYMENT_CHANNELS),
            metadata={
                "event_id": str(event.id),
                "user_id": str(user.id),
                "event_title": event.title,
                "ticket_id": str(ticket.id),
                "ticket_type_id": str(ticket_type.id) if ticket_type else None,
                "currency_code": settings.PAYSTACK_CURRENCY,
                "amount_in_rands": f"{amount:.2f}",
            },
        )

    logger.info(
        "ticket_checkout_initialized",
        ticket_id=str(ticket.id),
        reference=reference,
        event_id=str(event.id),
        user_id=str(user.id),
        amount=str(amount),
        live_mode=is_live_mode(),
    )
    return {
        "payment_url": transaction_data["authorization_url"],
        "reference": transaction_data.get("reference", reference),
    }


def parse_event_id(reference: str) -> UUID:
    """Recover the event id from a `{event}-{timestamp}-{user}` reference."""
    prefix = reference.split("-", 1)[0]
    try:
        return UUID(hex=prefix)
    except ValueError:
        raise HttpError(400, str(_("Could not determine event ID from payment reference")))


def _ticket_type_from_metadata(event: Event, metadata: t.Any) -> TicketType | None:
    if not isinstance(metadata, dict) or not metadata.get("ticket_type_id"):
        return None
    try:
        return TicketType.objects.filter(pk=UUID(str(metadata["ticket_type_id"])), event=event).first()
    except ValueError:
        return None


def verify_payment(user: User, reference: str, amount: Decimal | None = None) -> dict[str, t.Any]:
    """Confirm a checkout with Paystack and settle the matching ticket.

    - a completed ticket is reported as already processed;
    - a pending ticket becomes completed or failed depending on Paystack;
    - without a ticket, one is created for the caller when Paystack reports success.
    """
    ticket = EventTicket.objects.full().filter(payment_reference=reference).first()
    if ticket is not None and ticket.user_id != user.pk and not user.is_platform_admin:
        raise HttpError(404, str(_("Ticket not found")))

    if ticket is not None and ticket.is_completed:
        return {"success": True, "already_processed": True, "ticket": ticket}

    event = ticket.event if ticket is not None else _get_event(parse_event_id(reference))

    with get_paystack_client() as client:
        verification = client.verify_transaction(reference)

    succeeded = verification.get("status") == PAYSTACK_SUCCESS
    logger.info(
        "payment_verified",
        reference=reference,
        paystack_status=verification.get("status"),
        has_ticket=ticket is not None,
        requested_amount=str(amount) if amount is not None else None,
    )

    if ticket is not None:
        if not succeeded:
            ticket = ticket_service.fail_ticket(ticket, raw_response=verification)
            return {"success": False, "ticket": ticket, "verification": verification}
        try:
            ticket, _transitioned = ticket_service.complete_ticket(ticket, raw_response=verification)
        except TicketConflictError:
            logger.warning("payment_verify_conflict", reference=reference, ticket_id=str(ticket.id))
            raise _duplicate_ticket_error()
        return {"success": True, "ticket": ticket, "verification": verification}

    if not succeeded:
        return {"success": False, "ticket": None, "verification": verification}

    try:
        ticket = ticket_service.create_completed_ticket(
            user=user,
            event=event,
            reference=reference,
            amount=from_minor_units(verification.get("amount", 0)),
            ticket_type=_ticket_type_from_metadata(event, verification.get("metadata")),
            raw_response=verification,
        )
    except TicketConflictError:
        logger.warning("payment_verify_conflict", reference=reference, ticket_id=None)
        raise _duplicate_ticket_error()
    return {"success": True, "ticket": ticket, "verification": verification}


def payment_channels() -> dict[str, t.Any]:
    return {
        "mode": "live" if is_live_mode() else "test",
        "currency": settings.PAYSTACK_CURRENCY,
        "channels": list(settings.PAYSTACK_PAYMENT_CHANNELS),
    }
