"""Ticket lifecycle: ticket types, free tickets, completion and the platform fee."""

import time
import typing as t
from collections.abc import Iterable
from decimal import ROUND_HALF_UP, Decimal

import structlog
from django.db import transaction
from django.db.models import F, QuerySet, Sum
from django.utils.translation import gettext_lazy as _
from ninja.errors import HttpError

from accounts.models import User
from common.models import SiteSettings
from events.exceptions import TicketConflictError
from events.models import Event, EventAttendee, EventTicket, TicketType
from events.schema import TicketTypeCreateSchema

from .attendance_service import upsert_attendance

logger = structlog.get_logger(__name__)


def timestamp_ms() -> int:
    return int(time.time() * 1000)


def build_payment_reference(event: Event, user: User, *, prefix: str = "") -> str:
    """`{event}-{timestamp_ms}-{user}` using dash-free hex ids, optionally prefixed."""
    reference = f"{event.id.hex}-{timestamp_ms()}-{user.id.hex}"
    return f"{prefix}-{reference}" if prefix else reference


# ---- Ticket types ----


def create_ticket_types(event: Event, payloads: Iterable[TicketTypeCreateSchema]) -> list[TicketType]:
    return [TicketType.objects.create(event=event, **payload.model_dump()) for payload in payloads]


def list_ticket_types(event: Event, viewer: User | t.Any) -> QuerySet[TicketType]:
    """Active types for the public; every type for the owner or an admin."""
    qs = TicketType.objects.filter(event=event)
    if event.can_be_managed_by(viewer):
        return qs
    return qs.active()


def add_ticket_type(event: Event, user: User, payload: TicketTypeCreateSchema) -> TicketType:
    if not event.can_be_managed_by(user):
        raise HttpError(403, str(_("Only the event owner can add ticket types")))
    ticket_type = TicketType.objects.create(event=event, **payload.model_dump())
    if not event.has_multiple_ticket_types:
        Event.objects.filter(pk=event.pk).update(has_multiple_ticket_types=True)
    logger.info("ticket_type_created", ticket_type_id=str(ticket_type.id), event_id=str(event.id))
    return ticket_type


# ---- Platform fee ----


def platform_fee_percent() -> Decimal:
    return SiteSettings.get_solo().platform_fee_percent


def compute_platform_fee(amount: Decimal) -> Decimal:
    fee = Decimal(amount) * platform_fee_percent() / Decimal(100)
    return fee.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)


def credit_platform_fee(ticket: EventTicket) -> Decimal:
    """Record the fee on the ticket and credit it to the first platform admin.

    Must be called once, when the ticket becomes completed.
    """
    fee = compute_platform_fee(ticket.total_amount)
    ticket.platform_fee = fee
    EventTicket.objects.filter(pk=ticket.pk).update(platform_fee=fee)

    if fee <= 0:
        return fee

    admin = User.objects.platform_admins().first()
    if admin is None:
        logger.warning("platform_fee_no_admin", ticket_id=str(ticket.id), fee=str(fee))
        return fee

    User.objects.filter(pk=admin.pk).update(platform_balance=F("platform_balance") + fee)
    logger.info("platform_fee_credited", ticket_id=str(ticket.id), admin_id=str(admin.id), fee=str(fee))
    return fee


# ---- Completion ----


def _count_sale(ticket: EventTicket) -> None:
    if ticket.ticket_type_id is None:
        return
    updated = TicketType.objects.filter(
        pk=ticket.ticket_type_id, sold_count__lte=F("quantity") - ticket.quantity
    ).update(sold_count=F("sold_count") + ticket.quantity)
    if not updated:
        logger.warning("ticket_type_oversold", ticket_id=str(ticket.id), ticket_type_id=str(ticket.ticket_type_id))


def _ensure_no_other_live_ticket(user_id: t.Any, event_id: t.Any, exclude_pk: t.Any = None) -> None:
    """Lock the buyer's live tickets for the event and refuse a second one."""
    others = EventTicket.objects.select_for_update().live().filter(user_id=user_id, event_id=event_id)
    if exclude_pk is not None:
        others = others.exclude(pk=exclude_pk)
    if others.exists():
        raise TicketConflictError(f"User {user_id} already holds a live ticket for event {event_id}")


@transaction.atomic
def complete_ticket(ticket: EventTicket, raw_response: dict[str, t.Any] | None = None) -> tuple[EventTicket, bool]:
    """Move a pending ticket to completed.

    A failed ticket whose charge went through after all is completed too, unless the
    buyer has started another checkout for the event in the meantime.

    Returns:
        The ticket and whether this call performed the transition. A ticket that is
        already completed is returned untouched, so the fee is never credited twice.

    Raises:
        TicketConflictError: the ticket is failed and the buyer already holds a live ticket.
    """
    locked = EventTicket.objects.select_for_update().get(pk=ticket.pk)
    if locked.payment_status == EventTicket.PaymentStatus.COMPLETED:
        return locked, False
    if locked.payment_status == EventTicket.PaymentStatus.FAILED:
        _ensure_no_other_live_ticket(locked.user_id, locked.event_id, exclude_pk=locked.pk)

    locked.payment_status = EventTicket.PaymentStatus.COMPLETED
    if raw_response is not None:
        locked.raw_response = raw_response
    locked.save(update_fields=["payment_status", "raw_response", "updated_at"])

    _count_sale(locked)
    credit_platform_fee(locked)

    logger.info("ticket_completed", ticket_id=str(locked.id), reference=locked.payment_reference)
    return locked, True


def fail_ticket(ticket: EventTicket, raw_response: dict[str, t.Any] | None = None) -> EventTicket:
    """Mark a pending ticket as failed."""
    if ticket.payment_status != EventTicket.PaymentStatus.PENDING:
        return ticket
    ticket.payment_status = EventTicket.PaymentStatus.FAILED
    if raw_response is not None:
        ticket.raw_response = raw_response
    ticket.save(update_fields=["payment_status", "raw_response", "updated_at"])
    logger.info("ticket_failed", ticket_id=str(ticket.id), reference=ticket.payment_reference)
    return ticket


@transaction.atomic
def create_completed_ticket(
    *,
    user: User,
    event: Event,
    reference: str,
    amount: Decimal,
    ticket_type: TicketType | None = None,
    raw_response: dict[str, t.Any] | None = None,
) -> EventTicket:
    """Create a ticket that is born completed and credit its fee.

    Raises:
        TicketConflictError: the buyer already holds a live ticket for the event.
    """
    _ensure_no_other_live_ticket(user.pk, event.pk)
    ticket = EventTicket.objects.create(
        user=user,
        event=event,
        ticket_type=ticket_type,
        quantity=1,
        total_amount=amount,
        payment_reference=reference,
        payment_status=EventTicket.PaymentStatus.COMPLETED,
        raw_response=raw_response or {},
    )
    _count_sale(ticket)
    credit_platform_fee(ticket)
    logger.info("ticket_created_completed", ticket_id=str(ticket.id), reference=reference, amount=str(amount))
    return ticket


# ---- Queries ----


def has_live_ticket(user: User, event: Event) -> bool:
    return EventTicket.objects.live().filter(user=user, event=event).exists()


def user_tickets(user: User) -> QuerySet[EventTicket]:
    """The user's tickets without failed attempts, newest purchase first."""
    return (
        EventTicket.objects.full()
        .filter(user=user)
        .exclude(payment_status=EventTicket.PaymentStatus.FAILED)
        .order_by("-purchase_date")
    )


def user_ticket_for_event(user: User, event: Event) -> EventTicket | None:
    return user_tickets(user).filter(event=event).first()


def ticket_attendees(event: Event) -> list[dict[str, t.Any]]:
    """Completed tickets aggregated per buyer."""
    rows = (
        EventTicket.objects.completed()
        .filter(event=event)
        .values("user_id", "user__username", "user__display_name", "user__avatar")
        .annotate(quantity=Sum("quantity"))
        .order_by("user__username")
    )
    return [
        {
            "user_id": row["user_id"],
            "username": row["user__username"],
            "display_name": row["user__display_name"] or row["user__username"],
            "avatar": row["user__avatar"] or "",
            "quantity": row["quantity"],
        }
        for row in rows
    ]


# ---- Free tickets ----


@transaction.atomic
def claim_free_ticket(event: Event, user: User) -> EventTicket:
    """Issue a completed zero-amount ticket for a free event and mark the user as going.

    Raises:
        HttpError: 400 when the event is paid, already held or sold out.
    """
    locked_event = Event.objects.select_for_update().get(pk=event.pk)
    if not locked_event.is_free:
        raise HttpError(400, str(_("This event is not free")))
    if has_live_ticket(user, locked_event):
        raise HttpError(400, str(_("You already have a ticket for this event")))
    if EventTicket.objects.completed().filter(event=locked_event).count() >= locked_event.max_attendees:
        raise HttpError(400, str(_("Event is sold out")))

    ticket = create_completed_ticket(
        user=user,
        event=locked_event,
        reference=build_payment_reference(locked_event, user, prefix="free"),
        amount=Decimal("0"),
    )
    upsert_attendance(locked_event, user, EventAttendee.Status.GOING)
    return ticket
