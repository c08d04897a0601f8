import typing as t
from decimal import Decimal

import pytest

from accounts.models import User
from common.models import SiteSettings
from events.exceptions import TicketConflictError
from events.models import Event, EventTicket, TicketType
from events.service import ticket_service

pytestmark = pytest.mark.django_db


def test_build_payment_reference(paid_event: Event, user: User) -> None:
    reference = ticket_service.build_payment_reference(paid_event, user)

    event_part, timestamp, user_part = reference.split("-")
    assert event_part == paid_event.id.hex
    assert user_part == user.id.hex
    assert timestamp.isdigit() and len(timestamp) == 13


@pytest.mark.parametrize(
    "fee_percent,amount,expected",
    [("15.00", "200.00", "30.00"), ("15.00", "99.99", "15.00"), ("2.50", "10.00", "0.25"), ("0", "500", "0.00")],
)
def test_compute_platform_fee(fee_percent: str, amount: str, expected: str) -> None:
    site_settings = SiteSettings.get_solo()
    site_settings.platform_fee_percent = Decimal(fee_percent)
    site_settings.save()

    assert ticket_service.compute_platform_fee(Decimal(amount)) == Decimal(expected)


def test_complete_ticket_once(
    pending_ticket: EventTicket, admin_user: User, ticket_type: TicketType
) -> None:
    pending_ticket.ticket_type = ticket_type
    pending_ticket.save()

    ticket, transitioned = ticket_service.complete_ticket(pending_ticket, raw_response={"status": "success"})
    again, transitioned_again = ticket_service.complete_ticket(ticket)

    assert transitioned is True
    assert transitioned_again is False
    assert again.payment_status == EventTicket.PaymentStatus.COMPLETED
    assert again.raw_response == {"status": "success"}
    admin_user.refresh_from_db()
    assert admin_user.platform_balance == Decimal("30.00")
    ticket_type.refresh_from_db()
    assert ticket_type.sold_count == 1


def test_fee_goes_to_oldest_admin(
    pending_ticket: EventTicket, admin_user: User, user_factory: t.Any
) -> None:
    newer_admin = user_factory(is_admin=True)

    ticket_service.complete_ticket(pending_ticket)

    admin_user.refresh_from_db()
    newer_admin.refresh_from_db()
    assert admin_user.platform_balance == Decimal("30.00")
    assert newer_admin.platform_balance == Decimal("0")


def test_fee_without_admin_is_only_recorded(pending_ticket: EventTicket) -> None:
    ticket, _ = ticket_service.complete_ticket(pending_ticket)

    ticket.refresh_from_db()
    assert ticket.platform_fee == Decimal("30.00")
    assert not User.objects.filter(platform_balance__gt=0).exists()


def test_oversold_ticket_type_is_not_incremented(
    user: User, ticket_type: TicketType, paid_event: Event, make_ticket: t.Callable[..., t.Any]
) -> None:
    ticket_type.sold_count = ticket_type.quantity
    ticket_type.save()
    ticket = make_ticket(user, paid_event, status=EventTicket.PaymentStatus.PENDING, ticket_type=ticket_type)

    completed, transitioned = ticket_service.complete_ticket(ticket)

    assert transitioned is True
    assert completed.is_completed
    ticket_type.refresh_from_db()
    assert ticket_type.sold_count == ticket_type.quantity


def test_fail_ticket_only_from_pending(pending_ticket: EventTicket) -> None:
    failed = ticket_service.fail_ticket(pending_ticket, raw_response={"status": "failed"})
    assert failed.payment_status == EventTicket.PaymentStatus.FAILED

    completed_then = ticket_service.complete_ticket(failed)[0]
    assert ticket_service.fail_ticket(completed_then).payment_status == EventTicket.PaymentStatus.COMPLETED


def test_late_success_revives_failed_ticket(
    user: User, paid_event: Event, admin_user: User, make_ticket: t.Callable[..., EventTicket]
) -> None:
    failed = make_ticket(user, paid_event, status=EventTicket.PaymentStatus.FAILED)

    ticket, transitioned = ticket_service.complete_ticket(failed)

    assert transitioned is True
    assert ticket.is_completed
    admin_user.refresh_from_db()
    assert admin_user.platform_balance == Decimal("30.00")


def test_failed_ticket_not_revived_over_a_live_one(
    user: User, paid_event: Event, admin_user: User, make_ticket: t.Callable[..., EventTicket]
) -> None:
    failed = make_ticket(user, paid_event, status=EventTicket.PaymentStatus.FAILED)
    retry = make_ticket(user, paid_event, status=EventTicket.PaymentStatus.PENDING)

    with pytest.raises(TicketConflictError):
        ticket_service.complete_ticket(failed)

    failed.refresh_from_db()
    retry.refresh_from_db()
    assert failed.payment_status == EventTicket.PaymentStatus.FAILED
    assert retry.payment_status == EventTicket.PaymentStatus.PENDING
    admin_user.refresh_from_db()
    assert admin_user.platform_balance == Decimal("0")


def test_create_completed_ticket_refuses_second_live_ticket(
    user: User, paid_event: Event, make_ticket: t.Callable[..., EventTicket]
) -> None:
    make_ticket(user, paid_event)

    with pytest.raises(TicketConflictError):
        ticket_service.create_completed_ticket(
            user=user,
            event=paid_event,
            reference=ticket_service.build_payment_reference(paid_event, user),
            amount=Decimal("200.00"),
        )

    assert EventTicket.objects.filter(user=user, event=paid_event).count() == 1
