import secrets
import typing as t
from decimal import Decimal
from unittest.mock import MagicMock, patch

import pytest

from accounts.models import User
from events.models import Event, EventTicket, TicketType


@pytest.fixture
def ticket_type(paid_event: Event) -> TicketType:
    paid_event.has_multiple_ticket_types = True
    paid_event.save()
    return TicketType.objects.create(event=paid_event, name="VIP", price=Decimal("500.00"), quantity=2)


@pytest.fixture
def make_ticket() -> t.Callable[..., EventTicket]:
    """Create a ticket directly, bypassing checkout."""

    def _make(
        user: User,
        event: Event,
        *,
        status: EventTicket.PaymentStatus = EventTicket.PaymentStatus.COMPLETED,
        amount: Decimal = Decimal("200.00"),
        ticket_type: TicketType | None = None,
    ) -> EventTicket:
        return EventTicket.objects.create(
            user=user,
            event=event,
            ticket_type=ticket_type,
            total_amount=amount,
            payment_reference=f"{event.id.hex}-{secrets.randbelow(10**13)}-{user.id.hex}",
            payment_status=status,
        )

    return _make


@pytest.fixture
def pending_ticket(user: User, paid_event: Event, make_ticket: t.Callable[..., EventTicket]) -> EventTicket:
    return make_ticket(user, paid_event, status=EventTicket.PaymentStatus.PENDING)


@pytest.fixture
def mock_paystack_initialize() -> t.Iterator[MagicMock]:
    with patch("events.service.paystack_client.PaystackClient.initialize_transaction") as mock:
        mock.side_effect = lambda **kwargs: {
            "authorization_url": f"https://checkout.paystack.com/{kwargs['reference'][-8:]}",
            "access_code": "ac_123",
            "reference": kwargs["reference"],
        }
        yield mock


@pytest.fixture
def mock_paystack_verify() -> t.Iterator[MagicMock]:
    with patch("events.service.paystack_client.PaystackClient.verify_transaction") as mock:
        yield mock
