import typing as t
from decimal import Decimal

import orjson
import pytest
from django.shortcuts import reverse  # type: ignore[attr-defined]
from django.test.client import Client

from accounts.models import User
from events.models import Event, EventAttendee, EventTicket, TicketType

pytestmark = pytest.mark.django_db


def _claim(client: Client, event: Event) -> t.Any:
    return client.post(
        reverse("api:claim_free_ticket"),
        data=orjson.dumps({"event_id": str(event.id)}),
        content_type="application/json",
    )


class TestFreeTickets:
    def test_claim_free_ticket(self, user_client: Client, user: User, event: Event) -> None:
        response = _claim(user_client, event)

        assert response.status_code == 201
        data = response.json()
        assert data["payment_status"] == "completed"
        assert Decimal(data["total_amount"]) == 0
        assert data["payment_reference"].startswith(f"free-{event.id.hex}-")
        assert data["payment_reference"].endswith(user.id.hex)
        attendance = EventAttendee.objects.get(event=event, user=user)
        assert attendance.status == EventAttendee.Status.GOING
        event.refresh_from_db()
        assert event.attendees_count == 1

    def test_claim_twice(self, user_client: Client, event: Event) -> None:
        _claim(user_client, event)

        response = _claim(user_client, event)

        assert response.status_code == 400
        assert response.json()["detail"] == "You already have a ticket for this event"

    def test_claim_paid_event(self, user_client: Client, paid_event: Event) -> None:
        response = _claim(user_client, paid_event)

        assert response.status_code == 400
        assert response.json()["detail"] == "This event is not free"

    def test_claim_sold_out(self, user_client: Client, other_client: Client, event: Event) -> None:
        event.max_attendees = 1
        event.save()
        _claim(other_client, event)

        response = _claim(user_client, event)

        assert response.status_code == 400
        assert response.json()["detail"] == "Event is sold out"


class TestTicketQueries:
    def test_my_tickets_excludes_failed(
        self, user_client: Client, user: User, event: Event, paid_event: Event, make_ticket: t.Callable[..., t.Any]
    ) -> None:
        make_ticket(user, paid_event, status=EventTicket.PaymentStatus.FAILED)
        completed = make_ticket(user, event, amount=Decimal("0"))

        response = user_client.get(reverse("api:my_tickets"))

        assert [ticket["id"] for ticket in response.json()] == [str(completed.id)]
        assert response.json()[0]["event"]["title"] == "Braai in the Park"

    def test_my_event_ticket(
        self, user_client: Client, user: User, paid_event: Event, make_ticket: t.Callable[..., t.Any]
    ) -> None:
        url = reverse("api:my_event_ticket", kwargs={"event_id": paid_event.id})
        assert user_client.get(url).json() is None

        ticket = make_ticket(user, paid_event, status=EventTicket.PaymentStatus.PENDING)

        response = user_client.get(url)
        assert response.json()["id"] == str(ticket.id)
        assert response.json()["payment_status"] == "pending"

    def test_ticket_attendees_aggregates_completed(
        self,
        user_client: Client,
        user: User,
        other_user: User,
        paid_event: Event,
        make_ticket: t.Callable[..., t.Any],
    ) -> None:
        make_ticket(user, paid_event)
        make_ticket(other_user, paid_event, status=EventTicket.PaymentStatus.PENDING)

        response = user_client.get(reverse("api:ticket_attendees", kwargs={"event_id": paid_event.id}))

        assert response.json() == [
            {
                "user_id": str(user.id),
                "username": "testuser",
                "display_name": user.display_name,
                "avatar": "",
                "quantity": 1,
            }
        ]


class TestTicketTypes:
    def test_public_sees_active_only(self, anon_client: Client, ticket_type: TicketType, paid_event: Event) -> None:
        TicketType.objects.create(
            event=paid_event, name="Early Bird", price=Decimal("100"), quantity=5, is_active=False
        )

        response = anon_client.get(reverse("api:list_ticket_types", kwargs={"event_id": paid_event.id}))

        data = response.json()
        assert [tt["name"] for tt in data] == ["VIP"]
        assert data[0]["remaining"] == 2

    def test_owner_sees_inactive(self, organizer_client: Client, ticket_type: TicketType, paid_event: Event) -> None:
        TicketType.objects.create(
            event=paid_event, name="Early Bird", price=Decimal("100"), quantity=5, is_active=False
        )

        response = organizer_client.get(reverse("api:list_ticket_types", kwargs={"event_id": paid_event.id}))

        assert [tt["name"] for tt in response.json()] == ["Early Bird", "VIP"]

    def test_owner_adds_ticket_type(self, organizer_client: Client, paid_event: Event) -> None:
        response = organizer_client.post(
            reverse("api:create_ticket_type", kwargs={"event_id": paid_event.id}),
            data=orjson.dumps({"name": "Balcony", "price": "350.00", "quantity": 40}),
            content_type="application/json",
        )

        assert response.status_code == 201
        assert response.json()["sold_count"] == 0
        paid_event.refresh_from_db()
        assert paid_event.has_multiple_ticket_types is True

    def test_duplicate_name_rejected(
        self, organizer_client: Client, ticket_type: TicketType, paid_event: Event
    ) -> None:
        response = organizer_client.post(
            reverse("api:create_ticket_type", kwargs={"event_id": paid_event.id}),
            data=orjson.dumps({"name": "VIP", "price": "600.00", "quantity": 5}),
            content_type="application/json",
        )

        assert response.status_code == 400
        assert "errors" in response.json()

    def test_non_owner_cannot_add(self, user_client: Client, paid_event: Event) -> None:
        response = user_client.post(
            reverse("api:create_ticket_type", kwargs={"event_id": paid_event.id}),
            data=orjson.dumps({"name": "Sneaky", "quantity": 1}),
            content_type="application/json",
        )

        assert response.status_code == 403
