from datetime import time, timedelta
from uuid import uuid4

import pytest
from django.shortcuts import reverse  # type: ignore[attr-defined]
from django.test.client import Client
from django.utils import timezone

from accounts.models import User
from events.models import Event, EventAttendee

pytestmark = pytest.mark.django_db


def test_user_events(anon_client: Client, organizer: User, user: User, event: Event, paid_event: Event) -> None:
    Event.objects.create(
        owner=user,
        title="Book Club",
        description="Chapter one.",
        date=event.date,
        time=time(18, 0),
        location="Pretoria",
    )

    response = anon_client.get(reverse("api:user_events", kwargs={"user_id": organizer.id}))

    assert response.status_code == 200
    # Same day, later time first
    assert [e["id"] for e in response.json()] == [str(paid_event.id), str(event.id)]


def test_user_events_unknown_user(anon_client: Client) -> None:
    response = anon_client.get(reverse("api:user_events", kwargs={"user_id": uuid4()}))

    assert response.status_code == 404


def test_upcoming_events(user_client: Client, user: User, organizer: User, event: Event, paid_event: Event) -> None:
    past = Event.objects.create(
        owner=organizer,
        title="Last Year's Braai",
        description="Already happened.",
        date=timezone.localdate() - timedelta(days=3),
        time=time(12, 0),
        location="Cape Town",
    )
    for going in (event, past):
        EventAttendee.objects.create(event=going, user=user, status=EventAttendee.Status.GOING)
    EventAttendee.objects.create(event=paid_event, user=user, status=EventAttendee.Status.INTERESTED)

    response = user_client.get(reverse("api:user_upcoming_events", kwargs={"user_id": user.id}))

    assert [e["id"] for e in response.json()] == [str(event.id)]
