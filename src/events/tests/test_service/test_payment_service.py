from datetime import date
from decimal import Decimal

import pytest
from freezegun import freeze_time
from ninja.errors import HttpError

from accounts.models import User
from events.models import AgeBand, Event
from events.service import payment_service, ticket_service

pytestmark = pytest.mark.django_db


@freeze_time("2030-06-15")
@pytest.mark.parametrize(
    "birth_date,bands,allowed",
    [
        (date(2015, 1, 1), [AgeBand.UNDER_18], False),
        (date(2012, 6, 16), [AgeBand.UNDER_18], False),  # turns 18 tomorrow
        (date(2012, 6, 15), [AgeBand.UNDER_18, AgeBand.TWENTIES], True),  # 18 falls in no band
        (date(2011, 1, 1), [AgeBand.UNDER_18, AgeBand.TWENTIES], True),  # 19 falls in no band
        (date(2005, 1, 1), [AgeBand.TWENTIES], False),
        (date(1995, 1, 1), [AgeBand.TWENTIES, AgeBand.FORTY_PLUS], True),
        (date(1995, 1, 1), [AgeBand.THIRTIES], False),
        (date(1980, 1, 1), [AgeBand.FORTY_PLUS], False),
        (None, list(AgeBand), True),
    ],
)
def test_age_restrictions(
    paid_event: Event, user: User, birth_date: date | None, bands: list[AgeBand], allowed: bool
) -> None:
    paid_event.age_restrictions = [str(band) for band in bands]
    user.date_of_birth = birth_date

    if allowed:
        payment_service.check_purchase_restrictions(paid_event, user)
    else:
        with pytest.raises(HttpError) as exc_info:
            payment_service.check_purchase_restrictions(paid_event, user)
        assert exc_info.value.status_code == 403


def test_unrestricted_event_allows_everyone(paid_event: Event, user: User) -> None:
    user.gender = User.Gender.MALE
    user.date_of_birth = date(2020, 1, 1)

    payment_service.check_purchase_restrictions(paid_event, user)


def test_parse_event_id(paid_event: Event, user: User) -> None:
    reference = ticket_service.build_payment_reference(paid_event, user)

    assert payment_service.parse_event_id(reference) == paid_event.id


@pytest.mark.parametrize("reference", ["", "abc-123-def", "free-abc"])
def test_parse_event_id_invalid(reference: str) -> None:
    with pytest.raises(HttpError) as exc_info:
        payment_service.parse_event_id(reference)

    assert exc_info.value.status_code == 400


def test_build_callback_url() -> None:
    url = payment_service.build_callback_url("ref-1", Decimal("200.00"))

    assert url == "http://localhost:5173/payment/success?reference=ref-1&amount=200.00"
