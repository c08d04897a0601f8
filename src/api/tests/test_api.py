"""Tests for the top-level endpoints and exception handlers."""

from unittest.mock import MagicMock, patch

import pytest
from django.conf import settings
from django.core.exceptions import ValidationError
from django.test.client import Client, RequestFactory
from django.urls import reverse

from api.exception_handlers import handle_django_validation_error, handle_paystack_error, obfuscate
from events.service.paystack_client import PaystackError

pytestmark = pytest.mark.django_db


def test_version(client: Client) -> None:
    response = client.get(reverse("api:version"))

    assert response.status_code == 200
    assert response.json() == {"version": settings.VERSION}


def test_healthcheck(client: Client) -> None:
    response = client.get(reverse("api:healthcheck"))

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_obfuscate_hides_credentials() -> None:
    data = {"Authorization": "Bearer abc", "password": "hunter2", "X-Paystack-Signature": "f00", "email": "a@b.c"}

    assert obfuscate(data) == {
        "Authorization": "********",
        "password": "********",
        "X-Paystack-Signature": "********",
        "email": "a@b.c",
    }
    assert data["password"] == "hunter2"
    assert obfuscate(["not", "a", "dict"]) == ["not", "a", "dict"]


def test_validation_error_handler_field_errors(rf: RequestFactory) -> None:
    exc = ValidationError({"name": ["Ticket type with this Event and Name already exists."]})

    response = handle_django_validation_error(rf.post("/api/events"), exc)

    assert response.status_code == 400
    assert b"already exists" in response.content


def test_validation_error_handler_plain_message(rf: RequestFactory) -> None:
    response = handle_django_validation_error(rf.post("/api/events"), ValidationError("Something is off"))

    assert response.status_code == 400
    assert b'"__all__"' in response.content


def test_paystack_error_handler(rf: RequestFactory) -> None:
    response = handle_paystack_error(rf.get("/api/finance/banks"), PaystackError("Paystack is down", status_code=503))

    assert response.status_code == 502
    assert b"Paystack is down" in response.content


@patch("events.service.event_service.featured_events")
def test_unhandled_exception_returns_500(mock_featured: MagicMock, client: Client) -> None:
    mock_featured.side_effect = RuntimeError("boom")

    response = client.get(reverse("api:featured_events"))

    assert response.status_code == 500
    assert response.json()["detail"] == "Internal Server Error."
