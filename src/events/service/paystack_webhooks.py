"""Paystack webhook verification and event handlers."""

import hashlib
import hmac
import typing as t

import orjson
import structlog
from django.utils.translation import gettext_lazy as _
from ninja.errors import HttpError

from events.exceptions import TicketConflictError
from events.models import EventTicket

from . import ticket_service
from .paystack_client import get_secret_key

logger = structlog.get_logger(__name__)


def compute_signature(body: bytes, secret_key: str) -> str:
    return hmac.new(secret_key.encode(), body, hashlib.sha512).hexdigest()


def parse_webhook(body: bytes, signature: str | None) -> dict[str, t.Any]:
    """Check the `x-paystack-signature` header and decode the payload.

    Raises:
        HttpError: 400 when the signature is missing, wrong, or the body is not JSON.
    """
    expected = compute_signature(body, get_secret_key())
    if not signature or not hmac.compare_digest(expected, signature):
        logger.warning("paystack_webhook_invalid_signature")
        raise HttpError(400, str(_("Invalid Paystack signature")))
    try:
        payload = orjson.loads(body)
    except orjson.JSONDecodeError:
        raise HttpError(400, str(_("Invalid webhook payload")))
    if not isinstance(payload, dict):
        raise HttpError(400, str(_("Invalid webhook payload")))
    return payload


class PaystackEventHandler:
    """Handles the business logic for different types of Paystack webhook events."""

    def __init__(self, payload: dict[str, t.Any]):
        self.payload = payload
        self.event_type: str = str(payload.get("event", ""))
        self.data: dict[str, t.Any] = payload.get("data") or {}

    def handle(self) -> None:
        """Routes the event to the appropriate handler based on its type."""
        handler_method = getattr(
            self, f"handle_{self.event_type.replace('.', '_')}", self.handle_unknown_event
        )
        handler_method()

    def handle_unknown_event(self) -> None:
        """Acknowledge and ignore event types we do not act on."""
        logger.info("paystack_webhook_unhandled_event", event_type=self.event_type)

    def handle_charge_success(self) -> None:
        """Complete the pending ticket the charge paid for."""
        reference = self.data.get("reference")
        if not reference:
            logger.warning("paystack_charge_missing_reference")
            return

        ticket = EventTicket.objects.filter(payment_reference=reference).first()
        if ticket is None:
            logger.warning("paystack_charge_unknown_reference", reference=reference)
            return

        try:
            ticket, transitioned = ticket_service.complete_ticket(ticket, raw_response=self.payload)
        except TicketConflictError:
            # Paystack retries anything but a 2xx, so a charge we cannot apply is still acknowledged
            logger.warning("paystack_charge_conflict", reference=reference, ticket_id=str(ticket.id))
            return
        if not transitioned:
            logger.warning("paystack_webhook_duplicate_charge_success", reference=reference)
            return

        logger.info(
            "paystack_payment_success",
            reference=reference,
            ticket_id=str(ticket.id),
            amount=str(ticket.total_amount),
        )
