import typing as t
from decimal import Decimal

from ninja_extra import api_controller, route, status

from common.authentication import ActiveUserJWTAuth
from common.controllers import UserAwareController
from common.throttling import PaymentThrottle, WriteThrottle
from events import models, schema
from events.service import event_service, payment_service, ticket_service


@api_controller("/tickets", auth=ActiveUserJWTAuth(), tags=["Tickets"])
class TicketController(UserAwareController):
    @route.post(
        "/free",
        url_name="claim_free_ticket",
        response={status.HTTP_201_CREATED: schema.TicketSchema},
        throttle=WriteThrottle(),
    )
    def claim_free_ticket(self, payload: schema.FreeTicketSchema) -> tuple[int, models.EventTicket]:
        """Get a ticket for a free event.

        The ticket is completed right away and the caller is marked as going.
        """
        event = event_service.get_event(payload.event_id)
        return status.HTTP_201_CREATED, ticket_service.claim_free_ticket(event, self.user())


@api_controller("/payments", auth=ActiveUserJWTAuth(), tags=["Payments"])
class PaymentController(UserAwareController):
    """Paystack checkout for paid events."""

    @route.post(
        "/initialize",
        url_name="initialize_payment",
        response=schema.PaymentInitializeResponseSchema,
        throttle=PaymentThrottle(),
    )
    def initialize_payment(self, payload: schema.PaymentInitializeSchema) -> dict[str, str]:
        """Start a Paystack checkout for an event ticket.

        A pending ticket is created and the caller is sent to `payment_url`. Gender and age
        restrictions of the event are checked before anything is created.
        """
        return payment_service.initialize_payment(self.user(), payload)

    @route.get("/verify/{reference}", url_name="verify_payment", response=schema.PaymentVerifyResponseSchema)
    def verify_payment(self, reference: str, amount: Decimal | None = None) -> dict[str, t.Any]:
        """Check a payment with Paystack and settle the matching ticket.

        A ticket that is already completed is reported with `already_processed`.
        """
        return payment_service.verify_payment(self.user(), reference, amount)

    @route.get("/channels", url_name="payment_channels", response=schema.PaymentChannelsSchema)
    def payment_channels(self) -> dict[str, t.Any]:
        """Payment channels offered at checkout for the current Paystack mode."""
        return payment_service.payment_channels()
