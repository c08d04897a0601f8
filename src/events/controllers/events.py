import typing as t
from uuid import UUID

from django.db.models import QuerySet
from ninja_extra import api_controller, route, status

from common.authentication import ActiveUserJWTAuth, OptionalAuth
from common.controllers import UserAwareController
from common.schema import ResponseMessage
from common.throttling import WriteThrottle
from events import models, schema
from events.service import event_service, ticket_service


@api_controller("/events", auth=OptionalAuth(), tags=["Events"])
class EventController(UserAwareController):
    """Single event details, management and ticketing."""

    @route.get("/{uuid:event_id}", url_name="get_event", response=schema.EventSchema)
    def get_event(self, event_id: UUID) -> models.Event:
        """Retrieve an event. Every call counts as a view."""
        return event_service.view_event(event_id)

    @route.put(
        "/{uuid:event_id}",
        url_name="update_event",
        response=schema.EventSchema,
        auth=ActiveUserJWTAuth(),
        throttle=WriteThrottle(),
    )
    def update_event(self, event_id: UUID, payload: schema.EventUpdateSchema) -> models.Event:
        """Update an event. Only the owner or a platform admin can do this.

        Attendees marked as going or interested get an `event_update` notification.
        """
        event = event_service.get_event(event_id)
        return event_service.update_event(event, self.user(), payload)

    @route.delete(
        "/{uuid:event_id}",
        url_name="delete_event",
        response=ResponseMessage,
        auth=ActiveUserJWTAuth(),
        throttle=WriteThrottle(),
    )
    def delete_event(self, event_id: UUID) -> ResponseMessage:
        """Delete an event with its comments, attendance, ratings and tickets.

        Attendees marked as going or interested get an `event_canceled` notification.
        """
        event = event_service.get_event(event_id)
        event_service.delete_event(event, self.user())
        return ResponseMessage(message="Event deleted successfully")

    @route.get("/{uuid:event_id}/ticket-types", url_name="list_ticket_types", response=list[schema.TicketTypeSchema])
    def list_ticket_types(self, event_id: UUID) -> QuerySet[models.TicketType]:
        """Ticket types of an event.

        The owner and platform admins also see inactive ticket types.
        """
        event = event_service.get_event(event_id)
        return ticket_service.list_ticket_types(event, self.maybe_user())

    @route.post(
        "/{uuid:event_id}/ticket-types",
        url_name="create_ticket_type",
        response={status.HTTP_201_CREATED: schema.TicketTypeSchema},
        auth=ActiveUserJWTAuth(),
        throttle=WriteThrottle(),
    )
    def create_ticket_type(
        self, event_id: UUID, payload: schema.TicketTypeCreateSchema
    ) -> tuple[int, models.TicketType]:
        """Add a ticket type to an event. Only the owner or a platform admin can do this."""
        event = event_service.get_event(event_id)
        return status.HTTP_201_CREATED, ticket_service.add_ticket_type(event, self.user(), payload)

    @route.get(
        "/{uuid:event_id}/ticket",
        url_name="my_event_ticket",
        response={200: schema.TicketSchema | None},
        auth=ActiveUserJWTAuth(),
    )
    def my_ticket(self, event_id: UUID) -> models.EventTicket | None:
        """The caller's ticket for this event, or null when they have none."""
        event = event_service.get_event(event_id)
        return ticket_service.user_ticket_for_event(self.user(), event)

    @route.get(
        "/{uuid:event_id}/tickets/attendees",
        url_name="ticket_attendees",
        response=list[schema.TicketAttendeeSchema],
        auth=ActiveUserJWTAuth(),
    )
    def ticket_attendees(self, event_id: UUID) -> list[dict[str, t.Any]]:
        """Ticket holders of the event with the number of tickets each one bought."""
        event = event_service.get_event(event_id)
        return ticket_service.ticket_attendees(event)
