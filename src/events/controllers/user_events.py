from uuid import UUID

from django.db.models import QuerySet
from ninja_extra import api_controller, route

from common.authentication import ActiveUserJWTAuth, OptionalAuth
from common.controllers import UserAwareController
from events import models, schema
from events.service import event_service, favorite_service, ticket_service


@api_controller("/users", auth=ActiveUserJWTAuth(), tags=["User Events"])
class UserEventsController(UserAwareController):
    """Events, tickets and favorites seen from a user's side."""

    @route.get("/tickets", url_name="my_tickets", response=list[schema.TicketSchema])
    def my_tickets(self) -> QuerySet[models.EventTicket]:
        """The caller's pending and completed tickets, newest purchase first."""
        return ticket_service.user_tickets(self.user())

    @route.get("/favorites", url_name="my_favorites", response=list[schema.EventSchema])
    def my_favorites(self) -> QuerySet[models.Event]:
        return favorite_service.favorite_events(self.user())

    @route.get("/{uuid:user_id}/events", url_name="user_events", response=list[schema.EventSchema], auth=OptionalAuth())
    def user_events(self, user_id: UUID) -> QuerySet[models.Event]:
        """Events created by the given user."""
        return event_service.user_events(user_id)

    @route.get(
        "/{uuid:user_id}/upcoming-events",
        url_name="user_upcoming_events",
        response=list[schema.EventSchema],
        auth=OptionalAuth(),
    )
    def upcoming_events(self, user_id: UUID) -> QuerySet[models.Event]:
        """Events from today on that the given user is going to, soonest first."""
        return event_service.upcoming_events_for_user(user_id)
