from django.db.models import QuerySet
from ninja import Query
from ninja_extra import api_controller, route, status

from common.authentication import ActiveUserJWTAuth, OptionalAuth
from common.controllers import UserAwareController
from common.throttling import WriteThrottle
from events import filters, models, schema
from events.service import event_service


@api_controller("/events", auth=OptionalAuth(), tags=["Events"])
class EventDiscoveryController(UserAwareController):
    """Listing, search and creation of events.

    IMPORTANT: This controller contains all non-event_id routes to ensure they are
    matched BEFORE the /{uuid:event_id} routes in other controllers.
    """

    @route.get("", url_name="list_events", response=schema.EventListSchema)
    def list_events(
        self,
        params: filters.EventFilterSchema = Query(...),  # type: ignore[type-arg]
        page: int = Query(1, ge=1),  # type: ignore[type-arg]
        limit: int = Query(event_service.DEFAULT_PAGE_SIZE, ge=1, le=100),  # type: ignore[type-arg]
    ) -> dict[str, object]:
        """Browse events sorted by date.

        Filter by exact category, a tag substring, or featured events only.
        The response carries the page metadata next to the events.
        """
        return event_service.list_events(params, page=page, limit=limit)

    @route.get("/featured", url_name="featured_events", response=list[schema.EventSchema])
    def featured_events(
        self,
        limit: int = Query(event_service.DEFAULT_FEATURED_LIMIT, ge=1, le=50),  # type: ignore[type-arg]
    ) -> QuerySet[models.Event]:
        """Featured events, soonest first."""
        return event_service.featured_events(limit)

    @route.get("/search", url_name="search_events", response=list[schema.EventSchema])
    def search_events(self, query: str = "") -> QuerySet[models.Event]:
        """Case-insensitive search over title, description, location and category.

        An empty query returns no results.
        """
        return event_service.search_events(query)

    @route.post(
        "",
        url_name="create_event",
        response={status.HTTP_201_CREATED: schema.EventSchema},
        auth=ActiveUserJWTAuth(),
        throttle=WriteThrottle(),
    )
    def create_event(self, payload: schema.EventCreateSchema) -> tuple[int, models.Event]:
        """Create an event owned by the caller.

        `featured` is only honoured for platform admins. When `has_multiple_ticket_types` is set,
        the given `ticket_types` are created with the event.
        """
        return status.HTTP_201_CREATED, event_service.create_event(self.user(), payload)
