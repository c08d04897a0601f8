from .backoffice import BackofficeController
from .comments import CommentController
from .discovery import EventDiscoveryController
from .event_social import EventSocialController
from .events import EventController
from .finance import FinanceController
from .payments import PaymentController, TicketController
from .paystack_webhook import PaystackWebhookController
from .user_events import UserEventsController

# Controllers in order to preserve path resolution.
# Non-event_id routes (discovery) MUST come first to avoid being matched
# by the /{uuid:event_id} routes in other controllers.
EVENTS_CONTROLLERS: list[type] = [
    EventDiscoveryController,  # /events, /events/featured, /events/search
    EventController,  # /events/{uuid:event_id}, ticket types, tickets
    EventSocialController,  # /events/{uuid:event_id}/comments, ratings, attendance, favorite
    CommentController,
    UserEventsController,
    TicketController,
    PaymentController,
    PaystackWebhookController,
    FinanceController,
    BackofficeController,
]

__all__ = [
    "BackofficeController",
    "CommentController",
    "EventController",
    "EventDiscoveryController",
    "EventSocialController",
    "FinanceController",
    "PaymentController",
    "PaystackWebhookController",
    "TicketController",
    "UserEventsController",
    "EVENTS_CONTROLLERS",
]
