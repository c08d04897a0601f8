from .event import DEFAULT_MAX_ATTENDEES, AgeBand, Event
from .finance import Withdrawal
from .social import Comment, EventAttendee, EventRating, UserFavorite
from .ticket import EventTicket, TicketType

__all__ = [
    # Events
    "DEFAULT_MAX_ATTENDEES",
    "AgeBand",
    "Event",
    # Social
    "Comment",
    "EventAttendee",
    "EventRating",
    "UserFavorite",
    # Tickets
    "EventTicket",
    "TicketType",
    # Finance
    "Withdrawal",
]
