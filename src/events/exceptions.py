class TicketConflictError(Exception):
    """Raised when a ticket cannot become completed because the buyer already holds a live ticket for the event."""
