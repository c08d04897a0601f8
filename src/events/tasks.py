"""Celery tasks for events."""

import structlog
from celery import shared_task
from django.utils import timezone

from notifications.service.notification_helpers import notify_event_starting_today

from .models import Event

logger = structlog.get_logger(__name__)


@shared_task
def send_event_reminders() -> dict[str, int]:
    """Tell everyone going to an event that it starts today.

    Scheduled daily with Celery beat.
    """
    today = timezone.localdate()
    events = Event.objects.filter(date=today).order_by("time")
    notified = 0
    for event in events:
        notified += notify_event_starting_today(event)
    logger.info("event_reminders_sent", date=today.isoformat(), events=len(events), notifications=notified)
    return {"events": len(events), "notifications": notified}
