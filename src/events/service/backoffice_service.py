"""Platform-wide figures and controls for platform admins."""

import typing as t
from datetime import time, timedelta
from decimal import Decimal

import structlog
from django.conf import settings
from django.db import transaction
from django.db.models import QuerySet, Sum
from django.utils import timezone

from accounts.models import User
from common.models import SiteSettings
from common.utils import mask_secret
from events.models import Event, EventTicket, TicketType

logger = structlog.get_logger(__name__)

RECENT_TRANSACTIONS_LIMIT = 20

SAMPLE_EVENTS: list[dict[str, t.Any]] = [
    {
        "days_ahead": 30,
        "title": "Cape Town Jazz Festival",
        "description": (
            "South Africa's premier jazz event featuring top local and international artists "
            "at the Cape Town International Convention Centre"
        ),
        "time": time(18, 0),
        "location": "Cape Town, South Africa",
        "category": "Music",
        "image": "https://images.unsplash.com/photo-1514525253161-7a46d19cd819?auto=format&fit=crop&w=800&q=80",
        "max_attendees": 5000,
        "is_free": False,
        "price": Decimal("850"),
        "tags": "jazz,music,festival,cape town",
        "latitude": Decimal("-33.915500"),
        "longitude": Decimal("18.423900"),
        "featured": True,
        "ticket_types": [
            ("General Admission", "Standard festival access to all stages", Decimal("850"), 4000),
            ("VIP Pass", "Backstage tours, artist meet & greets and an exclusive lounge", Decimal("1950"), 1000),
        ],
    },
    {
        "days_ahead": 60,
        "title": "Soweto Wine & Lifestyle Festival",
        "description": "The finest South African wines paired with local cuisine and live entertainment",
        "time": time(12, 0),
        "location": "Soweto, Johannesburg, South Africa",
        "category": "Food & Drink",
        "image": "https://images.unsplash.com/photo-1506377247377-2a5b3b417ebb?auto=format&fit=crop&w=800&q=80",
        "max_attendees": 2000,
        "is_free": False,
        "price": Decimal("350"),
        "tags": "wine,food,lifestyle,soweto,johannesburg",
        "latitude": Decimal("-26.248500"),
        "longitude": Decimal("27.854000"),
        "featured": True,
        "age_restrictions": ["under 18"],
        "ticket_types": [
            ("General Entry", "Festival access with 5 wine tasting tokens", Decimal("350"), 1500),
            ("VIP Experience", "Unlimited tastings, food pairing and the VIP lounge", Decimal("750"), 500),
        ],
    },
    {
        "days_ahead": 90,
        "title": "Karoo Mighty Men Conference",
        "description": "A gathering for men focused on faith, leadership and community in the Karoo landscape",
        "time": time(8, 0),
        "location": "Middelburg, Eastern Cape, South Africa",
        "category": "Community",
        "image": "https://images.unsplash.com/photo-1511632765486-a01980e01a18?auto=format&fit=crop&w=800&q=80",
        "max_attendees": 10000,
        "is_free": False,
        "price": Decimal("450"),
        "tags": "faith,community,men,karoo,eastern cape",
        "latitude": Decimal("-31.496500"),
        "longitude": Decimal("25.012400"),
        "gender_restriction": Event.GenderRestriction.FEMALE_ONLY,
        "ticket_types": [],
    },
    {
        "days_ahead": 14,
        "title": "Free Community Workshop",
        "description": "A hands-on digital skills workshop open to everyone in the community",
        "time": time(10, 0),
        "location": "Durban, South Africa",
        "category": "Education",
        "image": "https://images.unsplash.com/photo-1540575467063-178a50c2df87?auto=format&fit=crop&w=800&q=80",
        "max_attendees": 50,
        "is_free": True,
        "price": Decimal("0"),
        "tags": "workshop,skills,community,durban",
        "ticket_types": [],
    },
]


def get_stats() -> dict[str, t.Any]:
    completed = EventTicket.objects.completed()
    admin = User.objects.platform_admins().first()
    return {
        "total_users": User.objects.count(),
        "total_events": Event.objects.count(),
        "total_tickets_sold": completed.count(),
        "total_revenue": completed.aggregate(total=Sum("total_amount"))["total"] or Decimal("0"),
        "platform_balance": admin.platform_balance if admin else Decimal("0"),
    }


def recent_transactions(limit: int = RECENT_TRANSACTIONS_LIMIT) -> QuerySet[EventTicket]:
    return (
        EventTicket.objects.full()
        .exclude(payment_status=EventTicket.PaymentStatus.FAILED)
        .order_by("-purchase_date")[:limit]
    )


def all_events() -> QuerySet[Event]:
    return Event.objects.with_owner().order_by("-created_at")


@transaction.atomic
def create_sample_events(owner: User) -> list[Event]:
    """Create a handful of demo events, with ticket types, owned by the caller."""
    today = timezone.localdate()
    events = []
    for sample in SAMPLE_EVENTS:
        data = dict(sample)
        ticket_types = data.pop("ticket_types")
        days_ahead = data.pop("days_ahead")
        event = Event.objects.create(
            owner=owner,
            date=today + timedelta(days=days_ahead),
            has_multiple_ticket_types=bool(ticket_types),
            images=[data["image"]],
            **data,
        )
        for name, description, price, quantity in ticket_types:
            TicketType.objects.create(event=event, name=name, description=description, price=price, quantity=quantity)
        events.append(event)

    logger.info("sample_events_created", owner_id=str(owner.id), count=len(events))
    return events


def get_payment_settings() -> dict[str, t.Any]:
    """Paystack mode and masked keys."""
    site_settings = SiteSettings.get_solo()
    return {
        "live_mode": site_settings.paystack_live_mode,
        "secret_key": mask_secret(settings.PAYSTACK_SECRET_KEY),
        "public_key": mask_secret(settings.PAYSTACK_PUBLIC_KEY, visible_prefix=8),
        "test_secret_key": mask_secret(settings.PAYSTACK_TEST_SECRET_KEY),
        "test_public_key": mask_secret(settings.PAYSTACK_TEST_PUBLIC_KEY, visible_prefix=8),
        "updated_at": site_settings.updated_at,
    }


def set_live_mode(live_mode: bool, admin: User) -> dict[str, t.Any]:
    """Switch between live and test keys. The change is kept in the settings history."""
    site_settings = SiteSettings.get_solo()
    site_settings.paystack_live_mode = live_mode
    site_settings.save(update_fields=["paystack_live_mode", "updated_at"])
    logger.info("paystack_mode_changed", live_mode=live_mode, admin_id=str(admin.id))
    return get_payment_settings()
