import typing as t

from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models
from django.db.models import F, Q

from common.models import TimeStampedModel


class TicketTypeQuerySet(models.QuerySet["TicketType"]):
    def active(self) -> t.Self:
        return self.filter(is_active=True)


class TicketType(TimeStampedModel):
    """A priced category of ticket for an event (e.g. General, VIP)."""

    event = models.ForeignKey("events.Event", on_delete=models.CASCADE, related_name="ticket_types")
    name = models.CharField(max_length=255)
    description = models.TextField(blank=True, default="")
    price = models.DecimalField(max_digits=10, decimal_places=2, default=0, validators=[MinValueValidator(0)])
    quantity = models.PositiveIntegerField()
    sold_count = models.PositiveIntegerField(default=0)
    is_active = models.BooleanField(default=True, db_index=True)

    objects = TicketTypeQuerySet.as_manager()

    class Meta:
        constraints = [
            models.UniqueConstraint(fields=["event", "name"], name="unique_ticket_type_name_per_event"),
            models.CheckConstraint(condition=Q(sold_count__lte=F("quantity")), name="ticket_type_not_oversold"),
        ]
        ordering = ["price", "created_at"]

    def __str__(self) -> str:
        return f"{self.name} ({self.event_id})"

    @property
    def remaining(self) -> int:
        return max(self.quantity - self.sold_count, 0)

    @property
    def is_sold_out(self) -> bool:
        return self.sold_count >= self.quantity


class EventTicketQuerySet(models.QuerySet["EventTicket"]):
    def completed(self) -> t.Self:
        return self.filter(payment_status=EventTicket.PaymentStatus.COMPLETED)

    def live(self) -> t.Self:
        """Tickets that block a second purchase: pending or completed."""
        return self.filter(
            payment_status__in=[EventTicket.PaymentStatus.PENDING, EventTicket.PaymentStatus.COMPLETED]
        )

    def full(self) -> t.Self:
        return self.select_related("event", "user", "ticket_type")


class EventTicket(TimeStampedModel):
    """A purchase record linking a user to an event through a payment reference."""

    class PaymentStatus(models.TextChoices):
        PENDING = "pending", "Pending"
        COMPLETED = "completed", "Completed"
        FAILED = "failed", "Failed"

    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="tickets")
    event = models.ForeignKey("events.Event", on_delete=models.CASCADE, related_name="tickets")
    ticket_type = models.ForeignKey(
        TicketType, on_delete=models.SET_NULL, null=True, blank=True, related_name="tickets"
    )
    quantity = models.PositiveIntegerField(default=1, validators=[MinValueValidator(1)])
    total_amount = models.DecimalField(max_digits=12, decimal_places=2, default=0)
    payment_reference = models.CharField(max_length=255, unique=True)
    payment_status = models.CharField(
        max_length=20, choices=PaymentStatus.choices, default=PaymentStatus.PENDING, db_index=True
    )
    platform_fee = models.DecimalField(max_digits=12, decimal_places=2, default=0)
    purchase_date = models.DateTimeField(auto_now_add=True, db_index=True)
    raw_response = models.JSONField(blank=True, default=dict)  # Last Paystack verification payload, for auditing

    objects = EventTicketQuerySet.as_manager()

    class Meta:
        constraints = [
            models.UniqueConstraint(
                fields=["user", "event"],
                condition=Q(payment_status__in=["pending", "completed"]),
                name="unique_live_ticket_per_user_event",
            ),
        ]
        ordering = ["-purchase_date"]

    def __str__(self) -> str:  # pragma: no cover
        return f"Ticket {self.payment_reference} ({self.payment_status})"

    @property
    def is_completed(self) -> bool:
        return self.payment_status == self.PaymentStatus.COMPLETED
