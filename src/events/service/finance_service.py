"""Organizer earnings, bank list and withdrawal requests."""

import typing as t
from decimal import ROUND_HALF_UP, Decimal

import structlog
from django.conf import settings
from django.db import transaction
from django.db.models import QuerySet, Sum
from django.utils import timezone
from django.utils.text import slugify
from django.utils.translation import gettext_lazy as _
from ninja.errors import HttpError

from accounts.models import User
from events.models import EventTicket, Withdrawal
from events.schema import WithdrawalRequestSchema

from .paystack_client import PaystackError, get_paystack_client
from .ticket_service import platform_fee_percent

logger = structlog.get_logger(__name__)

CENTS = Decimal("0.01")

FALLBACK_BANKS: list[dict[str, t.Any]] = [
    {"id": 1, "name": "Standard Bank", "slug": "standard-bank"},
    {"id": 2, "name": "ABSA Bank", "slug": "absa-bank"},
    {"id": 3, "name": "Nedbank", "slug": "nedbank"},
    {"id": 4, "name": "FNB", "slug": "fnb"},
    {"id": 5, "name": "Capitec", "slug": "capitec"},
]


def list_banks() -> list[dict[str, t.Any]]:
    """Banks from Paystack, or a short static list when Paystack is unavailable."""
    try:
        with get_paystack_client() as client:
            banks = client.list_banks()
    except PaystackError as e:
        logger.warning("paystack_bank_list_unavailable", error=str(e), reason=e.reason)
        return FALLBACK_BANKS

    if not banks:
        logger.warning("paystack_bank_list_empty")
        return FALLBACK_BANKS

    return [
        {
            "id": bank.get("id") or index,
            "name": bank.get("name") or "Unknown Bank",
            "slug": bank.get("slug") or slugify(bank.get("name") or "unknown-bank"),
        }
        for index, bank in enumerate(banks, start=1)
    ]


def _fee_percent_for(user: User) -> Decimal:
    """Admins keep the whole revenue of their own events."""
    return Decimal("0") if user.is_platform_admin else platform_fee_percent()


def _q(value: Decimal) -> Decimal:
    return value.quantize(CENTS, rounding=ROUND_HALF_UP)


def get_summary(user: User) -> dict[str, Decimal]:
    """Revenue of completed tickets on the user's events, fees, withdrawals and what is left."""
    revenue = EventTicket.objects.completed().filter(event__owner=user).aggregate(total=Sum("total_amount"))[
        "total"
    ] or Decimal("0")
    fee_percent = _fee_percent_for(user)
    fees = revenue * fee_percent / Decimal(100)
    withdrawn = Withdrawal.objects.filter(
        user=user, status__in=[Withdrawal.Status.PENDING, Withdrawal.Status.PAID]
    ).aggregate(total=Sum("amount"))["total"] or Decimal("0")
    return {
        "total_revenue": _q(revenue),
        "platform_fees": _q(fees),
        "withdrawn": _q(withdrawn),
        "available_balance": _q(revenue - fees - withdrawn),
        "fee_percent": fee_percent,
    }


@transaction.atomic
def request_withdrawal(user: User, payload: WithdrawalRequestSchema) -> Withdrawal:
    """File a pending withdrawal against the available balance.

    Raises:
        HttpError: 400 for missing fields, amounts under the minimum or over the balance.
    """
    if not (payload.amount and payload.account_name and payload.account_number and payload.bank_name):
        raise HttpError(400, str(_("All fields are required: amount, account_name, account_number, bank_name")))

    minimum: Decimal = settings.MINIMUM_WITHDRAWAL_AMOUNT
    if payload.amount < minimum:
        raise HttpError(400, str(_("Minimum withdrawal amount is R%(minimum)s")) % {"minimum": f"{minimum:.0f}"})

    # Serialize concurrent requests of the same user
    User.objects.select_for_update().filter(pk=user.pk).first()

    available = get_summary(user)["available_balance"]
    if payload.amount > available:
        raise HttpError(
            400, str(_("Insufficient funds. Available balance: %(balance)s")) % {"balance": f"{available:.2f}"}
        )

    withdrawal = Withdrawal.objects.create(
        user=user,
        amount=payload.amount,
        account_name=payload.account_name,
        account_number=payload.account_number,
        bank_name=payload.bank_name,
    )
    logger.info(
        "withdrawal_requested", withdrawal_id=str(withdrawal.id), user_id=str(user.id), amount=str(payload.amount)
    )
    return withdrawal


def user_withdrawals(user: User) -> QuerySet[Withdrawal]:
    return Withdrawal.objects.filter(user=user).order_by("-created_at")


def all_withdrawals(status: Withdrawal.Status | None = None) -> QuerySet[Withdrawal]:
    qs = Withdrawal.objects.select_related("user").order_by("-created_at")
    return qs.filter(status=status) if status else qs


def set_withdrawal_status(withdrawal: Withdrawal, status: Withdrawal.Status, admin: User) -> Withdrawal:
    """Settle a pending withdrawal as paid or rejected."""
    if withdrawal.status != Withdrawal.Status.PENDING:
        raise HttpError(400, str(_("Only pending withdrawals can be updated")))
    if status == Withdrawal.Status.PENDING:
        raise HttpError(400, str(_("A withdrawal can only be marked as paid or rejected")))
    withdrawal.status = status
    withdrawal.processed_at = timezone.now()
    withdrawal.save(update_fields=["status", "processed_at", "updated_at"])
    logger.info(
        "withdrawal_status_updated",
        withdrawal_id=str(withdrawal.id),
        status=status,
        admin_id=str(admin.id),
    )
    return withdrawal
