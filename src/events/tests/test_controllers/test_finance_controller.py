import typing as t
from decimal import Decimal
from unittest.mock import MagicMock, patch

import orjson
import pytest
from django.shortcuts import reverse  # type: ignore[attr-defined]
from django.test.client import Client

from accounts.models import User
from events.models import Event, EventTicket, Withdrawal
from events.service.finance_service import FALLBACK_BANKS
from events.service.paystack_client import PaystackError

pytestmark = pytest.mark.django_db

BANK_DETAILS = {"account_name": "Organizer", "account_number": "62000000000", "bank_name": "FNB"}


def _withdraw(client: Client, amount: str, **overrides: t.Any) -> t.Any:
    payload = {"amount": amount, **BANK_DETAILS, **overrides}
    return client.post(reverse("api:request_withdrawal"), data=orjson.dumps(payload), content_type="application/json")


@pytest.fixture
def revenue(
    user: User, other_user: User, paid_event: Event, make_ticket: t.Callable[..., EventTicket]
) -> list[EventTicket]:
    """R400 of completed sales on the organizer's paid event, plus a pending one that does not count."""
    return [
        make_ticket(user, paid_event),
        make_ticket(other_user, paid_event),
        make_ticket(paid_event.owner, paid_event, status=EventTicket.PaymentStatus.PENDING),
    ]


class TestBanks:
    @patch("events.service.paystack_client.PaystackClient.list_banks")
    def test_list_banks_from_paystack(self, mock_list: MagicMock, user_client: Client) -> None:
        mock_list.return_value = [
            {"id": 140, "name": "Absa Bank Limited, South Africa", "slug": "absa-za", "code": "632005"},
            {"name": "TymeBank"},
        ]

        response = user_client.get(reverse("api:list_banks"))

        assert response.json() == [
            {"id": 140, "name": "Absa Bank Limited, South Africa", "slug": "absa-za"},
            {"id": 2, "name": "TymeBank", "slug": "tymebank"},
        ]

    @patch("events.service.paystack_client.PaystackClient.list_banks")
    @pytest.mark.parametrize("outcome", [PaystackError("down", status_code=503), []])
    def test_list_banks_fallback(self, mock_list: MagicMock, user_client: Client, outcome: t.Any) -> None:
        if isinstance(outcome, Exception):
            mock_list.side_effect = outcome
        else:
            mock_list.return_value = outcome

        response = user_client.get(reverse("api:list_banks"))

        assert response.status_code == 200
        assert response.json() == FALLBACK_BANKS


class TestSummary:
    def test_summary_with_fee(self, organizer_client: Client, revenue: list[EventTicket]) -> None:
        response = organizer_client.get(reverse("api:finance_summary"))

        assert response.status_code == 200
        data = {k: Decimal(v) for k, v in response.json().items()}
        assert data == {
            "total_revenue": Decimal("400.00"),
            "platform_fees": Decimal("60.00"),
            "withdrawn": Decimal("0"),
            "available_balance": Decimal("340.00"),
            "fee_percent": Decimal("15"),
        }

    def test_admin_pays_no_fee(self, admin_client: Client, admin_user: User, paid_event: Event, revenue: t.Any) -> None:
        paid_event.owner = admin_user
        paid_event.save()

        response = admin_client.get(reverse("api:finance_summary"))

        data = response.json()
        assert Decimal(data["platform_fees"]) == 0
        assert Decimal(data["available_balance"]) == Decimal("400.00")

    def test_summary_without_sales(self, user_client: Client) -> None:
        response = user_client.get(reverse("api:finance_summary"))

        assert Decimal(response.json()["available_balance"]) == 0


class TestWithdrawals:
    def test_request_withdrawal(self, organizer_client: Client, organizer: User, revenue: t.Any) -> None:
        response = _withdraw(organizer_client, "300.00")

        assert response.status_code == 201
        data = response.json()
        assert data["success"] is True
        assert data["message"] == "Withdrawal request submitted successfully"
        assert data["data"]["status"] == "pending"
        assert Withdrawal.objects.get().user == organizer

        response = organizer_client.get(reverse("api:finance_summary"))
        assert Decimal(response.json()["withdrawn"]) == Decimal("300.00")
        assert Decimal(response.json()["available_balance"]) == Decimal("40.00")

    def test_below_minimum(self, organizer_client: Client, revenue: t.Any) -> None:
        response = _withdraw(organizer_client, "49.99")

        assert response.status_code == 400
        assert response.json()["detail"] == "Minimum withdrawal amount is R50"

    def test_insufficient_funds(self, organizer_client: Client, revenue: t.Any) -> None:
        _withdraw(organizer_client, "300.00")

        response = _withdraw(organizer_client, "50.00")

        assert response.status_code == 400
        assert response.json()["detail"] == "Insufficient funds. Available balance: 40.00"

    def test_rejected_withdrawal_frees_balance(self, organizer_client: Client, organizer: User, revenue: t.Any) -> None:
        Withdrawal.objects.create(
            user=organizer, amount=Decimal("300"), status=Withdrawal.Status.REJECTED, **BANK_DETAILS
        )

        response = _withdraw(organizer_client, "340.00")

        assert response.status_code == 201

    def test_missing_fields(self, organizer_client: Client, revenue: t.Any) -> None:
        response = _withdraw(organizer_client, "100.00", account_number="")

        assert response.status_code == 400
        assert response.json()["detail"].startswith("All fields are required")

    def test_my_withdrawals(self, organizer_client: Client, organizer: User, user: User) -> None:
        mine = Withdrawal.objects.create(user=organizer, amount=Decimal("100"), **BANK_DETAILS)
        Withdrawal.objects.create(user=user, amount=Decimal("100"), **BANK_DETAILS)

        response = organizer_client.get(reverse("api:my_withdrawals"))

        assert [w["id"] for w in response.json()] == [str(mine.id)]
