import typing as t
from decimal import Decimal

from django.db.models import QuerySet
from ninja_extra import api_controller, route, status

from common.authentication import ActiveUserJWTAuth
from common.controllers import UserAwareController
from common.throttling import WriteThrottle
from events import models, schema
from events.service import finance_service


@api_controller("/finance", auth=ActiveUserJWTAuth(), tags=["Finance"])
class FinanceController(UserAwareController):
    """Earnings and withdrawals of event organizers."""

    @route.get("/banks", url_name="list_banks", response=list[schema.BankSchema])
    def list_banks(self) -> list[dict[str, t.Any]]:
        """Banks a withdrawal can be paid into."""
        return finance_service.list_banks()

    @route.get("/summary", url_name="finance_summary", response=schema.FinanceSummarySchema)
    def summary(self) -> dict[str, Decimal]:
        """Ticket revenue of the caller's events, the platform fees and what can still be withdrawn."""
        return finance_service.get_summary(self.user())

    @route.post(
        "/withdraw",
        url_name="request_withdrawal",
        response={status.HTTP_201_CREATED: schema.WithdrawalResponseSchema},
        throttle=WriteThrottle(),
    )
    def withdraw(self, payload: schema.WithdrawalRequestSchema) -> tuple[int, schema.WithdrawalResponseSchema]:
        """Request a payout of part of the available balance.

        The request stays pending until a platform admin marks it as paid or rejected.
        """
        withdrawal = finance_service.request_withdrawal(self.user(), payload)
        return status.HTTP_201_CREATED, schema.WithdrawalResponseSchema(
            success=True,
            message="Withdrawal request submitted successfully",
            data=schema.WithdrawalSchema.from_orm(withdrawal),
        )

    @route.get("/withdrawals", url_name="my_withdrawals", response=list[schema.WithdrawalSchema])
    def withdrawals(self) -> QuerySet[models.Withdrawal]:
        return finance_service.user_withdrawals(self.user())
