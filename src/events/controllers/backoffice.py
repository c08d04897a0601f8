import typing as t
from uuid import UUID

from django.db.models import QuerySet
from django.shortcuts import get_object_or_404
from ninja_extra import api_controller, route, status
from ninja_extra.pagination import PageNumberPaginationExtra, PaginatedResponseSchema, paginate

from common.auth_base import PlatformAdminAuth
from common.controllers import UserAwareController
from common.throttling import WriteThrottle
from events import models, schema
from events.service import backoffice_service, finance_service


@api_controller("/admin", auth=PlatformAdminAuth(), tags=["Backoffice"])
class BackofficeController(UserAwareController):
    """Platform admin endpoints for events, payments and payouts."""

    @route.get("/stats", url_name="platform_stats", response=schema.PlatformStatsSchema)
    def stats(self) -> dict[str, t.Any]:
        """Platform-wide totals."""
        return backoffice_service.get_stats()

    @route.get("/transactions", url_name="recent_transactions", response=list[schema.TransactionSchema])
    def transactions(self) -> QuerySet[models.EventTicket]:
        """The most recent completed or pending tickets."""
        return backoffice_service.recent_transactions()

    @route.get("/events/all", url_name="all_events", response=list[schema.EventSchema])
    def all_events(self) -> QuerySet[models.Event]:
        return backoffice_service.all_events()

    @route.post(
        "/events/sample",
        url_name="create_sample_events",
        response={status.HTTP_201_CREATED: list[schema.EventSchema]},
        throttle=WriteThrottle(),
    )
    def create_sample_events(self) -> tuple[int, list[models.Event]]:
        """Create a few demo events owned by the calling admin."""
        return status.HTTP_201_CREATED, backoffice_service.create_sample_events(self.user())

    @route.get("/payment-settings", url_name="get_payment_settings", response=schema.PaymentSettingsSchema)
    def get_payment_settings(self) -> dict[str, t.Any]:
        """Paystack mode and keys. Keys are masked."""
        return backoffice_service.get_payment_settings()

    @route.post(
        "/payment-settings",
        url_name="update_payment_settings",
        response=schema.PaymentSettingsSchema,
        throttle=WriteThrottle(),
    )
    def update_payment_settings(self, payload: schema.PaymentSettingsUpdateSchema) -> dict[str, t.Any]:
        """Switch Paystack between live and test keys."""
        return backoffice_service.set_live_mode(payload.live_mode, self.user())

    @route.get(
        "/withdrawals", url_name="list_withdrawals", response=PaginatedResponseSchema[schema.AdminWithdrawalSchema]
    )
    @paginate(PageNumberPaginationExtra, page_size=20)
    def list_withdrawals(self, status: models.Withdrawal.Status | None = None) -> QuerySet[models.Withdrawal]:
        """All withdrawal requests, newest first. Optionally filtered by status."""
        return finance_service.all_withdrawals(status)

    @route.post(
        "/withdrawals/{uuid:withdrawal_id}/status",
        url_name="update_withdrawal_status",
        response=schema.AdminWithdrawalSchema,
        throttle=WriteThrottle(),
    )
    def update_withdrawal_status(
        self, withdrawal_id: UUID, payload: schema.WithdrawalStatusUpdateSchema
    ) -> models.Withdrawal:
        """Mark a pending withdrawal as paid or rejected."""
        withdrawal = get_object_or_404(models.Withdrawal.objects.select_related("user"), pk=withdrawal_id)
        return finance_service.set_withdrawal_status(withdrawal, payload.status, self.user())
