"""Finance and backoffice schemas."""

from datetime import datetime
from decimal import Decimal

from ninja import ModelSchema, Schema
from pydantic import UUID4, Field

from accounts.schema import MinimalUserSchema
from common.schema import StrippedString
from events.models import Withdrawal

from .ticket import TicketSchema


class BankSchema(Schema):
    id: int
    name: str
    slug: str


class FinanceSummarySchema(Schema):
    total_revenue: Decimal
    platform_fees: Decimal
    withdrawn: Decimal
    available_balance: Decimal
    fee_percent: Decimal


class WithdrawalRequestSchema(Schema):
    amount: Decimal | None = None
    account_name: StrippedString | None = Field(None, max_length=255)
    account_number: StrippedString | None = Field(None, max_length=50)
    bank_name: StrippedString | None = Field(None, max_length=255)


class WithdrawalSchema(ModelSchema):
    id: UUID4
    amount: Decimal

    class Meta:
        model = Withdrawal
        fields = [
            "id",
            "amount",
            "account_name",
            "account_number",
            "bank_name",
            "status",
            "processed_at",
            "created_at",
        ]


class AdminWithdrawalSchema(WithdrawalSchema):
    user: MinimalUserSchema


class WithdrawalResponseSchema(Schema):
    success: bool
    message: str
    data: WithdrawalSchema


class WithdrawalStatusUpdateSchema(Schema):
    status: Withdrawal.Status


class PlatformStatsSchema(Schema):
    total_users: int
    total_events: int
    total_tickets_sold: int
    total_revenue: Decimal
    platform_balance: Decimal


class TransactionSchema(TicketSchema):
    user: MinimalUserSchema


class PaymentSettingsSchema(Schema):
    live_mode: bool
    secret_key: str | None = None
    public_key: str | None = None
    test_secret_key: str | None = None
    test_public_key: str | None = None
    updated_at: datetime | None = None


class PaymentSettingsUpdateSchema(Schema):
    live_mode: bool
