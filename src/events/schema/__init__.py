"""Events schema package.

Schemas are organized into modules that mirror the models package structure
and are re-exported here.
"""

from .event import (
    EventCreateSchema,
    EventListSchema,
    EventSchema,
    EventUpdateSchema,
    MinimalEventSchema,
    PaginationSchema,
)
from .finance import (
    AdminWithdrawalSchema,
    BankSchema,
    FinanceSummarySchema,
    PaymentSettingsSchema,
    PaymentSettingsUpdateSchema,
    PlatformStatsSchema,
    TransactionSchema,
    WithdrawalRequestSchema,
    WithdrawalResponseSchema,
    WithdrawalSchema,
    WithdrawalStatusUpdateSchema,
)
from .social import (
    AttendanceSchema,
    AttendanceStatusSchema,
    AttendanceUpdateSchema,
    AttendeeSchema,
    CommentEditSchema,
    CommentSchema,
    FavoriteStatusSchema,
    FavoriteToggleSchema,
    RatingCreateSchema,
    RatingSummarySchema,
)
from .ticket import (
    FreeTicketSchema,
    PaymentChannelsSchema,
    PaymentInitializeResponseSchema,
    PaymentInitializeSchema,
    PaymentVerifyResponseSchema,
    TicketAttendeeSchema,
    TicketSchema,
    TicketTypeCreateSchema,
    TicketTypeSchema,
    WebhookAckSchema,
)

__all__ = [
    # Events
    "EventCreateSchema",
    "EventListSchema",
    "EventSchema",
    "EventUpdateSchema",
    "MinimalEventSchema",
    "PaginationSchema",
    # Social
    "AttendanceSchema",
    "AttendanceStatusSchema",
    "AttendanceUpdateSchema",
    "AttendeeSchema",
    "CommentEditSchema",
    "CommentSchema",
    "FavoriteStatusSchema",
    "FavoriteToggleSchema",
    "RatingCreateSchema",
    "RatingSummarySchema",
    # Tickets and payments
    "FreeTicketSchema",
    "PaymentChannelsSchema",
    "PaymentInitializeResponseSchema",
    "PaymentInitializeSchema",
    "PaymentVerifyResponseSchema",
    "TicketAttendeeSchema",
    "TicketSchema",
    "TicketTypeCreateSchema",
    "TicketTypeSchema",
    "WebhookAckSchema",
    # Finance and backoffice
    "AdminWithdrawalSchema",
    "BankSchema",
    "FinanceSummarySchema",
    "PaymentSettingsSchema",
    "PaymentSettingsUpdateSchema",
    "PlatformStatsSchema",
    "TransactionSchema",
    "WithdrawalRequestSchema",
    "WithdrawalResponseSchema",
    "WithdrawalSchema",
    "WithdrawalStatusUpdateSchema",
]
