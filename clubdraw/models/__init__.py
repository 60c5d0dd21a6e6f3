from .payment import PaymentRecord, UserRecord  # noqa: F401
from .draw_result import (  # noqa: F401
    NO_PAYMENTS_MESSAGE,
    ClubSummary,
    DrawOutcome,
    DrawRefused,
    DrawReport,
    NoPaymentsResult,
    Winner,
)

__all__ = [
    "PaymentRecord",
    "UserRecord",
    "NO_PAYMENTS_MESSAGE",
    "ClubSummary",
    "DrawOutcome",
    "DrawRefused",
    "DrawReport",
    "NoPaymentsResult",
    "Winner",
]
